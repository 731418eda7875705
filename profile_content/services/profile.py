from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from ..config.loader import AppConfig, ConfigError
from ..models.content import NormalizedContent
from ..models.processing_result import AggregationReport
from ..normalize.aggregate import aggregate_with_report
from ..notion.client import NotionClient, UpstreamError
from ..notion.parser import parse_pages
from .summary import render_summary_line

logger = logging.getLogger(__name__)

"""Profile service: one fetch-normalize cycle per request.

Configuration and upstream failures abort the cycle and are raised to the
caller (no partial results are kept). ``profile_response`` turns the outcome
into an HTTP-shaped response whose error body carries an ``error`` key, so a
failed fetch is never confused with an empty database.
"""

__all__ = [
    "NO_STORE",
    "MISCONFIGURED_MESSAGE",
    "UPSTREAM_MESSAGE",
    "RowSource",
    "ProfileResult",
    "ApiResponse",
    "build_client",
    "load_profile",
    "profile_response",
]

NO_STORE = "no-store, max-age=0"
MISCONFIGURED_MESSAGE = "Misconfigured server environment. Missing Notion secrets."
UPSTREAM_MESSAGE = "Failed to fetch data from Notion"


class RowSource(Protocol):
    def query_database(self) -> list[dict[str, Any]]: ...


@dataclass(frozen=True)
class ProfileResult:
    content: NormalizedContent
    report: AggregationReport


@dataclass(frozen=True)
class ApiResponse:
    status: int
    body: Any
    headers: dict[str, str] = field(default_factory=lambda: {"Cache-Control": NO_STORE})


def build_client(config: AppConfig) -> NotionClient:
    notion = config.require_credentials()
    return NotionClient(
        notion.token,  # type: ignore[arg-type]
        notion.database_id,  # type: ignore[arg-type]
        api_version=notion.api_version,
        timeout=notion.timeout,
        base_url=notion.base_url,
    )


def load_profile(config: AppConfig, client: RowSource | None = None) -> ProfileResult:
    """Fetch all rows once and normalize them.

    Args:
        config: Application config (credentials are checked here).
        client: Row source; a NotionClient is built from config when None.

    Raises:
        ConfigError: Notion credentials are missing.
        UpstreamError: The query failed or returned malformed data.
    """
    if client is None:
        client = build_client(config)
    pages = client.query_database()
    content, report = aggregate_with_report(parse_pages(pages))

    logger.info(f"fetched keys: {sorted(content.config)}")
    logger.info(f"fetched {len(content.projects)} projects, {len(content.talks)} talks")
    return ProfileResult(content=content, report=report)


def profile_response(config: AppConfig, client: RowSource | None = None) -> ApiResponse:
    try:
        result = load_profile(config, client)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return ApiResponse(status=500, body={"error": MISCONFIGURED_MESSAGE})
    except UpstreamError as e:
        logger.error(f"upstream: {e}")
        return ApiResponse(status=500, body={"error": UPSTREAM_MESSAGE, "details": str(e)})
    logger.debug(render_summary_line(result.report))
    return ApiResponse(status=200, body=result.content.to_dict())
