from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any

logger = logging.getLogger(__name__)

"""Minimal Notion database client.

One query per fetch cycle: the client follows pagination cursors but never
retries. Every failure (transport, HTTP status, malformed body) is raised as
UpstreamError so callers can tell "fetch failed" apart from "no rows".
"""

__all__ = [
    "UpstreamError",
    "NotionClient",
    "DEFAULT_BASE_URL",
    "DEFAULT_API_VERSION",
    "DEFAULT_TIMEOUT",
]

DEFAULT_BASE_URL = "https://api.notion.com/v1"
DEFAULT_API_VERSION = "2022-06-28"
DEFAULT_TIMEOUT = 10.0
MAX_PAGES = 100  # pagination guard


class UpstreamError(Exception):
    """The content database query failed or returned malformed data."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class NotionClient:
    """Queries a single Notion database with a static integration token."""

    def __init__(
        self,
        token: str,
        database_id: str,
        *,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self.token = token
        self.database_id = database_id
        self.api_version = api_version
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")

    @property
    def query_url(self) -> str:
        return f"{self.base_url}/databases/{self.database_id}/query"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Notion-Version": self.api_version,
            "Content-Type": "application/json",
        }

    def _post(self, url: str, body: dict[str, Any]) -> dict[str, Any]:
        req = urllib.request.Request(
            url,
            data=json.dumps(body).encode("utf-8"),
            headers=self._headers(),
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            detail = e.read().decode("utf-8", errors="replace")
            raise UpstreamError(f"HTTP {e.code}: {detail or e.reason}", status=e.code) from e
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            raise UpstreamError(f"request failed: {e}") from e
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise UpstreamError(f"invalid JSON response: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise UpstreamError("malformed response: missing 'results' list")
        return data

    def query_database(self) -> list[dict[str, Any]]:
        """Return every page of the database, following next_cursor."""
        results: list[dict[str, Any]] = []
        body: dict[str, Any] = {}
        for _ in range(MAX_PAGES):
            data = self._post(self.query_url, body)
            results.extend(data["results"])
            cursor = data.get("next_cursor")
            if not data.get("has_more") or not cursor:
                break
            body = {"start_cursor": cursor}
        else:
            logger.warning(f"pagination stopped after {MAX_PAGES} pages")
        logger.debug(f"fetched {len(results)} pages from database {self.database_id}")
        return results
