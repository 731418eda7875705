from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models.content import ContentItem, NormalizedContent
from ..models.processing_result import AggregationReport
from ..models.row import Row
from .classify import Classification, classify
from .columns import ColumnRoles, resolve_columns
from .extract import (
    extract_date,
    extract_description,
    extract_icon,
    extract_link,
    extract_title,
    extract_value,
    is_raw_text_key,
)

logger = logging.getLogger(__name__)

"""Content aggregation: fold rows into the normalized content object.

Each row goes through resolve -> classify -> extract -> aggregate with no
backtracking. The only cross-row dependency is config key overwrite order
(later rows win). Row-level anomalies are skipped and recorded, never raised.
"""

__all__ = [
    "build_item",
    "aggregate_with_report",
    "aggregate_rows",
]


def build_item(row: Row, roles: ColumnRoles, title: str) -> ContentItem:
    """Build a project/talk item from an already-resolved row."""
    props = row.properties
    return ContentItem(
        text=title,
        description=extract_description(props.get(roles.value)) if roles.value else None,
        href=extract_link(props.get(roles.link)) if roles.link else None,
        icon=extract_icon(props.get(roles.icon) if roles.icon else None, row.icon),
        date=extract_date(props.get(roles.date)) if roles.date else None,
    )


def _fold_config_row(
    row: Row, roles: ColumnRoles, title: str, config: dict[str, str], report: AggregationReport
) -> None:
    if roles.value is None:
        report.skip(row.row_id, "NO_VALUE_COLUMN")
        return
    value = extract_value(row.properties[roles.value], raw=is_raw_text_key(title))
    if not value:
        report.skip(row.row_id, "EMPTY_VALUE")
        return
    if title in config:
        logger.debug(f"config key '{title}' overwritten by row {row.row_id}")
    config[title] = value
    report.config_rows += 1


def aggregate_with_report(rows: Iterable[Row]) -> tuple[NormalizedContent, AggregationReport]:
    """Normalize all rows and return the content plus an aggregation report.

    Args:
        rows: Parsed database rows in query order.

    Returns:
        (NormalizedContent, AggregationReport). Content lists are always
        present, possibly empty.
    """
    content = NormalizedContent()
    report = AggregationReport()

    for row in rows:
        report.total_rows += 1
        roles = resolve_columns(row.properties.keys())
        if not roles.usable:
            logger.debug(f"row {row.row_id}: no key column, skipped")
            report.skip(row.row_id, "NO_KEY_COLUMN")
            continue

        title = extract_title(row.properties[roles.key])
        if not title:
            logger.debug(f"row {row.row_id}: empty title, skipped")
            report.skip(row.row_id, "EMPTY_TITLE")
            continue

        kind: Classification = classify(row.properties.get(roles.tag) if roles.tag else None)
        if kind.is_config:
            _fold_config_row(row, roles, title, content.config, report)
            continue

        item = build_item(row, roles, title)
        if kind.is_project:
            content.projects.append(item)
            report.project_rows += 1
        if kind.is_talk:
            content.talks.append(item)
            report.talk_rows += 1

    return content, report


def aggregate_rows(rows: Iterable[Row]) -> NormalizedContent:
    content, _ = aggregate_with_report(rows)
    return content
