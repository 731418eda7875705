from __future__ import annotations

from dataclasses import dataclass, field

from .cell import Cell

"""Row model: one database record with a sparse column -> cell mapping."""

__all__ = [
    "PageIcon",
    "Row",
]


@dataclass(frozen=True)
class PageIcon:
    """Page-level icon annotation (type is emoji, file or external)."""
    type: str
    value: str


@dataclass(frozen=True)
class Row:
    """Logical representation of a single database row.

    Column names are arbitrary and may differ from row to row; no column is
    guaranteed to be present. Insertion order of ``properties`` is preserved
    and drives first-match column resolution.
    """
    properties: dict[str, Cell] = field(default_factory=dict)
    icon: PageIcon | None = None
    row_id: str | None = None  # page id, only used for log lines
