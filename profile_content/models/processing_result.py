from __future__ import annotations

from dataclasses import dataclass, field

"""Aggregation report models.

Row-level anomalies never abort a normalization pass; they are recorded here
so the CLI and the SUMMARY line can show what was dropped.
"""

__all__ = [
    "SkippedRow",
    "AggregationReport",
]


@dataclass(frozen=True)
class SkippedRow:
    row_id: str | None  # page id when known
    reason: str  # NO_KEY_COLUMN | EMPTY_TITLE | NO_VALUE_COLUMN | EMPTY_VALUE


@dataclass
class AggregationReport:
    """Counters collected while folding rows into content."""
    total_rows: int = 0
    config_rows: int = 0
    project_rows: int = 0
    talk_rows: int = 0
    skipped: list[SkippedRow] = field(default_factory=list)

    @property
    def skipped_rows(self) -> int:
        return len(self.skipped)

    def skip(self, row_id: str | None, reason: str) -> None:
        self.skipped.append(SkippedRow(row_id=row_id, reason=reason))
