from __future__ import annotations

from dataclasses import dataclass

from ..models.cell import Cell, CellType, SelectCell

"""Row classification by tag labels.

Only the literal labels "projects" and "talks" are recognised (compared after
lower-casing). Anything else leaves the row as a config row.
"""

__all__ = [
    "PROJECT_LABEL",
    "TALK_LABEL",
    "Classification",
    "tag_labels",
    "classify",
]

PROJECT_LABEL = "projects"
TALK_LABEL = "talks"


@dataclass(frozen=True)
class Classification:
    is_project: bool = False
    is_talk: bool = False

    @property
    def is_config(self) -> bool:
        return not (self.is_project or self.is_talk)


def tag_labels(cell: Cell | None) -> list[str]:
    """Lower-cased labels of a select / multi-select cell; [] for anything else."""
    if not isinstance(cell, SelectCell):
        return []
    if cell.type is CellType.SELECT:
        return [label.lower() for label in cell.labels[:1]]
    return [label.lower() for label in cell.labels]


def classify(tag_cell: Cell | None) -> Classification:
    labels = tag_labels(tag_cell)
    return Classification(
        is_project=PROJECT_LABEL in labels,
        is_talk=TALK_LABEL in labels,
    )
