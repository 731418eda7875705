"""Domain models for the homepage content normalizer.

This package contains the typed cell union, the row model, the normalized
content objects and the aggregation report.
"""

from .cell import (
    Cell,
    CellType,
    DateCell,
    FileRef,
    FilesCell,
    NumberCell,
    ScalarCell,
    SelectCell,
    TextCell,
    TextFragment,
    UnsupportedCell,
)
from .content import ContentItem, Icon, NormalizedContent
from .processing_result import AggregationReport, SkippedRow
from .row import PageIcon, Row

__all__ = [
    # Cells
    "Cell",
    "CellType",
    "DateCell",
    "FileRef",
    "FilesCell",
    "NumberCell",
    "ScalarCell",
    "SelectCell",
    "TextCell",
    "TextFragment",
    "UnsupportedCell",
    # Rows
    "PageIcon",
    "Row",
    # Output
    "ContentItem",
    "Icon",
    "NormalizedContent",
    "AggregationReport",
    "SkippedRow",
]
