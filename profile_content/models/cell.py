from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

"""Cell tagged union for database rows.

A row coming back from the content database is a sparse mapping of column
name -> Cell. Each Cell variant carries its ``type`` discriminator and a
payload whose shape is fully determined by that type. Missing payloads are
``None`` here; conversion to empty strings happens only when the final
content object is built.
"""

__all__ = [
    "CellType",
    "TextFragment",
    "FileRef",
    "TextCell",
    "ScalarCell",
    "NumberCell",
    "SelectCell",
    "DateCell",
    "FilesCell",
    "UnsupportedCell",
    "Cell",
    "TEXT_TYPES",
    "SCALAR_TYPES",
]


class CellType(Enum):
    """Declared data type of a cell (matches the database property type names)."""
    TITLE = "title"
    RICH_TEXT = "rich_text"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    NUMBER = "number"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    DATE = "date"
    FILES = "files"
    UNSUPPORTED = "unsupported"


TEXT_TYPES = frozenset({CellType.TITLE, CellType.RICH_TEXT})
SCALAR_TYPES = frozenset({CellType.URL, CellType.EMAIL, CellType.PHONE_NUMBER})


@dataclass(frozen=True)
class TextFragment:
    """A run of text with independent style flags and an optional link."""
    plain_text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    code: bool = False
    href: str | None = None


@dataclass(frozen=True)
class FileRef:
    name: str
    url: str | None  # hosted file url or external url


@dataclass(frozen=True)
class TextCell:
    type: CellType  # TITLE or RICH_TEXT
    fragments: tuple[TextFragment, ...] = ()


@dataclass(frozen=True)
class ScalarCell:
    type: CellType  # URL, EMAIL or PHONE_NUMBER
    value: str | None = None


@dataclass(frozen=True)
class NumberCell:
    value: int | float | None = None
    type: CellType = CellType.NUMBER


@dataclass(frozen=True)
class SelectCell:
    type: CellType  # SELECT or MULTI_SELECT
    labels: tuple[str, ...] = ()


@dataclass(frozen=True)
class DateCell:
    start: str | None = None
    end: str | None = None
    type: CellType = CellType.DATE


@dataclass(frozen=True)
class FilesCell:
    files: tuple[FileRef, ...] = ()
    type: CellType = CellType.FILES


@dataclass(frozen=True)
class UnsupportedCell:
    """Placeholder for property types we do not read, or malformed payloads."""
    raw_type: str
    type: CellType = CellType.UNSUPPORTED


Cell = Union[TextCell, ScalarCell, NumberCell, SelectCell, DateCell, FilesCell, UnsupportedCell]
