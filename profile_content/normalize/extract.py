from __future__ import annotations

from ..models.cell import (
    TEXT_TYPES,
    Cell,
    CellType,
    DateCell,
    FilesCell,
    NumberCell,
    ScalarCell,
    TextCell,
)
from ..models.content import Icon
from ..models.row import PageIcon
from .rich_text import plain_text, render_rich_text

"""Per-cell value extraction (type dispatch on the cell discriminator).

All extractors return ``None`` for "absent" and keep legitimately empty or
zero values distinct from it. Callers convert to "" at the output boundary.
"""

__all__ = [
    "PHOTOS_FILE_KEY",
    "IMAGE_PREFIXES",
    "is_raw_text_key",
    "format_number",
    "first_file_url",
    "extract_title",
    "extract_value",
    "extract_description",
    "extract_link",
    "extract_date",
    "extract_icon",
    "classify_icon_value",
]

PHOTOS_FILE_KEY = "photosfile"
IMAGE_PREFIXES = ("http", "/", "data:")


def is_raw_text_key(key: str) -> bool:
    """Config keys whose value must stay plain text (no markup)."""
    return key.lower() == PHOTOS_FILE_KEY


def format_number(value: int | float | None) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def first_file_url(cell: FilesCell) -> str | None:
    if not cell.files:
        return None
    return cell.files[0].url


def extract_title(cell: Cell | None) -> str | None:
    """Title text of the key cell: the first fragment's plain text."""
    if isinstance(cell, TextCell) and cell.fragments:
        return cell.fragments[0].plain_text
    return None


def extract_value(cell: Cell | None, *, raw: bool = False) -> str | None:
    """Normalized string for a value-role cell.

    Args:
        cell: The value cell (may be None).
        raw: Return joined plain text for text cells instead of markup.
    """
    if cell is None:
        return None
    if isinstance(cell, TextCell):
        if raw:
            return plain_text(cell.fragments)
        return render_rich_text(cell.fragments)
    if isinstance(cell, ScalarCell):
        return cell.value
    if isinstance(cell, NumberCell):
        return format_number(cell.value)
    if isinstance(cell, FilesCell):
        return first_file_url(cell)
    return None


def extract_description(cell: Cell | None) -> str | None:
    return extract_value(cell)


def extract_link(cell: Cell | None) -> str | None:
    """Link target, trimmed; text cells yield the first fragment verbatim."""
    link: str | None = None
    if isinstance(cell, ScalarCell) and cell.type is CellType.URL:
        link = cell.value
    elif isinstance(cell, TextCell) and cell.fragments:
        link = cell.fragments[0].plain_text
    return link.strip() if link is not None else None


def extract_date(cell: Cell | None) -> str | None:
    if isinstance(cell, DateCell):
        return cell.start
    if isinstance(cell, TextCell) and cell.type is CellType.RICH_TEXT:
        return plain_text(cell.fragments)
    return None


def classify_icon_value(value: str) -> Icon:
    value = value.strip()
    if value.startswith(IMAGE_PREFIXES):
        return Icon(type="image", value=value)
    return Icon(type="emoji", value=value)


def _icon_column_value(cell: Cell | None) -> str | None:
    if isinstance(cell, TextCell) and cell.type in TEXT_TYPES:
        return plain_text(cell.fragments)
    if isinstance(cell, ScalarCell) and cell.type is CellType.URL:
        return cell.value
    if isinstance(cell, FilesCell):
        return first_file_url(cell)
    return None


def extract_icon(cell: Cell | None, page_icon: PageIcon | None = None) -> Icon | None:
    """Icon from the icon column, falling back to the page icon annotation."""
    value = _icon_column_value(cell)
    if value and value.strip():
        return classify_icon_value(value)
    if page_icon is None or not page_icon.value:
        return None
    if page_icon.type == "emoji":
        return Icon(type="emoji", value=page_icon.value)
    if page_icon.type in ("file", "external"):
        return Icon(type="image", value=page_icon.value)
    return None
