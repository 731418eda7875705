from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ..models.cell import (
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
from ..models.row import PageIcon, Row

logger = logging.getLogger(__name__)

"""Notion page JSON -> Row parser.

Translates the loosely-typed ``properties`` payload of each page returned by
a database query into the Cell tagged union. Anything we cannot read becomes
an UnsupportedCell; a malformed cell never fails the whole page.
"""

__all__ = [
    "parse_fragment",
    "parse_cell",
    "parse_page_icon",
    "parse_page",
    "parse_pages",
]


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def parse_fragment(raw: dict[str, Any]) -> TextFragment:
    ann = raw.get("annotations") or {}
    plain = _str_or_none(raw.get("plain_text"))
    if plain is None:
        # text objects written through the API may lack plain_text
        plain = _str_or_none((raw.get("text") or {}).get("content")) or ""
    return TextFragment(
        plain_text=plain,
        bold=bool(ann.get("bold")),
        italic=bool(ann.get("italic")),
        underline=bool(ann.get("underline")),
        strikethrough=bool(ann.get("strikethrough")),
        code=bool(ann.get("code")),
        href=_str_or_none(raw.get("href")) or None,
    )


def _parse_file(raw: dict[str, Any]) -> FileRef:
    url = (raw.get("file") or {}).get("url") or (raw.get("external") or {}).get("url")
    return FileRef(name=str(raw.get("name") or ""), url=_str_or_none(url))


def _parse_typed(cell_type: CellType, payload: Any) -> Cell:
    if cell_type in (CellType.TITLE, CellType.RICH_TEXT):
        fragments = tuple(parse_fragment(f) for f in payload or [] if isinstance(f, dict))
        return TextCell(type=cell_type, fragments=fragments)
    if cell_type in (CellType.URL, CellType.EMAIL, CellType.PHONE_NUMBER):
        return ScalarCell(type=cell_type, value=_str_or_none(payload))
    if cell_type is CellType.NUMBER:
        if isinstance(payload, bool) or not isinstance(payload, (int, float)):
            return NumberCell(value=None)
        return NumberCell(value=payload)
    if cell_type is CellType.SELECT:
        name = (payload or {}).get("name")
        return SelectCell(type=cell_type, labels=(name,) if isinstance(name, str) else ())
    if cell_type is CellType.MULTI_SELECT:
        labels = tuple(
            opt["name"] for opt in payload or []
            if isinstance(opt, dict) and isinstance(opt.get("name"), str)
        )
        return SelectCell(type=cell_type, labels=labels)
    if cell_type is CellType.DATE:
        payload = payload or {}
        return DateCell(start=_str_or_none(payload.get("start")), end=_str_or_none(payload.get("end")))
    if cell_type is CellType.FILES:
        return FilesCell(files=tuple(_parse_file(f) for f in payload or [] if isinstance(f, dict)))
    return UnsupportedCell(raw_type=cell_type.value)


def parse_cell(raw: Any) -> Cell:
    """Parse a single property object ({"type": ..., <type>: payload})."""
    if not isinstance(raw, dict):
        return UnsupportedCell(raw_type=type(raw).__name__)
    raw_type = raw.get("type")
    try:
        cell_type = CellType(raw_type)
    except ValueError:
        return UnsupportedCell(raw_type=str(raw_type))
    if cell_type is CellType.UNSUPPORTED:
        return UnsupportedCell(raw_type=str(raw_type))
    try:
        return _parse_typed(cell_type, raw.get(raw_type))
    except (AttributeError, TypeError, KeyError) as e:
        logger.debug(f"malformed {raw_type} cell ignored: {e}")
        return UnsupportedCell(raw_type=str(raw_type))


def parse_page_icon(raw: Any) -> PageIcon | None:
    if not isinstance(raw, dict):
        return None
    icon_type = raw.get("type")
    if icon_type == "emoji":
        value = raw.get("emoji")
    elif icon_type in ("file", "external"):
        value = (raw.get(icon_type) or {}).get("url")
    else:
        return None
    if not isinstance(value, str) or not value:
        return None
    return PageIcon(type=icon_type, value=value)


def parse_page(page: dict[str, Any]) -> Row:
    props = page.get("properties")
    if not isinstance(props, dict):
        props = {}
    return Row(
        properties={str(name): parse_cell(raw) for name, raw in props.items()},
        icon=parse_page_icon(page.get("icon")),
        row_id=_str_or_none(page.get("id")),
    )


def parse_pages(pages: Iterable[Any]) -> list[Row]:
    return [parse_page(p) for p in pages if isinstance(p, dict)]
