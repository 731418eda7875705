from __future__ import annotations

from collections.abc import Iterable

from ..models.cell import TextFragment

"""Styled text -> inline HTML markup.

Escaping is applied once per fragment before any wrapping, so the tags added
here are never escaped and user text can never inject markup.
Wrap order is fixed: strong, em, u, s, code, then the anchor outermost.
"""

__all__ = [
    "escape_html",
    "render_fragment",
    "render_rich_text",
    "plain_text",
]

_ESCAPES = (
    ("&", "&amp;"),  # must run first
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)

CODE_STYLE = (
    "background:rgba(255,255,255,0.15); padding: 0.1em 0.3em; "
    "border-radius: 3px; font-family: monospace;"
)
LINK_STYLE = "text-decoration: underline; text-underline-offset: 4px;"


def escape_html(text: str) -> str:
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def render_fragment(fragment: TextFragment) -> str:
    text = escape_html(fragment.plain_text)
    if fragment.bold:
        text = f"<strong>{text}</strong>"
    if fragment.italic:
        text = f"<em>{text}</em>"
    if fragment.underline:
        text = f"<u>{text}</u>"
    if fragment.strikethrough:
        text = f"<s>{text}</s>"
    if fragment.code:
        text = f'<code style="{CODE_STYLE}">{text}</code>'
    if fragment.href:
        text = (
            f'<a href="{escape_html(fragment.href)}" target="_blank" '
            f'rel="noopener noreferrer" style="{LINK_STYLE}">{text}</a>'
        )
    return text


def render_rich_text(fragments: Iterable[TextFragment]) -> str:
    """Render fragments in input order, concatenated with no separator."""
    return "".join(render_fragment(f) for f in fragments)


def plain_text(fragments: Iterable[TextFragment]) -> str:
    return "".join(f.plain_text for f in fragments)
