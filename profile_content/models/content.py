from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Normalized content models handed to the presentation layer.

ContentItem / NormalizedContent are request-scoped value objects. The
``to_dict`` methods are the output boundary: optional values become empty
strings there (icon stays ``None`` so the page can pick a placeholder).
"""

__all__ = [
    "Icon",
    "ContentItem",
    "NormalizedContent",
    "RESERVED_LIST_KEYS",
]

RESERVED_LIST_KEYS = ("projects", "talks")


@dataclass(frozen=True)
class Icon:
    type: str  # "emoji" | "image"
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "value": self.value}


@dataclass(frozen=True)
class ContentItem:
    """One project or talk entry."""
    text: str
    description: str | None = None  # inline markup
    href: str | None = None
    icon: Icon | None = None
    date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "description": self.description or "",
            "href": self.href or "",
            "icon": self.icon.to_dict() if self.icon is not None else None,
            "date": self.date or "",
        }


@dataclass
class NormalizedContent:
    """Final content object: config map spread at top level plus both lists."""
    config: dict[str, str] = field(default_factory=dict)
    projects: list[ContentItem] = field(default_factory=list)
    talks: list[ContentItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            k: v for k, v in self.config.items() if k not in RESERVED_LIST_KEYS
        }
        # Lists are always present, even when empty
        data["projects"] = [item.to_dict() for item in self.projects]
        data["talks"] = [item.to_dict() for item in self.talks]
        return data
