from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

"""Column role inference.

Rows have no fixed schema, so each row's column names are matched
case-insensitively against a fixed alias table. The first column name (in
row order) that matches a role is bound to it.
"""

__all__ = [
    "ROLE_ALIASES",
    "ColumnRoles",
    "resolve_columns",
]

ROLE_ALIASES: dict[str, frozenset[str]] = {
    "key": frozenset({"title", "key", "name"}),
    "value": frozenset({"value", "text", "content", "description", "desc"}),
    "tag": frozenset({"tags", "tag"}),
    "link": frozenset({"link", "url", "href", "website"}),
    "icon": frozenset({"icon", "image", "img"}),
    "date": frozenset({"date", "time", "when", "day"}),
}


@dataclass(frozen=True)
class ColumnRoles:
    """Column name bound to each semantic role (None when the row lacks it)."""
    key: str | None = None
    value: str | None = None
    tag: str | None = None
    link: str | None = None
    icon: str | None = None
    date: str | None = None

    @property
    def usable(self) -> bool:
        return self.key is not None

    def as_dict(self) -> dict[str, str | None]:
        return {role: getattr(self, role) for role in ROLE_ALIASES}


def resolve_columns(names: Iterable[str]) -> ColumnRoles:
    """Bind column names to roles using the alias table.

    Args:
        names: Column names of a single row, in row order.

    Returns:
        ColumnRoles with at most one column per role. A name can serve more
        than one role only if it is listed under several aliases (none are).
    """
    bound: dict[str, str] = {}
    for name in names:
        token = name.lower()
        for role, aliases in ROLE_ALIASES.items():
            if role not in bound and token in aliases:
                bound[role] = name
    return ColumnRoles(**bound)
