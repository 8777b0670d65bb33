"""Pagination primitives shared by the Twitch API surfaces."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

_MAX_FIRST = 0xFFFF


@dataclass(frozen=True)
class Cursor:
    """Opaque pagination cursor returned by Twitch APIs."""

    value: str = ""

    def __str__(self) -> str:
        return self.value


def _cursor_or_none(raw: Any) -> Cursor | None:
    if raw is None:
        return None
    if isinstance(raw, Cursor):
        return raw
    if not isinstance(raw, str):
        raise TypeError(f"cursor must be a string, got {type(raw).__name__}")
    return Cursor(raw)


@dataclass(frozen=True)
class PageRequest:
    """Cursor-based page request parameters."""

    after: Cursor | None = None
    first: int | None = None

    def __post_init__(self) -> None:
        if self.first is not None:
            if isinstance(self.first, bool) or not isinstance(self.first, int):
                raise TypeError("first must be an integer")
            if not 0 <= self.first <= _MAX_FIRST:
                raise ValueError(f"first must be between 0 and {_MAX_FIRST}")

    def with_after(self, after: Cursor) -> PageRequest:
        """Returns a copy starting after the given cursor."""
        return replace(self, after=after)

    def with_first(self, first: int) -> PageRequest:
        """Returns a copy requesting at most ``first`` items."""
        return replace(self, first=first)

    def to_dict(self) -> dict[str, Any]:
        """Returns the JSON-compatible representation."""
        return {
            "after": None if self.after is None else self.after.value,
            "first": self.first,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PageRequest:
        """Builds a request from its JSON-compatible representation."""
        return cls(after=_cursor_or_none(data.get("after")), first=data.get("first"))


@dataclass(frozen=True)
class PageInfo:
    """Cursor metadata returned with a page response."""

    next: Cursor | None = None

    def has_next_page(self) -> bool:
        """Returns whether another page is available."""
        return self.next is not None

    def to_dict(self) -> dict[str, Any]:
        """Returns the JSON-compatible representation."""
        return {"next": None if self.next is None else self.next.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PageInfo:
        """Builds page info from its JSON-compatible representation."""
        return cls(next=_cursor_or_none(data.get("next")))