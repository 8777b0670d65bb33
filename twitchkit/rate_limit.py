"""Rate-limit metadata extracted from Twitch API responses."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

_U32_MAX = 0xFFFFFFFF


def _format_timestamp(value: datetime) -> str:
    text = value.isoformat()
    if value.utcoffset() == timedelta(0) and text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


@dataclass(frozen=True)
class RateLimitMetadata:
    """Rate-limit information returned by the Helix API."""

    limit: int
    remaining: int
    reset_at: datetime

    def __post_init__(self) -> None:
        for name in ("limit", "remaining"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer")
            if not 0 <= value <= _U32_MAX:
                raise ValueError(f"{name} must be between 0 and {_U32_MAX}")
        if self.reset_at.tzinfo is None or self.reset_at.utcoffset() is None:
            raise ValueError("reset_at must be timezone-aware")

    def to_dict(self) -> dict[str, Any]:
        """Returns the JSON-compatible representation."""
        return {
            "limit": self.limit,
            "remaining": self.remaining,
            "reset_at": _format_timestamp(self.reset_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RateLimitMetadata:
        """Builds metadata from its JSON-compatible representation."""
        return cls(
            limit=data["limit"],
            remaining=data["remaining"],
            reset_at=datetime.fromisoformat(data["reset_at"]),
        )