"""Strongly typed Twitch identifiers.

Each identifier kind is its own type, so a user id never compares equal to a
broadcaster id even when both wrap the same string.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class _Identifier:
    value: str

    def __post_init__(self) -> None:
        raw = self.value
        if isinstance(raw, _Identifier):
            raw = raw.value
        if not isinstance(raw, str):
            raise TypeError(f"{type(self).__name__} requires a string, got {type(raw).__name__}")
        object.__setattr__(self, "value", raw)

    def __str__(self) -> str:
        return self.value


class UserId(_Identifier):
    """Twitch user identifier."""

    def to_broadcaster_id(self) -> BroadcasterId:
        """Converts this user identifier into a broadcaster identifier."""
        return BroadcasterId(self.value)


class BroadcasterId(_Identifier):
    """Twitch broadcaster identifier."""

    def to_user_id(self) -> UserId:
        """Converts this broadcaster identifier into a user identifier."""
        return UserId(self.value)


class ClientId(_Identifier):
    """Twitch application client identifier."""


class SubscriptionId(_Identifier):
    """EventSub subscription identifier."""


class MessageId(_Identifier):
    """EventSub message identifier."""


class ChannelId(_Identifier):
    """Twitch chat channel identifier."""


class SessionId(_Identifier):
    """EventSub WebSocket session identifier."""