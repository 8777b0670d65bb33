"""Errors produced by the EventSub runtime and its transports."""

from __future__ import annotations


class EventSubError(Exception):
    """Base error for the EventSub runtime and optional transports."""

    prefix = "eventsub error"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}"


class EventSubConfigurationError(EventSubError):
    """EventSub client configuration is invalid."""

    prefix = "eventsub configuration error"


class DuplicateMessageError(EventSubError):
    """A duplicate message was detected by replay protection."""

    prefix = "duplicate message"


class StaleTimestampError(EventSubError):
    """The message timestamp is outside the permitted replay window."""

    def __init__(self) -> None:
        super().__init__("")

    def __str__(self) -> str:
        return "stale message timestamp"


class InvalidSignatureError(EventSubError):
    """Webhook signature verification failed."""

    def __init__(self) -> None:
        super().__init__("")

    def __str__(self) -> str:
        return "invalid webhook signature"


class ReplayError(EventSubError):
    """The replay store failed."""

    prefix = "replay store error"


class DispatchError(EventSubError):
    """Local dispatch failed."""

    prefix = "event dispatch error"


class WebSocketError(EventSubError):
    """WebSocket runtime error."""

    prefix = "websocket error"


class WebhookError(EventSubError):
    """Webhook verification or extraction error."""

    prefix = "webhook error"


class ManagementError(EventSubError):
    """Helix-backed subscription management error."""

    prefix = "subscription management error"