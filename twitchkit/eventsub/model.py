"""Data records describing EventSub subscriptions and deliveries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from twitchkit.ids import MessageId, SessionId, SubscriptionId


@dataclass(frozen=True)
class WebSocketTransport:
    """Delivery over an open WebSocket session."""

    session_id: SessionId


@dataclass(frozen=True)
class WebhookTransport:
    """Delivery by HTTP POST to a callback URL."""

    callback: str


EventSubTransport = WebSocketTransport | WebhookTransport


class SubscriptionStatus(StrEnum):
    """Lifecycle state Twitch reports for a subscription."""

    ENABLED = "enabled"
    WEBHOOK_CALLBACK_VERIFICATION_PENDING = "webhook_callback_verification_pending"
    WEBHOOK_CALLBACK_VERIFICATION_FAILED = "webhook_callback_verification_failed"
    NOTIFICATION_FAILURES_EXCEEDED = "notification_failures_exceeded"
    AUTHORIZATION_REVOKED = "authorization_revoked"
    USER_REMOVED = "user_removed"


@dataclass(frozen=True)
class Subscription:
    """One EventSub subscription: its id, type, version, state and transport."""

    id: SubscriptionId
    subscription_type: str
    version: str
    status: SubscriptionStatus
    transport: EventSubTransport


class EventSubMessageType(StrEnum):
    """What a delivered EventSub message carries."""

    CHALLENGE = "challenge"
    NOTIFICATION = "notification"
    REVOCATION = "revocation"


@dataclass(frozen=True)
class NotificationMetadata:
    """Identity, timestamp and kind of a single delivery."""

    message_id: MessageId
    message_timestamp: datetime
    message_type: EventSubMessageType


@dataclass(frozen=True)
class EventSubNotification:
    """A delivered event together with its subscription and raw JSON body."""

    metadata: NotificationMetadata
    subscription: Subscription
    payload: str