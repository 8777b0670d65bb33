"""Helix endpoint groups for channels, chat, eventsub, moderation and streams."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from twitchkit.ids import BroadcasterId, MessageId, SessionId, SubscriptionId, UserId


class _EndpointGroup:
    def __init__(self, client: Any) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        """The owning Helix client."""
        return self._client


class ChannelsApi(_EndpointGroup):
    """Typed access to the `channels` Helix endpoints."""


class ChatApi(_EndpointGroup):
    """Typed access to the `chat` Helix endpoints."""


class EventSubApi(_EndpointGroup):
    """Typed access to the `eventsub` Helix endpoints."""


class ModerationApi(_EndpointGroup):
    """Typed access to the `moderation` Helix endpoints."""


class StreamsApi(_EndpointGroup):
    """Typed access to the `streams` Helix endpoints."""


@dataclass(frozen=True)
class GetChannelInformationRequest:
    """Request for `Get Channel Information`."""

    broadcaster_id: BroadcasterId


@dataclass(frozen=True)
class SendChatMessageRequest:
    """Request for `Send Chat Message`."""

    broadcaster_id: BroadcasterId
    sender_id: UserId
    message: str
    reply_parent_message_id: MessageId | None = None
    for_source_only: bool | None = None


@dataclass(frozen=True)
class SendChatMessageResponse:
    """Response for `Send Chat Message`."""

    message_id: MessageId | None = None
    dropped_reason: str | None = None


@dataclass(frozen=True)
class WebSocketSubscriptionTransport:
    """WebSocket transport for a managed subscription."""

    session_id: SessionId


@dataclass(frozen=True)
class WebhookSubscriptionTransport:
    """Webhook transport for a managed subscription."""

    callback: str
    secret_present: bool


SubscriptionTransportConfig = WebSocketSubscriptionTransport | WebhookSubscriptionTransport


@dataclass(frozen=True)
class ManageSubscriptionRequest:
    """Request for creating a Helix-managed EventSub subscription."""

    subscription_type: str
    version: str
    transport: SubscriptionTransportConfig


@dataclass(frozen=True)
class ManageSubscriptionResponse:
    """Response for EventSub management operations."""

    subscription_id: SubscriptionId


@dataclass(frozen=True)
class ModerateUserRequest:
    """Request for a moderation action such as ban or timeout."""

    broadcaster_id: BroadcasterId
    moderator_id: UserId
    user_id: UserId
    reason: str | None = None


@dataclass(frozen=True)
class GetStreamsRequest:
    """Request for `Get Streams`."""

    user_ids: tuple[UserId, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "user_ids", tuple(self.user_ids))