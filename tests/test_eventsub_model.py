import dataclasses
from datetime import datetime, timezone

import pytest

from twitchkit.eventsub.model import (
    EventSubMessageType,
    EventSubNotification,
    NotificationMetadata,
    Subscription,
    SubscriptionStatus,
    WebhookTransport,
    WebSocketTransport,
)
from twitchkit.ids import MessageId, SessionId, SubscriptionId


def _subscription(transport):
    return Subscription(
        id=SubscriptionId("sub-1"),
        subscription_type="channel.chat.message",
        version="1",
        status=SubscriptionStatus.ENABLED,
        transport=transport,
    )


def test_status_values_use_snake_case():
    assert SubscriptionStatus("authorization_revoked") is SubscriptionStatus.AUTHORIZATION_REVOKED
    assert SubscriptionStatus.WEBHOOK_CALLBACK_VERIFICATION_PENDING.value == (
        "webhook_callback_verification_pending"
    )
    assert EventSubMessageType("revocation") is EventSubMessageType.REVOCATION


def test_transports_compare_by_value():
    assert WebSocketTransport(SessionId("s")) == WebSocketTransport(SessionId("s"))
    assert WebhookTransport("https://example.com/cb") != WebSocketTransport(SessionId("s"))


def test_notification_holds_metadata_and_payload():
    metadata = NotificationMetadata(
        message_id=MessageId("m-1"),
        message_timestamp=datetime(2024, 1, 2, tzinfo=timezone.utc),
        message_type=EventSubMessageType.NOTIFICATION,
    )
    subscription = _subscription(WebhookTransport("https://example.com/cb"))
    notification = EventSubNotification(metadata, subscription, '{"a":1}')

    assert notification.subscription.transport.callback == "https://example.com/cb"
    assert notification.metadata.message_id == MessageId("m-1")
    assert notification == EventSubNotification(metadata, subscription, '{"a":1}')


def test_models_are_immutable():
    subscription = _subscription(WebSocketTransport(SessionId("s")))
    with pytest.raises(dataclasses.FrozenInstanceError):
        subscription.version = "2"
    assert subscription.version == "1"