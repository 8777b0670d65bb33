import hashlib
import hmac
from datetime import datetime, timedelta, timezone

import pytest

from twitchkit.eventsub.errors import (
    DuplicateMessageError,
    InvalidSignatureError,
    StaleTimestampError,
    WebhookError,
)
from twitchkit.eventsub.webhook import WebhookHeaders, WebhookMessageType, WebhookVerifier
from twitchkit.ids import MessageId

secret = "secret"
BODY = b'{"event":{}}'


def _digest(message_id, timestamp, body):
    payload = message_id.encode() + timestamp.encode() + body
    return hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()


def _timestamp(moment):
    return moment.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _headers(message_id="msg-1", timestamp=None, body=BODY, signature=None):
    timestamp = timestamp or _timestamp(datetime.now(timezone.utc))
    if signature is None:
        signature = "sha256=" + _digest(message_id, timestamp, body)
    return WebhookHeaders(
        message_id=MessageId(message_id),
        message_timestamp=timestamp,
        message_type=WebhookMessageType.NOTIFICATION,
        signature=signature,
    )


def test_from_mapping_matches_names_case_insensitively():
    headers = WebhookHeaders.from_mapping(
        {
            "twitch-eventsub-message-type": "webhook_callback_verification",
            "TWITCH-EVENTSUB-MESSAGE-ID": "msg-1",
            "Twitch-Eventsub-Message-Timestamp": b"2024-01-02T03:04:05Z",
            "Twitch-Eventsub-Message-Signature": "sha256=00",
        }
    )
    assert headers.message_type is WebhookMessageType.CHALLENGE
    assert headers.message_id == MessageId("msg-1")
    assert headers.message_timestamp == "2024-01-02T03:04:05Z"
    assert headers.signature == "sha256=00"


def test_from_mapping_reports_missing_and_unsupported_headers():
    with pytest.raises(WebhookError, match="Twitch-Eventsub-Message-Id"):
        WebhookHeaders.from_mapping({"Twitch-Eventsub-Message-Type": "revocation"})
    with pytest.raises(WebhookError, match="unsupported webhook message type `other`"):
        WebhookHeaders.from_mapping({"Twitch-Eventsub-Message-Type": "other"})


@pytest.mark.asyncio
async def test_valid_message_is_verified():
    now = datetime.now(timezone.utc)
    headers = _headers(timestamp=_timestamp(now))
    verified = await WebhookVerifier(secret).verify(headers, BODY)

    assert verified.message_id == MessageId("msg-1")
    assert verified.message_timestamp == now
    assert verified.message_type is WebhookMessageType.NOTIFICATION
    assert verified.raw_body == BODY


@pytest.mark.asyncio
async def test_unprefixed_uppercase_signature_and_offset_timestamp_are_accepted():
    now = datetime.now(timezone.utc)
    timestamp = now.astimezone(timezone(timedelta(hours=2))).isoformat()
    signature = _digest("msg-2", timestamp, BODY).upper()
    headers = _headers("msg-2", timestamp, signature=signature)

    verified = await WebhookVerifier(secret).verify(headers, BODY)
    assert verified.message_timestamp == now


@pytest.mark.asyncio
async def test_nanosecond_timestamps_are_truncated_to_microseconds():
    base = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
    timestamp = base + ".123456789Z"
    verified = await WebhookVerifier(secret).verify(_headers(timestamp=timestamp), BODY)
    assert verified.message_timestamp.microsecond == 123456


@pytest.mark.asyncio
async def test_tampered_body_fails_signature():
    with pytest.raises(InvalidSignatureError):
        await WebhookVerifier(secret).verify(_headers(), BODY + b" ")


@pytest.mark.asyncio
async def test_malformed_hex_signature_fails():
    with pytest.raises(InvalidSignatureError):
        await WebhookVerifier(secret).verify(_headers(signature="sha256=abc"), BODY)
    with pytest.raises(InvalidSignatureError):
        await WebhookVerifier(secret).verify(_headers(signature="zz"), BODY)


@pytest.mark.asyncio
async def test_stale_timestamp_is_rejected_before_signature():
    old = _timestamp(datetime.now(timezone.utc) - timedelta(minutes=11))
    with pytest.raises(StaleTimestampError):
        await WebhookVerifier(secret).verify(_headers(timestamp=old, signature="00"), BODY)


@pytest.mark.asyncio
async def test_custom_replay_window_applies():
    old = _timestamp(datetime.now(timezone.utc) - timedelta(minutes=11))
    verifier = WebhookVerifier(secret, replay_window=timedelta(minutes=30))
    verified = await verifier.verify(_headers(timestamp=old), BODY)
    assert verified.raw_body == BODY


@pytest.mark.asyncio
async def test_invalid_timestamp_is_rejected():
    with pytest.raises(WebhookError, match="RFC3339"):
        await WebhookVerifier(secret).verify(_headers(timestamp="not-a-timestamp"), BODY)


@pytest.mark.asyncio
async def test_duplicate_message_is_rejected():
    verifier = WebhookVerifier(secret)
    headers = _headers(message_id="dup")
    await verifier.verify(headers, BODY)
    with pytest.raises(DuplicateMessageError) as excinfo:
        await verifier.verify(headers, BODY)
    assert excinfo.value.detail == "dup"