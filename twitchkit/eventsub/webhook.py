"""Webhook verification on exact raw request bytes."""

from __future__ import annotations

import hashlib
import hmac
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from twitchkit.eventsub.errors import (
    DuplicateMessageError,
    InvalidSignatureError,
    StaleTimestampError,
    WebhookError,
)
from twitchkit.eventsub.replay import InMemoryReplayStore, ReplayStore
from twitchkit.ids import MessageId

_HEADER_TYPE = "Twitch-Eventsub-Message-Type"
_HEADER_ID = "Twitch-Eventsub-Message-Id"
_HEADER_TIMESTAMP = "Twitch-Eventsub-Message-Timestamp"
_HEADER_SIGNATURE = "Twitch-Eventsub-Message-Signature"

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))"
)
_HEX = re.compile(r"[0-9a-fA-F]*")


class WebhookMessageType(Enum):
    """EventSub webhook message type header."""

    CHALLENGE = "webhook_callback_verification"
    NOTIFICATION = "notification"
    REVOCATION = "revocation"


@dataclass(frozen=True)
class WebhookHeaders:
    """Raw webhook headers required for signature verification."""

    message_id: MessageId
    message_timestamp: str
    message_type: WebhookMessageType
    signature: str

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str | bytes]) -> WebhookHeaders:
        """Extracts the webhook headers, matching names case-insensitively."""
        folded: dict[str, str | bytes] = {}
        for name, value in headers.items():
            folded.setdefault(name.lower(), value)

        def header(name: str) -> str:
            try:
                value = folded[name.lower()]
            except KeyError:
                raise WebhookError(f"missing required webhook header `{name}`") from None
            if isinstance(value, bytes):
                try:
                    return value.decode("ascii")
                except UnicodeDecodeError:
                    raise WebhookError(f"invalid UTF-8 in webhook header `{name}`") from None
            return value

        raw_type = header(_HEADER_TYPE)
        try:
            message_type = WebhookMessageType(raw_type)
        except ValueError:
            raise WebhookError(f"unsupported webhook message type `{raw_type}`") from None

        return cls(
            message_id=MessageId(header(_HEADER_ID)),
            message_timestamp=header(_HEADER_TIMESTAMP),
            message_type=message_type,
            signature=header(_HEADER_SIGNATURE),
        )


@dataclass(frozen=True)
class VerifiedWebhookMessage:
    """Result of successful webhook verification."""

    message_id: MessageId
    message_timestamp: datetime
    message_type: WebhookMessageType
    raw_body: bytes


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise WebhookError("webhook timestamp is not valid RFC3339")
    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = match.groups()
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))
    try:
        if zulu:
            tz = timezone.utc
        else:
            offset = timedelta(hours=int(off_h), minutes=int(off_m))
            tz = timezone(-offset if sign == "-" else offset)
        return datetime(
            int(year), int(month), int(day), int(hour), int(minute), int(second),
            microsecond, tzinfo=tz,
        )
    except ValueError:
        raise WebhookError("webhook timestamp is not valid RFC3339") from None


def _decode_hex(text: str) -> bytes:
    if len(text) % 2 != 0 or _HEX.fullmatch(text) is None:
        raise InvalidSignatureError()
    return bytes.fromhex(text)


class WebhookVerifier:
    """Verifies webhook signatures, timestamp freshness and replay constraints."""

    def __init__(
        self,
        secret: str | bytes,
        *,
        replay_store: ReplayStore | None = None,
        replay_window: timedelta = timedelta(minutes=10),
        message_id_ttl: timedelta = timedelta(minutes=15),
    ) -> None:
        self._secret = secret.encode() if isinstance(secret, str) else bytes(secret)
        self._replay_store = replay_store if replay_store is not None else InMemoryReplayStore()
        self._replay_window = replay_window
        self._message_id_ttl = message_id_ttl

    async def verify(
        self, headers: WebhookHeaders, raw_body: bytes
    ) -> VerifiedWebhookMessage:
        """Verifies the request against the exact raw body bytes."""
        body = bytes(raw_body)
        parsed = _parse_rfc3339(headers.message_timestamp)

        try:
            oldest_allowed = datetime.now(timezone.utc) - self._replay_window
        except OverflowError:
            raise WebhookError("duration seconds exceed supported range") from None
        if parsed < oldest_allowed:
            raise StaleTimestampError()

        self._verify_signature(headers, body)

        if await self._replay_store.seen_or_insert(
            headers.message_id, parsed, self._message_id_ttl
        ):
            raise DuplicateMessageError(str(headers.message_id))

        return VerifiedWebhookMessage(
            message_id=headers.message_id,
            message_timestamp=parsed,
            message_type=headers.message_type,
            raw_body=body,
        )

    def _verify_signature(self, headers: WebhookHeaders, body: bytes) -> None:
        mac = hmac.new(self._secret, digestmod=hashlib.sha256)
        mac.update(headers.message_id.value.encode())
        mac.update(headers.message_timestamp.encode())
        mac.update(body)

        provided = headers.signature.removeprefix("sha256=")
        if not hmac.compare_digest(mac.digest(), _decode_hex(provided)):
            raise InvalidSignatureError()