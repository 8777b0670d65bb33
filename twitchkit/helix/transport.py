"""Shared Helix transport helpers for typed JSON endpoints."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode, urlsplit

import httpx

from twitchkit.helix.errors import (
    HelixApiError,
    HelixAuthError,
    HelixDecodeError,
    HelixError,
    HelixRequestError,
)
from twitchkit.helix.types import HelixRequestAuth, HelixResponse
from twitchkit.pagination import Cursor, PageInfo
from twitchkit.rate_limit import RateLimitMetadata

if TYPE_CHECKING:
    from twitchkit.helix.client import HelixClient

_U32_PATTERN = re.compile(r"\+?[0-9]+")
_U32_MAX = 0xFFFFFFFF


def build_url(base_url: str, path: str, query: Sequence[tuple[str, str]]) -> str:
    """Joins the base URL and path and appends form-encoded query pairs in order."""
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise HelixRequestError(f"failed to construct helix URL: {exc}") from None
    if not parts.scheme or not parts.netloc:
        raise HelixRequestError(
            f"failed to construct helix URL: {url!r} is not an absolute URL"
        )
    if query:
        separator = "&" if parts.query else "?"
        url = f"{url}{separator}{urlencode(list(query))}"
    return url


def parse_api_error(status: int, body: bytes) -> HelixApiError:
    """Builds an API error from a non-success response body."""
    try:
        payload: Any = json.loads(body)
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        message = payload.get("message")
        if (error is None or isinstance(error, str)) and (
            message is None or isinstance(message, str)
        ):
            return HelixApiError(status, error, message)
    text = bytes(body).decode("utf-8", errors="replace").strip()
    return HelixApiError(status, None, text or None)


def _header(headers: Mapping[str, Any], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() != wanted:
            continue
        if isinstance(value, bytes):
            try:
                return value.decode("ascii")
            except UnicodeDecodeError:
                return None
        return value if isinstance(value, str) else None
    return None


def _header_u32(headers: Mapping[str, Any], name: str) -> int | None:
    raw = _header(headers, name)
    if raw is None or _U32_PATTERN.fullmatch(raw) is None:
        return None
    value = int(raw)
    return value if value <= _U32_MAX else None


def parse_rate_limit(headers: Mapping[str, Any]) -> RateLimitMetadata | None:
    """Extracts rate-limit metadata when all three headers are present and valid."""
    limit = _header_u32(headers, "Ratelimit-Limit")
    remaining = _header_u32(headers, "Ratelimit-Remaining")
    reset = _header_u32(headers, "Ratelimit-Reset")
    if limit is None or remaining is None or reset is None:
        return None
    try:
        reset_at = datetime.fromtimestamp(reset, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return RateLimitMetadata(limit=limit, remaining=remaining, reset_at=reset_at)


def decode_payload(body: bytes | str) -> HelixResponse[Any]:
    """Decodes the `data` and `pagination` members of a success body."""
    prefix = "failed to decode helix response body"
    try:
        payload: Any = json.loads(body)
    except ValueError as exc:
        raise HelixDecodeError(f"{prefix}: {exc}") from None
    if not isinstance(payload, dict):
        raise HelixDecodeError(f"{prefix}: expected a JSON object")
    if "data" not in payload:
        raise HelixDecodeError(f"{prefix}: missing field `data`")

    page_info: PageInfo | None = None
    pagination = payload.get("pagination")
    if pagination is not None:
        if not isinstance(pagination, dict):
            raise HelixDecodeError(f"{prefix}: `pagination` must be an object")
        cursor = pagination.get("cursor")
        if cursor is not None:
            if not isinstance(cursor, str):
                raise HelixDecodeError(f"{prefix}: `pagination.cursor` must be a string")
            page_info = PageInfo(next=Cursor(cursor))
    return HelixResponse(data=payload["data"], pagination=page_info)


async def _resolve_bearer_token(client: HelixClient, auth: HelixRequestAuth) -> str:
    source = client.token_source
    try:
        if auth.is_app():
            token = await source.app_token()
        else:
            token = await source.user_token(auth.user_id)
    except HelixError:
        raise
    except Exception as exc:
        raise HelixAuthError(str(exc) or type(exc).__name__) from exc
    if not isinstance(token, str):
        raise HelixAuthError("token source returned a non-string access token")
    return token


async def execute_get(
    client: HelixClient,
    path: str,
    auth: HelixRequestAuth,
    query: Sequence[tuple[str, str]],
) -> HelixResponse[Any]:
    """Performs an authorized GET and decodes the JSON envelope."""
    url = build_url(client.config.base_url, path, query)
    bearer = await _resolve_bearer_token(client, auth)
    headers = {
        "Authorization": f"Bearer {bearer}",
        "Client-Id": client.config.client_id.value,
    }
    try:
        response = await client.http_client.request("GET", url, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise HelixRequestError(f"failed to send helix request: {exc}") from exc

    rate_limit = parse_rate_limit(response.headers)
    body = response.content
    if not response.is_success:
        raise parse_api_error(response.status_code, body)
    return replace(decode_payload(body), rate_limit=rate_limit)