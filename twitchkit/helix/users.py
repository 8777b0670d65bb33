"""Typed `users` Helix endpoint support."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Protocol

from twitchkit.helix.errors import HelixDecodeError, HelixRequestError
from twitchkit.helix.types import HelixRequestAuth, HelixResponse
from twitchkit.ids import UserId

MAX_GET_USERS_QUERY_ITEMS = 100


@dataclass(frozen=True)
class UnknownValue:
    """A value not recognized by this package version."""

    value: str

    def __str__(self) -> str:
        return self.value


class HelixUserType(Enum):
    """Helix `type` field for user records."""

    NORMAL = ""
    ADMIN = "admin"
    GLOBAL_MOD = "global_mod"
    STAFF = "staff"

    @classmethod
    def parse(cls, raw: str) -> HelixUserType | UnknownValue:
        """Maps a raw value to a member, or to UnknownValue when unrecognized."""
        try:
            return cls(raw)
        except ValueError:
            return UnknownValue(raw)


class HelixBroadcasterType(Enum):
    """Helix `broadcaster_type` field for user records."""

    NORMAL = ""
    AFFILIATE = "affiliate"
    PARTNER = "partner"

    @classmethod
    def parse(cls, raw: str) -> HelixBroadcasterType | UnknownValue:
        """Maps a raw value to a member, or to UnknownValue when unrecognized."""
        try:
            return cls(raw)
        except ValueError:
            return UnknownValue(raw)


def _require_str(data: Mapping[str, Any], key: str) -> str:
    try:
        value = data[key]
    except KeyError:
        raise HelixDecodeError(f"missing field `{key}`") from None
    if not isinstance(value, str):
        raise HelixDecodeError(f"field `{key}` must be a string")
    return value


def _optional_trimmed(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise HelixDecodeError(f"field `{key}` must be a string or null")
    trimmed = value.strip()
    return trimmed or None


def _parse_timestamp(text: str, key: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise HelixDecodeError(f"field `{key}` is not a valid RFC3339 timestamp") from None
    if parsed.tzinfo is None:
        raise HelixDecodeError(f"field `{key}` is missing a UTC offset")
    return parsed


@dataclass(frozen=True)
class HelixUser:
    """Typed Helix user record returned by the `Get Users` endpoint."""

    id: UserId
    login: str
    display_name: str
    user_type: HelixUserType | UnknownValue
    broadcaster_type: HelixBroadcasterType | UnknownValue
    description: str
    profile_image_url: str
    offline_image_url: str
    email: str | None
    created_at: datetime

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HelixUser:
        """Decodes a user record from its JSON object."""
        if not isinstance(data, Mapping):
            raise HelixDecodeError("user record must be a JSON object")
        return cls(
            id=UserId(_require_str(data, "id")),
            login=_require_str(data, "login"),
            display_name=_require_str(data, "display_name"),
            user_type=HelixUserType.parse(_require_str(data, "type")),
            broadcaster_type=HelixBroadcasterType.parse(_require_str(data, "broadcaster_type")),
            description=_require_str(data, "description"),
            profile_image_url=_require_str(data, "profile_image_url"),
            offline_image_url=_require_str(data, "offline_image_url"),
            email=_optional_trimmed(data, "email"),
            created_at=_parse_timestamp(_require_str(data, "created_at"), "created_at"),
        )


GetUsersResponse = HelixResponse[list[HelixUser]]


class GetUsersRequest:
    """Typed request for the Helix `Get Users` endpoint."""

    def __init__(self) -> None:
        self._user_ids: list[UserId] = []
        self._logins: list[str] = []

    @property
    def user_ids(self) -> tuple[UserId, ...]:
        """The user identifiers in insertion order."""
        return tuple(self._user_ids)

    @property
    def logins(self) -> tuple[str, ...]:
        """The login names in insertion order."""
        return tuple(self._logins)

    def _copy(self) -> GetUsersRequest:
        clone = GetUsersRequest()
        clone._user_ids = list(self._user_ids)
        clone._logins = list(self._logins)
        return clone

    def with_user_id(self, user_id: UserId) -> GetUsersRequest:
        """Returns a copy with the user identifier added."""
        clone = self._copy()
        clone.push_user_id(user_id)
        return clone

    def with_login(self, login: str) -> GetUsersRequest:
        """Returns a copy with the login name added."""
        clone = self._copy()
        clone.push_login(login)
        return clone

    def push_user_id(self, user_id: UserId) -> None:
        """Appends a user identifier."""
        self._ensure_capacity_for(1)
        self._user_ids.append(user_id)

    def push_login(self, login: str) -> None:
        """Appends a login name, trimmed of surrounding whitespace."""
        self._ensure_capacity_for(1)
        trimmed = login.strip()
        if not trimmed:
            raise HelixRequestError(
                "get users request login values must not be empty or whitespace"
            )
        self._logins.append(trimmed)

    def is_empty(self) -> bool:
        """Returns whether the request contains no filters."""
        return not self._user_ids and not self._logins

    def validate_for_auth(self, auth: HelixRequestAuth) -> None:
        """Rejects an empty request under app authorization."""
        if self.is_empty() and auth.is_app():
            raise HelixRequestError(
                "get users request requires at least one id or login when using app authorization"
            )

    def query_pairs(self) -> list[tuple[str, str]]:
        """Returns query pairs: all ids first, then all logins."""
        return [("id", str(user_id)) for user_id in self._user_ids] + [
            ("login", login) for login in self._logins
        ]

    def _ensure_capacity_for(self, additional: int) -> None:
        if len(self._user_ids) + len(self._logins) + additional > MAX_GET_USERS_QUERY_ITEMS:
            raise HelixRequestError(
                f"get users request supports at most {MAX_GET_USERS_QUERY_ITEMS} "
                "combined id and login filters"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GetUsersRequest):
            return NotImplemented
        return self._user_ids == other._user_ids and self._logins == other._logins

    def __repr__(self) -> str:
        return f"GetUsersRequest(user_ids={self._user_ids!r}, logins={self._logins!r})"


class _GetExecutor(Protocol):
    async def execute_get(
        self, path: str, auth: HelixRequestAuth, query: list[tuple[str, str]]
    ) -> HelixResponse[Any]: ...


class UsersApi:
    """Typed access to the `users` Helix endpoints."""

    def __init__(self, client: _GetExecutor) -> None:
        self._client = client

    @property
    def client(self) -> _GetExecutor:
        """The owning Helix client."""
        return self._client

    async def get_users(
        self, request: GetUsersRequest, auth: HelixRequestAuth
    ) -> GetUsersResponse:
        """Executes the Helix `Get Users` endpoint."""
        request.validate_for_auth(auth)
        raw = await self._client.execute_get("users", auth, request.query_pairs())
        if not isinstance(raw.data, list):
            raise HelixDecodeError("get users response `data` must be a JSON array")
        users = [HelixUser.from_dict(item) for item in raw.data]
        return HelixResponse(data=users, pagination=raw.pagination, rate_limit=raw.rate_limit)