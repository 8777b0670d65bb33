"""Helix client configuration, auth selection and response envelope."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from twitchkit.config import PRODUCTION_HELIX_BASE_URL
from twitchkit.ids import ClientId, UserId
from twitchkit.pagination import PageInfo
from twitchkit.rate_limit import RateLimitMetadata

T = TypeVar("T")


@dataclass(frozen=True)
class HelixClientConfig:
    """Configuration for the typed Helix client."""

    client_id: ClientId
    base_url: str

    @classmethod
    def production(cls, client_id: ClientId) -> HelixClientConfig:
        """Returns the standard Twitch production Helix configuration."""
        return cls(client_id=client_id, base_url=PRODUCTION_HELIX_BASE_URL)


@dataclass(frozen=True)
class HelixRequestAuth:
    """Selects which token a Helix request uses: the app token or a user's token."""

    user_id: UserId | None = None

    @classmethod
    def app(cls) -> HelixRequestAuth:
        """Authorize with the app access token of the configured client."""
        return cls()

    @classmethod
    def user(cls, user_id: UserId) -> HelixRequestAuth:
        """Authorize with the user access token of the given user."""
        if not isinstance(user_id, UserId):
            raise TypeError("user authorization requires a UserId")
        return cls(user_id=user_id)

    def is_app(self) -> bool:
        """Returns whether the request uses app authorization."""
        return self.user_id is None


@dataclass(frozen=True)
class HelixResponse(Generic[T]):
    """Typed Helix response envelope with shared transport metadata."""

    data: T
    pagination: PageInfo | None = None
    rate_limit: RateLimitMetadata | None = None