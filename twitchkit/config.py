"""Configuration records for the Twitch OAuth and Helix services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from twitchkit.ids import ClientId

PRODUCTION_OAUTH_BASE_URL = "https://id.twitch.tv/oauth2"
PRODUCTION_HELIX_BASE_URL = "https://api.twitch.tv/helix"


@dataclass
class AuthServiceConfig:
    """Application credentials plus the OAuth endpoint they are used against."""

    client_id: ClientId
    client_secret: Any = field(repr=False)
    oauth_base_url: str

    @classmethod
    def production(cls, client_id: ClientId, client_secret: Any) -> AuthServiceConfig:
        """Build a configuration pointing at the live Twitch OAuth service."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            oauth_base_url=PRODUCTION_OAUTH_BASE_URL,
        )


@dataclass
class HelixConfig:
    """Client id and API root used when talking to Helix."""

    client_id: ClientId
    api_base_url: str

    @classmethod
    def production(cls, client_id: ClientId) -> HelixConfig:
        """Build a configuration pointing at the live Helix API."""
        return cls(client_id=client_id, api_base_url=PRODUCTION_HELIX_BASE_URL)


@dataclass
class TwitchConfig:
    """Combined auth and Helix settings for one application."""

    auth: AuthServiceConfig
    helix: HelixConfig

    @classmethod
    def production(cls, client_id: ClientId, client_secret: Any) -> TwitchConfig:
        """Build both service configurations for the live Twitch endpoints."""
        return cls(
            auth=AuthServiceConfig.production(client_id, client_secret),
            helix=HelixConfig.production(client_id),
        )