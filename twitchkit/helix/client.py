"""Typed Helix client, its builder and the token source it relies on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlsplit

import httpx

from twitchkit.config import PRODUCTION_HELIX_BASE_URL
from twitchkit.helix import transport
from twitchkit.helix.endpoints import (
    ChannelsApi,
    ChatApi,
    EventSubApi,
    ModerationApi,
    StreamsApi,
)
from twitchkit.helix.errors import HelixConfigurationError
from twitchkit.helix.types import HelixClientConfig, HelixRequestAuth, HelixResponse
from twitchkit.helix.users import UsersApi
from twitchkit.ids import ClientId, UserId


class TokenSource(ABC):
    """Supplies access tokens for one application client."""

    def __init__(self, client_id: ClientId) -> None:
        self._client_id = client_id

    @property
    def client_id(self) -> ClientId:
        """The application client the tokens belong to."""
        return self._client_id

    @abstractmethod
    async def app_token(self) -> str:
        """Returns the app access token."""

    @abstractmethod
    async def user_token(self, user_id: UserId) -> str:
        """Returns the user access token of the given user."""


class HelixClient:
    """Typed Helix client."""

    def __init__(
        self,
        config: HelixClientConfig,
        http_client: httpx.AsyncClient,
        token_source: TokenSource,
        *,
        owns_http_client: bool = False,
    ) -> None:
        self._config = config
        self._http_client = http_client
        self._token_source = token_source
        self._owns_http_client = owns_http_client

    @classmethod
    def builder(cls) -> HelixClientBuilder:
        """Starts building a Helix client."""
        return HelixClientBuilder()

    @property
    def config(self) -> HelixClientConfig:
        """The immutable client configuration."""
        return self._config

    @property
    def http_client(self) -> httpx.AsyncClient:
        """The shared HTTP client."""
        return self._http_client

    @property
    def token_source(self) -> TokenSource:
        """The token source used to authorize requests."""
        return self._token_source

    def users(self) -> UsersApi:
        """Returns the `users` endpoint group."""
        return UsersApi(self)

    def channels(self) -> ChannelsApi:
        """Returns the `channels` endpoint group."""
        return ChannelsApi(self)

    def streams(self) -> StreamsApi:
        """Returns the `streams` endpoint group."""
        return StreamsApi(self)

    def moderation(self) -> ModerationApi:
        """Returns the `moderation` endpoint group."""
        return ModerationApi(self)

    def chat(self) -> ChatApi:
        """Returns the `chat` endpoint group."""
        return ChatApi(self)

    def eventsub(self) -> EventSubApi:
        """Returns the `eventsub` endpoint group."""
        return EventSubApi(self)

    async def execute_get(
        self, path: str, auth: HelixRequestAuth, query: Sequence[tuple[str, str]]
    ) -> HelixResponse[Any]:
        """Performs an authorized GET against a Helix path."""
        return await transport.execute_get(self, path, auth, query)

    async def aclose(self) -> None:
        """Closes the HTTP client when this client created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> HelixClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"HelixClient(config={self._config!r}, http_client='httpx.AsyncClient', "
            f"token_source={type(self._token_source).__name__})"
        )


class HelixClientBuilder:
    """Builder for HelixClient."""

    def __init__(self) -> None:
        self._client_id: ClientId | None = None
        self._base_url: str | None = None
        self._http_client: httpx.AsyncClient | None = None
        self._token_source: TokenSource | None = None

    def client_id(self, client_id: ClientId) -> HelixClientBuilder:
        """Sets the application client identifier."""
        self._client_id = client_id
        return self

    def base_url(self, base_url: str) -> HelixClientBuilder:
        """Overrides the Helix base URL."""
        self._base_url = str(base_url)
        return self

    def http_client(self, http_client: httpx.AsyncClient) -> HelixClientBuilder:
        """Injects a preconfigured HTTP client."""
        self._http_client = http_client
        return self

    def token_source(self, token_source: TokenSource) -> HelixClientBuilder:
        """Injects the token source used to authorize requests."""
        self._token_source = token_source
        return self

    def build(self) -> HelixClient:
        """Builds the Helix client."""
        if self._token_source is None:
            raise HelixConfigurationError("helix client requires a token_source")

        derived = self._token_source.client_id
        if self._client_id is not None and self._client_id != derived:
            raise HelixConfigurationError(
                f"helix client client_id {self._client_id} does not match "
                f"token source client_id {derived}"
            )
        client_id = self._client_id if self._client_id is not None else derived

        base_url = self._base_url if self._base_url is not None else PRODUCTION_HELIX_BASE_URL
        try:
            parts = urlsplit(base_url)
        except ValueError as exc:
            raise HelixConfigurationError(f"helix client base_url is invalid: {exc}") from None
        if not parts.scheme or not parts.netloc:
            raise HelixConfigurationError(
                f"helix client base_url is invalid: {base_url!r} is not an absolute URL"
            )

        owns = self._http_client is None
        http_client = httpx.AsyncClient() if owns else self._http_client
        return HelixClient(
            HelixClientConfig(client_id=client_id, base_url=base_url),
            http_client,
            self._token_source,
            owns_http_client=owns,
        )

    def __repr__(self) -> str:
        return (
            f"HelixClientBuilder(client_id={self._client_id!r}, base_url={self._base_url!r}, "
            f"http_client={'httpx.AsyncClient' if self._http_client else None}, "
            f"token_source={type(self._token_source).__name__ if self._token_source else None})"
        )