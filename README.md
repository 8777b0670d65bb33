# twitchkit

Typed building blocks for talking to Twitch from Python 3.11 or newer.

- `twitchkit.ids`: distinct identifier types (`UserId`, `BroadcasterId`,
  `ClientId`, `SubscriptionId`, `MessageId`, `ChannelId`, `SessionId`). Two
  different kinds never compare equal, even when they wrap the same string.
- `twitchkit.config`: `TwitchConfig`, `AuthServiceConfig` and `HelixConfig`,
  each with a `production(...)` constructor.
- `twitchkit.pagination` and `twitchkit.rate_limit`: `Cursor`, `PageRequest`,
  `PageInfo` and `RateLimitMetadata`, with `to_dict` / `from_dict`.
- `twitchkit.helix`: an async `HelixClient` built on `httpx`, with the
  `Get Users` endpoint and typed errors.
- `twitchkit.eventsub`: EventSub models, replay protection, local event
  dispatch, an `EventSubClient` builder and HMAC webhook verification.

Install with the test extra to run the test suite:

```
pip install -e .[test]
pytest
```

## Identifiers and configuration

```python
from twitchkit.ids import ClientId, UserId
from twitchkit.config import TwitchConfig

user = UserId("1234")
broadcaster = user.to_broadcaster_id()   # explicit conversion only
str(broadcaster)                         # "1234"

config = TwitchConfig.production(ClientId("client-id"), "secret")
config.helix.api_base_url    # "https://api.twitch.tv/helix"
config.auth.oauth_base_url   # "https://id.twitch.tv/oauth2"
```

## Pagination and rate limits

```python
from twitchkit.pagination import Cursor, PageInfo, PageRequest

request = PageRequest().with_after(Cursor("next-cursor")).with_first(25)
PageRequest.from_dict(request.to_dict()) == request   # True
PageInfo().has_next_page()                            # False
```

`PageRequest.first` must fit in 0..65535. `RateLimitMetadata` holds `limit`,
`remaining` (0..4294967295) and a timezone-aware `reset_at`.

## Calling Helix

A `HelixClient` needs a `TokenSource`: a subclass you write that knows its
`client_id` and returns access tokens from `app_token()` and
`user_token(user_id)`. The client id is taken from the token source unless
you set one with `client_id(...)`; a mismatch raises
`HelixConfigurationError`, as does a missing token source or a base URL that
is not absolute.

```python
from twitchkit.helix.client import HelixClient, TokenSource
from twitchkit.helix.types import HelixRequestAuth
from twitchkit.helix.users import GetUsersRequest
from twitchkit.ids import ClientId, UserId


class FixedTokens(TokenSource):
    async def app_token(self) -> str:
        return "token"

    async def user_token(self, user_id: UserId) -> str:
        return "token"


async def lookup() -> None:
    source = FixedTokens(ClientId("client-1"))
    async with HelixClient.builder().token_source(source).build() as helix:
        request = GetUsersRequest().with_user_id(UserId("1")).with_login("foo")
        response = await helix.users().get_users(request, HelixRequestAuth.app())
        for user in response.data:
            print(user.login, user.display_name, user.broadcaster_type)
        if response.rate_limit is not None:
            print(response.rate_limit.remaining, "requests left")
```

Requests carry `Authorization: Bearer <token>` and `Client-Id` headers. Ids
are sent first, then logins, each in the order added. An `httpx.AsyncClient`
can be injected with `http_client(...)`; otherwise the client creates one and
closes it in `aclose()` (or on leaving the `async with` block).

`GetUsersRequest` accepts at most 100 combined ids and logins, trims logins
and rejects blank ones, and `get_users` refuses an empty request under
`HelixRequestAuth.app()`; these raise `HelixRequestError` before any HTTP
call. With `HelixRequestAuth.user(user_id)` an empty request is allowed.

Errors, all subclasses of `HelixError`:

- `HelixApiError` for a non-success status, with `status`, `error` and
  `message` taken from the JSON body (or the body text as `message`);
- `HelixDecodeError` for a success body that does not decode;
- `HelixAuthError` when the token source raises;
- `HelixRequestError` when the request cannot be built or sent.

`HelixUser.user_type` and `broadcaster_type` are `HelixUserType` /
`HelixBroadcasterType` members, or `UnknownValue` for values this package
does not know. A blank `email` becomes `None`. `rate_limit` is set only when
the `Ratelimit-Limit`, `Ratelimit-Remaining` and `Ratelimit-Reset` headers
are all present and valid.

## EventSub

```python
from twitchkit.eventsub.client import EventSubClient, RuntimeTransport

client = (
    EventSubClient.builder()
    .transport(RuntimeTransport.WEBHOOK)
    .dispatcher_capacity(128)
    .build()
)
receiver = client.subscribe()
client.shutdown_token.cancel()
```

The builder defaults to `RuntimeTransport.WEBSOCKET`, an
`InMemoryReplayStore` and a capacity of 64.

`EventDispatcher.dispatch(event)` hands the event to every live
`EventReceiver` and returns how many received it; with no subscribers it
raises `DispatchError`. Each receiver buffers up to the capacity, dropping
the oldest; the next `recv()` / `try_recv()` after a drop raises
`DispatchError` reporting how many were missed. `try_recv()` also raises it
when nothing is pending.

`InMemoryReplayStore.seen_or_insert(message_id, seen_at, ttl)` returns `True`
for an id already recorded within `ttl` of `seen_at`, otherwise records it
and returns `False`. It keeps at most `ReplayStoreConfig.max_entries` ids
(4096 by default), evicting the oldest first. Any `ReplayStore` subclass can
be injected instead.

### Webhook verification

```python
from twitchkit.eventsub.webhook import WebhookHeaders, WebhookVerifier

verifier = WebhookVerifier("secret")

async def handle(request_headers, raw_body: bytes):
    headers = WebhookHeaders.from_mapping(request_headers)
    message = await verifier.verify(headers, raw_body)
    return message.message_type, message.raw_body
```

`WebhookHeaders.from_mapping` reads the `Twitch-Eventsub-Message-Id`,
`-Timestamp`, `-Type` and `-Signature` headers case-insensitively and raises
`WebhookError` for a missing header or an unsupported message type.
`verify` checks, in order: the timestamp is RFC 3339 (`WebhookError`), it
is not older than `replay_window` (10 minutes by default,
`StaleTimestampError`), the HMAC-SHA256 over id, timestamp and body matches
the signature with or without its `sha256=` prefix (`InvalidSignatureError`),
and the id was not seen within `message_id_ttl` (15 minutes by default,
`DuplicateMessageError`).

## What this package does not do

- It does not obtain or refresh OAuth tokens; you supply them through a
  `TokenSource`.
- `Get Users` is the only Helix call. `ChannelsApi`, `ChatApi`,
  `EventSubApi`, `ModerationApi` and `StreamsApi`, and their request and
  response records, carry data only.
- `EventSubWebSocketClient` holds limits and session state but opens no
  connection, and `EventSubManagementClient` only holds a `HelixClient`.
- There is no HTTP server: webhook requests are verified from headers and
  body you pass in.