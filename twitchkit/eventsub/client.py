"""High-level EventSub client."""

from __future__ import annotations

import asyncio
from enum import Enum

from twitchkit.eventsub.dispatch import EventDispatcher, EventReceiver
from twitchkit.eventsub.model import EventSubNotification
from twitchkit.eventsub.replay import InMemoryReplayStore, ReplayStore

_DEFAULT_DISPATCHER_CAPACITY = 64


class RuntimeTransport(Enum):
    """Primary EventSub runtime transport."""

    WEBSOCKET = "websocket"
    WEBHOOK = "webhook"


class ShutdownToken:
    """Shared graceful shutdown signal."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        """Signals shutdown to every holder of this token."""
        self._event.set()

    def is_cancelled(self) -> bool:
        """Returns whether shutdown has been signalled."""
        return self._event.is_set()

    async def wait(self) -> None:
        """Waits until shutdown is signalled."""
        await self._event.wait()


class EventSubClient:
    """High-level EventSub runtime entry point."""

    def __init__(
        self,
        transport: RuntimeTransport,
        replay_store: ReplayStore,
        dispatcher: EventDispatcher[EventSubNotification],
        shutdown: ShutdownToken,
    ) -> None:
        self._transport = transport
        self._replay_store = replay_store
        self._dispatcher = dispatcher
        self._shutdown = shutdown

    @classmethod
    def builder(cls) -> EventSubClientBuilder:
        """Starts building an EventSub client."""
        return EventSubClientBuilder()

    @property
    def transport(self) -> RuntimeTransport:
        """The configured runtime transport."""
        return self._transport

    @property
    def replay_store(self) -> ReplayStore:
        """The configured replay store."""
        return self._replay_store

    @property
    def shutdown_token(self) -> ShutdownToken:
        """The graceful shutdown token."""
        return self._shutdown

    def subscribe(self) -> EventReceiver[EventSubNotification]:
        """Subscribes to runtime notifications from the local dispatcher."""
        return self._dispatcher.subscribe()


class EventSubClientBuilder:
    """Builder for EventSubClient."""

    def __init__(self) -> None:
        self._transport = RuntimeTransport.WEBSOCKET
        self._replay_store: ReplayStore | None = None
        self._dispatcher_capacity: int | None = None

    def transport(self, transport: RuntimeTransport) -> EventSubClientBuilder:
        """Selects the primary runtime transport."""
        self._transport = transport
        return self

    def replay_store(self, replay_store: ReplayStore) -> EventSubClientBuilder:
        """Injects a custom replay store."""
        self._replay_store = replay_store
        return self

    def dispatcher_capacity(self, dispatcher_capacity: int) -> EventSubClientBuilder:
        """Sets the per-subscriber notification backlog."""
        self._dispatcher_capacity = dispatcher_capacity
        return self

    def build(self) -> EventSubClient:
        """Builds the EventSub client."""
        capacity = (
            self._dispatcher_capacity
            if self._dispatcher_capacity is not None
            else _DEFAULT_DISPATCHER_CAPACITY
        )
        replay_store = self._replay_store if self._replay_store is not None else InMemoryReplayStore()
        return EventSubClient(
            transport=self._transport,
            replay_store=replay_store,
            dispatcher=EventDispatcher(capacity),
            shutdown=ShutdownToken(),
        )