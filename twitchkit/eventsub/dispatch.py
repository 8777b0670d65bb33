"""Local broadcast dispatch for EventSub runtime notifications."""

from __future__ import annotations

import asyncio
import weakref
from collections import deque
from typing import Generic, TypeVar

from twitchkit.eventsub.errors import DispatchError

E = TypeVar("E")

_EMPTY = object()


class EventReceiver(Generic[E]):
    """Receives events dispatched after it subscribed."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._buffer: deque[E] = deque()
        self._lagged = 0
        self._ready = asyncio.Event()

    def _push(self, event: E) -> None:
        if len(self._buffer) >= self._capacity:
            self._buffer.popleft()
            self._lagged += 1
        self._buffer.append(event)
        self._ready.set()

    def _take(self) -> object:
        if self._lagged:
            missed, self._lagged = self._lagged, 0
            raise DispatchError(f"receiver lagged behind by {missed} events")
        if self._buffer:
            return self._buffer.popleft()
        return _EMPTY

    async def recv(self) -> E:
        """Waits for the next event."""
        while True:
            event = self._take()
            if event is not _EMPTY:
                return event  # type: ignore[return-value]
            self._ready.clear()
            await self._ready.wait()

    def try_recv(self) -> E:
        """Returns the next pending event, raising DispatchError when none is pending."""
        event = self._take()
        if event is _EMPTY:
            raise DispatchError("no pending events")
        return event  # type: ignore[return-value]


class EventDispatcher(Generic[E]):
    """Broadcast dispatcher with a bounded per-receiver backlog."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("dispatcher capacity must be greater than zero")
        self._capacity = capacity
        self._receivers: weakref.WeakSet[EventReceiver[E]] = weakref.WeakSet()

    @property
    def capacity(self) -> int:
        """Maximum number of events buffered per receiver."""
        return self._capacity

    def dispatch(self, event: E) -> int:
        """Sends an event to every live receiver and returns how many got it."""
        receivers = list(self._receivers)
        if not receivers:
            raise DispatchError("no active subscribers")
        for receiver in receivers:
            receiver._push(event)
        return len(receivers)

    def subscribe(self) -> EventReceiver[E]:
        """Subscribes to future events."""
        receiver: EventReceiver[E] = EventReceiver(self._capacity)
        self._receivers.add(receiver)
        return receiver