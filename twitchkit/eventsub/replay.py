"""Replay protection and duplicate suppression."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from operator import itemgetter

from twitchkit.eventsub.errors import ReplayError
from twitchkit.ids import MessageId


class ReplayStore(ABC):
    """Replay protection contract."""

    @abstractmethod
    async def seen_or_insert(
        self, message_id: MessageId, seen_at: datetime, ttl: timedelta
    ) -> bool:
        """Returns True when the message was already seen, otherwise records it."""


@dataclass(frozen=True)
class ReplayStoreConfig:
    """Configuration for the built-in in-memory replay store."""

    replay_window: timedelta = field(default_factory=lambda: timedelta(minutes=10))
    message_id_ttl: timedelta = field(default_factory=lambda: timedelta(minutes=15))
    max_entries: int = 4096

    def __post_init__(self) -> None:
        if self.max_entries < 0:
            raise ValueError("max_entries must not be negative")


class InMemoryReplayStore(ReplayStore):
    """Bounded in-memory replay store."""

    def __init__(self, config: ReplayStoreConfig | None = None) -> None:
        self._config = config if config is not None else ReplayStoreConfig()
        self._entries: dict[MessageId, datetime] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> ReplayStoreConfig:
        """The store configuration."""
        return self._config

    async def seen_or_insert(
        self, message_id: MessageId, seen_at: datetime, ttl: timedelta
    ) -> bool:
        if ttl < timedelta(0):
            raise ReplayError("ttl must not be negative")
        try:
            oldest_allowed = seen_at - ttl
        except OverflowError:
            raise ReplayError("duration seconds exceed supported range") from None

        with self._lock:
            self._entries = {
                key: stamp for key, stamp in self._entries.items() if stamp >= oldest_allowed
            }
            if message_id in self._entries:
                return True
            self._entries[message_id] = seen_at
            self._enforce_bound()
            return False

    def _enforce_bound(self) -> None:
        overflow = len(self._entries) - self._config.max_entries
        if overflow <= 0:
            return
        oldest = sorted(self._entries.items(), key=itemgetter(1))[:overflow]
        for key, _ in oldest:
            del self._entries[key]