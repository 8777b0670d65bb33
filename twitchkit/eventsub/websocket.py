"""WebSocket session configuration and state for EventSub."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from twitchkit.ids import SessionId


def _check_range(name: str, value: int, upper: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer")
    if not 0 <= value <= upper:
        raise ValueError(f"{name} must be between 0 and {upper}")


@dataclass(frozen=True)
class EventSubWebSocketConfig:
    """Runtime limits for EventSub WebSocket sessions."""

    max_connections_per_identity: int = 3
    max_enabled_subscriptions: int = 300
    max_total_cost: int = 10

    def __post_init__(self) -> None:
        _check_range("max_connections_per_identity", self.max_connections_per_identity, 0xFF)
        _check_range("max_enabled_subscriptions", self.max_enabled_subscriptions, 0xFFFF)
        _check_range("max_total_cost", self.max_total_cost, 0xFF)


class SessionPhase(Enum):
    """Lifecycle phase of an EventSub WebSocket session."""

    IDLE = "idle"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"
    REVOKED = "revoked"


@dataclass(frozen=True)
class WebSocketSessionState:
    """Session lifecycle state; every phase but idle carries a session id."""

    phase: SessionPhase = SessionPhase.IDLE
    session_id: SessionId | None = None

    def __post_init__(self) -> None:
        if self.phase is SessionPhase.IDLE and self.session_id is not None:
            raise ValueError("an idle session has no session id")
        if self.phase is not SessionPhase.IDLE and self.session_id is None:
            raise ValueError(f"a {self.phase.value} session requires a session id")


class EventSubWebSocketClient:
    """WebSocket transport holding its limits and session state."""

    def __init__(self, config: EventSubWebSocketConfig | None = None) -> None:
        self._config = config if config is not None else EventSubWebSocketConfig()
        self._state = WebSocketSessionState()

    @property
    def config(self) -> EventSubWebSocketConfig:
        """The configured runtime limits."""
        return self._config

    @property
    def state(self) -> WebSocketSessionState:
        """The current session state."""
        return self._state