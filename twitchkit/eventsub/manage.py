"""Helix-backed EventSub subscription management."""

from __future__ import annotations

from dataclasses import dataclass

from twitchkit.helix.client import HelixClient


@dataclass(frozen=True)
class SubscriptionManagementRequest:
    """Transport-agnostic request for managing an EventSub subscription."""

    subscription_type: str
    version: str


class EventSubManagementClient:
    """Helix-backed EventSub management entry point."""

    def __init__(self, helix: HelixClient) -> None:
        self._helix = helix

    @property
    def helix(self) -> HelixClient:
        """The underlying Helix client."""
        return self._helix

    def __repr__(self) -> str:
        return f"EventSubManagementClient(helix={self._helix!r})"