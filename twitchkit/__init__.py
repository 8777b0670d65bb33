"""Typed building blocks for Twitch: identifiers, configuration, Helix and EventSub."""

__version__ = "0.1.0"