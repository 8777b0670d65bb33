"""Errors produced by the Helix client layer."""

from __future__ import annotations


def _render_api_error(status: int, error: str | None, message: str | None) -> str:
    if error is not None and message is not None:
        return f"helix API error ({status} {error}): {message}"
    if message is not None:
        return f"helix API error ({status}): {message}"
    if error is not None:
        return f"helix API error ({status}): {error}"
    return f"helix API error ({status})"


class HelixError(Exception):
    """Base error for the Helix client layer."""

    prefix = "helix error"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}"


class HelixConfigurationError(HelixError):
    """Helix client configuration is invalid."""

    prefix = "helix configuration error"


class HelixRequestError(HelixError):
    """Request construction or transport failed before a payload was decoded."""

    prefix = "helix request error"


class HelixDecodeError(HelixError):
    """A success response could not be decoded into typed models."""

    prefix = "helix decode error"


class HelixApiError(HelixError):
    """Twitch returned an API error response."""

    def __init__(
        self, status: int, error: str | None = None, message: str | None = None
    ) -> None:
        super().__init__(_render_api_error(status, error, message))
        self.status = status
        self.error = error
        self.message = message

    def __str__(self) -> str:
        return self.detail


class HelixAuthError(HelixError):
    """Authentication or token acquisition failed."""

    def __str__(self) -> str:
        return self.detail