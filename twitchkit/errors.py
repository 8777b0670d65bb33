"""Common error taxonomy shared across the package."""

from __future__ import annotations


class CoreError(Exception):
    """Base error for shared infrastructure and validation failures."""

    prefix = "core error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}"

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.detail == other.detail  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.detail))


class ConfigurationError(CoreError):
    """A required configuration value is missing or malformed."""

    prefix = "configuration error"


class InvalidIdentifierError(CoreError):
    """An identifier failed validation."""

    prefix = "invalid identifier"


class InvalidSecretError(CoreError):
    """A secret value failed validation."""

    prefix = "invalid secret"