"""Error hierarchy for the Crochet Hub state layer."""

from __future__ import annotations

__all__ = [
    "StorefrontError",
    "ValidationError",
    "ConfigError",
    "PersistenceError",
    "DecodeError",
]


class StorefrontError(Exception):
    """Base error for storefront state operations."""


class ValidationError(StorefrontError):
    """Input rejected before any state was changed."""


class ConfigError(StorefrontError):
    """Configuration error."""


class PersistenceError(StorefrontError):
    """The storage backend failed to read or write a key."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key
        self.message = message


class DecodeError(StorefrontError):
    """A persisted value could not be decoded into its record type."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"{key}: {reason}")
        self.key = key
        self.reason = reason
