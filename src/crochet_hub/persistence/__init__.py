"""Durable storage primitives for storefront state."""

from crochet_hub.persistence.json_file_store import JsonFileStore
from crochet_hub.persistence.key_value_store import (
    JsonFileBackend,
    MemoryBackend,
    PersistentStore,
    StorageAction,
    StorageBackend,
    StorageEvent,
    StorageObserver,
    TrackedKeyLogger,
)

__all__ = [
    "JsonFileStore",
    "JsonFileBackend",
    "MemoryBackend",
    "PersistentStore",
    "StorageAction",
    "StorageBackend",
    "StorageEvent",
    "StorageObserver",
    "TrackedKeyLogger",
]
