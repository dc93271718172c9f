"""
Persistent key-value store for storefront state.

A flat string namespace in the spirit of browser local storage. Values are
opaque strings; encoding structured values is the caller's responsibility.
Writes are published to subscribed observers after they succeed.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from crochet_hub.errors import PersistenceError
from crochet_hub.persistence.json_file_store import JsonFileStore

logger = logging.getLogger(__name__)


class StorageAction(Enum):
    """Kinds of successful store mutations"""

    SET = "set"
    REMOVE = "remove"


@dataclass(frozen=True)
class StorageEvent:
    """Notification emitted after a key was written or removed."""

    key: str
    action: StorageAction


StorageObserver = Callable[[StorageEvent], None]


class StorageBackend(Protocol):
    """Raw storage primitive behind :class:`PersistentStore`."""

    def get(self, key: str) -> str | None:
        """Return the stored string or ``None`` when absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``; raise ``OSError`` on failure."""
        ...

    def remove(self, key: str) -> None:
        """Remove ``key`` if present; raise ``OSError`` on failure."""
        ...

    def keys(self) -> list[str]:
        """Return stored keys in insertion order."""
        ...


class MemoryBackend:
    """In-process backend. Survives nothing; used for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileBackend:
    """
    Backend persisting the whole namespace as one JSON object on disk.

    Every read goes to disk so a read-back reflects what was durably written.
    A namespace file that does not decode to an object is treated as empty;
    the next write replaces it.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._store = JsonFileStore(path)

    def _load(self) -> dict[str, str]:
        try:
            document = self._store.read_json(default={})
        except json.JSONDecodeError as exc:
            logger.error("Storage namespace %s is corrupt, treating as empty: %s", self.path, exc)
            return {}
        if not isinstance(document, dict):
            logger.error(
                "Storage namespace %s holds %s instead of an object, treating as empty",
                self.path,
                type(document).__name__,
            )
            return {}
        return {str(k): v for k, v in document.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._store.lock:
            namespace = self._load()
            namespace[key] = value
            self._store.write_json(namespace)

    def remove(self, key: str) -> None:
        with self._store.lock:
            namespace = self._load()
            if key not in namespace:
                return
            del namespace[key]
            self._store.write_json(namespace)

    def keys(self) -> list[str]:
        return list(self._load())


class PersistentStore:
    """Synchronous string key-value store with write observers."""

    def __init__(self, backend: StorageBackend | None = None) -> None:
        self.backend: StorageBackend = backend if backend is not None else MemoryBackend()
        self._observers: list[StorageObserver] = []
        self._lock = threading.RLock()

    def get(self, key: str) -> str | None:
        try:
            return self.backend.get(key)
        except OSError as exc:
            logger.error("Storage read failed for %s: %s", key, exc)
            raise PersistenceError(key, f"read failed: {exc}") from exc

    def set(self, key: str, raw: str) -> None:
        if not isinstance(raw, str):
            raise TypeError(f"PersistentStore values must be str, got {type(raw).__name__}")
        with self._lock:
            try:
                self.backend.set(key, raw)
            except OSError as exc:
                logger.error("Storage write failed for %s: %s", key, exc)
                raise PersistenceError(key, f"write failed: {exc}") from exc
        self._publish(StorageEvent(key=key, action=StorageAction.SET))

    def remove(self, key: str) -> None:
        with self._lock:
            try:
                self.backend.remove(key)
            except OSError as exc:
                logger.error("Storage remove failed for %s: %s", key, exc)
                raise PersistenceError(key, f"remove failed: {exc}") from exc
        self._publish(StorageEvent(key=key, action=StorageAction.REMOVE))

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    def keys(self) -> list[str]:
        return self.backend.keys()

    # ------------------------------------------------------------------
    def subscribe(self, observer: StorageObserver) -> Callable[[], None]:
        """Register ``observer`` for write events; returns an unsubscribe callable."""
        with self._lock:
            self._observers.append(observer)

        def _unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return _unsubscribe

    def _publish(self, event: StorageEvent) -> None:
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(event)
            except Exception as exc:
                logger.warning("Storage observer failed for %s: %s", event.key, exc, exc_info=True)


class TrackedKeyLogger:
    """Observer logging saves of keys whose names contain a tracked fragment."""

    def __init__(
        self,
        fragments: Iterable[str] = ("cart", "order", "delivery", "discount"),
        *,
        log: logging.Logger | None = None,
    ) -> None:
        self.fragments = tuple(fragments)
        self._log = log or logger

    def matches(self, key: str) -> bool:
        return any(fragment in key for fragment in self.fragments)

    def __call__(self, event: StorageEvent) -> None:
        if event.action is StorageAction.SET and self.matches(event.key):
            self._log.info("Data saved: %s", event.key)


__all__ = [
    "JsonFileBackend",
    "MemoryBackend",
    "PersistentStore",
    "StorageAction",
    "StorageBackend",
    "StorageEvent",
    "StorageObserver",
    "TrackedKeyLogger",
]
