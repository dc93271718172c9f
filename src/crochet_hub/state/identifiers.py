"""Identifier generation for cart items and orders."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


def _millis() -> int:
    return time.time_ns() // 1_000_000


class MonotonicIdGenerator:
    """Clock-derived integer ids that never repeat.

    Ids follow the millisecond clock but are always strictly greater than the
    last id issued or observed, so two calls inside one clock tick (or after
    the clock steps backwards) still get distinct values.
    """

    def __init__(self, clock: Callable[[], int] | None = None, floor: int = 0) -> None:
        self._clock = clock if clock is not None else _millis
        self._last = floor
        self._lock = threading.Lock()

    @property
    def last(self) -> int:
        return self._last

    def observe(self, value: int) -> None:
        """Account for an id issued elsewhere, e.g. one restored from storage."""
        with self._lock:
            if value > self._last:
                self._last = value

    def next_id(self) -> int:
        with self._lock:
            candidate = max(int(self._clock()), self._last + 1)
            self._last = candidate
            return candidate


__all__ = ["MonotonicIdGenerator"]
