from __future__ import annotations

import contextlib
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any


class JsonFileStore:
    """Utility helper for whole-document JSON persistence with shared locking semantics."""

    def __init__(
        self,
        path: Path,
        *,
        create: bool = True,
    ) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if create and not self.path.exists():
            self.path.touch()
        # Re-entrant lock so callers can compose operations safely
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def read_json(self, default: Any = None) -> Any:
        """Read a JSON document from disk, returning ``default`` when missing or empty.

        Raises ``json.JSONDecodeError`` for a non-empty file that does not parse so
        callers can decide how to contain the corruption.
        """
        with self._lock:
            try:
                text = self.path.read_text(encoding="utf-8")
            except FileNotFoundError:
                return default
            if not text.strip():
                return default
            return json.loads(text)

    def write_json(self, payload: Any, *, indent: int | None = 2) -> None:
        """Persist a JSON document atomically (temp file then ``os.replace``)."""
        with self._lock:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(payload, handle, indent=indent)
                    if indent is not None:
                        handle.write("\n")
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)
                raise


__all__ = ["JsonFileStore"]
