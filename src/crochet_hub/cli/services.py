"""Helper utilities for CLI command implementations."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from crochet_hub.app import ApplicationContainer, StorefrontState
from crochet_hub.config import RuntimeSettings

# Set by ``crochet_hub.cli.main`` before a handler runs
SETTINGS: RuntimeSettings | None = None


@contextmanager
def open_state() -> Iterator[StorefrontState]:
    """Recover storefront state, yield it, then flush on the way out."""
    container = ApplicationContainer(SETTINGS)
    try:
        yield container.state
    finally:
        container.close()


def build_container() -> ApplicationContainer:
    return ApplicationContainer(SETTINGS)


def print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))
