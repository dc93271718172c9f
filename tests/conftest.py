"""Shared fixtures for the Crochet Hub test suite."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from crochet_hub.app import ApplicationContainer
from crochet_hub.config import RuntimeSettings
from crochet_hub.persistence import MemoryBackend, PersistentStore
from crochet_hub.state.delivery import build_delivery_profile
from crochet_hub.state.records import DeliveryProfile

FIXED_NOW = datetime(2024, 3, 5, 14, 30)


class FailingBackend(MemoryBackend):
    """Memory backend that raises ``OSError`` for selected keys."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.fail_set: set[str] = set()
        self.fail_remove: set[str] = set()
        self.fail_get: set[str] = set()

    def get(self, key: str) -> str | None:
        if key in self.fail_get:
            raise OSError(f"simulated read failure for {key}")
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        if key in self.fail_set:
            raise OSError(f"simulated write failure for {key}")
        super().set(key, value)

    def remove(self, key: str) -> None:
        if key in self.fail_remove:
            raise OSError(f"simulated remove failure for {key}")
        super().remove(key)


@pytest.fixture
def memory_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def memory_store(memory_backend: MemoryBackend) -> PersistentStore:
    return PersistentStore(memory_backend)


@pytest.fixture
def failing_backend() -> FailingBackend:
    return FailingBackend()


@pytest.fixture
def failing_store(failing_backend: FailingBackend) -> PersistentStore:
    return PersistentStore(failing_backend)


@pytest.fixture
def delivery_form() -> dict[str, Any]:
    """Credit-card delivery form as submitted, with stray wallet input."""
    return {
        "fullName": "Ayesha Khan",
        "phone": "03001234567",
        "email": "ayesha@example.com",
        "homeAddress": "12 Canal Road",
        "altAddress": "",
        "altPhone": "",
        "province": "Punjab",
        "city": "Lahore",
        "payment": "creditCard",
        "cardNumber": "4111111111111234",
        "cardHolder": "Ayesha Khan",
        "expiryDate": "12/27",
        "cvv": "123",
        "easyPaisaPhone": "03111111111",
    }


@pytest.fixture
def delivery_profile(delivery_form: dict[str, Any]) -> DeliveryProfile:
    return build_delivery_profile(delivery_form)


@pytest.fixture
def fixed_now() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def runtime_settings(tmp_path: Path) -> RuntimeSettings:
    return RuntimeSettings(
        store_path=tmp_path / "data" / "storefront.json",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def container_factory(
    runtime_settings: RuntimeSettings, fixed_now: Callable[[], datetime]
) -> Callable[..., ApplicationContainer]:
    """Build containers sharing one on-disk namespace, as successive sessions would."""

    def _factory(**kwargs: Any) -> ApplicationContainer:
        kwargs.setdefault("now", fixed_now)
        return ApplicationContainer(runtime_settings, **kwargs)

    return _factory
