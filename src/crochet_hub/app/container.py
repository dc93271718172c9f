"""
Application composition root.

The container owns the storage backend and builds the storefront components
from recovered state. Recovery always runs before any component exists, so no
operation can observe un-recovered state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from types import TracebackType

from crochet_hub.checkout.coordinator import CheckoutCoordinator
from crochet_hub.checkout.journal import CheckoutJournal, JournalResolution
from crochet_hub.config.runtime_settings import RuntimeSettings, load_runtime_settings
from crochet_hub.persistence import (
    JsonFileBackend,
    PersistentStore,
    StorageBackend,
    TrackedKeyLogger,
)
from crochet_hub.state.cart import CartLedger
from crochet_hub.state.delivery import DeliveryProfileState
from crochet_hub.state.discount import DiscountState
from crochet_hub.state.order_history import OrderHistoryLog
from crochet_hub.state.recovery_handler import RecoveredState, RecoveryValidator
from crochet_hub.state.reviews import ReviewBoard
from crochet_hub.state.status import PersistenceStatus, collect_status

logger = logging.getLogger(__name__)


@dataclass
class StorefrontState:
    """Explicit context holding every live storefront component."""

    store: PersistentStore
    cart: CartLedger
    discount: DiscountState
    delivery: DeliveryProfileState
    history: OrderHistoryLog
    reviews: ReviewBoard
    checkout: CheckoutCoordinator
    recovery: RecoveredState
    gallery: list[str] = field(default_factory=list)
    journal_resolution: JournalResolution = JournalResolution.NOTHING_PENDING

    def flush(self) -> None:
        self.cart.flush()


class ApplicationContainer:
    """Lazily wires settings, the persistent store and the storefront state."""

    def __init__(
        self,
        settings: RuntimeSettings | None = None,
        *,
        backend: StorageBackend | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._settings = settings
        self._backend = backend
        self._now = now
        self._store: PersistentStore | None = None
        self._state: StorefrontState | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def settings(self) -> RuntimeSettings:
        if self._settings is None:
            self._settings = load_runtime_settings()
        return self._settings

    @property
    def store(self) -> PersistentStore:
        if self._store is None:
            backend = self._backend
            if backend is None:
                backend = JsonFileBackend(self.settings.store_path)
                logger.debug("Using storage namespace %s", self.settings.store_path)
            self._store = PersistentStore(backend)
            self._unsubscribe = self._store.subscribe(
                TrackedKeyLogger(self.settings.tracked_key_fragments)
            )
        return self._store

    @property
    def state(self) -> StorefrontState:
        """The storefront state, recovering from the store on first access."""
        if self._state is None:
            self._state = self._build_state()
        return self._state

    def status(self) -> PersistenceStatus:
        return collect_status(self.store)

    def close(self) -> None:
        """Flush the cart and detach observers. Safe to call twice."""
        if self._state is not None:
            self._state.flush()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __enter__(self) -> ApplicationContainer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _build_state(self) -> StorefrontState:
        store = self.store
        recovered = RecoveryValidator(store).run()

        cart = CartLedger(store, recovered.cart)
        discount = DiscountState(store, recovered.discount)
        delivery = DeliveryProfileState(store, recovered.delivery)
        history = OrderHistoryLog(store, recovered.orders)
        checkout = CheckoutCoordinator(
            store,
            cart,
            delivery,
            discount,
            history,
            journal=CheckoutJournal(store),
            order_id_prefix=self.settings.order_id_prefix,
            order_date_format=self.settings.order_date_format,
            now=self._now,
        )
        resolution = checkout.resume_interrupted(recovered.pending_checkout)

        logger.debug(
            "Storefront state ready: %d cart item(s), %d order(s)", cart.count(), history.count()
        )
        return StorefrontState(
            store=store,
            cart=cart,
            discount=discount,
            delivery=delivery,
            history=history,
            reviews=ReviewBoard(store, recovered.reviews),
            checkout=checkout,
            recovery=recovered,
            gallery=list(recovered.gallery),
            journal_resolution=resolution,
        )


__all__ = ["ApplicationContainer", "StorefrontState"]
