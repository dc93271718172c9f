"""
Startup recovery for persisted storefront state.

Reads every tracked key once, decodes it with its typed decoder and falls back
to the entity default whenever a value is absent, malformed or the wrong
shape. Rejected raw values are left in the store; the owning component
replaces them on its next write.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from crochet_hub.errors import DecodeError, PersistenceError
from crochet_hub.persistence import PersistentStore
from crochet_hub.state.codecs import (
    CART_KEY,
    DELIVERY_KEY,
    DISCOUNT_KEY,
    GALLERY_KEY,
    ORDER_HISTORY_KEY,
    PENDING_CHECKOUT_KEY,
    REVIEWS_KEY,
    decode_cart,
    decode_delivery,
    decode_discount,
    decode_gallery,
    decode_order_history,
    decode_pending_checkout,
    decode_reviews,
)
from crochet_hub.state.records import (
    CartItem,
    DeliveryProfile,
    DiscountToken,
    Order,
    PendingCheckout,
    Review,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecoveryOutcome(Enum):
    """What recovery did with one key"""

    ADOPTED = "adopted"
    ABSENT = "absent"
    REJECTED = "rejected"
    UNREADABLE = "unreadable"


@dataclass(frozen=True)
class RecoveryIssue:
    """Non-fatal diagnostic for a key whose stored value was not adopted."""

    key: str
    outcome: RecoveryOutcome
    reason: str


@dataclass
class RecoveredState:
    """Entity values to initialise components with."""

    cart: list[CartItem] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)
    discount: DiscountToken = DiscountToken.NONE
    delivery: DeliveryProfile | None = None
    reviews: list[Review] = field(default_factory=list)
    gallery: list[str] = field(default_factory=list)
    pending_checkout: PendingCheckout | None = None
    outcomes: dict[str, RecoveryOutcome] = field(default_factory=dict)
    issues: list[RecoveryIssue] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.issues


class RecoveryValidator:
    """Decode every tracked key into a :class:`RecoveredState`. Never raises."""

    def __init__(self, store: PersistentStore) -> None:
        self.store = store

    def run(self) -> RecoveredState:
        state = RecoveredState()

        state.cart = self._recover(state, CART_KEY, decode_cart, list)
        if state.cart:
            logger.info("Cart restored: %d items", len(state.cart))

        state.orders = self._recover(state, ORDER_HISTORY_KEY, decode_order_history, list)
        if state.orders:
            logger.info("Order history restored: %d orders", len(state.orders))

        state.discount = self._recover(state, DISCOUNT_KEY, decode_discount, lambda: DiscountToken.NONE)
        if state.discount is not DiscountToken.NONE:
            logger.info("Discount coupon restored: %s", state.discount.value)

        state.delivery = self._recover(state, DELIVERY_KEY, decode_delivery, lambda: None)
        if state.delivery is not None:
            logger.info("Delivery data restored for: %s", state.delivery.full_name)

        state.reviews = self._recover(state, REVIEWS_KEY, decode_reviews, list)
        if state.reviews:
            logger.info("Reviews restored: %d reviews", len(state.reviews))

        state.gallery = self._recover(state, GALLERY_KEY, decode_gallery, list)
        if state.gallery:
            logger.info("Gallery restored: %d images", len(state.gallery))

        state.pending_checkout = self._recover(
            state, PENDING_CHECKOUT_KEY, decode_pending_checkout, lambda: None
        )
        if state.pending_checkout is not None:
            logger.warning(
                "Found interrupted checkout %s at stage %s",
                state.pending_checkout.order_id,
                state.pending_checkout.stage,
            )

        if state.issues:
            logger.warning("Recovery finished with %d issue(s)", len(state.issues))
        return state

    def _recover(
        self,
        state: RecoveredState,
        key: str,
        decoder: Callable[[str], T],
        default: Callable[[], Any],
    ) -> T:
        try:
            raw = self.store.get(key)
        except PersistenceError as exc:
            self._record(state, key, RecoveryOutcome.UNREADABLE, exc.message)
            return default()

        if raw is None:
            state.outcomes[key] = RecoveryOutcome.ABSENT
            return default()

        try:
            value = decoder(raw)
        except DecodeError as exc:
            self._record(state, key, RecoveryOutcome.REJECTED, exc.reason)
            return default()

        state.outcomes[key] = RecoveryOutcome.ADOPTED
        return value

    @staticmethod
    def _record(state: RecoveredState, key: str, outcome: RecoveryOutcome, reason: str) -> None:
        logger.warning("Error restoring %s: %s", key, reason)
        state.outcomes[key] = outcome
        state.issues.append(RecoveryIssue(key=key, outcome=outcome, reason=reason))


__all__ = [
    "RecoveredState",
    "RecoveryIssue",
    "RecoveryOutcome",
    "RecoveryValidator",
]
