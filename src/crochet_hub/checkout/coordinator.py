"""
Checkout coordinator.

Turns the current cart, delivery profile and coupon into an immutable order,
records it in the history and, only once the write is confirmed, clears the
transient state. Outcomes are returned as values; callers decide how to show
them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from crochet_hub.checkout.journal import CheckoutJournal, JournalResolution
from crochet_hub.checkout.pricing import price_order
from crochet_hub.errors import PersistenceError
from crochet_hub.logging import log_state_event
from crochet_hub.persistence import PersistentStore
from crochet_hub.state.cart import CartLedger
from crochet_hub.state.codecs import CART_KEY, DELIVERY_KEY
from crochet_hub.state.delivery import DeliveryProfileState
from crochet_hub.state.discount import DiscountState
from crochet_hub.state.identifiers import MonotonicIdGenerator
from crochet_hub.state.order_history import OrderHistoryLog
from crochet_hub.state.records import DeliveryProfile, DiscountToken, Order, PendingCheckout

logger = logging.getLogger(__name__)

DEFAULT_ORDER_PREFIX = "ORD-"
DEFAULT_ORDER_DATE_FORMAT = "%d %B %Y, %I:%M %p"

EMPTY_CART_MESSAGE = "Your cart is empty!"
MISSING_DELIVERY_MESSAGE = "Please add delivery details first!"
SAVE_FAILED_MESSAGE = "Error saving order! Please try again."


class CheckoutStatus(Enum):
    """Result of a place-order attempt"""

    PLACED = "placed"
    EMPTY_CART = "empty_cart"
    MISSING_DELIVERY = "missing_delivery"
    SAVE_FAILED = "save_failed"


@dataclass(frozen=True)
class CheckoutOutcome:
    status: CheckoutStatus
    message: str
    redirect: str | None = None
    order: Order | None = None

    @property
    def placed(self) -> bool:
        return self.status is CheckoutStatus.PLACED


def confirmation_message(profile: DeliveryProfile) -> str:
    return (
        f"Thank you, {profile.full_name}!\n"
        "Your order has been placed successfully.\n"
        "We're cooking up something sweet just for you, like a warm slice of crochet cake!\n"
        "Get ready to unwrap your cozy package soon.\n"
        f"Confirmation has been sent to {profile.email}."
    )


class CheckoutCoordinator:
    """Places orders from the current storefront state."""

    def __init__(
        self,
        store: PersistentStore,
        cart: CartLedger,
        delivery: DeliveryProfileState,
        discount: DiscountState,
        history: OrderHistoryLog,
        *,
        journal: CheckoutJournal | None = None,
        order_id_prefix: str = DEFAULT_ORDER_PREFIX,
        order_date_format: str = DEFAULT_ORDER_DATE_FORMAT,
        now: Callable[[], datetime] = datetime.now,
        id_generator: MonotonicIdGenerator | None = None,
    ) -> None:
        self._store = store
        self.cart = cart
        self.delivery = delivery
        self.discount = discount
        self.history = history
        self.journal = journal or CheckoutJournal(store)
        self.order_id_prefix = order_id_prefix
        self.order_date_format = order_date_format
        self._now = now
        self._ids = id_generator or MonotonicIdGenerator()
        for order in history.orders():
            token = order.order_id[len(order_id_prefix) :]
            if order.order_id.startswith(order_id_prefix) and token.isdigit():
                self._ids.observe(int(token))

    def next_order_id(self) -> str:
        return f"{self.order_id_prefix}{self._ids.next_id()}"

    def place_order(self) -> CheckoutOutcome:
        if self.cart.is_empty():
            logger.info("Checkout refused: cart is empty")
            return CheckoutOutcome(CheckoutStatus.EMPTY_CART, EMPTY_CART_MESSAGE)

        profile = self.delivery.get()
        if profile is None:
            logger.info("Checkout refused: no delivery details")
            return CheckoutOutcome(
                CheckoutStatus.MISSING_DELIVERY, MISSING_DELIVERY_MESSAGE, redirect="delivery"
            )

        quote = price_order(self.cart.total(), self.discount.get())
        order = Order(
            order_id=self.next_order_id(),
            order_date=self._now().strftime(self.order_date_format),
            items=tuple(self.cart.items()),
            subtotal=quote.subtotal,
            discount_label=quote.discount_label,
            discount_amount=quote.discount_amount,
            final_total=quote.final_total,
            delivery=profile.model_copy(deep=True),
        )

        marker = self._record(order)
        if marker is None:
            return CheckoutOutcome(CheckoutStatus.SAVE_FAILED, SAVE_FAILED_MESSAGE, order=order)

        logger.info("Order #%s saved successfully to order history", order.order_id)
        log_state_event(
            "checkout",
            "order_placed",
            order_id=order.order_id,
            items=len(order.items),
            subtotal=order.subtotal,
            discount=order.discount_label,
            final_total=order.final_total,
        )

        try:
            self.journal.advance(marker)
            self._clear_transient()
            self.journal.complete()
        except PersistenceError as exc:
            # order is durable; a surviving marker lets the next startup finish the clears
            logger.warning("Order %s placed but cleanup did not finish: %s", order.order_id, exc)

        return CheckoutOutcome(
            CheckoutStatus.PLACED, confirmation_message(profile), redirect="home", order=order
        )

    def resume_interrupted(self, marker: PendingCheckout | None) -> JournalResolution:
        """Resolve a checkout journal left by an earlier run."""
        try:
            resolution = self.journal.resolve(marker, self.history, self._finish_interrupted)
        except PersistenceError as exc:
            logger.error("Could not resolve checkout journal, retrying next start: %s", exc)
            resolution = JournalResolution.UNRESOLVED
        if resolution is not JournalResolution.NOTHING_PENDING:
            log_state_event(
                "checkout",
                "journal_resolved",
                level=logging.WARNING,
                order_id=marker.order_id if marker else None,
                resolution=resolution.value,
            )
        return resolution

    # ------------------------------------------------------------------
    def _record(self, order: Order) -> PendingCheckout | None:
        """Append ``order`` and confirm it by reading the log back; the journal marker on success."""
        try:
            marker = self.journal.begin(
                order.order_id,
                item_ids=[item.id for item in order.items],
                discount=self.discount.get(),
            )
            expected = self.history.append(order)
        except PersistenceError as exc:
            logger.error("Failed to save order history: %s", exc)
            self._abandon(order, str(exc))
            return None

        stored = self.history.read_back()
        if not stored or len(stored) != expected or stored[-1].order_id != order.order_id:
            logger.error("Failed to save order history: read-back did not confirm %s", order.order_id)
            self._abandon(order, "verification failed")
            return None
        self.history.confirm(stored)
        return marker

    def _abandon(self, order: Order, reason: str) -> None:
        log_state_event(
            "checkout", "order_save_failed", level=logging.ERROR, order_id=order.order_id, reason=reason
        )
        try:
            self.journal.abandon()
        except PersistenceError as exc:
            logger.warning("Could not drop checkout journal for %s: %s", order.order_id, exc)

    def _clear_transient(self) -> None:
        self.cart.snapshot_and_clear()
        self.delivery.clear()
        self.discount.clear()
        if self._store.contains(CART_KEY) or self._store.contains(DELIVERY_KEY):
            logger.warning("Order data still present after clearing")
        else:
            logger.info("Order data cleared successfully")

    def _finish_interrupted(self, marker: PendingCheckout) -> None:
        """Clear what the interrupted order consumed; later additions stay."""
        for item_id in marker.item_ids:
            self.cart.remove(item_id)
        order = self.history.find(marker.order_id)
        if order is not None and self.delivery.get() == order.delivery:
            self.delivery.clear()
        if marker.discount is not DiscountToken.NONE and self.discount.get() is marker.discount:
            self.discount.clear()
        logger.info("Interrupted checkout %s cleared", marker.order_id)


__all__ = [
    "CheckoutCoordinator",
    "CheckoutOutcome",
    "CheckoutStatus",
    "confirmation_message",
]
