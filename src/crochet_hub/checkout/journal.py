"""
Pending-checkout journal.

A small marker written under ``pendingCheckout`` brackets the multi-key
checkout write. It names the order being placed and how far the write got:

``appending``
    The order may or may not have reached the history.
``clearing``
    The order is in the history; the cart, delivery and coupon clears may be
    incomplete.

A marker left behind by an interrupted run is resolved at startup.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from crochet_hub.errors import DecodeError
from crochet_hub.persistence import PersistentStore
from crochet_hub.state.codecs import (
    PENDING_CHECKOUT_KEY,
    decode_pending_checkout,
    encode_pending_checkout,
)
from crochet_hub.state.order_history import OrderHistoryLog
from crochet_hub.state.records import DiscountToken, PendingCheckout

logger = logging.getLogger(__name__)

STAGE_APPENDING = "appending"
STAGE_CLEARING = "clearing"


class JournalResolution(Enum):
    """How a leftover marker was resolved"""

    NOTHING_PENDING = "nothing_pending"
    ROLLED_FORWARD = "rolled_forward"
    ROLLED_BACK = "rolled_back"
    UNRESOLVED = "unresolved"


class CheckoutJournal:
    def __init__(self, store: PersistentStore) -> None:
        self._store = store

    def begin(
        self,
        order_id: str,
        *,
        item_ids: Iterable[int] = (),
        discount: DiscountToken = DiscountToken.NONE,
    ) -> PendingCheckout:
        marker = PendingCheckout(
            order_id=order_id,
            stage=STAGE_APPENDING,
            item_ids=tuple(item_ids),
            discount=discount,
        )
        self._write(marker)
        return marker

    def advance(self, marker: PendingCheckout) -> PendingCheckout:
        """Mark the append as verified."""
        advanced = marker.model_copy(update={"stage": STAGE_CLEARING})
        self._write(advanced)
        return advanced

    def complete(self) -> None:
        self._store.remove(PENDING_CHECKOUT_KEY)

    def abandon(self) -> None:
        """Drop the marker after a failed append; transient state stays for a retry."""
        self._store.remove(PENDING_CHECKOUT_KEY)

    def pending(self) -> PendingCheckout | None:
        raw = self._store.get(PENDING_CHECKOUT_KEY)
        if raw is None:
            return None
        try:
            return decode_pending_checkout(raw)
        except DecodeError as exc:
            logger.warning("Ignoring unreadable checkout journal: %s", exc.reason)
            return None

    def resolve(
        self,
        marker: PendingCheckout | None,
        history: OrderHistoryLog,
        finish_clears: Callable[[PendingCheckout], None],
    ) -> JournalResolution:
        """
        Settle an interrupted checkout.

        If the history holds the marker's order, ``finish_clears`` is handed the
        marker to complete the clears (roll forward). Otherwise the order never
        landed and the marker is dropped (roll back), leaving cart, delivery and
        coupon for a retry.
        """
        if marker is None:
            if self._store.contains(PENDING_CHECKOUT_KEY):
                # undecodable marker, nothing to act on
                self.complete()
            return JournalResolution.NOTHING_PENDING

        if history.contains(marker.order_id):
            logger.warning("Completing interrupted checkout %s", marker.order_id)
            finish_clears(marker)
            self.complete()
            return JournalResolution.ROLLED_FORWARD

        logger.warning(
            "Discarding interrupted checkout %s; order was not recorded", marker.order_id
        )
        self.complete()
        return JournalResolution.ROLLED_BACK

    def _write(self, marker: PendingCheckout) -> None:
        self._store.set(PENDING_CHECKOUT_KEY, encode_pending_checkout(marker))


__all__ = ["CheckoutJournal", "JournalResolution", "STAGE_APPENDING", "STAGE_CLEARING"]
