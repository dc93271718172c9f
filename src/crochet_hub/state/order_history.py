"""Append-only log of completed orders."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from crochet_hub.errors import DecodeError, PersistenceError
from crochet_hub.persistence import PersistentStore
from crochet_hub.state.codecs import ORDER_HISTORY_KEY, decode_order_history, encode_order_history
from crochet_hub.state.records import Order

logger = logging.getLogger(__name__)


class OrderHistoryLog:
    """Chronological order log persisted under ``orderHistory``. Entries are never removed."""

    def __init__(self, store: PersistentStore, orders: Iterable[Order] = ()) -> None:
        self._store = store
        self._orders: list[Order] = list(orders)

    def append(self, order: Order) -> int:
        """
        Persist ``order`` at the end of the stored log and return the new length.

        The in-memory view is untouched until :meth:`confirm` adopts a verified
        read-back. A stored log that cannot be decoded is never overwritten;
        ``PersistenceError`` is raised instead.
        """
        updated = [*self.snapshot(), order]
        self._store.set(ORDER_HISTORY_KEY, encode_order_history(updated))
        logger.debug("Order %s appended, history now %d order(s)", order.order_id, len(updated))
        return len(updated)

    def confirm(self, stored: Iterable[Order]) -> None:
        """Adopt a verified read-back as the in-memory log."""
        self._orders = list(stored)

    def read_back(self) -> list[Order] | None:
        """Re-read the stored log; ``None`` when it is absent or not a valid sequence."""
        raw = self._store.get(ORDER_HISTORY_KEY)
        if raw is None:
            return None
        try:
            return decode_order_history(raw)
        except DecodeError as exc:
            logger.error("Order history read-back failed: %s", exc.reason)
            return None

    def orders(self) -> list[Order]:
        return list(self._orders)

    def count(self) -> int:
        return len(self._orders)

    def contains(self, order_id: str) -> bool:
        return self.find(order_id) is not None

    def find(self, order_id: str) -> Order | None:
        for order in self._orders:
            if order.order_id == order_id:
                return order
        return None

    def snapshot(self) -> list[Order]:
        """The log the next append will extend: the stored log, or memory when nothing is stored."""
        raw = self._store.get(ORDER_HISTORY_KEY)
        if raw is None:
            return list(self._orders)
        try:
            return decode_order_history(raw)
        except DecodeError as exc:
            logger.error("Stored order history is unreadable, refusing to overwrite: %s", exc.reason)
            raise PersistenceError(ORDER_HISTORY_KEY, f"stored log is unreadable: {exc.reason}") from exc

    def __len__(self) -> int:
        return len(self._orders)


__all__ = ["OrderHistoryLog"]
