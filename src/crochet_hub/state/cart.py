"""Cart ledger mirrored to the persistent store."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator

from crochet_hub.errors import PersistenceError, ValidationError
from crochet_hub.money import sum_amounts
from crochet_hub.persistence import PersistentStore
from crochet_hub.state.codecs import CART_KEY, encode_cart
from crochet_hub.state.identifiers import MonotonicIdGenerator
from crochet_hub.state.records import CartItem

logger = logging.getLogger(__name__)


class CartLedger:
    """
    Ordered collection of cart items.

    Every mutation writes the whole sequence under ``cart`` before the
    in-memory list changes, so a failed write leaves both sides as they were.
    """

    def __init__(
        self,
        store: PersistentStore,
        items: Iterable[CartItem] = (),
        *,
        id_generator: MonotonicIdGenerator | None = None,
    ) -> None:
        self._store = store
        self._items: list[CartItem] = list(items)
        self._ids = id_generator or MonotonicIdGenerator()
        for item in self._items:
            self._ids.observe(item.id)

    def add(self, name: str, unit_price: float) -> CartItem:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Cart item name must not be blank")
        if isinstance(unit_price, bool) or not isinstance(unit_price, (int, float)):
            raise ValidationError(f"Cart item price must be a number, got {unit_price!r}")
        if not math.isfinite(unit_price) or unit_price < 0:
            raise ValidationError(f"Cart item price must be finite and non-negative, got {unit_price}")

        item = CartItem(id=self._ids.next_id(), name=name.strip(), unit_price=float(unit_price))
        self._commit([*self._items, item])
        logger.info("Added %s to cart (Rs %.2f), %d item(s)", item.name, item.unit_price, len(self._items))
        return item

    def remove(self, item_id: int) -> bool:
        """Remove the first item with ``item_id``; ``False`` when nothing matched."""
        for index, item in enumerate(self._items):
            if item.id == item_id:
                remaining = self._items[:index] + self._items[index + 1 :]
                self._commit(remaining)
                logger.info("Removed %s from cart, %d item(s) left", item.name, len(remaining))
                return True
        logger.debug("Cart item %s not found, nothing removed", item_id)
        return False

    def total(self) -> float:
        return sum_amounts(item.unit_price for item in self._items)

    def count(self) -> int:
        return len(self._items)

    def items(self) -> list[CartItem]:
        return [item.model_copy(deep=True) for item in self._items]

    def is_empty(self) -> bool:
        return not self._items

    def snapshot_and_clear(self) -> list[CartItem]:
        """Return copies of the current items and empty the cart, removing its key."""
        snapshot = self.items()
        self._store.remove(CART_KEY)
        self._items = []
        return snapshot

    def flush(self) -> None:
        """Final best-effort write; failures are logged, not raised."""
        try:
            if self._items:
                self._store.set(CART_KEY, encode_cart(self._items))
            else:
                self._store.remove(CART_KEY)
        except PersistenceError as exc:
            logger.warning("Cart flush failed: %s", exc)

    def _commit(self, items: list[CartItem]) -> None:
        if items:
            self._store.set(CART_KEY, encode_cart(items))
        else:
            self._store.remove(CART_KEY)
        self._items = items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self.items())


__all__ = ["CartLedger"]
