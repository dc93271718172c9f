"""Startup persistence report."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any

from crochet_hub.errors import PersistenceError
from crochet_hub.persistence import PersistentStore
from crochet_hub.state.codecs import (
    CART_KEY,
    DELIVERY_KEY,
    DISCOUNT_KEY,
    GALLERY_KEY,
    ORDER_HISTORY_KEY,
    REVIEWS_KEY,
)
from crochet_hub.state.records import DiscountToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersistenceStatus:
    """Counts of what the store currently holds."""

    cart_items: int
    orders: int
    delivery_saved: bool
    discount: DiscountToken
    reviews: int
    gallery_images: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["discount"] = self.discount.value
        return data


def _read(store: PersistentStore, key: str) -> str | None:
    try:
        return store.get(key)
    except PersistenceError as exc:
        logger.warning("Status check could not read %s: %s", key, exc.message)
        return None


def _sequence_length(store: PersistentStore, key: str) -> int:
    raw = _read(store, key)
    if raw is None:
        return 0
    try:
        data = json.loads(raw)
    except ValueError:
        return 0
    return len(data) if isinstance(data, list) else 0


def collect_status(store: PersistentStore) -> PersistenceStatus:
    """Count stored entities without decoding them; corrupt values count as zero."""
    return PersistenceStatus(
        cart_items=_sequence_length(store, CART_KEY),
        orders=_sequence_length(store, ORDER_HISTORY_KEY),
        delivery_saved=_read(store, DELIVERY_KEY) is not None,
        discount=DiscountToken.parse(_read(store, DISCOUNT_KEY)),
        reviews=_sequence_length(store, REVIEWS_KEY),
        gallery_images=_sequence_length(store, GALLERY_KEY),
    )


def log_status(status: PersistenceStatus, log: logging.Logger | None = None) -> None:
    log = log or logger
    log.info("=== PERSISTENCE STATUS ===")
    log.info("Cart items: %d", status.cart_items)
    log.info("Orders: %d", status.orders)
    log.info("Delivery data saved: %s", "Yes" if status.delivery_saved else "No")
    log.info("Discount coupon: %s", status.discount.value)
    log.info("Reviews: %d", status.reviews)
    log.info("Gallery images: %d", status.gallery_images)
    log.info("=========================")


__all__ = ["PersistenceStatus", "collect_status", "log_status"]
