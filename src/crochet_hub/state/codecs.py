"""Encode and decode functions for persisted storefront keys.

Each decoder fails closed: anything that is not exactly the expected shape
raises :class:`DecodeError` and the caller falls back to a default.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from crochet_hub.errors import DecodeError
from crochet_hub.state.records import (
    CartItem,
    DeliveryProfile,
    DiscountToken,
    Order,
    PendingCheckout,
    Review,
)

T = TypeVar("T")

CART_KEY = "cart"
DISCOUNT_KEY = "discountCoupon"
DELIVERY_KEY = "deliveryData"
ORDER_HISTORY_KEY = "orderHistory"
REVIEWS_KEY = "reviews"
GALLERY_KEY = "gallery"
PENDING_CHECKOUT_KEY = "pendingCheckout"

_CART_ADAPTER = TypeAdapter(list[CartItem])
_ORDERS_ADAPTER = TypeAdapter(list[Order])
_REVIEWS_ADAPTER = TypeAdapter(list[Review])
_GALLERY_ADAPTER = TypeAdapter(list[str])
_DELIVERY_ADAPTER = TypeAdapter(DeliveryProfile)
_PENDING_ADAPTER = TypeAdapter(PendingCheckout)


def _load(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise DecodeError(key, f"malformed JSON: {exc}") from exc


def _expect(key: str, data: Any, kind: type, label: str) -> None:
    if not isinstance(data, kind):
        raise DecodeError(key, f"expected {label}, got {type(data).__name__}")


def _validate(key: str, adapter: TypeAdapter[T], data: Any) -> T:
    try:
        return adapter.validate_python(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]["msg"]
        raise DecodeError(key, f"{exc.error_count()} invalid field(s): {first}") from exc


def _dump(records: Iterable[Any]) -> str:
    return json.dumps([record.to_wire() for record in records])


# ---------------------------------------------------------------------------
def decode_cart(raw: str) -> list[CartItem]:
    data = _load(CART_KEY, raw)
    _expect(CART_KEY, data, list, "a sequence")
    return _validate(CART_KEY, _CART_ADAPTER, data)


def encode_cart(items: Iterable[CartItem]) -> str:
    return _dump(items)


def decode_order_history(raw: str) -> list[Order]:
    data = _load(ORDER_HISTORY_KEY, raw)
    _expect(ORDER_HISTORY_KEY, data, list, "a sequence")
    return _validate(ORDER_HISTORY_KEY, _ORDERS_ADAPTER, data)


def encode_order_history(orders: Iterable[Order]) -> str:
    return _dump(orders)


def decode_delivery(raw: str) -> DeliveryProfile:
    data = _load(DELIVERY_KEY, raw)
    _expect(DELIVERY_KEY, data, dict, "a record")
    return _validate(DELIVERY_KEY, _DELIVERY_ADAPTER, data)


def encode_delivery(profile: DeliveryProfile) -> str:
    return json.dumps(profile.to_wire())


def decode_discount(raw: str) -> DiscountToken:
    """The coupon is stored as a bare string, not JSON. Surrounding whitespace is ignored."""
    try:
        return DiscountToken(raw.strip())
    except ValueError as exc:
        raise DecodeError(DISCOUNT_KEY, f"unknown coupon token {raw!r}") from exc


def encode_discount(token: DiscountToken) -> str:
    return token.value


def decode_reviews(raw: str) -> list[Review]:
    data = _load(REVIEWS_KEY, raw)
    _expect(REVIEWS_KEY, data, list, "a sequence")
    return _validate(REVIEWS_KEY, _REVIEWS_ADAPTER, data)


def encode_reviews(reviews: Iterable[Review]) -> str:
    return _dump(reviews)


def decode_gallery(raw: str) -> list[str]:
    data = _load(GALLERY_KEY, raw)
    _expect(GALLERY_KEY, data, list, "a sequence")
    return _validate(GALLERY_KEY, _GALLERY_ADAPTER, data)


def decode_pending_checkout(raw: str) -> PendingCheckout:
    data = _load(PENDING_CHECKOUT_KEY, raw)
    _expect(PENDING_CHECKOUT_KEY, data, dict, "a record")
    return _validate(PENDING_CHECKOUT_KEY, _PENDING_ADAPTER, data)


def encode_pending_checkout(marker: PendingCheckout) -> str:
    return json.dumps(marker.to_wire())


__all__ = [
    "CART_KEY",
    "DELIVERY_KEY",
    "DISCOUNT_KEY",
    "GALLERY_KEY",
    "ORDER_HISTORY_KEY",
    "PENDING_CHECKOUT_KEY",
    "REVIEWS_KEY",
    "decode_cart",
    "decode_delivery",
    "decode_discount",
    "decode_gallery",
    "decode_order_history",
    "decode_pending_checkout",
    "decode_reviews",
    "encode_cart",
    "encode_delivery",
    "encode_discount",
    "encode_order_history",
    "encode_pending_checkout",
    "encode_reviews",
]
