"""Discount arithmetic for checkout."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from crochet_hub.money import round2, to_decimal
from crochet_hub.state.records import DiscountToken

DISCOUNT_RATE = Decimal("0.10")
DISCOUNT_LABEL = "10%"
NO_DISCOUNT_LABEL = "None"


@dataclass(frozen=True)
class Quote:
    subtotal: float
    discount_label: str
    discount_amount: float
    final_total: float


def price_order(subtotal: float, token: DiscountToken) -> Quote:
    """Apply the coupon to ``subtotal``. Only ``10% OFF`` changes the total."""
    subtotal = round2(subtotal)
    if token is DiscountToken.TEN_PERCENT_OFF:
        discount_amount = round2(to_decimal(subtotal) * DISCOUNT_RATE)
        final_total = round2(to_decimal(subtotal) - to_decimal(discount_amount))
        return Quote(subtotal, DISCOUNT_LABEL, discount_amount, final_total)
    return Quote(subtotal, NO_DISCOUNT_LABEL, 0.0, subtotal)


__all__ = ["DISCOUNT_RATE", "Quote", "price_order", "round2"]
