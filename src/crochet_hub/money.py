"""Two-decimal money arithmetic shared by the cart and checkout."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_decimal(value: float | int | str | Decimal) -> Decimal:
    # str() keeps the shortest repr so 0.1 stays 0.1 rather than its binary expansion
    return value if isinstance(value, Decimal) else Decimal(str(value))


def round2(value: float | int | str | Decimal) -> float:
    """Round half-up to two decimal places."""
    return float(to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


def sum_amounts(amounts: Iterable[float | int]) -> float:
    total = sum((to_decimal(amount) for amount in amounts), Decimal("0"))
    return round2(total)


__all__ = ["CENT", "round2", "sum_amounts", "to_decimal"]
