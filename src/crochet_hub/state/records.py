"""Typed records for every persisted storefront entity.

Field names are snake_case in Python and camelCase on the wire, matching the
documents the storefront pages have always written.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    StringConstraints,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


def _coerce_amount(value: Any) -> Any:
    # bool is an int subclass; numeric strings come from older totals written with toFixed
    if isinstance(value, bool):
        raise PydanticCustomError("amount_type", "amount must be a number, got a boolean")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError as e:
            raise PydanticCustomError(
                "amount_type", "amount must be numeric, got {value}", {"value": value}
            ) from e
    if isinstance(value, (int, float)) and not math.isfinite(value):
        raise PydanticCustomError("amount_finite", "amount must be finite")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


Amount = Annotated[float, BeforeValidator(_coerce_amount), Field(ge=0)]
NonBlank = Annotated[StrictStr, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Annotated[NonBlank | None, BeforeValidator(_blank_to_none)]


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        """Plain JSON-ready mapping using wire field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DiscountToken(str, Enum):
    """Coupon token earned from the stitch quiz"""

    NONE = "none"
    TEN_PERCENT_OFF = "10% OFF"

    @classmethod
    def parse(cls, raw: str | None) -> DiscountToken:
        """Map a stored string to a token; anything unrecognised is ``NONE``."""
        if raw is None:
            return cls.NONE
        try:
            return cls(raw.strip())
        except ValueError:
            return cls.NONE


class PaymentMethod(str, Enum):
    """Payment method tags offered on the delivery form"""

    CREDIT_CARD = "creditCard"
    EASY_PAISA = "easyPaisa"
    JAZZ_CASH = "jazzCash"
    ADVANCE_CASH = "advanceCash"


# payment method -> python field names of its sub-record
PAYMENT_FIELDS: dict[PaymentMethod, tuple[str, ...]] = {
    PaymentMethod.CREDIT_CARD: ("card_number", "card_holder", "expiry_date", "cvv"),
    PaymentMethod.EASY_PAISA: ("easy_paisa_phone",),
    PaymentMethod.JAZZ_CASH: ("jazz_cash_phone",),
    PaymentMethod.ADVANCE_CASH: (),
}


class CartItem(_Record):
    """One line in the cart; ``unit_price`` travels as ``price``."""

    id: StrictInt
    name: NonBlank
    unit_price: Amount = Field(alias="price")


class DeliveryProfile(_Record):
    """Shipping and payment details entered on the delivery page."""

    full_name: NonBlank
    phone: NonBlank
    email: NonBlank
    home_address: NonBlank
    province: NonBlank
    city: NonBlank
    payment: PaymentMethod
    alt_address: OptionalText = None
    alt_phone: OptionalText = None
    card_number: OptionalText = None
    card_holder: OptionalText = None
    expiry_date: OptionalText = None
    cvv: OptionalText = None
    easy_paisa_phone: OptionalText = None
    jazz_cash_phone: OptionalText = None

    @model_validator(mode="after")
    def _check_payment_sub_record(self) -> DeliveryProfile:
        for method, names in PAYMENT_FIELDS.items():
            for name in names:
                value = getattr(self, name)
                if method is self.payment and value is None:
                    raise PydanticCustomError(
                        "payment_field_missing",
                        "{field} is required for payment method {method}",
                        {"field": to_camel(name), "method": self.payment.value},
                    )
                if method is not self.payment and value is not None:
                    raise PydanticCustomError(
                        "payment_field_unexpected",
                        "{field} does not belong to payment method {method}",
                        {"field": to_camel(name), "method": self.payment.value},
                    )
        return self


class Order(_Record):
    """Finalized order. Immutable once created."""

    order_id: NonBlank
    order_date: NonBlank
    items: tuple[CartItem, ...]
    subtotal: Amount
    discount_label: Literal["10%", "None"] = Field(
        validation_alias=AliasChoices("discountLabel", "discount", "discount_label"),
        serialization_alias="discountLabel",
    )
    discount_amount: Amount = 0.0
    final_total: Amount
    delivery: DeliveryProfile


class Review(_Record):
    name: NonBlank
    text: NonBlank
    rating: StrictInt = Field(ge=1, le=5)


class PendingCheckout(_Record):
    """
    Journal entry marking a checkout whose writes are in flight.

    ``item_ids`` and ``discount`` record what the order consumed so a later
    roll-forward clears only that, leaving anything added since.
    """

    order_id: NonBlank
    stage: Literal["appending", "clearing"]
    item_ids: tuple[StrictInt, ...] = ()
    discount: DiscountToken = DiscountToken.NONE


__all__ = [
    "Amount",
    "CartItem",
    "DeliveryProfile",
    "DiscountToken",
    "Order",
    "PAYMENT_FIELDS",
    "PaymentMethod",
    "PendingCheckout",
    "Review",
]
