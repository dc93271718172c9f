"""Delivery and payment profile slot plus form assembly."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from crochet_hub.errors import PersistenceError, ValidationError
from crochet_hub.persistence import PersistentStore
from crochet_hub.state.codecs import DELIVERY_KEY, encode_delivery
from crochet_hub.state.records import PAYMENT_FIELDS, DeliveryProfile, PaymentMethod

logger = logging.getLogger(__name__)

ADVANCE_CASH_UPFRONT = 1000

_PAYMENT_FIELD_NAMES = {name for names in PAYMENT_FIELDS.values() for name in names}


def _field_value(form: Mapping[str, Any], name: str) -> Any:
    if name in form:
        return form[name]
    return form.get(to_camel(name))


def _format_validation_error(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(to_camel(str(part)) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def build_delivery_profile(form: Mapping[str, Any]) -> DeliveryProfile:
    """
    Assemble a profile from submitted form values.

    Keys may use either wire (``fullName``) or attribute (``full_name``) names.
    Only the payment fields of the selected method are kept; values typed into
    the other methods' fields are dropped.

    Raises:
        ValidationError: When a required field is blank or the payment method
            is unknown.
    """
    payment = _field_value(form, "payment")
    try:
        method = PaymentMethod(payment)
    except ValueError as exc:
        raise ValidationError(f"Unknown payment method {payment!r}") from exc

    values: dict[str, Any] = {"payment": method}
    for name in DeliveryProfile.model_fields:
        if name == "payment":
            continue
        if name in _PAYMENT_FIELD_NAMES and name not in PAYMENT_FIELDS[method]:
            continue
        values[name] = _field_value(form, name)

    try:
        return DeliveryProfile.model_validate(values)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid delivery details: {_format_validation_error(exc)}") from exc


def mask_card_number(card_number: str) -> str:
    return f"**** **** **** {card_number[-4:]}"


def describe_payment(profile: DeliveryProfile) -> str:
    """Human-readable payment summary shown next to the cart."""
    if profile.payment is PaymentMethod.CREDIT_CARD:
        return (
            f"Credit Card\nCardholder: {profile.card_holder}\n"
            f"Card Number: {mask_card_number(profile.card_number or '')}\n"
            f"Expiry: {profile.expiry_date}"
        )
    if profile.payment is PaymentMethod.EASY_PAISA:
        return f"EasyPaisa\nPhone: {profile.easy_paisa_phone}"
    if profile.payment is PaymentMethod.JAZZ_CASH:
        return f"JazzCash\nPhone: {profile.jazz_cash_phone}"
    return f"Advance Cash (Rs {ADVANCE_CASH_UPFRONT} upfront, rest on delivery)"


def describe_address(profile: DeliveryProfile) -> str:
    lines = [
        f"Name: {profile.full_name}",
        f"Phone: {profile.phone}",
        f"Email: {profile.email}",
        f"Address: {profile.home_address}",
    ]
    if profile.alt_address:
        lines.append(f"Alternative Address: {profile.alt_address}")
    if profile.alt_phone:
        lines.append(f"Alternative Phone: {profile.alt_phone}")
    lines.append(f"City: {profile.city}")
    lines.append(f"Province: {profile.province}")
    return "\n".join(lines)


class DeliveryProfileState:
    """Holds at most one delivery profile, persisted under ``deliveryData``."""

    def __init__(self, store: PersistentStore, profile: DeliveryProfile | None = None) -> None:
        self._store = store
        self._profile = profile

    def set(self, profile: DeliveryProfile) -> None:
        self._store.set(DELIVERY_KEY, encode_delivery(profile))
        self._profile = profile

    def get(self) -> DeliveryProfile | None:
        return self._profile

    def clear(self) -> None:
        self._store.remove(DELIVERY_KEY)
        self._profile = None

    def submit(self, form: Mapping[str, Any]) -> DeliveryProfile:
        """Build, save and confirm a profile from form values."""
        profile = build_delivery_profile(form)
        self.set(profile)
        if not self._store.contains(DELIVERY_KEY):
            logger.error("Delivery details were not found after saving")
            raise PersistenceError(DELIVERY_KEY, "saved value missing on read-back")
        logger.info("Delivery details saved for %s", profile.full_name)
        return profile


__all__ = [
    "ADVANCE_CASH_UPFRONT",
    "DeliveryProfileState",
    "build_delivery_profile",
    "describe_address",
    "describe_payment",
    "mask_card_number",
]
