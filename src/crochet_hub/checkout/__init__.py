"""Order placement: pricing, coordination and the pending-checkout journal."""

from crochet_hub.checkout.coordinator import (
    CheckoutCoordinator,
    CheckoutOutcome,
    CheckoutStatus,
    confirmation_message,
)
from crochet_hub.checkout.journal import CheckoutJournal, JournalResolution
from crochet_hub.checkout.pricing import Quote, price_order, round2

__all__ = [
    "CheckoutCoordinator",
    "CheckoutJournal",
    "CheckoutOutcome",
    "CheckoutStatus",
    "JournalResolution",
    "Quote",
    "confirmation_message",
    "price_order",
    "round2",
]
