"""Storefront entities, their persisted records and startup recovery."""

from crochet_hub.state.cart import CartLedger
from crochet_hub.state.delivery import (
    DeliveryProfileState,
    build_delivery_profile,
    describe_address,
    describe_payment,
)
from crochet_hub.state.discount import DiscountState
from crochet_hub.state.identifiers import MonotonicIdGenerator
from crochet_hub.state.order_history import OrderHistoryLog
from crochet_hub.state.records import (
    CartItem,
    DeliveryProfile,
    DiscountToken,
    Order,
    PaymentMethod,
    PendingCheckout,
    Review,
)
from crochet_hub.state.recovery_handler import (
    RecoveredState,
    RecoveryIssue,
    RecoveryOutcome,
    RecoveryValidator,
)
from crochet_hub.state.reviews import ReviewBoard
from crochet_hub.state.status import PersistenceStatus, collect_status, log_status

__all__ = [
    "CartItem",
    "CartLedger",
    "DeliveryProfile",
    "DeliveryProfileState",
    "DiscountState",
    "DiscountToken",
    "MonotonicIdGenerator",
    "Order",
    "OrderHistoryLog",
    "PaymentMethod",
    "PendingCheckout",
    "PersistenceStatus",
    "RecoveredState",
    "RecoveryIssue",
    "RecoveryOutcome",
    "RecoveryValidator",
    "Review",
    "ReviewBoard",
    "build_delivery_profile",
    "collect_status",
    "describe_address",
    "describe_payment",
    "log_status",
]
