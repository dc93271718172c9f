"""Tests for startup recovery of persisted state."""

from __future__ import annotations

import json
import logging

from crochet_hub.persistence import PersistentStore
from crochet_hub.state.records import DiscountToken
from crochet_hub.state.recovery_handler import RecoveryOutcome, RecoveryValidator

TRACKED_KEYS = ("cart", "orderHistory", "discountCoupon", "deliveryData", "reviews", "gallery")


class TestRecoveryValidator:
    def test_empty_store_yields_defaults(self, memory_store) -> None:
        state = RecoveryValidator(memory_store).run()

        assert state.cart == []
        assert state.orders == []
        assert state.discount is DiscountToken.NONE
        assert state.delivery is None
        assert state.reviews == []
        assert state.gallery == []
        assert state.pending_checkout is None
        assert state.clean
        assert all(state.outcomes[key] is RecoveryOutcome.ABSENT for key in TRACKED_KEYS)

    def test_valid_values_are_adopted(self, memory_store, delivery_profile, caplog) -> None:
        memory_store.set("cart", '[{"id": 1, "name": "Hat", "price": 900}]')
        memory_store.set("discountCoupon", "10% OFF")
        memory_store.set("deliveryData", json.dumps(delivery_profile.to_wire()))
        memory_store.set("reviews", '[{"name": "Sana", "text": "Lovely", "rating": 4}]')
        memory_store.set("gallery", '["data:image/png;base64,AAA"]')

        with caplog.at_level(logging.INFO):
            state = RecoveryValidator(memory_store).run()

        assert [item.name for item in state.cart] == ["Hat"]
        assert state.discount is DiscountToken.TEN_PERCENT_OFF
        assert state.delivery == delivery_profile
        assert len(state.reviews) == 1
        assert len(state.gallery) == 1
        assert state.outcomes["cart"] is RecoveryOutcome.ADOPTED
        assert "Cart restored: 1 items" in caplog.text
        assert "Delivery data restored for: Ayesha Khan" in caplog.text

    def test_corrupt_cart_defaults_and_is_left_in_place(self, memory_store, caplog) -> None:
        """Test a rejected value is reported but not deleted from the store."""
        memory_store.set("cart", "{not json")

        with caplog.at_level(logging.WARNING):
            state = RecoveryValidator(memory_store).run()

        assert state.cart == []
        assert state.outcomes["cart"] is RecoveryOutcome.REJECTED
        assert [issue.key for issue in state.issues] == ["cart"]
        assert memory_store.get("cart") == "{not json"
        assert "Error restoring cart" in caplog.text

    def test_wrong_shape_values_default(self, memory_store) -> None:
        memory_store.set("cart", '{"id": 1}')
        memory_store.set("orderHistory", '"nope"')
        memory_store.set("deliveryData", "[]")
        memory_store.set("discountCoupon", "FREE STUFF")
        memory_store.set("reviews", '[{"name": "Sana"}]')
        memory_store.set("gallery", '{"a": "b"}')

        state = RecoveryValidator(memory_store).run()

        assert state.cart == []
        assert state.orders == []
        assert state.delivery is None
        assert state.discount is DiscountToken.NONE
        assert state.reviews == []
        assert state.gallery == []
        assert {issue.key for issue in state.issues} == set(TRACKED_KEYS)

    def test_one_corrupt_key_does_not_affect_others(self, memory_store) -> None:
        memory_store.set("cart", "garbage")
        memory_store.set("discountCoupon", "10% OFF")

        state = RecoveryValidator(memory_store).run()

        assert state.discount is DiscountToken.TEN_PERCENT_OFF
        assert len(state.issues) == 1

    def test_unreadable_backend_never_raises(self, failing_backend) -> None:
        failing_backend.fail_get.update(TRACKED_KEYS)

        state = RecoveryValidator(PersistentStore(failing_backend)).run()

        assert state.cart == []
        assert state.outcomes["orderHistory"] is RecoveryOutcome.UNREADABLE
        assert len(state.issues) == len(TRACKED_KEYS)

    def test_pending_checkout_marker_is_recovered(self, memory_store) -> None:
        memory_store.set("pendingCheckout", '{"orderId": "ORD-9", "stage": "appending"}')

        state = RecoveryValidator(memory_store).run()

        assert state.pending_checkout.order_id == "ORD-9"
        assert state.pending_checkout.stage == "appending"
