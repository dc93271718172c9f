"""Tests for the persistence status report."""

from __future__ import annotations

import logging

from crochet_hub.state.records import DiscountToken
from crochet_hub.state.status import collect_status, log_status


class TestCollectStatus:
    def test_empty_store(self, memory_store) -> None:
        status = collect_status(memory_store)

        assert status.cart_items == 0
        assert status.orders == 0
        assert status.delivery_saved is False
        assert status.discount is DiscountToken.NONE
        assert status.reviews == 0
        assert status.gallery_images == 0

    def test_counts_stored_sequences(self, memory_store) -> None:
        memory_store.set("cart", "[1, 2, 3]")
        memory_store.set("orderHistory", "[{}]")
        memory_store.set("deliveryData", "{}")
        memory_store.set("discountCoupon", "10% OFF")
        memory_store.set("gallery", '["a", "b"]')

        status = collect_status(memory_store)

        assert status.to_dict() == {
            "cart_items": 3,
            "orders": 1,
            "delivery_saved": True,
            "discount": "10% OFF",
            "reviews": 0,
            "gallery_images": 2,
        }

    def test_corrupt_values_count_as_zero(self, memory_store) -> None:
        memory_store.set("cart", "{broken")
        memory_store.set("orderHistory", '{"a": 1}')
        memory_store.set("discountCoupon", "bogus")

        status = collect_status(memory_store)

        assert status.cart_items == 0
        assert status.orders == 0
        assert status.discount is DiscountToken.NONE

    def test_unreadable_key_counts_as_zero(self, failing_store, failing_backend) -> None:
        failing_backend.set("cart", "[1]")
        failing_backend.fail_get.add("cart")

        assert collect_status(failing_store).cart_items == 0

    def test_log_status_banner(self, memory_store, caplog) -> None:
        memory_store.set("cart", "[1]")

        with caplog.at_level(logging.INFO):
            log_status(collect_status(memory_store))

        assert "PERSISTENCE STATUS" in caplog.text
        assert "Cart items: 1" in caplog.text
        assert "Delivery data saved: No" in caplog.text
