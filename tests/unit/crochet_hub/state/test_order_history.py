"""Tests for the append-only order history log."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from crochet_hub.errors import PersistenceError
from crochet_hub.persistence import PersistentStore
from crochet_hub.state.order_history import OrderHistoryLog
from crochet_hub.state.records import CartItem, Order


@pytest.fixture
def make_order(delivery_profile):
    def _make(order_id: str) -> Order:
        return Order(
            order_id=order_id,
            order_date="05 March 2024, 02:30 PM",
            items=(CartItem(id=1, name="Hat", unit_price=900),),
            subtotal=900,
            discount_label="None",
            final_total=900,
            delivery=delivery_profile,
        )

    return _make


class TestOrderHistoryLog:
    def test_append_returns_new_length_and_persists(self, memory_store, make_order) -> None:
        history = OrderHistoryLog(memory_store)

        assert history.append(make_order("ORD-1")) == 1
        assert history.append(make_order("ORD-2")) == 2

        stored = json.loads(memory_store.get("orderHistory"))
        assert [entry["orderId"] for entry in stored] == ["ORD-1", "ORD-2"]

    def test_read_back_decodes_stored_log(self, memory_store, make_order) -> None:
        history = OrderHistoryLog(memory_store)
        history.append(make_order("ORD-1"))

        assert [order.order_id for order in history.read_back()] == ["ORD-1"]

    def test_read_back_none_when_absent_or_invalid(self, memory_store) -> None:
        history = OrderHistoryLog(memory_store)
        assert history.read_back() is None

        memory_store.set("orderHistory", '{"not": "a list"}')
        assert history.read_back() is None

    def test_append_refuses_to_overwrite_unreadable_log(self, memory_store, make_order) -> None:
        """Test a stored log that fails validation is left untouched by an append."""
        good = make_order("ORD-1").to_wire()
        bad = {**make_order("ORD-2").to_wire(), "finalTotal": -5}
        raw = json.dumps([good, bad])
        memory_store.set("orderHistory", raw)
        history = OrderHistoryLog(memory_store)

        with pytest.raises(PersistenceError, match="unreadable"):
            history.append(make_order("ORD-3"))

        assert memory_store.get("orderHistory") == raw
        assert history.count() == 0

    def test_append_leaves_memory_until_confirmed(self, memory_store, make_order) -> None:
        history = OrderHistoryLog(memory_store)

        history.append(make_order("ORD-1"))
        assert history.count() == 0
        assert not history.contains("ORD-1")

        history.confirm(history.read_back())
        assert history.contains("ORD-1")
        assert len(history) == 1

    def test_lookup(self, memory_store, make_order) -> None:
        history = OrderHistoryLog(memory_store, [make_order("ORD-1"), make_order("ORD-2")])

        assert history.count() == 2
        assert len(history) == 2
        assert history.contains("ORD-2")
        assert not history.contains("ORD-3")
        assert history.find("ORD-1").order_id == "ORD-1"
        assert history.find("ORD-9") is None

    def test_failed_append_keeps_memory_unchanged(self, failing_backend, make_order) -> None:
        store = PersistentStore(failing_backend)
        history = OrderHistoryLog(store)
        failing_backend.fail_set.add("orderHistory")

        with pytest.raises(PersistenceError):
            history.append(make_order("ORD-1"))

        assert history.count() == 0

    def test_orders_are_frozen(self, make_order) -> None:
        order = make_order("ORD-1")

        with pytest.raises(PydanticValidationError):
            order.final_total = 0  # type: ignore[misc]
