"""Tests for monotonic id generation."""

from __future__ import annotations

from crochet_hub.state.identifiers import MonotonicIdGenerator


class TestMonotonicIdGenerator:
    def test_ids_follow_the_clock_when_it_advances(self) -> None:
        ticks = iter([1000, 2000, 3000])
        generator = MonotonicIdGenerator(clock=lambda: next(ticks))

        assert [generator.next_id() for _ in range(3)] == [1000, 2000, 3000]

    def test_same_tick_still_yields_distinct_ids(self) -> None:
        """Test rapid calls within one millisecond never collide."""
        generator = MonotonicIdGenerator(clock=lambda: 5000)

        ids = [generator.next_id() for _ in range(100)]

        assert len(set(ids)) == 100
        assert ids == sorted(ids)

    def test_clock_going_backwards_keeps_increasing(self) -> None:
        ticks = iter([9000, 100, 50])
        generator = MonotonicIdGenerator(clock=lambda: next(ticks))

        assert [generator.next_id() for _ in range(3)] == [9000, 9001, 9002]

    def test_observed_ids_raise_the_floor(self) -> None:
        generator = MonotonicIdGenerator(clock=lambda: 10)
        generator.observe(500)
        generator.observe(20)

        assert generator.last == 500
        assert generator.next_id() == 501
