"""Tests for the review board."""

from __future__ import annotations

import json

import pytest

from crochet_hub.errors import ValidationError
from crochet_hub.state.records import Review
from crochet_hub.state.reviews import ReviewBoard


class TestReviewBoard:
    def test_submit_appends_and_persists(self, memory_store) -> None:
        board = ReviewBoard(memory_store, [Review(name="Sana", text="Lovely", rating=4)])

        review = board.submit("Hamza", "Great stitching", 5)

        assert review.rating == 5
        assert [r.name for r in board.reviews()] == ["Sana", "Hamza"]
        assert json.loads(memory_store.get("reviews"))[-1] == {
            "name": "Hamza",
            "text": "Great stitching",
            "rating": 5,
        }

    def test_rating_defaults_to_five(self, memory_store) -> None:
        assert ReviewBoard(memory_store).submit("Hamza", "Nice").rating == 5

    @pytest.mark.parametrize(("name", "text"), [("", "Nice"), ("Hamza", "   ")])
    def test_name_and_text_required(self, memory_store, name, text) -> None:
        board = ReviewBoard(memory_store)

        with pytest.raises(ValidationError, match="fill in all fields"):
            board.submit(name, text)

        assert memory_store.get("reviews") is None

    @pytest.mark.parametrize("rating", [0, 6, True])
    def test_rating_out_of_range(self, memory_store, rating) -> None:
        with pytest.raises(ValidationError):
            ReviewBoard(memory_store).submit("Hamza", "Nice", rating)
