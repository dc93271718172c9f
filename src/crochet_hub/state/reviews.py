"""Customer reviews board."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import ValidationError as PydanticValidationError

from crochet_hub.errors import ValidationError
from crochet_hub.persistence import PersistentStore
from crochet_hub.state.codecs import REVIEWS_KEY, encode_reviews
from crochet_hub.state.records import Review

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class ReviewBoard:
    def __init__(self, store: PersistentStore, reviews: Iterable[Review] = ()) -> None:
        self._store = store
        self._reviews: list[Review] = list(reviews)

    def submit(self, name: str, text: str, rating: int = MAX_RATING) -> Review:
        if not (isinstance(name, str) and name.strip() and isinstance(text, str) and text.strip()):
            raise ValidationError("Please fill in all fields")
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise ValidationError(f"Rating must be a whole number, got {rating!r}")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")
        try:
            review = Review(name=name, text=text, rating=rating)
        except PydanticValidationError as exc:
            raise ValidationError(str(exc)) from exc

        updated = [*self._reviews, review]
        self._store.set(REVIEWS_KEY, encode_reviews(updated))
        self._reviews = updated
        logger.info("Review submitted by %s (%d stars)", review.name, review.rating)
        return review

    def reviews(self) -> list[Review]:
        return list(self._reviews)

    def __len__(self) -> int:
        return len(self._reviews)


__all__ = ["MAX_RATING", "MIN_RATING", "ReviewBoard"]
