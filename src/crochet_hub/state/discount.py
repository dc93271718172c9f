"""Discount coupon earned from the stitch quiz."""

from __future__ import annotations

import logging

from crochet_hub.errors import ValidationError
from crochet_hub.persistence import PersistentStore
from crochet_hub.state.codecs import DISCOUNT_KEY, encode_discount
from crochet_hub.state.records import DiscountToken

logger = logging.getLogger(__name__)

QUIZ_ROUNDS = 5
QUIZ_PASS_MARK = 3


class DiscountState:
    """Current coupon token, persisted as the bare token string."""

    def __init__(self, store: PersistentStore, token: DiscountToken = DiscountToken.NONE) -> None:
        self._store = store
        self._token = token

    def set(self, token: DiscountToken | str) -> None:
        try:
            resolved = DiscountToken(token)
        except ValueError as exc:
            raise ValidationError(f"Unknown discount token {token!r}") from exc
        self._store.set(DISCOUNT_KEY, encode_discount(resolved))
        self._token = resolved
        logger.info("Discount coupon set to %s", resolved.value)

    def get(self) -> DiscountToken:
        return self._token

    def clear(self) -> None:
        self._store.remove(DISCOUNT_KEY)
        self._token = DiscountToken.NONE

    def award_for_score(
        self,
        score: int,
        rounds: int = QUIZ_ROUNDS,
        pass_mark: int = QUIZ_PASS_MARK,
    ) -> DiscountToken:
        """Record the coupon for a finished quiz. A failing score writes ``none``."""
        if rounds <= 0 or not 0 < pass_mark <= rounds:
            raise ValidationError(f"Invalid quiz setup: pass mark {pass_mark} of {rounds} rounds")
        if isinstance(score, bool) or not isinstance(score, int) or not 0 <= score <= rounds:
            raise ValidationError(f"Quiz score must be between 0 and {rounds}, got {score!r}")

        token = DiscountToken.TEN_PERCENT_OFF if score >= pass_mark else DiscountToken.NONE
        self.set(token)
        logger.info("Quiz finished with %d/%d, coupon %s", score, rounds, token.value)
        return token


__all__ = ["QUIZ_PASS_MARK", "QUIZ_ROUNDS", "DiscountState"]
