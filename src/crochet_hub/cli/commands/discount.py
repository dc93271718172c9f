"""Discount coupon CLI commands."""

from __future__ import annotations

from argparse import Namespace
from typing import Any

from crochet_hub.cli import services
from crochet_hub.state.discount import QUIZ_ROUNDS
from crochet_hub.state.records import DiscountToken


def register(subparsers: Any) -> None:
    parser = subparsers.add_parser("discount", help="Discount coupon utilities")
    discount_subparsers = parser.add_subparsers(dest="discount_command", required=True)

    set_parser = discount_subparsers.add_parser("set", help="Store a coupon token")
    target = set_parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--token",
        choices=[token.value for token in DiscountToken],
        help="Coupon token to store",
    )
    target.add_argument(
        "--quiz-score",
        type=int,
        help=f"Award the coupon for a quiz score out of {QUIZ_ROUNDS}",
    )
    set_parser.set_defaults(handler=_handle_set)

    show = discount_subparsers.add_parser("show", help="Show the current coupon")
    show.set_defaults(handler=_handle_show)


def _handle_set(args: Namespace) -> int:
    with services.open_state() as state:
        if args.quiz_score is not None:
            token = state.discount.award_for_score(args.quiz_score)
        else:
            token = DiscountToken(args.token)
            state.discount.set(token)
        print(f"Discount coupon: {token.value}")
    return 0


def _handle_show(args: Namespace) -> int:
    with services.open_state() as state:
        print(f"Discount coupon: {state.discount.get().value}")
    return 0
