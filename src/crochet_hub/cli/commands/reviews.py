"""Review CLI commands."""

from __future__ import annotations

from argparse import Namespace
from typing import Any

from crochet_hub.cli import services
from crochet_hub.state.reviews import MAX_RATING


def register(subparsers: Any) -> None:
    parser = subparsers.add_parser("review", help="Customer reviews")
    review_subparsers = parser.add_subparsers(dest="review_command", required=True)

    add = review_subparsers.add_parser("add", help="Submit a review")
    add.add_argument("--name", required=True)
    add.add_argument("--text", required=True)
    add.add_argument("--rating", type=int, default=MAX_RATING)
    add.set_defaults(handler=_handle_add)

    listing = review_subparsers.add_parser("list", help="List reviews")
    listing.set_defaults(handler=_handle_list)


def _handle_add(args: Namespace) -> int:
    with services.open_state() as state:
        state.reviews.submit(args.name, args.text, args.rating)
    print("Review submitted successfully!")
    return 0


def _handle_list(args: Namespace) -> int:
    with services.open_state() as state:
        services.print_json([review.to_wire() for review in state.reviews.reviews()])
    return 0
