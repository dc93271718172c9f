"""Place-order CLI command."""

from __future__ import annotations

from argparse import Namespace
from typing import Any

from crochet_hub.cli import services


def register(subparsers: Any) -> None:
    parser = subparsers.add_parser("checkout", help="Place an order from the current cart")
    parser.set_defaults(handler=_handle_checkout)


def _handle_checkout(args: Namespace) -> int:
    with services.open_state() as state:
        outcome = state.checkout.place_order()
    print(outcome.message)
    if outcome.redirect and not outcome.placed:
        print(f"Next: {outcome.redirect}")
    if outcome.placed and outcome.order is not None:
        services.print_json(outcome.order.to_wire())
    return 0 if outcome.placed else 1
