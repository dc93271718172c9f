"""Order history CLI command."""

from __future__ import annotations

from argparse import Namespace
from typing import Any

from crochet_hub.cli import services


def register(subparsers: Any) -> None:
    parser = subparsers.add_parser("orders", help="Show the order history")
    parser.add_argument("--id", dest="order_id", help="Show a single order")
    parser.set_defaults(handler=_handle_orders)


def _handle_orders(args: Namespace) -> int:
    with services.open_state() as state:
        if args.order_id:
            order = state.history.find(args.order_id)
            if order is None:
                print(f"Order {args.order_id} not found")
                return 1
            services.print_json(order.to_wire())
            return 0
        services.print_json([order.to_wire() for order in state.history.orders()])
    return 0
