"""Cart CLI commands."""

from __future__ import annotations

from argparse import Namespace
from typing import Any

from crochet_hub.cli import services


def register(subparsers: Any) -> None:
    parser = subparsers.add_parser("cart", help="Cart utilities")
    cart_subparsers = parser.add_subparsers(dest="cart_command", required=True)

    listing = cart_subparsers.add_parser("list", help="List cart items and the total")
    listing.set_defaults(handler=_handle_list)

    add = cart_subparsers.add_parser("add", help="Add an item to the cart")
    add.add_argument("name", help="Product name")
    add.add_argument("price", type=float, help="Unit price in rupees")
    add.set_defaults(handler=_handle_add)

    remove = cart_subparsers.add_parser("remove", help="Remove an item by id")
    remove.add_argument("item_id", type=int, help="Cart item id")
    remove.set_defaults(handler=_handle_remove)


def _handle_list(args: Namespace) -> int:
    with services.open_state() as state:
        services.print_json(
            {
                "items": [item.to_wire() for item in state.cart.items()],
                "count": state.cart.count(),
                "total": state.cart.total(),
            }
        )
    return 0


def _handle_add(args: Namespace) -> int:
    with services.open_state() as state:
        item = state.cart.add(args.name, args.price)
        services.print_json(item.to_wire())
    return 0


def _handle_remove(args: Namespace) -> int:
    with services.open_state() as state:
        if not state.cart.remove(args.item_id):
            print(f"No cart item with id {args.item_id}")
            return 1
        print(f"Removed item {args.item_id}; {state.cart.count()} item(s) left")
    return 0
