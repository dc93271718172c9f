"""Command line interface for the Crochet Hub storefront state."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

from crochet_hub.cli import services
from crochet_hub.cli.commands import cart, checkout, delivery, discount, orders, reviews, status
from crochet_hub.config import RuntimeSettings, load_runtime_settings
from crochet_hub.errors import StorefrontError
from crochet_hub.logging import configure_logging

logger = logging.getLogger(__name__)

__all__ = ["main"]


def main(argv: Sequence[str] | None = None, *, settings: RuntimeSettings | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else sys.argv[1:])

    try:
        services.SETTINGS = settings or _load_settings()
        configure_logging(settings=services.SETTINGS)
        return args.handler(args)
    except StorefrontError as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _load_settings() -> RuntimeSettings:
    # Preserve host-provided values; only fill gaps from .env
    load_dotenv()
    return load_runtime_settings()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="crochet-hub", description="Crochet Hub storefront state")
    subparsers = parser.add_subparsers(dest="command", required=True)

    status.register(subparsers)
    cart.register(subparsers)
    discount.register(subparsers)
    delivery.register(subparsers)
    checkout.register(subparsers)
    orders.register(subparsers)
    reviews.register(subparsers)

    return parser


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
