"""Delivery and payment CLI commands."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Any

import yaml

from crochet_hub.cli import services
from crochet_hub.errors import ValidationError
from crochet_hub.state.delivery import describe_address, describe_payment


def register(subparsers: Any) -> None:
    parser = subparsers.add_parser("delivery", help="Delivery details utilities")
    delivery_subparsers = parser.add_subparsers(dest="delivery_command", required=True)

    set_parser = delivery_subparsers.add_parser("set", help="Save delivery details from a file")
    set_parser.add_argument(
        "--file",
        type=Path,
        required=True,
        help="JSON or YAML mapping of delivery form fields",
    )
    set_parser.set_defaults(handler=_handle_set)

    show = delivery_subparsers.add_parser("show", help="Show saved delivery details")
    show.set_defaults(handler=_handle_show)


def _read_form(path: Path) -> dict[str, Any]:
    try:
        # JSON documents are valid YAML
        form = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValidationError(f"Cannot read delivery form {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ValidationError(f"Delivery form {path} is not valid JSON or YAML: {exc}") from exc
    if not isinstance(form, dict):
        raise ValidationError(f"Delivery form {path} must contain a mapping")
    return form


def _handle_set(args: Namespace) -> int:
    form = _read_form(args.file)
    with services.open_state() as state:
        profile = state.delivery.submit(form)
        print("Delivery & Payment details saved successfully!")
        print(describe_payment(profile))
    return 0


def _handle_show(args: Namespace) -> int:
    with services.open_state() as state:
        profile = state.delivery.get()
        if profile is None:
            print("No delivery details saved")
            return 1
        print(describe_address(profile))
        print("Payment Method:")
        print(describe_payment(profile))
    return 0
