"""Persistence status command."""

from __future__ import annotations

from argparse import Namespace
from typing import Any

from crochet_hub.cli import services
from crochet_hub.state.status import log_status


def register(subparsers: Any) -> None:
    parser = subparsers.add_parser("status", help="Show what the store currently holds")
    parser.set_defaults(handler=_handle_status)


def _handle_status(args: Namespace) -> int:
    container = services.build_container()
    try:
        # recovery first so an interrupted checkout is settled before counting
        state = container.state
        report = container.status()
        log_status(report)
        payload = report.to_dict()
        payload["recovery_issues"] = [
            {"key": issue.key, "reason": issue.reason} for issue in state.recovery.issues
        ]
        services.print_json(payload)
    finally:
        container.close()
    return 0
