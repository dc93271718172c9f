"""Structured JSON event logging for state and checkout transitions."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from crochet_hub.logging.setup import JSON_LOGGER_NAME


def get_event_logger(name: str) -> logging.Logger:
    """Return a child of the JSON logger; its records carry one JSON document each."""
    return logging.getLogger(f"{JSON_LOGGER_NAME}.{name}")


def log_state_event(
    component: str,
    event_type: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit ``{"timestamp", "component", "event_type", ...fields}`` as one JSON line."""
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "component": component,
        "event_type": event_type,
    }
    payload.update(fields)
    get_event_logger(component).log(level, json.dumps(payload, default=str, sort_keys=True))


__all__ = ["get_event_logger", "log_state_event"]
