"""Logging utilities for Crochet Hub."""

from __future__ import annotations

from crochet_hub.logging.events import get_event_logger, log_state_event
from crochet_hub.logging.setup import JSON_LOGGER_NAME, configure_logging

__all__ = [
    "JSON_LOGGER_NAME",
    "configure_logging",
    "get_event_logger",
    "log_state_event",
]
