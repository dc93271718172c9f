"""Centralized logging setup for Crochet Hub."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from crochet_hub.config.runtime_settings import RuntimeSettings, load_runtime_settings

JSON_LOGGER_NAME = "crochet_hub.json"
_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: RuntimeSettings | None = None) -> None:
    """Configure console, rotating file and JSON-lines logging.

    - General text log: <log_dir>/crochet_hub.log (INFO+)
    - Critical text log: <log_dir>/critical_events.log (WARNING+)
    - JSON logs (message-only): <log_dir>/crochet_hub.jsonl (DEBUG+)
    - Debug mode via CROCHET_HUB_DEBUG=1

    Safe to call more than once; handlers already attached are not duplicated.
    """

    runtime_settings = settings or load_runtime_settings()
    log_dir = Path(runtime_settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    existing_targets = {
        getattr(handler, "baseFilename", None)
        for handler in root.handlers
        if hasattr(handler, "baseFilename")
    }

    if not any(type(handler) is logging.StreamHandler for handler in root.handlers):
        console = logging.StreamHandler()
        console.setLevel(logging.INFO)
        console.setFormatter(logging.Formatter(_TEXT_FORMAT))
        root.addHandler(console)

    max_bytes = runtime_settings.log_max_bytes
    backups = runtime_settings.log_backup_count

    general_path = str((log_dir / "crochet_hub.log").resolve())
    if general_path not in existing_targets:
        general_handler = logging.handlers.RotatingFileHandler(
            general_path,
            maxBytes=max_bytes,
            backupCount=backups,
        )
        general_handler.setLevel(logging.INFO)
        general_handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
        root.addHandler(general_handler)

    critical_path = str((log_dir / "critical_events.log").resolve())
    if critical_path not in existing_targets:
        critical_handler = logging.handlers.RotatingFileHandler(
            critical_path,
            maxBytes=max_bytes,
            backupCount=backups,
        )
        critical_handler.setLevel(logging.WARNING)
        critical_handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
        root.addHandler(critical_handler)

    json_logger = logging.getLogger(JSON_LOGGER_NAME)
    json_logger.setLevel(logging.DEBUG)
    json_logger.propagate = False

    existing_json_targets = {
        getattr(handler, "baseFilename", None)
        for handler in json_logger.handlers
        if hasattr(handler, "baseFilename")
    }

    json_path = str((log_dir / "crochet_hub.jsonl").resolve())
    if json_path not in existing_json_targets:
        json_handler = logging.handlers.RotatingFileHandler(
            json_path,
            maxBytes=max_bytes,
            backupCount=backups,
        )
        json_handler.setLevel(logging.DEBUG)
        # message is pre-formatted JSON
        json_handler.setFormatter(logging.Formatter("%(message)s"))
        json_logger.addHandler(json_handler)

    if runtime_settings.debug:
        logging.getLogger("crochet_hub").setLevel(logging.DEBUG)
