"""Runtime settings sourced from the environment and an optional YAML file."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from crochet_hub.config.path_registry import DEFAULT_STORE_PATH, LOG_DIR
from crochet_hub.config.schemas import StorefrontSettingsSchema
from crochet_hub.errors import ConfigError

logger = logging.getLogger(__name__)

# environment variable -> settings field
_ENV_FIELDS: dict[str, str] = {
    "CROCHET_HUB_STORE_PATH": "store_path",
    "CROCHET_HUB_LOG_DIR": "log_dir",
    "CROCHET_HUB_ORDER_PREFIX": "order_id_prefix",
    "CROCHET_HUB_DATE_FORMAT": "order_date_format",
    "CROCHET_HUB_TRACKED_KEYS": "tracked_key_fragments",
}


_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})


def _normalize_bool(value: str | None, *, field_name: str) -> bool | None:
    """Interpret a debug-style flag; unset, blank and unrecognised values yield ``None``."""
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in _TRUE_TOKENS:
        return True
    if lowered in _FALSE_TOKENS:
        return False
    if lowered:
        logger.warning(
            "Invalid %s=%s; ignoring override",
            field_name,
            value,
            extra={"operation": "runtime_setting_parse", "status": "invalid"},
        )
    return None


def _safe_int(value: str | None, *, fallback: int, field_name: str) -> int:
    if value is None or not value.strip():
        return fallback
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid %s=%s; defaulting to %s",
            field_name,
            value,
            fallback,
            extra={"operation": "runtime_setting_parse", "status": "fallback"},
        )
        return fallback
    return parsed


def _load_settings_file(path: Path) -> dict[str, Any]:
    """Load a YAML settings document into a dictionary."""

    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Settings file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Settings file {path} is not valid YAML: {exc}") from exc
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return document


@dataclass
class RuntimeSettings:
    """Normalized snapshot of the settings the storefront runtime depends on."""

    store_path: Path = DEFAULT_STORE_PATH
    log_dir: Path = LOG_DIR
    debug: bool = False
    order_id_prefix: str = "ORD-"
    order_date_format: str = "%d %B %Y, %I:%M %p"
    tracked_key_fragments: tuple[str, ...] = ("cart", "order", "delivery", "discount")
    log_max_bytes: int = 10 * 1024 * 1024
    log_backup_count: int = 5
    config_path: Path | None = None


def load_runtime_settings(env: Mapping[str, str] | None = None) -> RuntimeSettings:
    """Capture storefront settings, environment values winning over the YAML file."""

    env_map = dict(env if env is not None else os.environ)

    config_raw = env_map.get("CROCHET_HUB_CONFIG")
    config_path = Path(config_raw) if config_raw and config_raw.strip() else None
    payload: dict[str, Any] = _load_settings_file(config_path) if config_path else {}

    for env_name, field_name in _ENV_FIELDS.items():
        raw = env_map.get(env_name)
        if raw is not None and raw.strip():
            payload[field_name] = raw.strip()

    debug = _normalize_bool(env_map.get("CROCHET_HUB_DEBUG"), field_name="CROCHET_HUB_DEBUG")
    if debug is not None:
        payload["debug"] = debug

    defaults = StorefrontSettingsSchema()
    payload["log_max_bytes"] = _safe_int(
        env_map.get("CROCHET_HUB_LOG_MAX_BYTES"),
        fallback=int(payload.get("log_max_bytes", defaults.log_max_bytes)),
        field_name="CROCHET_HUB_LOG_MAX_BYTES",
    )
    payload["log_backup_count"] = _safe_int(
        env_map.get("CROCHET_HUB_LOG_BACKUP_COUNT"),
        fallback=int(payload.get("log_backup_count", defaults.log_backup_count)),
        field_name="CROCHET_HUB_LOG_BACKUP_COUNT",
    )

    try:
        schema = StorefrontSettingsSchema(**payload)
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid storefront settings: {exc}") from exc

    return RuntimeSettings(
        store_path=schema.store_path or DEFAULT_STORE_PATH,
        log_dir=schema.log_dir or LOG_DIR,
        debug=schema.debug,
        order_id_prefix=schema.order_id_prefix,
        order_date_format=schema.order_date_format,
        tracked_key_fragments=schema.tracked_key_fragments,
        log_max_bytes=schema.log_max_bytes,
        log_backup_count=schema.log_backup_count,
        config_path=config_path,
    )


__all__ = ["RuntimeSettings", "load_runtime_settings"]
