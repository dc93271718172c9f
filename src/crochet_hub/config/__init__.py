"""Configuration for the Crochet Hub runtime."""

from crochet_hub.config.path_registry import (
    DEFAULT_STORE_PATH,
    LOG_DIR,
    RUNTIME_DATA_DIR,
    VAR_DIR,
)
from crochet_hub.config.runtime_settings import RuntimeSettings, load_runtime_settings
from crochet_hub.config.schemas import StorefrontSettingsSchema

__all__ = [
    "DEFAULT_STORE_PATH",
    "LOG_DIR",
    "RUNTIME_DATA_DIR",
    "VAR_DIR",
    "RuntimeSettings",
    "load_runtime_settings",
    "StorefrontSettingsSchema",
]
