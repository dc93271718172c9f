"""Centralized filesystem paths for Crochet Hub runtime artifacts."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "PROJECT_ROOT",
    "VAR_DIR",
    "LOG_DIR",
    "RUNTIME_DATA_DIR",
    "DEFAULT_STORE_PATH",
]


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


PROJECT_ROOT = _project_root()
VAR_DIR = PROJECT_ROOT / "var"
LOG_DIR = VAR_DIR / "logs"
RUNTIME_DATA_DIR = VAR_DIR / "data"
DEFAULT_STORE_PATH = RUNTIME_DATA_DIR / "storefront.json"
