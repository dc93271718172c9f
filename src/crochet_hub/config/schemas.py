"""Pydantic schema for storefront settings validation."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError


class StorefrontSettingsSchema(BaseModel):
    """Validated view of the settings sourced from YAML and the environment."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    store_path: Path | None = None
    log_dir: Path | None = None
    debug: bool = False
    order_id_prefix: str = Field(default="ORD-", min_length=1, max_length=16)
    order_date_format: str = "%d %B %Y, %I:%M %p"
    tracked_key_fragments: tuple[str, ...] = ("cart", "order", "delivery", "discount")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    log_backup_count: int = Field(default=5, ge=0)

    @field_validator("order_date_format")
    @classmethod
    def validate_order_date_format(cls, v: Any) -> str:
        """Reject formats that do not render a timestamp."""
        value = str(v)
        try:
            rendered = datetime(2000, 1, 2, 3, 4).strftime(value)
        except ValueError as e:
            raise PydanticCustomError(
                "order_date_format_invalid",
                "order_date_format is not a valid strftime pattern: {error}",
                {"error": str(e)},
            ) from e
        if rendered == value:
            raise PydanticCustomError(
                "order_date_format_static",
                "order_date_format must contain at least one directive, got {value}",
                {"value": value},
            )
        return value

    @field_validator("tracked_key_fragments", mode="before")
    @classmethod
    def validate_tracked_key_fragments(cls, v: Any) -> tuple[str, ...]:
        """Accept a comma separated string or a sequence of fragments."""
        if isinstance(v, str):
            items = [part.strip() for part in v.split(",")]
        elif isinstance(v, (list, tuple, set, frozenset)):
            items = [str(part).strip() for part in v]
        else:
            raise PydanticCustomError(
                "tracked_key_fragments_invalid",
                "tracked_key_fragments must be a list or comma separated string, got {value}",
                {"value": repr(v)},
            )
        fragments = tuple(item for item in items if item)
        if not fragments:
            raise PydanticCustomError(
                "tracked_key_fragments_empty",
                "tracked_key_fragments must name at least one fragment",
            )
        return fragments


__all__ = ["StorefrontSettingsSchema"]
