"""Application settings with environment variable support.

Uses pydantic-settings for typed configuration validation. These are the
engine's *application* settings (logging, defaults, batch sizing); the fiscal
tables themselves are loaded by ``application.services.settings_loader``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON")
    log_file: Optional[str] = Field(default=None, description="Rotating log file (console only when unset)")

    # Request defaults
    default_year_key: Literal["current", "previous"] = Field(
        default="current", description="Year rules used when a request does not say"
    )
    default_capital_mode: Literal["bareme", "pfu"] = Field(
        default="pfu", description="Capital income routing used when a request does not say"
    )

    # Fiscal tables
    tax_settings_file: Optional[str] = Field(
        default=None, description="JSON file with tax/ps settings overriding the built-in tables"
    )

    # Performance
    batch_max_workers: int = Field(default=1, ge=1, le=64, description="Processes used by batch evaluation")

    model_config = {
        "env_prefix": "IRENGINE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
