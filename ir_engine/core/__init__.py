"""Core infrastructure: settings, logging, exceptions and numeric helpers."""

from .exceptions import (
    InvalidParameterError,
    IrEngineError,
    SettingsLoadError,
)
from .logging import configure_logging, get_logger
from .numbers import round_half_up, round_to_quarter, to_number
from .settings import AppSettings, get_settings

__all__ = [
    "AppSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "to_number",
    "round_to_quarter",
    "round_half_up",
    # Exceptions
    "IrEngineError",
    "SettingsLoadError",
    "InvalidParameterError",
]
