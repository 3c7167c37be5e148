"""Custom exceptions for ir_engine.

The tax rules themselves never raise: malformed amounts count as zero and
missing configuration means the rule does not apply. These exceptions are
only raised at the boundaries (settings loading, service parameters).
"""

from __future__ import annotations

from typing import Any


class IrEngineError(Exception):
    """Base exception for all ir_engine errors."""
    pass


# --- Data Errors ---

class SettingsLoadError(IrEngineError):
    """Failed to load or parse a fiscal settings document."""
    pass


# --- Parameter Errors ---

class InvalidParameterError(IrEngineError):
    """Invalid parameter value provided."""

    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{param_name}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)
