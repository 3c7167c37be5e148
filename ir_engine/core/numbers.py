"""Numeric coercion helpers.

Every amount or rate entering the engine goes through ``to_number``: absent,
non-numeric or non-finite values fall back to a default instead of raising.
"""

from __future__ import annotations

from math import floor, isfinite
from typing import Annotated, Any

from pydantic import BeforeValidator

_STRIP_SEPARATORS = str.maketrans("", "", " \u00a0\u202f")


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce a raw value to float, falling back to ``default``.

    Accepts ints, floats and numeric strings (French decimal comma and
    thousands spaces tolerated). Booleans are not amounts.

    Examples:
        >>> to_number("12 500,5")
        12500.5
        >>> to_number(None, 12.8)
        12.8
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip().translate(_STRIP_SEPARATORS).replace(",", ".")
        if not cleaned:
            return default
        try:
            number = float(cleaned)
        except ValueError:
            return default
    else:
        return default
    return number if isfinite(number) else default


def round_to_quarter(value: float) -> float:
    """Round to the nearest 0.25 (half-up, like the parts declaration)."""
    return floor(value * 4 + 0.5) / 4


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounded up."""
    return int(floor(value + 0.5))


# Pydantic field types: coerce before validation so models never reject amounts
Amount = Annotated[float, BeforeValidator(to_number)]
