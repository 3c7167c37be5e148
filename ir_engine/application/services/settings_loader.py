"""Fiscal settings loading.

Turns the raw settings documents (tax and social contributions, camelCase,
``current``/``previous`` variants nested per section) into the frozen
``TaxYearSettings`` the engine consumes. Every fallback is resolved here, once;
unusable sections are dropped, which switches the matching rule off.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from ir_engine.core.defaults import DEFAULT_PS_SETTINGS, DEFAULT_TAX_SETTINGS
from ir_engine.core.exceptions import SettingsLoadError
from ir_engine.core.logging import get_logger
from ir_engine.core.settings import get_settings
from ir_engine.domain.models.fiscal_settings import (
    FiscalYearRules,
    TaxYearSettings,
    YearKey,
    is_well_formed_scale,
)

log = get_logger(__name__)

YEAR_KEYS: tuple[YearKey, ...] = ("current", "previous")


def _section(document: Any, key: str) -> Mapping[str, Any]:
    value = document.get(key) if isinstance(document, Mapping) else None
    return value if isinstance(value, Mapping) else {}


def _for_year(section: Any, year_key: YearKey) -> Optional[Mapping[str, Any]]:
    """Year variant of a section, None when absent or not a table."""
    if not isinstance(section, Mapping):
        return None
    value = section.get(year_key)
    return value if isinstance(value, Mapping) else None


def _brackets(raw: Any) -> list[Mapping[str, Any]]:
    if not isinstance(raw, (list, tuple)):
        return []
    return [br for br in raw if isinstance(br, Mapping)]


def _cehr_tables(raw: Optional[Mapping[str, Any]]) -> Optional[dict[str, Any]]:
    if raw is None:
        return None
    return {"single": _brackets(raw.get("single")), "couple": _brackets(raw.get("couple"))}


def _dom_zones(raw: Optional[Mapping[str, Any]]) -> Optional[dict[str, Any]]:
    if raw is None:
        return None
    return {zone: raw.get(zone) for zone in ("gmr", "guyane") if isinstance(raw.get(zone), Mapping)}


def build_year_rules(
    tax_settings: Mapping[str, Any],
    ps_settings: Optional[Mapping[str, Any]],
    year_key: YearKey,
) -> FiscalYearRules:
    """Extract the rules of one year from the raw documents."""
    income_tax = _section(tax_settings, "incomeTax")
    is_current = year_key == "current"

    raw = {
        "label": income_tax.get("currentYearLabel" if is_current else "previousYearLabel"),
        "scale": _brackets(income_tax.get("scaleCurrent" if is_current else "scalePrevious")),
        "decote": _for_year(income_tax.get("decote"), year_key),
        "quotientFamily": _for_year(income_tax.get("quotientFamily"), year_key),
        "abat10": _for_year(income_tax.get("abat10"), year_key),
        "domAbatement": _dom_zones(_for_year(income_tax.get("domAbatement"), year_key)),
        "pfu": _for_year(_section(tax_settings, "pfu"), year_key),
        "cehr": _cehr_tables(_for_year(_section(tax_settings, "cehr"), year_key)),
        "cdhr": _for_year(_section(tax_settings, "cdhr"), year_key),
        "patrimony": _for_year(_section(ps_settings, "patrimony"), year_key),
    }
    rules = FiscalYearRules.model_validate(raw)

    if not is_well_formed_scale(rules.scale):
        log.warning("malformed_tax_scale", year_key=year_key, brackets=len(rules.scale))
    return rules


def load_tax_year_settings(
    tax_settings: Optional[Mapping[str, Any]] = None,
    ps_settings: Optional[Mapping[str, Any]] = None,
) -> TaxYearSettings:
    """Build the engine settings from raw documents.

    Args:
        tax_settings: Income tax document; the built-in tables when None
        ps_settings: Social contributions document; the built-in tables when None

    Returns:
        Frozen TaxYearSettings for the current and previous years
    """
    if tax_settings is None:
        tax_settings = DEFAULT_TAX_SETTINGS
    if ps_settings is None:
        ps_settings = DEFAULT_PS_SETTINGS

    settings = TaxYearSettings(
        current=build_year_rules(tax_settings, ps_settings, "current"),
        previous=build_year_rules(tax_settings, ps_settings, "previous"),
    )
    log.info(
        "tax_settings_loaded",
        current=settings.current.label,
        previous=settings.previous.label,
    )
    return settings


def load_tax_year_settings_file(path: str | Path) -> TaxYearSettings:
    """Load settings from a JSON file holding ``{"tax": {...}, "ps": {...}}``.

    A missing ``ps`` key falls back to the built-in social contribution rates.

    Raises:
        SettingsLoadError: File missing, unreadable or not a JSON object
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            document = json.load(f)
    except FileNotFoundError as e:
        raise SettingsLoadError(f"Settings file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsLoadError(f"Cannot read settings file {path}: {e}") from e

    if not isinstance(document, Mapping) or not isinstance(document.get("tax"), Mapping):
        raise SettingsLoadError(f"Settings file {path} must hold a 'tax' object")

    log.info("tax_settings_file_read", path=str(path))
    return load_tax_year_settings(document["tax"], document.get("ps"))


def load_configured_tax_year_settings() -> TaxYearSettings:
    """Settings from ``IRENGINE_TAX_SETTINGS_FILE`` when set, built-in tables otherwise."""
    settings_file = get_settings().tax_settings_file
    if settings_file:
        return load_tax_year_settings_file(settings_file)
    return load_tax_year_settings()
