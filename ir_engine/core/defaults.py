"""Built-in fiscal tables.

Raw settings documents in the shape the settings service stores them
(camelCase keys, ``current``/``previous`` year variants). They are the
fallback when no override document is supplied and are turned into typed,
frozen settings by ``application.services.settings_loader``.

Source: barème 2025 (revenus 2024) and barème 2024 (revenus 2023).
"""

from __future__ import annotations

from typing import Any

# Statutory constants not carried by the settings document
ABATTEMENT_10_RATE = 0.10
DEFAULT_PFU_RATE_IR = 12.8

# CDHR fallbacks (LF 2025, art. 224 CGI)
DEFAULT_CDHR_THRESHOLD_SINGLE = 250_000.0
DEFAULT_CDHR_THRESHOLD_COUPLE = 500_000.0
DEFAULT_CDHR_DECOTE_MAX_ASSIETTE_SINGLE = 330_000.0
DEFAULT_CDHR_DECOTE_MAX_ASSIETTE_COUPLE = 660_000.0
DEFAULT_CDHR_DECOTE_SLOPE_PERCENT = 82.5
DEFAULT_CDHR_MAJORATION_COUPLE = 12_500.0
DEFAULT_CDHR_MAJORATION_PER_CHARGE = 1_500.0

_SCALE_2025: list[dict[str, Any]] = [
    {"from": 0, "to": 11497, "rate": 0},
    {"from": 11498, "to": 29315, "rate": 11},
    {"from": 29316, "to": 83823, "rate": 30},
    {"from": 83824, "to": 180294, "rate": 41},
    {"from": 180295, "to": None, "rate": 45},
]

_SCALE_2024: list[dict[str, Any]] = [
    {"from": 0, "to": 11294, "rate": 0},
    {"from": 11295, "to": 28797, "rate": 11},
    {"from": 28798, "to": 82341, "rate": 30},
    {"from": 82342, "to": 177106, "rate": 41},
    {"from": 177107, "to": None, "rate": 45},
]

_CEHR_TABLES: dict[str, list[dict[str, Any]]] = {
    "single": [
        {"from": 250000, "to": 500000, "rate": 3},
        {"from": 500000, "to": None, "rate": 4},
    ],
    "couple": [
        {"from": 500000, "to": 1000000, "rate": 3},
        {"from": 1000000, "to": None, "rate": 4},
    ],
}

_DECOTE = {
    "triggerSingle": 1964,
    "triggerCouple": 3248,
    "amountSingle": 889,
    "amountCouple": 1470,
    "ratePercent": 45.25,
}

_QUOTIENT_FAMILY = {
    "plafondPartSup": 1791,
    "plafondParentIsoléDeuxPremièresParts": 4224,
}

_DOM_ABATEMENT = {
    "gmr": {"ratePercent": 30, "cap": 2450},
    "guyane": {"ratePercent": 40, "cap": 4050},
}

_PFU = {"rateIR": 12.8, "rateSocial": 17.2, "rateTotal": 30.0}

_CDHR = {"minEffectiveRate": 20, "thresholdSingle": 250000, "thresholdCouple": 500000}

DEFAULT_TAX_SETTINGS: dict[str, Any] = {
    "incomeTax": {
        "currentYearLabel": "2025 (revenus 2024)",
        "previousYearLabel": "2024 (revenus 2023)",
        "scaleCurrent": _SCALE_2025,
        "scalePrevious": _SCALE_2024,
        "quotientFamily": {"current": dict(_QUOTIENT_FAMILY), "previous": dict(_QUOTIENT_FAMILY)},
        "decote": {"current": dict(_DECOTE), "previous": dict(_DECOTE)},
        "abat10": {
            "current": {"plafond": 14426, "plancher": 504},
            "previous": {"plafond": 14171, "plancher": 495},
        },
        "domAbatement": {"current": _DOM_ABATEMENT, "previous": _DOM_ABATEMENT},
    },
    "pfu": {"current": dict(_PFU), "previous": dict(_PFU)},
    "cehr": {"current": _CEHR_TABLES, "previous": _CEHR_TABLES},
    "cdhr": {"current": dict(_CDHR), "previous": dict(_CDHR)},
}

DEFAULT_PS_SETTINGS: dict[str, Any] = {
    "patrimony": {
        "current": {"totalRate": 17.2, "csgDeductibleRate": 6.8},
        "previous": {"totalRate": 17.2, "csgDeductibleRate": 6.8},
    },
}
