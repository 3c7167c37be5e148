"""Contribution différentielle sur les hauts revenus (CDHR).

Top-up tax guaranteeing a minimum effective rate on the reference income
above a threshold, net of the income tax, CEHR and PFU already due:

    termA = minRate * assiette, reduced by a linear phase-in décote up to
            ``decoteMaxAssiette``
    termB = irRetenu + cehr + pfuIr + majorations (couple, dependants)
    cdhr  = max(0, termA - termB)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ir_engine.domain.models.fiscal_settings import CdhrConfig
from ir_engine.domain.models.result import CdhrDetails


@dataclass(frozen=True)
class CdhrResult:
    cdhr: float = 0.0
    details: Optional[CdhrDetails] = None


def normalize_min_rate(raw_rate: float) -> float:
    """Minimum effective rate as a fraction.

    Values above 1 are read as percent, others as a fraction. A configured
    value of exactly 1 is therefore taken as 100%.
    """
    if not raw_rate or raw_rate < 0:
        return 0.0
    return raw_rate / 100.0 if raw_rate > 1 else raw_rate


def compute_cdhr(
    config: CdhrConfig | None,
    assiette: float,
    ir_retenu: float,
    pfu_ir: float,
    cehr: float,
    is_couple: bool,
    persons_a_charge_count: int,
) -> CdhrResult:
    """Calculate the CDHR and its breakdown.

    Args:
        config: CDHR settings of the year (None = rule off)
        assiette: Reference income the minimum rate applies to
        ir_retenu: Household income tax retained in termB
        pfu_ir: Flat tax on capital
        cehr: CEHR already due
        is_couple: Couple thresholds and majoration
        persons_a_charge_count: Dependants for the per-charge majoration

    Returns:
        CdhrResult; ``details`` is None whenever the rule does not apply
        (no config, no rate, assiette at or below the threshold).
    """
    if config is None or assiette <= 0:
        return CdhrResult()

    min_rate = normalize_min_rate(config.min_effective_rate)
    if not min_rate:
        return CdhrResult()

    threshold = config.threshold(is_couple)
    if assiette <= threshold:
        return CdhrResult()

    decote_max_assiette = config.decote_max_assiette(is_couple)
    slope = config.decote_slope_percent / 100.0

    term_a_before = min_rate * assiette
    decote_applied = 0.0
    if assiette <= decote_max_assiette:
        target = slope * max(0.0, assiette - threshold)
        decote_applied = max(0.0, term_a_before - target)
    term_a_after = max(0.0, term_a_before - decote_applied)

    persons = max(0, int(persons_a_charge_count or 0))
    maj_couple = config.majoration_couple if is_couple else 0.0
    maj_charges = persons * config.majoration_per_charge
    majorations = maj_couple + maj_charges

    term_b = ir_retenu + cehr + pfu_ir + majorations
    cdhr = max(0.0, term_a_after - term_b)

    details = CdhrDetails(
        assiette=assiette,
        threshold=threshold,
        min_rate_percent=min_rate * 100,
        decote_max_assiette=decote_max_assiette,
        slope_percent=slope * 100,
        term_a_before_decote=term_a_before,
        decote_applied=decote_applied,
        term_a_after_decote=term_a_after,
        term_b=term_b,
        ir_retenu=ir_retenu,
        cehr=cehr,
        pfu_ir=pfu_ir,
        majorations=majorations,
        maj_couple=maj_couple,
        maj_charges=maj_charges,
        persons_a_charge_count=persons,
    )
    return CdhrResult(cdhr=cdhr, details=details)
