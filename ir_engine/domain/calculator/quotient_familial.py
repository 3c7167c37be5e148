"""Plafonnement du quotient familial.

The tax advantage brought by parts beyond the household base parts (1 single,
2 couple) is capped per extra half-part, with a specific cap for the first two
parts of an isolated parent (case T).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ir_engine.domain.calculator.progressive import compute_progressive_tax
from ir_engine.domain.models.fiscal_settings import QuotientFamilyConfig, TaxBracket


@dataclass(frozen=True)
class QuotientFamilyResult:
    ir_before_qf_base: float
    qf_advantage: float
    ir_after_qf: float
    qf_is_capped: bool
    max_avantage: float
    base_parts: float
    extra_parts: float

    @property
    def extra_half_parts(self) -> float:
        return self.extra_parts * 2


def compute_max_avantage(
    parts_nb: float,
    extra_parts: float,
    is_couple: bool,
    is_isolated: bool,
    config: QuotientFamilyConfig,
) -> float:
    """Maximum QF advantage allowed for the household.

    General case: ``plafondPartSup`` per extra half-part. An isolated single
    parent gets ``plafondParentIsoléDeuxPremièresParts`` for the first two
    parts instead, when that cap is configured.
    """
    plafond_part_sup = config.plafond_part_sup
    plafond_iso = config.plafond_parent_isole_deux_premieres_parts

    if not is_isolated or is_couple or plafond_iso <= 0:
        return extra_parts * 2 * plafond_part_sup
    if parts_nb <= 2:
        return (parts_nb - 1) * plafond_iso
    return plafond_iso + (parts_nb - 2) * 2 * plafond_part_sup


def compute_quotient_family_capping(
    scale: Sequence[TaxBracket],
    taxable_income: float,
    parts_nb: float,
    is_couple: bool,
    is_isolated: bool,
    config: QuotientFamilyConfig | None,
    ir_sans_plafond: float | None = None,
) -> QuotientFamilyResult:
    """Apply the QF cap to the household tax.

    Args:
        scale: Progressive scale of the year
        taxable_income: Household taxable income in €
        parts_nb: Effective number of parts
        is_couple: Couple household (base parts 2)
        is_isolated: Isolated parent flag (only meaningful for a single)
        config: Cap configuration, None when not configured
        ir_sans_plafond: Uncapped household tax at ``parts_nb``; computed
            from the scale when omitted

    Returns:
        QuotientFamilyResult. Without extra half-parts, taxable income or a
        configured cap, the uncapped tax passes through unchanged.
    """
    base_parts = 2.0 if is_couple else 1.0
    extra_parts = max(0.0, parts_nb - base_parts)

    if ir_sans_plafond is None:
        per_part = taxable_income / parts_nb if parts_nb > 0 else taxable_income
        tax_per_part = compute_progressive_tax(scale, per_part, with_details=False).tax
        ir_sans_plafond = tax_per_part * parts_nb

    if config is None or taxable_income <= 0 or extra_parts <= 0 or config.plafond_part_sup <= 0:
        return QuotientFamilyResult(
            ir_before_qf_base=ir_sans_plafond,
            qf_advantage=0.0,
            ir_after_qf=ir_sans_plafond,
            qf_is_capped=False,
            max_avantage=0.0,
            base_parts=base_parts,
            extra_parts=extra_parts,
        )

    per_part_base = taxable_income / base_parts
    ir_base = compute_progressive_tax(scale, per_part_base, with_details=False).tax * base_parts
    avantage_brut = max(0.0, ir_base - ir_sans_plafond)
    max_avantage = compute_max_avantage(parts_nb, extra_parts, is_couple, is_isolated, config)
    avantage = min(avantage_brut, max_avantage)

    return QuotientFamilyResult(
        ir_before_qf_base=ir_base,
        qf_advantage=avantage,
        ir_after_qf=ir_base - avantage,
        qf_is_capped=avantage_brut > max_avantage,
        max_avantage=max_avantage,
        base_parts=base_parts,
        extra_parts=extra_parts,
    )
