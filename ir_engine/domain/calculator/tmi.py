"""Marginal tax rate (TMI) metrics of a household.

The displayed TMI is read from the discrete derivative of the capped household
tax (``ir(R + 1) - ir(R)``), snapped to the nearest scale rate. Once the QF cap
applies, the household pays at the rate of its base parts, not at the rate of
its per-part bracket.

From that rate the module derives:

- the household income at which the current rate starts (lower threshold)
  and the amount already taxed at it,
- the distance to the next change of rate, which is either the next scale
  bound or the income at which the QF cap kicks in, whichever comes first.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import ceil, floor
from typing import Optional, Sequence

from ir_engine.core.numbers import round_half_up
from ir_engine.domain.calculator.quotient_familial import (
    QuotientFamilyResult,
    compute_quotient_family_capping,
)
from ir_engine.domain.models.fiscal_settings import QuotientFamilyConfig, TaxBracket

# Threshold scans walk the income in 1 000 € steps before bisecting
SCAN_STEP = 1_000
SCAN_MAX_STEPS = 500

# QF cap activation search: doubling window, then bisection
CAP_SEARCH_START = 50_000
CAP_SEARCH_LIMIT = 2_000_000
CAP_BISECTIONS = 40


@dataclass(frozen=True)
class TmiMetrics:
    tmi_rate: float = 0.0
    revenus_dans_tmi: int = 0
    marge_avant_changement: Optional[int] = None
    seuil_bas_foyer: int = 0
    seuil_haut_foyer: Optional[int] = None


class HouseholdTaxCurve:
    """Capped household tax as a function of the household taxable income.

    Parts and QF parameters are fixed; only the income varies. Marginal
    rates are memoized per whole euro.
    """

    def __init__(
        self,
        scale: Sequence[TaxBracket],
        parts_nb: float,
        is_couple: bool,
        is_isolated: bool,
        qf_config: QuotientFamilyConfig | None,
    ):
        self.scale = scale
        self.parts_nb = parts_nb
        self.is_couple = is_couple
        self.is_isolated = is_isolated
        self.qf_config = qf_config
        self.scale_rates = sorted({br.rate for br in scale})
        self._rates: dict[int, float] = {}

    @property
    def base_parts(self) -> float:
        return 2.0 if self.is_couple else 1.0

    def capped(self, income: float) -> QuotientFamilyResult:
        return compute_quotient_family_capping(
            self.scale,
            max(0.0, income),
            self.parts_nb,
            self.is_couple,
            self.is_isolated,
            self.qf_config,
        )

    def tax(self, income: float) -> float:
        if income <= 0:
            return 0.0
        return max(0.0, self.capped(income).ir_after_qf)

    def is_capped(self, income: float) -> bool:
        return income > 0 and self.capped(income).qf_is_capped

    def marginal_rate(self, income: float) -> float:
        """Rate paid on the next euro, snapped to the closest scale rate (lower on ties)."""
        key = max(0, floor(income))
        if key in self._rates:
            return self._rates[key]

        raw = (self.tax(key + 1) - self.tax(key)) * 100
        rate = min(self.scale_rates, key=lambda r: abs(r - raw)) if self.scale_rates else raw
        self._rates[key] = rate
        return rate


def find_lower_threshold(curve: HouseholdTaxCurve, income: int, rate: float) -> int:
    """First household income taxed at ``rate`` below ``income``."""
    if rate <= 0:
        return 0

    hi = income
    lo = max(0, hi - SCAN_STEP)
    while lo > 0 and curve.marginal_rate(lo) == rate:
        hi = lo
        lo = max(0, lo - SCAN_STEP)

    if lo == 0 and curve.marginal_rate(lo) == rate:
        return 0

    while lo + 1 < hi:
        mid = (lo + hi) // 2
        if curve.marginal_rate(mid) == rate:
            hi = mid
        else:
            lo = mid
    return hi


def find_upper_threshold(curve: HouseholdTaxCurve, income: int, rate: float) -> int | None:
    """First household income above ``income`` taxed at another rate (None if out of reach)."""
    lo = income
    hi = lo + SCAN_STEP
    steps = 0
    while steps < SCAN_MAX_STEPS and curve.marginal_rate(hi) == rate:
        lo = hi
        hi += SCAN_STEP
        steps += 1
    if steps >= SCAN_MAX_STEPS:
        return None

    while lo + 1 < hi:
        mid = (lo + hi) // 2
        if curve.marginal_rate(mid) != rate:
            hi = mid
        else:
            lo = mid
    return hi


def find_delta_to_qf_cap(curve: HouseholdTaxCurve, income: float) -> int | None:
    """Extra income after which the QF cap applies (0 if already capped, None if never)."""
    if curve.is_capped(income):
        return 0

    lo, hi = 0.0, float(CAP_SEARCH_START)
    while hi < CAP_SEARCH_LIMIT and not curve.is_capped(income + hi):
        hi *= 2
    if hi >= CAP_SEARCH_LIMIT and not curve.is_capped(income + hi):
        return None

    for _ in range(CAP_BISECTIONS):
        mid = (lo + hi) / 2
        if curve.is_capped(income + mid):
            hi = mid
        else:
            lo = mid
    return ceil(hi)


def compute_tmi_metrics(taxable_income: float, curve: HouseholdTaxCurve) -> TmiMetrics:
    """Compute TMI, income already in the TMI and margin before the next change.

    Args:
        taxable_income: Household taxable income in €
        curve: Capped tax curve of the household

    Returns:
        TmiMetrics (all zero when there is no taxable income). The margin is
        None when no higher rate can be reached.
    """
    if taxable_income <= 0:
        return TmiMetrics()

    income = max(0, floor(taxable_income))
    tmi_rate = curve.marginal_rate(income)

    seuil_bas = find_lower_threshold(curve, income, tmi_rate)
    seuil_haut = find_upper_threshold(curve, income, tmi_rate)

    in_tmi = max(0, income - seuil_bas)
    if seuil_haut is not None:
        in_tmi = min(in_tmi, max(0, seuil_haut - seuil_bas))

    # Distance to the next scale bound, at the parts actually driving the tax
    capped_now = curve.is_capped(income)
    parts = curve.base_parts if capped_now else curve.parts_nb
    per_part = income / parts if parts > 0 else income

    margin: float | None = None
    for bracket in curve.scale:
        if per_part > bracket.from_ and (bracket.to is None or per_part <= bracket.to):
            if bracket.to is not None:
                margin = max(0.0, bracket.to - per_part) * parts
            break

    if not capped_now:
        delta = find_delta_to_qf_cap(curve, income)
        if delta is not None:
            margin = delta if margin is None else min(margin, delta)

    return TmiMetrics(
        tmi_rate=tmi_rate,
        revenus_dans_tmi=round_half_up(in_tmi),
        marge_avant_changement=None if margin is None else round_half_up(margin),
        seuil_bas_foyer=seuil_bas,
        seuil_haut_foyer=seuil_haut,
    )
