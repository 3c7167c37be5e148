"""Simplified income tax case.

Headline figures for a household known only by one salary and a number of
children, as used by quick-estimate screens. Parts come from
``PartsFromCount``, so alternating custody is not represented.
"""

from __future__ import annotations

from typing import Optional

from ir_engine.application.services.income_tax import compute_ir
from ir_engine.application.services.settings_loader import load_tax_year_settings
from ir_engine.core.numbers import round_half_up
from ir_engine.domain.calculator import PartsFromCount
from ir_engine.domain.models import (
    DeclarantIncome,
    Household,
    IncomeSet,
    IrRequest,
    SimpleCaseResult,
    TaxYearSettings,
)
from ir_engine.domain.models.fiscal_settings import YearKey
from ir_engine.domain.models.household import HouseholdStatus, Location


def compute_ir_simple_case(
    salary_before_10: float,
    status: HouseholdStatus = "single",
    is_isolated: bool = False,
    children_count: int = 0,
    location: Location = "metropole",
    year_key: YearKey = "current",
    settings: Optional[TaxYearSettings] = None,
) -> SimpleCaseResult:
    """Compute the rounded IR of a one-salary household.

    Args:
        salary_before_10: Declarant 1 salary before the 10% deduction
        status: single or couple
        is_isolated: Isolated parent (case T)
        children_count: Children, all assumed in exclusive custody
        location: Residence zone for the DOM abatement
        year_key: Rules of the current or previous year
        settings: Fiscal settings (built-in tables when None)

    Returns:
        SimpleCaseResult with amounts rounded to the euro
    """
    if settings is None:
        settings = load_tax_year_settings()

    children_count = max(0, int(children_count or 0))
    household = Household(status=status, is_isolated=is_isolated, location=location)
    parts = PartsFromCount(children_count).compute(household)

    request = IrRequest(
        household=household,
        incomes=IncomeSet(d1=DeclarantIncome(salaries=salary_before_10)),
        capital_mode="pfu",
        year_key=year_key,
        parts=parts.effective_parts,
        persons_a_charge_count=children_count,
    )
    result = compute_ir(request, settings)

    return SimpleCaseResult(
        ir_total=round_half_up(result.ir_net),
        tmi_rate_display=result.tmi_rate,
        revenus_dans_tmi=round_half_up(result.tmi_base_global),
        marge_avant_changement=(
            None if result.tmi_margin_global is None else round_half_up(result.tmi_margin_global)
        ),
        taxable_income=round_half_up(result.taxable_income),
        parts=result.parts_nb,
        qf_is_capped=result.qf_is_capped,
    )
