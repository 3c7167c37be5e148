"""Professional expenses deductions.

10% flat deduction on salary-type income (per declarant, floor and ceiling
from the year settings) or declared real expenses.
"""

from __future__ import annotations

from ir_engine.core.defaults import ABATTEMENT_10_RATE
from ir_engine.domain.models.fiscal_settings import Abat10Config
from ir_engine.domain.models.request import DeclarantExpenses


def compute_abattement_10(base: float, config: Abat10Config | None) -> float:
    """Calculate the 10% deduction on a declarant's salaries.

    Args:
        base: Salaries + art. 62 remuneration of one declarant in €
        config: Floor/ceiling for the year, None when not configured

    Returns:
        Deduction in € (0 when base <= 0 or no config)
    """
    if config is None or base <= 0:
        return 0.0

    value = base * ABATTEMENT_10_RATE
    if config.plafond > 0:
        value = min(value, config.plafond)
    if config.plancher > 0:
        value = max(value, config.plancher)
    return value


def compute_expense_deduction(expenses: DeclarantExpenses, abattement_10: float) -> float:
    """Deduction retained for one declarant according to the chosen option."""
    if expenses.mode == "reels":
        return max(0.0, expenses.real_expenses)
    if expenses.mode == "abat10":
        return abattement_10
    return 0.0


def compute_extra_deductions(
    is_couple: bool,
    expenses_d1: DeclarantExpenses,
    expenses_d2: DeclarantExpenses,
    abat10_d1: float,
    abat10_d2: float,
) -> float:
    """Total professional expenses deduction of the household (d2 only for a couple)."""
    total = compute_expense_deduction(expenses_d1, abat10_d1)
    if is_couple:
        total += compute_expense_deduction(expenses_d2, abat10_d2)
    return total
