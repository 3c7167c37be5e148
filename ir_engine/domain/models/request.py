"""Computation request model."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ir_engine.core.numbers import Amount, to_number
from ir_engine.core.settings import get_settings
from ir_engine.domain.models.fiscal_settings import YearKey
from ir_engine.domain.models.household import Child, Household
from ir_engine.domain.models.income import IncomeSet

CapitalMode = Literal["bareme", "pfu"]
ExpenseMode = Literal["abat10", "reels", "none"]


class DeclarantExpenses(BaseModel):
    """Professional expenses option of one declarant."""

    model_config = ConfigDict(frozen=True)

    mode: ExpenseMode = Field(default="abat10", description="10% deduction, real expenses or nothing")
    real_expenses: Amount = Field(default=0.0, description="Declared real expenses (mode 'reels')")


class IrRequest(BaseModel):
    """Everything needed for one IR computation, besides the fiscal settings."""

    model_config = ConfigDict(frozen=True)

    household: Household = Field(default_factory=Household)
    children: tuple[Child, ...] = Field(default=(), description="Ordered children list")
    incomes: IncomeSet = Field(default_factory=IncomeSet)

    capital_mode: CapitalMode = Field(default_factory=lambda: get_settings().default_capital_mode)
    year_key: YearKey = Field(default_factory=lambda: get_settings().default_year_key)

    # Parts: explicit value wins, otherwise derived from children
    parts: Optional[float] = Field(default=None, description="Explicit number of parts")
    manual_parts: Amount = Field(default=0.0, description="Quarter-part adjustment added to computed parts")
    persons_a_charge_count: Optional[int] = Field(
        default=None, description="Dependants for CDHR majorations (defaults to children count)"
    )

    # Deductions and credits
    expenses_d1: DeclarantExpenses = Field(default_factory=DeclarantExpenses)
    expenses_d2: DeclarantExpenses = Field(default_factory=DeclarantExpenses)
    deductions: Amount = Field(default=0.0, description="Other deductible charges")
    credits: Amount = Field(default=0.0, description="Tax credits and reductions")

    @field_validator("parts", mode="before")
    @classmethod
    def coerce_parts(cls, v):
        """Missing or zero parts mean "derive from children"."""
        number = to_number(v)
        return number if number > 0 else None

    @field_validator("persons_a_charge_count", mode="before")
    @classmethod
    def coerce_persons(cls, v):
        if v is None:
            return None
        return max(0, int(to_number(v)))
