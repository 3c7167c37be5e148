"""Declared income models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ir_engine.core.numbers import Amount


class DeclarantIncome(BaseModel):
    """Yearly amounts declared by one person of the household (€)."""

    model_config = ConfigDict(frozen=True)

    salaries: Amount = Field(default=0.0, description="Salaries and wages")
    associes62: Amount = Field(default=0.0, description="Art. 62 manager/partner remuneration")
    pensions: Amount = Field(default=0.0, description="Pensions and annuities")
    bic: Amount = Field(default=0.0, description="BIC/BNC professional profits")
    fonciers: Amount = Field(default=0.0, description="Net property income")
    autres: Amount = Field(default=0.0, description="Other taxable income")

    @computed_field
    @property
    def salary_base(self) -> float:
        """Base of the 10% deduction: salaries + art. 62 remuneration."""
        return self.salaries + self.associes62

    @computed_field
    @property
    def total_bareme(self) -> float:
        """Income taxed through the scale, property income excluded."""
        return self.salaries + self.associes62 + self.pensions + self.bic + self.autres


class CapitalIncome(BaseModel):
    """Household capital income (dividends, interest...)."""

    model_config = ConfigDict(frozen=True)

    with_ps: Amount = Field(default=0.0, description="Amounts still subject to social contributions")
    without_ps: Amount = Field(default=0.0, description="Amounts already levied at source")

    @computed_field
    @property
    def total(self) -> float:
        return self.with_ps + self.without_ps


class IncomeSet(BaseModel):
    """Every declared amount of the household for the tax year."""

    model_config = ConfigDict(frozen=True)

    d1: DeclarantIncome = Field(default_factory=DeclarantIncome)
    d2: DeclarantIncome = Field(default_factory=DeclarantIncome)
    capital: CapitalIncome = Field(default_factory=CapitalIncome)
    fonciers_foyer: Amount = Field(default=0.0, description="Household net property income")

    def declarants(self, is_couple: bool) -> tuple[DeclarantIncome, ...]:
        """Declarants whose income counts: d2 only for a couple."""
        return (self.d1, self.d2) if is_couple else (self.d1,)

    def property_income(self, is_couple: bool) -> float:
        return self.fonciers_foyer + sum(d.fonciers for d in self.declarants(is_couple))
