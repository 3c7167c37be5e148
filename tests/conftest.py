"""Pytest fixtures for ir_engine tests."""

import os
import sys

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ir_engine.application.services.settings_loader import load_tax_year_settings
from ir_engine.domain.models import (
    DeclarantExpenses,
    DeclarantIncome,
    Household,
    IncomeSet,
    IrRequest,
)


@pytest.fixture(scope="session")
def tax_settings():
    """Built-in fiscal settings (barème 2025 current, 2024 previous)."""
    return load_tax_year_settings()


@pytest.fixture(scope="session")
def current_rules(tax_settings):
    return tax_settings.current


@pytest.fixture(scope="session")
def scale_2025(current_rules):
    """Barème 2025 (revenus 2024)."""
    return current_rules.scale


@pytest.fixture
def make_request():
    """Factory for requests taxed on declarant 1 salaries without expenses deduction.

    Taxable income equals the salary, which keeps expected values readable.
    """

    def _make(salary=0.0, status="single", is_isolated=False, location="metropole", **kwargs):
        return IrRequest(
            household=Household(status=status, is_isolated=is_isolated, location=location),
            incomes=kwargs.pop("incomes", IncomeSet(d1=DeclarantIncome(salaries=salary))),
            expenses_d1=DeclarantExpenses(mode="none"),
            expenses_d2=DeclarantExpenses(mode="none"),
            capital_mode=kwargs.pop("capital_mode", "pfu"),
            year_key=kwargs.pop("year_key", "current"),
            **kwargs,
        )

    return _make
