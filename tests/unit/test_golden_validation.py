"""Golden validation tests with manually calculated expected values.

Full engine runs on the built-in 2025 tables; every expectation below is
worked out by hand from the barème (0% to 11 497 €, 11% to 29 315 €, 30% to
83 823 €, 41% to 180 294 €, 45% above).
"""

import pytest

from ir_engine.application.services.income_tax import compute_ir
from ir_engine.domain.models import (
    CapitalIncome,
    Child,
    DeclarantExpenses,
    DeclarantIncome,
    Household,
    IncomeSet,
    IrRequest,
)


class TestGoldenIncomeTax:
    """Household income tax golden cases."""

    def test_single_50k(self, tax_settings, make_request):
        """
        Single, 50 000 € taxable:
        17 817 × 11% + 20 684 × 30% = 1 959.87 + 6 205.20 = 8 165.07 €
        """
        result = compute_ir(make_request(50000), tax_settings)

        assert result.taxable_income == 50000
        assert result.parts_nb == 1
        assert result.ir_net == pytest.approx(8165.07)
        assert result.decote == 0
        assert result.tmi_rate == 30
        assert result.total_tax == pytest.approx(8165.07)

    def test_couple_one_child_capped(self, tax_settings, make_request):
        """
        Couple + 1 child (2.5 parts), 80 000 € taxable.

        Uncapped: 2 765.07 × 2.5 = 6 912.675 € (≈ 6 913 €)
        Base parts: 5 165.07 × 2 = 10 330.14 €, advantage capped at 1 791 €
        Net: 10 330.14 - 1 791 = 8 539.14 €
        """
        request = make_request(80000, status="couple", children=(Child(mode="charge"),))
        result = compute_ir(request, tax_settings)

        assert result.parts_nb == 2.5
        assert round(result.ir_sans_plafond) == 6913
        assert result.qf_is_capped is True
        assert result.qf_advantage == pytest.approx(1791)
        assert result.ir_net == pytest.approx(8539.14)

    def test_decote_single(self, tax_settings):
        """
        Single, 30 000 € salary with 10% deduction (3 000 €), 27 000 € taxable:
        gross tax 15 502 × 11% = 1 705.22 €
        décote 889 - 45.25% × 1 705.22 = 117.39 €
        net 1 587.83 €
        """
        request = IrRequest(incomes=IncomeSet(d1=DeclarantIncome(salaries=30000)))
        result = compute_ir(request, tax_settings)

        assert result.abat10_d1 == pytest.approx(3000)
        assert result.taxable_income == pytest.approx(27000)
        assert result.ir_brut_foyer == pytest.approx(1705.22)
        assert result.decote == pytest.approx(117.38795)
        assert result.ir_net == pytest.approx(1587.83205)

    def test_dom_gmr(self, tax_settings, make_request):
        """Réunion, 50 000 €: 30% × 8 165.07 = 2 449.52 € (under the 2 450 € cap)."""
        result = compute_ir(make_request(50000, location="gmr"), tax_settings)

        assert result.dom_abatement_amount == pytest.approx(2449.521)
        assert result.ir_net == pytest.approx(8165.07 - 2449.521)

    def test_dom_before_decote(self, tax_settings, make_request):
        """
        Réunion, 25 000 €: the décote applies to the tax after the DOM abatement.
        13 502 × 11% = 1 485.22 €, DOM 30% = 445.566 €, gross 1 039.654 €
        décote 889 - 45.25% × 1 039.654 = 418.556565 €, net 621.097435 €
        (décote first, then DOM, would give 887.80 €)
        """
        result = compute_ir(make_request(25000, location="gmr"), tax_settings)

        assert result.ir_after_qf == pytest.approx(1485.22)
        assert result.dom_abatement_amount == pytest.approx(445.566)
        assert result.ir_brut_foyer == pytest.approx(1039.654)
        assert result.decote == pytest.approx(418.556565)
        assert result.ir_net == pytest.approx(621.097435)

    def test_credits_reduce_net(self, tax_settings, make_request):
        result = compute_ir(make_request(50000, credits=1000), tax_settings)
        assert result.credits_total == 1000
        assert result.ir_net == pytest.approx(7165.07)

    def test_previous_year_scale(self, tax_settings, make_request):
        """2024 barème: 17 502 × 11% + 21 202 × 30% = 8 285.82 €."""
        result = compute_ir(make_request(50000, year_key="previous"), tax_settings)
        assert result.ir_net == pytest.approx(8285.82)


class TestGoldenCapitalAndSurtaxes:
    """Capital income, PS, CEHR and CDHR golden cases."""

    def test_pfu_with_ps(self, tax_settings, make_request):
        """10 000 € dividends at PFU: 12.8% IR + 17.2% PS = 3 000 €."""
        incomes = IncomeSet(capital=CapitalIncome(with_ps=10000))
        result = compute_ir(make_request(incomes=incomes), tax_settings)

        assert result.taxable_income == 0
        assert result.pfu_ir == pytest.approx(1280)
        assert result.ps_dividends == pytest.approx(1720)
        assert result.rfr == pytest.approx(10000)
        assert result.total_tax == pytest.approx(3000)

    def test_bareme_capital(self, tax_settings, make_request):
        """Bareme mode: 60% of 10 000 € in the scale base, no PFU."""
        incomes = IncomeSet(capital=CapitalIncome(with_ps=10000))
        result = compute_ir(make_request(incomes=incomes, capital_mode="bareme"), tax_settings)

        assert result.capital_base_bareme == pytest.approx(6000)
        assert result.taxable_income == pytest.approx(6000)
        assert result.pfu_ir == 0
        assert result.ps_total == pytest.approx(1720)

    def test_property_income_ps(self, tax_settings, make_request):
        """Property income is taxed through the scale and bears PS."""
        incomes = IncomeSet(fonciers_foyer=8000, d1=DeclarantIncome(fonciers=2000))
        result = compute_ir(make_request(incomes=incomes), tax_settings)

        assert result.taxable_income == pytest.approx(10000)
        assert result.ps_foncier == pytest.approx(1720)

    def test_cehr_single(self, tax_settings, make_request):
        """600 000 € single: CEHR 11 500 €, CDHR absorbed by the income tax."""
        result = compute_ir(make_request(600000), tax_settings)

        assert result.cehr == pytest.approx(11500)
        assert result.cdhr == 0
        assert result.cdhr_details is not None
        assert result.cdhr_details.ir_retenu == pytest.approx(result.ir_brut_foyer)

    def test_cdhr_on_capital(self, tax_settings, make_request):
        """
        1 000 000 € capital at PFU, no other income:
        PFU 128 000 €, CEHR 7 500 + 20 000 = 27 500 €
        CDHR 20% × 1 000 000 - (128 000 + 27 500) = 44 500 €
        Total = exactly 20% of the RFR.
        """
        incomes = IncomeSet(capital=CapitalIncome(without_ps=1_000_000))
        result = compute_ir(make_request(incomes=incomes), tax_settings)

        assert result.pfu_ir == pytest.approx(128000)
        assert result.cehr == pytest.approx(27500)
        assert result.cdhr == pytest.approx(44500)
        assert result.ps_total == 0
        assert result.total_tax == pytest.approx(200000)

    def test_cdhr_dependants_from_children(self, tax_settings, make_request):
        """Dependants default to children in charge or shared custody."""
        incomes = IncomeSet(capital=CapitalIncome(without_ps=1_000_000))
        request = make_request(
            incomes=incomes,
            children=(Child(mode="charge"), Child(mode="shared")),
        )
        result = compute_ir(request, tax_settings)

        assert result.cdhr_details.persons_a_charge_count == 2
        assert result.cdhr == pytest.approx(44500 - 3000)

    def test_cdhr_explicit_dependants(self, tax_settings, make_request):
        incomes = IncomeSet(capital=CapitalIncome(without_ps=1_000_000))
        result = compute_ir(make_request(incomes=incomes, persons_a_charge_count=1), tax_settings)
        assert result.cdhr == pytest.approx(43000)


class TestGoldenDeductions:
    """Expenses options wired through the engine."""

    def test_couple_expenses(self, tax_settings):
        """d1 10% (4 000 €) + d2 real expenses 6 000 €."""
        request = IrRequest(
            household=Household(status="couple"),
            incomes=IncomeSet(
                d1=DeclarantIncome(salaries=40000),
                d2=DeclarantIncome(salaries=30000),
            ),
            expenses_d1=DeclarantExpenses(mode="abat10"),
            expenses_d2=DeclarantExpenses(mode="reels", real_expenses=6000),
            deductions=1000,
        )
        result = compute_ir(request, tax_settings)

        assert result.abat10_d1 == pytest.approx(4000)
        assert result.deductions_total == pytest.approx(11000)
        assert result.taxable_income == pytest.approx(59000)

    def test_single_ignores_d2_income(self, tax_settings, make_request):
        incomes = IncomeSet(d1=DeclarantIncome(salaries=20000), d2=DeclarantIncome(salaries=50000))
        result = compute_ir(make_request(incomes=incomes), tax_settings)

        assert result.taxable_income == 20000
        assert result.abat10_d2 == 0
