"""Income tax (IR) computation engine.

Sequences the tax rules into one household computation:

    deductions -> parts -> capital routing -> taxable income
    -> progressive tax per part -> QF cap -> DOM abatement -> décote -> credits
    -> PFU -> RFR -> CEHR -> CDHR -> PS -> TMI metrics

The engine holds no state besides the (immutable) fiscal settings: the same
request always yields the same result.
"""

from __future__ import annotations

from ir_engine.core.logging import get_logger
from ir_engine.domain.calculator import (
    HouseholdTaxCurve,
    PartsBreakdown,
    PartsFromChildren,
    compute_abattement_10,
    compute_capital_bases,
    compute_cdhr,
    compute_cehr,
    compute_decote,
    compute_dom_abatement,
    compute_extra_deductions,
    compute_pfu_ir,
    compute_progressive_tax,
    compute_quotient_family_capping,
    compute_social_contributions,
    compute_tmi_metrics,
    count_persons_a_charge,
)
from ir_engine.domain.models import IrRequest, IrResult, TaxYearSettings

log = get_logger(__name__)


def resolve_parts(request: IrRequest) -> PartsBreakdown:
    """Explicit parts win; otherwise parts come from the children list."""
    household = request.household
    if request.parts is not None:
        return PartsBreakdown(
            base_parts=household.base_parts,
            computed_parts=request.parts,
            effective_parts=request.parts,
        )
    return PartsFromChildren(request.children).compute(household, request.manual_parts)


class IncomeTaxEngine:
    """French income tax engine for one set of fiscal settings."""

    def __init__(self, settings: TaxYearSettings):
        self.settings = settings

    def compute(self, request: IrRequest) -> IrResult:
        """Run the full computation for one household.

        Args:
            request: Household, incomes and options

        Returns:
            Fully populated IrResult (all zero for a household without income)
        """
        rules = self.settings.for_year(request.year_key)
        household = request.household
        is_couple = household.is_couple
        incomes = request.incomes

        # 1. Deductions
        abat10_d1 = compute_abattement_10(incomes.d1.salary_base, rules.abat10)
        abat10_d2 = compute_abattement_10(incomes.d2.salary_base, rules.abat10) if is_couple else 0.0
        expenses = compute_extra_deductions(
            is_couple, request.expenses_d1, request.expenses_d2, abat10_d1, abat10_d2
        )
        deductions_total = max(0.0, request.deductions + expenses)
        credits_total = max(0.0, request.credits)

        # 2. Parts
        parts = resolve_parts(request)
        parts_nb = max(0.5, parts.effective_parts)

        # 3. Capital routing
        capital = compute_capital_bases(incomes.capital, request.capital_mode)

        # 4. Taxable income
        property_income = incomes.property_income(is_couple)
        income_bareme = (
            sum(d.total_bareme for d in incomes.declarants(is_couple))
            + property_income
            + capital.base_bareme
        )
        taxable_income = max(0.0, income_bareme - deductions_total)
        taxable_per_part = taxable_income / parts_nb
        total_income = max(0.0, income_bareme + capital.base_pfu)

        # 5. Progressive tax per part
        progressive = compute_progressive_tax(rules.scale, taxable_per_part)
        ir_sans_plafond = progressive.tax * parts_nb

        # 6. QF cap
        qf = compute_quotient_family_capping(
            rules.scale,
            taxable_income,
            parts_nb,
            is_couple,
            household.is_isolated,
            rules.quotient_family,
            ir_sans_plafond=ir_sans_plafond,
        )

        # 7. DOM abatement, then décote on the post-abatement gross tax
        # Order is QF cap, DOM, décote (CGI art. 197), not décote before DOM
        dom_abatement = compute_dom_abatement(household.location, rules.dom_abatement, qf.ir_after_qf)
        ir_brut_foyer = max(0.0, qf.ir_after_qf - dom_abatement)
        decote = compute_decote(is_couple, rules.decote, ir_brut_foyer)
        ir_net = max(0.0, ir_brut_foyer - decote - credits_total)

        # 8. Flat tax and reference income
        pfu_ir = compute_pfu_ir(capital.base_pfu, rules.pfu_rate_ir)
        rfr = taxable_income + capital.base_pfu

        # 9. High income surtaxes
        cehr_brackets = rules.cehr.brackets(is_couple) if rules.cehr else ()
        cehr = compute_cehr(cehr_brackets, rfr)

        persons_a_charge = request.persons_a_charge_count
        if persons_a_charge is None:
            persons_a_charge = count_persons_a_charge(request.children)
        cdhr = compute_cdhr(
            rules.cdhr,
            assiette=rfr,
            ir_retenu=ir_brut_foyer,
            pfu_ir=pfu_ir,
            cehr=cehr.cehr,
            is_couple=is_couple,
            persons_a_charge_count=persons_a_charge,
        )

        # 10. Social contributions
        ps = compute_social_contributions(rules.patrimony, property_income, incomes.capital.with_ps)

        # 11. Marginal rate
        curve = HouseholdTaxCurve(
            rules.scale, parts_nb, is_couple, household.is_isolated, rules.quotient_family
        )
        tmi = compute_tmi_metrics(taxable_income, curve)

        total_tax = ir_net + pfu_ir + cehr.cehr + cdhr.cdhr + ps.ps_total

        result = IrResult(
            total_income=total_income,
            taxable_income=taxable_income,
            taxable_per_part=taxable_per_part,
            parts_nb=parts_nb,
            base_parts=parts.base_parts,
            abat10_d1=abat10_d1,
            abat10_d2=abat10_d2,
            deductions_total=deductions_total,
            capital_total=capital.total,
            capital_base_bareme=capital.base_bareme,
            capital_base_pfu=capital.base_pfu,
            ir_sans_plafond=ir_sans_plafond,
            ir_before_qf_base=qf.ir_before_qf_base,
            qf_advantage=qf.qf_advantage,
            qf_max_avantage=qf.max_avantage,
            qf_is_capped=qf.qf_is_capped,
            ir_after_qf=qf.ir_after_qf,
            dom_abatement_amount=dom_abatement,
            ir_brut_foyer=ir_brut_foyer,
            decote=decote,
            credits_total=credits_total,
            ir_net=ir_net,
            pfu_ir=pfu_ir,
            rfr=rfr,
            cehr=cehr.cehr,
            cehr_details=cehr.details,
            cdhr=cdhr.cdhr,
            cdhr_details=cdhr.details,
            ps_rate_total=ps.rate_total,
            ps_foncier=ps.ps_foncier,
            ps_dividends=ps.ps_dividends,
            ps_total=ps.ps_total,
            total_tax=total_tax,
            tmi_rate=tmi.tmi_rate,
            tmi_base_global=tmi.revenus_dans_tmi,
            tmi_margin_global=tmi.marge_avant_changement,
            brackets_details=progressive.brackets_details,
        )

        log.debug(
            "ir_computed",
            year_key=request.year_key,
            parts=parts_nb,
            taxable_income=taxable_income,
            ir_net=ir_net,
            total_tax=total_tax,
        )
        return result


def compute_ir(request: IrRequest, settings: TaxYearSettings) -> IrResult:
    """Compute the income tax of one household with the given fiscal settings."""
    return IncomeTaxEngine(settings).compute(request)
