"""Result data models.

These are the engine's public output contract. The presentation layer reads
``model_dump(by_alias=True)``: aliases keep the historical camelCase names
(``bracketsDetails``, ``cdhrDetails``, ``termA_beforeDecote``...), so renaming a
Python field must never change its alias.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContractModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class BracketDetail(ContractModel):
    """One audit row of a bracket computation."""

    label: str
    base: float = 0.0
    rate: float = 0.0
    tax: float = 0.0


class CdhrDetails(ContractModel):
    """Full CDHR breakdown, every intermediate term of the computation."""

    assiette: float
    threshold: float
    min_rate_percent: float
    decote_max_assiette: float
    slope_percent: float

    term_a_before_decote: float = Field(alias="termA_beforeDecote")
    decote_applied: float
    term_a_after_decote: float = Field(alias="termA_afterDecote")

    term_b: float
    ir_retenu: float
    cehr: float
    pfu_ir: float
    majorations: float
    maj_couple: float
    maj_charges: float
    persons_a_charge_count: int


class IrResult(ContractModel):
    """Aggregate IR result for one household and one tax year.

    Every monetary field is non-negative. ``tmi_margin_global`` is ``None``
    when the household already sits in the top bracket.
    """

    # Income and parts
    total_income: float = 0.0
    taxable_income: float = 0.0
    taxable_per_part: float = 0.0
    parts_nb: float = 1.0
    base_parts: float = 1.0

    # Deductions
    abat10_d1: float = 0.0
    abat10_d2: float = 0.0
    deductions_total: float = 0.0

    # Capital income routing
    capital_total: float = 0.0
    capital_base_bareme: float = 0.0
    capital_base_pfu: float = 0.0

    # Progressive tax and quotient familial
    ir_sans_plafond: float = 0.0
    ir_before_qf_base: float = 0.0
    qf_advantage: float = 0.0
    qf_max_avantage: float = 0.0
    qf_is_capped: bool = False
    ir_after_qf: float = 0.0
    dom_abatement_amount: float = 0.0
    ir_brut_foyer: float = 0.0
    decote: float = 0.0
    credits_total: float = 0.0
    ir_net: float = 0.0

    # Capital and surtaxes
    pfu_ir: float = 0.0
    rfr: float = 0.0
    cehr: float = 0.0
    cehr_details: tuple[BracketDetail, ...] = ()
    cdhr: float = 0.0
    cdhr_details: Optional[CdhrDetails] = None

    # Social contributions
    ps_rate_total: float = 0.0
    ps_foncier: float = 0.0
    ps_dividends: float = 0.0
    ps_total: float = 0.0

    total_tax: float = 0.0

    # Marginal rate
    tmi_rate: float = 0.0
    tmi_base_global: float = 0.0
    tmi_margin_global: Optional[float] = None
    brackets_details: tuple[BracketDetail, ...] = ()


class SimpleCaseResult(ContractModel):
    """Rounded headline figures of the simplified (children count only) case."""

    ir_total: int = 0
    tmi_rate_display: float = 0.0
    revenus_dans_tmi: int = 0
    marge_avant_changement: Optional[int] = None
    taxable_income: int = 0
    parts: float = 1.0
    qf_is_capped: bool = False
