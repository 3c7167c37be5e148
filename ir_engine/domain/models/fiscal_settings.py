"""Fiscal settings data models.

Typed, frozen view of one tax-settings document. Field aliases are the
camelCase keys of the stored document, so a raw document validates directly
(``TaxYearSettings.model_validate``) and dumps back with ``by_alias=True``.

Fallback values (CDHR thresholds, PFU rate...) are resolved here, once, when
the document is validated; the tax rules read the resolved values as-is.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ir_engine.core import defaults
from ir_engine.core.numbers import Amount, to_number

YearKey = Literal["current", "previous"]


def _optional_bound(value: Any) -> float | None:
    """Upper bound of a bracket: ``None`` (or blank) means unbounded."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_number(value)


def _positive_or(default: float):
    def _resolve(value: Any) -> float:
        number = to_number(value)
        return number if number > 0 else default
    return _resolve


class FiscalModel(BaseModel):
    """Base for all settings models: frozen, camelCase aliases, extra keys ignored."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class TaxBracket(FiscalModel):
    """One bracket of a progressive scale (rate in percent)."""

    from_: Amount = Field(default=0.0, alias="from", description="Lower bound in €")
    to: Annotated[Optional[float], BeforeValidator(_optional_bound)] = Field(
        default=None, description="Upper bound in €, None for the top bracket"
    )
    rate: Amount = Field(default=0.0, description="Marginal rate %")


Scale = tuple[TaxBracket, ...]


def is_well_formed_scale(scale: Scale) -> bool:
    """Check the scale invariant: contiguous, increasing, single open top bracket.

    Bounds are whole euros, so ``next.from`` may be ``previous.to`` or
    ``previous.to + 1`` (the published barème uses the latter).
    """
    if not scale:
        return True
    if sum(1 for br in scale if br.to is None) != 1 or scale[-1].to is not None:
        return False
    for previous, current in zip(scale, scale[1:]):
        if previous.to is None or current.from_ <= previous.from_:
            return False
        if not 0 <= current.from_ - previous.to <= 1:
            return False
    return True


class Abat10Config(FiscalModel):
    """Floor/ceiling of the 10% deduction on salaries (per declarant)."""

    plafond: Amount = 0.0
    plancher: Amount = 0.0


class DecoteConfig(FiscalModel):
    """Décote parameters, split single/couple."""

    trigger_single: Amount = 0.0
    trigger_couple: Amount = 0.0
    amount_single: Amount = 0.0
    amount_couple: Amount = 0.0
    rate_percent: Amount = 0.0

    def trigger(self, is_couple: bool) -> float:
        return self.trigger_couple if is_couple else self.trigger_single

    def amount(self, is_couple: bool) -> float:
        return self.amount_couple if is_couple else self.amount_single


class QuotientFamilyConfig(FiscalModel):
    """Plafonnement du quotient familial."""

    plafond_part_sup: Amount = Field(default=0.0, description="Cap per extra half-part in €")
    plafond_parent_isole_deux_premieres_parts: Amount = Field(
        default=0.0,
        alias="plafondParentIsoléDeuxPremièresParts",
        description="Cap for the first two parts of an isolated parent (case T)",
    )


class DomZoneConfig(FiscalModel):
    rate_percent: Amount = 0.0
    cap: Amount = 0.0


class DomAbatementConfig(FiscalModel):
    """Overseas abatement per zone (Guadeloupe/Martinique/Réunion, Guyane/Mayotte)."""

    gmr: Optional[DomZoneConfig] = None
    guyane: Optional[DomZoneConfig] = None

    def zone(self, location: str) -> DomZoneConfig | None:
        if location == "gmr":
            return self.gmr
        if location == "guyane":
            return self.guyane
        return None


class PfuConfig(FiscalModel):
    """Prélèvement forfaitaire unique rates (percent)."""

    rate_ir: Annotated[float, BeforeValidator(_positive_or(defaults.DEFAULT_PFU_RATE_IR))] = Field(
        default=defaults.DEFAULT_PFU_RATE_IR, alias="rateIR"
    )
    rate_social: Amount = 17.2
    rate_total: Amount = 30.0


class CehrConfig(FiscalModel):
    """CEHR bracket tables by household type."""

    single: Scale = ()
    couple: Scale = ()

    def brackets(self, is_couple: bool) -> Scale:
        return self.couple if is_couple else self.single


class CdhrConfig(FiscalModel):
    """Contribution différentielle sur les hauts revenus.

    ``min_effective_rate`` is kept raw (fraction or percent); the rule
    normalizes it. Every other field falls back to the statutory value when
    missing, zero or negative.
    """

    min_effective_rate: Amount = 0.0
    threshold_single: Annotated[
        float, BeforeValidator(_positive_or(defaults.DEFAULT_CDHR_THRESHOLD_SINGLE))
    ] = defaults.DEFAULT_CDHR_THRESHOLD_SINGLE
    threshold_couple: Annotated[
        float, BeforeValidator(_positive_or(defaults.DEFAULT_CDHR_THRESHOLD_COUPLE))
    ] = defaults.DEFAULT_CDHR_THRESHOLD_COUPLE
    decote_max_assiette_single: Annotated[
        float, BeforeValidator(_positive_or(defaults.DEFAULT_CDHR_DECOTE_MAX_ASSIETTE_SINGLE))
    ] = defaults.DEFAULT_CDHR_DECOTE_MAX_ASSIETTE_SINGLE
    decote_max_assiette_couple: Annotated[
        float, BeforeValidator(_positive_or(defaults.DEFAULT_CDHR_DECOTE_MAX_ASSIETTE_COUPLE))
    ] = defaults.DEFAULT_CDHR_DECOTE_MAX_ASSIETTE_COUPLE
    decote_slope_percent: Annotated[
        float, BeforeValidator(_positive_or(defaults.DEFAULT_CDHR_DECOTE_SLOPE_PERCENT))
    ] = defaults.DEFAULT_CDHR_DECOTE_SLOPE_PERCENT
    majoration_couple: Annotated[
        float, BeforeValidator(_positive_or(defaults.DEFAULT_CDHR_MAJORATION_COUPLE))
    ] = defaults.DEFAULT_CDHR_MAJORATION_COUPLE
    majoration_per_charge: Annotated[
        float, BeforeValidator(_positive_or(defaults.DEFAULT_CDHR_MAJORATION_PER_CHARGE))
    ] = defaults.DEFAULT_CDHR_MAJORATION_PER_CHARGE

    def threshold(self, is_couple: bool) -> float:
        return self.threshold_couple if is_couple else self.threshold_single

    def decote_max_assiette(self, is_couple: bool) -> float:
        return self.decote_max_assiette_couple if is_couple else self.decote_max_assiette_single


class PatrimonyConfig(FiscalModel):
    """Prélèvements sociaux on patrimony and capital income (percent)."""

    total_rate: Amount = 0.0
    csg_deductible_rate: Amount = 0.0


class FiscalYearRules(FiscalModel):
    """Every rule parameter for one tax year.

    Optional sub-tables left to ``None`` switch the corresponding rule off.
    """

    label: str = ""
    scale: Scale = ()
    decote: Optional[DecoteConfig] = None
    quotient_family: Optional[QuotientFamilyConfig] = None
    abat10: Optional[Abat10Config] = None
    dom_abatement: Optional[DomAbatementConfig] = None
    pfu: Optional[PfuConfig] = None
    cehr: Optional[CehrConfig] = None
    cdhr: Optional[CdhrConfig] = None
    patrimony: Optional[PatrimonyConfig] = None

    @field_validator("label", mode="before")
    @classmethod
    def label_as_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @property
    def pfu_rate_ir(self) -> float:
        return self.pfu.rate_ir if self.pfu else defaults.DEFAULT_PFU_RATE_IR


class TaxYearSettings(FiscalModel):
    """Resolved settings holding the current and previous year rules.

    Immutable and safe to share across threads or processes.
    """

    current: FiscalYearRules = Field(default_factory=FiscalYearRules)
    previous: FiscalYearRules = Field(default_factory=FiscalYearRules)

    def for_year(self, year_key: YearKey) -> FiscalYearRules:
        """Select the rules of ``year_key`` (anything but "current" is the previous year)."""
        return self.current if year_key == "current" else self.previous
