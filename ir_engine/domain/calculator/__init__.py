"""Tax rules. Pure functions of (settings, inputs): they never raise on amounts."""

from .abattement import compute_abattement_10, compute_expense_deduction, compute_extra_deductions
from .capital import BAREME_INCLUSION_RATIO, CapitalBases, compute_capital_bases, compute_pfu_ir
from .cdhr import CdhrResult, compute_cdhr, normalize_min_rate
from .cehr import CehrResult, compute_cehr
from .decote import compute_decote
from .dom import compute_dom_abatement
from .parts import (
    PartsBreakdown,
    PartsCalculator,
    PartsFromChildren,
    PartsFromCount,
    count_persons_a_charge,
)
from .progressive import ProgressiveTaxResult, bracket_label, compute_progressive_tax
from .quotient_familial import (
    QuotientFamilyResult,
    compute_max_avantage,
    compute_quotient_family_capping,
)
from .social import SocialContributions, compute_social_contributions
from .tmi import HouseholdTaxCurve, TmiMetrics, compute_tmi_metrics

__all__ = [
    "BAREME_INCLUSION_RATIO",
    "CapitalBases",
    "CdhrResult",
    "CehrResult",
    "HouseholdTaxCurve",
    "PartsBreakdown",
    "PartsCalculator",
    "PartsFromChildren",
    "PartsFromCount",
    "ProgressiveTaxResult",
    "QuotientFamilyResult",
    "SocialContributions",
    "TmiMetrics",
    "bracket_label",
    "compute_abattement_10",
    "compute_capital_bases",
    "compute_cdhr",
    "compute_cehr",
    "compute_decote",
    "compute_dom_abatement",
    "compute_expense_deduction",
    "compute_extra_deductions",
    "compute_max_avantage",
    "compute_pfu_ir",
    "compute_progressive_tax",
    "compute_quotient_family_capping",
    "compute_social_contributions",
    "compute_tmi_metrics",
    "count_persons_a_charge",
    "normalize_min_rate",
]
