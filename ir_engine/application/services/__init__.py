"""Application services."""

from .batch import compare_years, evaluate_batch, results_to_dataframe
from .income_tax import IncomeTaxEngine, compute_ir
from .settings_loader import (
    load_configured_tax_year_settings,
    load_tax_year_settings,
    load_tax_year_settings_file,
)
from .simple_case import compute_ir_simple_case

__all__ = [
    "IncomeTaxEngine",
    "compute_ir",
    "compute_ir_simple_case",
    "load_tax_year_settings",
    "load_tax_year_settings_file",
    "load_configured_tax_year_settings",
    "evaluate_batch",
    "compare_years",
    "results_to_dataframe",
]
