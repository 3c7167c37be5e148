"""Data models for ir_engine."""

from .fiscal_settings import (
    Abat10Config,
    CdhrConfig,
    CehrConfig,
    DecoteConfig,
    DomAbatementConfig,
    DomZoneConfig,
    FiscalYearRules,
    PatrimonyConfig,
    PfuConfig,
    QuotientFamilyConfig,
    TaxBracket,
    TaxYearSettings,
)
from .household import Child, Household
from .income import CapitalIncome, DeclarantIncome, IncomeSet
from .request import DeclarantExpenses, IrRequest
from .result import BracketDetail, CdhrDetails, IrResult, SimpleCaseResult

__all__ = [
    "Abat10Config",
    "BracketDetail",
    "CapitalIncome",
    "CdhrConfig",
    "CdhrDetails",
    "CehrConfig",
    "Child",
    "DeclarantExpenses",
    "DeclarantIncome",
    "DecoteConfig",
    "DomAbatementConfig",
    "DomZoneConfig",
    "FiscalYearRules",
    "Household",
    "IncomeSet",
    "IrRequest",
    "IrResult",
    "PatrimonyConfig",
    "PfuConfig",
    "QuotientFamilyConfig",
    "SimpleCaseResult",
    "TaxBracket",
    "TaxYearSettings",
]
