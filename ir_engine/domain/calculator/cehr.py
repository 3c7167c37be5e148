"""Contribution exceptionnelle sur les hauts revenus (CEHR)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ir_engine.domain.calculator.progressive import compute_progressive_tax
from ir_engine.domain.models.fiscal_settings import TaxBracket
from ir_engine.domain.models.result import BracketDetail


@dataclass(frozen=True)
class CehrResult:
    cehr: float = 0.0
    details: tuple[BracketDetail, ...] = field(default_factory=tuple)


def compute_cehr(brackets: Sequence[TaxBracket], rfr: float) -> CehrResult:
    """Apply the CEHR bracket table of the household type to the RFR."""
    if rfr <= 0 or not brackets:
        return CehrResult()
    result = compute_progressive_tax(brackets, rfr)
    return CehrResult(cehr=result.tax, details=result.brackets_details)
