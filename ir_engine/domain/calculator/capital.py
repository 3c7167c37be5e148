"""Capital income routing: progressive scale or flat tax (PFU)."""

from __future__ import annotations

from dataclasses import dataclass

from ir_engine.domain.models.income import CapitalIncome

# Share of capital income added to the scale base in "bareme" mode.
# Stands for the partial CSG deductibility mechanism. The ratio is asserted,
# not derived, and applies to the whole capital total whatever its composition.
BAREME_INCLUSION_RATIO = 0.6


@dataclass(frozen=True)
class CapitalBases:
    total: float
    base_bareme: float
    base_pfu: float


def compute_capital_bases(capital: CapitalIncome, mode: str) -> CapitalBases:
    """Route the whole capital total to one of the two taxation modes."""
    total = max(0.0, capital.total)
    if mode == "bareme":
        return CapitalBases(total=total, base_bareme=total * BAREME_INCLUSION_RATIO, base_pfu=0.0)
    return CapitalBases(total=total, base_bareme=0.0, base_pfu=total)


def compute_pfu_ir(base_pfu: float, rate_ir: float) -> float:
    """Income tax part of the PFU (social part is computed with PS)."""
    if base_pfu <= 0:
        return 0.0
    return base_pfu * rate_ir / 100.0
