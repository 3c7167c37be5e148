"""Progressive bracket engine.

Generic marginal-bracket computation shared by the income tax scale and the
CEHR scale.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ir_engine.domain.models.fiscal_settings import TaxBracket
from ir_engine.domain.models.result import BracketDetail


@dataclass(frozen=True)
class ProgressiveTaxResult:
    """Tax on one amount plus the marginal bracket it reaches.

    ``tmi_base`` is the part of the amount taxed in the marginal bracket and
    ``tmi_bracket_to`` that bracket's upper bound (None for the top bracket).
    """

    tax: float = 0.0
    tmi_rate: float = 0.0
    tmi_base: float = 0.0
    tmi_bracket_to: float | None = None
    brackets_details: tuple[BracketDetail, ...] = field(default_factory=tuple)


def format_euros(amount: float) -> str:
    """French display of an amount: narrow no-break space thousands, comma decimals."""
    if float(amount).is_integer():
        text = f"{int(amount):,}"
    else:
        text = f"{amount:,.2f}".replace(".", "#")
    return text.replace(",", " ").replace("#", ",")


def bracket_label(lower: float, upper: float | None) -> str:
    if upper is None:
        return f"De {format_euros(lower)}€ à plus"
    return f"De {format_euros(lower)}€ à {format_euros(upper)}€"


def compute_progressive_tax(
    scale: Sequence[TaxBracket], amount: float, with_details: bool = True
) -> ProgressiveTaxResult:
    """Apply a progressive scale to an amount.

    Brackets are walked in order. A bracket the amount does not exceed yields
    a zero row; the walk stops at the first bracket containing the amount, so
    an amount exactly on a bound saturates the lower bracket only.

    Args:
        scale: Ordered brackets (rates in percent)
        amount: Amount to tax (per part for the income tax, RFR for CEHR)
        with_details: Build the per-bracket audit rows (off for repeated
            internal evaluations)

    Returns:
        ProgressiveTaxResult, all zero when amount <= 0 or the scale is empty
    """
    if not scale or amount <= 0:
        return ProgressiveTaxResult()

    tax = 0.0
    tmi_rate, tmi_base, tmi_bracket_to = 0.0, 0.0, None
    details: list[BracketDetail] = []

    for bracket in scale:
        lower, upper, rate = bracket.from_, bracket.to, bracket.rate
        if amount <= lower:
            if with_details:
                details.append(BracketDetail(label=bracket_label(lower, upper), rate=rate))
            continue

        top = amount if upper is None else min(amount, upper)
        base = max(0.0, top - lower)
        bracket_tax = base * (rate / 100.0)
        tax += bracket_tax
        if with_details:
            label = bracket_label(lower, upper)
            details.append(BracketDetail(label=label, base=base, rate=rate, tax=bracket_tax))

        if base > 0:
            tmi_rate, tmi_base, tmi_bracket_to = rate, base, upper

        if upper is None or amount <= upper:
            break

    return ProgressiveTaxResult(
        tax=max(0.0, tax),
        tmi_rate=tmi_rate,
        tmi_base=tmi_base,
        tmi_bracket_to=tmi_bracket_to,
        brackets_details=tuple(details),
    )
