"""Décote: rebate on low gross tax amounts."""

from __future__ import annotations

from ir_engine.domain.models.fiscal_settings import DecoteConfig


def compute_decote(is_couple: bool, config: DecoteConfig | None, ir_brut_foyer: float) -> float:
    """Calculate the décote on the household gross tax.

    ``amount - rate% * ir`` when the gross tax is at or below the trigger,
    never more than the gross tax itself.
    """
    if config is None:
        return 0.0

    trigger = config.trigger(is_couple)
    amount = config.amount(is_couple)
    if trigger <= 0 or amount <= 0 or ir_brut_foyer > trigger:
        return 0.0

    decote = max(0.0, amount - (config.rate_percent / 100.0) * ir_brut_foyer)
    return min(decote, max(0.0, ir_brut_foyer))
