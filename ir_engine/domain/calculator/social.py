"""Prélèvements sociaux on property and capital income."""

from __future__ import annotations

from dataclasses import dataclass

from ir_engine.domain.models.fiscal_settings import PatrimonyConfig


@dataclass(frozen=True)
class SocialContributions:
    rate_total: float = 0.0
    ps_foncier: float = 0.0
    ps_dividends: float = 0.0

    @property
    def ps_total(self) -> float:
        return self.ps_foncier + self.ps_dividends


def compute_social_contributions(
    config: PatrimonyConfig | None,
    fonciers_base: float,
    capital_with_ps: float,
) -> SocialContributions:
    """PS at the patrimony total rate on property income and capital income subject to PS."""
    if config is None or config.total_rate <= 0:
        return SocialContributions()

    rate = config.total_rate
    ps_foncier = max(0.0, fonciers_base) * rate / 100.0
    ps_dividends = capital_with_ps * rate / 100.0 if capital_with_ps > 0 else 0.0
    return SocialContributions(rate_total=rate, ps_foncier=ps_foncier, ps_dividends=ps_dividends)
