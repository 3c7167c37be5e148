"""Overseas (DOM) tax abatement."""

from __future__ import annotations

from ir_engine.domain.models.fiscal_settings import DomAbatementConfig


def compute_dom_abatement(
    location: str, config: DomAbatementConfig | None, ir_after_qf: float
) -> float:
    """Abatement for residents of Guadeloupe/Martinique/Réunion or Guyane/Mayotte.

    ``ir * rate%`` capped at the zone cap when one is set. Zero in metropole
    or when the zone is not configured.
    """
    if config is None or ir_after_qf <= 0:
        return 0.0

    zone = config.zone(location)
    if zone is None or zone.rate_percent <= 0:
        return 0.0

    abatement = ir_after_qf * zone.rate_percent / 100.0
    if zone.cap > 0:
        abatement = min(abatement, zone.cap)
    return max(0.0, abatement)
