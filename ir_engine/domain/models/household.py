"""Household composition models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

HouseholdStatus = Literal["single", "couple"]
Location = Literal["metropole", "gmr", "guyane"]
ChildMode = Literal["charge", "shared"]


class Household(BaseModel):
    """Tax household (foyer fiscal).

    ``is_isolated`` (case T, parent isolé) only matters for a single declarant.
    """

    model_config = ConfigDict(frozen=True)

    status: HouseholdStatus = Field(default="single", description="single or couple (married/PACS)")
    is_isolated: bool = Field(default=False, description="Isolated parent (case T)")
    location: Location = Field(default="metropole", description="Residence zone for the DOM abatement")

    @property
    def is_couple(self) -> bool:
        return self.status == "couple"

    @property
    def base_parts(self) -> float:
        """Parts before any dependant: 1 single, 2 couple."""
        return 2.0 if self.is_couple else 1.0

    @property
    def is_isolated_single(self) -> bool:
        return self.is_isolated and not self.is_couple


class Child(BaseModel):
    """Dependent child: exclusive custody (charge) or alternating custody (shared)."""

    model_config = ConfigDict(frozen=True)

    mode: ChildMode = "charge"
