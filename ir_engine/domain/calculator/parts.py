"""Quotient familial: number of parts of a household.

Two variants share one interface so callers state which precision they accept:

- ``PartsFromChildren`` is the reference computation, per child custody mode.
- ``PartsFromCount`` is a deliberately coarser fallback for contexts that only
  know how many children there are. It assumes exclusive custody for all of
  them, so it disagrees with ``PartsFromChildren`` as soon as a child is in
  alternating custody (notably the isolated-parent bonus with shared children
  only). It is not a second ground truth.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from ir_engine.core.numbers import round_to_quarter
from ir_engine.domain.models.household import Child, Household

# Rank 1 and 2 children weigh half as much as the following ones
FIRST_SLOTS = 2
CHARGE_FIRST_WEIGHT = 0.5
CHARGE_BEYOND_WEIGHT = 1.0
SHARED_FIRST_WEIGHT = 0.25
SHARED_BEYOND_WEIGHT = 0.5
ISOLATED_BONUS_MAX = 0.5


@dataclass(frozen=True)
class PartsBreakdown:
    """Parts before and after rounding."""

    base_parts: float
    computed_parts: float
    effective_parts: float


class PartsCalculator(ABC):
    """Common rounding and floor logic of both parts variants."""

    @abstractmethod
    def children_parts(self) -> float:
        """Parts brought by the children alone."""

    @abstractmethod
    def isolated_bonus(self, household: Household) -> float:
        """Extra half-part (case T) for an isolated single parent."""

    def compute(self, household: Household, manual_parts: float = 0.0) -> PartsBreakdown:
        """Compute the household parts.

        Args:
            household: Household status and isolation flag
            manual_parts: Adjustment added before rounding (e.g. +0.25)

        Returns:
            PartsBreakdown with effective parts rounded to 0.25 and never below
            the household base parts.
        """
        base = household.base_parts
        computed = base + self.children_parts() + self.isolated_bonus(household)
        effective = max(base, round_to_quarter(computed + manual_parts))
        return PartsBreakdown(base_parts=base, computed_parts=computed, effective_parts=effective)


class PartsFromChildren(PartsCalculator):
    """Parts from the detailed children list (custody mode per child).

    Children in exclusive custody take the first two ranks before children in
    alternating custody; list order is irrelevant.
    """

    def __init__(self, children: Iterable[Child]):
        children = tuple(children)
        self.charge_count = sum(1 for c in children if c.mode == "charge")
        self.shared_count = sum(1 for c in children if c.mode == "shared")

    def children_parts(self) -> float:
        remaining = FIRST_SLOTS

        charge_first = min(self.charge_count, remaining)
        remaining -= charge_first
        shared_first = min(self.shared_count, remaining)

        return (
            charge_first * CHARGE_FIRST_WEIGHT
            + (self.charge_count - charge_first) * CHARGE_BEYOND_WEIGHT
            + shared_first * SHARED_FIRST_WEIGHT
            + (self.shared_count - shared_first) * SHARED_BEYOND_WEIGHT
        )

    def isolated_bonus(self, household: Household) -> float:
        if not household.is_isolated_single:
            return 0.0
        if self.charge_count > 0:
            return ISOLATED_BONUS_MAX
        if self.shared_count > 0:
            return min(ISOLATED_BONUS_MAX, self.shared_count * SHARED_FIRST_WEIGHT)
        return 0.0


class PartsFromCount(PartsCalculator):
    """Parts from a children count only, every child assumed in exclusive custody."""

    def __init__(self, children_count: int):
        self.children_count = max(0, int(children_count or 0))

    def children_parts(self) -> float:
        first = min(self.children_count, FIRST_SLOTS)
        return first * CHARGE_FIRST_WEIGHT + (self.children_count - first) * CHARGE_BEYOND_WEIGHT

    def isolated_bonus(self, household: Household) -> float:
        if household.is_isolated_single and self.children_count > 0:
            return ISOLATED_BONUS_MAX
        return 0.0


def count_persons_a_charge(children: Iterable[Child]) -> int:
    """Number of dependants (exclusive or alternating custody)."""
    return sum(1 for c in children if c.mode in ("charge", "shared"))
