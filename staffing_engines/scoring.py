"""
Module: staffing_engines.scoring
Responsibility:
    Rank professionals by a seniority-weighted cost-benefit score:
    ``weight / max(monthly_cost, 1)``.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - For equal tiers, a strictly lower monthly cost gives a strictly
      higher score (costs of at least 1).
    - The ``max(..., 1)`` floor keeps a zero-cost professional from
      dividing by zero.
    - SPECIALIST shares SENIOR's weight of 3.
    - The score ignores availability. The ranked-suggestion call site
      (staffing_engines.suggestions) applies its own penalty.
"""

from __future__ import annotations

from decimal import Decimal

from staffing_engines.compensation import CompensationNormalizer
from staffing_kernel.domain.records import Professional, SeniorityTier

SENIORITY_WEIGHTS: dict[SeniorityTier, int] = {
    SeniorityTier.JUNIOR: 1,
    SeniorityTier.PLENO: 2,
    SeniorityTier.SENIOR: 3,
    SeniorityTier.SPECIALIST: 3,
}

MIN_COST_DIVISOR = Decimal("1")


class CostBenefitScorer:
    """Seniority weight per unit of monthly cost."""

    def __init__(self, normalizer: CompensationNormalizer | None = None) -> None:
        self.normalizer = normalizer or CompensationNormalizer()

    @staticmethod
    def weight(professional: Professional) -> int:
        return SENIORITY_WEIGHTS[professional.seniority_tier]

    def score(self, professional: Professional) -> float:
        cost = self.normalizer.monthly_cost(professional)
        ratio = Decimal(self.weight(professional)) / max(cost, MIN_COST_DIVISOR)
        return float(ratio)


def score(professional: Professional) -> float:
    """Score with a default-settings normalizer."""
    return CostBenefitScorer().score(professional)
