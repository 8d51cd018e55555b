"""
Module: staffing_engines.suggestions
Responsibility:
    Produce the ranked suggestion list shown in the "automatic suggestions"
    tab: every (optionally specialty-filtered) professional scored by the
    margin their cost leaves on the contract, with unavailable
    professionals penalized.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    This is the second scoring call site. Unlike the greedy selector it
    ranks by margin percent and halves the score of unavailable
    professionals.

Invariants enforced:
    - Budget is ``(contract_value - tax_amount)``, times ``months_per_year``
      when the value is monthly.
    - A professional's cost is annualized the same way, so margin is
      comparable to the budget.
    - ``margin_percent`` is 0 when the budget is not positive.
    - Rows below ``-desired_margin_percent`` are dropped; the rest are
      stable-sorted by score descending and truncated to ``limit``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from staffing_config.schema import EngineSettings
from staffing_engines.allocation import eligible_candidates
from staffing_engines.availability import is_available
from staffing_engines.compensation import CompensationNormalizer
from staffing_engines.scoring import CostBenefitScorer
from staffing_kernel.domain.records import Contract, Professional
from staffing_kernel.logging_config import get_logger

logger = get_logger("engines.suggestions")

UNAVAILABLE_PENALTY = Decimal("0.5")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class RankedSuggestion:
    """One row of the ranked suggestion list."""

    professional: Professional
    monthly_cost: Decimal
    margin: Decimal
    margin_percent: Decimal
    score: Decimal
    available: bool
    cost_benefit: float
    reference_monthly_cost: Decimal | None = None

    @property
    def specialty(self) -> str:
        return self.professional.specialty


class RankedSuggestionGenerator:
    """Margin-based, availability-penalized ranking of professionals."""

    def __init__(
        self,
        normalizer: CompensationNormalizer | None = None,
        scorer: CostBenefitScorer | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self.normalizer = normalizer or CompensationNormalizer(settings)
        self.scorer = scorer or CostBenefitScorer(self.normalizer)
        self.settings = settings or self.normalizer.settings

    def available_budget(
        self,
        contract_value: Decimal,
        tax_amount: Decimal,
        value_is_monthly: bool,
    ) -> Decimal:
        net = Decimal(str(contract_value)) - Decimal(str(tax_amount))
        if value_is_monthly:
            return net * self.settings.months_per_year
        return net

    def rank(
        self,
        professionals: Sequence[Professional],
        contracts: Sequence[Contract],
        contract_value: Decimal,
        tax_amount: Decimal,
        value_is_monthly: bool,
        specialty: str | None = None,
        desired_margin_percent: Decimal | None = None,
        limit: int | None = None,
    ) -> list[RankedSuggestion]:
        """
        Ranked suggestions for a contract being drafted.

        Args:
            professionals: Pool to rank. Inactive professionals are kept;
                only the specialty filter applies, as in the console.
            contracts: All contracts, used for availability.
            contract_value: Value typed on the form.
            tax_amount: Tax amount typed or derived on the form.
            value_is_monthly: Whether ``contract_value`` is per month.
            specialty: Optional specialty filter (case-insensitive).
            desired_margin_percent: Tolerated negative margin (default 20).
            limit: Maximum rows returned (default 20).
        """
        if desired_margin_percent is None:
            desired_margin_percent = self.settings.suggestion_desired_margin_percent
        if limit is None:
            limit = self.settings.suggestion_limit
        floor = -Decimal(str(desired_margin_percent))

        budget = self.available_budget(contract_value, tax_amount, value_is_monthly)
        pool = professionals
        if specialty:
            wanted = specialty.strip().lower()
            pool = [p for p in professionals if p.specialty.strip().lower() == wanted]

        rows: list[RankedSuggestion] = []
        for professional in pool:
            monthly = self.normalizer.monthly_cost(professional)
            cost_total = monthly * self.settings.months_per_year if value_is_monthly else monthly
            margin = budget - cost_total
            margin_percent = margin / budget * HUNDRED if budget > 0 else Decimal("0")
            available = is_available(professional.professional_id, contracts)
            score = margin_percent if available else margin_percent * UNAVAILABLE_PENALTY
            if margin_percent < floor:
                continue
            rows.append(
                RankedSuggestion(
                    professional=professional,
                    monthly_cost=monthly,
                    margin=margin,
                    margin_percent=margin_percent,
                    score=score,
                    available=available,
                    cost_benefit=self.scorer.score(professional),
                    reference_monthly_cost=self.normalizer.reference_monthly_cost(
                        professional
                    ),
                )
            )

        rows.sort(key=lambda r: r.score, reverse=True)
        result = rows[: max(limit, 0)]

        logger.info("suggestions_ranked", extra={
            "budget": str(budget),
            "pool_size": len(pool),
            "kept": len(rows),
            "returned": len(result),
            "specialty": specialty,
        })
        return result


def available_candidates(
    professionals: Sequence[Professional],
    contracts: Sequence[Contract],
    specialty: str | None = None,
) -> list[Professional]:
    """ACTIVE, available professionals; the usual greedy-selector input."""
    return [
        p for p in eligible_candidates(professionals, specialty)
        if is_available(p.professional_id, contracts)
    ]
