"""
Module: staffing_engines.allocation
Responsibility:
    Propose a set of professionals to staff a contract under a labor budget
    and a headcount limit, using a deterministic two-pass greedy heuristic
    over candidates ranked by cost-benefit score.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Builds on staffing_engines.scoring and staffing_engines.compensation.

Invariants enforced:
    - Headcount bound: never more than ``max_headcount`` selections.
    - Determinism: candidates are ranked with a stable sort (ties keep input
      order); no randomness; identical inputs give identical proposals.
    - Bounded time: at most two linear passes, no backtracking or exchange.
    - Thresholds are literal: pass 1 fills up to 70% of the budget; pass 2
      runs only while spend is under 50% and may fill up to 90%.

Failure modes:
    - None raised. No candidates, no seats, or no affordable candidate all
      yield an empty or partial proposal.

Usage:
    from staffing_engines.allocation import GreedyAllocationSelector

    selector = GreedyAllocationSelector()
    team = selector.suggest(Decimal("21000"), candidates, max_headcount=2)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from staffing_engines.compensation import CompensationNormalizer
from staffing_engines.scoring import CostBenefitScorer
from staffing_engines.tracer import traced_engine
from staffing_kernel.domain.records import Professional
from staffing_kernel.logging_config import get_logger

logger = get_logger("engines.allocation")

PASS_ONE_BUDGET_SHARE = Decimal("0.7")
BACKFILL_TRIGGER_SHARE = Decimal("0.5")
BACKFILL_BUDGET_SHARE = Decimal("0.9")


@dataclass(frozen=True)
class StaffingProposal:
    """
    Result of a greedy allocation run.

    Contract:
        Frozen dataclass; ``selected`` is pass-1 picks followed by pass-2
        picks, each in the order they were added.
    Guarantees:
        - ``seats_filled <= seats_requested`` (for non-negative requests).
        - ``running_total`` is the summed monthly cost of ``selected``.
    """

    budget: Decimal
    target: Decimal
    seats_requested: int
    pass_one: tuple[Professional, ...]
    pass_two: tuple[Professional, ...]
    running_total: Decimal

    @property
    def selected(self) -> tuple[Professional, ...]:
        return self.pass_one + self.pass_two

    @property
    def seats_filled(self) -> int:
        return len(self.pass_one) + len(self.pass_two)

    @property
    def is_complete(self) -> bool:
        return self.seats_filled >= self.seats_requested

    @property
    def remaining_budget(self) -> Decimal:
        return self.budget - self.running_total


def eligible_candidates(
    professionals: Iterable[Professional],
    specialty: str | None = None,
) -> list[Professional]:
    """ACTIVE professionals, optionally restricted to one specialty."""
    wanted = specialty.strip().lower() if specialty else None
    return [
        p for p in professionals
        if p.is_active and (wanted is None or p.specialty.strip().lower() == wanted)
    ]


class GreedyAllocationSelector:
    """
    Two-pass greedy staffing selector.

    Contract:
        Pure functions; no I/O, no cross-call state.
    Guarantees:
        - Pass 1 adds, in rank order, each candidate whose cost keeps the
          running total within 70% of the budget, until seats run out.
        - Pass 2 (backfill) runs only if seats remain and the running total
          is below 50% of the budget; it revisits unselected candidates in
          rank order and adds those that keep the total within 90%.
    Non-goals:
        - Not globally optimal; no backtracking, no exchange step.
        - Availability is not considered here; callers pre-filter.
    """

    def __init__(
        self,
        scorer: CostBenefitScorer | None = None,
        normalizer: CompensationNormalizer | None = None,
    ) -> None:
        if scorer is None:
            scorer = CostBenefitScorer(normalizer)
        self.scorer = scorer
        self.normalizer = normalizer or scorer.normalizer

    def rank(self, candidates: Sequence[Professional]) -> list[Professional]:
        """Candidates by descending score; ties keep input order."""
        return sorted(candidates, key=self.scorer.score, reverse=True)

    @traced_engine(
        "allocation", "1.0",
        fingerprint_fields=("contract_budget", "candidates", "max_headcount"),
    )
    def propose(
        self,
        contract_budget: Decimal,
        candidates: Sequence[Professional],
        max_headcount: int,
    ) -> StaffingProposal:
        """Run both passes and return the full proposal."""
        budget = Decimal(str(contract_budget))
        target = budget * PASS_ONE_BUDGET_SHARE

        if not candidates or max_headcount <= 0:
            logger.info("allocation_nothing_to_select", extra={
                "budget": str(budget),
                "candidate_count": len(candidates),
                "max_headcount": max_headcount,
            })
            return StaffingProposal(
                budget=budget,
                target=target,
                seats_requested=max(max_headcount, 0),
                pass_one=(),
                pass_two=(),
                running_total=Decimal("0"),
            )

        # sorted() is stable, and reverse=True preserves input order on ties.
        ranked = self.rank(candidates)
        costs = [self.normalizer.monthly_cost(p) for p in ranked]

        running_total = Decimal("0")
        chosen: set[int] = set()
        pass_one: list[Professional] = []
        for i, (professional, cost) in enumerate(zip(ranked, costs)):
            if len(pass_one) >= max_headcount:
                break
            if running_total + cost <= target:
                pass_one.append(professional)
                chosen.add(i)
                running_total += cost

        pass_two: list[Professional] = []
        if (
            len(pass_one) < max_headcount
            and running_total < budget * BACKFILL_TRIGGER_SHARE
        ):
            ceiling = budget * BACKFILL_BUDGET_SHARE
            for i, (professional, cost) in enumerate(zip(ranked, costs)):
                if len(pass_one) + len(pass_two) >= max_headcount:
                    break
                if i in chosen:
                    continue
                if running_total + cost <= ceiling:
                    pass_two.append(professional)
                    chosen.add(i)
                    running_total += cost

        logger.info("allocation_completed", extra={
            "budget": str(budget),
            "target": str(target),
            "candidate_count": len(ranked),
            "max_headcount": max_headcount,
            "pass_one_count": len(pass_one),
            "pass_two_count": len(pass_two),
            "running_total": str(running_total),
        })

        return StaffingProposal(
            budget=budget,
            target=target,
            seats_requested=max_headcount,
            pass_one=tuple(pass_one),
            pass_two=tuple(pass_two),
            running_total=running_total,
        )

    def suggest(
        self,
        contract_budget: Decimal,
        candidates: Sequence[Professional],
        max_headcount: int,
    ) -> list[Professional]:
        """Selected professionals in the order they were added."""
        return list(self.propose(contract_budget, candidates, max_headcount).selected)


def suggest(
    contract_budget: Decimal,
    candidates: Sequence[Professional],
    max_headcount: int,
) -> list[Professional]:
    """Greedy suggestion with default settings."""
    return GreedyAllocationSelector().suggest(contract_budget, candidates, max_headcount)
