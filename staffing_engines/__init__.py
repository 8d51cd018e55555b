"""
Module: staffing_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines. This is the canonical import surface for the
    presentation and persistence collaborators.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import staffing_kernel and staffing_config.schema.

Invariants enforced:
    - Purity: engines never call ``date.today()``; reference dates are
      parameters.
    - Decimal-only arithmetic for money; floats appear only in the
      cost-benefit score, which is a ranking key, not an amount.
    - Determinism: identical inputs always produce identical outputs.

Audit relevance:
    ``summarize`` and ``propose``/``suggest`` are traced via
    ``@traced_engine``, emitting STAFFING_ENGINE_TRACE records with engine
    name, version, input fingerprint and duration.

Usage:
    from staffing_engines import (
        CompensationNormalizer,
        FinancialSummaryCalculator,
        GreedyAllocationSelector,
    )
"""

from staffing_engines.allocation import (
    GreedyAllocationSelector,
    StaffingProposal,
    eligible_candidates,
    suggest,
)
from staffing_engines.availability import (
    MAX_ACTIVE_CONTRACTS,
    active_contract_count,
    availability_map,
    is_available,
)
from staffing_engines.compensation import CompensationNormalizer, monthly_cost
from staffing_engines.duration import duration_months
from staffing_engines.financial_summary import (
    FinancialSummary,
    FinancialSummaryCalculator,
    summarize,
)
from staffing_engines.portfolio import (
    ExpiringContract,
    PortfolioSummary,
    summarize_portfolio,
)
from staffing_engines.profitability import (
    ProfessionalProfitability,
    professional_profitability,
)
from staffing_engines.scoring import SENIORITY_WEIGHTS, CostBenefitScorer, score
from staffing_engines.suggestions import (
    RankedSuggestion,
    RankedSuggestionGenerator,
    available_candidates,
)

__all__ = [
    # Compensation
    "CompensationNormalizer",
    "monthly_cost",
    # Duration
    "duration_months",
    # Financial summary
    "FinancialSummary",
    "FinancialSummaryCalculator",
    "summarize",
    # Availability
    "MAX_ACTIVE_CONTRACTS",
    "active_contract_count",
    "availability_map",
    "is_available",
    # Scoring
    "SENIORITY_WEIGHTS",
    "CostBenefitScorer",
    "score",
    # Allocation
    "GreedyAllocationSelector",
    "StaffingProposal",
    "eligible_candidates",
    "suggest",
    # Suggestions
    "RankedSuggestion",
    "RankedSuggestionGenerator",
    "available_candidates",
    # Portfolio
    "ExpiringContract",
    "PortfolioSummary",
    "summarize_portfolio",
    # Profitability
    "ProfessionalProfitability",
    "professional_profitability",
]
