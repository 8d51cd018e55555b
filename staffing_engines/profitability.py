"""
Module: staffing_engines.profitability
Responsibility:
    Per-professional profitability report over ACTIVE contracts: how much
    each professional's contracts bring in, what was paid to them, the tax
    attributable to their share, and the resulting profit.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Builds on staffing_engines.financial_summary; each contract is
    summarized once no matter how many professionals it staffs.

Invariants enforced:
    - Only ACTIVE contracts count toward a professional's figures.
    - Revenue and tax of a contract are split by assignment share, so the
      received amounts of a contract's professionals add up to its total
      value.
    - ``profit_percent`` is 0 when nothing was received, and
      ``average_profit_per_contract`` is 0 without active contracts.

Failure modes:
    - None raised.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from staffing_engines.financial_summary import FinancialSummary, FinancialSummaryCalculator
from staffing_kernel.domain.records import (
    CompensationMode,
    Contract,
    Professional,
)
from staffing_kernel.logging_config import get_logger

logger = get_logger("engines.profitability")

HUNDRED = Decimal("100")
ZERO = Decimal("0")


@dataclass(frozen=True)
class ProfessionalProfitability:
    """One report row; amounts cover each contract's whole duration."""

    professional_id: str
    name: str
    specialty: str
    compensation_mode: CompensationMode
    active_contracts: int
    total_received: Decimal
    total_tax: Decimal
    total_paid: Decimal
    profit: Decimal
    profit_percent: Decimal
    average_profit_per_contract: Decimal


def _share(summary: FinancialSummary, professional_id: str) -> tuple[Decimal, Decimal]:
    """(revenue fraction, whole-duration labor cost) of one professional."""
    costs = [c for pid, c in summary.assignment_costs if pid == professional_id]
    fraction = Decimal(len(costs)) / Decimal(len(summary.assignment_costs))
    return fraction, sum(costs, ZERO) * summary.months


def professional_profitability(
    professionals: Sequence[Professional],
    contracts: Sequence[Contract],
    calculator: FinancialSummaryCalculator | None = None,
) -> list[ProfessionalProfitability]:
    """
    One row per professional, most profitable first.

    Rows with equal profit keep the order of ``professionals``.
    """
    calculator = calculator or FinancialSummaryCalculator()
    active = [c for c in contracts if c.is_active and c.assignments]
    summaries = {c.contract_id: calculator.summarize(c) for c in active}

    rows: list[ProfessionalProfitability] = []
    for professional in professionals:
        pid = professional.professional_id
        received = tax = paid = ZERO
        count = 0
        for contract in active:
            if not contract.includes(pid):
                continue
            summary = summaries[contract.contract_id]
            fraction, cost = _share(summary, pid)
            received += summary.total_value * fraction
            tax += summary.total_tax * fraction
            paid += cost
            count += 1

        profit = received - tax - paid
        rows.append(ProfessionalProfitability(
            professional_id=pid,
            name=professional.name,
            specialty=professional.specialty,
            compensation_mode=professional.compensation_mode,
            active_contracts=count,
            total_received=received,
            total_tax=tax,
            total_paid=paid,
            profit=profit,
            profit_percent=profit / received * HUNDRED if received > 0 else ZERO,
            average_profit_per_contract=profit / count if count else ZERO,
        ))

    rows.sort(key=lambda r: r.profit, reverse=True)

    logger.info("profitability_computed", extra={
        "professional_count": len(rows),
        "active_contract_count": len(active),
        "total_profit": str(sum((r.profit for r in rows), ZERO)),
    })
    return rows
