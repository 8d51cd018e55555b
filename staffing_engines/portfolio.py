"""
Module: staffing_engines.portfolio
Responsibility:
    Roll contract financial summaries up into the dashboard view: contract
    counts by status, monthly revenue/cost/profit across ACTIVE contracts,
    overall margin, and ACTIVE contracts ending within the next 30 days.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    The reference date is always a parameter; engines never read the clock.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from staffing_engines.financial_summary import FinancialSummary, FinancialSummaryCalculator
from staffing_kernel.domain.records import Contract, ContractStatus
from staffing_kernel.logging_config import get_logger

logger = get_logger("engines.portfolio")

EXPIRY_WINDOW_DAYS = 30
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class ExpiringContract:
    contract_id: str
    end_date: date
    days_remaining: int


@dataclass(frozen=True)
class PortfolioSummary:
    """Aggregate monthly figures over ACTIVE contracts."""

    as_of: date
    status_counts: dict[ContractStatus, int]
    monthly_revenue: Decimal
    monthly_tax: Decimal
    monthly_net_revenue: Decimal
    monthly_labor_cost: Decimal
    monthly_asset_cost: Decimal
    monthly_profit: Decimal
    margin_percent: Decimal
    contract_summaries: tuple[FinancialSummary, ...]
    expiring_soon: tuple[ExpiringContract, ...]

    @property
    def active_count(self) -> int:
        return self.status_counts.get(ContractStatus.ACTIVE, 0)


def summarize_portfolio(
    contracts: Sequence[Contract],
    as_of: date,
    calculator: FinancialSummaryCalculator | None = None,
) -> PortfolioSummary:
    """Dashboard rollup of ``contracts`` as of ``as_of``."""
    calculator = calculator or FinancialSummaryCalculator()

    counts = {status: 0 for status in ContractStatus}
    for contract in contracts:
        counts[contract.status] += 1

    active = [c for c in contracts if c.is_active]
    summaries = tuple(calculator.summarize(c) for c in active)

    zero = Decimal("0")
    revenue = sum((s.monthly_revenue for s in summaries), zero)
    tax = sum((s.monthly_tax for s in summaries), zero)
    net = sum((s.monthly_net_revenue for s in summaries), zero)
    labor = sum((s.monthly_labor_cost for s in summaries), zero)
    asset = sum((s.monthly_asset_cost for s in summaries), zero)
    profit = net - labor - asset
    margin = profit / net * HUNDRED if net > 0 else zero

    expiring: list[ExpiringContract] = []
    for contract in active:
        if contract.end_date is None:
            continue
        days = (contract.end_date - as_of).days
        if 0 < days <= EXPIRY_WINDOW_DAYS:
            expiring.append(ExpiringContract(contract.contract_id, contract.end_date, days))
    expiring.sort(key=lambda e: e.days_remaining)

    logger.info("portfolio_summarized", extra={
        "as_of": as_of.isoformat(),
        "contract_count": len(contracts),
        "active_count": len(active),
        "monthly_profit": str(profit),
        "expiring_count": len(expiring),
    })

    return PortfolioSummary(
        as_of=as_of,
        status_counts=counts,
        monthly_revenue=revenue,
        monthly_tax=tax,
        monthly_net_revenue=net,
        monthly_labor_cost=labor,
        monthly_asset_cost=asset,
        monthly_profit=profit,
        margin_percent=margin,
        contract_summaries=summaries,
        expiring_soon=tuple(expiring),
    )
