"""
Module: staffing_engines.financial_summary
Responsibility:
    Produce the monthly and total financial breakdown of a contract:
    revenue, tax, labor cost, asset (ancillary) cost, profit and margin.
    This is the figure set the contract form re-renders on every input
    change.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Builds on staffing_engines.compensation and staffing_engines.duration.

Invariants enforced:
    - Decimal-only arithmetic at full precision; ``FinancialSummary.rounded``
      quantizes to cents for presentation only.
    - Monthly/total consistency: for an indeterminate contract whose value
      is monthly, ``total_value == contract_value x months`` exactly.
    - ``months >= 1`` always, so no division by zero.
    - Margin is 0 (not NaN/Infinity) when net revenue is not positive.

Failure modes:
    - None raised; edge cases resolve to defined values.

Usage:
    from staffing_engines.financial_summary import FinancialSummaryCalculator

    summary = FinancialSummaryCalculator().summarize(contract)
    summary.monthly_profit, summary.margin_percent
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal

from staffing_config.schema import EngineSettings
from staffing_engines.compensation import CompensationNormalizer
from staffing_engines.duration import duration_months
from staffing_engines.tracer import traced_engine
from staffing_kernel.domain.records import Contract
from staffing_kernel.logging_config import get_logger

logger = get_logger("engines.financial_summary")

HUNDRED = Decimal("100")
CENTS = Decimal("0.01")


@dataclass(frozen=True)
class FinancialSummary:
    """
    Full financial breakdown of one contract.

    Contract:
        Frozen dataclass; all amounts are Decimal at full precision.
    Guarantees:
        - ``monthly_net_revenue == monthly_revenue - monthly_tax``.
        - ``monthly_profit == monthly_net_revenue - monthly_labor_cost
          - monthly_asset_cost``.
        - ``assignment_costs`` follows assignment order; these resolved
          figures are what the persistence layer stores.
    Non-goals:
        - Does not format or localize amounts.
    """

    contract_id: str
    months: int
    total_value: Decimal
    monthly_revenue: Decimal
    monthly_tax: Decimal
    monthly_net_revenue: Decimal
    monthly_labor_cost: Decimal
    monthly_asset_cost: Decimal
    monthly_profit: Decimal
    margin_percent: Decimal
    assignment_costs: tuple[tuple[str, Decimal], ...] = ()

    @property
    def total_tax(self) -> Decimal:
        return self.monthly_tax * self.months

    @property
    def total_net_revenue(self) -> Decimal:
        return self.monthly_net_revenue * self.months

    @property
    def total_labor_cost(self) -> Decimal:
        return self.monthly_labor_cost * self.months

    @property
    def total_asset_cost(self) -> Decimal:
        return self.monthly_asset_cost * self.months

    @property
    def total_profit(self) -> Decimal:
        return self.monthly_profit * self.months

    @property
    def monthly_cost(self) -> Decimal:
        """Labor plus ancillary cost per month."""
        return self.monthly_labor_cost + self.monthly_asset_cost

    @property
    def is_profitable(self) -> bool:
        return self.monthly_profit > 0

    def rounded(self) -> FinancialSummary:
        """Copy with every amount quantized to cents (ROUND_HALF_UP)."""

        def q(value: Decimal) -> Decimal:
            return value.quantize(CENTS, rounding=ROUND_HALF_UP)

        return replace(
            self,
            total_value=q(self.total_value),
            monthly_revenue=q(self.monthly_revenue),
            monthly_tax=q(self.monthly_tax),
            monthly_net_revenue=q(self.monthly_net_revenue),
            monthly_labor_cost=q(self.monthly_labor_cost),
            monthly_asset_cost=q(self.monthly_asset_cost),
            monthly_profit=q(self.monthly_profit),
            margin_percent=q(self.margin_percent),
            assignment_costs=tuple((pid, q(c)) for pid, c in self.assignment_costs),
        )


class FinancialSummaryCalculator:
    """
    Compute contract financial summaries.

    Contract:
        Pure functions; no I/O, no caching, no cross-call state.
    Guarantees:
        - Identical inputs yield identical results.
    Non-goals:
        - Does not validate the contract; records enforce their own
          invariants at construction.
    """

    def __init__(
        self,
        normalizer: CompensationNormalizer | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self.settings = settings or (
            normalizer.settings if normalizer is not None else EngineSettings()
        )
        self.normalizer = normalizer or CompensationNormalizer(self.settings)

    def duration_months(self, contract: Contract) -> int:
        return duration_months(
            contract, self.settings.default_estimated_duration_months
        )

    def total_value(self, contract: Contract, months: int | None = None) -> Decimal:
        """Contract value over its whole (possibly estimated) duration."""
        if months is None:
            months = self.duration_months(contract)
        if contract.is_indeterminate and contract.value_is_monthly:
            return contract.contract_value * months
        return contract.contract_value

    @traced_engine("financial_summary", "1.0", fingerprint_fields=("contract",))
    def summarize(self, contract: Contract) -> FinancialSummary:
        """
        Full monthly and total breakdown of ``contract``.

        Postconditions:
            - ``margin_percent`` is 0 when ``monthly_net_revenue <= 0``.
        """
        months = self.duration_months(contract)
        total_value = self.total_value(contract, months)

        monthly_revenue = total_value / months
        monthly_tax = monthly_revenue * contract.tax_percentage / HUNDRED

        assignment_costs = tuple(
            (a.professional_id, self.normalizer.monthly_cost(a))
            for a in contract.assignments
        )
        monthly_labor_cost = sum((c for _, c in assignment_costs), Decimal("0"))
        monthly_asset_cost = sum(
            (c.monthly_amount for c in contract.ancillary_costs), Decimal("0")
        )

        monthly_net_revenue = monthly_revenue - monthly_tax
        monthly_profit = monthly_net_revenue - monthly_labor_cost - monthly_asset_cost

        if monthly_net_revenue > 0:
            margin_percent = monthly_profit / monthly_net_revenue * HUNDRED
        else:
            logger.debug("summary_no_net_revenue", extra={
                "contract_id": contract.contract_id,
                "monthly_net_revenue": str(monthly_net_revenue),
            })
            margin_percent = Decimal("0")

        logger.info("summary_completed", extra={
            "contract_id": contract.contract_id,
            "months": months,
            "indeterminate": contract.is_indeterminate,
            "total_value": str(total_value),
            "monthly_labor_cost": str(monthly_labor_cost),
            "monthly_profit": str(monthly_profit),
            "assignment_count": len(assignment_costs),
        })

        return FinancialSummary(
            contract_id=contract.contract_id,
            months=months,
            total_value=total_value,
            monthly_revenue=monthly_revenue,
            monthly_tax=monthly_tax,
            monthly_net_revenue=monthly_net_revenue,
            monthly_labor_cost=monthly_labor_cost,
            monthly_asset_cost=monthly_asset_cost,
            monthly_profit=monthly_profit,
            margin_percent=margin_percent,
            assignment_costs=assignment_costs,
        )

    def labor_budget(self, contract: Contract) -> Decimal:
        """Monthly amount left for labor after tax and ancillary costs."""
        summary = self.summarize(contract)
        return summary.monthly_net_revenue - summary.monthly_asset_cost


_default_calculator = FinancialSummaryCalculator()


def summarize(contract: Contract) -> FinancialSummary:
    """Summarize with default settings."""
    return _default_calculator.summarize(contract)
