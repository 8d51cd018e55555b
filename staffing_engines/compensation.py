"""
Module: staffing_engines.compensation
Responsibility:
    Normalize heterogeneous compensation terms (hourly rate x monthly hours,
    or a fixed amount tied to a billing period) into one canonical monthly
    cost figure, for professionals and for contract assignments.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import staffing_kernel and staffing_config.schema.

Invariants enforced:
    - Decimal-only arithmetic; the result is always a Decimal.
    - Assignment overrides take precedence over the professional's stored
      rate, hours default and billing period.
    - Purity: the result is a function of the input record and the injected
      settings only.

Failure modes:
    - None raised. An unrecognized or missing billing period, or an
      assignment with no usable compensation, yields Decimal("0") and a
      WARNING log record.

Usage:
    from staffing_engines.compensation import CompensationNormalizer

    normalizer = CompensationNormalizer()
    normalizer.monthly_cost(professional)   # Decimal("16000") for 100/h
    normalizer.monthly_cost(assignment)     # override-aware
"""

from __future__ import annotations

from decimal import Decimal

from staffing_config.schema import EngineSettings, RateTable
from staffing_kernel.domain.records import (
    BillingPeriod,
    CompensationMode,
    ContractAssignment,
    Professional,
)
from staffing_kernel.logging_config import get_logger

logger = get_logger("engines.compensation")

ZERO = Decimal("0")


class CompensationNormalizer:
    """
    Convert pay terms into canonical monthly cost.

    Contract:
        ``monthly_cost`` accepts a Professional or a ContractAssignment.
    Guarantees:
        - HOURLY: ``rate x hours``; hours is the assignment's
          ``monthly_hours`` when given, else ``standard_monthly_hours``.
        - FIXED: ``amount / period.months``.
    Non-goals:
        - Does not round; callers quantize for presentation.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        rate_table: RateTable | None = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.rate_table = rate_table

    @property
    def standard_monthly_hours(self) -> Decimal:
        return self.settings.standard_monthly_hours

    def monthly_cost(self, subject: Professional | ContractAssignment) -> Decimal:
        """Canonical monthly cost of a professional or an assignment."""
        if isinstance(subject, ContractAssignment):
            return self._assignment_cost(subject)
        return self._professional_cost(subject)

    def _professional_cost(self, professional: Professional) -> Decimal:
        if professional.compensation_mode == CompensationMode.HOURLY:
            return self._hourly(professional.hourly_rate, None)
        return self._fixed(
            professional.fixed_amount,
            professional.fixed_period,
            subject_id=professional.professional_id,
        )

    def _assignment_cost(self, assignment: ContractAssignment) -> Decimal:
        professional = assignment.professional
        mode = self._assignment_mode(assignment)
        if mode is None:
            logger.warning("compensation_missing_terms", extra={
                "professional_id": assignment.professional_id,
            })
            return ZERO

        if mode == CompensationMode.HOURLY:
            rate = assignment.hourly_rate_override
            if rate is None and professional is not None:
                rate = professional.hourly_rate
            return self._hourly(rate, assignment.monthly_hours)

        amount = assignment.fixed_amount_override
        if amount is None and professional is not None:
            amount = professional.fixed_amount
        period = assignment.fixed_period_override
        if period is None and professional is not None:
            period = professional.fixed_period
        return self._fixed(amount, period, subject_id=assignment.professional_id)

    @staticmethod
    def _assignment_mode(assignment: ContractAssignment) -> CompensationMode | None:
        if assignment.professional is not None:
            return assignment.professional.compensation_mode
        # Without the professional record the populated override decides.
        if assignment.hourly_rate_override is not None:
            return CompensationMode.HOURLY
        if assignment.fixed_amount_override is not None:
            return CompensationMode.FIXED
        return None

    def _hourly(self, rate: Decimal | None, hours: Decimal | None) -> Decimal:
        if rate is None:
            return ZERO
        if hours is None:
            hours = self.settings.standard_monthly_hours
        return rate * hours

    def _fixed(
        self,
        amount: Decimal | None,
        period: BillingPeriod | str | None,
        subject_id: str,
    ) -> Decimal:
        if amount is None:
            return ZERO
        resolved = BillingPeriod.parse(period)
        if resolved is None:
            logger.warning("compensation_unknown_period", extra={
                "professional_id": subject_id,
                "fixed_period": None if period is None else str(period),
                "fixed_amount": str(amount),
            })
            return ZERO
        return amount / Decimal(resolved.months)

    def reference_monthly_cost(self, professional: Professional) -> Decimal | None:
        """Rate-table list price for the professional's profile, per month.

        Returns None when no rate table is injected or the profile has no
        entry.
        """
        if self.rate_table is None:
            return None
        rate = self.rate_table.hourly_rate(
            professional.seniority_tier, professional.specialty
        )
        if rate is None:
            return None
        return rate * self.settings.standard_monthly_hours

    def default_assignment(self, professional: Professional) -> ContractAssignment:
        """The assignment an accepted staffing suggestion produces."""
        if professional.compensation_mode == CompensationMode.HOURLY:
            return ContractAssignment(
                professional_id=professional.professional_id,
                professional=professional,
                hourly_rate_override=professional.hourly_rate,
                monthly_hours=self.settings.standard_monthly_hours,
            )
        return ContractAssignment(
            professional_id=professional.professional_id,
            professional=professional,
            fixed_amount_override=professional.fixed_amount,
            fixed_period_override=professional.fixed_period,
        )


_default_normalizer = CompensationNormalizer()


def monthly_cost(subject: Professional | ContractAssignment) -> Decimal:
    """Monthly cost using default settings (160 standard hours)."""
    return _default_normalizer.monthly_cost(subject)
