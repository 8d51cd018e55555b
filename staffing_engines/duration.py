"""
Module: staffing_engines.duration
Responsibility:
    Resolve the number of months a contract spans, for both time-bounded and
    open-ended (indeterminate) contracts.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - The result is always an int >= 1, so it is safe as a divisor.
    - Bounded contracts count whole calendar months from the year and month
      fields only; day fields are ignored (Jan 20 -> Feb 5 is one month).
      Every downstream financial figure depends on this granularity.
    - Open-ended contracts use ``estimated_duration_months`` (default 12)
      regardless of ``value_is_monthly``.

Failure modes:
    - None raised. A same-month span or a non-positive estimate is clamped
      to 1.
"""

from __future__ import annotations

from datetime import date

from staffing_kernel.domain.records import Contract
from staffing_kernel.logging_config import get_logger

logger = get_logger("engines.duration")

DEFAULT_ESTIMATED_DURATION_MONTHS = 12


def calendar_months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start`` to ``end``, unclamped."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def duration_months(
    contract: Contract,
    default_estimate: int = DEFAULT_ESTIMATED_DURATION_MONTHS,
) -> int:
    """Number of months the contract spans; always >= 1."""
    if contract.end_date is not None:
        return max(1, calendar_months_between(contract.start_date, contract.end_date))

    estimate = contract.estimated_duration_months
    if estimate is None:
        estimate = default_estimate
    if estimate < 1:
        logger.warning("duration_estimate_clamped", extra={
            "contract_id": contract.contract_id,
            "estimated_duration_months": estimate,
        })
        return 1
    return estimate
