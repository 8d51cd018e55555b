"""
Records -- Immutable, self-validating staffing records.

Responsibility:
    Defines the explicit record shapes the engines consume: Professional,
    Contract, ContractAssignment and AncillaryCost, together with the
    enumerations that tag them. Records are supplied by the data-access
    layer; the engines only read them.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every engine. No outward dependencies except
    staffing_kernel.exceptions.

Invariants enforced:
    - Monetary fields are always Decimal (never float); numeric inputs are
      coerced through ``str()`` so binary float artefacts never leak in.
    - A Professional populates exactly one compensation shape matching its
      mode: ``hourly_rate`` for HOURLY, ``fixed_amount`` + ``fixed_period``
      for FIXED.
    - A Contract with an end date ends on or after its start date.
    - An assignment that carries its Professional record references it by
      the same id.

Failure modes:
    - InvalidRecordError on construction with a violated invariant.

Non-goals:
    - A billing period string that is not recognized is NOT rejected. It is
      preserved raw so the compensation normalizer can degrade it to a zero
      cost and log the anomaly instead of failing the whole calculation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from staffing_kernel.exceptions import InvalidRecordError


class SeniorityTier(str, Enum):
    """Seniority tiers, ordered from least to most senior."""

    JUNIOR = "junior"
    PLENO = "pleno"
    SENIOR = "senior"
    SPECIALIST = "specialist"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SeniorityTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, SeniorityTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, SeniorityTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, SeniorityTier):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: str | SeniorityTier) -> SeniorityTier:
        """Parse a tier name, accepting the console's legacy labels."""
        if isinstance(value, SeniorityTier):
            return value
        key = str(value).strip().lower()
        key = _TIER_ALIASES.get(key, key)
        return cls(key)


_TIER_ORDER = (
    SeniorityTier.JUNIOR,
    SeniorityTier.PLENO,
    SeniorityTier.SENIOR,
    SeniorityTier.SPECIALIST,
)

_TIER_ALIASES = {
    "especialista": "specialist",
    "júnior": "junior",
    "sênior": "senior",
}


class CompensationMode(str, Enum):
    """How a professional is paid."""

    HOURLY = "hourly"
    FIXED = "fixed"


class BillingPeriod(str, Enum):
    """Billing cadence of a fixed compensation amount."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    ANNUAL = "annual"

    @property
    def months(self) -> int:
        return _PERIOD_MONTHS[self]

    @classmethod
    def parse(cls, value: Any) -> BillingPeriod | None:
        """Return the matching period, or None when ``value`` is unrecognized."""
        if isinstance(value, BillingPeriod):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        key = _PERIOD_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None


_PERIOD_MONTHS = {
    BillingPeriod.MONTHLY: 1,
    BillingPeriod.QUARTERLY: 3,
    BillingPeriod.SEMIANNUAL: 6,
    BillingPeriod.ANNUAL: 12,
}

_PERIOD_ALIASES = {
    "mensal": "monthly",
    "trimestral": "quarterly",
    "semestral": "semiannual",
    "semi-annual": "semiannual",
    "anual": "annual",
    "yearly": "annual",
}


class ProfessionalStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"


class ContractStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    CLOSED = "closed"


class AncillaryCategory(str, Enum):
    EQUIPMENT = "equipment"
    SOFTWARE = "software"
    EXPENSE = "expense"


def to_decimal(value: Any, record_type: str, field: str) -> Decimal:
    """Coerce a numeric input to Decimal, rejecting non-numeric values."""
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise InvalidRecordError(record_type, field, "boolean is not an amount")
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise InvalidRecordError(
                record_type, field, f"not a number: {value!r}"
            ) from e
    if not result.is_finite():
        raise InvalidRecordError(record_type, field, "must be finite")
    return result


def _parse_enum(enum_cls: type[Enum], value: Any, record_type: str, field: str) -> Any:
    """Accept an enum member, its value or its name (case-insensitive)."""
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower()
    for member in enum_cls:
        if key in (member.value, member.name.lower()):
            return member
    raise InvalidRecordError(record_type, field, f"unknown value {value!r}")


def _optional_decimal(value: Any, record_type: str, field: str) -> Decimal | None:
    if value is None:
        return None
    return to_decimal(value, record_type, field)


def _require_non_negative(
    value: Decimal | None, record_type: str, field: str
) -> None:
    if value is not None and value < 0:
        raise InvalidRecordError(record_type, field, "cannot be negative")


def _coerce_period(value: Any) -> BillingPeriod | str | None:
    # Unrecognized strings are kept raw; see module Non-goals.
    if value is None:
        return None
    parsed = BillingPeriod.parse(value)
    return parsed if parsed is not None else str(value)


@dataclass(frozen=True)
class Professional:
    """
    A professional that can be staffed on contracts.

    Contract:
        Frozen dataclass; enum fields accept their string values.
    Guarantees:
        - HOURLY: ``hourly_rate`` set, fixed fields unset.
        - FIXED: ``fixed_amount`` and ``fixed_period`` set, ``hourly_rate``
          unset.
        - Amounts are non-negative Decimals.
    Non-goals:
        - Does not compute its monthly cost; see
          ``staffing_engines.compensation``.
    """

    professional_id: str
    name: str
    specialty: str
    seniority_tier: SeniorityTier
    compensation_mode: CompensationMode
    hourly_rate: Decimal | None = None
    fixed_amount: Decimal | None = None
    fixed_period: BillingPeriod | str | None = None
    status: ProfessionalStatus = ProfessionalStatus.ACTIVE

    def __post_init__(self) -> None:
        record = "Professional"
        if not self.professional_id:
            raise InvalidRecordError(record, "professional_id", "is required")
        try:
            tier = SeniorityTier.parse(self.seniority_tier)
        except ValueError as e:
            raise InvalidRecordError(record, "seniority_tier", str(e)) from e
        object.__setattr__(self, "seniority_tier", tier)
        object.__setattr__(
            self,
            "compensation_mode",
            _parse_enum(CompensationMode, self.compensation_mode, record, "compensation_mode"),
        )
        object.__setattr__(
            self, "status", _parse_enum(ProfessionalStatus, self.status, record, "status")
        )

        object.__setattr__(
            self, "hourly_rate", _optional_decimal(self.hourly_rate, record, "hourly_rate")
        )
        object.__setattr__(
            self, "fixed_amount", _optional_decimal(self.fixed_amount, record, "fixed_amount")
        )
        object.__setattr__(self, "fixed_period", _coerce_period(self.fixed_period))
        _require_non_negative(self.hourly_rate, record, "hourly_rate")
        _require_non_negative(self.fixed_amount, record, "fixed_amount")

        has_hourly = self.hourly_rate is not None
        has_fixed = self.fixed_amount is not None or self.fixed_period is not None
        if self.compensation_mode == CompensationMode.HOURLY:
            if not has_hourly:
                raise InvalidRecordError(record, "hourly_rate", "required for HOURLY")
            if has_fixed:
                raise InvalidRecordError(
                    record, "fixed_amount", "must be empty for HOURLY"
                )
        else:
            if has_hourly:
                raise InvalidRecordError(record, "hourly_rate", "must be empty for FIXED")
            if self.fixed_amount is None or self.fixed_period is None:
                raise InvalidRecordError(
                    record, "fixed_amount", "amount and period required for FIXED"
                )

    @property
    def is_active(self) -> bool:
        return self.status == ProfessionalStatus.ACTIVE


@dataclass(frozen=True)
class ContractAssignment:
    """
    Links a professional to a contract with per-contract billing overrides.

    The same professional may bill different amounts on different contracts;
    any override set here wins over the professional's stored value.
    """

    professional_id: str
    professional: Professional | None = None
    hourly_rate_override: Decimal | None = None
    monthly_hours: Decimal | None = None
    fixed_amount_override: Decimal | None = None
    fixed_period_override: BillingPeriod | str | None = None

    def __post_init__(self) -> None:
        record = "ContractAssignment"
        if not self.professional_id:
            raise InvalidRecordError(record, "professional_id", "is required")
        if (
            self.professional is not None
            and self.professional.professional_id != self.professional_id
        ):
            raise InvalidRecordError(
                record,
                "professional",
                f"id {self.professional.professional_id} does not match "
                f"{self.professional_id}",
            )
        for name in ("hourly_rate_override", "monthly_hours", "fixed_amount_override"):
            value = _optional_decimal(getattr(self, name), record, name)
            _require_non_negative(value, record, name)
            object.__setattr__(self, name, value)
        object.__setattr__(
            self, "fixed_period_override", _coerce_period(self.fixed_period_override)
        )


@dataclass(frozen=True)
class AncillaryCost:
    """Equipment, software or expense line billed monthly against a contract."""

    description: str
    monthly_amount: Decimal
    category: AncillaryCategory = AncillaryCategory.EXPENSE

    def __post_init__(self) -> None:
        amount = to_decimal(self.monthly_amount, "AncillaryCost", "monthly_amount")
        _require_non_negative(amount, "AncillaryCost", "monthly_amount")
        object.__setattr__(self, "monthly_amount", amount)
        object.__setattr__(
            self,
            "category",
            _parse_enum(AncillaryCategory, self.category, "AncillaryCost", "category"),
        )


@dataclass(frozen=True)
class Contract:
    """
    A client contract with its staffing and ancillary costs.

    Contract:
        Frozen dataclass; ``assignments`` and ``ancillary_costs`` are
        normalized to tuples.
    Guarantees:
        - ``end_date >= start_date`` when an end date is present.
        - ``contract_value`` is a non-negative Decimal; ``tax_percentage``
          lies in [0, 100].
        - ``estimated_duration_months`` is None or an int (not a bool).
    Non-goals:
        - Does not store its duration; see ``staffing_engines.duration``.
        - ``value_is_monthly`` only changes the meaning of ``contract_value``
          for indeterminate contracts.
    """

    contract_id: str
    start_date: date
    contract_value: Decimal
    tax_percentage: Decimal = Decimal("0")
    end_date: date | None = None
    status: ContractStatus = ContractStatus.ACTIVE
    value_is_monthly: bool = False
    estimated_duration_months: int | None = None
    assignments: tuple[ContractAssignment, ...] = ()
    ancillary_costs: tuple[AncillaryCost, ...] = ()
    client_id: str | None = None
    project_name: str = ""

    def __post_init__(self) -> None:
        record = "Contract"
        if not self.contract_id:
            raise InvalidRecordError(record, "contract_id", "is required")
        value = to_decimal(self.contract_value, record, "contract_value")
        _require_non_negative(value, record, "contract_value")
        object.__setattr__(self, "contract_value", value)

        tax = to_decimal(self.tax_percentage, record, "tax_percentage")
        if tax < 0 or tax > 100:
            raise InvalidRecordError(record, "tax_percentage", "must be within 0-100")
        object.__setattr__(self, "tax_percentage", tax)

        if self.end_date is not None and self.end_date < self.start_date:
            raise InvalidRecordError(
                record,
                "end_date",
                f"{self.end_date.isoformat()} is before start "
                f"{self.start_date.isoformat()}",
            )
        estimate = self.estimated_duration_months
        if estimate is not None and (
            isinstance(estimate, bool) or not isinstance(estimate, int)
        ):
            raise InvalidRecordError(
                record,
                "estimated_duration_months",
                f"must be a whole number of months, got {estimate!r}",
            )
        object.__setattr__(
            self, "status", _parse_enum(ContractStatus, self.status, record, "status")
        )
        object.__setattr__(self, "assignments", tuple(self.assignments))
        object.__setattr__(self, "ancillary_costs", tuple(self.ancillary_costs))

    @property
    def is_indeterminate(self) -> bool:
        """True when the contract has no fixed end date."""
        return self.end_date is None

    @property
    def is_active(self) -> bool:
        return self.status == ContractStatus.ACTIVE

    @property
    def professional_ids(self) -> tuple[str, ...]:
        return tuple(a.professional_id for a in self.assignments)

    def includes(self, professional_id: str) -> bool:
        """True if any assignment references ``professional_id``."""
        return any(a.professional_id == professional_id for a in self.assignments)
