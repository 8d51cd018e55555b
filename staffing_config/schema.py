"""
Staffing configuration schema.

Defines the frozen, injectable configuration the engines read: numeric
settings and the hourly rate table (seniority tier x specialty). YAML
documents are parsed into these types by the loader; engines receive them
as constructor arguments and never consult module-level state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from staffing_kernel.domain.records import SeniorityTier
from staffing_kernel.exceptions import UnknownRateError

# ---------------------------------------------------------------------------
# Engine settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineSettings:
    """Numeric knobs shared by the calculation engines."""

    standard_monthly_hours: Decimal = Decimal("160")  # 8h x 20 workdays
    default_estimated_duration_months: int = 12
    suggestion_desired_margin_percent: Decimal = Decimal("20")
    suggestion_limit: int = 20
    months_per_year: int = 12


# ---------------------------------------------------------------------------
# Rate table
# ---------------------------------------------------------------------------


def _normalize(text: str) -> str:
    return " ".join(text.split()).upper()


@dataclass(frozen=True)
class RateEntry:
    """Hourly rate for one seniority tier and specialty."""

    seniority_tier: SeniorityTier
    specialty: str
    hourly_rate: Decimal


@dataclass(frozen=True)
class RateTable:
    """
    Immutable seniority x specialty hourly rate table.

    Contract:
        Lookups are case- and whitespace-insensitive. Specialty aliases map
        synonyms onto a canonical specialty before matching.
    Guarantees:
        - ``hourly_rate`` never raises; it returns None when no entry fits.
        - Lookup order is exact match, then substring similarity within the
          tier, in the order entries were declared.
    Non-goals:
        - Does not interpolate between tiers.
    """

    entries: tuple[RateEntry, ...] = ()
    aliases: tuple[tuple[str, str], ...] = ()

    def _canonical_specialty(self, specialty: str) -> str:
        key = _normalize(specialty)
        for alias, target in self.aliases:
            if _normalize(alias) == key:
                return _normalize(target)
        return key

    def hourly_rate(
        self, seniority_tier: SeniorityTier | str, specialty: str
    ) -> Decimal | None:
        """Return the hourly rate for a profile, or None when absent."""
        try:
            tier = SeniorityTier.parse(seniority_tier)
        except ValueError:
            return None
        key = self._canonical_specialty(specialty)
        if not key:
            return None
        in_tier = [e for e in self.entries if e.seniority_tier == tier]
        for entry in in_tier:
            if _normalize(entry.specialty) == key:
                return entry.hourly_rate
        for entry in in_tier:
            candidate = _normalize(entry.specialty)
            if key in candidate or candidate in key:
                return entry.hourly_rate
        return None

    def require_rate(
        self, seniority_tier: SeniorityTier | str, specialty: str
    ) -> Decimal:
        """Strict variant of ``hourly_rate``."""
        rate = self.hourly_rate(seniority_tier, specialty)
        if rate is None:
            raise UnknownRateError(str(seniority_tier), specialty)
        return rate

    def tiers(self) -> list[SeniorityTier]:
        return sorted({e.seniority_tier for e in self.entries})

    def specialties(self) -> list[str]:
        return sorted({e.specialty for e in self.entries})

    def specialties_for(self, seniority_tier: SeniorityTier | str) -> list[str]:
        tier = SeniorityTier.parse(seniority_tier)
        return [e.specialty for e in self.entries if e.seniority_tier == tier]


# ---------------------------------------------------------------------------
# Complete configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StaffingConfig:
    """Settings plus rate table, as loaded from one YAML document."""

    settings: EngineSettings = field(default_factory=EngineSettings)
    rate_table: RateTable = field(default_factory=RateTable)
    version: str = "1"
    checksum: str = ""
