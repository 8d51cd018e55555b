"""
Configuration Loader (``staffing_config.loader``).

Responsibility
--------------
Loads a YAML configuration document and parses it into the frozen
``staffing_config.schema`` types: ``EngineSettings`` and ``RateTable``.

Architecture position
---------------------
**Config layer** -- infrastructure tooling. Engines never call the loader;
callers load a ``StaffingConfig`` once and inject its parts into the
engines they construct.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Malformed documents raise ``InvalidConfigurationError``; there are no
  silent defaults for present-but-invalid values.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong shapes or non-numeric rates  -> ``InvalidConfigurationError``.

Expected document shape::

    version: "1"
    settings:
      standard_monthly_hours: 160
      default_estimated_duration_months: 12
    rates:
      junior:
        Research: 112.98
    specialty_aliases:
      Pesquisador: Research
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from staffing_config.schema import EngineSettings, RateEntry, RateTable, StaffingConfig
from staffing_kernel.domain.records import SeniorityTier
from staffing_kernel.exceptions import InvalidConfigurationError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Preconditions:
        - ``path`` must point to an existing, readable YAML file.
    Postconditions:
        - Returns a ``dict`` (possibly empty if the YAML is empty).
    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        InvalidConfigurationError: if the top level is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise InvalidConfigurationError(str(path), "top level must be a mapping")
    return data


def _decimal(value: Any, source: str, name: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidConfigurationError(source, f"{name} must be numeric")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise InvalidConfigurationError(source, f"{name} must be numeric") from e
    if not result.is_finite() or result < 0:
        raise InvalidConfigurationError(source, f"{name} must be a non-negative number")
    return result


def _positive_int(value: Any, source: str, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfigurationError(source, f"{name} must be a positive integer")
    return value


def parse_settings(data: dict[str, Any], source: str = "<settings>") -> EngineSettings:
    """Parse ``EngineSettings``; absent keys keep their defaults."""
    if not isinstance(data, dict):
        raise InvalidConfigurationError(source, "settings must be a mapping")
    defaults = EngineSettings()
    unknown = set(data) - set(vars(defaults))
    if unknown:
        raise InvalidConfigurationError(
            source, f"unknown settings: {', '.join(sorted(unknown))}"
        )
    return EngineSettings(
        standard_monthly_hours=_decimal(
            data.get("standard_monthly_hours", defaults.standard_monthly_hours),
            source,
            "standard_monthly_hours",
        ),
        default_estimated_duration_months=_positive_int(
            data.get(
                "default_estimated_duration_months",
                defaults.default_estimated_duration_months,
            ),
            source,
            "default_estimated_duration_months",
        ),
        suggestion_desired_margin_percent=_decimal(
            data.get(
                "suggestion_desired_margin_percent",
                defaults.suggestion_desired_margin_percent,
            ),
            source,
            "suggestion_desired_margin_percent",
        ),
        suggestion_limit=_positive_int(
            data.get("suggestion_limit", defaults.suggestion_limit),
            source,
            "suggestion_limit",
        ),
        months_per_year=_positive_int(
            data.get("months_per_year", defaults.months_per_year),
            source,
            "months_per_year",
        ),
    )


def parse_rate_table(
    rates: dict[str, Any],
    aliases: dict[str, str] | None = None,
    source: str = "<rates>",
) -> RateTable:
    """
    Parse a ``RateTable`` from ``{tier: {specialty: hourly_rate}}``.

    Preconditions:
        - Tier keys name a ``SeniorityTier`` (legacy labels accepted).
    Postconditions:
        - Entries keep document order, which drives similarity lookups.
    Raises:
        InvalidConfigurationError: on unknown tiers or non-numeric rates.
    """
    if not isinstance(rates, dict):
        raise InvalidConfigurationError(source, "rates must be a mapping")
    entries: list[RateEntry] = []
    for tier_name, specialties in rates.items():
        try:
            tier = SeniorityTier.parse(tier_name)
        except ValueError as e:
            raise InvalidConfigurationError(
                source, f"unknown seniority tier {tier_name!r}"
            ) from e
        if not isinstance(specialties, dict):
            raise InvalidConfigurationError(
                source, f"rates for {tier_name!r} must be a mapping"
            )
        for specialty, rate in specialties.items():
            entries.append(
                RateEntry(
                    seniority_tier=tier,
                    specialty=str(specialty),
                    hourly_rate=_decimal(rate, source, f"rates.{tier_name}.{specialty}"),
                )
            )

    alias_pairs: list[tuple[str, str]] = []
    for alias, target in (aliases or {}).items():
        alias_pairs.append((str(alias), str(target)))

    return RateTable(entries=tuple(entries), aliases=tuple(alias_pairs))


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 over the canonical JSON form of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_config(data: dict[str, Any], source: str = "<config>") -> StaffingConfig:
    """Parse a complete ``StaffingConfig`` from an already-loaded document."""
    return StaffingConfig(
        settings=parse_settings(data.get("settings") or {}, source),
        rate_table=parse_rate_table(
            data.get("rates") or {}, data.get("specialty_aliases"), source
        ),
        version=str(data.get("version", "1")),
        checksum=compute_checksum(data),
    )


def load_config(path: Path) -> StaffingConfig:
    """Load and parse a YAML configuration document."""
    path = Path(path)
    return parse_config(load_yaml_file(path), str(path))
