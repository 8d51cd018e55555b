"""
Module: staffing_engines.availability
Responsibility:
    Decide whether a professional is available for new work, based on how
    many ACTIVE contracts already include them.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - A professional on fewer than ``MAX_ACTIVE_CONTRACTS`` (2) active
      contracts is available. The threshold is a module constant, not a
      configuration setting.
    - A contract counts once per professional even if it lists them on
      several assignments.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from staffing_kernel.domain.records import Contract, Professional

MAX_ACTIVE_CONTRACTS = 2


def active_contract_count(professional_id: str, contracts: Iterable[Contract]) -> int:
    """Number of ACTIVE contracts that include ``professional_id``."""
    return sum(
        1 for c in contracts if c.is_active and c.includes(professional_id)
    )


def is_available(professional_id: str, contracts: Iterable[Contract]) -> bool:
    """True when the professional is on 0 or 1 active contracts."""
    return active_contract_count(professional_id, contracts) < MAX_ACTIVE_CONTRACTS


def availability_map(
    professionals: Iterable[Professional],
    contracts: Sequence[Contract],
) -> dict[str, bool]:
    """Availability keyed by professional id."""
    return {
        p.professional_id: is_available(p.professional_id, contracts)
        for p in professionals
    }
