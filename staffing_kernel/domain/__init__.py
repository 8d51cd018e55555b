"""Pure domain records for the staffing engine."""

from staffing_kernel.domain.records import (
    AncillaryCategory,
    AncillaryCost,
    BillingPeriod,
    CompensationMode,
    Contract,
    ContractAssignment,
    ContractStatus,
    Professional,
    ProfessionalStatus,
    SeniorityTier,
)

__all__ = [
    "AncillaryCategory",
    "AncillaryCost",
    "BillingPeriod",
    "CompensationMode",
    "Contract",
    "ContractAssignment",
    "ContractStatus",
    "Professional",
    "ProfessionalStatus",
    "SeniorityTier",
]
