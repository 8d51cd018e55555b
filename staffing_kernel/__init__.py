"""
Staffing Kernel

Shared foundation for the contract financial normalization and staffing
allocation engines:
- Immutable, self-validating records (professionals, contracts, assignments)
- Typed exceptions with machine-readable codes
- Structured JSON logging
"""

__version__ = "0.1.0"
