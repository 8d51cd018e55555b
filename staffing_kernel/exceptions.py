"""
Typed exception hierarchy for the staffing engine.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

The calculation engines never raise for value-level edge cases: an unknown
billing period, a zero net revenue or an empty candidate list all resolve to
defaults and a log record. The only raising paths are the boundaries where
data enters the engine:

  1. Record construction (``staffing_kernel.domain.records``), which enforces
     the invariants of each record at ``__post_init__`` time.
  2. Configuration loading (``staffing_config``), which parses YAML documents
     into frozen settings and the hourly rate table.

Every exception carries a class-level ``code`` and its context as attributes,
so callers catch by type and read structured data instead of parsing
messages:

    try:
        professional = Professional(...)
    except InvalidRecordError as e:
        api_response(code=e.code, field=e.field, reason=e.reason)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    StaffingEngineError (base)
    |
    +-- RecordError
    |   +-- InvalidRecordError
    |
    +-- ConfigurationError
        +-- InvalidConfigurationError
        +-- UnknownRateError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Record          | INVALID_RECORD              | Record violates a construction invariant
----------------|-----------------------------|-----------------------------------------
Configuration   | INVALID_CONFIGURATION       | YAML document is malformed
                | UNKNOWN_RATE                | No rate for tier/specialty (strict lookup)

===============================================================================
"""


class StaffingEngineError(Exception):
    """
    Base exception for all staffing engine errors.

    All subclasses must have a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "STAFFING_ENGINE_ERROR"


# Record exceptions


class RecordError(StaffingEngineError):
    """Base exception for record construction errors."""

    code: str = "RECORD_ERROR"


class InvalidRecordError(RecordError):
    """A record failed one of its construction invariants."""

    code: str = "INVALID_RECORD"

    def __init__(self, record_type: str, field: str, reason: str):
        self.record_type = record_type
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {record_type}.{field}: {reason}")


# Configuration exceptions


class ConfigurationError(StaffingEngineError):
    """Base exception for configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class InvalidConfigurationError(ConfigurationError):
    """A configuration document could not be parsed into settings."""

    code: str = "INVALID_CONFIGURATION"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid configuration in {source}: {reason}")


class UnknownRateError(ConfigurationError):
    """The rate table has no hourly rate for the requested profile."""

    code: str = "UNKNOWN_RATE"

    def __init__(self, seniority_tier: str, specialty: str):
        self.seniority_tier = seniority_tier
        self.specialty = specialty
        super().__init__(
            f"No hourly rate for tier {seniority_tier} and specialty {specialty!r}"
        )
