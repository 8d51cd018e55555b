"""
staffing_config -- single public entrypoint for staffing configuration.

Responsibility:
    Provides ``get_default_config()`` (the packaged defaults) and
    ``load_config()`` (an explicit YAML document). Both return a frozen
    ``StaffingConfig`` whose ``settings`` and ``rate_table`` are injected
    into the engines; no engine reads configuration on its own.

Failure modes:
    - ``FileNotFoundError`` -- the requested document does not exist.
    - ``InvalidConfigurationError`` -- schema or structural failures.

Audit relevance:
    Every successful load emits a ``STAFFING_CONFIG_TRACE`` log entry with
    the source, version, checksum and rate count, tying computed figures to
    the exact price table that produced them.
"""

from __future__ import annotations

import logging
from pathlib import Path

from staffing_config import loader
from staffing_config.schema import EngineSettings, RateEntry, RateTable, StaffingConfig

_logger = logging.getLogger("staffing_kernel.config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "staffing.yaml"


def load_config(path: Path | str) -> StaffingConfig:
    """Load a configuration document and emit STAFFING_CONFIG_TRACE."""
    config = loader.load_config(Path(path))
    _logger.info(
        "STAFFING_CONFIG_TRACE",
        extra={
            "trace_type": "STAFFING_CONFIG_TRACE",
            "source": str(path),
            "version": config.version,
            "checksum": config.checksum,
            "rate_count": len(config.rate_table.entries),
        },
    )
    return config


def get_default_config() -> StaffingConfig:
    """Load the packaged default configuration."""
    return load_config(_DEFAULT_CONFIG_PATH)


__all__ = [
    "EngineSettings",
    "RateEntry",
    "RateTable",
    "StaffingConfig",
    "get_default_config",
    "load_config",
]
