"""
Pytest fixtures for the staffing engine test suite.

Provides:
- Logging reset between tests
- Sample professionals (record factories live in tests/factories.py)
"""

import pytest

from staffing_kernel.domain.records import Professional
from staffing_kernel.logging_config import LogContext, reset_logging
from tests.factories import make_fixed, make_hourly


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def hourly_professional() -> Professional:
    return make_hourly()


@pytest.fixture
def fixed_professional() -> Professional:
    return make_fixed()
