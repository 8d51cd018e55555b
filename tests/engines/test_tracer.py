"""Tests for the engine invocation tracer."""

import logging
from decimal import Decimal

from staffing_engines.allocation import GreedyAllocationSelector
from staffing_engines.tracer import (
    _canonicalize,
    compute_input_fingerprint,
    traced_engine,
)
from staffing_kernel.domain.records import SeniorityTier
from tests.factories import make_contract, make_fixed


def _traces(caplog) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.getMessage() == "STAFFING_ENGINE_TRACE"]


class TestFingerprint:

    def test_deterministic(self):
        args = {"contract": make_contract()}
        assert compute_input_fingerprint(("contract",), args) == compute_input_fingerprint(
            ("contract",), args
        )

    def test_length(self):
        assert len(compute_input_fingerprint(("x",), {"x": 1})) == 16

    def test_different_inputs_differ(self):
        first = compute_input_fingerprint(("contract",), {"contract": make_contract(value="1")})
        second = compute_input_fingerprint(("contract",), {"contract": make_contract(value="2")})
        assert first != second

    def test_missing_field_is_null(self):
        assert compute_input_fingerprint(("x",), {}) == compute_input_fingerprint(
            ("x",), {"x": None}
        )

    def test_canonicalize_records_and_enums(self):
        assert _canonicalize(SeniorityTier.SENIOR) == "senior"
        assert _canonicalize({"b": 1, "a": 2}) == "{a:2,b:1}"
        assert _canonicalize(make_fixed("p", amount="10")).startswith("Professional(")


class TestTracedEngine:

    def test_emits_trace(self, caplog):
        @traced_engine("demo", "2.1", fingerprint_fields=("value",))
        def double(value):
            return value * 2

        with caplog.at_level(logging.INFO):
            assert double(21) == 42

        [trace] = _traces(caplog)
        assert trace.engine_name == "demo"
        assert trace.engine_version == "2.1"
        assert trace.input_fingerprint == compute_input_fingerprint(("value",), {"value": 21})
        assert trace.duration_ms >= 0

    def test_positional_and_keyword_fingerprint_match(self, caplog):
        @traced_engine("demo", "1.0", fingerprint_fields=("a", "b"))
        def add(a, b=0):
            return a + b

        with caplog.at_level(logging.INFO):
            add(1, 2)
            add(a=1, b=2)

        first, second = _traces(caplog)
        assert first.input_fingerprint == second.input_fingerprint

    def test_selector_propose_is_traced(self, caplog):
        selector = GreedyAllocationSelector()
        with caplog.at_level(logging.INFO):
            selector.propose(Decimal("10000"), [make_fixed("p", amount="100")], 1)

        [trace] = _traces(caplog)
        assert trace.engine_name == "allocation"
        assert trace.function == "GreedyAllocationSelector.propose"
