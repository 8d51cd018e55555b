"""
Tests for the Ranked Suggestion Generator.

Covers:
- Budget from value and tax, annualized for monthly contracts
- Margin percent ranking and the unavailable penalty
- Desired-margin floor, specialty filter and result limit
"""

from decimal import Decimal

import pytest

from staffing_config.schema import EngineSettings, RateEntry, RateTable
from staffing_engines.compensation import CompensationNormalizer
from staffing_engines.suggestions import (
    UNAVAILABLE_PENALTY,
    RankedSuggestionGenerator,
    available_candidates,
)
from staffing_kernel.domain.records import (
    ContractStatus,
    ProfessionalStatus,
    SeniorityTier,
)
from tests.factories import make_contract, make_fixed, make_hourly


def _ids(rows) -> list[str]:
    return [r.professional.professional_id for r in rows]


class TestBudget:
    """Budget available to staff a contract."""

    def setup_method(self):
        self.generator = RankedSuggestionGenerator()

    def test_total_value_budget(self):
        budget = self.generator.available_budget(Decimal("100000"), Decimal("10000"), False)
        assert budget == Decimal("90000")

    def test_monthly_value_is_annualized(self):
        budget = self.generator.available_budget(Decimal("10000"), Decimal("1000"), True)
        assert budget == Decimal("108000")


class TestRanking:
    """Margin-based ranking."""

    def setup_method(self):
        self.generator = RankedSuggestionGenerator()

    def test_margin_and_percent(self):
        professional = make_hourly("a", rate="50")  # 8000 / month
        [row] = self.generator.rank(
            [professional], [], Decimal("100000"), Decimal("10000"), False
        )
        assert row.monthly_cost == Decimal("8000")
        assert row.margin == Decimal("82000")
        assert row.margin_percent.quantize(Decimal("0.01")) == Decimal("91.11")
        assert row.score == row.margin_percent
        assert row.available
        assert row.specialty == "Research"

    def test_monthly_contract_annualizes_cost(self):
        professional = make_hourly("a", rate="50")
        [row] = self.generator.rank(
            [professional], [], Decimal("10000"), Decimal("1000"), True
        )
        assert row.margin == Decimal("12000")
        assert row.monthly_cost == Decimal("8000")

    def test_cheaper_professional_ranks_first(self):
        pricey = make_fixed("pricey", amount="5000")
        cheap = make_fixed("cheap", amount="1000")
        rows = self.generator.rank(
            [pricey, cheap], [], Decimal("10000"), Decimal("0"), False
        )
        assert _ids(rows) == ["cheap", "pricey"]

    def test_unavailable_score_is_halved(self):
        busy = make_fixed("busy", amount="1000")
        free = make_fixed("free", amount="3000")
        contracts = [
            make_contract("c-1", professionals=(busy,)),
            make_contract("c-2", professionals=(busy,)),
        ]
        rows = self.generator.rank(
            [busy, free], contracts, Decimal("10000"), Decimal("0"), False
        )
        # busy: 90% margin halved to 45; free: 70% margin
        assert _ids(rows) == ["free", "busy"]
        busy_row = rows[1]
        assert not busy_row.available
        assert busy_row.margin_percent == Decimal("90")
        assert busy_row.score == Decimal("90") * UNAVAILABLE_PENALTY

    def test_closed_contracts_do_not_penalize(self):
        professional = make_fixed("p", amount="1000")
        contracts = [
            make_contract("c-1", professionals=(professional,), status=ContractStatus.CLOSED),
            make_contract("c-2", professionals=(professional,)),
        ]
        [row] = self.generator.rank(
            [professional], contracts, Decimal("10000"), Decimal("0"), False
        )
        assert row.available

    def test_ties_keep_input_order(self):
        first = make_fixed("first", amount="2000")
        second = make_fixed("second", amount="2000")
        rows = self.generator.rank(
            [first, second], [], Decimal("10000"), Decimal("0"), False
        )
        assert _ids(rows) == ["first", "second"]

    def test_rows_carry_cost_benefit_score(self):
        professional = make_fixed("p", amount="1000", tier=SeniorityTier.SENIOR)
        [row] = self.generator.rank(
            [professional], [], Decimal("10000"), Decimal("0"), False
        )
        assert row.cost_benefit == pytest.approx(0.003)

    def test_inactive_professionals_are_still_ranked(self):
        inactive = make_fixed("p", amount="1000", status=ProfessionalStatus.INACTIVE)
        rows = self.generator.rank(
            [inactive], [], Decimal("10000"), Decimal("0"), False
        )
        assert _ids(rows) == ["p"]


class TestFilters:
    """Margin floor, specialty filter and limit."""

    def setup_method(self):
        self.generator = RankedSuggestionGenerator()

    def test_margin_floor_is_inclusive(self):
        at_floor = make_fixed("at", amount="12000")  # -20%
        below = make_fixed("below", amount="12001")
        rows = self.generator.rank(
            [at_floor, below], [], Decimal("10000"), Decimal("0"), False
        )
        assert _ids(rows) == ["at"]

    def test_custom_desired_margin(self):
        professional = make_fixed("p", amount="12000")
        rows = self.generator.rank(
            [professional], [], Decimal("10000"), Decimal("0"), False,
            desired_margin_percent=Decimal("10"),
        )
        assert rows == []

    def test_zero_budget_gives_zero_margin_percent(self):
        professional = make_fixed("p", amount="5000")
        [row] = self.generator.rank(
            [professional], [], Decimal("1000"), Decimal("1000"), False
        )
        assert row.margin_percent == Decimal("0")
        assert row.margin == Decimal("-5000")

    def test_specialty_filter(self):
        research = make_fixed("r", amount="1000", specialty="Research")
        writer = make_fixed("w", amount="1000", specialty="UX Writer")
        rows = self.generator.rank(
            [research, writer], [], Decimal("10000"), Decimal("0"), False,
            specialty=" ux writer ",
        )
        assert _ids(rows) == ["w"]

    def test_limit(self):
        pool = [make_fixed(str(i), amount=str(100 + i)) for i in range(5)]
        rows = self.generator.rank(
            pool, [], Decimal("10000"), Decimal("0"), False, limit=2
        )
        assert _ids(rows) == ["0", "1"]

    def test_default_limit_from_settings(self):
        generator = RankedSuggestionGenerator(settings=EngineSettings(suggestion_limit=3))
        pool = [make_fixed(str(i), amount="100") for i in range(6)]
        rows = generator.rank(pool, [], Decimal("10000"), Decimal("0"), False)
        assert len(rows) == 3

    def test_empty_pool(self):
        assert self.generator.rank([], [], Decimal("10000"), Decimal("0"), False) == []


class TestReferenceAndCandidates:
    """Rate-table reference prices and the available candidate pool."""

    def test_reference_monthly_cost_attached(self):
        table = RateTable(
            entries=(RateEntry(SeniorityTier.PLENO, "Research", Decimal("100")),)
        )
        generator = RankedSuggestionGenerator(
            normalizer=CompensationNormalizer(rate_table=table)
        )
        [row] = generator.rank(
            [make_hourly("p", rate="90")], [], Decimal("100000"), Decimal("0"), False
        )
        assert row.reference_monthly_cost == Decimal("16000")

    def test_available_candidates(self):
        busy = make_hourly("busy")
        free = make_hourly("free")
        inactive = make_hourly("inactive", status=ProfessionalStatus.INACTIVE)
        contracts = [
            make_contract("c-1", professionals=(busy,)),
            make_contract("c-2", professionals=(busy,)),
        ]
        result = available_candidates([busy, free, inactive], contracts)
        assert [p.professional_id for p in result] == ["free"]
