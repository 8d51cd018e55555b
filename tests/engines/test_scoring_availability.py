"""
Tests for the Cost-Benefit Scorer and the Availability Checker.
"""

from decimal import Decimal

import pytest

from staffing_config.schema import EngineSettings
from staffing_engines.availability import (
    MAX_ACTIVE_CONTRACTS,
    active_contract_count,
    availability_map,
    is_available,
)
from staffing_engines.compensation import CompensationNormalizer
from staffing_engines.scoring import SENIORITY_WEIGHTS, CostBenefitScorer, score
from staffing_kernel.domain.records import ContractStatus, SeniorityTier
from tests.factories import make_contract, make_fixed, make_hourly


class TestCostBenefitScore:
    """weight / max(monthly_cost, 1)."""

    def setup_method(self):
        self.scorer = CostBenefitScorer()

    @pytest.mark.parametrize(
        "tier,weight",
        [
            (SeniorityTier.JUNIOR, 1),
            (SeniorityTier.PLENO, 2),
            (SeniorityTier.SENIOR, 3),
            (SeniorityTier.SPECIALIST, 3),
        ],
    )
    def test_weights(self, tier, weight):
        assert SENIORITY_WEIGHTS[tier] == weight
        professional = make_fixed(amount="1000", tier=tier)
        assert self.scorer.score(professional) == pytest.approx(weight / 1000)

    def test_specialist_shares_senior_weight(self):
        senior = make_hourly("s", rate="100", tier=SeniorityTier.SENIOR)
        specialist = make_hourly("x", rate="100", tier=SeniorityTier.SPECIALIST)
        assert self.scorer.score(senior) == self.scorer.score(specialist)

    def test_zero_cost_is_floored_at_one(self):
        professional = make_fixed(amount="0", tier=SeniorityTier.PLENO)
        assert self.scorer.score(professional) == 2.0

    def test_sub_unit_cost_is_floored_at_one(self):
        professional = make_fixed(amount="0.5", tier=SeniorityTier.SENIOR)
        assert self.scorer.score(professional) == 3.0

    def test_cheaper_scores_higher_within_tier(self):
        cheap = make_hourly("a", rate="50")
        pricey = make_hourly("b", rate="51")
        assert self.scorer.score(cheap) > self.scorer.score(pricey)

    def test_returns_float(self):
        assert isinstance(score(make_hourly()), float)

    def test_uses_injected_normalizer(self):
        scorer = CostBenefitScorer(
            CompensationNormalizer(EngineSettings(standard_monthly_hours=Decimal("100")))
        )
        professional = make_hourly(rate="20", tier=SeniorityTier.JUNIOR)
        assert scorer.score(professional) == pytest.approx(1 / 2000)


class TestAvailability:
    """Available while on fewer than two active contracts."""

    def setup_method(self):
        self.professional = make_hourly("p-1")
        self.other = make_hourly("p-2")

    def _contracts(self, *statuses):
        return [
            make_contract(f"c-{i}", professionals=(self.professional,), status=status)
            for i, status in enumerate(statuses)
        ]

    def test_threshold_is_two(self):
        assert MAX_ACTIVE_CONTRACTS == 2

    def test_no_contracts_is_available(self):
        assert is_available("p-1", [])

    def test_one_active_contract_is_available(self):
        assert is_available("p-1", self._contracts(ContractStatus.ACTIVE))

    def test_two_active_contracts_is_occupied(self):
        contracts = self._contracts(ContractStatus.ACTIVE, ContractStatus.ACTIVE)
        assert not is_available("p-1", contracts)

    def test_pending_and_closed_do_not_count(self):
        contracts = self._contracts(
            ContractStatus.ACTIVE, ContractStatus.PENDING, ContractStatus.CLOSED
        )
        assert active_contract_count("p-1", contracts) == 1
        assert is_available("p-1", contracts)

    def test_other_professionals_contracts_ignored(self):
        contracts = [
            make_contract("c-1", professionals=(self.other,)),
            make_contract("c-2", professionals=(self.other,)),
        ]
        assert is_available("p-1", contracts)
        assert not is_available("p-2", contracts)

    def test_double_assignment_counts_once(self):
        contract = make_contract(
            "c-1", professionals=(self.professional, self.professional)
        )
        assert active_contract_count("p-1", [contract]) == 1

    def test_availability_map(self):
        contracts = self._contracts(ContractStatus.ACTIVE, ContractStatus.ACTIVE)
        assert availability_map([self.professional, self.other], contracts) == {
            "p-1": False,
            "p-2": True,
        }
