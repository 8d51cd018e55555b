"""
Property-based tests for the calculation engines.

Properties checked:
- Monthly/total consistency for monthly-valued indeterminate contracts
- Idempotence of summaries and proposals
- Headcount and budget bounds of the greedy selector
- Score monotonicity in cost within a seniority tier
- Margin sign follows profit sign
"""

from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from staffing_engines.allocation import BACKFILL_BUDGET_SHARE, GreedyAllocationSelector
from staffing_engines.financial_summary import FinancialSummaryCalculator
from staffing_engines.scoring import CostBenefitScorer
from staffing_kernel.domain.records import SeniorityTier
from tests.factories import make_contract, make_fixed, make_hourly

amounts = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("9999999.99"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)

tiers = st.sampled_from(list(SeniorityTier))


@composite
def professionals(draw, max_size=8):
    """Distinct-id professionals with fixed monthly costs."""
    costs = draw(st.lists(amounts, max_size=max_size))
    return [
        make_fixed(f"p-{i}", amount=cost, tier=draw(tiers))
        for i, cost in enumerate(costs)
    ]


@composite
def contracts(draw):
    """Indeterminate or bounded contracts with staff and ancillary lines."""
    staff = tuple(
        make_hourly(f"p-{i}", rate=rate)
        for i, rate in enumerate(
            draw(st.lists(st.decimals(min_value=0, max_value=500, places=2), max_size=4))
        )
    )
    ancillary = tuple(
        str(a)
        for a in draw(st.lists(st.decimals(min_value=0, max_value=5000, places=2), max_size=3))
    )
    return make_contract(
        value=draw(amounts),
        tax=draw(st.decimals(min_value=0, max_value=100, places=2)),
        end=None,
        value_is_monthly=draw(st.booleans()),
        estimated_duration_months=draw(st.integers(min_value=1, max_value=120)),
        professionals=staff,
        ancillary=ancillary,
    )


class TestSummaryProperties:

    def setup_method(self):
        self.calculator = FinancialSummaryCalculator()

    @given(
        value=amounts,
        months=st.integers(min_value=1, max_value=600),
    )
    def test_monthly_value_total_is_exact(self, value, months):
        contract = make_contract(
            value=value, end=None, value_is_monthly=True,
            estimated_duration_months=months,
        )
        summary = self.calculator.summarize(contract)
        assert summary.total_value == value * months
        assert summary.monthly_revenue == value

    @given(contract=contracts())
    @settings(max_examples=50)
    def test_summary_is_idempotent(self, contract):
        assert self.calculator.summarize(contract) == self.calculator.summarize(contract)

    @given(contract=contracts())
    @settings(max_examples=50)
    def test_margin_sign_follows_profit(self, contract):
        summary = self.calculator.summarize(contract)
        if summary.monthly_net_revenue > 0:
            assert (summary.margin_percent > 0) == (summary.monthly_profit > 0)
            assert (summary.margin_percent < 0) == (summary.monthly_profit < 0)
        else:
            assert summary.margin_percent == 0


class TestAllocationProperties:

    def setup_method(self):
        self.selector = GreedyAllocationSelector()

    @given(
        budget=amounts,
        pool=professionals(),
        headcount=st.integers(min_value=0, max_value=10),
    )
    @settings(max_examples=100)
    def test_bounds(self, budget, pool, headcount):
        proposal = self.selector.propose(budget, pool, headcount)
        ids = [p.professional_id for p in proposal.selected]
        assert len(ids) <= headcount
        assert len(set(ids)) == len(ids)
        assert proposal.running_total <= budget * BACKFILL_BUDGET_SHARE

    @given(budget=amounts, pool=professionals(), headcount=st.integers(0, 10))
    @settings(max_examples=50)
    def test_proposal_is_idempotent(self, budget, pool, headcount):
        assert self.selector.propose(budget, pool, headcount) == self.selector.propose(
            budget, pool, headcount
        )


class TestScoreProperties:

    @given(
        tier=tiers,
        cheaper=st.integers(min_value=1, max_value=1_000_000),
        delta=st.integers(min_value=1, max_value=1_000_000),
    )
    def test_cheaper_scores_strictly_higher(self, tier, cheaper, delta):
        scorer = CostBenefitScorer()
        low = make_fixed("low", amount=str(cheaper), tier=tier)
        high = make_fixed("high", amount=str(cheaper + delta), tier=tier)
        assert scorer.score(low) > scorer.score(high)
