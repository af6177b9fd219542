# backend/tests/services/analytics/test_smart_score.py
"""
Unit tests for the Smart Score model.

Test Coverage:
- normalize: scaling, clamping, inversion
- Component scores with sparse inputs
- get_grade / get_recommendation thresholds
- compute_smart_score: bounds, monotonicity, insights
- compare_funds: winner and tie handling
"""

import pytest

from fundmetrics.services.analytics.smart_score import (
    calculate_alpha_score,
    calculate_consistency_score,
    calculate_cost_score,
    calculate_return_score,
    calculate_risk_score,
    compare_funds,
    compute_smart_score,
    compute_smart_score_batch,
    get_grade,
    get_recommendation,
    normalize,
)
from fundmetrics.services.analytics.types import FundMetricInput, Grade, Recommendation


# Every attribute at the favourable end of its domain
BEST_FUND = FundMetricInput(
    alpha=10, beta=0.5, std_dev=5, returns_1y=50, returns_3y=30, returns_5y=25,
    sharpe_ratio=2.5, sortino_ratio=3, expense_ratio=0.5, aum=10_000,
    consistency_index=100, max_drawdown=-5, information_ratio=1.5,
)

# Every attribute at the unfavourable end of its domain
WORST_FUND = FundMetricInput(
    alpha=-5, beta=1.5, std_dev=30, returns_1y=-20, returns_3y=0, returns_5y=5,
    sharpe_ratio=-0.5, sortino_ratio=0, expense_ratio=3, aum=100,
    consistency_index=0, max_drawdown=-40, information_ratio=-0.5,
)


# =============================================================================
# NORMALIZATION TESTS
# =============================================================================

class TestNormalize:

    def test_midpoint(self):
        assert normalize(15, 0, 30) == 50.0

    def test_clamped_above(self):
        assert normalize(100, 0, 30) == 100.0

    def test_clamped_below(self):
        assert normalize(-5, 0, 30) == 0.0

    def test_inverse(self):
        assert normalize(0.5, 0.5, 3, inverse=True) == 100.0
        assert normalize(3, 0.5, 3, inverse=True) == 0.0


# =============================================================================
# COMPONENT TESTS
# =============================================================================

class TestComponents:

    def test_return_score_renormalizes_present_weights(self):
        assert calculate_return_score(FundMetricInput(returns_3y=15)) == pytest.approx(50.0)

    def test_return_score_all_horizons(self):
        data = FundMetricInput(returns_1y=50, returns_3y=30, returns_5y=25)

        assert calculate_return_score(data) == pytest.approx(100.0)

    def test_risk_score_uses_absolute_drawdown(self):
        assert calculate_risk_score(FundMetricInput(max_drawdown=-5)) == 100.0
        assert calculate_risk_score(FundMetricInput(max_drawdown=5)) == 100.0

    def test_consistency_index_used_as_is(self):
        assert calculate_consistency_score(FundMetricInput(consistency_index=80)) == 80.0

    def test_consistency_index_clamped(self):
        assert calculate_consistency_score(FundMetricInput(consistency_index=1000)) == 100.0
        assert calculate_consistency_score(FundMetricInput(consistency_index=-50)) == 0.0

    def test_aum_alone_caps_at_half(self):
        assert calculate_cost_score(FundMetricInput(aum=10_000)) == 50.0

    def test_cost_score_with_expense_and_aum(self):
        data = FundMetricInput(expense_ratio=0.5, aum=10_000)

        assert calculate_cost_score(data) == 75.0

    def test_alpha_score(self):
        assert calculate_alpha_score(FundMetricInput(alpha=10)) == 100.0
        assert calculate_alpha_score(FundMetricInput()) == 50.0

    @pytest.mark.parametrize("component", [
        calculate_return_score,
        calculate_risk_score,
        calculate_consistency_score,
        calculate_cost_score,
        calculate_alpha_score,
    ])
    def test_missing_inputs_are_neutral(self, component):
        assert component(FundMetricInput()) == 50.0


# =============================================================================
# GRADE / RECOMMENDATION TESTS
# =============================================================================

class TestGrade:

    @pytest.mark.parametrize("score, grade", [
        (95.0, Grade.A_PLUS),
        (90.0, Grade.A_PLUS),
        (80.0, Grade.A),
        (79.9, Grade.B_PLUS),
        (60.0, Grade.B),
        (50.0, Grade.C_PLUS),
        (40.0, Grade.C),
        (39.9, Grade.D),
    ])
    def test_thresholds_inclusive(self, score, grade):
        assert get_grade(score) == grade

    @pytest.mark.parametrize("score, recommendation", [
        (85.0, Recommendation.STRONG_BUY),
        (70.0, Recommendation.BUY),
        (50.0, Recommendation.HOLD),
        (35.0, Recommendation.SELL),
        (34.9, Recommendation.STRONG_SELL),
    ])
    def test_recommendation(self, score, recommendation):
        assert get_recommendation(score) == recommendation


# =============================================================================
# SMART SCORE TESTS
# =============================================================================

class TestSmartScore:

    def test_empty_input_is_neutral(self):
        result = compute_smart_score(FundMetricInput())

        assert result.score == 50.0
        assert result.grade == Grade.C_PLUS
        assert result.recommendation == Recommendation.HOLD
        assert result.insights == []

    def test_best_fund(self):
        result = compute_smart_score(BEST_FUND)

        # 35 + 25 + 20 + 0.10 × 75 + 10
        assert result.score == 97.5
        assert result.grade == Grade.A_PLUS
        assert result.recommendation == Recommendation.STRONG_BUY
        assert result.breakdown.cost_score == 75.0
        assert "Exceptional historical returns across all timeframes" in result.insights
        assert "Excellent Sharpe ratio - outstanding risk-adjusted performance" in result.insights

    def test_worst_fund(self):
        result = compute_smart_score(WORST_FUND)

        assert result.score == 0.0
        assert result.grade == Grade.D
        assert result.recommendation == Recommendation.STRONG_SELL
        assert "Below-average returns compared to peers" in result.insights
        assert "Low Sharpe ratio - returns may not justify the risk" in result.insights

    @pytest.mark.parametrize("data", [
        BEST_FUND,
        WORST_FUND,
        FundMetricInput(returns_1y=500, alpha=-80, expense_ratio=12),
        FundMetricInput(std_dev=0, beta=-1, aum=1_000_000),
        FundMetricInput(consistency_index=1000, returns_3y=30, alpha=10, beta=0.5, expense_ratio=0.5),
        FundMetricInput(consistency_index=-50),
    ])
    def test_score_within_bounds(self, data):
        result = compute_smart_score(data)

        assert 0 <= result.score <= 100
        for component in ("return_score", "risk_score", "consistency_score", "cost_score", "alpha_score"):
            assert 0 <= getattr(result.breakdown, component) <= 100

    def test_grade_from_rounded_score(self):
        data = FundMetricInput(returns_3y=29.97, beta=0.5, consistency_index=100, expense_ratio=3, alpha=-5)

        result = compute_smart_score(data)

        # 0.35 × 99.9 + 25 + 20 = 79.965, rounds up to the A threshold
        assert result.score == 80.0
        assert result.grade == Grade.A
        assert result.recommendation == Recommendation.BUY

    def test_higher_return_never_lowers_score(self):
        low = compute_smart_score(FundMetricInput(returns_3y=10, expense_ratio=1.5))
        high = compute_smart_score(FundMetricInput(returns_3y=20, expense_ratio=1.5))

        assert high.score > low.score

    def test_higher_expense_never_raises_score(self):
        cheap = compute_smart_score(FundMetricInput(returns_3y=15, expense_ratio=0.8))
        expensive = compute_smart_score(FundMetricInput(returns_3y=15, expense_ratio=2.5))

        assert expensive.score < cheap.score

    def test_summary_mentions_grade(self):
        result = compute_smart_score(BEST_FUND)

        assert "grade of A+" in result.summary
        assert "Strong Buy" in result.summary

    def test_batch_preserves_order(self):
        results = compute_smart_score_batch([WORST_FUND, BEST_FUND, FundMetricInput()])

        assert [r.score for r in results] == [0.0, 97.5, 50.0]


# =============================================================================
# COMPARISON TESTS
# =============================================================================

class TestCompareFunds:

    def test_fund1_wins(self):
        result = compare_funds(BEST_FUND, WORST_FUND)

        assert result.winner == "fund1"
        assert result.difference == 97.5

    def test_fund2_wins(self):
        assert compare_funds(WORST_FUND, BEST_FUND).winner == "fund2"

    def test_tie_within_threshold(self):
        result = compare_funds(FundMetricInput(returns_3y=15), FundMetricInput(returns_3y=15.5))

        assert result.winner == "tie"
        assert "evenly matched" in result.comparison
