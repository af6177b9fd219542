# backend/tests/services/analytics/test_overlap.py
"""
Unit tests for fund overlap analysis.

Test Coverage:
- calculate_pairwise_overlap: min-weight sum, symmetry, duplicate tickers
- analyze_fund_overlap: common stocks, unique holdings, overall score
- rate_diversification: rating bands
- Fund count and weight validation
"""

import pytest

from conftest import make_fund
from fundmetrics.services.analytics.overlap import (
    analyze_fund_overlap,
    calculate_pairwise_overlap,
    rate_diversification,
)
from fundmetrics.services.analytics.types import DiversificationRating, FundHoldings, Holding
from fundmetrics.services.exceptions import InvalidFundCountError, ValidationError


@pytest.fixture
def fund_a() -> FundHoldings:
    return make_fund("A", ("RELIANCE", 10), ("TCS", 8), ("HDFCBANK", 6), ("INFY", 5))


@pytest.fixture
def fund_b() -> FundHoldings:
    return make_fund("B", ("RELIANCE", 6), ("TCS", 9), ("ITC", 4))


# =============================================================================
# PAIRWISE TESTS
# =============================================================================

class TestPairwiseOverlap:

    def test_min_weight_sum(self, fund_a, fund_b):
        # min(10, 6) + min(8, 9)
        pair = calculate_pairwise_overlap(fund_a, fund_b)

        assert pair.overlap_percentage == 14.0
        assert [h.ticker for h in pair.common_holdings] == ["TCS", "RELIANCE"]
        assert pair.recommendation.startswith("Low Overlap (14.0%)")

    def test_symmetric(self, fund_a, fund_b):
        forward = calculate_pairwise_overlap(fund_a, fund_b)
        backward = calculate_pairwise_overlap(fund_b, fund_a)

        assert forward.overlap_percentage == backward.overlap_percentage
        assert {h.ticker for h in forward.common_holdings} == {h.ticker for h in backward.common_holdings}

    def test_no_common_holdings(self, fund_a):
        other = make_fund("C", ("ITC", 50))

        pair = calculate_pairwise_overlap(fund_a, other)

        assert pair.overlap_percentage == 0.0
        assert pair.common_holdings == []

    def test_duplicate_tickers_merged(self):
        split = make_fund("A", ("RELIANCE", 5), ("RELIANCE", 5))
        whole = make_fund("B", ("RELIANCE", 10))

        pair = calculate_pairwise_overlap(split, whole)

        assert pair.overlap_percentage == 10.0
        assert len(pair.common_holdings) == 1

    def test_very_high_overlap_recommendation(self):
        pair = calculate_pairwise_overlap(
            make_fund("A", ("X", 60), ("Y", 40)),
            make_fund("B", ("X", 55), ("Y", 45)),
        )

        assert pair.overlap_percentage == 95.0
        assert pair.recommendation.startswith("Very High Overlap")


# =============================================================================
# ANALYSIS TESTS
# =============================================================================

class TestAnalyzeFundOverlap:

    def test_two_funds(self, fund_a, fund_b):
        result = analyze_fund_overlap([fund_a, fund_b])

        assert result.total_funds == 2
        assert [s.ticker for s in result.common_stocks] == ["RELIANCE", "TCS"]
        assert all(s.overlap_score == 2 for s in result.common_stocks)
        assert result.summary.total_unique_stocks == 5
        assert result.summary.unique_holdings == 3
        assert result.summary.average_overlap == 14.0
        # 14 + 2/5 × 20
        assert result.overall_overlap_score == 22
        assert result.diversification_rating == DiversificationRating.GOOD

    def test_unique_holdings(self, fund_a, fund_b):
        result = analyze_fund_overlap([fund_a, fund_b])

        unique_a, unique_b = result.fund_unique_holdings
        assert [h.ticker for h in unique_a.unique_stocks] == ["HDFCBANK", "INFY"]
        assert unique_a.unique_stocks_count == 2
        assert unique_a.unique_allocation_percentage == 11.0
        assert [h.ticker for h in unique_b.unique_stocks] == ["ITC"]

    def test_recommendations(self, fund_a, fund_b):
        result = analyze_fund_overlap([fund_a, fund_b])

        assert result.recommendations == [
            "2 stocks are held by multiple funds. This reduces diversification benefits.",
            "2 stock(s) appear in ALL funds: Reliance, Tcs. "
            "Consider if this concentration is intentional.",
            "Your fund selection shows good diversification with minimal overlap.",
            "Portfolio has 5 unique stocks with 3 holdings appearing in only one fund.",
        ]

    def test_identical_holdings(self):
        first = make_fund("A", ("X", 50), ("Y", 50))
        second = make_fund("B", ("X", 50), ("Y", 50))

        result = analyze_fund_overlap([first, second])

        assert result.pairwise_overlap[0].overlap_percentage == 100.0
        assert all(u.unique_stocks_count == 0 for u in result.fund_unique_holdings)
        assert result.overall_overlap_score == 100
        assert result.diversification_rating == DiversificationRating.VERY_POOR
        assert result.summary.highly_overlapping_pairs == 1

    def test_pairs_sorted_by_overlap(self, fund_a, fund_b):
        clone = make_fund("C", ("RELIANCE", 10), ("TCS", 8), ("HDFCBANK", 6), ("INFY", 5))

        result = analyze_fund_overlap([fund_a, fund_b, clone])

        assert len(result.pairwise_overlap) == 3
        overlaps = [p.overlap_percentage for p in result.pairwise_overlap]
        assert overlaps == sorted(overlaps, reverse=True)
        assert {result.pairwise_overlap[0].fund1_id, result.pairwise_overlap[0].fund2_id} == {"A", "C"}

    def test_overall_score_rounds_half_up(self):
        # overlap 12.5 + 1/5 × 20 = 16.5
        first = make_fund("A", ("X", 12.5), ("A1", 1), ("A2", 1))
        second = make_fund("B", ("X", 20), ("B1", 1), ("B2", 1))

        result = analyze_fund_overlap([first, second])

        assert result.overall_overlap_score == 17


class TestAnalyzeFundOverlapErrors:

    def test_too_few_funds(self, fund_a):
        with pytest.raises(InvalidFundCountError) as exc_info:
            analyze_fund_overlap([fund_a])

        assert exc_info.value.count == 1
        assert exc_info.value.field == "funds"

    def test_too_many_funds(self):
        funds = [make_fund(str(i), ("X", 10)) for i in range(11)]

        with pytest.raises(InvalidFundCountError, match="Maximum 10"):
            analyze_fund_overlap(funds)

    def test_negative_weight(self, fund_a):
        bad = FundHoldings("B", "Fund B", [Holding("X", "X Ltd", -1.0)])

        with pytest.raises(ValidationError) as exc_info:
            analyze_fund_overlap([fund_a, bad])

        assert exc_info.value.field == "weight"


# =============================================================================
# RATING TESTS
# =============================================================================

class TestRateDiversification:

    @pytest.mark.parametrize("score, rating", [
        (0, DiversificationRating.EXCELLENT),
        (19.9, DiversificationRating.EXCELLENT),
        (20, DiversificationRating.GOOD),
        (35, DiversificationRating.MODERATE),
        (50, DiversificationRating.POOR),
        (70, DiversificationRating.VERY_POOR),
        (100, DiversificationRating.VERY_POOR),
    ])
    def test_bands(self, score, rating):
        assert rate_diversification(score) == rating
