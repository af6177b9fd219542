# backend/tests/services/analytics/test_risk.py
"""
Unit tests for risk calculations.

These tests verify the pure calculation logic. All tests use known values
that can be verified by hand; most use periods_per_year=1 so nothing is
annualized.

Test Coverage:
- calculate_volatility / calculate_sharpe_ratio / calculate_sortino_ratio
- calculate_beta / calculate_alpha
- calculate_max_drawdown / find_max_drawdown_period
- calculate_var / calculate_cvar
- calculate_information_ratio / calculate_treynor_ratio
- RiskCalculator.analyze: Combined calculations
- generate_risk_profile / interpret_risk_metrics / build_risk_report
"""

import logging
from datetime import date

import pytest

from conftest import make_nav_series
from fundmetrics.services.analytics.risk import (
    RiskCalculator,
    annualize_volatility,
    assess_investor_suitability,
    build_risk_report,
    calculate_alpha,
    calculate_beta,
    calculate_cvar,
    calculate_information_ratio,
    calculate_max_drawdown,
    calculate_max_drawdown_from_navs,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    calculate_treynor_ratio,
    calculate_var,
    calculate_volatility,
    classify_risk,
    find_max_drawdown_period,
    generate_risk_profile,
    interpret_risk_metrics,
    select_risk_leaders,
)
from fundmetrics.services.analytics.types import NavPoint, RiskLevel, RiskMetrics
from fundmetrics.services.constants import SORTINO_UNBOUNDED


def navs_from_returns(returns: list[float], start_nav: float = 100.0) -> list[NavPoint]:
    navs = [start_nav]
    for r in returns:
        navs.append(navs[-1] * (1 + r / 100))
    return make_nav_series(navs)


# Low-volatility steady grower and a choppy fund
STEADY_RETURNS = [0.5, 1.5] * 15
CHOPPY_RETURNS = [5.0, -4.0] * 15


# =============================================================================
# VOLATILITY TESTS
# =============================================================================

class TestVolatility:

    def test_zero_volatility(self):
        assert calculate_volatility([1.0] * 10) == pytest.approx(0.0)

    def test_positive_volatility(self):
        assert calculate_volatility([2.0, 4.0]) == pytest.approx(1.0)

    def test_annualized_volatility(self):
        """Annualized volatility is per-period × √252."""
        assert annualize_volatility(1.0, 252) == pytest.approx(252 ** 0.5)

    def test_empty(self):
        assert calculate_volatility([]) == 0.0


# =============================================================================
# SHARPE / SORTINO TESTS
# =============================================================================

class TestSharpeRatio:

    def test_known_value(self):
        # mean 3, σ 1, rf 1 → (3 - 1) / 1
        assert calculate_sharpe_ratio([2.0, 4.0], risk_free_rate=1, periods_per_year=1) == pytest.approx(2.0)

    def test_zero_volatility(self):
        assert calculate_sharpe_ratio([1.0, 1.0, 1.0]) == 0.0

    def test_flat_decimal_returns(self):
        """Float noise in a constant 0.1 series is not volatility."""
        assert calculate_sharpe_ratio([0.1] * 3) == 0.0

    def test_empty(self):
        assert calculate_sharpe_ratio([]) == 0.0

    def test_annualization(self):
        returns = [0.1, -0.05, 0.2, 0.0]
        expected = (sum(returns) / 4 * 252 - 6.5) / (calculate_volatility(returns) * 252 ** 0.5)

        assert calculate_sharpe_ratio(returns) == pytest.approx(expected)


class TestSortinoRatio:

    def test_known_value(self):
        # threshold 0; shortfall 4 / N=2 → √2; excess 1
        result = calculate_sortino_ratio([-2.0, 4.0], risk_free_rate=0, periods_per_year=1)

        assert result == pytest.approx(1 / 2 ** 0.5)

    def test_no_downside_positive_excess_is_sentinel(self):
        result = calculate_sortino_ratio([2.0, 4.0], risk_free_rate=1, periods_per_year=1)

        assert result == SORTINO_UNBOUNDED

    def test_no_downside_zero_excess(self):
        assert calculate_sortino_ratio([1.0, 1.0], risk_free_rate=1, periods_per_year=1) == 0.0

    def test_empty(self):
        assert calculate_sortino_ratio([]) == 0.0


# =============================================================================
# BETA / ALPHA TESTS
# =============================================================================

class TestBeta:

    def test_known_value(self):
        # cov 4/3, var(M) 2/3
        assert calculate_beta([2.0, 4.0, 6.0], [1.0, 2.0, 3.0]) == pytest.approx(2.0)

    def test_no_market_series(self):
        assert calculate_beta([1.0, 2.0]) == 1.0

    def test_empty_market_series(self):
        assert calculate_beta([1.0, 2.0], []) == 1.0

    def test_zero_market_variance(self):
        assert calculate_beta([1.0, 2.0, 3.0], [1.0, 1.0, 1.0]) == 1.0

    def test_flat_decimal_market(self):
        assert calculate_beta([0.3, 0.1, 0.2], [0.1] * 3) == 1.0

    def test_flat_fund_has_zero_beta(self):
        assert calculate_beta([0.1] * 3, [0.3, 0.1, 0.2]) == 0.0

    def test_mismatched_lengths_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fundmetrics"):
            result = calculate_beta([1.0, 2.0, 3.0], [1.0, 2.0])

        assert result == 1.0
        assert "differ in length" in caplog.text


class TestAlpha:

    def test_jensens_alpha(self):
        # expected = 6.5 + 1.2 × (12 - 6.5) = 13.1
        assert calculate_alpha(15.0, 1.2, 12.0, 6.5) == pytest.approx(1.9)

    def test_market_like_fund(self):
        assert calculate_alpha(12.0, 1.0, 12.0, 6.5) == pytest.approx(0.0)


# =============================================================================
# DRAWDOWN TESTS
# =============================================================================

class TestMaxDrawdown:

    def test_compounded_losses(self):
        """Two -10% periods lose 19%, not 20%."""
        assert calculate_max_drawdown([-10.0, -10.0]) == pytest.approx(19.0)

    def test_measured_from_running_peak(self):
        # 100 → 110 → 55
        assert calculate_max_drawdown([10.0, -50.0]) == pytest.approx(50.0)

    def test_never_declines(self):
        assert calculate_max_drawdown([5.0, 5.0]) == 0.0

    def test_empty(self):
        assert calculate_max_drawdown([]) == 0.0


class TestMaxDrawdownPeriod:

    def test_recovered_drawdown(self):
        series = make_nav_series([100, 120, 90, 110, 125])

        period = find_max_drawdown_period(series)

        assert period.peak_date == date(2024, 1, 2)
        assert period.trough_date == date(2024, 1, 3)
        assert period.recovery_date == date(2024, 1, 5)
        assert period.depth == pytest.approx(25.0)

    def test_unrecovered_drawdown(self):
        period = find_max_drawdown_period(make_nav_series([100, 80]))

        assert period.recovery_date is None
        assert period.depth == pytest.approx(20.0)

    def test_rising_series(self):
        assert find_max_drawdown_period(make_nav_series([100, 101, 102])) is None

    def test_unordered_input(self):
        series = list(reversed(make_nav_series([100, 120, 90, 110, 125])))

        assert calculate_max_drawdown_from_navs(series) == pytest.approx(25.0)


# =============================================================================
# VAR / CVAR TESTS
# =============================================================================

class TestVaR:

    RETURNS = [float(r) for r in range(-10, 10)]  # -10 .. 9

    def test_var_95(self):
        # index floor(0.05 × 20) = 1 → -9
        assert calculate_var(self.RETURNS, 0.95) == 9.0

    def test_var_99(self):
        assert calculate_var(self.RETURNS, 0.99) == 10.0

    def test_higher_confidence_never_smaller(self):
        assert calculate_var(self.RETURNS, 0.99) >= calculate_var(self.RETURNS, 0.95)

    def test_empty(self):
        assert calculate_var([]) == 0.0


class TestCVaR:

    def test_tail_average(self):
        returns = [float(r) for r in range(-10, 10)]

        assert calculate_cvar(returns, 0.95) == 10.0

    def test_short_series(self):
        """Five returns at 95% leave nothing below the cutoff."""
        assert calculate_cvar([-3.0, -1.0, 0.0, 1.0, 2.0], 0.95) == 0.0

    def test_empty(self):
        assert calculate_cvar([]) == 0.0


# =============================================================================
# INFORMATION / TREYNOR TESTS
# =============================================================================

class TestInformationRatio:

    def test_known_value(self):
        # active [1, 3]: mean 2, σ 1
        assert calculate_information_ratio([2.0, 4.0], [1.0, 1.0]) == pytest.approx(2.0)

    def test_no_market(self):
        assert calculate_information_ratio([2.0, 4.0]) == 0.0

    def test_zero_tracking_error(self):
        assert calculate_information_ratio([2.0, 3.0], [1.0, 2.0]) == 0.0

    def test_constant_decimal_spread(self):
        # active returns are 0.1 each, up to float noise
        assert calculate_information_ratio([0.3, 0.4, 0.5], [0.2, 0.3, 0.4]) == 0.0


class TestTreynorRatio:

    def test_known_value(self):
        assert calculate_treynor_ratio([2.0, 4.0], beta=2.0, risk_free_rate=1, periods_per_year=1) == pytest.approx(1.0)

    def test_zero_beta(self):
        assert calculate_treynor_ratio([2.0, 4.0], beta=0.0) == 0.0

    def test_negligible_beta(self):
        assert calculate_treynor_ratio([2.0, 4.0], beta=1e-17) == 0.0


# =============================================================================
# RISK CALCULATOR TESTS
# =============================================================================

class TestRiskCalculator:

    def test_empty_returns_defaults(self):
        metrics = RiskCalculator.analyze([])

        assert metrics.data_points == 0
        assert metrics.beta == 1.0
        assert metrics.alpha is None
        assert metrics.sharpe_ratio == 0.0

    def test_known_values(self):
        metrics = RiskCalculator.analyze([2.0, 4.0], risk_free_rate=1, periods_per_year=1)

        assert metrics.data_points == 2
        assert metrics.volatility == 1.0
        assert metrics.annualized_volatility == 1.0
        assert metrics.sharpe_ratio == 2.0
        assert metrics.beta == 1.0
        # 3 - [1 + 1 × (12 - 1)]
        assert metrics.alpha == -9.0

    def test_sortino_sentinel_flagged(self):
        metrics = RiskCalculator.analyze([2.0, 4.0], risk_free_rate=1, periods_per_year=1)

        assert metrics.sortino_ratio == SORTINO_UNBOUNDED
        assert metrics.sortino_unbounded is True

    def test_finite_sortino_not_flagged(self):
        metrics = RiskCalculator.analyze([-2.0, 4.0], risk_free_rate=0, periods_per_year=1)

        assert metrics.sortino_unbounded is False
        assert metrics.sortino_ratio == 0.71

    def test_flat_decimal_series(self):
        metrics = RiskCalculator.analyze([0.1] * 10, market_returns=[0.3, 0.1, 0.2, 0.4, 0.0] * 2)

        assert metrics.volatility == 0.0
        assert metrics.sharpe_ratio == 0.0
        assert metrics.beta == 0.0
        assert metrics.treynor_ratio == 0.0
        assert metrics.sortino_unbounded is True

    def test_results_rounded(self):
        metrics = RiskCalculator.analyze([0.123, -0.456, 0.789, 0.1011])

        assert metrics.volatility == round(metrics.volatility, 2)
        assert metrics.sharpe_ratio == round(metrics.sharpe_ratio, 2)

    def test_explicit_annual_return_drives_alpha(self):
        metrics = RiskCalculator.analyze(
            [2.0, 4.0], risk_free_rate=1, periods_per_year=1, annual_return=12.0,
        )

        assert metrics.alpha == 0.0


# =============================================================================
# RISK PROFILE TESTS
# =============================================================================

class TestRiskProfile:

    def test_safest_profile(self):
        profile = generate_risk_profile(RiskMetrics(beta=0.0))

        assert profile.risk_score == 100
        assert profile.risk_level == RiskLevel.VERY_LOW
        assert "Conservative Investors" in profile.suitable_for

    def test_riskiest_profile(self):
        metrics = RiskMetrics(
            annualized_volatility=40.0,
            max_drawdown=50.0,
            value_at_risk=25.0,
            beta=2.0,
        )

        profile = generate_risk_profile(metrics)

        assert profile.risk_score == 0
        assert profile.risk_level == RiskLevel.VERY_HIGH
        assert len(profile.warnings) == 4

    def test_higher_beta_lowers_score(self):
        low = generate_risk_profile(RiskMetrics(annualized_volatility=15.0, beta=0.5))
        high = generate_risk_profile(RiskMetrics(annualized_volatility=15.0, beta=1.5))

        assert high.risk_score < low.risk_score

    def test_recommendations(self):
        metrics = RiskMetrics(sharpe_ratio=2.0, sortino_ratio=3.0, information_ratio=0.8)

        profile = generate_risk_profile(metrics)

        assert profile.recommendations == [
            "Excellent risk-adjusted returns",
            "Strong downside protection",
            "Active management adding value",
        ]


class TestInterpretation:

    def test_ratings(self):
        metrics = RiskMetrics(sharpe_ratio=2.5, beta=1.0, alpha=None, annualized_volatility=12.0)

        views = interpret_risk_metrics(metrics)

        assert set(views) == {"sharpe_ratio", "beta", "alpha", "volatility", "max_drawdown"}
        assert views["sharpe_ratio"].rating == "Excellent"
        assert views["beta"].rating == "Market-like"
        assert views["alpha"].value == 0.0
        assert views["volatility"].rating == "Moderate Risk"
        assert views["max_drawdown"].rating == "Resilient"

    @pytest.mark.parametrize("beta, vol, expected", [
        (1.5, 25.0, "AGGRESSIVE"),
        (0.5, 10.0, "CONSERVATIVE"),
        (1.0, 15.0, "MODERATE"),
    ])
    def test_classification(self, beta, vol, expected):
        assert classify_risk(RiskMetrics(beta=beta, annualized_volatility=vol)) == expected

    def test_suitability(self):
        assert assess_investor_suitability(RiskMetrics(sharpe_ratio=1.5, alpha=2.0)).startswith("Recommended")
        assert assess_investor_suitability(RiskMetrics(sharpe_ratio=1.5, alpha=-1.0)).startswith("Consider")
        assert assess_investor_suitability(RiskMetrics(sharpe_ratio=0.5)).startswith("Review")


# =============================================================================
# RISK REPORT TESTS
# =============================================================================

class TestRiskReport:

    def test_report_from_navs(self):
        series = navs_from_returns(CHOPPY_RETURNS)

        report = build_risk_report(series, period="1Y", fund_id="F1", fund_name="Choppy")

        assert report.fund_id == "F1"
        assert report.period == "1Y"
        assert report.data_points == 31
        assert report.metrics.data_points == 30
        assert report.max_drawdown_period is not None
        assert report.max_drawdown_period.depth == pytest.approx(4.0)
        assert report.metrics.max_drawdown == report.max_drawdown_period.depth
        assert 0 <= report.risk_profile.risk_score <= 100

    def test_rising_fund_has_no_drawdown(self):
        report = build_risk_report(navs_from_returns(STEADY_RETURNS))

        assert report.max_drawdown_period is None
        assert report.metrics.max_drawdown == 0.0

    def test_constant_growth_is_not_excellent(self):
        """A fund compounding 0.1% every period has no volatility to reward."""
        report = build_risk_report(navs_from_returns([0.1] * 30))

        assert report.metrics.annualized_volatility == 0.0
        assert report.metrics.sharpe_ratio == 0.0
        assert report.interpretation["sharpe_ratio"].rating == "Poor"


class TestRiskLeaders:

    def test_leaders(self):
        steady = build_risk_report(navs_from_returns(STEADY_RETURNS), fund_id="steady")
        choppy = build_risk_report(navs_from_returns(CHOPPY_RETURNS), fund_id="choppy")

        comparison = select_risk_leaders([choppy, steady], period="3Y")

        assert len(comparison.funds) == 2
        assert comparison.best_sharpe_ratio.fund_id == "steady"
        assert comparison.lowest_volatility.fund_id == "steady"
        assert comparison.highest_alpha.fund_id == "steady"

    def test_no_reports(self):
        comparison = select_risk_leaders([])

        assert comparison.best_sharpe_ratio is None
        assert comparison.funds == []
