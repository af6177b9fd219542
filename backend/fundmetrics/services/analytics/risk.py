# backend/fundmetrics/services/analytics/risk.py
"""
Risk calculation functions for the analytics calculators.

This module contains pure functions for calculating risk metrics:
- Volatility: Standard deviation of returns (per period and annualized)
- Sharpe Ratio: Risk-adjusted return
- Sortino Ratio: Downside risk-adjusted return
- Beta / Alpha: Market sensitivity and Jensen's alpha
- Max Drawdown: Largest peak-to-trough decline
- Value at Risk (VaR) and Conditional VaR: Historical loss tail
- Information Ratio / Treynor Ratio: Active and systematic risk-adjusted return
- Risk Profile and Risk Report: Qualitative reading of the metrics above

All functions are stateless and operate on float percentage returns. Every
function tolerates empty and single-element series and returns a documented
neutral value instead of NaN or Infinity. The only special value is the
Sortino sentinel SORTINO_UNBOUNDED.

Formulas (p = periods per year, rf = annual risk-free rate in %):
    Annualized mean     = mean(R) × p
    Annualized σ        = σ(R) × √p

    Sharpe Ratio  = (mean(R) × p - rf) / (σ(R) × √p)

    Sortino Ratio = (mean(R) × p - rf) / σ_downside
        σ_downside = √(Σ_{r < rf/p} (r - rf/p)² / N) × √p   (N = full series length)

    Beta          = Cov(R, M) / Var(M)
    Alpha         = R_p - [rf + β × (R_m - rf)]
    Treynor Ratio = (mean(R) × p - rf) / β
    Info Ratio    = mean(R - M) / σ(R - M)

    VaR_c         = |sorted(R)[⌊(1 - c) × N⌋]|
"""

import logging
import math
from typing import Sequence

from fundmetrics.services.analytics.returns import (
    calculate_annualized_return,
    calculate_series_returns,
    sort_nav_series,
)
from fundmetrics.services.analytics.statistics import (
    ZERO_TOLERANCE,
    covariance,
    is_flat,
    is_negligible,
    mean,
    stddev,
    variance,
)
from fundmetrics.services.analytics.types import (
    DrawdownPeriod,
    FundRiskReport,
    MetricInterpretation,
    NavPoint,
    RiskComparison,
    RiskLevel,
    RiskMetrics,
    RiskProfile,
)
from fundmetrics.services.constants import (
    DEFAULT_MARKET_RETURN,
    DEFAULT_RISK_FREE_RATE,
    DEFAULT_VAR_CONFIDENCE,
    DRAWDOWN_BASE_VALUE,
    NEUTRAL_BETA,
    RATIO_PRECISION,
    SORTINO_UNBOUNDED,
    TRADING_DAYS_PER_YEAR,
)

logger = logging.getLogger(__name__)


# =============================================================================
# VOLATILITY
# =============================================================================

def calculate_volatility(returns: Sequence[float]) -> float:
    """
    Per-period volatility (population standard deviation of returns).

    Not annualized; use annualize_volatility for that.
    """
    return stddev(returns)


def annualize_volatility(
        volatility: float,
        periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """Scale a per-period volatility by √periods_per_year."""
    return volatility * math.sqrt(periods_per_year)


def annualized_mean(
        returns: Sequence[float],
        periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """Arithmetic mean return scaled to a year."""
    return mean(returns) * periods_per_year


# =============================================================================
# SHARPE / SORTINO
# =============================================================================

def calculate_sharpe_ratio(
        returns: Sequence[float],
        risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
        periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """
    Calculate the annualized Sharpe ratio.

    Interpretation:
        > 2: Excellent
        > 1: Good
        > 0: Average
        <= 0: Poor

    Args:
        returns: Periodic returns in percent
        risk_free_rate: Annual risk-free rate in percent
        periods_per_year: Periods per year (252 for daily data)

    Returns:
        Sharpe ratio, or 0.0 if the series is empty or has zero volatility
    """
    if not returns or is_flat(returns):
        return 0.0

    volatility = calculate_volatility(returns)
    excess = annualized_mean(returns, periods_per_year) - risk_free_rate
    return excess / annualize_volatility(volatility, periods_per_year)


def calculate_downside_deviation(
        returns: Sequence[float],
        threshold: float,
        periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """
    Annualized downside deviation below a per-period threshold.

    Squared shortfalls of returns below the threshold are divided by the
    full series length N, not by the number of shortfalls.

    Returns:
        Downside deviation, 0.0 if no return falls below the threshold
    """
    if not returns:
        return 0.0

    shortfall = sum((r - threshold) ** 2 for r in returns if r < threshold)
    deviation = math.sqrt(shortfall / len(returns))
    if is_negligible(deviation, returns):
        return 0.0

    return deviation * math.sqrt(periods_per_year)


def _sortino(
        returns: Sequence[float],
        risk_free_rate: float,
        periods_per_year: int,
) -> tuple[float, bool]:
    """Sortino ratio plus a flag telling whether it is the unbounded sentinel."""
    if not returns:
        return 0.0, False

    excess = annualized_mean(returns, periods_per_year) - risk_free_rate
    threshold = risk_free_rate / periods_per_year

    downside_deviation = calculate_downside_deviation(returns, threshold, periods_per_year)
    if downside_deviation == 0:
        if excess > 0:
            return SORTINO_UNBOUNDED, True
        return 0.0, False

    return excess / downside_deviation, False


def calculate_sortino_ratio(
        returns: Sequence[float],
        risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
        periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """
    Calculate the annualized Sortino ratio.

    Like Sharpe, but only returns below the per-period risk-free threshold
    (rf / periods_per_year) count as risk. With periods_per_year=1 the
    threshold is rf itself and nothing is annualized.

    Returns:
        Sortino ratio. When no return lies below the threshold the ratio is
        unbounded: SORTINO_UNBOUNDED (999.0) if the excess return is
        positive, 0.0 otherwise. Also 0.0 for an empty series.
    """
    ratio, _ = _sortino(returns, risk_free_rate, periods_per_year)
    return ratio


# =============================================================================
# BETA / ALPHA
# =============================================================================

def calculate_beta(
        returns: Sequence[float],
        market_returns: Sequence[float] | None = None,
) -> float:
    """
    Calculate Beta (systematic risk).

    Formula: β = Cov(R_p, R_m) / Var(R_m)

    Interpretation:
        β > 1: More volatile than market
        β < 1: Less volatile than market
        β = 1: Moves exactly with market

    Returns:
        Beta, or NEUTRAL_BETA (1.0) when the market series is absent or empty,
        the lengths differ, or the market has zero variance
    """
    if not returns or not market_returns:
        return NEUTRAL_BETA

    if len(returns) != len(market_returns):
        logger.warning(
            f"Fund and market return series differ in length "
            f"({len(returns)} vs {len(market_returns)}), using neutral beta"
        )
        return NEUTRAL_BETA

    if is_flat(market_returns):
        return NEUTRAL_BETA

    # Constant fund returns do not co-move with anything
    if is_flat(returns):
        return 0.0

    return covariance(returns, market_returns) / variance(market_returns)


def calculate_alpha(
        portfolio_return: float,
        beta: float,
        market_return: float = DEFAULT_MARKET_RETURN,
        risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
) -> float:
    """
    Calculate Jensen's Alpha.

    Formula: α = R_p - [R_f + β × (R_m - R_f)]

    Args:
        portfolio_return: Annual portfolio return (%)
        beta: Portfolio beta
        market_return: Annual market return (%)
        risk_free_rate: Annual risk-free rate (%)

    Returns:
        Alpha in percentage points
    """
    expected_return = risk_free_rate + beta * (market_return - risk_free_rate)
    return portfolio_return - expected_return


# =============================================================================
# DRAWDOWN
# =============================================================================

def calculate_max_drawdown(returns: Sequence[float]) -> float:
    """
    Maximum drawdown of a chronological return series.

    Compounds the returns from a base value of 100, tracks the running peak
    and reports the largest (peak - value) / peak.

    Returns:
        Max drawdown in percent (positive number), 0.0 for an empty or
        never-declining series

    Example:
        >>> round(calculate_max_drawdown([-10, -10]), 6)
        19.0
    """
    value = DRAWDOWN_BASE_VALUE
    peak = DRAWDOWN_BASE_VALUE
    max_drawdown = 0.0

    for r in returns:
        value *= 1 + r / 100
        if value > peak:
            peak = value
        drawdown = (peak - value) / peak * 100
        if drawdown > max_drawdown:
            max_drawdown = drawdown

    return max_drawdown


def calculate_max_drawdown_from_navs(nav_series: Sequence[NavPoint]) -> float:
    """Maximum drawdown (%) of a NAV series in any order."""
    period = find_max_drawdown_period(nav_series)
    return period.depth if period is not None else 0.0


def find_max_drawdown_period(nav_series: Sequence[NavPoint]) -> DrawdownPeriod | None:
    """
    Locate the worst peak-to-trough decline of a NAV series.

    Args:
        nav_series: NAV history in any order

    Returns:
        DrawdownPeriod with the peak, trough and recovery dates, or None if
        the NAV never falls below a previous peak
    """
    if len(nav_series) < 2:
        return None

    ordered = sort_nav_series(nav_series)

    peak = ordered[0]
    worst: DrawdownPeriod | None = None
    worst_peak_nav = 0.0

    for point in ordered:
        if point.nav > peak.nav:
            peak = point
            continue

        depth = (peak.nav - point.nav) / peak.nav * 100
        if depth > 0 and (worst is None or depth > worst.depth):
            worst = DrawdownPeriod(
                peak_date=peak.date,
                trough_date=point.date,
                recovery_date=None,
                depth=depth,
            )
            worst_peak_nav = peak.nav

    if worst is None:
        return None

    for point in ordered:
        if point.date > worst.trough_date and point.nav >= worst_peak_nav:
            worst.recovery_date = point.date
            break

    return worst


# =============================================================================
# VALUE AT RISK (VaR)
# =============================================================================

def calculate_var(
        returns: Sequence[float],
        confidence_level: float = DEFAULT_VAR_CONFIDENCE,
) -> float:
    """
    Calculate Value at Risk using the historical method.

    VaR is the loss magnitude not exceeded at the given confidence level.

    Args:
        returns: Periodic returns in percent
        confidence_level: Confidence level (e.g., 0.95 for 95%)

    Returns:
        VaR as a positive loss magnitude (e.g., 2.1 = 2.1% loss), 0.0 if empty
    """
    if not returns:
        return 0.0

    sorted_returns = sorted(returns)
    index = int(math.floor((1 - confidence_level) * len(sorted_returns)))
    index = max(0, min(index, len(sorted_returns) - 1))

    return abs(sorted_returns[index])


def calculate_cvar(
        returns: Sequence[float],
        confidence_level: float = DEFAULT_VAR_CONFIDENCE,
) -> float:
    """
    Calculate Conditional Value at Risk (Expected Shortfall).

    Average of the returns strictly below the VaR cutoff index, as a
    positive magnitude.

    Returns:
        CVaR, or 0.0 when no element lies below the cutoff (short series)
    """
    if not returns:
        return 0.0

    sorted_returns = sorted(returns)
    cutoff = int(math.floor((1 - confidence_level) * len(sorted_returns)))
    tail = sorted_returns[:cutoff]

    if not tail:
        return 0.0

    return abs(mean(tail))


# =============================================================================
# INFORMATION / TREYNOR
# =============================================================================

def calculate_information_ratio(
        returns: Sequence[float],
        market_returns: Sequence[float] | None = None,
) -> float:
    """
    Calculate the Information Ratio of the active return series.

    Formula: IR = mean(R - M) / σ(R - M)

    Returns:
        Information ratio (per period), or 0.0 if the market series is
        absent or mismatched, or the tracking error is zero
    """
    if not returns or not market_returns or len(returns) != len(market_returns):
        return 0.0

    active = [r - m for r, m in zip(returns, market_returns)]
    tracking_error = stddev(active)
    if is_negligible(tracking_error, active):
        return 0.0

    return mean(active) / tracking_error


def calculate_treynor_ratio(
        returns: Sequence[float],
        beta: float,
        risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
        periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """
    Calculate the Treynor ratio (excess annual return per unit of beta).

    Returns:
        Treynor ratio, or 0.0 if beta is zero or the series is empty
    """
    if not returns or math.isclose(beta, 0.0, abs_tol=ZERO_TOLERANCE):
        return 0.0

    return (annualized_mean(returns, periods_per_year) - risk_free_rate) / beta


# =============================================================================
# COMBINED RISK CALCULATOR
# =============================================================================

class RiskCalculator:
    """
    Calculator for all risk-related metrics.

    This class provides a convenient interface to calculate all
    risk metrics at once.
    """

    @staticmethod
    def analyze(
            returns: Sequence[float],
            market_returns: Sequence[float] | None = None,
            risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
            periods_per_year: int = TRADING_DAYS_PER_YEAR,
            market_return: float = DEFAULT_MARKET_RETURN,
            confidence_level: float = DEFAULT_VAR_CONFIDENCE,
            annual_return: float | None = None,
    ) -> RiskMetrics:
        """
        Calculate all risk metrics of a return series.

        Args:
            returns: Periodic fund returns in percent (chronological)
            market_returns: Market returns aligned with `returns` (optional)
            risk_free_rate: Annual risk-free rate (%)
            periods_per_year: Periods per year (252 for daily data)
            market_return: Annual market return used for alpha (%)
            confidence_level: VaR/CVaR confidence level
            annual_return: Pre-calculated annual return for alpha
                (default: annualized mean of `returns`)

        Returns:
            RiskMetrics rounded to RATIO_PRECISION. The Sortino sentinel is
            kept as-is and flagged with sortino_unbounded.
        """
        result = RiskMetrics(data_points=len(returns))

        if not returns:
            return result

        volatility = calculate_volatility(returns)
        beta = calculate_beta(returns, market_returns)
        sortino, unbounded = _sortino(returns, risk_free_rate, periods_per_year)

        if annual_return is None:
            annual_return = annualized_mean(returns, periods_per_year)

        result.volatility = round(volatility, RATIO_PRECISION)
        result.annualized_volatility = round(
            annualize_volatility(volatility, periods_per_year), RATIO_PRECISION
        )
        result.beta = round(beta, RATIO_PRECISION)
        result.alpha = round(
            calculate_alpha(annual_return, beta, market_return, risk_free_rate),
            RATIO_PRECISION,
        )
        result.sharpe_ratio = round(
            calculate_sharpe_ratio(returns, risk_free_rate, periods_per_year),
            RATIO_PRECISION,
        )
        result.sortino_ratio = sortino if unbounded else round(sortino, RATIO_PRECISION)
        result.sortino_unbounded = unbounded
        result.max_drawdown = round(calculate_max_drawdown(returns), RATIO_PRECISION)
        result.value_at_risk = round(calculate_var(returns, confidence_level), RATIO_PRECISION)
        result.conditional_var = round(calculate_cvar(returns, confidence_level), RATIO_PRECISION)
        result.information_ratio = round(
            calculate_information_ratio(returns, market_returns), RATIO_PRECISION
        )
        result.treynor_ratio = round(
            calculate_treynor_ratio(returns, beta, risk_free_rate, periods_per_year),
            RATIO_PRECISION,
        )

        logger.debug(
            f"Risk metrics over {len(returns)} returns: "
            f"vol={result.annualized_volatility}, sharpe={result.sharpe_ratio}, "
            f"beta={result.beta}, mdd={result.max_drawdown}"
        )
        return result


# =============================================================================
# RISK PROFILE
# =============================================================================

def generate_risk_profile(metrics: RiskMetrics) -> RiskProfile:
    """
    Derive a qualitative risk profile from risk metrics.

    The risk score (0-100, higher = safer) is 100 minus a weighted risk load:
        30% annualized volatility (saturating at 30%)
        30% max drawdown (saturating at 40%)
        20% VaR (saturating at 20%)
        20% beta (saturating at 1.5)

    Levels: >= 80 Very Low, >= 65 Low, >= 45 Moderate, >= 25 High, else Very High
    """
    volatility = metrics.annualized_volatility

    load = 0.0
    load += min(volatility / 30 * 100, 100) * 0.3
    load += min(metrics.max_drawdown / 40 * 100, 100) * 0.3
    load += min(metrics.value_at_risk / 20 * 100, 100) * 0.2
    load += min(max(metrics.beta, 0) / 1.5 * 100, 100) * 0.2

    risk_score = 100 - load

    if risk_score >= 80:
        risk_level = RiskLevel.VERY_LOW
    elif risk_score >= 65:
        risk_level = RiskLevel.LOW
    elif risk_score >= 45:
        risk_level = RiskLevel.MODERATE
    elif risk_score >= 25:
        risk_level = RiskLevel.HIGH
    else:
        risk_level = RiskLevel.VERY_HIGH

    if risk_score >= 65:
        suitable_for = ["Conservative Investors", "Retirees", "Income Seekers"]
    elif risk_score >= 45:
        suitable_for = ["Balanced Investors", "Long-term Goals"]
    else:
        suitable_for = ["Aggressive Investors", "Young Investors", "Risk Takers"]

    warnings = []
    if volatility > 20:
        warnings.append("High volatility - expect significant price fluctuations")
    if metrics.max_drawdown > 25:
        warnings.append("Large historical drawdowns - prepare for potential losses")
    if metrics.sharpe_ratio < 0.5:
        warnings.append("Low risk-adjusted returns - consider alternatives")
    if metrics.beta > 1.3:
        warnings.append("High market sensitivity - amplified market movements")

    recommendations = []
    if metrics.sharpe_ratio > 1.5:
        recommendations.append("Excellent risk-adjusted returns")
    if metrics.sortino_ratio > 2:
        recommendations.append("Strong downside protection")
    if metrics.information_ratio > 0.5:
        recommendations.append("Active management adding value")

    return RiskProfile(
        risk_level=risk_level,
        risk_score=int(round(risk_score)),
        suitable_for=suitable_for,
        warnings=warnings,
        recommendations=recommendations,
    )


# =============================================================================
# RISK REPORT
# =============================================================================

def interpret_risk_metrics(metrics: RiskMetrics) -> dict[str, MetricInterpretation]:
    """
    Rate the headline metrics and describe them in plain language.

    Volatility is read as the annualized figure. Alpha of None reads as 0.
    """
    sharpe = metrics.sharpe_ratio
    if sharpe > 2:
        sharpe_view = MetricInterpretation(
            sharpe, "Excellent",
            "Excellent risk-adjusted returns. Fund generates high returns relative to risk taken.",
        )
    elif sharpe > 1:
        sharpe_view = MetricInterpretation(
            sharpe, "Good",
            "Good risk-adjusted returns. Fund is performing well for the risk level.",
        )
    elif sharpe > 0:
        sharpe_view = MetricInterpretation(
            sharpe, "Average",
            "Average risk-adjusted returns. Returns barely compensate for risk.",
        )
    else:
        sharpe_view = MetricInterpretation(
            sharpe, "Poor",
            "Poor risk-adjusted returns. High risk without adequate returns.",
        )

    beta = metrics.beta
    if beta > 1.2:
        beta_view = MetricInterpretation(
            beta, "High Volatility",
            f"Fund is {round((beta - 1) * 100)}% more volatile than market. "
            f"Suitable for aggressive investors.",
        )
    elif beta > 0.8:
        beta_view = MetricInterpretation(
            beta, "Market-like",
            "Fund moves closely with market. Balanced risk profile.",
        )
    else:
        beta_view = MetricInterpretation(
            beta, "Low Volatility",
            f"Fund is {round((1 - beta) * 100)}% less volatile than market. "
            f"Suitable for conservative investors.",
        )

    alpha = metrics.alpha if metrics.alpha is not None else 0.0
    if alpha > 2:
        alpha_view = MetricInterpretation(
            alpha, "Excellent",
            f"Fund outperforms benchmark by {alpha:.1f}% annually. Excellent fund manager skill.",
        )
    elif alpha > 0:
        alpha_view = MetricInterpretation(
            alpha, "Positive",
            f"Fund beats benchmark by {alpha:.1f}% annually. Good value addition.",
        )
    elif alpha > -2:
        alpha_view = MetricInterpretation(
            alpha, "Slight Underperformance",
            f"Fund underperforms benchmark by {abs(alpha):.1f}% annually.",
        )
    else:
        alpha_view = MetricInterpretation(
            alpha, "Poor",
            "Significant underperformance. Consider alternatives.",
        )

    volatility = metrics.annualized_volatility
    if volatility < 10:
        volatility_view = MetricInterpretation(
            volatility, "Low Risk",
            "Low volatility. Stable, predictable returns suitable for conservative investors.",
        )
    elif volatility < 20:
        volatility_view = MetricInterpretation(
            volatility, "Moderate Risk",
            "Moderate volatility. Balanced risk-reward profile.",
        )
    else:
        volatility_view = MetricInterpretation(
            volatility, "High Risk",
            "High volatility. Large swings in returns. Only for risk-tolerant investors.",
        )

    max_drawdown = metrics.max_drawdown
    if max_drawdown < 15:
        drawdown_view = MetricInterpretation(
            max_drawdown, "Resilient",
            f"Fund fell only {max_drawdown:.1f}% from peak. Resilient during downturns.",
        )
    elif max_drawdown < 30:
        drawdown_view = MetricInterpretation(
            max_drawdown, "Moderate Decline",
            f"Maximum decline of {max_drawdown:.1f}% from peak. Moderate drawdown.",
        )
    else:
        drawdown_view = MetricInterpretation(
            max_drawdown, "Severe Decline",
            f"Severe {max_drawdown:.1f}% decline from peak. Be prepared for volatility.",
        )

    return {
        "sharpe_ratio": sharpe_view,
        "beta": beta_view,
        "alpha": alpha_view,
        "volatility": volatility_view,
        "max_drawdown": drawdown_view,
    }


def classify_risk(metrics: RiskMetrics) -> str:
    """AGGRESSIVE, CONSERVATIVE or MODERATE from beta and annualized volatility."""
    if metrics.beta > 1.2 and metrics.annualized_volatility > 20:
        return "AGGRESSIVE"
    if metrics.beta < 0.8 and metrics.annualized_volatility < 15:
        return "CONSERVATIVE"
    return "MODERATE"


def assess_investor_suitability(metrics: RiskMetrics) -> str:
    """One-line verdict from Sharpe ratio and alpha."""
    alpha = metrics.alpha if metrics.alpha is not None else 0.0
    if metrics.sharpe_ratio > 1 and alpha > 0:
        return "Recommended - Good risk-adjusted returns with outperformance"
    if metrics.sharpe_ratio > 1:
        return "Consider - Decent risk-adjusted returns"
    return "Review - May not offer adequate returns for risk taken"


def build_risk_report(
        nav_series: Sequence[NavPoint],
        market_returns: Sequence[float] | None = None,
        period: str = "3Y",
        risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
        periods_per_year: int = TRADING_DAYS_PER_YEAR,
        market_return: float = DEFAULT_MARKET_RETURN,
        confidence_level: float = DEFAULT_VAR_CONFIDENCE,
        fund_id: str | None = None,
        fund_name: str | None = None,
) -> FundRiskReport:
    """
    Build a NAV-driven risk report for one fund.

    Daily returns are derived from the sorted NAV series. Alpha uses the
    annualized total return over len(nav_series) / periods_per_year years.
    Max drawdown is measured on the NAV path itself.

    Data sufficiency is the caller's concern; see FundAnalyticsService.
    """
    ordered = sort_nav_series(nav_series)
    returns = calculate_series_returns([p.nav for p in ordered])
    annual_return = calculate_annualized_return(ordered, periods_per_year)

    metrics = RiskCalculator.analyze(
        returns,
        market_returns=market_returns,
        risk_free_rate=risk_free_rate,
        periods_per_year=periods_per_year,
        market_return=market_return,
        confidence_level=confidence_level,
        annual_return=annual_return,
    )

    drawdown_period = find_max_drawdown_period(ordered)
    if drawdown_period is not None:
        drawdown_period.depth = round(drawdown_period.depth, RATIO_PRECISION)
    metrics.max_drawdown = drawdown_period.depth if drawdown_period is not None else 0.0

    return FundRiskReport(
        period=period,
        data_points=len(ordered),
        annualized_return=round(annual_return, RATIO_PRECISION),
        metrics=metrics,
        interpretation=interpret_risk_metrics(metrics),
        risk_profile=generate_risk_profile(metrics),
        risk_classification=classify_risk(metrics),
        investor_suitability=assess_investor_suitability(metrics),
        max_drawdown_period=drawdown_period,
        fund_id=fund_id,
        fund_name=fund_name,
    )


def select_risk_leaders(reports: Sequence[FundRiskReport], period: str = "3Y") -> RiskComparison:
    """
    Pick the best Sharpe ratio, lowest volatility and highest alpha.

    Ties keep the earliest report. An empty input yields no leaders.
    """
    comparison = RiskComparison(period=period, funds=list(reports))
    if not reports:
        return comparison

    comparison.best_sharpe_ratio = max(reports, key=lambda r: r.metrics.sharpe_ratio)
    comparison.lowest_volatility = min(reports, key=lambda r: r.metrics.annualized_volatility)
    comparison.highest_alpha = max(
        reports,
        key=lambda r: r.metrics.alpha if r.metrics.alpha is not None else float("-inf"),
    )
    return comparison
