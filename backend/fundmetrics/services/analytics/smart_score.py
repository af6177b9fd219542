# backend/fundmetrics/services/analytics/smart_score.py
"""
Smart Score: a composite 0-100 fund rating.

Heterogeneous fund attributes are each normalized onto 0-100, blended into
five component scores, and combined with fixed weights:

    Score = 0.35 × Return + 0.25 × Risk + 0.20 × Consistency
          + 0.10 × Cost + 0.10 × Alpha

Absent attributes (None) are left out of their component's average rather
than counted as zero. A component with no attributes at all scores the
neutral 50, so an empty input scores exactly 50.

Normalization:
    normalize(v, lo, hi) = clamp((v - lo) / (hi - lo) × 100, 0, 100)
    inverse=True returns 100 - normalize(...) for "lower is better" inputs

Component domains:
    Return:       1Y -20..50 (w 0.3), 3Y 0..30 (w 0.4), 5Y 5..25 (w 0.3)
    Risk:         beta 0.5..1.5 inv, std dev 5..30 inv,
                  Sharpe -0.5..2.5, |max drawdown| 5..40 inv
    Consistency:  consistency index as-is, Sortino 0..3, info ratio -0.5..1.5
    Cost:         expense ratio 0.5..3 inv, AUM 100..10000 at half weight
    Alpha:        alpha -5..10
"""

import logging
from typing import Sequence

from fundmetrics.services.analytics.types import (
    FundComparison,
    FundMetricInput,
    Grade,
    Recommendation,
    ScoreBreakdown,
    SmartScoreResult,
)
from fundmetrics.services.constants import (
    COMPARISON_TIE_THRESHOLD,
    NEUTRAL_SCORE,
    SMART_SCORE_WEIGHTS,
)

logger = logging.getLogger(__name__)


# =============================================================================
# NORMALIZATION
# =============================================================================

def normalize(value: float, minimum: float, maximum: float, inverse: bool = False) -> float:
    """
    Linearly scale a value onto 0-100 and clamp it.

    Args:
        value: Raw attribute value
        minimum: Raw value mapped to 0
        maximum: Raw value mapped to 100
        inverse: Return 100 - score (lower raw values are better)

    Example:
        >>> normalize(15, 0, 30)
        50.0
        >>> normalize(0.5, 0.5, 3, inverse=True)
        100.0
    """
    scaled = (value - minimum) / (maximum - minimum) * 100
    clamped = max(0.0, min(100.0, scaled))
    return 100 - clamped if inverse else clamped


def _average(scores: list[float]) -> float:
    return sum(scores) / len(scores) if scores else NEUTRAL_SCORE


# =============================================================================
# COMPONENT SCORES
# =============================================================================

def calculate_return_score(data: FundMetricInput) -> float:
    """Weighted blend of 1Y/3Y/5Y returns over the weights of present horizons."""
    horizons = (
        (data.returns_1y, -20, 50, 0.3),
        (data.returns_3y, 0, 30, 0.4),
        (data.returns_5y, 5, 25, 0.3),
    )

    score = 0.0
    total_weight = 0.0
    for value, lo, hi, weight in horizons:
        if value is None:
            continue
        score += normalize(value, lo, hi) * weight
        total_weight += weight

    return score / total_weight if total_weight > 0 else NEUTRAL_SCORE


def calculate_risk_score(data: FundMetricInput) -> float:
    """Unweighted average of beta, std dev, Sharpe and drawdown scores."""
    scores = []
    if data.beta is not None:
        scores.append(normalize(data.beta, 0.5, 1.5, inverse=True))
    if data.std_dev is not None:
        scores.append(normalize(data.std_dev, 5, 30, inverse=True))
    if data.sharpe_ratio is not None:
        scores.append(normalize(data.sharpe_ratio, -0.5, 2.5))
    if data.max_drawdown is not None:
        scores.append(normalize(abs(data.max_drawdown), 5, 40, inverse=True))
    return _average(scores)


def calculate_consistency_score(data: FundMetricInput) -> float:
    """Unweighted average of the clamped consistency index, Sortino and information ratio."""
    scores = []
    if data.consistency_index is not None:
        scores.append(max(0.0, min(100.0, data.consistency_index)))
    if data.sortino_ratio is not None:
        scores.append(normalize(data.sortino_ratio, 0, 3))
    if data.information_ratio is not None:
        scores.append(normalize(data.information_ratio, -0.5, 1.5))
    return _average(scores)


def calculate_cost_score(data: FundMetricInput) -> float:
    """
    Expense ratio score averaged with a half-weighted AUM score.

    AUM contributes 0.5 × its normalized score but still counts as a whole
    factor in the divisor, so AUM alone can score at most 50.
    """
    score = 0.0
    count = 0
    if data.expense_ratio is not None:
        score += normalize(data.expense_ratio, 0.5, 3, inverse=True)
        count += 1
    if data.aum is not None:
        score += normalize(data.aum, 100, 10_000) * 0.5
        count += 1
    return score / count if count > 0 else NEUTRAL_SCORE


def calculate_alpha_score(data: FundMetricInput) -> float:
    if data.alpha is None:
        return NEUTRAL_SCORE
    return normalize(data.alpha, -5, 10)


# =============================================================================
# GRADE / RECOMMENDATION
# =============================================================================

def get_grade(score: float) -> Grade:
    """Letter grade; every threshold is inclusive (80.0 is an A)."""
    if score >= 90:
        return Grade.A_PLUS
    if score >= 80:
        return Grade.A
    if score >= 70:
        return Grade.B_PLUS
    if score >= 60:
        return Grade.B
    if score >= 50:
        return Grade.C_PLUS
    if score >= 40:
        return Grade.C
    return Grade.D


def get_recommendation(score: float) -> Recommendation:
    if score >= 85:
        return Recommendation.STRONG_BUY
    if score >= 70:
        return Recommendation.BUY
    if score >= 50:
        return Recommendation.HOLD
    if score >= 35:
        return Recommendation.SELL
    return Recommendation.STRONG_SELL


# =============================================================================
# INSIGHTS
# =============================================================================

# (exceptional >= 75, strong 60-75, warning < 40) per component
_INSIGHT_TEXT: dict[str, tuple[str, str, str]] = {
    "return_score": (
        "Exceptional historical returns across all timeframes",
        "Strong historical returns",
        "Below-average returns compared to peers",
    ),
    "risk_score": (
        "Exceptional risk control with excellent risk-adjusted returns",
        "Strong risk profile with moderate volatility",
        "High volatility - suitable for risk-tolerant investors",
    ),
    "consistency_score": (
        "Exceptionally consistent performance with minimal fluctuations",
        "Strong consistency across market cycles",
        "Inconsistent returns - may experience periods of underperformance",
    ),
    "cost_score": (
        "Exceptionally cost-efficient with a low expense ratio",
        "Strong cost efficiency",
        "Higher expense ratio may impact long-term returns",
    ),
    "alpha_score": (
        "Exceptional alpha indicates superior fund management",
        "Strong alpha over the benchmark",
        "Negative alpha - consider index funds as alternative",
    ),
}


def generate_insights(breakdown: ScoreBreakdown, data: FundMetricInput) -> list[str]:
    """
    Threshold-based observations on each component plus the Sharpe ratio.

    Per component: >= 75 exceptional, 60-75 strong, < 40 warning. Scores
    from 40 to 60 produce no insight.
    """
    insights = []
    for component, (exceptional, strong, warning) in _INSIGHT_TEXT.items():
        score = getattr(breakdown, component)
        if score >= 75:
            insights.append(exceptional)
        elif score >= 60:
            insights.append(strong)
        elif score < 40:
            insights.append(warning)

    if data.sharpe_ratio is not None:
        if data.sharpe_ratio > 2:
            insights.append("Excellent Sharpe ratio - outstanding risk-adjusted performance")
        elif data.sharpe_ratio < 0.5:
            insights.append("Low Sharpe ratio - returns may not justify the risk")

    return insights


def generate_summary(
        score: float,
        grade: Grade,
        recommendation: Recommendation,
        data: FundMetricInput,
) -> str:
    if score >= 75:
        performance = "exceptional"
    elif score >= 60:
        performance = "strong"
    elif score >= 50:
        performance = "moderate"
    else:
        performance = "weak"

    if data.std_dev is not None and data.std_dev < 10:
        risk_level = "low"
    elif data.std_dev is not None and data.std_dev > 20:
        risk_level = "high"
    else:
        risk_level = "moderate"

    returns_text = (
        f"{data.returns_3y:.1f}% 3-year returns"
        if data.returns_3y is not None else "historical returns"
    )
    cost_text = (
        f"{data.expense_ratio:.2f}% expense ratio"
        if data.expense_ratio is not None else "competitive costs"
    )

    return (
        f"This fund has demonstrated {performance} performance with a grade of {grade.value}. "
        f"Risk profile is {risk_level} with {returns_text} and {cost_text}. "
        f"Investment recommendation: {recommendation.value}."
    )


# =============================================================================
# SMART SCORE
# =============================================================================

def compute_smart_score(data: FundMetricInput) -> SmartScoreResult:
    """
    Compute the Smart Score of a fund.

    Args:
        data: Sparse fund attributes; None fields are excluded

    Returns:
        SmartScoreResult with the score rounded to one decimal. Grade and
        recommendation are derived from the rounded score.
    """
    breakdown = ScoreBreakdown(
        return_score=calculate_return_score(data),
        risk_score=calculate_risk_score(data),
        consistency_score=calculate_consistency_score(data),
        cost_score=calculate_cost_score(data),
        alpha_score=calculate_alpha_score(data),
    )

    raw_score = sum(
        getattr(breakdown, component) * weight
        for component, weight in SMART_SCORE_WEIGHTS.items()
    )
    score = round(raw_score, 1)

    grade = get_grade(score)
    recommendation = get_recommendation(score)
    insights = generate_insights(breakdown, data)

    rounded = ScoreBreakdown(
        return_score=round(breakdown.return_score, 1),
        risk_score=round(breakdown.risk_score, 1),
        consistency_score=round(breakdown.consistency_score, 1),
        cost_score=round(breakdown.cost_score, 1),
        alpha_score=round(breakdown.alpha_score, 1),
    )

    logger.debug(f"Smart score {score} ({grade.value}): {rounded}")

    return SmartScoreResult(
        score=score,
        grade=grade,
        breakdown=rounded,
        insights=insights,
        recommendation=recommendation,
        summary=generate_summary(score, grade, recommendation, data),
    )


def compute_smart_score_batch(inputs: Sequence[FundMetricInput]) -> list[SmartScoreResult]:
    """Score several funds, preserving input order."""
    return [compute_smart_score(data) for data in inputs]


def compare_funds(
        fund1: FundMetricInput,
        fund2: FundMetricInput,
        tie_threshold: float = COMPARISON_TIE_THRESHOLD,
) -> FundComparison:
    """
    Compare two funds by Smart Score.

    Scores closer than `tie_threshold` points are a tie.
    """
    score1 = compute_smart_score(fund1)
    score2 = compute_smart_score(fund2)
    difference = round(abs(score1.score - score2.score), 1)

    if abs(score1.score - score2.score) < tie_threshold:
        winner = "tie"
        comparison = (
            f"Both funds are evenly matched (scores {score1.score} vs {score2.score}). "
            f"Choose based on your risk appetite and investment horizon."
        )
    elif score1.score > score2.score:
        winner = "fund1"
        comparison = (
            f"Fund 1 outperforms Fund 2 by {difference} points "
            f"({score1.grade.value} vs {score2.grade.value})."
        )
    else:
        winner = "fund2"
        comparison = (
            f"Fund 2 outperforms Fund 1 by {difference} points "
            f"({score2.grade.value} vs {score1.grade.value})."
        )

    return FundComparison(
        winner=winner,
        score1=score1,
        score2=score2,
        difference=difference,
        comparison=comparison,
    )
