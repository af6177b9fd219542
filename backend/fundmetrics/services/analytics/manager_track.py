# backend/fundmetrics/services/analytics/manager_track.py
"""
Fund manager track record.

Rates a manager from the NAV history of every fund they manage:
- Per fund: trailing returns, tenure, performance rating, outperformance
  against the category average
- Aggregate: AUM, tenure, average returns, success rate (share of funds
  beating their category over 3Y), consistency (share rated Excellent/Good)
- Category expertise, strengths, concerns and an overall rating

Overall score = 0.4 × success rate + 2 × average 3Y return + 0.4 × consistency
    > 75 Exceptional, > 60 Strong, > 45 Competent, > 30 Developing, else Concerning
"""

import logging
from datetime import date
from typing import Mapping, Sequence

from fundmetrics.services.analytics.returns import calculate_trailing_returns
from fundmetrics.services.analytics.types import (
    CategoryExpertise,
    ManagedFund,
    ManagedFundRecord,
    ManagerProfile,
    ManagerStats,
    ManagerTrackResult,
    PerformanceTrendPoint,
    TrailingReturns,
)
from fundmetrics.services.constants import (
    CATEGORY_AVERAGE_RETURNS,
    DEFAULT_CATEGORY_AVERAGE,
    RATIO_PRECISION,
)
from fundmetrics.services.exceptions import ValidationError
from fundmetrics.utils.date_utils import years_between

logger = logging.getLogger(__name__)

_HORIZONS = ("returns_1y", "returns_3y", "returns_5y")
_HORIZON_LABELS = {"returns_1y": "1 Year", "returns_3y": "3 Years", "returns_5y": "5 Years"}


# =============================================================================
# RATINGS
# =============================================================================

def rate_fund_performance(returns_3y: float | None) -> str:
    """Rating from 3Y annualized return; unknown history rates Average."""
    if returns_3y is None:
        return "Average"
    if returns_3y > 18:
        return "Excellent"
    if returns_3y > 14:
        return "Good"
    if returns_3y > 10:
        return "Average"
    if returns_3y > 6:
        return "Below Average"
    return "Poor"


def rate_manager(score: float) -> str:
    if score > 75:
        return "Exceptional"
    if score > 60:
        return "Strong"
    if score > 45:
        return "Competent"
    if score > 30:
        return "Developing"
    return "Concerning"


def get_category_average(
        category: str,
        category_averages: Mapping[str, Mapping[str, float]] = CATEGORY_AVERAGE_RETURNS,
) -> Mapping[str, float]:
    """Category averages keyed like LARGE_CAP; "Large Cap" and "large-cap" also match."""
    key = category.strip().upper().replace(" ", "_").replace("-", "_")
    return category_averages.get(key, DEFAULT_CATEGORY_AVERAGE)


def _average_or_none(values: list[float]) -> float | None:
    if not values:
        return None
    return round(sum(values) / len(values), RATIO_PRECISION)


# =============================================================================
# FUND RECORDS
# =============================================================================

def build_fund_record(
        fund: ManagedFund,
        as_of: date,
        category_averages: Mapping[str, Mapping[str, float]] = CATEGORY_AVERAGE_RETURNS,
) -> ManagedFundRecord:
    """Performance record of one managed fund valued at `as_of`."""
    returns = calculate_trailing_returns(fund.nav_series, as_of=as_of)
    category_average = get_category_average(fund.category, category_averages)

    vs_category = TrailingReturns()
    for horizon in _HORIZONS:
        value = getattr(returns, horizon)
        if value is not None:
            setattr(vs_category, horizon, round(value - category_average[horizon], RATIO_PRECISION))

    tenure_end = fund.management_end or as_of
    return ManagedFundRecord(
        fund_id=fund.fund_id,
        fund_name=fund.fund_name,
        category=fund.category,
        management_start=fund.management_start,
        management_end=fund.management_end,
        tenure_years=round(years_between(fund.management_start, tenure_end), RATIO_PRECISION),
        returns=returns,
        aum=fund.aum,
        expense_ratio=fund.expense_ratio,
        performance_rating=rate_fund_performance(returns.returns_3y),
        vs_category=vs_category,
    )


def _default_as_of(funds: Sequence[ManagedFund]) -> date:
    latest = [max(p.date for p in fund.nav_series) for fund in funds if fund.nav_series]
    return max(latest) if latest else date.today()


# =============================================================================
# TRACK RECORD
# =============================================================================

def analyze_manager_track(
        manager: ManagerProfile,
        funds: Sequence[ManagedFund],
        as_of: date | None = None,
        category_averages: Mapping[str, Mapping[str, float]] = CATEGORY_AVERAGE_RETURNS,
) -> ManagerTrackResult:
    """
    Build a manager's track record across the funds they manage.

    Args:
        manager: Manager identity
        funds: Funds managed (current and past), each with NAV history
        as_of: Valuation date (default: latest NAV date across all funds)
        category_averages: Category average returns, keyed by category

    Returns:
        ManagerTrackResult with fund records sorted by tenure, longest first

    Raises:
        ValidationError: No funds supplied, or a NAV is not positive
    """
    if not funds:
        raise ValidationError(
            f"Manager {manager.name} has no managed funds to analyze",
            field="funds",
        )

    valuation_date = as_of or _default_as_of(funds)
    records = [build_fund_record(fund, valuation_date, category_averages) for fund in funds]

    total = len(records)
    currently_managing = sum(1 for r in records if r.management_end is None)
    total_aum = sum(r.aum or 0.0 for r in records)
    avg_tenure = sum(r.tenure_years for r in records) / total
    longest_tenure = max(r.tenure_years for r in records)

    avg_returns = TrailingReturns()
    performance_trend = []
    for horizon in _HORIZONS:
        values = [getattr(r.returns, horizon) for r in records if getattr(r.returns, horizon) is not None]
        average = _average_or_none(values)
        setattr(avg_returns, horizon, average)
        performance_trend.append(PerformanceTrendPoint(
            period=_HORIZON_LABELS[horizon],
            avg_return=average if average is not None else 0.0,
            funds_count=len(values),
        ))

    beating_category = sum(
        1 for r in records
        if r.vs_category.returns_3y is not None and r.vs_category.returns_3y > 0
    )
    success_rate = round(beating_category / total * 100, RATIO_PRECISION)
    well_rated = sum(1 for r in records if r.performance_rating in ("Excellent", "Good"))
    consistency = round(well_rated / total * 100, RATIO_PRECISION)

    stats = ManagerStats(
        total_funds_managed=total,
        currently_managing=currently_managing,
        total_aum=total_aum,
        avg_tenure=round(avg_tenure, RATIO_PRECISION),
        longest_tenure=round(longest_tenure, RATIO_PRECISION),
        avg_returns=avg_returns,
        success_rate=success_rate,
        consistency_score=consistency,
    )

    # category -> (funds managed, 3Y returns)
    categories: dict[str, tuple[int, list[float]]] = {}
    for record in records:
        count, returns_3y = categories.get(record.category, (0, []))
        if record.returns.returns_3y is not None:
            returns_3y.append(record.returns.returns_3y)
        categories[record.category] = (count + 1, returns_3y)

    expertise = [
        CategoryExpertise(
            category=category,
            funds_managed=count,
            avg_returns=_average_or_none(returns_3y) or 0.0,
            rating="Specialist" if count >= 3 else "Experienced" if count >= 2 else "Learning",
        )
        for category, (count, returns_3y) in categories.items()
    ]
    expertise.sort(key=lambda c: -c.funds_managed)

    avg_3y = avg_returns.returns_3y or 0.0

    strengths = []
    concerns = []
    if success_rate > 70:
        strengths.append(f"Excellent track record: {success_rate}% of funds beat category average")
    elif success_rate > 50:
        strengths.append(f"Good performance: {success_rate}% of funds beat category average")
    else:
        concerns.append(f"Only {success_rate}% of funds beat category average")
    if avg_tenure > 5:
        strengths.append(f"Long average tenure of {avg_tenure:.1f} years shows stability")
    if total_aum > 10_000:
        strengths.append(f"Managing Rs {total_aum / 1000:.0f}K+ Cr across multiple funds")
    if avg_3y > 15:
        strengths.append(f"Strong 3Y average returns of {avg_3y}% CAGR")
    if consistency > 70:
        strengths.append(f"High consistency score of {consistency}/100")
    elif consistency < 40:
        concerns.append(f"Inconsistent performance across funds (score: {consistency}/100)")
    if len(expertise) > 3:
        strengths.append(f"Diversified expertise across {len(expertise)} categories")
    if not concerns:
        concerns.append("No major concerns identified based on available data")

    score = success_rate * 0.4 + avg_3y * 2 + consistency * 0.4
    overall_rating = rate_manager(score)

    if overall_rating in ("Exceptional", "Strong"):
        recommendation = (
            f"{manager.name} has a strong track record with {success_rate}% success rate "
            f"and {avg_3y}% avg 3Y returns. Highly recommended for long-term investments."
        )
    elif overall_rating == "Competent":
        recommendation = (
            f"{manager.name} shows competent management with room for improvement. "
            f"Suitable for diversified portfolios."
        )
    else:
        recommendation = (
            f"{manager.name}'s track record shows mixed results. "
            f"Consider comparing with other fund managers before investing."
        )

    logger.debug(
        f"Manager {manager.manager_id}: {total} funds, success={success_rate}%, "
        f"consistency={consistency}, score={score:.1f} ({overall_rating})"
    )

    return ManagerTrackResult(
        manager=manager,
        stats=stats,
        fund_records=sorted(records, key=lambda r: -r.tenure_years),
        performance_trend=performance_trend,
        category_expertise=expertise,
        strengths=strengths,
        concerns=concerns,
        overall_rating=overall_rating,
        recommendation=recommendation,
    )
