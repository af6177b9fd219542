# backend/fundmetrics/services/analytics/returns.py
"""
Return calculation functions for the analytics calculators.

This module contains pure functions turning NAV series into returns:
- NAV ordering and validation (every order-sensitive routine sorts first)
- Series Returns: consecutive percentage change of NAV
- Total Return: (Last - First) / First
- Annualized Return: compounding a total return over a number of years
- Trailing Returns: 1Y absolute, 3Y/5Y CAGR from a point-in-time NAV

All returns are percentages (12.5 = 12.5%). NAV series may be supplied in
ascending or descending date order.

Formulas:
    r_i = (NAV_i - NAV_{i-1}) / NAV_{i-1} × 100

    Annualized = ((1 + R/100)^(1/years) - 1) × 100

    CAGR_n = ((NAV_now / NAV_{n years ago})^(1/n) - 1) × 100
"""

import logging
from datetime import date, timedelta
from typing import Sequence

from fundmetrics.services.analytics.types import NavPoint, TrailingReturns
from fundmetrics.services.constants import (
    RATIO_PRECISION,
    TRADING_DAYS_PER_YEAR,
    TRAILING_RETURN_TOLERANCE_DAYS,
)
from fundmetrics.services.exceptions import ValidationError
from fundmetrics.utils.date_utils import subtract_years

logger = logging.getLogger(__name__)


# =============================================================================
# NAV ORDERING
# =============================================================================

def sort_nav_series(nav_series: Sequence[NavPoint]) -> list[NavPoint]:
    """
    Return a chronologically ascending copy of a NAV series.

    Callers pass NAV history in either order, so every calculator that
    depends on ordering (drawdown, trend, trailing returns) goes through
    this function first.

    Raises:
        ValidationError: If any NAV is not strictly positive
    """
    for point in nav_series:
        if point.nav <= 0:
            raise ValidationError(
                f"NAV must be positive, got {point.nav} on {point.date.isoformat()}",
                field="nav",
            )

    return sorted(nav_series, key=lambda p: p.date)


# =============================================================================
# SERIES RETURNS
# =============================================================================

def calculate_series_returns(values: Sequence[float]) -> list[float]:
    """
    Calculate period-over-period percentage returns from a value series.

    Args:
        values: Chronological values (NAVs or index levels)

    Returns:
        List of returns in percent (one fewer than input values)

    Example:
        >>> calculate_series_returns([100, 105, 102.9])
        [5.0, -2.0]
    """
    if len(values) < 2:
        return []

    returns = []
    for previous, current in zip(values, values[1:]):
        if previous > 0:
            returns.append((current - previous) / previous * 100)

    return returns


def calculate_returns_from_navs(nav_series: Sequence[NavPoint]) -> list[float]:
    """Sort a NAV series and derive its percentage return series."""
    ordered = sort_nav_series(nav_series)
    return calculate_series_returns([p.nav for p in ordered])


# =============================================================================
# TOTAL AND ANNUALIZED RETURN
# =============================================================================

def calculate_total_return(nav_series: Sequence[NavPoint]) -> float:
    """
    Total return from the first to the last NAV, in percent.

    Returns 0.0 for fewer than two points.
    """
    if len(nav_series) < 2:
        return 0.0

    ordered = sort_nav_series(nav_series)
    start_nav = ordered[0].nav
    end_nav = ordered[-1].nav
    return (end_nav - start_nav) / start_nav * 100


def annualize_return(total_return: float, years: float) -> float:
    """
    Annualize a total return over a number of years.

    Formula: ((1 + R/100)^(1/years) - 1) × 100

    Args:
        total_return: Total return in percent
        years: Length of the period in years

    Returns:
        Annualized return in percent. Periods of zero length return the
        total return unchanged; a total loss returns -100.
    """
    if years <= 0:
        return total_return

    base = 1 + total_return / 100
    if base <= 0:
        return -100.0

    return (base ** (1 / years) - 1) * 100


def calculate_annualized_return(
        nav_series: Sequence[NavPoint],
        periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """
    Annualized return of a NAV series counted in observations.

    The series is assumed to hold one NAV per period, so its length in years
    is len(nav_series) / periods_per_year.
    """
    if len(nav_series) < 2:
        return 0.0

    years = len(nav_series) / periods_per_year
    return annualize_return(calculate_total_return(nav_series), years)


# =============================================================================
# TRAILING RETURNS
# =============================================================================

def find_closest_nav(
        ordered: Sequence[NavPoint],
        target: date,
        tolerance_days: int = TRAILING_RETURN_TOLERANCE_DAYS,
) -> float | None:
    """
    NAV of the observation closest to a target date.

    Args:
        ordered: Ascending NAV series
        target: Date to look up
        tolerance_days: History must start no later than this many days
            after the target

    Returns:
        The closest NAV, or None if the series does not reach back to the
        target date
    """
    if not ordered:
        return None

    if ordered[0].date > target + timedelta(days=tolerance_days):
        return None

    closest = min(ordered, key=lambda p: abs((p.date - target).days))
    return closest.nav


def calculate_trailing_returns(
        nav_series: Sequence[NavPoint],
        as_of: date | None = None,
        tolerance_days: int = TRAILING_RETURN_TOLERANCE_DAYS,
) -> TrailingReturns:
    """
    Calculate 1Y absolute and 3Y/5Y annualized trailing returns.

    Args:
        nav_series: NAV history in any order
        as_of: Valuation date (default: latest NAV date). Later NAVs are ignored.
        tolerance_days: See find_closest_nav

    Returns:
        TrailingReturns with None for horizons the history does not cover
    """
    ordered = sort_nav_series(nav_series)
    if as_of is not None:
        ordered = [p for p in ordered if p.date <= as_of]

    if not ordered:
        return TrailingReturns()

    current = ordered[-1]
    result = TrailingReturns()

    nav_1y = find_closest_nav(ordered, subtract_years(current.date, 1), tolerance_days)
    if nav_1y is not None:
        result.returns_1y = round((current.nav - nav_1y) / nav_1y * 100, RATIO_PRECISION)

    nav_3y = find_closest_nav(ordered, subtract_years(current.date, 3), tolerance_days)
    if nav_3y is not None:
        result.returns_3y = round(((current.nav / nav_3y) ** (1 / 3) - 1) * 100, RATIO_PRECISION)

    nav_5y = find_closest_nav(ordered, subtract_years(current.date, 5), tolerance_days)
    if nav_5y is not None:
        result.returns_5y = round(((current.nav / nav_5y) ** (1 / 5) - 1) * 100, RATIO_PRECISION)

    logger.debug(
        f"Trailing returns as of {current.date}: "
        f"1Y={result.returns_1y}, 3Y={result.returns_3y}, 5Y={result.returns_5y}"
    )
    return result
