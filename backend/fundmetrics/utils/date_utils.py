# backend/fundmetrics/utils/date_utils.py
"""
Date utility functions for the fund analytics library.

Usage:
    from fundmetrics.utils.date_utils import subtract_months, years_between

    start = subtract_months(date(2024, 3, 31), 1)   # date(2024, 2, 29)
"""

import calendar
from datetime import date

from fundmetrics.services.constants import DAYS_PER_YEAR


def subtract_months(d: date, months: int) -> date:
    """
    Move a date back by a number of calendar months.

    The day is clamped to the length of the target month, so month-end
    dates stay at month end.

    Args:
        d: Starting date
        months: Number of months to go back (non-negative)

    Returns:
        The shifted date

    Example:
        >>> subtract_months(date(2024, 3, 31), 1)
        datetime.date(2024, 2, 29)
    """
    total = d.year * 12 + (d.month - 1) - months
    year, month_index = divmod(total, 12)
    month = month_index + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def subtract_years(d: date, years: int) -> date:
    """Move a date back by whole years (Feb 29 becomes Feb 28)."""
    return subtract_months(d, years * 12)


def years_between(start: date, end: date) -> float:
    """
    Fractional years between two dates using a 365.25-day year.

    Returns 0.0 when end precedes start.
    """
    days = (end - start).days
    if days <= 0:
        return 0.0
    return days / DAYS_PER_YEAR
