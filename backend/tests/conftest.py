# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Settings / service fixtures (isolated from the environment defaults)
- NAV series factories
- Holdings factories
"""

import logging
from datetime import date, timedelta
from typing import Callable, Iterator, Sequence

import pytest

from fundmetrics.config import Settings
from fundmetrics.services.analytics.service import FundAnalyticsService
from fundmetrics.services.analytics.types import FundHoldings, Holding, NavPoint
from fundmetrics.utils.context import clear_analysis_context, clear_correlation_id


# =============================================================================
# NAV FACTORIES
# =============================================================================

def make_nav_series(
        navs: Sequence[float],
        start: date = date(2024, 1, 1),
        step_days: int = 1,
) -> list[NavPoint]:
    """Build an ascending NAV series, one point every `step_days` days."""
    return [
        NavPoint(date=start + timedelta(days=i * step_days), nav=nav)
        for i, nav in enumerate(navs)
    ]


def make_daily_navs(
        start: date,
        end: date,
        nav_for: Callable[[date], float],
) -> list[NavPoint]:
    """Build a calendar-daily NAV series from start to end inclusive."""
    series = []
    current = start
    while current <= end:
        series.append(NavPoint(date=current, nav=nav_for(current)))
        current += timedelta(days=1)
    return series


def make_growth_series(count: int, step_pct: float = 1.0, start_nav: float = 100.0) -> list[NavPoint]:
    """Geometric NAV series growing `step_pct` percent per point."""
    return make_nav_series([start_nav * (1 + step_pct / 100) ** i for i in range(count)])


def make_fund(fund_id: str, *holdings: tuple[str, float]) -> FundHoldings:
    """FundHoldings from (ticker, weight) pairs; names derive from tickers."""
    return FundHoldings(
        fund_id=fund_id,
        fund_name=f"Fund {fund_id}",
        holdings=[Holding(ticker=t, name=t.title(), weight=w) for t, w in holdings],
    )


# =============================================================================
# SERVICE FIXTURES
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Settings with the library defaults, independent of the environment."""
    return Settings(
        environment="test",
        risk_free_rate=6.5,
        market_return=12.0,
        trading_days_per_year=252,
        var_confidence=0.95,
        min_risk_data_points=20,
        min_sip_data_points=30,
        min_prediction_data_points=30,
        max_risk_comparison_funds=5,
    )


@pytest.fixture
def service(test_settings: Settings) -> FundAnalyticsService:
    return FundAnalyticsService(test_settings)


@pytest.fixture(autouse=True)
def reset_context() -> Iterator[None]:
    """Each test starts and ends without correlation ID or analysis context."""
    clear_correlation_id()
    clear_analysis_context()
    yield
    clear_correlation_id()
    clear_analysis_context()


@pytest.fixture
def library_logger() -> Iterator[logging.Logger]:
    """The 'fundmetrics' logger, restored to its original state afterwards."""
    logger = logging.getLogger("fundmetrics")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
