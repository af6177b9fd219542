# backend/fundmetrics/services/__init__.py
"""
Service layer for fund analytics.

This package contains the calculators and their orchestrator. Services:
- Have NO knowledge of HTTP (no status codes, no request objects)
- Raise domain-specific exceptions
- Receive plain data (NAV series, holdings) as parameters
- Perform no I/O and keep no state between calls

Usage:
    from fundmetrics.services.analytics import FundAnalyticsService
    from fundmetrics.services import (
        ServiceError,
        ValidationError,
        InvalidFundCountError,
        InsufficientDataError,
    )

Architecture:
    services/
    ├── __init__.py                  # This file - exception exports
    ├── exceptions.py                # Domain exceptions
    ├── constants.py                 # Default parameters and thresholds
    └── analytics/                   # Analytics calculators
        ├── service.py               # FundAnalyticsService orchestrator
        ├── types.py                 # Input and result dataclasses
        ├── statistics.py            # Mean, variance, covariance, percentile
        ├── returns.py               # NAV ordering, series/trailing returns
        ├── risk.py                  # Sharpe, Sortino, Beta, VaR, risk report
        ├── smart_score.py           # Composite Smart Score
        ├── sip_optimizer.py         # SIP date optimizer
        ├── overlap.py               # Fund overlap analyzer
        ├── prediction.py            # Performance predictor
        └── manager_track.py         # Fund manager track record

The analytics package is not imported here: fundmetrics.config imports
services.constants, and the orchestrator imports fundmetrics.config.
"""

from fundmetrics.services.exceptions import (
    ServiceError,
    ValidationError,
    InvalidFundCountError,
    AnalyticsError,
    InsufficientDataError,
)

__all__ = [
    "ServiceError",
    "ValidationError",
    "InvalidFundCountError",
    "AnalyticsError",
    "InsufficientDataError",
]
