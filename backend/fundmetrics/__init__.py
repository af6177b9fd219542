# backend/fundmetrics/__init__.py
"""
Quantitative mutual-fund analytics.

Pure, synchronous calculators over NAV series, return series and holdings:
risk metrics, Smart Score, SIP date optimizer, fund overlap, performance
prediction and fund manager track records.

Usage:
    from fundmetrics.services.analytics import FundAnalyticsService
"""

__version__ = "0.1.0"
