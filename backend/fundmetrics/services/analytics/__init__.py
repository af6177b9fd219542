# backend/fundmetrics/services/analytics/__init__.py
"""
Fund Analytics Package.

This package provides mutual-fund analytics capabilities:
- Risk metrics (Volatility, Sharpe, Sortino, Beta, Alpha, VaR, Drawdown)
- Smart Score (composite 0-100 fund rating)
- SIP date optimization
- Fund overlap analysis
- Performance prediction (RSI, MACD, trend)
- Fund manager track records

Architecture:
    analytics/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Data classes for inputs and results
    ├── statistics.py            # Statistics primitives
    ├── returns.py               # Return calculations
    ├── risk.py                  # Risk calculations and risk report
    ├── smart_score.py           # Smart Score model
    ├── sip_optimizer.py         # SIP date optimizer
    ├── overlap.py               # Fund overlap analyzer
    ├── prediction.py            # Performance predictor
    ├── manager_track.py         # Manager track record
    └── service.py               # FundAnalyticsService (orchestrator)

Usage:
    from fundmetrics.services.analytics import FundAnalyticsService, NavPoint

    service = FundAnalyticsService()

    report = service.get_risk_report(nav_series, period="3Y")
    print(f"Sharpe: {report.metrics.sharpe_ratio}")
    print(f"Profile: {report.risk_classification}")

    # Or call the calculators directly
    from fundmetrics.services.analytics import calculate_sharpe_ratio
    sharpe = calculate_sharpe_ratio(daily_returns, risk_free_rate=6.5)

Data Flow:
    NAV series / holdings (from the caller)
        ↓
    FundAnalyticsService (settings, logging, sufficiency checks)
        ↓
    calculators (pure functions)
        ↓
    result dataclasses → fundmetrics.schemas (camelCase JSON)
"""

from fundmetrics.services.analytics.manager_track import analyze_manager_track
from fundmetrics.services.analytics.overlap import (
    analyze_fund_overlap,
    calculate_pairwise_overlap,
)
from fundmetrics.services.analytics.prediction import (
    predict_performance,
    predict_performance_batch,
)
from fundmetrics.services.analytics.returns import (
    annualize_return,
    calculate_returns_from_navs,
    calculate_series_returns,
    calculate_trailing_returns,
    sort_nav_series,
)
from fundmetrics.services.analytics.risk import (
    RiskCalculator,
    calculate_alpha,
    calculate_beta,
    calculate_cvar,
    calculate_information_ratio,
    calculate_max_drawdown,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    calculate_treynor_ratio,
    calculate_var,
    calculate_volatility,
    find_max_drawdown_period,
    generate_risk_profile,
)
# Main service
from fundmetrics.services.analytics.service import FundAnalyticsService
from fundmetrics.services.analytics.sip_optimizer import optimize_sip_date
from fundmetrics.services.analytics.smart_score import (
    compare_funds,
    compute_smart_score,
    compute_smart_score_batch,
    normalize,
)
from fundmetrics.services.analytics.statistics import (
    covariance,
    mean,
    percentile_value,
    stddev,
    variance,
)
# Types
from fundmetrics.services.analytics.types import (
    # Input types
    NavPoint,
    FundMetricInput,
    Holding,
    FundHoldings,
    FundNavHistory,
    ManagedFund,
    ManagerProfile,
    # Result types
    RiskMetrics,
    RiskProfile,
    DrawdownPeriod,
    FundRiskReport,
    RiskComparison,
    SmartScoreResult,
    FundComparison,
    SipOptimizationResult,
    OverlapAnalysisResult,
    PredictionResult,
    ManagerTrackResult,
)

__all__ = [
    # Main service
    "FundAnalyticsService",

    # Input types
    "NavPoint",
    "FundMetricInput",
    "Holding",
    "FundHoldings",
    "FundNavHistory",
    "ManagedFund",
    "ManagerProfile",

    # Result types
    "RiskMetrics",
    "RiskProfile",
    "DrawdownPeriod",
    "FundRiskReport",
    "RiskComparison",
    "SmartScoreResult",
    "FundComparison",
    "SipOptimizationResult",
    "OverlapAnalysisResult",
    "PredictionResult",
    "ManagerTrackResult",

    # Statistics
    "mean",
    "variance",
    "stddev",
    "covariance",
    "percentile_value",

    # Returns
    "sort_nav_series",
    "calculate_series_returns",
    "calculate_returns_from_navs",
    "annualize_return",
    "calculate_trailing_returns",

    # Risk
    "RiskCalculator",
    "calculate_volatility",
    "calculate_sharpe_ratio",
    "calculate_sortino_ratio",
    "calculate_beta",
    "calculate_alpha",
    "calculate_max_drawdown",
    "find_max_drawdown_period",
    "calculate_var",
    "calculate_cvar",
    "calculate_information_ratio",
    "calculate_treynor_ratio",
    "generate_risk_profile",

    # Smart Score
    "normalize",
    "compute_smart_score",
    "compute_smart_score_batch",
    "compare_funds",

    # SIP / Overlap / Prediction / Manager
    "optimize_sip_date",
    "analyze_fund_overlap",
    "calculate_pairwise_overlap",
    "predict_performance",
    "predict_performance_batch",
    "analyze_manager_track",
]
