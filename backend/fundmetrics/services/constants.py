# backend/fundmetrics/services/constants.py
"""
Centralized constants for the fund analytics services.

This module is the single source of truth for the default parameters and
classification thresholds used across the calculators. Every calculator
takes these values as keyword defaults, and the orchestrating service
overrides them from `fundmetrics.config.settings`, so tests and callers can
vary any of them per call.

Units:
    - Rates and returns are percentages (6.5 = 6.5%), never fractions.
    - Amounts are in rupees, AUM in crores.

Usage:
    from fundmetrics.services.constants import (
        TRADING_DAYS_PER_YEAR,
        DEFAULT_RISK_FREE_RATE,
        SORTINO_UNBOUNDED,
    )
"""


# =============================================================================
# FINANCIAL CALENDAR CONSTANTS
# =============================================================================

# Standard number of trading days in a year
# Used for annualizing mean returns and volatility of daily series
TRADING_DAYS_PER_YEAR: int = 252

# Average calendar year length, used for tenure calculations
DAYS_PER_YEAR: float = 365.25


# =============================================================================
# MARKET ASSUMPTIONS
# =============================================================================

# Approximate Indian T-bill yield (annual %)
DEFAULT_RISK_FREE_RATE: float = 6.5

# Approximate long-run Nifty 50 return (annual %), used for Jensen's alpha
DEFAULT_MARKET_RETURN: float = 12.0


# =============================================================================
# RISK METRIC CONSTANTS
# =============================================================================

# Sortino ratio reported when a series has no downside returns and a
# positive excess return. Not a real ratio: read it as "unbounded".
SORTINO_UNBOUNDED: float = 999.0

# Default confidence level for historical Value at Risk
DEFAULT_VAR_CONFIDENCE: float = 0.95

# Beta reported when it cannot be estimated (no market series, zero variance)
NEUTRAL_BETA: float = 1.0

# Starting value for compounding a return series during drawdown analysis
DRAWDOWN_BASE_VALUE: float = 100.0

# Minimum NAV points before a fund risk report is computed
MIN_RISK_DATA_POINTS: int = 20

# Maximum number of funds in a risk comparison
MIN_RISK_COMPARISON_FUNDS: int = 2
MAX_RISK_COMPARISON_FUNDS: int = 5


# =============================================================================
# SMART SCORE CONSTANTS
# =============================================================================

# Score assigned to a component with no attributes present
NEUTRAL_SCORE: float = 50.0

# Composite weights (sum to 1.0)
SMART_SCORE_WEIGHTS: dict[str, float] = {
    "return_score": 0.35,
    "risk_score": 0.25,
    "consistency_score": 0.20,
    "cost_score": 0.10,
    "alpha_score": 0.10,
}

# Two funds whose scores differ by less than this are a tie
COMPARISON_TIE_THRESHOLD: float = 2.0


# =============================================================================
# SIP OPTIMIZER CONSTANTS
# =============================================================================

# Hypothetical investment per SIP instalment (rupees)
DEFAULT_SIP_AMOUNT: float = 10_000.0

# Default look-back window in calendar months
DEFAULT_SIP_ANALYSIS_MONTHS: int = 36

# Minimum NAV observations inside the window
MIN_SIP_DATA_POINTS: int = 30

# Only days present in every month are considered
MAX_SIP_DAY: int = 28

# Reference SIP dates compared against the optimal date
SIP_REFERENCE_DAYS: tuple[int, ...] = (5, 15, 25)


# =============================================================================
# OVERLAP ANALYZER CONSTANTS
# =============================================================================

MIN_OVERLAP_FUNDS: int = 2
MAX_OVERLAP_FUNDS: int = 10

# Pairs above this overlap (%) count as highly overlapping
HIGH_OVERLAP_THRESHOLD: float = 30.0


# =============================================================================
# PERFORMANCE PREDICTOR CONSTANTS
# =============================================================================

MIN_PREDICTION_DATA_POINTS: int = 30

RSI_PERIOD: int = 14
MACD_FAST_PERIOD: int = 12
MACD_SLOW_PERIOD: int = 26
MACD_SIGNAL_PERIOD: int = 9


# =============================================================================
# FUND MANAGER TRACK RECORD CONSTANTS
# =============================================================================

# Category average returns (%) used when no peer data is supplied
CATEGORY_AVERAGE_RETURNS: dict[str, dict[str, float]] = {
    "LARGE_CAP": {"returns_1y": 11.0, "returns_3y": 13.0, "returns_5y": 12.0},
    "MID_CAP": {"returns_1y": 15.0, "returns_3y": 16.0, "returns_5y": 15.0},
    "SMALL_CAP": {"returns_1y": 18.0, "returns_3y": 18.0, "returns_5y": 17.0},
    "MULTI_CAP": {"returns_1y": 13.0, "returns_3y": 14.0, "returns_5y": 13.0},
    "FLEXI_CAP": {"returns_1y": 12.0, "returns_3y": 14.0, "returns_5y": 13.0},
    "ELSS": {"returns_1y": 13.0, "returns_3y": 15.0, "returns_5y": 14.0},
    "HYBRID": {"returns_1y": 9.0, "returns_3y": 10.0, "returns_5y": 9.0},
    "DEBT": {"returns_1y": 6.0, "returns_3y": 7.0, "returns_5y": 7.0},
    "GOLD": {"returns_1y": 8.0, "returns_3y": 9.0, "returns_5y": 10.0},
}

DEFAULT_CATEGORY_AVERAGE: dict[str, float] = {
    "returns_1y": 10.0,
    "returns_3y": 12.0,
    "returns_5y": 11.0,
}

# Trailing NAV must lie within this many days of the target date
TRAILING_RETURN_TOLERANCE_DAYS: int = 7


# =============================================================================
# PRECISION
# =============================================================================

# Decimal places used when reporting ratios and percentages
RATIO_PRECISION: int = 2
NAV_PRECISION: int = 4
