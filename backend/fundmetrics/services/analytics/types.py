# backend/fundmetrics/services/analytics/types.py
"""
Data types for the fund analytics calculators.

This module defines the value objects exchanged with the calculators. They
are computed transiently from NAV/holdings records supplied by the caller
and carry no identity or persistence of their own.

Conventions:
    - All returns, rates, weights and drawdowns are percentages (12.5 = 12.5%)
    - Optional numeric inputs use None for "absent", never 0
    - Enum values are the display labels used in API responses

Architecture:
    Inputs:   NavPoint, FundMetricInput, Holding, FundHoldings,
              ManagedFund, ManagerProfile
    Results:  RiskMetrics, RiskProfile, DrawdownPeriod, SmartScoreResult,
              SipOptimizationResult, OverlapAnalysisResult,
              PredictionResult, ManagerTrackResult
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================

class Grade(str, Enum):
    """Smart Score letter grade."""
    A_PLUS = "A+"
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C_PLUS = "C+"
    C = "C"
    D = "D"


class Recommendation(str, Enum):
    """Smart Score investment recommendation."""
    STRONG_BUY = "Strong Buy"
    BUY = "Buy"
    HOLD = "Hold"
    SELL = "Sell"
    STRONG_SELL = "Strong Sell"


class SipDayRating(str, Enum):
    """Band assigned to a day-of-month by rank."""
    BEST = "Best"
    GOOD = "Good"
    AVERAGE = "Average"
    BELOW_AVERAGE = "Below Average"


class DiversificationRating(str, Enum):
    """Portfolio diversification derived from the overall overlap score."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    MODERATE = "Moderate"
    POOR = "Poor"
    VERY_POOR = "Very Poor"


class Trend(str, Enum):
    """Price trend from the normalized regression slope."""
    STRONG_UPTREND = "Strong Uptrend"
    UPTREND = "Uptrend"
    SIDEWAYS = "Sideways"
    DOWNTREND = "Downtrend"
    STRONG_DOWNTREND = "Strong Downtrend"


class RiskLevel(str, Enum):
    """Risk level of a fund's risk profile."""
    VERY_LOW = "Very Low"
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "Very High"


# =============================================================================
# INPUT TYPES
# =============================================================================

@dataclass(frozen=True)
class NavPoint:
    """
    A single net asset value observation.

    Attributes:
        date: Valuation date
        nav: Net asset value per unit (must be positive)
    """
    date: date
    nav: float


@dataclass
class FundMetricInput:
    """
    Sparse fund attributes consumed by the Smart Score model.

    Every attribute is independently optional. Absent attributes are
    excluded from the component averages rather than treated as zero.

    Attributes:
        alpha: Jensen's alpha (%)
        beta: Market beta
        std_dev: Annualized standard deviation (%)
        returns_1y / returns_3y / returns_5y: Trailing returns (%)
        sharpe_ratio / sortino_ratio / information_ratio: Risk-adjusted ratios
        expense_ratio: Total expense ratio (%)
        aum: Assets under management (crores)
        consistency_index: Consistency of returns (0-100)
        max_drawdown: Maximum drawdown (%, sign ignored)
    """
    alpha: float | None = None
    beta: float | None = None
    std_dev: float | None = None
    returns_1y: float | None = None
    returns_3y: float | None = None
    returns_5y: float | None = None
    sharpe_ratio: float | None = None
    sortino_ratio: float | None = None
    expense_ratio: float | None = None
    aum: float | None = None
    consistency_index: float | None = None
    max_drawdown: float | None = None
    information_ratio: float | None = None


@dataclass(frozen=True)
class Holding:
    """
    A single portfolio holding.

    Attributes:
        ticker: Security identifier
        name: Display name
        weight: Percentage of the fund's portfolio (non-negative)
        sector: Optional sector label
    """
    ticker: str
    name: str
    weight: float
    sector: str | None = None


@dataclass
class FundHoldings:
    """A fund and its disclosed holdings."""
    fund_id: str
    fund_name: str
    holdings: list[Holding] = field(default_factory=list)


@dataclass
class ManagerProfile:
    """Identity of a fund manager."""
    manager_id: str
    name: str
    experience: float | None = None
    qualification: str | None = None


@dataclass
class ManagedFund:
    """
    A fund managed by a manager, with the history needed to rate it.

    Attributes:
        management_end: None while the manager is still in charge
        aum: Assets under management (crores), None if unknown
    """
    fund_id: str
    fund_name: str
    category: str
    nav_series: list[NavPoint]
    management_start: date
    management_end: date | None = None
    aum: float | None = None
    expense_ratio: float | None = None


# =============================================================================
# RISK RESULTS
# =============================================================================

@dataclass
class DrawdownPeriod:
    """
    The worst peak-to-trough decline of a NAV series.

    Attributes:
        peak_date: Date of the peak preceding the decline
        trough_date: Date of the lowest point
        recovery_date: First date back at or above the peak, None if ongoing
        depth: Decline from peak to trough (%, positive number)
    """
    peak_date: date
    trough_date: date
    recovery_date: date | None
    depth: float


@dataclass
class RiskMetrics:
    """
    Risk and risk-adjusted performance metrics of a return series.

    volatility is the per-period standard deviation; annualized_volatility
    scales it by sqrt(periods_per_year). sortino_unbounded is True when the
    Sortino ratio holds the SORTINO_UNBOUNDED sentinel.
    """
    volatility: float = 0.0
    annualized_volatility: float = 0.0
    beta: float = 1.0
    alpha: float | None = None
    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    sortino_unbounded: bool = False
    max_drawdown: float = 0.0
    value_at_risk: float = 0.0
    conditional_var: float = 0.0
    information_ratio: float = 0.0
    treynor_ratio: float = 0.0
    data_points: int = 0


@dataclass
class RiskProfile:
    """Qualitative risk profile derived from RiskMetrics (higher score = safer)."""
    risk_level: RiskLevel
    risk_score: int
    suitable_for: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass
class MetricInterpretation:
    """A metric value with its rating band and plain-language meaning."""
    value: float
    rating: str
    meaning: str


@dataclass
class FundRiskReport:
    """NAV-derived risk report for one fund over one period."""
    period: str
    data_points: int
    annualized_return: float
    metrics: RiskMetrics
    interpretation: dict[str, MetricInterpretation]
    risk_profile: RiskProfile
    risk_classification: str
    investor_suitability: str
    max_drawdown_period: DrawdownPeriod | None = None
    fund_id: str | None = None
    fund_name: str | None = None


@dataclass
class RiskComparison:
    """Risk reports for several funds plus the leaders on key metrics."""
    period: str
    funds: list[FundRiskReport]
    skipped_funds: list[str] = field(default_factory=list)
    best_sharpe_ratio: FundRiskReport | None = None
    lowest_volatility: FundRiskReport | None = None
    highest_alpha: FundRiskReport | None = None


# =============================================================================
# SMART SCORE RESULTS
# =============================================================================

@dataclass
class ScoreBreakdown:
    """Component scores (each 0-100)."""
    return_score: float
    risk_score: float
    consistency_score: float
    cost_score: float
    alpha_score: float


@dataclass
class SmartScoreResult:
    """Composite fund rating."""
    score: float
    grade: Grade
    breakdown: ScoreBreakdown
    insights: list[str]
    recommendation: Recommendation
    summary: str = ""


@dataclass
class FundComparison:
    """Outcome of comparing two funds by Smart Score."""
    winner: str  # "fund1", "fund2" or "tie"
    score1: SmartScoreResult
    score2: SmartScoreResult
    difference: float
    comparison: str


# =============================================================================
# SIP OPTIMIZER RESULTS
# =============================================================================

@dataclass
class DayAnalysis:
    """Average purchase outcome of investing on one day of the month."""
    day: int
    avg_nav: float
    avg_units: float
    frequency: int
    return_percentage: float = 0.0
    rank: int = 0
    recommendation: SipDayRating = SipDayRating.AVERAGE


@dataclass
class SipOutcome:
    """Realized result of a monthly SIP on a fixed day."""
    day: int
    avg_units: float = 0.0
    total_units: float = 0.0
    total_invested: float = 0.0
    current_value: float = 0.0
    returns: float = 0.0


@dataclass
class SipInsights:
    """Headline conclusions of a SIP date analysis."""
    optimal_date: int
    potential_extra_returns: float
    consistency_score: float
    recommendation: str


@dataclass
class SipOptimizationResult:
    """Full SIP date optimization report."""
    analysis_start_date: date
    analysis_end_date: date
    total_months_analyzed: int
    data_points: int
    best_days: list[int]
    worst_days: list[int]
    day_wise_analysis: list[DayAnalysis]
    insights: SipInsights
    comparison: dict[str, SipOutcome]
    summary: str
    fund_id: str | None = None
    fund_name: str | None = None


# =============================================================================
# OVERLAP RESULTS
# =============================================================================

@dataclass
class FundAllocation:
    """Weight of one stock inside one fund."""
    fund_id: str
    fund_name: str
    weight: float


@dataclass
class StockOverlap:
    """A stock held by two or more of the analysed funds."""
    ticker: str
    name: str
    fund_allocations: list[FundAllocation]
    overlap_score: int


@dataclass
class CommonHolding:
    """A stock held by both funds of a pair."""
    ticker: str
    name: str
    fund1_weight: float
    fund2_weight: float


@dataclass
class FundPairOverlap:
    """Weight overlap between two funds."""
    fund1_id: str
    fund1_name: str
    fund2_id: str
    fund2_name: str
    overlap_percentage: float
    common_holdings: list[CommonHolding]
    recommendation: str


@dataclass
class UniqueHoldings:
    """Holdings of one fund that no other analysed fund holds."""
    fund_id: str
    fund_name: str
    unique_stocks: list[Holding]
    unique_stocks_count: int
    unique_allocation_percentage: float


@dataclass
class OverlapSummary:
    """Aggregate overlap statistics."""
    highly_overlapping_pairs: int
    unique_holdings: int
    total_unique_stocks: int
    average_overlap: float


@dataclass
class OverlapAnalysisResult:
    """Full fund overlap report."""
    total_funds: int
    common_stocks: list[StockOverlap]
    pairwise_overlap: list[FundPairOverlap]
    fund_unique_holdings: list[UniqueHoldings]
    overall_overlap_score: float
    diversification_rating: DiversificationRating
    recommendations: list[str]
    summary: OverlapSummary


# =============================================================================
# PREDICTION RESULTS
# =============================================================================

@dataclass
class PredictedReturns:
    """Extrapolated returns (%) per horizon."""
    returns_1m: float = 0.0
    returns_3m: float = 0.0
    returns_6m: float = 0.0
    returns_1y: float = 0.0


@dataclass
class MacdResult:
    """Latest MACD line, signal line and histogram."""
    macd: float
    signal: float
    histogram: float


@dataclass
class PredictionResult:
    """Trend detection and short-horizon return extrapolation."""
    predicted: PredictedReturns
    confidence: int
    trend: Trend
    momentum: int
    support: float
    resistance: float
    signals: list[str]
    rsi: float = 50.0
    has_sufficient_data: bool = True


# =============================================================================
# MANAGER TRACK RECORD RESULTS
# =============================================================================

@dataclass
class TrailingReturns:
    """1Y absolute and 3Y/5Y annualized returns (%), None when unavailable."""
    returns_1y: float | None = None
    returns_3y: float | None = None
    returns_5y: float | None = None


@dataclass
class ManagedFundRecord:
    """Performance record of one fund under a manager."""
    fund_id: str
    fund_name: str
    category: str
    management_start: date
    management_end: date | None
    tenure_years: float
    returns: TrailingReturns
    aum: float | None
    expense_ratio: float | None
    performance_rating: str
    vs_category: TrailingReturns


@dataclass
class ManagerStats:
    """Aggregate statistics across a manager's funds."""
    total_funds_managed: int
    currently_managing: int
    total_aum: float
    avg_tenure: float
    longest_tenure: float
    avg_returns: TrailingReturns
    success_rate: float
    consistency_score: float


@dataclass
class CategoryExpertise:
    """Manager experience within one fund category."""
    category: str
    funds_managed: int
    avg_returns: float
    rating: str


@dataclass
class PerformanceTrendPoint:
    """Average return over one horizon across the manager's funds."""
    period: str
    avg_return: float
    funds_count: int


@dataclass
class ManagerTrackResult:
    """Full fund manager track record."""
    manager: ManagerProfile
    stats: ManagerStats
    fund_records: list[ManagedFundRecord]
    performance_trend: list[PerformanceTrendPoint]
    category_expertise: list[CategoryExpertise]
    strengths: list[str]
    concerns: list[str]
    overall_rating: str
    recommendation: str


# =============================================================================
# SERVICE INPUTS
# =============================================================================

@dataclass
class FundNavHistory:
    """A fund's NAV history, used where several funds are analysed together."""
    fund_id: str
    fund_name: str
    nav_series: list[NavPoint]
