# backend/fundmetrics/schemas/analytics.py
"""
Pydantic schemas for the fund analytics results.

These schemas define the serializable request/response formats around the
analytics calculators:
- Requests: NAV series, Smart Score inputs, holdings, managed funds
- Responses: risk report, Smart Score, SIP optimization, overlap,
  prediction and manager track record

Design decisions:
- Values are plain floats in percentage units (12.5 = 12.5%)
- Null is returned when a metric cannot be calculated (insufficient data)
- Response models read the calculator dataclasses directly
  (from_attributes), so `XResponse.model_validate(result)` is all that is
  needed to serialize a result
- Request models validate at the boundary and convert to calculator inputs
  with a to_*() method
"""

import datetime as dt
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fundmetrics.services.analytics.types import (
    DiversificationRating,
    FundHoldings,
    FundMetricInput,
    FundNavHistory,
    Grade,
    Holding,
    ManagedFund,
    ManagerProfile,
    NavPoint,
    Recommendation,
    RiskLevel,
    SipDayRating,
    Trend,
)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class NavPointRequest(BaseModel):
    """A single NAV observation."""

    date: dt.date = Field(..., description="Valuation date")
    nav: float = Field(..., gt=0, description="Net asset value per unit")

    def to_nav_point(self) -> NavPoint:
        return NavPoint(date=self.date, nav=self.nav)


class FundNavHistoryRequest(BaseModel):
    """A fund's NAV history."""

    fund_id: str = Field(..., min_length=1, description="Fund identifier")
    fund_name: str = Field(..., description="Fund display name")
    nav_series: list[NavPointRequest] = Field(
        ...,
        min_length=1,
        description="NAV observations in any order"
    )

    def to_history(self) -> FundNavHistory:
        return FundNavHistory(
            fund_id=self.fund_id,
            fund_name=self.fund_name,
            nav_series=[p.to_nav_point() for p in self.nav_series],
        )


class FundMetricInputRequest(BaseModel):
    """
    Smart Score input.

    Every field is optional; omitted fields are excluded from scoring
    rather than treated as zero.
    """

    alpha: float | None = Field(None, description="Jensen's alpha (%)")
    beta: float | None = Field(None, description="Market beta")
    std_dev: float | None = Field(None, ge=0, description="Annualized standard deviation (%)")
    returns_1y: float | None = Field(None, description="1 year return (%)")
    returns_3y: float | None = Field(None, description="3 year annualized return (%)")
    returns_5y: float | None = Field(None, description="5 year annualized return (%)")
    sharpe_ratio: float | None = Field(None, description="Sharpe ratio")
    sortino_ratio: float | None = Field(None, description="Sortino ratio")
    expense_ratio: float | None = Field(None, ge=0, description="Total expense ratio (%)")
    aum: float | None = Field(None, ge=0, description="Assets under management (crores)")
    consistency_index: float | None = Field(
        None,
        ge=0,
        le=100,
        description="Consistency of returns (0-100)"
    )
    max_drawdown: float | None = Field(None, description="Maximum drawdown (%, sign ignored)")
    information_ratio: float | None = Field(None, description="Information ratio")

    def to_input(self) -> FundMetricInput:
        return FundMetricInput(**self.model_dump())


class HoldingRequest(BaseModel):
    """A single portfolio holding."""

    ticker: str = Field(..., min_length=1, description="Security identifier")
    name: str = Field(..., description="Security display name")
    weight: float = Field(..., ge=0, le=100, description="Portfolio weight (%)")
    sector: str | None = Field(None, description="Sector label")

    @field_validator('ticker')
    @classmethod
    def normalize_ticker(cls, v: str) -> str:
        """Normalize ticker: trim whitespace and uppercase."""
        return v.strip().upper()

    def to_holding(self) -> Holding:
        return Holding(ticker=self.ticker, name=self.name, weight=self.weight, sector=self.sector)


class FundHoldingsRequest(BaseModel):
    """A fund and its disclosed holdings."""

    fund_id: str = Field(..., min_length=1, description="Fund identifier")
    fund_name: str = Field(..., description="Fund display name")
    holdings: list[HoldingRequest] = Field(default_factory=list)

    def to_holdings(self) -> FundHoldings:
        return FundHoldings(
            fund_id=self.fund_id,
            fund_name=self.fund_name,
            holdings=[h.to_holding() for h in self.holdings],
        )


class OverlapRequest(BaseModel):
    """Funds to analyze for overlap (2-10)."""

    funds: list[FundHoldingsRequest] = Field(..., min_length=2, max_length=10)

    def to_holdings(self) -> list[FundHoldings]:
        return [f.to_holdings() for f in self.funds]


class SipOptimizationRequest(BaseModel):
    """SIP date optimization parameters."""

    nav_series: list[NavPointRequest] = Field(..., min_length=1)
    investment_amount: float | None = Field(
        None,
        gt=0,
        description="Monthly SIP amount (default from settings)"
    )
    analysis_months: int | None = Field(
        None,
        ge=1,
        le=240,
        description="Look-back window in months (default from settings)"
    )

    def to_nav_series(self) -> list[NavPoint]:
        return [p.to_nav_point() for p in self.nav_series]


class ManagerProfileRequest(BaseModel):
    """Fund manager identity."""

    manager_id: str = Field(..., min_length=1)
    name: str = Field(...)
    experience: float | None = Field(None, ge=0, description="Years of experience")
    qualification: str | None = Field(None)

    def to_profile(self) -> ManagerProfile:
        return ManagerProfile(
            manager_id=self.manager_id,
            name=self.name,
            experience=self.experience,
            qualification=self.qualification,
        )


class ManagedFundRequest(BaseModel):
    """A fund under a manager, with its NAV history."""

    fund_id: str = Field(..., min_length=1)
    fund_name: str = Field(...)
    category: str = Field(..., description="Category, e.g. LARGE_CAP or 'Large Cap'")
    nav_series: list[NavPointRequest] = Field(default_factory=list)
    management_start: date = Field(...)
    management_end: date | None = Field(None, description="Null while still managing")
    aum: float | None = Field(None, ge=0, description="Assets under management (crores)")
    expense_ratio: float | None = Field(None, ge=0)

    def to_managed_fund(self) -> ManagedFund:
        return ManagedFund(
            fund_id=self.fund_id,
            fund_name=self.fund_name,
            category=self.category,
            nav_series=[p.to_nav_point() for p in self.nav_series],
            management_start=self.management_start,
            management_end=self.management_end,
            aum=self.aum,
            expense_ratio=self.expense_ratio,
        )


# =============================================================================
# RISK SCHEMAS
# =============================================================================

class RiskMetricsResponse(BaseModel):
    """
    Risk metrics of a return series.

    sortino_ratio holds 999 with sortino_unbounded=True when there were no
    returns below the threshold and the mean excess return was positive.
    """

    model_config = ConfigDict(from_attributes=True)

    volatility: float = Field(..., description="Per-period standard deviation of returns (%)")
    annualized_volatility: float = Field(..., description="Annualized volatility (%)")
    beta: float = Field(..., description="Beta vs market (1.0 without market data)")
    alpha: float | None = Field(None, description="Jensen's alpha (%)")
    sharpe_ratio: float = Field(..., description="Annualized Sharpe ratio")
    sortino_ratio: float = Field(..., description="Annualized Sortino ratio")
    sortino_unbounded: bool = Field(False, description="True if Sortino is the 999 sentinel")
    max_drawdown: float = Field(..., description="Maximum peak-to-trough decline (%)")
    value_at_risk: float = Field(..., description="Historical VaR (%, positive loss)")
    conditional_var: float = Field(..., description="Expected shortfall beyond VaR (%)")
    information_ratio: float = Field(..., description="Excess return over tracking error")
    treynor_ratio: float = Field(..., description="Excess return per unit of beta")
    data_points: int = Field(..., description="Number of returns analyzed")


class DrawdownPeriodResponse(BaseModel):
    """Worst drawdown with its dates."""

    model_config = ConfigDict(from_attributes=True)

    peak_date: date
    trough_date: date
    recovery_date: date | None = Field(None, description="Null if not yet recovered")
    depth: float = Field(..., description="Peak-to-trough decline (%)")


class RiskProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    risk_level: RiskLevel
    risk_score: int = Field(..., ge=0, le=100, description="Higher is safer")
    suitable_for: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class MetricInterpretationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    value: float
    rating: str
    meaning: str


class FundRiskReportResponse(BaseModel):
    """NAV-derived risk report of one fund."""

    model_config = ConfigDict(from_attributes=True)

    fund_id: str | None = None
    fund_name: str | None = None
    period: str = Field(..., description="Period label, e.g. 3Y")
    data_points: int
    annualized_return: float = Field(..., description="Annualized return over the period (%)")
    metrics: RiskMetricsResponse
    interpretation: dict[str, MetricInterpretationResponse]
    risk_profile: RiskProfileResponse
    risk_classification: str
    investor_suitability: str
    max_drawdown_period: DrawdownPeriodResponse | None = None


class RiskComparisonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: str
    funds: list[FundRiskReportResponse]
    skipped_funds: list[str] = Field(
        default_factory=list,
        description="Fund IDs left out for insufficient history"
    )
    best_sharpe_ratio: FundRiskReportResponse | None = None
    lowest_volatility: FundRiskReportResponse | None = None
    highest_alpha: FundRiskReportResponse | None = None


# =============================================================================
# SMART SCORE SCHEMAS
# =============================================================================

class ScoreBreakdownResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    return_score: float = Field(..., ge=0, le=100)
    risk_score: float = Field(..., ge=0, le=100)
    consistency_score: float = Field(..., ge=0, le=100)
    cost_score: float = Field(..., ge=0, le=100)
    alpha_score: float = Field(..., ge=0, le=100)


class SmartScoreResponse(BaseModel):
    """Composite 0-100 fund rating."""

    model_config = ConfigDict(from_attributes=True)

    score: float = Field(..., ge=0, le=100)
    grade: Grade
    breakdown: ScoreBreakdownResponse
    insights: list[str]
    recommendation: Recommendation
    summary: str = ""


class FundComparisonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    winner: str = Field(..., description="fund1, fund2 or tie")
    score1: SmartScoreResponse
    score2: SmartScoreResponse
    difference: float
    comparison: str


# =============================================================================
# SIP OPTIMIZER SCHEMAS
# =============================================================================

class DayAnalysisResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: int = Field(..., ge=1, le=28)
    avg_nav: float
    avg_units: float
    frequency: int
    return_percentage: float
    rank: int
    recommendation: SipDayRating


class SipOutcomeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: int
    avg_units: float
    total_units: float
    total_invested: float
    current_value: float
    returns: float


class SipInsightsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    optimal_date: int
    potential_extra_returns: float = Field(
        ...,
        description="Extra units bought on the best day vs the middle day (%)"
    )
    consistency_score: float
    recommendation: str


class SipOptimizationResponse(BaseModel):
    """Full SIP date optimization report."""

    model_config = ConfigDict(from_attributes=True)

    fund_id: str | None = None
    fund_name: str | None = None
    analysis_start_date: date
    analysis_end_date: date
    total_months_analyzed: int
    data_points: int
    best_days: list[int]
    worst_days: list[int]
    day_wise_analysis: list[DayAnalysisResponse]
    insights: SipInsightsResponse
    comparison: dict[str, SipOutcomeResponse] = Field(
        ...,
        description="Outcomes keyed date_5th, date_15th, date_25th and best_date"
    )
    summary: str


# =============================================================================
# OVERLAP SCHEMAS
# =============================================================================

class HoldingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ticker: str
    name: str
    weight: float
    sector: str | None = None


class FundAllocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fund_id: str
    fund_name: str
    weight: float


class StockOverlapResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ticker: str
    name: str
    fund_allocations: list[FundAllocationResponse]
    overlap_score: int = Field(..., description="Number of funds holding this stock")


class CommonHoldingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ticker: str
    name: str
    fund1_weight: float
    fund2_weight: float


class FundPairOverlapResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fund1_id: str
    fund1_name: str
    fund2_id: str
    fund2_name: str
    overlap_percentage: float
    common_holdings: list[CommonHoldingResponse]
    recommendation: str


class UniqueHoldingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fund_id: str
    fund_name: str
    unique_stocks: list[HoldingResponse]
    unique_stocks_count: int
    unique_allocation_percentage: float


class OverlapSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    highly_overlapping_pairs: int
    unique_holdings: int
    total_unique_stocks: int
    average_overlap: float


class OverlapAnalysisResponse(BaseModel):
    """Full fund overlap report."""

    model_config = ConfigDict(from_attributes=True)

    total_funds: int
    common_stocks: list[StockOverlapResponse]
    pairwise_overlap: list[FundPairOverlapResponse]
    fund_unique_holdings: list[UniqueHoldingsResponse]
    overall_overlap_score: float = Field(..., ge=0, le=100)
    diversification_rating: DiversificationRating
    recommendations: list[str]
    summary: OverlapSummaryResponse


# =============================================================================
# PREDICTION SCHEMAS
# =============================================================================

class PredictedReturnsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    returns_1m: float
    returns_3m: float
    returns_6m: float
    returns_1y: float


class PredictionResponse(BaseModel):
    """Trend detection and extrapolated returns. Heuristic, not a forecast."""

    model_config = ConfigDict(from_attributes=True)

    predicted: PredictedReturnsResponse
    confidence: int = Field(..., ge=0, le=100)
    trend: Trend
    momentum: int = Field(..., ge=-100, le=100)
    support: float
    resistance: float
    signals: list[str]
    rsi: float
    has_sufficient_data: bool = True


# =============================================================================
# MANAGER TRACK RECORD SCHEMAS
# =============================================================================

class TrailingReturnsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    returns_1y: float | None = None
    returns_3y: float | None = None
    returns_5y: float | None = None


class ManagerProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    manager_id: str
    name: str
    experience: float | None = None
    qualification: str | None = None


class ManagedFundRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fund_id: str
    fund_name: str
    category: str
    management_start: date
    management_end: date | None = None
    tenure_years: float
    returns: TrailingReturnsResponse
    aum: float | None = None
    expense_ratio: float | None = None
    performance_rating: str
    vs_category: TrailingReturnsResponse


class ManagerStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_funds_managed: int
    currently_managing: int
    total_aum: float
    avg_tenure: float
    longest_tenure: float
    avg_returns: TrailingReturnsResponse
    success_rate: float
    consistency_score: float


class CategoryExpertiseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    funds_managed: int
    avg_returns: float
    rating: str


class PerformanceTrendPointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: str
    avg_return: float
    funds_count: int


class ManagerTrackResponse(BaseModel):
    """Full fund manager track record."""

    model_config = ConfigDict(from_attributes=True)

    manager: ManagerProfileResponse
    stats: ManagerStatsResponse
    fund_records: list[ManagedFundRecordResponse]
    performance_trend: list[PerformanceTrendPointResponse]
    category_expertise: list[CategoryExpertiseResponse]
    strengths: list[str]
    concerns: list[str]
    overall_rating: str
    recommendation: str
