# backend/fundmetrics/schemas/__init__.py
"""
Pydantic schemas for analytics request/response validation.

Usage:
    from fundmetrics.schemas import FundRiskReportResponse, NavPointRequest

    nav_series = [NavPointRequest.model_validate(p).to_nav_point() for p in payload]
    report = service.get_risk_report(nav_series)
    body = FundRiskReportResponse.model_validate(report).model_dump(mode="json")
"""

from fundmetrics.schemas.analytics import (
    # Requests
    NavPointRequest,
    FundNavHistoryRequest,
    FundMetricInputRequest,
    HoldingRequest,
    FundHoldingsRequest,
    OverlapRequest,
    SipOptimizationRequest,
    ManagerProfileRequest,
    ManagedFundRequest,
    # Risk
    RiskMetricsResponse,
    DrawdownPeriodResponse,
    RiskProfileResponse,
    FundRiskReportResponse,
    RiskComparisonResponse,
    # Smart Score
    SmartScoreResponse,
    FundComparisonResponse,
    # SIP
    SipOptimizationResponse,
    # Overlap
    OverlapAnalysisResponse,
    # Prediction
    PredictionResponse,
    # Manager
    ManagerTrackResponse,
)

__all__ = [
    # Requests
    "NavPointRequest",
    "FundNavHistoryRequest",
    "FundMetricInputRequest",
    "HoldingRequest",
    "FundHoldingsRequest",
    "OverlapRequest",
    "SipOptimizationRequest",
    "ManagerProfileRequest",
    "ManagedFundRequest",
    # Risk
    "RiskMetricsResponse",
    "DrawdownPeriodResponse",
    "RiskProfileResponse",
    "FundRiskReportResponse",
    "RiskComparisonResponse",
    # Smart Score
    "SmartScoreResponse",
    "FundComparisonResponse",
    # SIP
    "SipOptimizationResponse",
    # Overlap
    "OverlapAnalysisResponse",
    # Prediction
    "PredictionResponse",
    # Manager
    "ManagerTrackResponse",
]
