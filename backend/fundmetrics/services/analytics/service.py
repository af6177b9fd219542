# backend/fundmetrics/services/analytics/service.py
"""
Fund Analytics Service orchestrator.

This is the main entry point for the analytics core. It:
1. Takes plain NAV series, return series and holdings from the caller
2. Applies data-sufficiency rules (risk report, SIP optimizer)
3. Delegates to the specialized calculators with configured parameters
4. Logs every operation under a correlation ID

The service holds only immutable configuration, performs no I/O and caches
nothing, so one instance may be shared across threads and requests.

Architecture:
    FundAnalyticsService
        ├── uses → RiskCalculator / build_risk_report (risk.py)
        ├── uses → compute_smart_score / compare_funds (smart_score.py)
        ├── uses → optimize_sip_date (sip_optimizer.py)
        ├── uses → analyze_fund_overlap (overlap.py)
        ├── uses → predict_performance (prediction.py)
        └── uses → analyze_manager_track (manager_track.py)

Usage:
    from fundmetrics.services.analytics import FundAnalyticsService

    service = FundAnalyticsService()

    report = service.get_risk_report(nav_series, period="3Y", fund_id="F1")
    score = service.score_fund(service.derive_metric_input(nav_series, expense_ratio=0.8))
    sip = service.optimize_sip_date(nav_series)
    overlap = service.analyze_overlap([fund_a, fund_b])
"""

import logging
from contextlib import contextmanager
from datetime import date
from typing import Any, Iterator, Sequence

from fundmetrics.config import Settings, settings as default_settings
from fundmetrics.services.analytics.manager_track import analyze_manager_track
from fundmetrics.services.analytics.overlap import analyze_fund_overlap
from fundmetrics.services.analytics.prediction import predict_performance
from fundmetrics.services.analytics.returns import (
    calculate_series_returns,
    calculate_trailing_returns,
    sort_nav_series,
)
from fundmetrics.services.analytics.risk import (
    RiskCalculator,
    build_risk_report,
    select_risk_leaders,
)
from fundmetrics.services.analytics.sip_optimizer import optimize_sip_date
from fundmetrics.services.analytics.smart_score import (
    compare_funds,
    compute_smart_score,
    compute_smart_score_batch,
)
from fundmetrics.services.analytics.types import (
    FundComparison,
    FundHoldings,
    FundMetricInput,
    FundNavHistory,
    FundRiskReport,
    ManagedFund,
    ManagerProfile,
    ManagerTrackResult,
    NavPoint,
    OverlapAnalysisResult,
    PredictionResult,
    RiskComparison,
    RiskMetrics,
    SipOptimizationResult,
    SmartScoreResult,
)
from fundmetrics.services.constants import MIN_RISK_COMPARISON_FUNDS
from fundmetrics.services.exceptions import InsufficientDataError, InvalidFundCountError
from fundmetrics.utils.context import (
    clear_analysis_context,
    correlation_scope,
    get_analysis_context,
    set_analysis_context,
)

logger = logging.getLogger(__name__)


class FundAnalyticsService:
    """
    Service for fund analytics calculations.

    This service coordinates the calculators by:
    1. Validating data sufficiency before expensive work
    2. Passing configured market assumptions and thresholds
    3. Logging each operation (INFO) and refusals (WARNING)

    Attributes:
        _settings: Settings supplying risk-free rate, thresholds, etc.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize the Fund Analytics Service.

        Args:
            settings: Configuration. If None, uses the module-level settings.
        """
        self._settings = settings or default_settings
        logger.info(
            f"FundAnalyticsService initialized "
            f"(rf={self._settings.risk_free_rate}%, "
            f"periods/year={self._settings.trading_days_per_year})"
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @contextmanager
    def _operation(
            self,
            name: str,
            correlation_id: str | None = None,
            **context: Any,
    ) -> Iterator[str]:
        """Bind a correlation ID and analysis context for one operation."""
        previous = get_analysis_context()
        with correlation_scope(correlation_id) as active_id:
            set_analysis_context("operation", name)
            for key, value in context.items():
                if value is not None:
                    set_analysis_context(key, value)
            try:
                yield active_id
            finally:
                clear_analysis_context()
                for key, value in previous.items():
                    set_analysis_context(key, value)

    # =========================================================================
    # RISK METRICS
    # =========================================================================

    def analyze_returns(
            self,
            returns: Sequence[float],
            market_returns: Sequence[float] | None = None,
            correlation_id: str | None = None,
    ) -> RiskMetrics:
        """
        Calculate all risk metrics of a return series.

        Never raises for short series; see RiskCalculator.analyze.
        """
        with self._operation("risk_metrics", correlation_id):
            metrics = RiskCalculator.analyze(
                returns,
                market_returns=market_returns,
                risk_free_rate=self._settings.risk_free_rate,
                periods_per_year=self._settings.trading_days_per_year,
                market_return=self._settings.market_return,
                confidence_level=self._settings.var_confidence,
            )
            logger.info(f"Risk metrics calculated over {len(returns)} returns")
            return metrics

    def get_risk_report(
            self,
            nav_series: Sequence[NavPoint],
            market_returns: Sequence[float] | None = None,
            period: str = "3Y",
            fund_id: str | None = None,
            fund_name: str | None = None,
            correlation_id: str | None = None,
    ) -> FundRiskReport:
        """
        Build a risk report from a fund's NAV history.

        Args:
            nav_series: NAV history in any order
            market_returns: Market daily returns aligned with the fund's returns
            period: Label of the period covered (1Y, 3Y, 5Y, 10Y)
            fund_id: Echoed in the report and logs
            fund_name: Echoed in the report

        Returns:
            FundRiskReport with metrics, interpretation and risk profile

        Raises:
            InsufficientDataError: Fewer than settings.min_risk_data_points NAVs
        """
        with self._operation("risk_report", correlation_id, fund_id=fund_id, period=period):
            required = self._settings.min_risk_data_points
            if len(nav_series) < required:
                logger.warning(
                    f"Risk report refused for fund {fund_id}: "
                    f"{len(nav_series)} NAV points, need {required}"
                )
                raise InsufficientDataError(required, len(nav_series), "risk metrics")

            report = build_risk_report(
                nav_series,
                market_returns=market_returns,
                period=period,
                risk_free_rate=self._settings.risk_free_rate,
                periods_per_year=self._settings.trading_days_per_year,
                market_return=self._settings.market_return,
                confidence_level=self._settings.var_confidence,
                fund_id=fund_id,
                fund_name=fund_name,
            )
            logger.info(
                f"Risk report for fund {fund_id} over {period}: "
                f"{report.data_points} points, sharpe={report.metrics.sharpe_ratio}, "
                f"classification={report.risk_classification}"
            )
            return report

    def compare_risk_reports(
            self,
            funds: Sequence[FundNavHistory],
            period: str = "3Y",
            correlation_id: str | None = None,
    ) -> RiskComparison:
        """
        Compare risk reports across 2 to settings.max_risk_comparison_funds funds.

        Funds with insufficient history are skipped and listed in
        skipped_funds rather than failing the comparison.

        Raises:
            InvalidFundCountError: Fund count outside the accepted range
        """
        with self._operation("risk_comparison", correlation_id, period=period):
            maximum = self._settings.max_risk_comparison_funds
            if not MIN_RISK_COMPARISON_FUNDS <= len(funds) <= maximum:
                raise InvalidFundCountError(len(funds), MIN_RISK_COMPARISON_FUNDS, maximum)

            reports = []
            skipped = []
            for fund in funds:
                try:
                    reports.append(self.get_risk_report(
                        fund.nav_series,
                        period=period,
                        fund_id=fund.fund_id,
                        fund_name=fund.fund_name,
                    ))
                except InsufficientDataError:
                    skipped.append(fund.fund_id)

            comparison = select_risk_leaders(reports, period)
            comparison.skipped_funds = skipped
            logger.info(
                f"Risk comparison over {period}: {len(reports)} funds compared, "
                f"{len(skipped)} skipped"
            )
            return comparison

    # =========================================================================
    # SMART SCORE
    # =========================================================================

    def derive_metric_input(
            self,
            nav_series: Sequence[NavPoint],
            market_returns: Sequence[float] | None = None,
            expense_ratio: float | None = None,
            aum: float | None = None,
            consistency_index: float | None = None,
            as_of: date | None = None,
    ) -> FundMetricInput:
        """
        Build Smart Score input from a NAV history.

        Trailing returns and risk metrics are computed from the series;
        attributes the series cannot provide stay None. Information ratio is
        only set when market returns are supplied.
        """
        ordered = sort_nav_series(nav_series)
        returns = calculate_series_returns([p.nav for p in ordered])
        trailing = calculate_trailing_returns(ordered, as_of=as_of)

        data = FundMetricInput(
            returns_1y=trailing.returns_1y,
            returns_3y=trailing.returns_3y,
            returns_5y=trailing.returns_5y,
            expense_ratio=expense_ratio,
            aum=aum,
            consistency_index=consistency_index,
        )
        if len(returns) < 2:
            return data

        metrics = RiskCalculator.analyze(
            returns,
            market_returns=market_returns,
            risk_free_rate=self._settings.risk_free_rate,
            periods_per_year=self._settings.trading_days_per_year,
            market_return=self._settings.market_return,
            confidence_level=self._settings.var_confidence,
        )
        data.std_dev = metrics.annualized_volatility
        data.sharpe_ratio = metrics.sharpe_ratio
        data.sortino_ratio = metrics.sortino_ratio
        data.max_drawdown = metrics.max_drawdown
        if market_returns:
            data.beta = metrics.beta
            data.alpha = metrics.alpha
            data.information_ratio = metrics.information_ratio
        return data

    def score_fund(
            self,
            data: FundMetricInput,
            correlation_id: str | None = None,
    ) -> SmartScoreResult:
        """Compute the Smart Score of one fund."""
        with self._operation("smart_score", correlation_id):
            result = compute_smart_score(data)
            logger.info(
                f"Smart score {result.score} ({result.grade.value}, "
                f"{result.recommendation.value})"
            )
            return result

    def score_funds(
            self,
            inputs: Sequence[FundMetricInput],
            correlation_id: str | None = None,
    ) -> list[SmartScoreResult]:
        """Compute Smart Scores for several funds in input order."""
        with self._operation("smart_score_batch", correlation_id):
            results = compute_smart_score_batch(inputs)
            logger.info(f"Smart scores computed for {len(results)} funds")
            return results

    def compare_funds(
            self,
            fund1: FundMetricInput,
            fund2: FundMetricInput,
            correlation_id: str | None = None,
    ) -> FundComparison:
        """Compare two funds by Smart Score."""
        with self._operation("fund_comparison", correlation_id):
            result = compare_funds(fund1, fund2)
            logger.info(
                f"Fund comparison: winner={result.winner}, difference={result.difference}"
            )
            return result

    # =========================================================================
    # SIP OPTIMIZER
    # =========================================================================

    def optimize_sip_date(
            self,
            nav_series: Sequence[NavPoint],
            investment_amount: float | None = None,
            analysis_months: int | None = None,
            fund_id: str | None = None,
            fund_name: str | None = None,
            correlation_id: str | None = None,
    ) -> SipOptimizationResult:
        """
        Find the historically best day of the month for a SIP.

        Amount and window default to settings.sip_investment_amount and
        settings.sip_analysis_months.

        Raises:
            InsufficientDataError: Too few NAVs inside the analysis window
        """
        with self._operation("sip_optimizer", correlation_id, fund_id=fund_id):
            try:
                result = optimize_sip_date(
                    nav_series,
                    investment_amount=investment_amount or self._settings.sip_investment_amount,
                    analysis_months=analysis_months or self._settings.sip_analysis_months,
                    min_data_points=self._settings.min_sip_data_points,
                    fund_id=fund_id,
                    fund_name=fund_name,
                )
            except InsufficientDataError as e:
                logger.warning(f"SIP optimization refused for fund {fund_id}: {e}")
                raise

            logger.info(
                f"SIP optimization for fund {fund_id}: optimal day "
                f"{result.insights.optimal_date}, "
                f"extra units {result.insights.potential_extra_returns}%"
            )
            return result

    # =========================================================================
    # OVERLAP
    # =========================================================================

    def analyze_overlap(
            self,
            funds: Sequence[FundHoldings],
            correlation_id: str | None = None,
    ) -> OverlapAnalysisResult:
        """
        Analyze common holdings across 2-10 funds.

        Raises:
            InvalidFundCountError: Fewer than 2 or more than 10 funds
        """
        with self._operation("fund_overlap", correlation_id):
            try:
                result = analyze_fund_overlap(funds)
            except InvalidFundCountError as e:
                logger.warning(f"Overlap analysis refused: {e}")
                raise

            logger.info(
                f"Overlap across {result.total_funds} funds: "
                f"score={result.overall_overlap_score}, "
                f"rating={result.diversification_rating.value}"
            )
            return result

    # =========================================================================
    # PREDICTION
    # =========================================================================

    def predict(
            self,
            nav_series: Sequence[NavPoint],
            fund_id: str | None = None,
            correlation_id: str | None = None,
    ) -> PredictionResult:
        """Predict short-horizon performance; never raises for short history."""
        with self._operation("prediction", correlation_id, fund_id=fund_id):
            result = predict_performance(
                nav_series,
                min_data_points=self._settings.min_prediction_data_points,
                periods_per_year=self._settings.trading_days_per_year,
            )
            if not result.has_sufficient_data:
                logger.warning(
                    f"Prediction for fund {fund_id} skipped: {len(nav_series)} NAV points, "
                    f"need {self._settings.min_prediction_data_points}"
                )
            else:
                logger.info(
                    f"Prediction for fund {fund_id}: trend={result.trend.value}, "
                    f"confidence={result.confidence}"
                )
            return result

    def predict_batch(
            self,
            funds: Sequence[FundNavHistory],
            correlation_id: str | None = None,
    ) -> dict[str, PredictionResult]:
        """Predict several funds, keyed by fund_id."""
        with self._operation("prediction_batch", correlation_id):
            return {fund.fund_id: self.predict(fund.nav_series, fund.fund_id) for fund in funds}

    # =========================================================================
    # MANAGER TRACK RECORD
    # =========================================================================

    def analyze_manager(
            self,
            manager: ManagerProfile,
            funds: Sequence[ManagedFund],
            as_of: date | None = None,
            correlation_id: str | None = None,
    ) -> ManagerTrackResult:
        """
        Build a fund manager's track record.

        Raises:
            ValidationError: No funds supplied
        """
        with self._operation("manager_track", correlation_id, manager_id=manager.manager_id):
            result = analyze_manager_track(manager, funds, as_of=as_of)
            logger.info(
                f"Manager {manager.manager_id} track record: "
                f"{result.stats.total_funds_managed} funds, rating={result.overall_rating}"
            )
            return result
