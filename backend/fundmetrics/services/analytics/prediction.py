# backend/fundmetrics/services/analytics/prediction.py
"""
Performance predictor: technical indicators and short-horizon extrapolation.

This is a heuristic, not a forecasting model. From a NAV series it derives:
- RSI(14) with Wilder smoothing
- MACD 12/26/9 (line, signal, histogram)
- Linear-regression trend, slope expressed as % of mean price
- Support / resistance at the 25th / 75th price percentile
- Momentum (-100..100) and human-readable signals
- Predicted 1M/3M/6M/1Y returns and a 0-100 confidence

Formulas:
    w          = 0.3 × mean(R) + 0.7 × R_latest
    trend      = slope × 0.1
    predicted  = w × {0.3, 0.8, 1.5, 3} + trend × {1, 2, 3, 5}
    confidence = round((1 - min(σ(R)/30, 1)) × 50 + min(n/252, 1) × 50)

Below the minimum history the predictor does not raise; it returns a zero
prediction with has_sufficient_data=False.
"""

import logging
from typing import Sequence

from fundmetrics.services.analytics.returns import calculate_series_returns, sort_nav_series
from fundmetrics.services.analytics.statistics import mean, percentile_value, stddev
from fundmetrics.services.analytics.types import (
    MacdResult,
    NavPoint,
    PredictedReturns,
    PredictionResult,
    Trend,
)
from fundmetrics.services.constants import (
    MACD_FAST_PERIOD,
    MACD_SIGNAL_PERIOD,
    MACD_SLOW_PERIOD,
    MIN_PREDICTION_DATA_POINTS,
    RATIO_PRECISION,
    RSI_PERIOD,
    TRADING_DAYS_PER_YEAR,
)

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_SIGNAL = "Insufficient historical data for accurate prediction"


# =============================================================================
# MOVING AVERAGES
# =============================================================================

def calculate_sma(values: Sequence[float], period: int) -> list[float | None]:
    """
    Simple moving average.

    Returns:
        One entry per input value; None until `period` values are available
    """
    sma: list[float | None] = []
    for i in range(len(values)):
        if i < period - 1:
            sma.append(None)
        else:
            sma.append(sum(values[i - period + 1:i + 1]) / period)
    return sma


def calculate_ema(values: Sequence[float], period: int) -> list[float]:
    """
    Exponential moving average seeded with the SMA of the first `period` values.

    Returns:
        One entry per input value (empty for empty input)
    """
    if not values:
        return []

    multiplier = 2 / (period + 1)
    seed_count = min(period, len(values))
    ema = [calculate_sma(values[:seed_count], seed_count)[-1]]

    for value in values[1:]:
        ema.append((value - ema[-1]) * multiplier + ema[-1])
    return ema


# =============================================================================
# OSCILLATORS
# =============================================================================

def calculate_rsi(prices: Sequence[float], period: int = RSI_PERIOD) -> float:
    """
    Relative Strength Index with Wilder smoothing.

    Returns:
        RSI in 0..100; 50 when there are fewer than period + 1 prices,
        100 when the smoothed average loss is zero
    """
    if len(prices) < period + 1:
        return 50.0

    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        change = prices[i] - prices[i - 1]
        if change >= 0:
            gains += change
        else:
            losses -= change

    avg_gain = gains / period
    avg_loss = losses / period

    for i in range(period + 1, len(prices)):
        change = prices[i] - prices[i - 1]
        gain = change if change > 0 else 0.0
        loss = -change if change < 0 else 0.0
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return 100 - 100 / (1 + rs)


def calculate_macd(
        prices: Sequence[float],
        fast_period: int = MACD_FAST_PERIOD,
        slow_period: int = MACD_SLOW_PERIOD,
        signal_period: int = MACD_SIGNAL_PERIOD,
) -> MacdResult:
    """Latest MACD line, its signal EMA and the histogram (line - signal)."""
    if not prices:
        return MacdResult(macd=0.0, signal=0.0, histogram=0.0)

    fast = calculate_ema(prices, fast_period)
    slow = calculate_ema(prices, slow_period)
    macd_history = [f - s for f, s in zip(fast, slow)]

    macd_line = macd_history[-1]
    signal = calculate_ema(macd_history, signal_period)[-1]
    return MacdResult(macd=macd_line, signal=signal, histogram=macd_line - signal)


# =============================================================================
# TREND / LEVELS
# =============================================================================

def calculate_trend_slope(prices: Sequence[float]) -> float:
    """Least-squares slope of price against observation index."""
    n = len(prices)
    if n < 2:
        return 0.0

    x_mean = (n - 1) / 2
    y_mean = mean(prices)

    numerator = sum((i - x_mean) * (p - y_mean) for i, p in enumerate(prices))
    denominator = sum((i - x_mean) ** 2 for i in range(n))
    return numerator / denominator


def classify_trend(normalized_slope: float) -> Trend:
    """Trend label from the slope as a percentage of the mean price."""
    if normalized_slope > 2:
        return Trend.STRONG_UPTREND
    if normalized_slope > 0.5:
        return Trend.UPTREND
    if normalized_slope > -0.5:
        return Trend.SIDEWAYS
    if normalized_slope > -2:
        return Trend.DOWNTREND
    return Trend.STRONG_DOWNTREND


def detect_trend(prices: Sequence[float]) -> tuple[float, Trend]:
    """
    Regression slope and its trend label.

    Returns:
        (raw slope, Trend); Sideways for fewer than two prices
    """
    slope = calculate_trend_slope(prices)
    price_mean = mean(prices)
    if price_mean == 0:
        return slope, Trend.SIDEWAYS
    return slope, classify_trend(slope / price_mean * 100)


def calculate_levels(prices: Sequence[float]) -> tuple[float, float]:
    """Support and resistance at the 25th and 75th percentile."""
    return percentile_value(prices, 0.25), percentile_value(prices, 0.75)


# =============================================================================
# EXTRAPOLATION
# =============================================================================

def extrapolate_returns(returns: Sequence[float], slope: float) -> PredictedReturns:
    """Blend recent and average returns, then add a horizon-scaled trend term."""
    if not returns:
        return PredictedReturns()

    weighted = mean(returns) * 0.3 + returns[-1] * 0.7
    trend_factor = slope * 0.1

    return PredictedReturns(
        returns_1m=round(weighted * 0.3 + trend_factor, RATIO_PRECISION),
        returns_3m=round(weighted * 0.8 + trend_factor * 2, RATIO_PRECISION),
        returns_6m=round(weighted * 1.5 + trend_factor * 3, RATIO_PRECISION),
        returns_1y=round(weighted * 3 + trend_factor * 5, RATIO_PRECISION),
    )


def calculate_momentum(prices: Sequence[float], rsi: float, macd: MacdResult) -> float:
    """
    Momentum in -100..100 from price change, RSI and MACD direction.

    Formula: 0.5 × price change % + 0.3 × (RSI - 50) × 2 + 0.2 × (±20)
    """
    price_change = (prices[-1] - prices[0]) / prices[0] * 100
    rsi_momentum = (rsi - 50) * 2
    macd_momentum = 20 if macd.histogram > 0 else -20

    momentum = price_change * 0.5 + rsi_momentum * 0.3 + macd_momentum * 0.2
    return max(-100.0, min(100.0, momentum))


def generate_signals(rsi: float, macd: MacdResult, trend: Trend, momentum: float) -> list[str]:
    signals = []

    if rsi > 70:
        signals.append("Overbought (RSI > 70) - Potential reversal")
    elif rsi < 30:
        signals.append("Oversold (RSI < 30) - Potential buying opportunity")

    if macd.histogram > 0:
        signals.append("MACD Bullish - Upward momentum")
    else:
        signals.append("MACD Bearish - Downward momentum")

    if trend in (Trend.STRONG_UPTREND, Trend.UPTREND):
        signals.append("Upward trend detected")
    elif trend in (Trend.STRONG_DOWNTREND, Trend.DOWNTREND):
        signals.append("Downward trend - Exercise caution")

    if momentum > 50:
        signals.append("Strong positive momentum")
    elif momentum < -50:
        signals.append("Strong negative momentum")

    return signals


# =============================================================================
# PREDICTOR
# =============================================================================

def predict_performance(
        nav_series: Sequence[NavPoint],
        min_data_points: int = MIN_PREDICTION_DATA_POINTS,
        periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> PredictionResult:
    """
    Detect trend and momentum and extrapolate short-horizon returns.

    Args:
        nav_series: NAV history in any order
        min_data_points: Minimum NAVs needed for a prediction
        periods_per_year: Observations that count as a full year of history

    Returns:
        PredictionResult; a zero, Sideways, zero-confidence result with
        has_sufficient_data=False when history is too short
    """
    if len(nav_series) < min_data_points:
        return PredictionResult(
            predicted=PredictedReturns(),
            confidence=0,
            trend=Trend.SIDEWAYS,
            momentum=0,
            support=0.0,
            resistance=0.0,
            signals=[INSUFFICIENT_DATA_SIGNAL],
            rsi=50.0,
            has_sufficient_data=False,
        )

    prices = [p.nav for p in sort_nav_series(nav_series)]
    returns = calculate_series_returns(prices)

    rsi = calculate_rsi(prices)
    macd = calculate_macd(prices)
    slope, trend = detect_trend(prices)
    support, resistance = calculate_levels(prices)
    momentum = calculate_momentum(prices, rsi, macd)

    volatility = stddev(returns)
    data_quality = min(len(prices) / periods_per_year, 1.0)
    confidence = round((1 - min(volatility / 30, 1.0)) * 50 + data_quality * 50)

    logger.debug(
        f"Prediction over {len(prices)} NAVs: trend={trend.value}, "
        f"rsi={rsi:.1f}, macd_hist={macd.histogram:.4f}, confidence={confidence}"
    )

    return PredictionResult(
        predicted=extrapolate_returns(returns, slope),
        confidence=int(confidence),
        trend=trend,
        momentum=int(round(momentum)),
        support=round(support, RATIO_PRECISION),
        resistance=round(resistance, RATIO_PRECISION),
        signals=generate_signals(rsi, macd, trend, momentum),
        rsi=round(rsi, RATIO_PRECISION),
    )


def predict_performance_batch(
        funds: Sequence[tuple[str, Sequence[NavPoint]]],
        min_data_points: int = MIN_PREDICTION_DATA_POINTS,
) -> dict[str, PredictionResult]:
    """
    Predict several funds.

    Args:
        funds: (fund_id, nav_series) pairs

    Returns:
        Mapping of fund_id to its prediction, in input order
    """
    return {
        fund_id: predict_performance(nav_series, min_data_points=min_data_points)
        for fund_id, nav_series in funds
    }
