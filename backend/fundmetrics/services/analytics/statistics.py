# backend/fundmetrics/services/analytics/statistics.py
"""
Statistics primitives shared by every analytics calculator.

All functions use population statistics (divisor N, not N-1) and are total:
empty input, or paired input of mismatched length, returns 0.0 instead of
raising. Callers treat 0.0 as "not computed" for near-empty series.

No external dependencies (scipy, numpy) - plain float arithmetic.
"""

import math
from typing import Sequence

# Dispersion below this fraction of the data's magnitude counts as zero
ZERO_TOLERANCE = 1e-12


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty series."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def variance(values: Sequence[float]) -> float:
    """
    Population variance.

    Formula: σ² = Σ(x - μ)² / N

    Returns:
        Variance (always >= 0), 0.0 for an empty series
    """
    if not values:
        return 0.0

    mu = mean(values)
    return sum((x - mu) ** 2 for x in values) / len(values)


def stddev(values: Sequence[float]) -> float:
    """Population standard deviation; 0.0 for empty or single-element input."""
    return math.sqrt(variance(values))


def covariance(xs: Sequence[float], ys: Sequence[float]) -> float:
    """
    Population covariance of two paired series.

    Returns:
        Covariance, or 0.0 if either series is empty or lengths differ
    """
    if not xs or len(xs) != len(ys):
        return 0.0

    mean_x = mean(xs)
    mean_y = mean(ys)

    cov = sum((x - mean_x) * (y - mean_y) for x, y in zip(xs, ys))
    return cov / len(xs)


def is_negligible(value: float, reference: Sequence[float]) -> bool:
    """
    Whether a dispersion computed from `reference` is zero up to float noise.

    The tolerance scales with the magnitude of the data: the population
    stddev of [0.1, 0.1, 0.1] is about 1e-17, not 0.0.
    """
    scale = max(1.0, mean([abs(x) for x in reference]))
    return math.isclose(value, 0.0, abs_tol=ZERO_TOLERANCE * scale)


def is_flat(values: Sequence[float]) -> bool:
    """True for empty series and series whose stddev is negligible."""
    return is_negligible(stddev(values), values)


def percentile_value(values: Sequence[float], quantile: float) -> float:
    """
    Nearest-rank percentile without interpolation.

    Returns the element at index floor(N * quantile) of the ascending sorted
    copy, clamped to the last element.

    Example:
        >>> percentile_value([4, 1, 3, 2], 0.25)
        2
    """
    if not values:
        return 0.0

    sorted_values = sorted(values)
    index = int(math.floor(len(sorted_values) * quantile))
    index = max(0, min(index, len(sorted_values) - 1))
    return sorted_values[index]
