# backend/tests/services/analytics/test_statistics.py
"""
Unit tests for the statistics primitives.

All tests use known values that can be verified by hand.
"""

import pytest

from fundmetrics.services.analytics.statistics import (
    covariance,
    is_flat,
    is_negligible,
    mean,
    percentile_value,
    stddev,
    variance,
)


class TestMean:

    def test_mean(self):
        assert mean([1, 2, 3, 4]) == 2.5

    def test_empty_is_zero(self):
        assert mean([]) == 0.0


class TestVariance:

    def test_population_variance(self):
        """Classic example: population σ² of this set is exactly 4."""
        assert variance([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(4.0)

    def test_empty_is_zero(self):
        assert variance([]) == 0.0


class TestStddev:

    def test_population_stddev(self):
        assert stddev([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)

    def test_single_value_is_zero(self):
        assert stddev([5.0]) == 0.0

    def test_constant_series_is_zero(self):
        assert stddev([3.3] * 10) == pytest.approx(0.0)


class TestCovariance:

    def test_covariance(self):
        # means 2 and 4; Σ(dx·dy) = 2 + 0 + 2 = 4; / N = 4/3
        assert covariance([1, 2, 3], [2, 4, 6]) == pytest.approx(4 / 3)

    def test_mismatched_lengths(self):
        assert covariance([1, 2, 3], [1, 2]) == 0.0

    def test_empty(self):
        assert covariance([], []) == 0.0


class TestPercentileValue:

    def test_nearest_rank(self):
        # sorted [1, 2, 3, 4], index floor(4 × 0.25) = 1
        assert percentile_value([4, 1, 3, 2], 0.25) == 2

    def test_index_clamped_to_last(self):
        assert percentile_value([4, 1, 3, 2], 1.0) == 4

    def test_zero_quantile_is_minimum(self):
        assert percentile_value([4, 1, 3, 2], 0.0) == 1

    def test_empty(self):
        assert percentile_value([], 0.5) == 0.0


class TestFlatSeries:

    def test_constant_decimal_series(self):
        # stddev of [0.1] * 3 is ~1e-17 in floating point
        assert is_flat([0.1] * 3)

    def test_large_magnitude_noise(self):
        assert is_flat([123456.789] * 5)

    def test_varying_series(self):
        assert not is_flat([0.1, 0.1000001, 0.1])

    def test_empty(self):
        assert is_flat([])

    def test_negligible_scales_with_data(self):
        assert is_negligible(1e-9, [5000.0, 5000.0])
        assert not is_negligible(1e-9, [1.0, 1.0])
