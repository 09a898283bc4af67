"""Tests for the quantile estimators."""
import numpy as np
import pytest

from geoframe_stats.analysis.quantiles import (
    QuantileMethod,
    classic_quantile,
    harrell_davis_quantile,
    median,
    quantile,
)


class TestClassicQuantile:

    def test_linear_interpolation(self):
        data = [10, 12, 10, 15, 100, 10, 11, 10, 14, 13]
        assert classic_quantile(data, 0.25) == pytest.approx(10.0)
        assert classic_quantile(data, 0.75) == pytest.approx(13.75)

    def test_vector_of_probabilities(self):
        q1, q3 = classic_quantile([1.0, 2.0, 3.0, 4.0, 5.0], [0.25, 0.75])
        assert q1 == pytest.approx(2.0)
        assert q3 == pytest.approx(4.0)

    def test_extremes(self):
        data = [3.0, 1.0, 2.0]
        assert classic_quantile(data, 0.0) == 1.0
        assert classic_quantile(data, 1.0) == 3.0

    def test_ignores_non_finite(self):
        assert classic_quantile([1.0, np.nan, 3.0, np.inf], 0.5) == pytest.approx(2.0)

    def test_empty_is_nan(self):
        assert np.isnan(classic_quantile([], 0.5))

    @pytest.mark.parametrize("prob", [-0.1, 1.5])
    def test_probability_out_of_range(self, prob):
        with pytest.raises(ValueError):
            classic_quantile([1.0, 2.0], prob)


class TestHarrellDavisQuantile:

    def test_empty_is_nan(self):
        """No data gives NaN rather than an exception."""
        assert np.isnan(harrell_davis_quantile([], 0.5))
        assert np.isnan(harrell_davis_quantile([np.nan, np.nan], 0.5))

    def test_single_value(self):
        assert harrell_davis_quantile([7.0], 0.3) == pytest.approx(7.0)

    def test_constant_sample(self):
        assert harrell_davis_quantile([4.0] * 20, 0.9) == pytest.approx(4.0)

    @pytest.mark.parametrize("data", [
        [1.0, 2.0, 3.0, 4.0, 5.0],
        [-3.0, -1.0, 0.0, 1.0, 3.0],
        [1.0, 2.0, 2.5, 3.0, 4.0, 10.0, 16.0, 17.0, 17.5, 18.0, 19.0],
        list(np.linspace(-50, 50, 101)),
    ])
    def test_median_of_symmetric_sample(self, data):
        """On a symmetric sample the HD median is the classic median."""
        assert harrell_davis_quantile(data, 0.5) == pytest.approx(np.median(data), abs=1e-6)

    def test_weights_are_normalised(self):
        """A shifted sample shifts the estimate by the same amount."""
        rng = np.random.default_rng(7)
        data = rng.normal(size=57)
        base = harrell_davis_quantile(data, 0.25)
        assert harrell_davis_quantile(data + 100.0, 0.25) == pytest.approx(base + 100.0)

    def test_order_independent(self):
        data = [5.0, 1.0, 4.0, 2.0, 3.0, 9.0]
        assert harrell_davis_quantile(data, 0.75) == pytest.approx(
            harrell_davis_quantile(sorted(data), 0.75)
        )

    def test_monotone_in_probability(self):
        rng = np.random.default_rng(3)
        data = rng.exponential(size=40)
        estimates = [harrell_davis_quantile(data, p) for p in (0.1, 0.25, 0.5, 0.75, 0.9)]
        assert estimates == sorted(estimates)

    def test_within_sample_range(self):
        data = [10, 12, 10, 15, 100, 10, 11, 10, 14, 13]
        q1 = harrell_davis_quantile(data, 0.25)
        assert min(data) <= q1 <= max(data)

    def test_less_sensitive_to_extreme_than_mean(self):
        data = [10, 12, 10, 15, 100, 10, 11, 10, 14, 13]
        assert harrell_davis_quantile(data, 0.5) < np.mean(data)


def test_dispatch():
    data = [1.0, 2.0, 3.0, 4.0, 10.0]
    assert quantile(data, 0.5) == pytest.approx(3.0)
    assert quantile(data, 0.5, QuantileMethod.HARRELL_DAVIS) == pytest.approx(
        harrell_davis_quantile(data, 0.5)
    )
    assert median(data) == pytest.approx(3.0)
