"""Sample quantile estimators.

Two estimators are provided:
- Classic: linear interpolation between order statistics (numpy "linear").
- Harrell-Davis: weighted sum of all order statistics, the weights being a
  Beta(n*p + 1, n*(1 - p) + 1) density evaluated at the plotting positions
  (i - 0.5) / n. Every sample contributes, so the estimate moves smoothly as
  the data change instead of jumping between neighbouring order statistics.

Non-finite values are ignored by both estimators. Sentinel values are NOT
filtered here; callers pass already-cleaned data.
"""
from __future__ import annotations

from enum import Enum
from typing import Sequence, Union

import numpy as np
from scipy.stats import beta

Probability = Union[float, Sequence[float], np.ndarray]


class QuantileMethod(str, Enum):
    """Quantile estimation strategy."""

    CLASSIC = "classic"
    HARRELL_DAVIS = "harrell-davis"


def finite(values) -> np.ndarray:
    """Return the finite values of ``values`` as a flat float array."""
    data = np.asarray(values, dtype=float).ravel()
    return data[np.isfinite(data)]


def _check_prob(prob: Probability) -> np.ndarray:
    probs = np.asarray(prob, dtype=float)
    if np.any((probs < 0) | (probs > 1)) or np.any(np.isnan(probs)):
        raise ValueError(f"Quantile probability must be in [0, 1], got {prob}")
    return probs


def classic_quantile(values, prob: Probability):
    """Linear-interpolation sample quantile(s).

    Returns NaN (or an array of NaN) when no finite value is available.
    """
    probs = _check_prob(prob)
    data = finite(values)
    if data.size == 0:
        return np.full(probs.shape, np.nan) if probs.ndim else np.nan
    return np.quantile(data, probs, method="linear")


def harrell_davis_quantile(values, prob: float) -> float:
    """Harrell-Davis estimate of the ``prob`` quantile.

    Example:
        >>> harrell_davis_quantile([10, 12, 10, 15, 100, 10, 11, 10, 14, 13], 0.25)
    """
    p = float(_check_prob(prob))
    data = np.sort(finite(values))
    n = data.size
    if n == 0:
        return np.nan

    positions = (np.arange(1, n + 1) - 0.5) / n
    weights = beta.pdf(positions, n * p + 1, n * (1 - p) + 1)
    # weights are not normalised by construction
    return float(np.sum(data * weights) / np.sum(weights))


def quantile(values, prob: float, method: QuantileMethod = QuantileMethod.CLASSIC) -> float:
    """Estimate a single quantile with the requested estimator."""
    if method is QuantileMethod.HARRELL_DAVIS:
        return harrell_davis_quantile(values, prob)
    return float(classic_quantile(values, prob))


def median(values, method: QuantileMethod = QuantileMethod.CLASSIC) -> float:
    return quantile(values, 0.5, method)
