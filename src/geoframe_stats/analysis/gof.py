"""Goodness-of-fit scores between observed and simulated series.

Every scorer first applies :func:`geoframe_stats.validation.check_pair`, so
sentinel samples are dropped pairwise and too-short inputs are rejected
before any arithmetic. Degenerate inputs (zero observed mean or variance) are
not errors: the score comes back as NaN or +/-Inf.

The ``*_ts`` variants take time-indexed pandas Series, require identical
time axes and then delegate to the array form.
"""
from __future__ import annotations

from enum import Enum
from typing import Union

import numpy as np
import pandas as pd

from ..validation import MIN_VALID, NO_VALUE, ArrayLike, check_aligned, check_pair


class GOFMetric(str, Enum):
    """Available goodness-of-fit scores."""

    KGE = "kge"
    KGE_MODIFIED = "kge_modified"
    NSE = "nse"
    NSE_LOG = "nse_log"
    MSE = "mse"

    @property
    def best(self) -> float:
        return 0.0 if self is GOFMetric.MSE else 1.0


def kge(
    observed: ArrayLike,
    simulated: ArrayLike,
    modified: bool = False,
    a: float = 1.0,
    b: float = 1.0,
    g: float = 1.0,
    no_value: float = NO_VALUE,
    min_valid: int = MIN_VALID,
) -> float:
    """Kling-Gupta Efficiency.

    KGE = 1 - sqrt((r - a)^2 + (b*alpha - 1)^2 + (g*beta - 1)^2)

    with r the Pearson correlation, beta = mean_sim / mean_obs and
    alpha = std_sim / std_obs (Gupta et al., 2009). With ``modified`` the
    variability term uses the ratio of coefficients of variation,
    alpha / beta (Kling et al., 2012).

    Args:
        observed: Observed values
        simulated: Simulated values
        modified: Use the 2012 formulation
        a, b, g: Scaling of the correlation, variability and bias terms
        no_value: Sentinel for missing samples
        min_valid: Minimum count of valid pairs (exclusive)

    Returns:
        KGE score, 1.0 for a perfect match

    Example:
        >>> kge([1, 2, 3, 4, 5], [1.1, 1.9, 3.05, 3.95, 5.1], min_valid=2)
        0.9905...
    """
    obs, sim = check_pair(observed, simulated, no_value=no_value, min_valid=min_valid)

    with np.errstate(divide="ignore", invalid="ignore"):
        r = np.corrcoef(obs, sim)[0, 1]
        beta = np.mean(sim) / np.mean(obs)
        alpha = np.std(sim, ddof=1) / np.std(obs, ddof=1)
        if modified:
            alpha = alpha / beta
        score = 1.0 - np.sqrt((r - a) ** 2 + (b * alpha - 1) ** 2 + (g * beta - 1) ** 2)
    return float(score)


def nse(
    observed: ArrayLike,
    simulated: ArrayLike,
    no_value: float = NO_VALUE,
    min_valid: int = MIN_VALID,
) -> float:
    """Nash-Sutcliffe Efficiency.

    1 is a perfect match, 0 means the simulation is no better than the mean
    of the observations.
    """
    obs, sim = check_pair(observed, simulated, no_value=no_value, min_valid=min_valid)
    return _nse(obs, sim, np.mean(obs))


def _log_or_keep(values: np.ndarray) -> np.ndarray:
    positive = values > 0
    # log only where defined, keep non-positive values as they are
    return np.where(positive, np.log(np.where(positive, values, 1.0)), values)


def nse_log(
    observed: ArrayLike,
    simulated: ArrayLike,
    no_value: float = NO_VALUE,
    min_valid: int = MIN_VALID,
) -> float:
    """Nash-Sutcliffe Efficiency of log-transformed values.

    Emphasises the fit of low values. Non-positive samples are not
    log-transformed: they enter the formula unchanged, so the arrays keep
    their length. The reference level is the log of the observed mean.
    """
    obs, sim = check_pair(observed, simulated, no_value=no_value, min_valid=min_valid)
    with np.errstate(divide="ignore", invalid="ignore"):
        reference = np.log(np.mean(obs))
    return _nse(_log_or_keep(obs), _log_or_keep(sim), reference)


def _nse(obs: np.ndarray, sim: np.ndarray, reference: float) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        numerator = np.sum((sim - obs) ** 2)
        denominator = np.sum((obs - reference) ** 2)
        return float(1.0 - numerator / denominator)


def mse(
    observed: ArrayLike,
    predicted: ArrayLike,
    no_value: float = NO_VALUE,
    min_valid: int = MIN_VALID,
) -> float:
    """Mean squared error over the jointly valid samples."""
    obs, pred = check_pair(observed, predicted, no_value=no_value, min_valid=min_valid)
    return float(np.mean((obs - pred) ** 2))


def kge_ts(
    observed: pd.Series,
    simulated: pd.Series,
    modified: bool = False,
    a: float = 1.0,
    b: float = 1.0,
    g: float = 1.0,
    no_value: float = NO_VALUE,
    min_valid: int = MIN_VALID,
) -> float:
    obs, sim = check_aligned(observed, simulated)
    return kge(obs, sim, modified, a=a, b=b, g=g, no_value=no_value, min_valid=min_valid)


def nse_ts(observed: pd.Series, simulated: pd.Series,
           no_value: float = NO_VALUE, min_valid: int = MIN_VALID) -> float:
    obs, sim = check_aligned(observed, simulated)
    return nse(obs, sim, no_value=no_value, min_valid=min_valid)


def nse_log_ts(observed: pd.Series, simulated: pd.Series,
               no_value: float = NO_VALUE, min_valid: int = MIN_VALID) -> float:
    obs, sim = check_aligned(observed, simulated)
    return nse_log(obs, sim, no_value=no_value, min_valid=min_valid)


def mse_ts(observed: pd.Series, predicted: pd.Series,
           no_value: float = NO_VALUE, min_valid: int = MIN_VALID) -> float:
    obs, pred = check_aligned(observed, predicted)
    return mse(obs, pred, no_value=no_value, min_valid=min_valid)


def score(
    metric: Union[str, GOFMetric],
    observed: ArrayLike,
    simulated: ArrayLike,
    a: float = 1.0,
    b: float = 1.0,
    g: float = 1.0,
    no_value: float = NO_VALUE,
    min_valid: int = MIN_VALID,
) -> float:
    """Compute ``metric`` by name.

    Time-indexed Series pairs go through the ``*_ts`` path, anything else
    is treated as plain arrays.

    Raises:
        ValueError: For an unknown metric name
    """
    metric = GOFMetric(metric)
    timed = isinstance(observed, pd.Series) and isinstance(simulated, pd.Series)
    if timed:
        observed, simulated = check_aligned(observed, simulated)

    if metric in (GOFMetric.KGE, GOFMetric.KGE_MODIFIED):
        return kge(observed, simulated, metric is GOFMetric.KGE_MODIFIED,
                   a=a, b=b, g=g, no_value=no_value, min_valid=min_valid)
    if metric is GOFMetric.NSE:
        return nse(observed, simulated, no_value=no_value, min_valid=min_valid)
    if metric is GOFMetric.NSE_LOG:
        return nse_log(observed, simulated, no_value=no_value, min_valid=min_valid)
    return mse(observed, simulated, no_value=no_value, min_valid=min_valid)
