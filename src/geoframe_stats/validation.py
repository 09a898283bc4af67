"""Sentinel filtering and sample-count checks shared by every scorer."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .data.models import FilteredPair
from .errors import InsufficientData, LengthMismatch, TimestampMismatch

logger = logging.getLogger(__name__)

NO_VALUE = -9999.0
MIN_VALID = 30

ArrayLike = Union[Sequence[float], np.ndarray, pd.Series]


@dataclass
class ValidationConfig:
    """Parameters of the validity contract applied before scoring."""

    # Marker for missing samples, removed pairwise
    no_value: float = NO_VALUE

    # Floor on raw length; the filtered count must exceed it
    min_valid: int = MIN_VALID

    def __post_init__(self) -> None:
        if self.min_valid < 0:
            raise ValueError(f"min_valid must be >= 0, got {self.min_valid}")


def valid_mask(values: np.ndarray, no_value: float = NO_VALUE) -> np.ndarray:
    """Boolean mask that is False wherever ``values`` holds the sentinel."""
    if isinstance(no_value, float) and math.isnan(no_value):
        return ~np.isnan(values)
    return values != no_value


def check_pair(
    observed: ArrayLike,
    simulated: ArrayLike,
    no_value: float = NO_VALUE,
    min_valid: int = MIN_VALID,
) -> FilteredPair:
    """Drop every index where either series holds ``no_value``.

    Args:
        observed: Observed samples
        simulated: Simulated (or predicted) samples, aligned with ``observed``
        no_value: Sentinel marking missing samples
        min_valid: The filtered pair must hold strictly more samples than this

    Returns:
        FilteredPair with the surviving samples of both series

    Raises:
        LengthMismatch: If the inputs differ in length
        InsufficientData: If either input is shorter than ``min_valid`` or too
            few jointly valid samples remain
    """
    obs = np.asarray(observed, dtype=float)
    sim = np.asarray(simulated, dtype=float)

    if len(obs) != len(sim):
        raise LengthMismatch(len(obs), len(sim))
    if len(obs) < min_valid:
        raise InsufficientData(
            f"Input arrays must have at least {min_valid} elements (got {len(obs)})",
            n_valid=len(obs),
            min_valid=min_valid,
        )

    mask = valid_mask(obs, no_value) & valid_mask(sim, no_value)
    n_valid = int(mask.sum())
    if n_valid <= min_valid:
        raise InsufficientData(
            f"Insufficient number of valid data points after filtering: "
            f"{n_valid} (must be more than {min_valid})",
            n_valid=n_valid,
            min_valid=min_valid,
        )

    logger.debug("check_pair kept %d of %d samples", n_valid, len(obs))
    return FilteredPair(observed=obs[mask], simulated=sim[mask], n_total=len(obs))


def check_aligned(series_a: pd.Series, series_b: pd.Series) -> Tuple[np.ndarray, np.ndarray]:
    """Return the values of two time-indexed series sharing one time axis.

    The indexes must match exactly: same length, same order, same timestamps.

    Raises:
        TimestampMismatch: If the indexes differ in any way
    """
    if not series_a.index.equals(series_b.index):
        raise TimestampMismatch(
            f"Timestamps do not match ({len(series_a.index)} vs {len(series_b.index)} entries)"
        )
    return (
        np.asarray(series_a.to_numpy(), dtype=float),
        np.asarray(series_b.to_numpy(), dtype=float),
    )
