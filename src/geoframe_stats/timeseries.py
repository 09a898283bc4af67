"""Helpers binding the scorers and detectors to time-indexed pandas data."""
from __future__ import annotations

from typing import List, Optional, Sequence, TypeVar, Union

import numpy as np
import pandas as pd

from .analysis.outliers import OutlierConfig, OutlierDetector, OutlierMethod
from .validation import check_aligned

__all__ = ["as_time_series", "as_time_table", "unwrap", "check_aligned", "find_outliers"]

PandasT = TypeVar("PandasT", pd.Series, pd.DataFrame)


def _time_sorted(data: PandasT) -> PandasT:
    if not isinstance(data.index, pd.DatetimeIndex):
        raise TypeError("index must be a DatetimeIndex")
    if not data.index.is_monotonic_increasing:
        data = data.sort_index(kind="mergesort")
    return data


def as_time_series(
    values: Union[pd.Series, Sequence[float], np.ndarray],
    index: Optional[Sequence] = None,
    name: Optional[str] = None,
) -> pd.Series:
    """Build (or validate) a float Series indexed by timestamps.

    Raises:
        TypeError: If the resulting index is not a DatetimeIndex
        ValueError: If ``index`` and ``values`` differ in length
    """
    if isinstance(values, pd.Series) and index is None:
        series = values.astype(float)
        if name is not None:
            series = series.rename(name)
    else:
        if index is None:
            raise TypeError("index is required for plain sequences")
        if len(index) != len(values):
            raise ValueError(
                f"timestamps and values must have the same length ({len(index)} vs {len(values)})"
            )
        series = pd.Series(np.asarray(values, dtype=float), index=pd.DatetimeIndex(index), name=name)

    return _time_sorted(series)


def as_time_table(frame: pd.DataFrame) -> pd.DataFrame:
    """Validate a table with one column per station and sort it by timestamp.

    Column values are left as read; each pair is converted when it is scored.

    Raises:
        TypeError: If the index is not a DatetimeIndex
    """
    return _time_sorted(frame)


def unwrap(series: Union[pd.Series, pd.DataFrame]) -> np.ndarray:
    """Plain float values of a time-indexed series or table."""
    return np.asarray(series.to_numpy(), dtype=float)


def find_outliers(
    table: Union[pd.DataFrame, pd.Series],
    method: Union[str, OutlierMethod] = OutlierMethod.TUKEY,
    threshold: float = 3.0,
    iqr_factor: float = 1.5,
    no_value: Optional[float] = None,
) -> List[pd.Series]:
    """Outlier rows of every column of a time-indexed table.

    Returns:
        One Series per column holding only the flagged timestamps and
        values; empty columns give an empty Series.

    Example:
        >>> dates = pd.date_range("2023-01-01", periods=10, freq="D")
        >>> ta = pd.Series([10, 12, 10, 15, 100, 10, 11, 10, 14, 13], index=dates)
        >>> find_outliers(ta)[0]
        2023-01-05    100.0
        dtype: float64
    """
    config = OutlierConfig(method=method, threshold=threshold, iqr_factor=iqr_factor, no_value=no_value)
    detector = OutlierDetector(config)
    if isinstance(table, pd.Series):
        table = as_time_series(table)
    else:
        table = as_time_table(table).astype(float)
    return [result.outliers for result in detector.analyze(table)]
