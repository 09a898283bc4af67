"""Fence-based outlier detection.

Six interchangeable methods build a lower and an upper fence from robust
location/scale estimates; a sample is an outlier when it lies strictly
outside the fences:

- Tukey / TukeyHD: [Q1 - k*IQR, Q3 + k*IQR], k = 1.5 by default
- MAD / MADHD: median +/- threshold * 1.4826 * MAD
- DMAD / DMADHD: "double MAD", with a separate deviation for the lower half
  and the upper half of the data, which suits skewed samples

The *HD variants replace classic quantiles/medians with the Harrell-Davis
estimator. Non-finite values never take part in the estimation, and NaN is
never flagged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple, Union

import numpy as np
import pandas as pd

from ..data.models import OutlierResult
from ..errors import UnsupportedMethod
from .quantiles import QuantileMethod, finite, median, quantile

logger = logging.getLogger(__name__)

# Consistency constant making the MAD estimate sigma for normal data
MAD_SCALE = 1.4826

Fences = Tuple[float, float]


class OutlierMethod(str, Enum):
    """Supported fence methods."""

    TUKEY = "Tukey"
    TUKEY_HD = "TukeyHD"
    MAD = "MAD"
    MAD_HD = "MADHD"
    DMAD = "DMAD"
    DMAD_HD = "DMADHD"

    @classmethod
    def names(cls) -> Tuple[str, ...]:
        return tuple(m.value for m in cls)

    @classmethod
    def parse(cls, method: Union[str, "OutlierMethod"]) -> "OutlierMethod":
        """Resolve a method name, raising UnsupportedMethod for unknown names."""
        if isinstance(method, cls):
            return method
        try:
            return cls(method)
        except ValueError:
            raise UnsupportedMethod(method, cls.names()) from None


@dataclass
class OutlierConfig:
    """Configuration for outlier detection.

    ``threshold`` scales the MAD family fences. Tukey fences use
    ``iqr_factor`` instead and ignore ``threshold``.
    """

    method: Union[str, OutlierMethod] = OutlierMethod.TUKEY

    # Fence multiplier for MAD, MADHD, DMAD and DMADHD
    threshold: float = 3.0

    # Tukey's k
    iqr_factor: float = 1.5

    # Optional sentinel treated as a missing sample
    no_value: float | None = None

    def __post_init__(self) -> None:
        self.method = OutlierMethod.parse(self.method)
        if not self.threshold >= 0:
            raise ValueError(f"threshold must be >= 0, got {self.threshold}")
        if not self.iqr_factor >= 0:
            raise ValueError(f"iqr_factor must be >= 0, got {self.iqr_factor}")


def tukey_fences(data: np.ndarray, iqr_factor: float = 1.5,
                 estimator: QuantileMethod = QuantileMethod.CLASSIC) -> Fences:
    q1 = quantile(data, 0.25, estimator)
    q3 = quantile(data, 0.75, estimator)
    iqr = q3 - q1
    return q1 - iqr_factor * iqr, q3 + iqr_factor * iqr


def mad_fences(data: np.ndarray, threshold: float = 3.0,
               estimator: QuantileMethod = QuantileMethod.CLASSIC) -> Fences:
    center = median(data, estimator)
    mad = MAD_SCALE * median(np.abs(data - center), estimator)
    return center - threshold * mad, center + threshold * mad


def double_mad_fences(data: np.ndarray, threshold: float = 3.0,
                      estimator: QuantileMethod = QuantileMethod.CLASSIC) -> Fences:
    """Asymmetric MAD fences.

    The median itself belongs to both halves.
    """
    center = median(data, estimator)
    left = data[data <= center]
    right = data[data >= center]
    left_mad = MAD_SCALE * median(np.abs(left - center), estimator)
    right_mad = MAD_SCALE * median(np.abs(right - center), estimator)
    return center - threshold * left_mad, center + threshold * right_mad


_FENCE_BUILDERS: Dict[OutlierMethod, Callable[[np.ndarray, OutlierConfig], Fences]] = {
    OutlierMethod.TUKEY: lambda d, c: tukey_fences(d, c.iqr_factor, QuantileMethod.CLASSIC),
    OutlierMethod.TUKEY_HD: lambda d, c: tukey_fences(d, c.iqr_factor, QuantileMethod.HARRELL_DAVIS),
    OutlierMethod.MAD: lambda d, c: mad_fences(d, c.threshold, QuantileMethod.CLASSIC),
    OutlierMethod.MAD_HD: lambda d, c: mad_fences(d, c.threshold, QuantileMethod.HARRELL_DAVIS),
    OutlierMethod.DMAD: lambda d, c: double_mad_fences(d, c.threshold, QuantileMethod.CLASSIC),
    OutlierMethod.DMAD_HD: lambda d, c: double_mad_fences(d, c.threshold, QuantileMethod.HARRELL_DAVIS),
}


class OutlierDetector:
    """Flags samples lying outside robust fences.

    Usage:
        detector = OutlierDetector(OutlierConfig(method="DMADHD", threshold=3.0))

        # Positions of outliers in a single series
        idx = detector.detect(values)

        # One result per column of a (time-indexed) table
        results = detector.analyze(frame)
        print(detector.generate_report(results))
    """

    def __init__(self, config: OutlierConfig | None = None) -> None:
        self.config = config or OutlierConfig()

    @property
    def method(self) -> OutlierMethod:
        return self.config.method

    def _missing(self, values: np.ndarray) -> np.ndarray:
        missing = np.isnan(values)
        if self.config.no_value is not None:
            missing |= values == self.config.no_value
        return missing

    def fences(self, values) -> Fences:
        """Lower and upper fence for ``values``.

        Returns ``(nan, nan)`` when no finite sample is available.
        """
        data = np.asarray(values, dtype=float).ravel()
        data = finite(data[~self._missing(data)])
        if data.size == 0:
            return np.nan, np.nan
        lower, upper = _FENCE_BUILDERS[self.method](data, self.config)
        return float(lower), float(upper)

    def detect(self, values) -> np.ndarray:
        """Return the ascending 0-based positions of outliers in ``values``."""
        data = np.asarray(values, dtype=float).ravel()
        return self._flag(data, *self.fences(data))

    def _flag(self, data: np.ndarray, lower: float, upper: float) -> np.ndarray:
        if data.size == 0:
            return np.array([], dtype=int)
        logger.debug(
            "%s fences [%.6g, %.6g] over %d samples",
            self.method.value, lower, upper, data.size,
        )
        with np.errstate(invalid="ignore"):
            flagged = (data < lower) | (data > upper)
        flagged &= ~self._missing(data)
        return np.flatnonzero(flagged)

    def analyze(self, table: Union[pd.DataFrame, pd.Series, np.ndarray]) -> List[OutlierResult]:
        """Detect outliers in every column independently.

        Args:
            table: DataFrame (one result per column), Series, or a 1-D/2-D
                array (2-D arrays are split by column)

        Returns:
            List of OutlierResult in column order. Empty columns produce an
            empty result.
        """
        if isinstance(table, pd.DataFrame):
            return [self._analyze_column(name, table[name]) for name in table.columns]
        if isinstance(table, pd.Series):
            name = table.name if table.name is not None else 0
            return [self._analyze_column(name, table)]

        array = np.asarray(table, dtype=float)
        if array.ndim <= 1:
            return [self._analyze_column(0, array.ravel())]
        return [self._analyze_column(i, array[:, i]) for i in range(array.shape[1])]

    def _analyze_column(self, name: object, column) -> OutlierResult:
        values = np.asarray(column, dtype=float).ravel()
        lower, upper = self.fences(values)
        indices = self._flag(values, lower, upper)
        outliers = column.iloc[indices] if isinstance(column, pd.Series) else None
        return OutlierResult(
            column=name,
            method=self.method.value,
            threshold=self.config.threshold,
            lower_fence=lower,
            upper_fence=upper,
            indices=indices,
            outliers=outliers,
            n_samples=int(values.size),
        )

    def get_summary_stats(self, results: List[OutlierResult]) -> Dict[str, float]:
        """Get summary statistics of an outlier analysis.

        Returns:
            Dict with summary metrics
        """
        if not results:
            return {}

        counts = [r.n_outliers for r in results]
        samples = sum(r.n_samples for r in results)

        return {
            'total_columns': len(results),
            'columns_with_outliers': sum(c > 0 for c in counts),
            'total_samples': samples,
            'total_outliers': sum(counts),
            'outlier_fraction': sum(counts) / samples if samples else 0.0,
            'max_outliers_per_column': max(counts),
        }

    def generate_report(self, results: List[OutlierResult]) -> str:
        """Generate human-readable outlier analysis report.

        Args:
            results: List of outlier analysis results

        Returns:
            Formatted report string
        """
        if not results:
            return "No outlier analysis results available."

        stats = self.get_summary_stats(results)

        report_lines = [
            "=" * 70,
            "OUTLIER ANALYSIS REPORT",
            "=" * 70,
            "",
            f"Method: {self.method.value} (threshold {self.config.threshold}, "
            f"IQR factor {self.config.iqr_factor})",
            "",
            "📊 SUMMARY STATISTICS:",
            f"   Columns analyzed: {stats['total_columns']}",
            f"   Columns with outliers: {stats['columns_with_outliers']}",
            f"   Samples: {stats['total_samples']}",
            f"   Outliers: {stats['total_outliers']} ({stats['outlier_fraction']:.2%})",
            "",
            f"{'Column':<16} {'Lower':>12} {'Upper':>12} {'Samples':>8} {'Outliers':>9}",
            "-" * 70,
        ]

        for result in results:
            report_lines.append(
                f"{str(result.column):<16} {result.lower_fence:>12.4f} {result.upper_fence:>12.4f} "
                f"{result.n_samples:>8} {result.n_outliers:>9}"
            )

        report_lines.append("")
        report_lines.append("=" * 70)

        return "\n".join(report_lines)
