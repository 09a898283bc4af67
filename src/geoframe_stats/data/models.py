"""Data models for the geoframe-stats package."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd


@dataclass
class FilteredPair:
    """Observed/simulated samples left after sentinel filtering.

    Attributes
    ----------
    observed:
        Observed values, free of the sentinel.
    simulated:
        Simulated values aligned with ``observed``.
    n_total:
        Length of the raw inputs before filtering.
    """

    observed: np.ndarray
    simulated: np.ndarray
    n_total: int

    def __post_init__(self) -> None:
        if len(self.observed) != len(self.simulated):
            raise ValueError("filtered arrays must have the same length")

    def __len__(self) -> int:
        return len(self.observed)

    def __iter__(self):
        yield self.observed
        yield self.simulated

    @property
    def n_valid(self) -> int:
        return len(self.observed)

    @property
    def n_dropped(self) -> int:
        return self.n_total - self.n_valid


@dataclass
class OutlierResult:
    """Outliers found in a single column.

    Attributes
    ----------
    column:
        Column name (or position for unnamed input).
    method:
        Name of the fence method, e.g. ``"DMADHD"``.
    threshold:
        Fence multiplier used for the MAD family.
    lower_fence, upper_fence:
        Values strictly outside ``[lower_fence, upper_fence]`` are outliers.
    indices:
        0-based positions of the flagged samples, ascending.
    outliers:
        For time-indexed input, the flagged rows as a Series; ``None``
        otherwise.
    n_samples:
        Number of samples in the column.
    """

    column: object
    method: str
    threshold: float
    lower_fence: float
    upper_fence: float
    indices: np.ndarray = field(default_factory=lambda: np.array([], dtype=int))
    outliers: Optional[pd.Series] = None
    n_samples: int = 0

    @property
    def n_outliers(self) -> int:
        return len(self.indices)

    @property
    def is_empty(self) -> bool:
        return self.n_outliers == 0

    def to_json(self) -> Dict[str, object]:
        """Return a JSON serialisable dictionary."""
        payload: Dict[str, object] = {
            "column": str(self.column),
            "method": self.method,
            "threshold": self.threshold,
            "lower_fence": _round(self.lower_fence),
            "upper_fence": _round(self.upper_fence),
            "n_samples": self.n_samples,
            "indices": [int(i) for i in self.indices],
        }
        if self.outliers is not None:
            payload["outliers"] = [
                {"timestamp": _format_timestamp(ts), "value": float(value)}
                for ts, value in self.outliers.items()
            ]
        return payload


@dataclass
class PairScore:
    """Goodness-of-fit score of one observed/simulated column pair."""

    column: object
    metric: str
    score: float
    n_valid: int
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_json(self) -> Dict[str, object]:
        """Return a JSON serialisable dictionary."""
        return {
            "column": str(self.column),
            "metric": self.metric,
            "score": _round(self.score),
            "n_valid": self.n_valid,
            "error": self.error,
        }


def scores_to_frame(scores: List[PairScore]) -> pd.DataFrame:
    """Pivot pair scores into a columns x metrics table."""
    if not scores:
        return pd.DataFrame()
    long_format = pd.DataFrame(
        [{"column": s.column, "metric": s.metric, "score": s.score} for s in scores]
    )
    return long_format.pivot(index="column", columns="metric", values="score")


def _round(value: float) -> Optional[float]:
    # JSON has no NaN/Inf
    if value is None or not np.isfinite(value):
        return None
    return round(float(value), 6)


def _format_timestamp(ts: object) -> str:
    if isinstance(ts, pd.Timestamp):
        return ts.isoformat()
    return str(ts)
