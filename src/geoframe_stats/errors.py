"""Exceptions raised by the validation, outlier and goodness-of-fit code."""
from __future__ import annotations

from typing import Iterable, Tuple


class GeoframeStatsError(Exception):
    """Base class for all input rejections raised by this package."""


class LengthMismatch(GeoframeStatsError, ValueError):
    """Observed and simulated arrays have different lengths."""

    def __init__(self, len_observed: int, len_simulated: int) -> None:
        self.len_observed = len_observed
        self.len_simulated = len_simulated
        super().__init__(
            f"Observed and simulated arrays must be of the same length "
            f"(got {len_observed} and {len_simulated})"
        )


class InsufficientData(GeoframeStatsError, ValueError):
    """Too few (jointly) valid samples to compute a score."""

    def __init__(self, message: str, n_valid: int, min_valid: int) -> None:
        self.n_valid = n_valid
        self.min_valid = min_valid
        super().__init__(message)


class TimestampMismatch(GeoframeStatsError, ValueError):
    """Two time-indexed series do not share an identical time axis."""


class UnsupportedMethod(GeoframeStatsError, ValueError):
    """Unknown outlier-detection method name."""

    def __init__(self, method: object, valid: Iterable[str]) -> None:
        self.method = method
        self.valid: Tuple[str, ...] = tuple(valid)
        super().__init__(
            f"Unsupported method: {method!r}. Valid methods: {', '.join(self.valid)}"
        )
