"""Goodness-of-fit scoring and robust outlier detection for time series."""
from .analysis import (
    GOFMetric,
    OutlierConfig,
    OutlierDetector,
    OutlierMethod,
    QuantileMethod,
    classic_quantile,
    harrell_davis_quantile,
    kge,
    kge_ts,
    mse,
    mse_ts,
    nse,
    nse_log,
    nse_log_ts,
    nse_ts,
)
from .errors import (
    GeoframeStatsError,
    InsufficientData,
    LengthMismatch,
    TimestampMismatch,
    UnsupportedMethod,
)
from .pipeline import PipelineConfig, ValidationPipeline
from .timeseries import find_outliers
from .validation import ValidationConfig, check_aligned, check_pair

__all__ = [
    "GOFMetric",
    "OutlierConfig",
    "OutlierDetector",
    "OutlierMethod",
    "QuantileMethod",
    "classic_quantile",
    "harrell_davis_quantile",
    "kge",
    "kge_ts",
    "mse",
    "mse_ts",
    "nse",
    "nse_log",
    "nse_log_ts",
    "nse_ts",
    "GeoframeStatsError",
    "InsufficientData",
    "LengthMismatch",
    "TimestampMismatch",
    "UnsupportedMethod",
    "PipelineConfig",
    "ValidationPipeline",
    "find_outliers",
    "ValidationConfig",
    "check_aligned",
    "check_pair",
]
