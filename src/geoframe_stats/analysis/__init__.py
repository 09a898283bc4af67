"""Quantile estimation, outlier detection and goodness-of-fit scores."""
from .gof import GOFMetric, kge, kge_ts, mse, mse_ts, nse, nse_log, nse_log_ts, nse_ts, score
from .outliers import OutlierConfig, OutlierDetector, OutlierMethod
from .quantiles import QuantileMethod, classic_quantile, harrell_davis_quantile

__all__ = [
    "GOFMetric",
    "kge",
    "kge_ts",
    "mse",
    "mse_ts",
    "nse",
    "nse_log",
    "nse_log_ts",
    "nse_ts",
    "score",
    "OutlierConfig",
    "OutlierDetector",
    "OutlierMethod",
    "QuantileMethod",
    "classic_quantile",
    "harrell_davis_quantile",
]
