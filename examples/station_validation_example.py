"""Example: score a simulated discharge series and screen it for outliers.

This example demonstrates how to:
1. Compute KGE, NSE and MSE for one observed/simulated pair
2. Score every station of two tables without aborting on bad pairs
3. Compare the six outlier fence methods on the same series

Run with:
    python examples/station_validation_example.py
"""
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
import pandas as pd

from geoframe_stats import (
    OutlierConfig,
    OutlierDetector,
    OutlierMethod,
    PipelineConfig,
    ValidationPipeline,
    kge_ts,
    mse_ts,
    nse_ts,
)


def make_tables(seed: int = 7):
    rng = np.random.default_rng(seed)
    dates = pd.date_range("2015-01-01", periods=365, freq="D")
    season = 20.0 + 15.0 * np.sin(np.linspace(0, 2 * np.pi, 365))
    observed = pd.DataFrame(
        {
            "967": season + rng.gamma(2.0, 2.0, 365),
            "1001": 0.5 * season + rng.gamma(2.0, 1.0, 365),
        },
        index=dates,
    )
    simulated = observed * 0.95 + rng.normal(0.0, 1.5, size=observed.shape)

    # gauge outages and a spike in the record
    observed.iloc[100:130, 0] = -9999.0
    observed.iloc[200, 1] = 400.0
    return observed, simulated


def main():
    observed, simulated = make_tables()

    print("=" * 70)
    print("SINGLE PAIR (station 967)")
    print("=" * 70)
    obs, sim = observed["967"], simulated["967"]
    print(f"KGE 2009: {kge_ts(obs, sim):.4f}")
    print(f"KGE 2012: {kge_ts(obs, sim, modified=True):.4f}")
    print(f"NSE:      {nse_ts(obs, sim):.4f}")
    print(f"MSE:      {mse_ts(obs, sim):.4f}")
    print()

    print("=" * 70)
    print("ALL STATIONS")
    print("=" * 70)
    pipeline = ValidationPipeline(PipelineConfig(metrics=["kge", "kge_modified", "nse", "mse"]))
    print(pipeline.run_frame(observed, simulated).round(4))
    print()

    series = observed["1001"]
    for method in OutlierMethod:
        detector = OutlierDetector(OutlierConfig(method=method, no_value=-9999.0))
        result = detector.analyze(series)[0]
        print(f"{method.value:<8} fences [{result.lower_fence:8.2f}, {result.upper_fence:8.2f}] "
              f"-> {result.n_outliers} outliers")


if __name__ == "__main__":
    main()
