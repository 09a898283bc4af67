"""Batch scoring of observed/simulated tables."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Union

import numpy as np
import pandas as pd

from .analysis.gof import GOFMetric, score
from .data.models import PairScore, scores_to_frame
from .errors import GeoframeStatsError
from .validation import ValidationConfig, check_aligned, check_pair

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    metrics: Sequence[Union[str, GOFMetric]] = (GOFMetric.KGE, GOFMetric.NSE)
    kge_a: float = 1.0
    kge_b: float = 1.0
    kge_g: float = 1.0

    def __post_init__(self) -> None:
        # repeated metrics collapse to one, keeping first-seen order
        self.metrics = tuple(dict.fromkeys(GOFMetric(m) for m in self.metrics))


class ValidationPipeline:
    """Scores every station column shared by an observed and a simulated table.

    A pair that fails validation, or whose values cannot be read as floats,
    gets a NaN score and an error message; the remaining pairs are still
    scored.
    """

    def __init__(self, config: PipelineConfig | None = None) -> None:
        self.config = config or PipelineConfig()

    def run(self, observed: pd.DataFrame, simulated: pd.DataFrame) -> List[PairScore]:
        columns = [c for c in observed.columns if c in simulated.columns]
        skipped = [c for c in observed.columns if c not in simulated.columns]
        if skipped:
            logger.warning("No simulated series for columns: %s", ", ".join(map(str, skipped)))

        results: List[PairScore] = []
        for column in columns:
            results.extend(self.score_pair(column, observed[column], simulated[column]))
        return results

    def score_pair(self, column: object, observed: pd.Series, simulated: pd.Series) -> List[PairScore]:
        validation = self.config.validation
        try:
            obs, sim = check_aligned(observed, simulated)
            n_valid = check_pair(
                obs, sim, no_value=validation.no_value, min_valid=validation.min_valid
            ).n_valid
        except (GeoframeStatsError, ValueError, TypeError) as exc:
            logger.warning("Skipping %s: %s", column, exc)
            return [
                PairScore(column, metric.value, np.nan, 0, error=str(exc))
                for metric in self.config.metrics
            ]

        return [
            PairScore(
                column,
                metric.value,
                score(
                    metric,
                    obs,
                    sim,
                    a=self.config.kge_a,
                    b=self.config.kge_b,
                    g=self.config.kge_g,
                    no_value=validation.no_value,
                    min_valid=validation.min_valid,
                ),
                n_valid,
            )
            for metric in self.config.metrics
        ]

    def run_frame(self, observed: pd.DataFrame, simulated: pd.DataFrame) -> pd.DataFrame:
        """Same as :meth:`run`, pivoted to a columns x metrics table."""
        return scores_to_frame(self.run(observed, simulated))
