"""Consistency grading from fantasy point variability."""

from typing import Dict, List, Mapping, Optional, Sequence, Union
import logging

import numpy as np

from ..config.analytics_config import CONSISTENCY_CONFIG, ConsistencyConfig
from ..models.results import ConsistencyResult, InsufficientSample
from .parallel import fan_out

logger = logging.getLogger(__name__)

ConsistencyOutcome = Union[ConsistencyResult, InsufficientSample]


def coefficient_of_variation(values: Sequence[float]) -> Optional[float]:
    """
    Population standard deviation divided by mean.

    Returns None when fewer than two values are given or the mean is not
    strictly positive.
    """
    if len(values) < 2:
        return None

    arr = np.asarray(values, dtype=float)
    mean = float(np.mean(arr))
    if mean <= 0:
        return None

    return _std(arr) / mean


def _std(arr: np.ndarray) -> float:
    """Population standard deviation; exactly zero for a constant sample."""
    if np.all(arr == arr[0]):
        return 0.0
    return float(np.std(arr))


def grade_for(cv: float, config: ConsistencyConfig = CONSISTENCY_CONFIG) -> str:
    """Map a coefficient of variation to its letter grade (lower CV is better)."""
    if cv < 0 or np.isnan(cv):
        raise ValueError(f"Coefficient of variation must be non-negative, got {cv}")

    for grade, max_cv in config.GRADE_BANDS:
        if cv <= max_cv:
            return grade
    return config.GRADE_BANDS[-1][0]


class ConsistencyAnalyzer:
    """Grades players by how steady their fantasy output is over a window."""

    def __init__(self, config: ConsistencyConfig = CONSISTENCY_CONFIG,
                 max_workers: Optional[int] = None):
        self.config = config
        self.max_workers = max_workers

    def analyze(self, player_id: str, series: Sequence[float], window: int) -> ConsistencyOutcome:
        """
        Grade the last ``window`` games of a chronological series.

        Args:
            player_id: Player being graded
            series: Fantasy points per game, oldest first
            window: Number of trailing games to use (at least 1)

        Returns:
            ConsistencyResult, or InsufficientSample when fewer than two
            games are available or the mean is not positive
        """
        if window < 1:
            raise ValueError(f"window must be at least 1, got {window}")

        sample = list(series)[-window:]

        if len(sample) < self.config.MIN_SAMPLE:
            return InsufficientSample(
                player_id=player_id,
                games_counted=len(sample),
                reason=f"need at least {self.config.MIN_SAMPLE} games, have {len(sample)}",
            )

        arr = np.asarray(sample, dtype=float)
        mean = float(np.mean(arr))
        if mean <= 0:
            return InsufficientSample(
                player_id=player_id,
                games_counted=len(sample),
                reason=f"mean fantasy points is {mean:g}",
            )

        std_dev = _std(arr)
        cv = std_dev / mean
        return ConsistencyResult(
            player_id=player_id,
            grade=grade_for(cv, self.config),
            coefficient_of_variation=cv,
            games_counted=len(sample),
            mean=mean,
            std_dev=std_dev,
        )

    def analyze_many(self, series_by_player: Mapping[str, Sequence[float]],
                     window: int) -> List[ConsistencyOutcome]:
        """Grade several players; results ordered by player id."""
        player_ids = sorted(series_by_player)
        return fan_out(
            lambda pid: self.analyze(pid, series_by_player[pid], window),
            player_ids,
            max_workers=self.max_workers,
        )

    def grades(self, series_by_player: Mapping[str, Sequence[float]],
               window: int) -> Dict[str, Optional[str]]:
        """Player id -> grade (None for insufficient samples)."""
        return {r.player_id: r.grade for r in self.analyze_many(series_by_player, window)}


def analyze_consistency(player_id: str, series: Sequence[float], window: int,
                        config: ConsistencyConfig = CONSISTENCY_CONFIG) -> ConsistencyOutcome:
    """Convenience wrapper around :meth:`ConsistencyAnalyzer.analyze`."""
    return ConsistencyAnalyzer(config).analyze(player_id, series, window)
