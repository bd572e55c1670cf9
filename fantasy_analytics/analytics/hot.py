"""Hot-player detection from recent vs baseline scoring."""

from typing import List, Mapping, Optional, Sequence
import logging

import numpy as np

from ..config.analytics_config import HOT_PLAYER_CONFIG, HotPlayerConfig
from ..models.results import HotPlayerResult, HotStatus, TrendDirection
from .parallel import fan_out

logger = logging.getLogger(__name__)


def trend_direction(result: HotPlayerResult,
                    config: HotPlayerConfig = HOT_PLAYER_CONFIG) -> TrendDirection:
    """UP / DOWN outside a +/- band around the baseline, otherwise STABLE."""
    if result.hot_factor is None:
        return TrendDirection.STABLE
    if result.hot_factor > config.TREND_BAND:
        return TrendDirection.UP
    if result.hot_factor < -config.TREND_BAND:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


class HotPlayerDetector:
    """Flags players whose recent average clears their baseline by a margin."""

    def __init__(self, config: HotPlayerConfig = HOT_PLAYER_CONFIG,
                 max_workers: Optional[int] = None):
        self.config = config
        self.max_workers = max_workers

    def detect(self, player_id: str, recent: Sequence[float],
               baseline: Sequence[float]) -> HotPlayerResult:
        """
        Compare a recent window with a baseline window.

        Args:
            player_id: Player being evaluated
            recent: Fantasy points over the recent window
            baseline: Fantasy points over the baseline window

        Returns:
            HotPlayerResult; NOT_EVALUABLE when either window is empty or
            the baseline average is not positive
        """
        recent = list(recent)
        baseline = list(baseline)

        if not recent or not baseline:
            return HotPlayerResult(
                player_id=player_id,
                recent_average=float(np.mean(recent)) if recent else None,
                baseline_average=float(np.mean(baseline)) if baseline else None,
                trend_ratio=None,
                is_hot=False,
                status=HotStatus.NOT_EVALUABLE,
                recent_games=len(recent),
                baseline_games=len(baseline),
            )

        recent_avg = float(np.mean(np.asarray(recent, dtype=float)))
        baseline_avg = float(np.mean(np.asarray(baseline, dtype=float)))

        if baseline_avg <= 0:
            return HotPlayerResult(
                player_id=player_id,
                recent_average=recent_avg,
                baseline_average=baseline_avg,
                trend_ratio=None,
                is_hot=False,
                status=HotStatus.NOT_EVALUABLE,
                recent_games=len(recent),
                baseline_games=len(baseline),
            )

        ratio = recent_avg / baseline_avg
        is_hot = ratio > self.config.threshold and len(recent) >= self.config.MIN_RECENT_GAMES

        return HotPlayerResult(
            player_id=player_id,
            recent_average=recent_avg,
            baseline_average=baseline_avg,
            trend_ratio=ratio,
            is_hot=is_hot,
            status=HotStatus.HOT if is_hot else HotStatus.NOT_HOT,
            recent_games=len(recent),
            baseline_games=len(baseline),
        )

    def detect_from_series(self, player_id: str, series: Sequence[float],
                           recent_window: Optional[int] = None,
                           baseline_window: Optional[int] = None) -> HotPlayerResult:
        """
        Slice a chronological series into recent and baseline windows.

        The baseline is the last ``baseline_window`` games (season to date
        when None) and includes the recent games.
        """
        if recent_window is None:
            recent_window = self.config.DEFAULT_RECENT_WINDOW
        if recent_window < 1:
            raise ValueError(f"recent_window must be at least 1, got {recent_window}")
        if baseline_window is not None and baseline_window < recent_window:
            raise ValueError("baseline_window must be at least recent_window")

        series = list(series)
        recent = series[-recent_window:]
        baseline = series[-baseline_window:] if baseline_window else series
        return self.detect(player_id, recent, baseline)

    def scan(self, series_by_player: Mapping[str, Sequence[float]],
             recent_window: Optional[int] = None,
             baseline_window: Optional[int] = None,
             hot_only: bool = True) -> List[HotPlayerResult]:
        """
        Evaluate many players.

        Returns:
            Results sorted by trend ratio (desc), then player id; not
            evaluable players last
        """
        player_ids = sorted(series_by_player)
        results = fan_out(
            lambda pid: self.detect_from_series(pid, series_by_player[pid], recent_window, baseline_window),
            player_ids,
            max_workers=self.max_workers,
        )

        if hot_only:
            results = [r for r in results if r.is_hot]

        results.sort(key=lambda r: (r.trend_ratio is None, -(r.trend_ratio or 0.0), r.player_id))
        logger.debug(f"Scanned {len(player_ids)} players, {sum(r.is_hot for r in results)} hot")
        return results


def detect_hot_player(player_id: str, recent: Sequence[float], baseline: Sequence[float],
                      config: HotPlayerConfig = HOT_PLAYER_CONFIG) -> HotPlayerResult:
    """Convenience wrapper around :meth:`HotPlayerDetector.detect`."""
    return HotPlayerDetector(config).detect(player_id, recent, baseline)
