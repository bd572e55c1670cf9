"""Ranking engine for fantasy point metrics."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import logging

import numpy as np

from ..config.analytics_config import RANKING_CONFIG, RankingConfig
from ..models.player import Player, Position
from ..models.results import Ranking, RankingEntry
from ..models.scoring_config import ScoringConfiguration
from ..models.stats import PlayerGameStatLine
from ..scoring.formula import fantasy_point_series
from .parallel import fan_out

logger = logging.getLogger(__name__)


class RankingMetric(Enum):
    """What a ranking orders players by."""
    TOTAL = "total"
    WINDOW_AVERAGE = "window_average"
    PROJECTION = "projection"

    @classmethod
    def parse(cls, value) -> "RankingMetric":
        if isinstance(value, cls):
            return value
        return cls(str(value).lower().replace('-', '_'))


@dataclass(frozen=True)
class _PlayerValue:
    player_id: str
    value: Optional[float]
    games_counted: int
    games_played: int


def group_by_player(stat_lines: Iterable[PlayerGameStatLine]) -> Dict[str, List[PlayerGameStatLine]]:
    """Bucket stat lines by player id."""
    grouped: Dict[str, List[PlayerGameStatLine]] = {}
    for line in stat_lines:
        grouped.setdefault(line.player_id, []).append(line)
    return grouped


def _mean(values: Sequence[float]) -> float:
    return float(np.mean(np.asarray(values, dtype=float)))


class RankingEngine:
    """Orders players by a fantasy point metric under one configuration."""

    def __init__(self, config: RankingConfig = RANKING_CONFIG, max_workers: Optional[int] = None):
        self.config = config
        self.max_workers = max_workers

    def metric_value(self, series: Sequence[float], metric: RankingMetric,
                     window: Optional[int] = None) -> Tuple[Optional[float], int]:
        """
        Compute a metric from a chronological fantasy point series.

        Args:
            series: Per-game fantasy points, oldest first
            metric: Metric to compute
            window: Trailing game count for windowed metrics (None = all games)

        Returns:
            Tuple of (value or None when there are no games, games counted)
        """
        if window is not None and window < 1:
            raise ValueError(f"window must be at least 1, got {window}")

        if not series:
            return None, 0

        recent = list(series[-window:]) if window else list(series)

        if metric == RankingMetric.TOTAL:
            return float(np.sum(np.asarray(series, dtype=float))), len(series)

        if metric == RankingMetric.WINDOW_AVERAGE:
            return _mean(recent), len(recent)

        # PROJECTION: blend recent form with the season average
        season_avg = _mean(series)
        recent_avg = _mean(recent)
        total_weight = self.config.RECENT_WEIGHT + self.config.SEASON_WEIGHT
        projection = (recent_avg * self.config.RECENT_WEIGHT +
                      season_avg * self.config.SEASON_WEIGHT) / total_weight
        return projection, len(series)

    def _value_player(self, player_id: str, lines: Sequence[PlayerGameStatLine],
                      scoring: ScoringConfiguration, metric: RankingMetric,
                      window: Optional[int]) -> _PlayerValue:
        series = fantasy_point_series(lines, scoring)
        value, counted = self.metric_value(series, metric, window)
        return _PlayerValue(player_id, value, counted, len(series))

    def rank(self, players: Iterable, stat_lines: Iterable[PlayerGameStatLine],
             scoring: ScoringConfiguration,
             metric: RankingMetric = RankingMetric.WINDOW_AVERAGE,
             window: Optional[int] = None,
             position: Optional[Position] = None,
             limit: Optional[int] = None) -> Ranking:
        """
        Rank players descending by metric value.

        Ties fall back to games played (more first), then player id.
        Players with no games are left out of the entries and listed in
        ``insufficient_data``.

        Args:
            players: Player objects or player ids to rank
            stat_lines: Stat lines (any players; extra lines are ignored)
            scoring: Scoring configuration
            metric: Ranking metric
            window: Trailing game window for windowed metrics
            position: Only players eligible for this position
            limit: Maximum entries returned

        Returns:
            Ranking
        """
        scoring.validate()
        metric = RankingMetric.parse(metric)
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        player_ids = self._select_players(players, position)
        grouped = group_by_player(stat_lines)

        values = fan_out(
            lambda pid: self._value_player(pid, grouped.get(pid, []), scoring, metric, window),
            player_ids,
            max_workers=self.max_workers,
        )

        ranked = [v for v in values if v.value is not None]
        insufficient = sorted(v.player_id for v in values if v.value is None)

        ranked.sort(key=lambda v: (-v.value, -v.games_played, v.player_id))
        if limit is not None:
            ranked = ranked[:limit]

        entries = tuple(
            RankingEntry(v.player_id, v.value, v.games_counted, v.games_played) for v in ranked
        )

        logger.debug(
            f"Ranked {len(entries)} players by {metric.value} under {scoring.id} "
            f"({len(insufficient)} without games)"
        )
        return Ranking(entries=entries, insufficient_data=tuple(insufficient))

    def player_values(self, players: Iterable, stat_lines: Iterable[PlayerGameStatLine],
                      scoring: ScoringConfiguration,
                      metric: RankingMetric = RankingMetric.WINDOW_AVERAGE,
                      window: Optional[int] = None) -> Dict[str, float]:
        """Metric value per player id, for players with games."""
        return self.rank(players, stat_lines, scoring, metric, window).as_values()

    @staticmethod
    def _select_players(players: Iterable, position: Optional[Position]) -> List[str]:
        selected = set()
        for player in players:
            if isinstance(player, Player):
                if position is not None and not player.is_eligible_for(position):
                    continue
                selected.add(player.player_id)
            else:
                if position is not None:
                    raise ValueError("Position filter requires Player objects, not ids")
                selected.add(str(player))
        return sorted(selected)


def rank_players(players: Iterable, stat_lines: Iterable[PlayerGameStatLine],
                 scoring: ScoringConfiguration, **kwargs) -> Ranking:
    """Convenience wrapper around :meth:`RankingEngine.rank`."""
    return RankingEngine().rank(players, stat_lines, scoring, **kwargs)


def series_by_player(player_ids: Iterable[str], stat_lines: Iterable[PlayerGameStatLine],
                     scoring: ScoringConfiguration) -> Mapping[str, List[float]]:
    """Chronological fantasy point series for each requested player."""
    grouped = group_by_player(stat_lines)
    return {pid: fantasy_point_series(grouped.get(pid, []), scoring) for pid in sorted(set(player_ids))}
