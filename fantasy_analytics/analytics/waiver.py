"""Waiver wire recommendations for a game day."""

from dataclasses import replace
from datetime import date
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Tuple
import logging

import numpy as np

from ..config.analytics_config import WAIVER_CONFIG, WaiverConfig
from ..errors import NoGamesOnDate
from ..models.player import Player
from ..models.results import Ranking, WaiverRecommendation
from ..models.schedule import ScheduledGame, games_on, opponents_by_team
from ..models.scoring_config import ScoringConfiguration
from ..models.stats import PlayerGameStatLine
from .hot import HotPlayerDetector
from .ranking import RankingEngine, RankingMetric, series_by_player

logger = logging.getLogger(__name__)


def league_average_rating(defensive_ratings: Mapping[str, float]) -> Optional[float]:
    """Mean defensive rating, summed in team order."""
    if not defensive_ratings:
        return None
    ordered = [defensive_ratings[team] for team in sorted(defensive_ratings)]
    return float(np.mean(np.asarray(ordered, dtype=float)))


def replacement_level(ranking: Ranking, exclude_top_n: int,
                      pool_size: int = WAIVER_CONFIG.REPLACEMENT_POOL) -> float:
    """
    Average value of the best players left once the top N are taken.

    Returns 0.0 when nobody is left past the top N.
    """
    pool = [entry.value for entry in ranking.entries[exclude_top_n:exclude_top_n + pool_size]]
    if not pool:
        return 0.0
    return float(np.mean(np.asarray(pool, dtype=float)))


def waiver_reasoning(projected_points: float, hot_factor: Optional[float],
                     favorability: float, opponent: Optional[str],
                     config: WaiverConfig = WAIVER_CONFIG) -> Tuple[str, ...]:
    """Short phrases explaining a pickup: scoring tier, form, then matchup."""
    reasons = []

    for floor, phrase in config.SCORING_TIERS:
        if projected_points > floor:
            reasons.append(phrase)
            break

    if hot_factor is not None:
        for floor, phrase in config.HOT_TIERS:
            if hot_factor > floor:
                reasons.append(phrase)
                break
        else:
            if hot_factor < config.COLD_THRESHOLD:
                reasons.append('Recent performance below average')

    if opponent is not None:
        label = 'Neutral'
        for floor, band in config.MATCHUP_BANDS:
            if favorability > floor:
                label = band
                break
        else:
            if favorability < config.CHALLENGING_MATCHUP:
                label = 'Challenging'
        reasons.append(f"{label} matchup vs {opponent}")

    return tuple(reasons)


class WaiverRecommendationEngine:
    """Ranks available players for a date by matchup-adjusted projection."""

    def __init__(self, config: WaiverConfig = WAIVER_CONFIG,
                 ranking_engine: Optional[RankingEngine] = None,
                 hot_detector: Optional[HotPlayerDetector] = None):
        self.config = config
        self.ranking_engine = ranking_engine or RankingEngine()
        self.hot_detector = hot_detector or HotPlayerDetector()

    def matchup_favorability(self, opponent_rating: Optional[float],
                             league_average: Optional[float]) -> float:
        """
        Favorability factor for facing an opponent.

        Rises above 1.0 as the opponent's defensive rating falls below the
        league average, clamped to the configured band. Unknown ratings
        are neutral.
        """
        if opponent_rating is None or league_average is None or opponent_rating <= 0:
            return self.config.NEUTRAL_FAVORABILITY

        factor = league_average / opponent_rating
        return float(np.clip(factor, self.config.MIN_FAVORABILITY, self.config.MAX_FAVORABILITY))

    def recommend(self, target_date: date, players: Sequence[Player],
                  stat_lines: Iterable[PlayerGameStatLine],
                  scoring: ScoringConfiguration,
                  schedule: Iterable[ScheduledGame],
                  defensive_ratings: Mapping[str, float],
                  excluded: Iterable[str] = (),
                  is_available: Optional[Callable[[str], bool]] = None,
                  exclude_top_n: int = 0,
                  league_average: Optional[float] = None,
                  window: Optional[int] = None,
                  limit: Optional[int] = None) -> List[WaiverRecommendation]:
        """
        Recommend pickups for ``target_date``.

        Args:
            target_date: Game day
            players: Player pool with teams
            stat_lines: Historical stat lines used for projections
            scoring: Scoring configuration
            schedule: League schedule (any dates)
            defensive_ratings: Team -> defensive rating
            excluded: Player ids never recommended (owned, user-excluded)
            is_available: Ownership predicate from the roster source
            exclude_top_n: Also drop the top N players by current value
            league_average: Override for the league-average rating
            window: Recent window for projections
            limit: Maximum recommendations (defaults to config)

        Returns:
            Recommendations ordered by composite score, projected points,
            then player id. Empty when every candidate is excluded.

        Raises:
            NoGamesOnDate: when nobody plays on ``target_date``
        """
        if window is None:
            window = self.ranking_engine.config.DEFAULT_WINDOW
        if window < 1:
            raise ValueError(f"window must be at least 1, got {window}")
        if exclude_top_n < 0:
            raise ValueError(f"exclude_top_n must be non-negative, got {exclude_top_n}")

        day_games = games_on(schedule, target_date)
        if not day_games:
            raise NoGamesOnDate(target_date)

        matchups = opponents_by_team(day_games)
        stat_lines = list(stat_lines)
        limit = self.config.MAX_RECOMMENDATIONS if limit is None else limit

        blocked = set(excluded)
        if exclude_top_n > 0:
            current = self.ranking_engine.rank(players, stat_lines, scoring,
                                               metric=RankingMetric.WINDOW_AVERAGE, window=window)
            blocked.update(current.player_ids()[:exclude_top_n])

        candidates = [
            p for p in players
            if p.player_id not in blocked
            and (is_available is None or is_available(p.player_id))
            and p.team in matchups
        ]
        if not candidates:
            logger.info(f"No waiver candidates for {target_date}")
            return []

        projections = self.ranking_engine.rank(candidates, stat_lines, scoring,
                                               metric=RankingMetric.PROJECTION, window=window)
        if league_average is None:
            league_average = league_average_rating(defensive_ratings)

        teams = {p.player_id: p.team for p in candidates}
        series = series_by_player(projections.player_ids(), stat_lines, scoring)
        recommendations = []
        for entry in projections.entries:
            opponent = matchups[teams[entry.player_id]]
            favorability = self.matchup_favorability(defensive_ratings.get(opponent), league_average)
            hot_factor = self.hot_detector.detect_from_series(entry.player_id, series[entry.player_id]).hot_factor
            recommendations.append(WaiverRecommendation(
                player_id=entry.player_id,
                date=target_date,
                projected_points=entry.value,
                matchup_favorability=favorability,
                composite_score=entry.value * favorability,
                opponent_team=opponent,
                hot_factor=hot_factor,
                reasoning=waiver_reasoning(entry.value, hot_factor, favorability, opponent, self.config),
            ))

        recommendations.sort(key=lambda r: (-r.composite_score, -r.projected_points, r.player_id))
        ranked = [replace(r, rank=i + 1) for i, r in enumerate(recommendations[:limit])]

        logger.info(f"Generated {len(ranked)} waiver recommendations for {target_date} "
                    f"({len(day_games)} games, {len(candidates)} candidates)")
        return ranked
