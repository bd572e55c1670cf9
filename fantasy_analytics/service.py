"""Analytics service facade with memoized results."""

from datetime import date
from typing import Callable, Iterable, List, Mapping, Optional, Sequence
import hashlib
import logging

from .analytics.consistency import ConsistencyAnalyzer, ConsistencyOutcome
from .analytics.hot import HotPlayerDetector
from .analytics.ranking import RankingEngine, RankingMetric, group_by_player, series_by_player
from .analytics.trade import evaluate_trade
from .analytics.waiver import WaiverRecommendationEngine, replacement_level
from .cache.memo import SingleFlightMemo, canonical_key
from .config.analytics_config import (
    CONSISTENCY_CONFIG, HOT_PLAYER_CONFIG, RANKING_CONFIG, TRADE_CONFIG, WAIVER_CONFIG,
    ConsistencyConfig, HotPlayerConfig, RankingConfig, TradeConfig, WaiverConfig,
)
from .models.catalog import ScoringConfigCatalog
from .models.player import Player, Position
from .models.results import (
    FantasyPointResult, HotPlayerResult, Ranking, TradeAnalysis, TradeProposal, WaiverRecommendation,
)
from .models.schedule import ScheduledGame
from .models.scoring_config import ScoringConfiguration
from .models.stats import CANONICAL_ORDER, PlayerGameStatLine
from .scoring.formula import chronological, score_game

logger = logging.getLogger(__name__)


def data_fingerprint(players: Iterable[Player], stat_lines: Iterable[PlayerGameStatLine]) -> str:
    """Stable hash of the player pool and stat lines, independent of input order."""
    digest = hashlib.sha256()
    for player in sorted(players, key=lambda p: p.player_id):
        pos = player.position.value if player.position else ''
        digest.update(f"P|{player.player_id}|{player.team}|{pos}\n".encode('utf-8'))
    for line in sorted(stat_lines, key=lambda l: l.key):
        stats = ','.join(repr(line.stats[c]) for c in CANONICAL_ORDER)
        digest.update(
            f"S|{line.player_id}|{line.game_id}|{line.date.isoformat()}|{line.opponent_team}|{stats}\n".encode('utf-8')
        )
    return digest.hexdigest()[:16]


class AnalyticsService:
    """
    Entry point for a service layer.

    Holds an immutable snapshot of players and stat lines. Every result is
    memoized under a key built from the operation, its arguments, the
    scoring configuration fingerprint and the data fingerprint, so a
    cached value can never outlive its inputs.
    """

    def __init__(self, players: Iterable[Player], stat_lines: Iterable[PlayerGameStatLine],
                 catalog: Optional[ScoringConfigCatalog] = None,
                 memo: Optional[SingleFlightMemo] = None,
                 ranking_config: RankingConfig = RANKING_CONFIG,
                 consistency_config: ConsistencyConfig = CONSISTENCY_CONFIG,
                 hot_config: HotPlayerConfig = HOT_PLAYER_CONFIG,
                 trade_config: TradeConfig = TRADE_CONFIG,
                 waiver_config: WaiverConfig = WAIVER_CONFIG,
                 max_workers: Optional[int] = None):
        self.players = tuple(sorted(players, key=lambda p: p.player_id))
        self.stat_lines = tuple(chronological(stat_lines))
        self.catalog = catalog or ScoringConfigCatalog()
        self.memo = memo or SingleFlightMemo()

        self.ranking_engine = RankingEngine(ranking_config, max_workers=max_workers)
        self.consistency_analyzer = ConsistencyAnalyzer(consistency_config, max_workers=max_workers)
        self.hot_detector = HotPlayerDetector(hot_config, max_workers=max_workers)
        self.waiver_engine = WaiverRecommendationEngine(waiver_config, self.ranking_engine, self.hot_detector)
        self.ranking_config = ranking_config
        self.consistency_config = consistency_config
        self.trade_config = trade_config
        self.waiver_config = waiver_config

        self._players_by_id = {p.player_id: p for p in self.players}
        self._lines_by_player = group_by_player(self.stat_lines)
        self.fingerprint = data_fingerprint(self.players, self.stat_lines)

        logger.info(f"Analytics service ready: {len(self.players)} players, "
                    f"{len(self.stat_lines)} stat lines (data {self.fingerprint})")

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def resolve_scoring(self, owner_id: Optional[str] = None,
                        config_id: Optional[str] = None) -> ScoringConfiguration:
        """Concrete configuration for an owner (explicit id, default, fallback)."""
        if owner_id is None:
            return self.catalog.fallback
        return self.catalog.resolve(owner_id, config_id)

    def _memoized(self, operation: str, scoring: ScoringConfiguration, compute: Callable, *parts):
        scoring.validate()
        key = canonical_key(operation, self.fingerprint, scoring, *parts)
        return self.memo.get_or_compute(key, compute)

    def _player_ids(self, player_ids: Optional[Iterable[str]]) -> List[str]:
        if player_ids is None:
            return [p.player_id for p in self.players]
        return sorted(set(player_ids))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def fantasy_points(self, player_id: str, scoring: ScoringConfiguration) -> List[FantasyPointResult]:
        """Per-game fantasy points for one player, oldest first."""
        return list(self._memoized(
            'fantasy_points', scoring,
            lambda: tuple(score_game(line, scoring) for line in self._lines_by_player.get(player_id, [])),
            player_id,
        ))

    def rankings(self, scoring: ScoringConfiguration,
                 metric: RankingMetric = RankingMetric.WINDOW_AVERAGE,
                 window: Optional[int] = None,
                 position: Optional[Position] = None,
                 limit: Optional[int] = None) -> Ranking:
        metric = RankingMetric.parse(metric)
        return self._memoized(
            'rankings', scoring,
            lambda: self.ranking_engine.rank(self.players, self.stat_lines, scoring,
                                             metric=metric, window=window, position=position, limit=limit),
            metric, window, position, limit,
        )

    def consistency(self, scoring: ScoringConfiguration, window: int,
                    player_ids: Optional[Iterable[str]] = None) -> List[ConsistencyOutcome]:
        ids = self._player_ids(player_ids)
        return list(self._memoized(
            'consistency', scoring,
            lambda: tuple(self.consistency_analyzer.analyze_many(
                series_by_player(ids, self.stat_lines, scoring), window)),
            ids, window,
        ))

    def hot_players(self, scoring: ScoringConfiguration,
                    recent_window: Optional[int] = None,
                    baseline_window: Optional[int] = None,
                    hot_only: bool = True,
                    player_ids: Optional[Iterable[str]] = None) -> List[HotPlayerResult]:
        ids = self._player_ids(player_ids)
        return list(self._memoized(
            'hot_players', scoring,
            lambda: tuple(self.hot_detector.scan(
                series_by_player(ids, self.stat_lines, scoring),
                recent_window, baseline_window, hot_only)),
            ids, recent_window, baseline_window, hot_only,
        ))

    def analyze_trade(self, proposal: TradeProposal, scoring: ScoringConfiguration,
                      metric: RankingMetric = RankingMetric.WINDOW_AVERAGE,
                      window: Optional[int] = None,
                      weight_by_consistency: bool = False) -> TradeAnalysis:
        """Value a trade. Persisting the result is the caller's job."""
        metric = RankingMetric.parse(metric)

        def compute():
            replacement = None
            if len(proposal.side_a) != len(proposal.side_b):
                pool_window = self.ranking_config.DEFAULT_WINDOW if window is None else window
                pool = self.rankings(scoring, metric=metric, window=pool_window)
                replacement = replacement_level(pool, self.waiver_config.DEFAULT_EXCLUDE_TOP_N,
                                                self.waiver_config.REPLACEMENT_POOL)
            return evaluate_trade(proposal, self.stat_lines, scoring, metric=metric, window=window,
                                  weight_by_consistency=weight_by_consistency,
                                  trade_config=self.trade_config,
                                  consistency_config=self.consistency_config,
                                  replacement_value=replacement)

        return self._memoized(
            'trade', scoring, compute,
            proposal.side_a, proposal.side_b, metric, window, weight_by_consistency,
        )

    def waiver_recommendations(self, target_date: date, scoring: ScoringConfiguration,
                               schedule: Sequence[ScheduledGame],
                               defensive_ratings: Mapping[str, float],
                               excluded: Iterable[str] = (),
                               is_available: Optional[Callable[[str], bool]] = None,
                               exclude_top_n: int = 0,
                               window: Optional[int] = None,
                               limit: Optional[int] = None) -> List[WaiverRecommendation]:
        # Resolve the predicate up front so the memo key covers its answer
        available = frozenset(
            p.player_id for p in self.players
            if is_available is None or is_available(p.player_id)
        )
        excluded = frozenset(excluded)
        games = [(g.game_id, g.date, g.home_team, g.away_team) for g in schedule]

        return list(self._memoized(
            'waiver', scoring,
            lambda: tuple(self.waiver_engine.recommend(
                target_date, self.players, self.stat_lines, scoring, schedule, defensive_ratings,
                excluded=excluded, is_available=available.__contains__,
                exclude_top_n=exclude_top_n, window=window, limit=limit)),
            target_date, available, excluded, games,
            dict(defensive_ratings), exclude_top_n, window, limit,
        ))

    def player(self, player_id: str) -> Optional[Player]:
        return self._players_by_id.get(player_id)

    def clear_cache(self):
        """Drop memoized results."""
        self.memo.clear()
