"""Analytics engines: ranking, consistency, hot players, trades, waivers."""

from .ranking import RankingEngine, RankingMetric, rank_players, group_by_player, series_by_player
from .consistency import ConsistencyAnalyzer, analyze_consistency, coefficient_of_variation, grade_for
from .hot import HotPlayerDetector, detect_hot_player, trend_direction
from .trade import TradeValueAnalyzer, evaluate_trade
from .waiver import WaiverRecommendationEngine, replacement_level, league_average_rating, waiver_reasoning
from .parallel import fan_out

__all__ = [
    'RankingEngine', 'RankingMetric', 'rank_players', 'group_by_player', 'series_by_player',
    'ConsistencyAnalyzer', 'analyze_consistency', 'coefficient_of_variation', 'grade_for',
    'HotPlayerDetector', 'detect_hot_player', 'trend_direction',
    'TradeValueAnalyzer', 'evaluate_trade',
    'WaiverRecommendationEngine', 'replacement_level', 'league_average_rating', 'waiver_reasoning',
    'fan_out',
]
