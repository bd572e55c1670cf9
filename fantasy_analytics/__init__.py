"""Fantasy basketball analytics core.

Scoring, rankings, consistency grades, hot-player detection, trade
valuation and waiver recommendations over per-game box scores.
"""

from .errors import AnalyticsError, InvalidConfiguration, InvalidTradeProposal, NoGamesOnDate, DataLoadError
from .models import (
    Player, Position, StatCategory, PlayerGameStatLine,
    ScoringConfiguration, ScoringConfigCatalog, ScheduledGame, TradeProposal,
)
from .scoring import fantasy_points, score_game
from .analytics import (
    RankingEngine, RankingMetric, ConsistencyAnalyzer, HotPlayerDetector,
    TradeValueAnalyzer, WaiverRecommendationEngine, evaluate_trade,
)
from .service import AnalyticsService

__version__ = "0.1.0"

__all__ = [
    'AnalyticsError', 'InvalidConfiguration', 'InvalidTradeProposal', 'NoGamesOnDate', 'DataLoadError',
    'Player', 'Position', 'StatCategory', 'PlayerGameStatLine',
    'ScoringConfiguration', 'ScoringConfigCatalog', 'ScheduledGame', 'TradeProposal',
    'fantasy_points', 'score_game',
    'RankingEngine', 'RankingMetric', 'ConsistencyAnalyzer', 'HotPlayerDetector',
    'TradeValueAnalyzer', 'WaiverRecommendationEngine', 'evaluate_trade',
    'AnalyticsService',
]
