"""Data models for fantasy analytics."""

from .stats import StatCategory, PlayerGameStatLine, CANONICAL_ORDER
from .player import Player, Position
from .scoring_config import ScoringConfiguration, DEFAULT_MULTIPLIERS, SYSTEM_OWNER
from .catalog import ScoringConfigCatalog
from .schedule import ScheduledGame, games_on
from .results import (
    FantasyPointResult,
    RankingEntry,
    Ranking,
    ConsistencyResult,
    InsufficientSample,
    HotPlayerResult,
    HotStatus,
    TrendDirection,
    TradeProposal,
    TradeAnalysis,
    TradeRecommendation,
    WaiverRecommendation,
)

__all__ = [
    "StatCategory", "PlayerGameStatLine", "CANONICAL_ORDER",
    "Player", "Position",
    "ScoringConfiguration", "DEFAULT_MULTIPLIERS", "SYSTEM_OWNER",
    "ScoringConfigCatalog",
    "ScheduledGame", "games_on",
    "FantasyPointResult", "RankingEntry", "Ranking",
    "ConsistencyResult", "InsufficientSample",
    "HotPlayerResult", "HotStatus", "TrendDirection",
    "TradeProposal", "TradeAnalysis", "TradeRecommendation",
    "WaiverRecommendation",
]
