"""Tunable constants for the analytics engines."""

from .analytics_config import (
    RankingConfig,
    ConsistencyConfig,
    HotPlayerConfig,
    TradeConfig,
    WaiverConfig,
    ParallelConfig,
    RANKING_CONFIG,
    CONSISTENCY_CONFIG,
    HOT_PLAYER_CONFIG,
    TRADE_CONFIG,
    WAIVER_CONFIG,
    PARALLEL_CONFIG,
)

__all__ = [
    'RankingConfig', 'ConsistencyConfig', 'HotPlayerConfig',
    'TradeConfig', 'WaiverConfig', 'ParallelConfig',
    'RANKING_CONFIG', 'CONSISTENCY_CONFIG', 'HOT_PLAYER_CONFIG',
    'TRADE_CONFIG', 'WAIVER_CONFIG', 'PARALLEL_CONFIG',
]
