"""Derived analytics results."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class FantasyPointResult:
    """Fantasy points for one (player, game, configuration)."""
    player_id: str
    game_id: str
    config_id: str
    value: float


@dataclass(frozen=True)
class RankingEntry:
    """One row of a ranking."""
    player_id: str
    value: float
    games_counted: int
    games_played: int

    def to_dict(self) -> Dict:
        return {
            "playerId": self.player_id,
            "value": self.value,
            "gamesCounted": self.games_counted,
        }


@dataclass(frozen=True)
class Ranking:
    """Ordered entries plus players left out for lack of games."""
    entries: Tuple[RankingEntry, ...]
    insufficient_data: Tuple[str, ...] = ()

    def value_for(self, player_id: str) -> Optional[float]:
        for entry in self.entries:
            if entry.player_id == player_id:
                return entry.value
        return None

    def player_ids(self) -> List[str]:
        return [entry.player_id for entry in self.entries]

    def as_values(self) -> Dict[str, float]:
        return {entry.player_id: entry.value for entry in self.entries}

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)


@dataclass(frozen=True)
class ConsistencyResult:
    player_id: str
    grade: str
    coefficient_of_variation: float
    games_counted: int
    mean: float
    std_dev: float

    def to_dict(self) -> Dict:
        return {
            "playerId": self.player_id,
            "grade": self.grade,
            "coefficientOfVariation": self.coefficient_of_variation,
        }


@dataclass(frozen=True)
class InsufficientSample:
    """Consistency could not be scored; never a numeric grade."""
    player_id: str
    games_counted: int
    reason: str

    grade = None

    def to_dict(self) -> Dict:
        return {
            "playerId": self.player_id,
            "insufficientSample": True,
            "gamesCounted": self.games_counted,
            "reason": self.reason,
        }


class HotStatus(Enum):
    HOT = "hot"
    NOT_HOT = "not_hot"
    NOT_EVALUABLE = "not_evaluable"


class TrendDirection(Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class HotPlayerResult:
    player_id: str
    recent_average: Optional[float]
    baseline_average: Optional[float]
    trend_ratio: Optional[float]
    is_hot: bool
    status: HotStatus
    recent_games: int = 0
    baseline_games: int = 0

    @property
    def delta(self) -> Optional[float]:
        if self.recent_average is None or self.baseline_average is None:
            return None
        return self.recent_average - self.baseline_average

    @property
    def hot_factor(self) -> Optional[float]:
        """Relative improvement over baseline (ratio - 1)."""
        if self.trend_ratio is None:
            return None
        return self.trend_ratio - 1.0

    @property
    def not_evaluable(self) -> bool:
        return self.status == HotStatus.NOT_EVALUABLE

    def to_dict(self) -> Dict:
        return {
            "playerId": self.player_id,
            "recentAverage": self.recent_average,
            "baselineAverage": self.baseline_average,
            "trendRatio": self.trend_ratio,
            "isHot": self.is_hot,
            "status": self.status.value,
        }


class TradeRecommendation(Enum):
    FAVORS_A = "favorsA"
    FAVORS_B = "favorsB"
    FAIR = "fair"

    def flipped(self) -> "TradeRecommendation":
        if self == TradeRecommendation.FAVORS_A:
            return TradeRecommendation.FAVORS_B
        if self == TradeRecommendation.FAVORS_B:
            return TradeRecommendation.FAVORS_A
        return self


@dataclass(frozen=True)
class TradeProposal:
    """Two sets of player ids valued under one scoring configuration."""
    side_a: FrozenSet[str]
    side_b: FrozenSet[str]
    config_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "side_a", frozenset(self.side_a))
        object.__setattr__(self, "side_b", frozenset(self.side_b))

    def swapped(self) -> "TradeProposal":
        return TradeProposal(self.side_b, self.side_a, self.config_id)

    @property
    def player_ids(self) -> List[str]:
        return sorted(self.side_a | self.side_b)


@dataclass(frozen=True)
class TradeAnalysis:
    side_a_value: float
    side_b_value: float
    net_value: float
    recommendation: TradeRecommendation
    confidence: float = 0.0
    player_values: Dict[str, float] = field(default_factory=dict, compare=False)
    reasoning: Tuple[str, ...] = field(default=(), compare=False)

    def to_dict(self) -> Dict:
        return {
            "sideAValue": self.side_a_value,
            "sideBValue": self.side_b_value,
            "netValue": self.net_value,
            "recommendation": self.recommendation.value,
            "confidence": self.confidence,
            "reasoning": list(self.reasoning),
        }


@dataclass(frozen=True)
class WaiverRecommendation:
    player_id: str
    date: date
    projected_points: float
    matchup_favorability: float
    composite_score: float
    opponent_team: Optional[str] = None
    rank: int = 0
    hot_factor: Optional[float] = None
    reasoning: Tuple[str, ...] = field(default=(), compare=False)

    def to_dict(self) -> Dict:
        return {
            "playerId": self.player_id,
            "date": self.date.isoformat(),
            "projectedPoints": self.projected_points,
            "matchupFavorability": self.matchup_favorability,
            "compositeScore": self.composite_score,
            "hotFactor": self.hot_factor,
            "opponent": self.opponent_team,
            "rank": self.rank,
            "reasoning": list(self.reasoning),
        }
