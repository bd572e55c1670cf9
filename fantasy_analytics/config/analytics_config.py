"""Configuration constants for the analytics engines."""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass
class RankingConfig:
    """Ranking metric parameters."""
    DEFAULT_WINDOW: int = 14  # Games in a rolling window

    # Per-game projection blend
    RECENT_WEIGHT: float = 0.6  # Weight for recent-window average
    SEASON_WEIGHT: float = 0.4  # Weight for season average


@dataclass
class ConsistencyConfig:
    """Coefficient-of-variation grade bands, best grade first."""
    GRADE_BANDS: Tuple[Tuple[str, float], ...] = None
    MIN_SAMPLE: int = 2

    def __post_init__(self):
        if self.GRADE_BANDS is None:
            self.GRADE_BANDS = (
                ('A+', 0.10),
                ('A', 0.15),
                ('A-', 0.20),
                ('B+', 0.25),
                ('B', 0.30),
                ('B-', 0.35),
                ('C+', 0.40),
                ('C', 0.45),
                ('C-', 0.50),
                ('D', 0.60),
                ('F', float('inf')),
            )
        edges = [edge for _, edge in self.GRADE_BANDS]
        if edges != sorted(edges) or len(set(edges)) != len(edges):
            raise ValueError("GRADE_BANDS edges must be strictly increasing")

    @property
    def grades(self) -> Tuple[str, ...]:
        return tuple(grade for grade, _ in self.GRADE_BANDS)

    @property
    def top_grade(self) -> str:
        return self.GRADE_BANDS[0][0]


@dataclass
class HotPlayerConfig:
    """Hot-player detection thresholds."""
    HOT_MARGIN: float = 0.15  # Recent average must beat baseline by 15%
    MIN_RECENT_GAMES: int = 3  # Keeps single-game spikes out
    TREND_BAND: float = 0.05  # +/- band for STABLE trend direction
    DEFAULT_RECENT_WINDOW: int = 7
    DEFAULT_BASELINE_WINDOW: int = 30

    @property
    def threshold(self) -> float:
        return 1.0 + self.HOT_MARGIN


@dataclass
class TradeConfig:
    """Trade valuation parameters."""
    FAIR_TOLERANCE: float = 0.05  # Fraction of the larger side's value
    MAX_CONFIDENCE: float = 0.95
    CONSISTENCY_WINDOW: int = 14
    GRADE_WEIGHTS: Dict[str, float] = None

    def __post_init__(self):
        if self.GRADE_WEIGHTS is None:
            self.GRADE_WEIGHTS = {
                'A+': 1.10,
                'A': 1.08,
                'A-': 1.06,
                'B+': 1.04,
                'B': 1.02,
                'B-': 1.00,
                'C+': 0.98,
                'C': 0.96,
                'C-': 0.94,
                'D': 0.92,
                'F': 0.90,
            }

    def weight_for(self, grade) -> float:
        """Grade multiplier; ungraded players are neutral."""
        if grade is None:
            return 1.0
        return self.GRADE_WEIGHTS.get(grade, 1.0)


@dataclass
class WaiverConfig:
    """Waiver recommendation parameters."""
    MAX_RECOMMENDATIONS: int = 10
    DEFAULT_EXCLUDE_TOP_N: int = 50
    REPLACEMENT_POOL: int = 10  # Players averaged for replacement level

    # Matchup favorability clamp
    MIN_FAVORABILITY: float = 0.75
    MAX_FAVORABILITY: float = 1.25
    NEUTRAL_FAVORABILITY: float = 1.0

    # Reasoning bands: (exclusive lower bound, phrase), checked in order
    SCORING_TIERS: Tuple[Tuple[float, str], ...] = None
    HOT_TIERS: Tuple[Tuple[float, str], ...] = None
    COLD_THRESHOLD: float = -0.1
    MATCHUP_BANDS: Tuple[Tuple[float, str], ...] = None
    CHALLENGING_MATCHUP: float = 0.9

    def __post_init__(self):
        if self.SCORING_TIERS is None:
            self.SCORING_TIERS = (
                (20.0, 'High scoring potential'),
                (15.0, 'Solid fantasy production'),
                (10.0, 'Decent fantasy floor'),
            )
        if self.HOT_TIERS is None:
            self.HOT_TIERS = (
                (0.2, 'Currently on a hot streak'),
                (0.1, 'Playing above season average'),
            )
        if self.MATCHUP_BANDS is None:
            self.MATCHUP_BANDS = (
                (1.2, 'Excellent'),
                (1.05, 'Good'),
            )


@dataclass
class ParallelConfig:
    """Fan-out worker settings."""
    MAX_WORKERS: int = 8
    MIN_PARALLEL_ITEMS: int = 32  # Below this, run inline


# Default instances
RANKING_CONFIG = RankingConfig()
CONSISTENCY_CONFIG = ConsistencyConfig()
HOT_PLAYER_CONFIG = HotPlayerConfig()
TRADE_CONFIG = TradeConfig()
WAIVER_CONFIG = WaiverConfig()
PARALLEL_CONFIG = ParallelConfig()
