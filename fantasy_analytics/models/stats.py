"""Stat categories and per-game box score lines."""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Mapping, Optional


class StatCategory(Enum):
    """Fantasy scoring categories.

    Declaration order is the canonical order used for every summation.
    """

    POINTS = "points"
    REBOUNDS = "rebounds"
    ASSISTS = "assists"
    STEALS = "steals"
    BLOCKS = "blocks"
    THREES = "threes"
    TURNOVERS = "turnovers"

    @classmethod
    def parse(cls, name) -> "StatCategory":
        """Resolve a category from its value or a common alias."""
        if isinstance(name, cls):
            return name

        key = str(name).strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            pass

        if key in CATEGORY_ALIASES:
            return CATEGORY_ALIASES[key]

        raise ValueError(f"Unknown stat category: {name!r}")


CANONICAL_ORDER = tuple(StatCategory)

CATEGORY_ALIASES: Dict[str, StatCategory] = {
    "pts": StatCategory.POINTS,
    "reb": StatCategory.REBOUNDS,
    "rebs": StatCategory.REBOUNDS,
    "ast": StatCategory.ASSISTS,
    "stl": StatCategory.STEALS,
    "blk": StatCategory.BLOCKS,
    "3pm": StatCategory.THREES,
    "three_pointers": StatCategory.THREES,
    "three_pointers_made": StatCategory.THREES,
    "threepointersmade": StatCategory.THREES,
    "threepointers": StatCategory.THREES,
    "tov": StatCategory.TURNOVERS,
    "to": StatCategory.TURNOVERS,
}


def normalize_stats(stats: Mapping) -> Dict[StatCategory, float]:
    """Map raw category keys to canonical categories, filling gaps with zero.

    Raises:
        ValueError: for unknown categories or negative / non-finite counts
    """
    normalized = {category: 0.0 for category in CANONICAL_ORDER}
    for name, value in stats.items():
        category = StatCategory.parse(name)
        count = float(value)
        if not math.isfinite(count) or count < 0:
            raise ValueError(f"Stat {category.value} must be a non-negative number, got {value!r}")
        normalized[category] = count
    return normalized


@dataclass(frozen=True)
class PlayerGameStatLine:
    """One player's box score for one game. Keyed by (player_id, game_id)."""

    player_id: str
    game_id: str
    date: date
    opponent_team: Optional[str]
    stats: Dict[StatCategory, float] = field(default_factory=dict)

    def __post_init__(self):
        # Frozen: route normalized stats through object.__setattr__
        object.__setattr__(self, "stats", normalize_stats(self.stats))

    @property
    def key(self):
        return (self.player_id, self.game_id)

    def get(self, category) -> float:
        return self.stats[StatCategory.parse(category)]

    def sort_key(self):
        """Chronological order; game id breaks same-day ties."""
        return (self.date, self.game_id)

    def __hash__(self) -> int:
        return hash(self.key)
