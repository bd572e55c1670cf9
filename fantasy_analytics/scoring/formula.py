"""Fantasy point scoring formula."""

from typing import Iterable, List
import logging

import pandas as pd

from ..models.results import FantasyPointResult
from ..models.scoring_config import ScoringConfiguration
from ..models.stats import CANONICAL_ORDER, PlayerGameStatLine

logger = logging.getLogger(__name__)


def fantasy_points(stat_line: PlayerGameStatLine, config: ScoringConfiguration) -> float:
    """
    Weighted sum of a stat line under a scoring configuration.

    Categories are accumulated left to right in canonical order so the
    same inputs always produce the same float.

    Args:
        stat_line: Box score for one game
        config: Scoring configuration to apply

    Returns:
        Fantasy points (unrounded)

    Raises:
        InvalidConfiguration: if a multiplier is missing or non-finite
    """
    config.validate()

    total = 0.0
    for category in CANONICAL_ORDER:
        total += stat_line.stats[category] * config.multipliers[category]
    return total


def score_game(stat_line: PlayerGameStatLine, config: ScoringConfiguration) -> FantasyPointResult:
    """Score one game as a FantasyPointResult."""
    return FantasyPointResult(
        player_id=stat_line.player_id,
        game_id=stat_line.game_id,
        config_id=config.id,
        value=fantasy_points(stat_line, config),
    )


def chronological(stat_lines: Iterable[PlayerGameStatLine]) -> List[PlayerGameStatLine]:
    """Order stat lines by date, then game id."""
    return sorted(stat_lines, key=lambda line: line.sort_key())


def fantasy_point_series(stat_lines: Iterable[PlayerGameStatLine],
                         config: ScoringConfiguration) -> List[float]:
    """Per-game fantasy points, oldest game first."""
    config.validate()
    return [fantasy_points(line, config) for line in chronological(stat_lines)]


def score_frame(df: pd.DataFrame, config: ScoringConfiguration,
                column: str = 'fantasy_points') -> pd.DataFrame:
    """
    Add a fantasy point column to a frame of stat lines.

    Expects one column per category (``points``, ``rebounds``, ...).
    Missing category columns count as zero. Evaluates categories in the
    same order as :func:`fantasy_points`, so values match it exactly.
    """
    config.validate()

    missing = [c.value for c in CANONICAL_ORDER if c.value not in df.columns]
    if missing:
        logger.debug(f"Scoring frame without columns {missing}; treated as zero")

    result = df.copy()
    total = pd.Series(0.0, index=df.index)
    for category in CANONICAL_ORDER:
        if category.value not in df.columns:
            continue
        values = df[category.value].astype(float)
        if (values < 0).any() or values.isna().any():
            raise ValueError(f"Column {category.value} must hold non-negative counts")
        total = total + values * config.multipliers[category]

    result[column] = total
    return result
