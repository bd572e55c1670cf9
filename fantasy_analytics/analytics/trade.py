"""Trade valuation between two groups of players."""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple
import logging

from ..config.analytics_config import (
    CONSISTENCY_CONFIG, RANKING_CONFIG, TRADE_CONFIG,
    ConsistencyConfig, TradeConfig,
)
from ..errors import InvalidTradeProposal
from ..models.results import TradeAnalysis, TradeProposal, TradeRecommendation
from ..models.scoring_config import ScoringConfiguration
from ..models.stats import PlayerGameStatLine
from .consistency import ConsistencyAnalyzer
from .ranking import RankingEngine, RankingMetric, series_by_player

logger = logging.getLogger(__name__)


class TradeValueAnalyzer:
    """Values both sides of a trade and labels who comes out ahead.

    Side values are sums of per-player ranking values, optionally scaled
    by a consistency grade weight. ``net_value`` is side B minus side A.
    """

    def __init__(self, config: TradeConfig = TRADE_CONFIG):
        self.config = config

    def validate(self, proposal: TradeProposal) -> None:
        """Raise InvalidTradeProposal for empty or overlapping sides."""
        if not proposal.side_a or not proposal.side_b:
            raise InvalidTradeProposal("Both sides of a trade must include at least one player")

        overlap = proposal.side_a & proposal.side_b
        if overlap:
            raise InvalidTradeProposal(f"Players appear on both sides: {sorted(overlap)}")

    def player_value(self, player_id: str, values: Mapping[str, float],
                     grades: Optional[Mapping[str, Optional[str]]] = None) -> float:
        value = values.get(player_id)
        if value is None:
            raise InvalidTradeProposal(f"Player {player_id} has no computable value")

        if grades is None:
            return value
        return value * self.config.weight_for(grades.get(player_id))

    def side_value(self, player_ids: Iterable[str], values: Mapping[str, float],
                   grades: Optional[Mapping[str, Optional[str]]] = None) -> Tuple[float, Dict[str, float]]:
        """Sum of player values in player id order."""
        breakdown = {}
        total = 0.0
        for pid in sorted(player_ids):
            breakdown[pid] = self.player_value(pid, values, grades)
            total += breakdown[pid]
        return total, breakdown

    def recommend(self, side_a_value: float, side_b_value: float) -> TradeRecommendation:
        """Label a trade using a tolerance relative to the larger side."""
        net = side_b_value - side_a_value
        larger = max(abs(side_a_value), abs(side_b_value))

        if abs(net) <= self.config.FAIR_TOLERANCE * larger:
            return TradeRecommendation.FAIR
        return TradeRecommendation.FAVORS_A if net < 0 else TradeRecommendation.FAVORS_B

    def analyze(self, proposal: TradeProposal, values: Mapping[str, float],
                grades: Optional[Mapping[str, Optional[str]]] = None,
                replacement_value: Optional[float] = None) -> TradeAnalysis:
        """
        Value a trade proposal.

        Args:
            proposal: The two sides
            values: Current ranking value per player id
            grades: Consistency grade per player id; enables grade weighting
            replacement_value: Waiver replacement level, quoted in the
                reasoning when the sides differ in size (not added to net)

        Returns:
            TradeAnalysis

        Raises:
            InvalidTradeProposal: empty/overlapping sides or a player without value
        """
        self.validate(proposal)

        value_a, breakdown_a = self.side_value(proposal.side_a, values, grades)
        value_b, breakdown_b = self.side_value(proposal.side_b, values, grades)

        net = value_b - value_a
        recommendation = self.recommend(value_a, value_b)

        larger = max(abs(value_a), abs(value_b))
        confidence = min(self.config.MAX_CONFIDENCE, abs(net) / larger) if larger > 0 else 0.0

        player_values = {**breakdown_a, **breakdown_b}
        reasoning = self._reasoning(value_a, value_b, net, recommendation, breakdown_a, breakdown_b,
                                    grades, replacement_value)

        logger.debug(f"Trade A={value_a:.2f} B={value_b:.2f} net={net:.2f} -> {recommendation.value}")
        return TradeAnalysis(
            side_a_value=value_a,
            side_b_value=value_b,
            net_value=net,
            recommendation=recommendation,
            confidence=confidence,
            player_values=player_values,
            reasoning=tuple(reasoning),
        )

    def _reasoning(self, value_a: float, value_b: float, net: float,
                   recommendation: TradeRecommendation,
                   breakdown_a: Mapping[str, float], breakdown_b: Mapping[str, float],
                   grades: Optional[Mapping[str, Optional[str]]],
                   replacement_value: Optional[float] = None) -> List[str]:
        lines = []

        if recommendation == TradeRecommendation.FAIR:
            lines.append(f"This trade is relatively even with a net value of {net:+.1f} points.")
        elif recommendation == TradeRecommendation.FAVORS_A:
            lines.append(f"Side A's players carry {-net:.1f} more points of value.")
        else:
            lines.append(f"Side B's players carry {net:.1f} more points of value.")

        lines.append(f"Side A players have a combined value of {value_a:.1f} points.")
        lines.append(f"Side B players have a combined value of {value_b:.1f} points.")

        slot_difference = len(breakdown_a) - len(breakdown_b)
        if slot_difference:
            fewer = "B" if slot_difference > 0 else "A"
            lines.append(
                f"Side {fewer} sends {abs(slot_difference)} fewer player(s); "
                f"the receiving roster needs that many open slots."
            )
            if replacement_value is not None:
                lines.append(
                    f"Each freed roster slot is worth about {replacement_value:.1f} points "
                    f"from the waiver wire."
                )

        if grades is not None:
            graded = sorted(
                (pid, grades.get(pid)) for pid in list(breakdown_a) + list(breakdown_b)
                if grades.get(pid) is not None
            )
            if graded:
                lines.append(
                    "Consistency grades: " + ", ".join(f"{pid} ({grade})" for pid, grade in graded) + "."
                )

        return lines


def evaluate_trade(proposal: TradeProposal, stat_lines: Iterable[PlayerGameStatLine],
                   scoring: ScoringConfiguration,
                   metric: RankingMetric = RankingMetric.WINDOW_AVERAGE,
                   window: Optional[int] = None,
                   weight_by_consistency: bool = False,
                   trade_config: TradeConfig = TRADE_CONFIG,
                   consistency_config: ConsistencyConfig = CONSISTENCY_CONFIG,
                   replacement_value: Optional[float] = None) -> TradeAnalysis:
    """
    Value a proposal straight from stat lines.

    Player values come from the ranking engine; grades, when enabled,
    come from the consistency analyzer over ``TradeConfig.CONSISTENCY_WINDOW``.
    """
    analyzer = TradeValueAnalyzer(trade_config)
    analyzer.validate(proposal)

    stat_lines = list(stat_lines)
    player_ids = proposal.player_ids
    if window is None:
        window = RANKING_CONFIG.DEFAULT_WINDOW
    if window < 1:
        raise ValueError(f"window must be at least 1, got {window}")

    ranking = RankingEngine().rank(player_ids, stat_lines, scoring, metric=metric, window=window)
    if ranking.insufficient_data:
        raise InvalidTradeProposal(
            f"No games recorded for: {', '.join(ranking.insufficient_data)}"
        )

    grades = None
    if weight_by_consistency:
        series = series_by_player(player_ids, stat_lines, scoring)
        grades = ConsistencyAnalyzer(consistency_config).grades(series, trade_config.CONSISTENCY_WINDOW)

    return analyzer.analyze(proposal, ranking.as_values(), grades, replacement_value)
