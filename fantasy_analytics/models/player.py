"""Player model for fantasy analytics."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Position(Enum):
    """Basketball roster positions."""

    G = "G"
    F = "F"
    C = "C"
    G_F = "G_F"  # Guard/Forward
    F_C = "F_C"  # Forward/Center

    @classmethod
    def parse(cls, value: str) -> "Position":
        key = str(value).upper().strip().replace("-", "_").replace("/", "_")
        aliases = {
            "PG": cls.G,
            "SG": cls.G,
            "SF": cls.F,
            "PF": cls.F,
            "GF": cls.G_F,
            "FC": cls.F_C,
            "F_G": cls.G_F,
            "C_F": cls.F_C,
        }
        if key in aliases:
            return aliases[key]
        return cls(key)


# Hybrid positions count toward each of their base positions
_ELIGIBILITY = {
    Position.G: {Position.G},
    Position.F: {Position.F},
    Position.C: {Position.C},
    Position.G_F: {Position.G_F, Position.G, Position.F},
    Position.F_C: {Position.F_C, Position.F, Position.C},
}


@dataclass
class Player:
    """A rostered player. Identity is the player id."""

    player_id: str
    name: str
    team: str
    position: Optional[Position] = None

    def is_eligible_for(self, position: Position) -> bool:
        """Check if player qualifies for a position filter."""
        if self.position is None:
            return False
        return position in _ELIGIBILITY[self.position]

    def __hash__(self) -> int:
        return hash(self.player_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Player):
            return False
        return self.player_id == other.player_id

    def __repr__(self) -> str:
        pos = self.position.value if self.position else "-"
        return f"Player({self.name}, {pos}, {self.team})"
