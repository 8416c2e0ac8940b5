"""
Game state representation.
The reducer works on copies; the board keeps its order and length for the whole game.
"""

from dataclasses import dataclass
from copy import deepcopy
from typing import Any

from warboard.engine.missions import Mission


@dataclass
class Territory:
    """A named board cell with an owning color and a troop count."""
    name: str
    color: str  # Owning army color (e.g. "Blue")
    troops: int  # Never negative; positive when created

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "color": self.color,
            "troops": self.troops,
        }


@dataclass
class GameState:
    """Complete game state."""
    territories: list[Territory]  # The board; indices are stable
    player_color: str  # Color the missions are evaluated for
    mission: Mission | None = None
    combat_rule: str = "conquest"  # "conquest" or "attrition"
    turn_number: int = 1  # Incremented after every resolved attack
    # Player color once the mission is satisfied (None while the game is ongoing)
    winner: str | None = None

    def copy(self) -> "GameState":
        """Return a deep copy of this game state."""
        return deepcopy(self)

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self.territories)

    def to_dict(self) -> dict[str, Any]:
        return {
            "territories": [t.to_dict() for t in self.territories],
            "player_color": self.player_color,
            "mission": self.mission.to_dict() if self.mission else None,
            "combat_rule": self.combat_rule,
            "turn_number": self.turn_number,
            "winner": self.winner,
        }
