"""
Missions (win conditions) for the player.
A mission is a closed kind plus its parameters; evaluation is a read-only scan of the board.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from warboard.engine import CONQUEST_TERRITORY_TARGET

if TYPE_CHECKING:
    from warboard.engine.state import Territory


class MissionKind(str, Enum):
    ELIMINATE_COLOR = "eliminate_color"
    CONQUER_TERRITORIES = "conquer_territories"
    HOLD_COLOR_TERRITORY = "hold_color_territory"
    STRONGEST_ARMY = "strongest_army"
    CONTESTED_BOARD = "contested_board"


# Kinds that are meaningless without a target color
COLOR_MISSIONS = (MissionKind.ELIMINATE_COLOR, MissionKind.HOLD_COLOR_TERRITORY)


@dataclass(frozen=True)
class Mission:
    """A player's win condition. Immutable once assigned."""
    kind: MissionKind
    # ELIMINATE_COLOR / HOLD_COLOR_TERRITORY: the color the mission is about
    target_color: str | None = None
    # CONQUER_TERRITORIES: territories of the player color required
    count: int = CONQUEST_TERRITORY_TARGET

    def __post_init__(self):
        if self.kind in COLOR_MISSIONS and not self.target_color:
            raise ValueError(f"Mission {self.kind.value} requires a target color")
        if self.count <= 0:
            raise ValueError(f"Mission territory count must be positive, got {self.count}")

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"kind": self.kind.value}
        if self.target_color is not None:
            out["target_color"] = self.target_color
        if self.kind == MissionKind.CONQUER_TERRITORIES:
            out["count"] = self.count
        return out


def eliminate_color(color: str) -> Mission:
    return Mission(MissionKind.ELIMINATE_COLOR, target_color=color)


def conquer_territories(count: int = CONQUEST_TERRITORY_TARGET) -> Mission:
    return Mission(MissionKind.CONQUER_TERRITORIES, count=count)


def hold_color_territory(color: str) -> Mission:
    return Mission(MissionKind.HOLD_COLOR_TERRITORY, target_color=color)


def strongest_army() -> Mission:
    return Mission(MissionKind.STRONGEST_ARMY)


def contested_board() -> Mission:
    return Mission(MissionKind.CONTESTED_BOARD)


def troops_by_color(territories: list["Territory"]) -> dict[str, int]:
    """Total troops per distinct color, in board order of first appearance."""
    totals: dict[str, int] = {}
    for territory in territories:
        totals[territory.color] = totals.get(territory.color, 0) + territory.troops
    return totals


def evaluate_mission(
    mission: Mission,
    territories: list["Territory"],
    player_color: str,
) -> bool:
    """
    Return True if the mission is satisfied on this board.

    Pure: reads the territories and never mutates them, so repeated calls on
    an unchanged board always agree.
    """
    kind = mission.kind

    if kind == MissionKind.ELIMINATE_COLOR:
        return all(t.color != mission.target_color for t in territories)

    if kind == MissionKind.CONQUER_TERRITORIES:
        owned = sum(1 for t in territories if t.color == player_color)
        return owned >= mission.count

    if kind == MissionKind.HOLD_COLOR_TERRITORY:
        return any(t.color == mission.target_color for t in territories)

    if kind == MissionKind.STRONGEST_ARMY:
        totals = troops_by_color(territories)
        if player_color not in totals:
            return False
        mine = totals[player_color]
        return all(mine > total for color, total in totals.items() if color != player_color)

    if kind == MissionKind.CONTESTED_BOARD:
        return len({t.color for t in territories}) >= 2

    raise ValueError(f"Unknown mission kind: {kind}")


def describe_mission(mission: Mission) -> str:
    """Human-readable mission text for the console."""
    kind = mission.kind
    if kind == MissionKind.ELIMINATE_COLOR:
        return f"Destroy the {mission.target_color} army."
    if kind == MissionKind.CONQUER_TERRITORIES:
        return f"Conquer {mission.count} territories."
    if kind == MissionKind.HOLD_COLOR_TERRITORY:
        return f"Hold at least one {mission.target_color} territory."
    if kind == MissionKind.STRONGEST_ARMY:
        return "Command the largest army on the board."
    if kind == MissionKind.CONTESTED_BOARD:
        return "Keep the board contested by at least two armies."
    raise ValueError(f"Unknown mission kind: {kind}")


def draw_mission(
    territories: list["Territory"],
    player_color: str,
    rng: random.Random | None = None,
) -> Mission:
    """
    Draw a random mission for the player.

    Color-targeted missions pick among the opposing colors on the board.
    Only missions that are not already satisfied on this board are offered;
    with none left the territory-count mission is returned.
    """
    rng = rng or random.Random()
    opponents = sorted({t.color for t in territories if t.color != player_color})
    if not opponents:
        return conquer_territories()

    candidates = [
        eliminate_color(rng.choice(opponents)),
        conquer_territories(),
        strongest_army(),
    ]
    open_missions = [
        m for m in candidates
        if not evaluate_mission(m, territories, player_color)
    ]
    if not open_missions:
        return conquer_territories()
    return rng.choice(open_missions)
