"""
Game events for console narration.
Events describe what happened while an action was applied.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]


# ===== Event Type Constants =====

# Combat events
ATTACK_DECLARED = "attack_declared"
DICE_ROLLED = "dice_rolled"
TROOPS_LOST = "troops_lost"
ATTACK_REPELLED = "attack_repelled"

# Territory events
TERRITORY_CONQUERED = "territory_conquered"

# Mission events
MISSION_CHECKED = "mission_checked"
VICTORY = "victory"


# ===== Event Factory Functions =====

def attack_declared(
    attacker_index: int,
    defender_index: int,
    attacker_name: str,
    defender_name: str,
    attacker_color: str,
    defender_color: str,
) -> GameEvent:
    return GameEvent(ATTACK_DECLARED, {
        "attacker_index": attacker_index,
        "defender_index": defender_index,
        "attacker_name": attacker_name,
        "defender_name": defender_name,
        "attacker_color": attacker_color,
        "defender_color": defender_color,
    })


def dice_rolled(attack_roll: int, defense_roll: int) -> GameEvent:
    return GameEvent(DICE_ROLLED, {
        "attack_roll": attack_roll,
        "defense_roll": defense_roll,
    })


def troops_lost(
    territory_index: int,
    territory_name: str,
    count: int,
    remaining: int,
    cause: str,  # "defeat", "transfer"
) -> GameEvent:
    return GameEvent(TROOPS_LOST, {
        "territory_index": territory_index,
        "territory_name": territory_name,
        "count": count,
        "remaining": remaining,
        "cause": cause,
    })


def attack_repelled(defender_index: int, defender_name: str, defender_color: str) -> GameEvent:
    return GameEvent(ATTACK_REPELLED, {
        "defender_index": defender_index,
        "defender_name": defender_name,
        "defender_color": defender_color,
    })


def territory_conquered(
    territory_index: int,
    territory_name: str,
    old_color: str,
    new_color: str,
    troops: int,
) -> GameEvent:
    """Emitted when a territory changes color; troops is the garrison moved in."""
    return GameEvent(TERRITORY_CONQUERED, {
        "territory_index": territory_index,
        "territory_name": territory_name,
        "old_color": old_color,
        "new_color": new_color,
        "troops": troops,
    })


def mission_checked(mission: dict[str, Any], description: str, satisfied: bool) -> GameEvent:
    return GameEvent(MISSION_CHECKED, {
        "mission": mission,
        "description": description,
        "satisfied": satisfied,
    })


def victory(winner: str, mission: dict[str, Any], turn_number: int) -> GameEvent:
    """
    Emitted when the player's mission is satisfied.

    Args:
        winner: The player color
        mission: The mission that was completed (Mission.to_dict())
        turn_number: Turn on which the mission was completed
    """
    return GameEvent(VICTORY, {
        "winner": winner,
        "mission": mission,
        "turn_number": turn_number,
    })
