"""
Action definitions for the game.
Actions are immutable, deterministic instructions.
"""

from dataclasses import dataclass


@dataclass
class Action:
    """Base action class. All actions have a type, the acting color, and a payload."""
    type: str  # "attack" or "check_mission"
    color: str  # Army color performing the action
    payload: dict  # Action-specific data


def attack(
    color: str,
    attacker_index: int,
    defender_index: int,
    # "attack" -> roll, "defense" -> roll
    dice_rolls: dict[str, int],
) -> Action:
    """
    Attack one territory from another.

    dice_rolls must be provided (deterministic, no RNG in reducer); use
    utils.generate_attack_rolls to produce them.

    Example: attack("Blue", 0, 3, {"attack": 5, "defense": 2})
    """
    return Action(
        type="attack",
        color=color,
        payload={
            "attacker_index": attacker_index,
            "defender_index": defender_index,
            "dice_rolls": dice_rolls,
        },
    )


def check_mission(color: str) -> Action:
    """Check whether the player's mission has been completed."""
    return Action(
        type="check_mission",
        color=color,
        payload={},
    )
