"""
Query functions for the console.
These functions help the UI understand what actions are available
without mutating game state.
"""

from dataclasses import dataclass
from typing import Any

from warboard.engine.state import GameState
from warboard.engine.actions import Action
from warboard.engine.combat import COMBAT_RULES
from warboard.engine.missions import evaluate_mission, describe_mission, troops_by_color


@dataclass
class ValidationResult:
    """Result of action validation."""
    valid: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "error": self.error}


# ===== Action Validation =====

def validate_action(state: GameState, action: Action) -> ValidationResult:
    """
    Validate an action without applying it.
    Returns ValidationResult with valid=True or valid=False with error message.
    """
    if state.winner is not None:
        return ValidationResult(False, f"Game is over. {state.winner} has completed the mission.")

    if action.color != state.player_color:
        return ValidationResult(
            False,
            f"Not {action.color}'s turn. Player color: {state.player_color}"
        )

    if action.type == "attack":
        return _validate_attack(state, action)
    elif action.type == "check_mission":
        if state.mission is None:
            return ValidationResult(False, "No mission has been assigned")
        return ValidationResult(True)

    return ValidationResult(False, f"Unknown action type: {action.type}")


def _validate_attack(state: GameState, action: Action) -> ValidationResult:
    """Validate an attack action (indices, colors, troops). Dice rolls are checked by the reducer."""
    attacker_index = action.payload.get("attacker_index")
    defender_index = action.payload.get("defender_index")

    for label, index in (("attacker", attacker_index), ("defender", defender_index)):
        if not isinstance(index, int) or isinstance(index, bool) or not state.is_valid_index(index):
            return ValidationResult(False, f"Invalid {label} territory: {index}")

    if attacker_index == defender_index:
        return ValidationResult(False, "A territory cannot attack itself")

    attacker = state.territories[attacker_index]
    defender = state.territories[defender_index]

    if attacker.color == defender.color:
        return ValidationResult(
            False,
            f"Cannot attack {defender.name}: it belongs to the same army ({attacker.color})"
        )
    if attacker.troops <= 0:
        return ValidationResult(False, f"{attacker.name} has no troops to attack with")
    if state.combat_rule not in COMBAT_RULES:
        return ValidationResult(False, f"Unknown combat rule: {state.combat_rule}")

    return ValidationResult(True)


# ===== Query Functions =====

def get_attack_targets(state: GameState, attacker_index: int) -> list[int]:
    """Indices of territories the given territory may attack (other colors)."""
    if not state.is_valid_index(attacker_index):
        return []
    attacker = state.territories[attacker_index]
    if attacker.troops <= 0:
        return []
    return [
        i for i, t in enumerate(state.territories)
        if i != attacker_index and t.color != attacker.color
    ]


def get_attackers(state: GameState, color: str | None = None) -> list[int]:
    """Indices of territories with troops and at least one enemy to attack, optionally of one color."""
    return [
        i for i, t in enumerate(state.territories)
        if (color is None or t.color == color) and get_attack_targets(state, i)
    ]


def get_color_stats(state: GameState) -> dict[str, dict[str, int]]:
    """
    Per-color territory and troop counts.
    Returns {color: {"territories": n, "troops": n}} in board order.
    """
    stats: dict[str, dict[str, int]] = {}
    for color, total in troops_by_color(state.territories).items():
        stats[color] = {"territories": 0, "troops": total}
    for territory in state.territories:
        stats[territory.color]["territories"] += 1
    return stats


def get_mission_status(state: GameState) -> dict[str, Any] | None:
    """Mission description and whether it currently holds, or None without a mission."""
    if state.mission is None:
        return None
    return {
        "mission": state.mission.to_dict(),
        "description": describe_mission(state.mission),
        "satisfied": evaluate_mission(state.mission, state.territories, state.player_color),
    }


def get_game_summary(state: GameState) -> dict[str, Any]:
    """
    Get a summary of the current game state for display.
    """
    return {
        "turn_number": state.turn_number,
        "player_color": state.player_color,
        "combat_rule": state.combat_rule,
        "winner": state.winner,
        "territory_count": len(state.territories),
        "colors": get_color_stats(state),
        "mission": get_mission_status(state),
        "attackers": get_attackers(state, state.player_color),
    }
