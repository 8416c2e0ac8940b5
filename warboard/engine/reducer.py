"""
Main game reducer.
Applies actions to state, enforcing rules and producing new state.
Returns (new_state, events) where events describe what happened.
"""

from warboard.engine.state import GameState
from warboard.engine.actions import Action
from warboard.engine.combat import resolve_attack, validate_roll, COMBAT_RULES
from warboard.engine.missions import evaluate_mission, describe_mission
from warboard.engine.events import (
    GameEvent,
    attack_declared,
    dice_rolled,
    troops_lost,
    attack_repelled,
    territory_conquered,
    mission_checked,
    victory,
)


def apply_action(
    state: GameState,
    action: Action,
) -> tuple[GameState, list[GameEvent]]:
    """
    Apply a single action to the current state, returning new state and events.

    Validates:
    - Game is not already won
    - Action color matches the player color
    - Action-specific preconditions, before anything is mutated

    The input state is never modified; a rejected action raises ValueError
    and leaves the caller's board untouched.

    Args:
        state: Current game state
        action: Action to apply

    Returns:
        Tuple of (new_state, events) where events describe what happened
    """
    # Check if game is already won
    if state.winner is not None:
        raise ValueError(f"Game is over. {state.winner} has completed the mission.")

    if action.color != state.player_color:
        raise ValueError(
            f"Action color {action.color} does not match player color {state.player_color}")

    new_state = state.copy()
    events: list[GameEvent] = []

    if action.type == "attack":
        new_state, evts = _handle_attack(new_state, action)
        events.extend(evts)
        new_state, evts = _check_victory(new_state)
        events.extend(evts)
    elif action.type == "check_mission":
        new_state, evts = _handle_check_mission(new_state)
        events.extend(evts)
    else:
        raise ValueError(f"Unknown action type: {action.type}")

    return new_state, events


def _parse_index(value, label: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid {label} index: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {label} index: {value!r}")


def _handle_attack(
    state: GameState,
    action: Action,
) -> tuple[GameState, list[GameEvent]]:
    """
    Resolve one attack.

    Rejected (ValueError, nothing mutated):
    - attacker or defender index outside the board
    - attacker and defender are the same territory
    - attacker and defender share a color
    - attacker has no troops
    - missing or out-of-range dice rolls
    """
    events: list[GameEvent] = []
    payload = action.payload

    attacker_index = _parse_index(payload.get("attacker_index"), "attacker")
    defender_index = _parse_index(payload.get("defender_index"), "defender")

    if not state.is_valid_index(attacker_index) or not state.is_valid_index(defender_index):
        raise ValueError(
            f"Invalid territories: {attacker_index} -> {defender_index} "
            f"(valid indices are 0 to {len(state.territories) - 1})"
        )
    if attacker_index == defender_index:
        raise ValueError("A territory cannot attack itself")

    attacker = state.territories[attacker_index]
    defender = state.territories[defender_index]

    if attacker.color == defender.color:
        raise ValueError(
            f"Cannot attack {defender.name}: it belongs to the same army ({attacker.color})")
    if attacker.troops <= 0:
        raise ValueError(f"{attacker.name} has no troops to attack with")
    if state.combat_rule not in COMBAT_RULES:
        raise ValueError(f"Unknown combat rule: {state.combat_rule}")

    dice_rolls = payload.get("dice_rolls") or {}
    if "attack" not in dice_rolls or "defense" not in dice_rolls:
        raise ValueError("Attack requires both an attack and a defense roll")
    validate_roll(dice_rolls["attack"])
    validate_roll(dice_rolls["defense"])

    events.append(attack_declared(
        attacker_index,
        defender_index,
        attacker.name,
        defender.name,
        attacker.color,
        defender.color,
    ))
    events.append(dice_rolled(dice_rolls["attack"], dice_rolls["defense"]))

    result = resolve_attack(
        attacker,
        defender,
        dice_rolls["attack"],
        dice_rolls["defense"],
        rule=state.combat_rule,
    )

    if result.defender_losses and not result.conquered:
        events.append(troops_lost(
            defender_index, defender.name, result.defender_losses, defender.troops, "defeat"))

    if result.conquered:
        events.append(territory_conquered(
            defender_index,
            defender.name,
            result.old_defender_color,
            defender.color,
            result.troops_transferred,
        ))
        if result.attacker_losses:
            events.append(troops_lost(
                attacker_index, attacker.name, result.attacker_losses, attacker.troops, "transfer"))
    elif not result.attacker_won:
        if result.attacker_losses:
            events.append(troops_lost(
                attacker_index, attacker.name, result.attacker_losses, attacker.troops, "defeat"))
        events.append(attack_repelled(defender_index, defender.name, defender.color))

    state.turn_number += 1
    return state, events


def _handle_check_mission(state: GameState) -> tuple[GameState, list[GameEvent]]:
    if state.mission is None:
        raise ValueError("No mission has been assigned")

    satisfied = evaluate_mission(state.mission, state.territories, state.player_color)
    events = [mission_checked(state.mission.to_dict(), describe_mission(state.mission), satisfied)]
    if satisfied:
        state.winner = state.player_color
        events.append(victory(state.player_color, state.mission.to_dict(), state.turn_number))
    return state, events


def _check_victory(state: GameState) -> tuple[GameState, list[GameEvent]]:
    """Mark the player as winner once the mission holds after an attack."""
    if state.mission is None:
        return state, []
    if not evaluate_mission(state.mission, state.territories, state.player_color):
        return state, []
    state.winner = state.player_color
    return state, [victory(state.player_color, state.mission.to_dict(), state.turn_number)]


def replay_from_actions(
    initial_state: GameState,
    actions: list[Action],
) -> tuple[GameState, list[GameEvent]]:
    """
    Replay a series of actions from an initial state.

    Args:
        initial_state: Starting game state
        actions: List of actions to apply in sequence

    Returns:
        Tuple of (final_state, all_events) after all actions applied
    """
    current_state = initial_state.copy()
    all_events: list[GameEvent] = []

    for action in actions:
        current_state, events = apply_action(current_state, action)
        all_events.extend(events)

    return current_state, all_events
