"""
Utility functions for the game engine.
"""

import random

from warboard.engine.state import GameState, Territory
from warboard.engine.combat import COMBAT_RULES
from warboard.engine.missions import Mission, draw_mission, describe_mission
from warboard.engine.definitions import SetupDefinition
from warboard.engine.events import (
    GameEvent,
    ATTACK_DECLARED,
    DICE_ROLLED,
    TROOPS_LOST,
    ATTACK_REPELLED,
    TERRITORY_CONQUERED,
    MISSION_CHECKED,
    VICTORY,
)
from warboard.engine import DICE_SIDES


def initialize_game_state(
    territories: list[Territory],
    player_color: str,
    mission: Mission | None = None,
    combat_rule: str | None = None,
    rng: random.Random | None = None,
) -> GameState:
    """
    Create an initial game state for a board.

    Args:
        territories: Starting territories, in board order (every troop count > 0)
        player_color: Color the player fights under
        mission: Mission to assign; drawn at random when not provided
        combat_rule: "conquest" or "attrition"; config default when not provided
        rng: Random source for the mission draw
    """
    if not territories:
        raise ValueError("A board needs at least one territory")
    for territory in territories:
        if territory.troops <= 0:
            raise ValueError(f"{territory.name} must start with at least one troop")

    if combat_rule is None:
        from warboard.config import DEFAULT_COMBAT_RULE
        combat_rule = DEFAULT_COMBAT_RULE
    if combat_rule not in COMBAT_RULES:
        raise ValueError(
            f"Unknown combat rule: {combat_rule} (expected one of: {', '.join(COMBAT_RULES)})")

    board = [Territory(t.name, t.color, t.troops) for t in territories]
    if mission is None:
        mission = draw_mission(board, player_color, rng)

    return GameState(
        territories=board,
        player_color=player_color,
        mission=mission,
        combat_rule=combat_rule,
    )


def initialize_from_setup(
    setup: SetupDefinition,
    player_color: str | None = None,
    combat_rule: str | None = None,
    rng: random.Random | None = None,
) -> GameState:
    """Create a game from a loaded setup; explicit arguments override the setup's own values."""
    if player_color is None:
        from warboard.config import DEFAULT_PLAYER_COLOR
        player_color = setup.player_color or DEFAULT_PLAYER_COLOR
    return initialize_game_state(
        setup.build_territories(),
        player_color,
        mission=setup.build_mission(),
        combat_rule=combat_rule or setup.combat_rule,
        rng=rng,
    )


def roll_die(rng: random.Random | None = None) -> int:
    """One uniform roll in 1..DICE_SIDES."""
    return (rng or random).randint(1, DICE_SIDES)


def generate_attack_rolls(seed: int | None = None, rng: random.Random | None = None) -> dict[str, int]:
    """
    Generate the attack and defense rolls for one attack.

    Args:
        seed: Optional random seed for reproducibility
        rng: Optional random source (takes precedence over seed)

    Returns:
        Dict with "attack" and "defense" rolls
    """
    if rng is None and seed is not None:
        rng = random.Random(seed)
    return {
        "attack": roll_die(rng),
        "defense": roll_die(rng),
    }


def print_game_state(state: GameState):
    """Pretty-print the board as a table (ID, name, color, troops)."""
    print(f"\n{'='*60}")
    print(f"Turn {state.turn_number} | Player: {state.player_color} | Rule: {state.combat_rule}")
    print(f"{'='*60}")
    print(f"{'ID':<3} | {'Name':<29} | {'Color':<9} | {'Troops':<6}")
    print("-" * 58)
    for i, territory in enumerate(state.territories):
        print(f"{i:<3} | {territory.name:<29} | {territory.color:<9} | {territory.troops:<6}")
    print()


def print_mission(state: GameState):
    print("\n--- Current Mission ---")
    if state.mission is None:
        print("No mission assigned.")
        return
    print(describe_mission(state.mission))


def print_events(events: list[GameEvent]):
    """Narrate the events of one action."""
    for event in events:
        p = event.payload
        if event.type == ATTACK_DECLARED:
            print(f"\n{p['attacker_name']} ({p['attacker_color']}) attacks "
                  f"{p['defender_name']} ({p['defender_color']})!")
        elif event.type == DICE_ROLLED:
            print(f"Attacker rolled {p['attack_roll']} x Defender rolled {p['defense_roll']}")
        elif event.type == TERRITORY_CONQUERED:
            print(f"✓ {p['territory_name']} was conquered by {p['new_color']} "
                  f"({p['troops']} troops moved in)")
        elif event.type == TROOPS_LOST:
            print(f"  {p['territory_name']} lost {p['count']} troop(s), {p['remaining']} left")
        elif event.type == ATTACK_REPELLED:
            print(f"✗ {p['defender_name']} held the line!")
        elif event.type == MISSION_CHECKED:
            if p["satisfied"]:
                print("Congratulations! You completed your mission!")
            else:
                print("Mission not completed yet. Keep playing!")
        elif event.type == VICTORY:
            print(f"\n*** {p['winner'].upper()} WINS on turn {p['turn_number']} ***")
