"""
Main entry point for the Warboard Territory-Conquest Game Engine.
Demonstrates core functionality with a simple scripted scenario.
Run `python -m warboard.cli` for the interactive game.
"""

from warboard.engine.definitions import load_setup
from warboard.engine.state import Territory
from warboard.engine.actions import attack, check_mission
from warboard.engine.missions import conquer_territories
from warboard.engine.reducer import apply_action
from warboard.engine.utils import (
    initialize_game_state,
    initialize_from_setup,
    print_game_state,
    print_events,
)


def main():
    print("Warboard Territory-Conquest Game Engine")
    print("=" * 60)

    # ===== SCENARIO 1: Conquest on a higher roll =====
    print("\n[SCENARIO 1: Conquest (attacker rolls higher)]")
    state = initialize_from_setup(load_setup("duel"))
    print_game_state(state)

    state, events = apply_action(state, attack("Red", 0, 1, {"attack": 6, "defense": 1}))
    print_events(events)
    print_game_state(state)

    # ===== SCENARIO 2: Defender holds on a tie =====
    print("\n[SCENARIO 2: Defender holds (tie)]")
    state = initialize_from_setup(load_setup("duel"))
    state, events = apply_action(state, attack("Red", 0, 1, {"attack": 3, "defense": 3}))
    print_events(events)
    print_game_state(state)

    # ===== SCENARIO 3: Rejected attack leaves the board unchanged =====
    print("\n[SCENARIO 3: Same-color attack is rejected]")
    board = [
        Territory("North", "Blue", 3),
        Territory("South", "Blue", 2),
        Territory("East", "Green", 2),
    ]
    state = initialize_game_state(board, "Blue", mission=conquer_territories())
    try:
        state, _ = apply_action(state, attack("Blue", 0, 1, {"attack": 6, "defense": 1}))
        print("✗ Should have been rejected!")
    except ValueError as e:
        print(f"✓ Attack rejected (as expected): {e}")

    # ===== SCENARIO 4: Attrition rule and mission completion =====
    print("\n[SCENARIO 4: Attrition rule until the mission is complete]")
    state = initialize_game_state(board, "Blue", mission=conquer_territories(), combat_rule="attrition")
    for rolls in ({"attack": 4, "defense": 4}, {"attack": 5, "defense": 2}):
        state, events = apply_action(state, attack("Blue", 0, 2, rolls))
        print_events(events)
    print_game_state(state)

    if state.winner is None:
        state, events = apply_action(state, check_mission("Blue"))
        print_events(events)

    print("\n" + "=" * 60)
    print("✓ All scenarios demonstrated")
    print("=" * 60)


if __name__ == "__main__":
    main()
