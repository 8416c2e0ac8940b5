#!/usr/bin/env python3
"""
Interactive console game.
Run: python -m warboard.cli
"""

import sys

from warboard.config import DEFAULT_SETUP_ID, DEFAULT_PLAYER_COLOR
from warboard.engine.definitions import list_setups, load_setup, parse_territory_entries
from warboard.engine.utils import (
    initialize_game_state,
    initialize_from_setup,
    generate_attack_rolls,
    print_game_state,
    print_mission,
    print_events,
)
from warboard.engine.reducer import apply_action
from warboard.engine.actions import attack, check_mission
from warboard.engine.queries import validate_action, get_attack_targets, get_game_summary


def prompt_int(message: str, minimum: int | None = None, maximum: int | None = None) -> int:
    """Ask until a whole number within [minimum, maximum] is entered."""
    while True:
        raw = input(message).strip()
        try:
            value = int(raw)
        except ValueError:
            print("Invalid input. Enter a whole number.")
            continue
        if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
            if maximum is None:
                print(f"Invalid input. Enter a number of at least {minimum}.")
            else:
                print(f"Invalid ID. Enter a number between {minimum} and {maximum}.")
            continue
        return value


def prompt_manual_territories() -> list:
    """Register territories one by one (name, color, troops)."""
    count = prompt_int("How many territories? ", minimum=1)
    entries = []
    print("\n=== Territory Registration ===")
    for i in range(count):
        print(f"\nTerritory #{i}")
        name = input("Name: ").strip()
        color = input("Army color: ").strip()
        troops = prompt_int("Troops: ", minimum=1)
        entries.append({"name": name, "color": color, "troops": troops})
    return parse_territory_entries(entries)


def setup_game():
    """Choose a setup file or register territories by hand. Returns a new GameState."""
    print("\n--- Setups ---")
    for s in list_setups():
        print(f"  {s['id']}: {s['display_name']} ({s['territories']} territories)")
    print("  m: Register territories manually")

    choice = input(f"\nSelect setup [{DEFAULT_SETUP_ID}]: ").strip()
    if choice.lower() == "m":
        territories = prompt_manual_territories()
        color = input(f"Your army color [{DEFAULT_PLAYER_COLOR}]: ").strip() or DEFAULT_PLAYER_COLOR
        return initialize_game_state(territories, color)

    setup = load_setup(choice or DEFAULT_SETUP_ID)
    return initialize_from_setup(setup)


def print_armies(state):
    """Territories and troops per army, plus the player's territories able to attack."""
    summary = get_game_summary(state)
    print("\n--- Armies ---")
    for color, stats in summary["colors"].items():
        marker = " (you)" if color == summary["player_color"] else ""
        print(f"  {color}{marker}: {stats['territories']} territories, {stats['troops']} troops")
    attackers = summary["attackers"]
    print(f"  Ready to attack: {', '.join(str(i) for i in attackers) if attackers else 'none'}")


def print_menu():
    print("\n--- Main Menu ---")
    print("1 - Attack")
    print("2 - Check mission")
    print("0 - Exit")


def prompt_attack(state):
    """Ask for attacker and defender IDs. Returns an attack Action, or None if rejected."""
    last = len(state.territories) - 1
    attacker_index = prompt_int(f"Attacker ID (0-{last}): ", minimum=0, maximum=last)

    targets = get_attack_targets(state, attacker_index)
    if targets:
        print(f"  Possible targets: {', '.join(str(t) for t in targets)}")
    defender_index = prompt_int(f"Defender ID (0-{last}): ", minimum=0, maximum=last)

    action = attack(
        state.player_color,
        attacker_index,
        defender_index,
        generate_attack_rolls(),
    )
    result = validate_action(state, action)
    if not result.valid:
        print(f"\n[!] {result.error}")
        return None
    return action


def play(state):
    """Menu loop. Returns the final state."""
    while state.winner is None:
        print_game_state(state)
        print_mission(state)
        print_armies(state)
        print_menu()
        choice = input("Choose an option: ").strip()

        if choice == "0":
            print("Leaving the game...")
            break
        elif choice == "1":
            action = prompt_attack(state)
        elif choice == "2":
            action = check_mission(state.player_color)
        else:
            print("Invalid option!")
            continue

        if action is None:
            continue
        try:
            state, events = apply_action(state, action)
        except ValueError as e:
            print(f"\n[!] {e}")
            continue
        print_events(events)
        if action.type == "attack":
            print_game_state(state)

    return state


def main() -> int:
    print("=== WARBOARD - Territory Conquest ===")
    try:
        state = setup_game()
    except (FileNotFoundError, ValueError) as e:
        print(f"Could not set up the game: {e}", file=sys.stderr)
        return 1
    except EOFError:
        return 0

    try:
        play(state)
    except EOFError:
        print("\nLeaving the game...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
