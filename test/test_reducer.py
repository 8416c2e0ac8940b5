"""
Reducer tests: attacks and mission checks through apply_action.
Rolls are embedded in the actions, so every outcome is deterministic.
"""

import pytest

from warboard.engine.state import Territory
from warboard.engine.actions import attack, check_mission
from warboard.engine.missions import conquer_territories, eliminate_color
from warboard.engine.reducer import apply_action, replay_from_actions
from warboard.engine.utils import initialize_game_state, initialize_from_setup
from warboard.engine.definitions import load_setup
from warboard.engine.events import (
    ATTACK_DECLARED,
    DICE_ROLLED,
    TROOPS_LOST,
    ATTACK_REPELLED,
    TERRITORY_CONQUERED,
    MISSION_CHECKED,
    VICTORY,
)


def duel_state(combat_rule: str = "conquest", mission=None):
    """Board [("A","Red",4), ("B","Blue",4)] played by Red."""
    board = [Territory("A", "Red", 4), Territory("B", "Blue", 4)]
    return initialize_game_state(
        board, "Red", mission=mission or conquer_territories(), combat_rule=combat_rule
    )


def three_way_state(combat_rule: str = "conquest"):
    """Blue holds two territories; West has lost all of its troops."""
    board = [
        Territory("North", "Blue", 3),
        Territory("South", "Blue", 2),
        Territory("East", "Green", 1),
        Territory("West", "Red", 1),
    ]
    state = initialize_game_state(board, "Blue", mission=conquer_territories(), combat_rule=combat_rule)
    state.territories[3].troops = 0
    return state


def test_attack_conquers_on_higher_roll():
    state = duel_state()
    new_state, events = apply_action(state, attack("Red", 0, 1, {"attack": 6, "defense": 1}))

    b = new_state.territories[1]
    assert (b.color, b.troops) == ("Red", 2)
    assert new_state.territories[0].troops == 2

    types = [e.type for e in events]
    assert types[:2] == [ATTACK_DECLARED, DICE_ROLLED]
    assert TERRITORY_CONQUERED in types
    assert ATTACK_REPELLED not in types
    conquered = next(e for e in events if e.type == TERRITORY_CONQUERED)
    assert conquered.payload["old_color"] == "Blue"
    assert conquered.payload["troops"] == 2


def test_attack_repelled_on_lower_roll():
    state = duel_state()
    new_state, events = apply_action(state, attack("Red", 0, 1, {"attack": 1, "defense": 6}))

    b = new_state.territories[1]
    assert (b.color, b.troops) == ("Blue", 4)
    assert new_state.territories[0].troops == 3

    types = [e.type for e in events]
    assert ATTACK_REPELLED in types
    lost = next(e for e in events if e.type == TROOPS_LOST)
    assert lost.payload == {
        "territory_index": 0,
        "territory_name": "A",
        "count": 1,
        "remaining": 3,
        "cause": "defeat",
    }


def test_apply_action_does_not_mutate_input_state():
    state = duel_state()
    before = state.to_dict()
    apply_action(state, attack("Red", 0, 1, {"attack": 6, "defense": 1}))
    assert state.to_dict() == before


def test_turn_number_advances_per_attack():
    state = duel_state()
    state, _ = apply_action(state, attack("Red", 0, 1, {"attack": 1, "defense": 2}))
    state, _ = apply_action(state, attack("Red", 0, 1, {"attack": 1, "defense": 2}))
    assert state.turn_number == 3


@pytest.mark.parametrize("attacker, defender, message", [
    (0, 0, "cannot attack itself"),
    (0, 1, "same army"),
    (3, 2, "no troops"),
    (0, 9, "Invalid territories"),
    (-1, 2, "Invalid territories"),
])
def test_invalid_attacks_leave_board_unchanged(attacker, defender, message):
    state = three_way_state()
    before = state.to_dict()
    with pytest.raises(ValueError, match=message):
        apply_action(state, attack("Blue", attacker, defender, {"attack": 6, "defense": 1}))
    assert state.to_dict() == before


def test_missing_or_bad_rolls_are_rejected():
    state = duel_state()
    with pytest.raises(ValueError, match="attack and a defense roll"):
        apply_action(state, attack("Red", 0, 1, {"attack": 6}))
    with pytest.raises(ValueError, match="Die roll"):
        apply_action(state, attack("Red", 0, 1, {"attack": 6, "defense": 9}))


def test_wrong_color_is_rejected():
    state = duel_state()
    with pytest.raises(ValueError, match="does not match player color"):
        apply_action(state, attack("Blue", 1, 0, {"attack": 6, "defense": 1}))


def test_unknown_action_type():
    state = duel_state()
    action = check_mission("Red")
    action.type = "retreat"
    with pytest.raises(ValueError, match="Unknown action type"):
        apply_action(state, action)


def test_attrition_rule_through_reducer():
    state = duel_state(combat_rule="attrition")
    new_state, events = apply_action(state, attack("Red", 0, 1, {"attack": 3, "defense": 3}))

    assert new_state.territories[1].troops == 3
    assert new_state.territories[1].color == "Blue"
    lost = next(e for e in events if e.type == TROOPS_LOST)
    assert lost.payload["territory_index"] == 1


def test_victory_after_mission_completing_attack():
    state = duel_state(mission=eliminate_color("Blue"))
    new_state, events = apply_action(state, attack("Red", 0, 1, {"attack": 6, "defense": 1}))

    assert new_state.winner == "Red"
    assert events[-1].type == VICTORY
    with pytest.raises(ValueError, match="Game is over"):
        apply_action(new_state, check_mission("Red"))


def test_check_mission_not_satisfied():
    state = duel_state()
    new_state, events = apply_action(state, check_mission("Red"))

    assert new_state.winner is None
    assert [e.type for e in events] == [MISSION_CHECKED]
    assert events[0].payload["satisfied"] is False
    assert events[0].payload["description"] == "Conquer 3 territories."


def test_check_mission_satisfied_sets_winner():
    board = [Territory("A", "Red", 1), Territory("B", "Red", 1), Territory("C", "Red", 1)]
    state = initialize_game_state(board, "Red", mission=conquer_territories())
    new_state, events = apply_action(state, check_mission("Red"))

    assert new_state.winner == "Red"
    assert [e.type for e in events] == [MISSION_CHECKED, VICTORY]


def test_check_mission_without_mission():
    state = duel_state()
    state.mission = None
    with pytest.raises(ValueError, match="No mission"):
        apply_action(state, check_mission("Red"))


def test_replay_from_actions():
    state = duel_state(combat_rule="attrition")
    actions = [attack("Red", 0, 1, {"attack": 5, "defense": 2}) for _ in range(4)]
    final, events = replay_from_actions(state, actions)

    assert final.territories[1].color == "Red"
    assert final.territories[1].troops == 1
    assert final.territories[0].troops == 3
    assert sum(1 for e in events if e.type == TERRITORY_CONQUERED) == 1
    # Initial state untouched
    assert state.territories[1].color == "Blue"


def test_lost_attack_does_not_complete_duel_setup_mission():
    state = initialize_from_setup(load_setup("duel"))
    assert state.mission == eliminate_color("Blue")

    new_state, events = apply_action(state, attack("Red", 0, 1, {"attack": 1, "defense": 6}))

    assert new_state.winner is None
    assert new_state.territories[1].color == "Blue"
    assert VICTORY not in [e.type for e in events]
