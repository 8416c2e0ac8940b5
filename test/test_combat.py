"""
Combat rule tests: conquest and attrition with fixed rolls.
resolve_attack works on the territories in place, so each test builds fresh ones.
"""

import itertools

import pytest

from warboard.engine.state import Territory
from warboard.engine.combat import (
    resolve_attack,
    conquest_transfer,
    RULE_CONQUEST,
    RULE_ATTRITION,
)


def make_pair(attacker_troops: int = 4, defender_troops: int = 4):
    """Red attacker against Blue defender."""
    return Territory("A", "Red", attacker_troops), Territory("B", "Blue", defender_troops)


# ===== Conquest rule =====

def test_conquest_higher_roll_captures_and_moves_half():
    a, b = make_pair()
    result = resolve_attack(a, b, 6, 1)

    assert result.conquered
    assert b.color == "Red"
    assert b.troops == 2
    assert a.troops == 2
    assert result.troops_transferred == 2
    assert result.old_defender_color == "Blue"


def test_conquest_lower_roll_costs_attacker_one_troop():
    a, b = make_pair()
    result = resolve_attack(a, b, 1, 6)

    assert not result.conquered
    assert not result.attacker_won
    assert (b.color, b.troops) == ("Blue", 4)
    assert a.troops == 3
    assert result.attacker_losses == 1


def test_conquest_tie_favors_defender():
    a, b = make_pair()
    result = resolve_attack(a, b, 4, 4)

    assert not result.conquered
    assert b.color == "Blue"
    assert a.troops == 3


def test_conquest_single_troop_attacker_moves_its_only_troop():
    a, b = make_pair(attacker_troops=1)
    resolve_attack(a, b, 5, 2)

    assert b.color == "Red"
    assert b.troops == 1
    assert a.troops == 0


def test_conquest_odd_troops_round_down():
    a, b = make_pair(attacker_troops=7)
    resolve_attack(a, b, 3, 2)

    assert b.troops == 3
    assert a.troops == 4


@pytest.mark.parametrize("troops, expected", [(1, 1), (2, 1), (3, 1), (4, 2), (9, 4)])
def test_conquest_transfer_amount(troops, expected):
    assert conquest_transfer(troops) == expected


# ===== Attrition rule =====

def test_attrition_tie_favors_attacker():
    a, b = make_pair(defender_troops=3)
    result = resolve_attack(a, b, 2, 2, rule=RULE_ATTRITION)

    assert result.attacker_won
    assert not result.conquered
    assert b.troops == 2
    assert b.color == "Blue"
    assert a.troops == 4


def test_attrition_last_defender_falls():
    a, b = make_pair(defender_troops=1)
    result = resolve_attack(a, b, 5, 1, rule=RULE_ATTRITION)

    assert result.conquered
    assert b.color == "Red"
    assert b.troops == 1
    assert a.troops == 3


def test_attrition_lower_roll_changes_nothing():
    a, b = make_pair()
    result = resolve_attack(a, b, 1, 2, rule=RULE_ATTRITION)

    assert not result.attacker_won
    assert (a.troops, b.troops, b.color) == (4, 4, "Blue")


# ===== Invariants =====

@pytest.mark.parametrize("rule", [RULE_CONQUEST, RULE_ATTRITION])
def test_troops_never_negative_for_any_rolls(rule):
    for attack_roll, defense_roll in itertools.product(range(1, 7), repeat=2):
        for attacker_troops, defender_troops in [(1, 1), (1, 5), (2, 1), (5, 5)]:
            a, b = make_pair(attacker_troops, defender_troops)
            result = resolve_attack(a, b, attack_roll, defense_roll, rule=rule)
            assert a.troops >= 0 and b.troops >= 0
            assert result.conquered == (b.color == "Red")


@pytest.mark.parametrize("attack_roll, defense_roll", list(itertools.product(range(1, 7), repeat=2)))
def test_conquest_happens_iff_attack_roll_is_higher(attack_roll, defense_roll):
    a, b = make_pair()
    resolve_attack(a, b, attack_roll, defense_roll)
    assert (b.color == "Red") == (attack_roll > defense_roll)


def test_zero_troop_attacker_is_rejected():
    a, b = make_pair(attacker_troops=1)
    a.troops = 0
    with pytest.raises(ValueError, match="no troops"):
        resolve_attack(a, b, 6, 1)
    assert (a.troops, b.troops, b.color) == (0, 4, "Blue")


def test_same_color_is_rejected():
    a = Territory("A", "Red", 3)
    b = Territory("B", "Red", 3)
    with pytest.raises(ValueError):
        resolve_attack(a, b, 6, 1)


@pytest.mark.parametrize("attack_roll, defense_roll", [(0, 3), (7, 3), (3, 0), (3, 7)])
def test_out_of_range_rolls_are_rejected(attack_roll, defense_roll):
    a, b = make_pair()
    with pytest.raises(ValueError, match="Die roll"):
        resolve_attack(a, b, attack_roll, defense_roll)
    assert (a.troops, b.troops) == (4, 4)


def test_unknown_rule_is_rejected():
    a, b = make_pair()
    with pytest.raises(ValueError, match="Unknown combat rule"):
        resolve_attack(a, b, 6, 1, rule="blitz")
