"""
Combat resolution system.
One attack roll against one defense roll, applied to a pair of territories.
Two rules are supported:
- conquest: attacker wins on a strictly higher roll, captures the territory
  at once and moves half of its troops in (ties favor the defender)
- attrition: attacker wins ties, each win costs the defender one troop and the
  territory falls when its troops reach zero
"""

from dataclasses import dataclass

from warboard.engine import DICE_SIDES
from warboard.engine.state import Territory

RULE_CONQUEST = "conquest"
RULE_ATTRITION = "attrition"
COMBAT_RULES = (RULE_CONQUEST, RULE_ATTRITION)


@dataclass
class AttackResult:
    """Result of a single attack."""
    attack_roll: int
    defense_roll: int
    attacker_won: bool  # True if the attacker won the roll
    conquered: bool  # True if the defender changed color
    old_defender_color: str
    attacker_losses: int  # Troops the attacker lost or moved out
    defender_losses: int  # Troops the defender lost before any conquest
    troops_transferred: int  # Troops placed in the conquered territory (0 if not conquered)
    attacker_troops: int  # Attacker troops after the attack
    defender_troops: int  # Defender troops after the attack


def validate_roll(roll: int) -> None:
    if not isinstance(roll, int) or isinstance(roll, bool) or not 1 <= roll <= DICE_SIDES:
        raise ValueError(f"Die roll must be between 1 and {DICE_SIDES}, got {roll!r}")


def resolve_attack(
    attacker: Territory,
    defender: Territory,
    attack_roll: int,
    defense_roll: int,
    rule: str = RULE_CONQUEST,
) -> AttackResult:
    """
    Resolve one attack between two territories.

    Note: This function MODIFIES both territories in place (color and troops).
    Caller should pass copies if originals need preservation.

    Args:
        attacker: Attacking territory (modified in place)
        defender: Defending territory (modified in place)
        attack_roll: Attacker's die, 1..DICE_SIDES
        defense_roll: Defender's die, 1..DICE_SIDES
        rule: RULE_CONQUEST or RULE_ATTRITION

    Returns:
        AttackResult describing rolls, losses and conquest
    """
    if rule not in COMBAT_RULES:
        raise ValueError(f"Unknown combat rule: {rule}")
    validate_roll(attack_roll)
    validate_roll(defense_roll)
    if attacker.troops <= 0:
        raise ValueError(f"{attacker.name} has no troops to attack with")
    if attacker.color == defender.color:
        raise ValueError(f"{attacker.name} cannot attack {defender.name}: both are {attacker.color}")

    if rule == RULE_CONQUEST:
        return _resolve_conquest(attacker, defender, attack_roll, defense_roll)
    return _resolve_attrition(attacker, defender, attack_roll, defense_roll)


def conquest_transfer(attacker_troops: int) -> int:
    """Troops moved into a conquered territory: half the attacker's, at least 1, never more than it has."""
    return min(max(1, attacker_troops // 2), attacker_troops)


def _resolve_conquest(
    attacker: Territory,
    defender: Territory,
    attack_roll: int,
    defense_roll: int,
) -> AttackResult:
    old_color = defender.color

    if attack_roll > defense_roll:
        transferred = conquest_transfer(attacker.troops)
        defender_losses = defender.troops
        defender.color = attacker.color
        defender.troops = transferred
        attacker.troops -= transferred
        return AttackResult(
            attack_roll=attack_roll,
            defense_roll=defense_roll,
            attacker_won=True,
            conquered=True,
            old_defender_color=old_color,
            attacker_losses=transferred,
            defender_losses=defender_losses,
            troops_transferred=transferred,
            attacker_troops=attacker.troops,
            defender_troops=defender.troops,
        )

    # Tie or loss: attacker loses one troop, floored at zero
    lost = 1 if attacker.troops > 0 else 0
    attacker.troops -= lost
    return AttackResult(
        attack_roll=attack_roll,
        defense_roll=defense_roll,
        attacker_won=False,
        conquered=False,
        old_defender_color=old_color,
        attacker_losses=lost,
        defender_losses=0,
        troops_transferred=0,
        attacker_troops=attacker.troops,
        defender_troops=defender.troops,
    )


def _resolve_attrition(
    attacker: Territory,
    defender: Territory,
    attack_roll: int,
    defense_roll: int,
) -> AttackResult:
    old_color = defender.color

    if attack_roll < defense_roll:
        return AttackResult(
            attack_roll=attack_roll,
            defense_roll=defense_roll,
            attacker_won=False,
            conquered=False,
            old_defender_color=old_color,
            attacker_losses=0,
            defender_losses=0,
            troops_transferred=0,
            attacker_troops=attacker.troops,
            defender_troops=defender.troops,
        )

    defender_losses = 1 if defender.troops > 0 else 0
    defender.troops -= defender_losses
    attacker_losses = 0
    conquered = False
    transferred = 0

    if defender.troops <= 0:
        conquered = True
        transferred = 1
        defender.color = attacker.color
        defender.troops = transferred
        attacker_losses = 1 if attacker.troops > 0 else 0
        attacker.troops -= attacker_losses

    return AttackResult(
        attack_roll=attack_roll,
        defense_roll=defense_roll,
        attacker_won=True,
        conquered=conquered,
        old_defender_color=old_color,
        attacker_losses=attacker_losses,
        defender_losses=defender_losses,
        troops_transferred=transferred,
        attacker_troops=attacker.troops,
        defender_troops=defender.troops,
    )
