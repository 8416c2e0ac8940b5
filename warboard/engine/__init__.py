"""
Warboard Territory-Conquest Game Engine
Board, single-die combat and missions, without UI or persistence.
"""

DICE_SIDES = 6

# Territories the player must hold for the "conquer territories" mission.
CONQUEST_TERRITORY_TARGET = 3
