"""
Territorial Conquest Game Engine
Dice combat between territories and victory missions, without UI, network, or storage.
"""

DICE_SIDES = 6

# Classic limits: the attacker rolls up to 3 dice, the defender up to 2.
MAX_ATTACKER_DICE = 3
MAX_DEFENDER_DICE = 2
