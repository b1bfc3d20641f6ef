"""
Action definitions for the game.
Actions are immutable, deterministic instructions.
"""

from dataclasses import dataclass

from backend.engine import MAX_ATTACKER_DICE, MAX_DEFENDER_DICE


@dataclass
class Action:
    """Base action class. All actions have a type, player, and payload."""
    type: str  # "attack" or "check_missions"
    player: int  # player_id performing the action
    payload: dict  # Action-specific data


def attack(
    player: int,
    attacker_id: int,  # Territory attacked from (must be owned by player)
    defender_id: int,  # Territory attacked
    attacker_dice_limit: int = MAX_ATTACKER_DICE,
    defender_dice_limit: int = MAX_DEFENDER_DICE,
) -> Action:
    """
    Attack one territory from another.
    The player's missions are checked after the attack is resolved.

    Example: attack(0, 0, 2)  # Player 0 attacks territory 2 from territory 0
    """
    return Action(
        type="attack",
        player=player,
        payload={
            "attacker_id": attacker_id,
            "defender_id": defender_id,
            "attacker_dice_limit": attacker_dice_limit,
            "defender_dice_limit": defender_dice_limit,
        },
    )


def check_missions(player: int) -> Action:
    """Evaluate all of a player's missions against the current board."""
    return Action(
        type="check_missions",
        player=player,
        payload={},
    )
