"""
Query functions for UI integration.
These functions help callers understand what actions are available
without mutating game state.
"""

from dataclasses import dataclass
from typing import Any

from backend.engine import MAX_ATTACKER_DICE, MAX_DEFENDER_DICE
from backend.engine.state import GameState
from backend.engine.actions import Action
from backend.engine.combat import get_attack_rejection, calculate_dice_counts
from backend.engine.missions import (
    count_territories_of_player,
    total_troops_of_player,
    is_player_eliminated,
)


@dataclass
class ValidationResult:
    """Result of action validation."""
    valid: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "error": self.error}


# ===== Action Validation =====

def validate_action(state: GameState, action: Action) -> ValidationResult:
    """
    Validate an action without applying it.
    Returns ValidationResult with valid=True or valid=False with error message.
    An attack that the combat rules would reject is reported as invalid here,
    with the rejection reason as the error.
    """
    if state.winner is not None:
        return ValidationResult(False, f"Game is over. Player {state.winner} has won.")

    if action.player not in state.players:
        return ValidationResult(False, f"Unknown player: {action.player}")

    if action.type == "attack":
        return _validate_attack(state, action)
    elif action.type == "check_missions":
        return ValidationResult(True)

    return ValidationResult(False, f"Unknown action type: {action.type}")


def _validate_attack(state: GameState, action: Action) -> ValidationResult:
    attacker_id = action.payload.get("attacker_id")
    defender_id = action.payload.get("defender_id")

    attacker = state.territories.get(attacker_id)
    if attacker is not None and attacker.owner != action.player:
        return ValidationResult(
            False, f"Player {action.player} does not own territory {attacker_id}")

    reason = get_attack_rejection(state.territories, attacker_id, defender_id)
    if reason is not None:
        return ValidationResult(False, reason)
    return ValidationResult(True)


# ===== Read-only views =====

def get_attack_options(
    state: GameState,
    player_id: int,
    attacker_dice_limit: int = MAX_ATTACKER_DICE,
    defender_dice_limit: int = MAX_DEFENDER_DICE,
) -> list[dict[str, Any]]:
    """
    Every attack player_id could make right now.
    There is no adjacency: any enemy or neutral territory can be attacked.

    Returns:
        [{"attacker_id", "defender_id", "attacker_dice", "defender_dice"}, ...]
        ordered by attacker then defender id.
    """
    options = []
    for attacker in sorted(state.territories.values(), key=lambda t: t.id):
        if attacker.owner != player_id:
            continue
        for defender in sorted(state.territories.values(), key=lambda t: t.id):
            if get_attack_rejection(state.territories, attacker.id, defender.id) is not None:
                continue
            attacker_dice, defender_dice = calculate_dice_counts(
                attacker.troops, defender.troops, attacker_dice_limit, defender_dice_limit)
            options.append({
                "attacker_id": attacker.id,
                "defender_id": defender.id,
                "attacker_dice": attacker_dice,
                "defender_dice": defender_dice,
            })
    return options


def get_player_stats(state: GameState, player_id: int) -> dict[str, Any]:
    """Territory count, troop total, elimination and mission progress for one player."""
    missions = state.missions.get(player_id, [])
    return {
        "player_id": player_id,
        "territories": count_territories_of_player(state.territories, player_id),
        "troops": total_troops_of_player(state.territories, player_id),
        "eliminated": is_player_eliminated(state.territories, player_id),
        "missions_completed": sum(1 for m in missions if m.completed),
        "missions_total": len(missions),
    }


def get_game_summary(state: GameState) -> dict[str, Any]:
    """Summary of the whole game for display."""
    return {
        "setup_id": state.setup_id,
        "attack_count": state.attack_count,
        "winner": state.winner,
        "neutral_territories": count_territories_of_player(state.territories, None),
        "players": [
            {"name": state.players[pid].name, **get_player_stats(state, pid)}
            for pid in sorted(state.players)
        ],
    }
