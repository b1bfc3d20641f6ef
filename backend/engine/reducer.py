"""
Main game reducer.
Applies actions to state, enforcing rules and producing new state.
Returns (new_state, events) where events describe what happened.
"""

import logging

from backend.engine import MAX_ATTACKER_DICE, MAX_DEFENDER_DICE
from backend.engine.state import GameState
from backend.engine.actions import Action
from backend.engine.combat import resolve_attack
from backend.engine.dice import DiceRoller
from backend.engine.missions import evaluate_mission
from backend.engine.events import (
    GameEvent,
    attack_resolved,
    attack_rejected,
    territory_captured,
    mission_completed,
    victory,
)

logger = logging.getLogger("war.reducer")


def apply_action(
    state: GameState,
    action: Action,
    roller: DiceRoller,
) -> tuple[GameState, list[GameEvent]]:
    """
    Apply a single action to the current state, returning new state and events.

    The input state is never modified: the action runs against a deep copy, so
    an attack's two territory updates are seen together or not at all.

    Raises ValueError for actions that cannot be applied at all (game over,
    unknown player or action type, attacking from someone else's territory).
    Attacks rejected by the combat rules do not raise; they produce an
    attack_rejected event.

    Args:
        state: Current game state
        action: Action to apply
        roller: Dice source for attacks

    Returns:
        Tuple of (new_state, events) where events describe what happened
    """
    # Check if game is already won
    if state.winner is not None:
        raise ValueError(f"Game is over. Player {state.winner} has won.")

    if action.player not in state.players:
        raise ValueError(f"Unknown player: {action.player}")

    new_state = state.copy()
    events: list[GameEvent] = []

    if action.type == "attack":
        new_state, evts = _handle_attack(new_state, action, roller)
        events.extend(evts)
        new_state, evts = _handle_check_missions(new_state, action.player)
        events.extend(evts)

    elif action.type == "check_missions":
        new_state, evts = _handle_check_missions(new_state, action.player)
        events.extend(evts)

    else:
        raise ValueError(f"Unknown action type: {action.type}")

    logger.debug("applied %s for player %s: %s", action.type, action.player,
                 [e.type for e in events])
    return new_state, events


def _handle_attack(
    state: GameState,
    action: Action,
    roller: DiceRoller,
) -> tuple[GameState, list[GameEvent]]:
    """
    Resolve an attack action.
    Validates that the player owns the attacking territory (when it exists);
    every other rule is left to resolve_attack.
    """
    attacker_id = action.payload["attacker_id"]
    defender_id = action.payload["defender_id"]

    attacker = state.territories.get(attacker_id)
    if attacker is not None and attacker.owner != action.player:
        raise ValueError(
            f"Player {action.player} does not own territory {attacker.name} ({attacker_id})")

    defender = state.territories.get(defender_id)
    old_owner = defender.owner if defender is not None else None

    outcome = resolve_attack(
        state.territories,
        attacker_id,
        defender_id,
        roller,
        attacker_dice_limit=action.payload.get("attacker_dice_limit", MAX_ATTACKER_DICE),
        defender_dice_limit=action.payload.get("defender_dice_limit", MAX_DEFENDER_DICE),
    )
    state.attack_count += 1

    if not outcome.is_valid:
        return state, [attack_rejected(action.player, attacker_id, defender_id, outcome.reason)]

    events = [attack_resolved(
        action.player,
        outcome.to_dict(),
        attacker_troops=state.territories[attacker_id].troops,
        defender_troops=state.territories[defender_id].troops,
    )]
    if outcome.conquered:
        events.append(territory_captured(
            defender_id,
            old_owner=old_owner,
            new_owner=state.territories[defender_id].owner,
            troops_moved=outcome.troops_transferred,
            from_territory=attacker_id,
        ))
    return state, events


def _handle_check_missions(
    state: GameState,
    player_id: int,
) -> tuple[GameState, list[GameEvent]]:
    """
    Evaluate every mission owned by player_id.
    Emits mission_completed for missions that complete now, and victory once
    all of the player's missions are complete.
    """
    events: list[GameEvent] = []
    missions = state.missions.get(player_id, [])

    for index, mission in enumerate(missions):
        was_completed = mission.completed
        if evaluate_mission(mission, state.territories, state.players, player_id) and not was_completed:
            events.append(mission_completed(
                player_id, index, mission.description, mission.objective.to_dict()))

    if missions and all(m.completed for m in missions):
        state.winner = player_id
        events.append(victory(player_id, [m.description for m in missions]))

    return state, events
