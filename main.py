"""
Main entry point for the Territorial Conquest Game Engine.
Replays the demo scenario: two attacks, then a mission check for Alice.
"""

import logging

from backend.config import DICE_SEED
from backend.engine.actions import attack, check_missions
from backend.engine.dice import DiceRoller
from backend.engine.events import ATTACK_RESOLVED, ATTACK_REJECTED
from backend.engine.combat import AttackOutcome, OUTCOME_INVALID
from backend.engine.reducer import apply_action
from backend.engine.queries import get_game_summary
from backend.engine.utils import (
    new_game,
    print_game_state,
    print_missions,
    print_attack_log,
    print_events,
)


def _outcome_from_events(events) -> AttackOutcome | None:
    for e in events:
        if e.type == ATTACK_RESOLVED:
            return AttackOutcome(**e.payload["outcome"])
        if e.type == ATTACK_REJECTED:
            return AttackOutcome(
                kind=OUTCOME_INVALID,
                attacker_id=e.payload["attacker_id"],
                defender_id=e.payload["defender_id"],
                reason=e.payload["reason"],
            )
    return None


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print("=== Territorial Conquest (demo) ===")
    roller = DiceRoller(seed=DICE_SEED)
    state = new_game()

    print("\n[INITIAL STATE]")
    print_game_state(state)
    print_missions(state, 0)

    # Alice attacks EUA from Brasil, then Bob answers from EUA
    for round_number, (player, attacker_id, defender_id) in enumerate([(0, 0, 2), (1, 2, 0)], 1):
        print(f"\n-- Attack round {round_number} --")
        attacker = state.territories[attacker_id]
        if attacker.owner != player:
            print(f"✗ {attacker.name} no longer belongs to {state.players[player].name}")
            continue
        state, events = apply_action(state, attack(player, attacker_id, defender_id), roller)
        outcome = _outcome_from_events(events)
        if outcome is not None:
            print_attack_log(outcome, state)
        print_events(events, state)
        print_game_state(state)
        if state.winner is not None:
            break

    if state.winner is None:
        print("\n[MISSION CHECK]")
        state, events = apply_action(state, check_missions(0), roller)
        print_events(events, state)
    print_missions(state, 0)

    summary = get_game_summary(state)
    print("\n[SUMMARY]")
    for p in summary["players"]:
        print(f"  {p['name']}: {p['territories']} territories, {p['troops']} troops, "
              f"missions {p['missions_completed']}/{p['missions_total']}")
    print("\nDemo finished.")


if __name__ == "__main__":
    main()
