"""
Utility functions for the game engine.
State initialisation plus console formatting of state, attacks and missions.
The engine itself never prints; these helpers are for scripts and the demo.
"""

from pathlib import Path

from backend.engine.state import GameState, Territory, Player, Mission
from backend.engine.combat import AttackOutcome, OUTCOME_CONQUERED
from backend.engine.definitions import load_static_definitions
from backend.engine.events import (
    GameEvent,
    ATTACK_RESOLVED,
    ATTACK_REJECTED,
    TERRITORY_CAPTURED,
    MISSION_COMPLETED,
    VICTORY,
)


def initialize_game_state(
    territories: dict[int, Territory],
    players: dict[int, Player],
    missions: dict[int, list[Mission]] | None = None,
    setup_id: str | None = None,
) -> GameState:
    """
    Create an initial game state from setup records.

    Args:
        territories: Territory registry by id
        players: Player roster by id
        missions: Optional missions by owner player id
        setup_id: Setup the records came from (informational)
    """
    return GameState(
        territories=territories,
        players=players,
        missions=missions or {},
        setup_id=setup_id,
    )


def new_game(setup_id: str | None = None, data_dir: Path | str | None = None) -> GameState:
    """Load a setup and build a fresh game state from it."""
    territories, players, missions = load_static_definitions(data_dir=data_dir, setup_id=setup_id)
    return initialize_game_state(territories, players, missions, setup_id=setup_id)


def _player_name(state: GameState, player_id: int | None) -> str:
    if player_id is None:
        return "neutral"
    player = state.players.get(player_id)
    return player.name if player else f"player {player_id}"


def print_game_state(state: GameState):
    """Pretty-print every territory."""
    print(f"\n{'='*60}")
    print(f"Attacks: {state.attack_count} | Setup: {state.setup_id or '-'}")
    print(f"{'='*60}")
    for territory_id in sorted(state.territories.keys()):
        t = state.territories[territory_id]
        print(f" [{territory_id}] {t.name or '(no name)'} | Color: {t.color or '(no color)'} "
              f"| Troops: {t.troops} | Owner: {_player_name(state, t.owner)}")
    if state.winner is not None:
        print(f"\n*** {_player_name(state, state.winner)} has won ***")
    print()


def print_missions(state: GameState, player_id: int):
    """Pretty-print a player's missions."""
    print(f"Missions of {_player_name(state, player_id)}:")
    missions = state.missions.get(player_id, [])
    if not missions:
        print("  - No missions")
        return
    for index, mission in enumerate(missions):
        objective = mission.objective.to_dict()
        params = ", ".join(f"{k}={v}" for k, v in objective.items() if k != "type")
        done = "YES" if mission.completed else "NO"
        print(f" [{index}] {mission.description or '(no description)'} | "
              f"{objective['type']}({params}) | Completed: {done}")


def print_attack_log(outcome: AttackOutcome, state: GameState):
    """
    Pretty-print one attack.

    Args:
        outcome: AttackOutcome returned by resolve_attack
        state: Game state after the attack (for names and troop counts)
    """
    attacker = state.territories.get(outcome.attacker_id)
    defender = state.territories.get(outcome.defender_id)
    attacker_name = attacker.name if attacker else f"#{outcome.attacker_id}"
    defender_name = defender.name if defender else f"#{outcome.defender_id}"

    print(f"\n{'='*70}")
    print(f"ATTACK: {attacker_name} -> {defender_name}")
    print(f"{'='*70}")

    if not outcome.is_valid:
        print(f"✗ Invalid attack: {outcome.reason}")
        return

    print(f"Attacker rolls ({outcome.attacker_dice} dice): {outcome.attacker_rolls}")
    print(f"Defender rolls ({outcome.defender_dice} dice): {outcome.defender_rolls}")
    print(f"Attacker loses {outcome.attacker_losses}, defender loses {outcome.defender_losses}")

    if outcome.kind == OUTCOME_CONQUERED:
        print(f"✓ {defender_name} CONQUERED by {_player_name(state, defender.owner)}; "
              f"{outcome.troops_transferred} troop(s) moved in")
    else:
        print(f"✗ {defender_name} HELD ({defender.troops} troops left)")


def print_events(events: list[GameEvent], state: GameState):
    """One line per event, for scripts that drive the reducer."""
    for e in events:
        p = e.payload
        if e.type == ATTACK_RESOLVED:
            o = p["outcome"]
            print(f"  - {e.type}: {o['kind']} {o['attacker_rolls']} vs {o['defender_rolls']}")
        elif e.type == ATTACK_REJECTED:
            print(f"  - {e.type}: {p['reason']}")
        elif e.type == TERRITORY_CAPTURED:
            print(f"  - {e.type}: {state.territories[p['territory']].name} -> "
                  f"{_player_name(state, p['new_owner'])}")
        elif e.type == MISSION_COMPLETED:
            print(f"  - {e.type}: {p['description']}")
        elif e.type == VICTORY:
            print(f"  - {e.type}: {_player_name(state, p['winner'])}")
        else:
            print(f"  - {e.type}: {p}")
