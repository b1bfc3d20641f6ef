"""
Tests for the action reducer: state copies, events, mission checks and victory.
"""

import pytest

from backend.engine.actions import Action, attack, check_missions
from backend.engine.definitions import definitions_from_snapshot
from backend.engine.dice import ScriptedDiceRoller
from backend.engine.events import (
    ATTACK_RESOLVED,
    ATTACK_REJECTED,
    TERRITORY_CAPTURED,
    MISSION_COMPLETED,
    VICTORY,
)
from backend.engine.reducer import apply_action
from backend.engine.utils import initialize_game_state


def _types(events):
    return [e.type for e in events]


def test_repelled_attack_returns_new_state(demo_state):
    # Brasil (5) attacks EUA (6): [6,5,4] vs [6,3]
    new_state, events = apply_action(demo_state, attack(0, 0, 2), ScriptedDiceRoller([6, 5, 4, 6, 3]))

    assert _types(events) == [ATTACK_RESOLVED]
    payload = events[0].payload
    assert payload["outcome"]["kind"] == "repelled"
    assert payload["attacker_troops"] == 4
    assert payload["defender_troops"] == 5

    assert new_state.territories[0].troops == 4
    assert new_state.territories[2].troops == 5
    assert new_state.attack_count == 1
    # The input state is untouched
    assert demo_state.territories[0].troops == 5
    assert demo_state.territories[2].troops == 6
    assert demo_state.attack_count == 0


def test_conquest_emits_capture_and_mission(demo_state):
    # Brasil (5) takes Canada (2); Alice now owns 3 territories
    new_state, events = apply_action(demo_state, attack(0, 0, 3), ScriptedDiceRoller([6, 6, 6, 1, 1]))

    assert _types(events) == [ATTACK_RESOLVED, TERRITORY_CAPTURED, MISSION_COMPLETED]
    captured = events[1].payload
    assert captured == {
        "territory": 3,
        "old_owner": 1,
        "new_owner": 0,
        "troops_moved": 3,
        "from_territory": 0,
    }
    assert events[2].payload["mission_index"] == 0
    assert new_state.missions[0][0].completed is True
    assert new_state.missions[0][1].completed is False
    assert demo_state.missions[0][0].completed is False
    assert new_state.winner is None


def test_rejected_attack_is_an_event_not_an_error(demo_state):
    new_state, events = apply_action(demo_state, attack(0, 0, 1), ScriptedDiceRoller([]))
    assert _types(events) == [ATTACK_REJECTED]
    assert events[0].payload["reason"] == "same_owner"
    assert new_state.attack_count == 1
    assert new_state.territories[0].troops == 5


def test_attack_on_missing_territory(demo_state):
    _, events = apply_action(demo_state, attack(0, 0, 42), ScriptedDiceRoller([]))
    assert events[0].type == ATTACK_REJECTED
    assert events[0].payload["reason"] == "not_found"


def test_attacking_from_foreign_territory_raises(demo_state):
    with pytest.raises(ValueError, match="does not own"):
        apply_action(demo_state, attack(0, 2, 4), ScriptedDiceRoller([]))


def test_unknown_player_raises(demo_state):
    with pytest.raises(ValueError, match="Unknown player"):
        apply_action(demo_state, check_missions(7), ScriptedDiceRoller([]))


def test_unknown_action_type_raises(demo_state):
    with pytest.raises(ValueError, match="Unknown action type"):
        apply_action(demo_state, Action(type="fortify", player=0, payload={}), ScriptedDiceRoller([]))


def test_check_missions_reports_each_completion_once(demo_state):
    demo_state.territories[3].owner = 0  # hand Canada to Alice directly
    state, events = apply_action(demo_state, check_missions(0), ScriptedDiceRoller([]))
    assert _types(events) == [MISSION_COMPLETED]

    state, events = apply_action(state, check_missions(0), ScriptedDiceRoller([]))
    assert events == []


def test_victory_when_all_missions_complete():
    territories, players, missions = definitions_from_snapshot({
        "territories": [
            {"id": 0, "name": "Keep", "troops": 4, "owner": 0},
            {"id": 1, "name": "Outpost", "troops": 1, "owner": 1},
        ],
        "players": [{"id": 0, "name": "North"}, {"id": 1, "name": "South"}],
        "missions": {
            0: [{"type": "eliminate_player", "description": "Eliminate South", "target_player_id": 1}],
        },
    })
    state = initialize_game_state(territories, players, missions)

    state, events = apply_action(state, attack(0, 0, 1), ScriptedDiceRoller([6, 6, 6, 2]))
    assert _types(events) == [ATTACK_RESOLVED, TERRITORY_CAPTURED, MISSION_COMPLETED, VICTORY]
    assert events[-1].payload == {"winner": 0, "completed_missions": ["Eliminate South"]}
    assert state.winner == 0

    with pytest.raises(ValueError, match="Game is over"):
        apply_action(state, check_missions(0), ScriptedDiceRoller([]))


def test_player_without_missions_never_wins(demo_state):
    state, events = apply_action(demo_state, check_missions(1), ScriptedDiceRoller([]))
    assert events == []
    assert state.winner is None


def test_custom_dice_limits_pass_through(demo_state):
    state, events = apply_action(
        demo_state, attack(0, 0, 2, attacker_dice_limit=1, defender_dice_limit=1),
        ScriptedDiceRoller([3, 4]))
    outcome = events[0].payload["outcome"]
    assert outcome["attacker_rolls"] == [3]
    assert outcome["defender_rolls"] == [4]
    assert state.territories[0].troops == 4
