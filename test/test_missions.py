"""
Tests for mission evaluation and sticky completion.
"""

import pytest

from backend.engine.combat import resolve_attack, OUTCOME_CONQUERED
from backend.engine.dice import ScriptedDiceRoller
from backend.engine.missions import (
    evaluate_mission,
    count_territories_of_player,
    total_troops_of_player,
    is_player_eliminated,
)
from backend.engine.state import (
    Mission,
    ConquerTerritories,
    EliminatePlayer,
    HaveTroopsTotal,
)


def test_counters(make_board):
    board = make_board((5, 0), (3, 0), (6, 1), (2, None))
    assert count_territories_of_player(board, 0) == 2
    assert total_troops_of_player(board, 0) == 8
    assert total_troops_of_player(board, 2) == 0
    assert not is_player_eliminated(board, 1)
    assert is_player_eliminated(board, 2)


def test_conquer_territories_completes_after_conquest(demo_state):
    """Alice owns 2 of 6; needs 3. Conquering Canada completes it, and it stays completed."""
    territories, players = demo_state.territories, demo_state.players
    mission = Mission("Conquer 3 territories", ConquerTerritories(required_count=3))

    assert evaluate_mission(mission, territories, players, 0) is False
    assert mission.completed is False

    # Brasil (5) takes Canada (2): [6,6,6] vs [1,1]
    outcome = resolve_attack(territories, 0, 3, ScriptedDiceRoller([6, 6, 6, 1, 1]))
    assert outcome.kind == OUTCOME_CONQUERED
    assert count_territories_of_player(territories, 0) == 3

    assert evaluate_mission(mission, territories, players, 0) is True
    assert mission.completed is True

    # Alice loses territories afterwards; the mission stays completed
    territories[0].owner = 1
    territories[1].owner = 1
    assert evaluate_mission(mission, territories, players, 0) is True
    assert evaluate_mission(mission, territories, players, 0) is True


def test_eliminate_player(make_board, players):
    board = make_board((4, 0), (1, 2), (3, 1), (1, 2))
    mission = Mission("Eliminate Carol", EliminatePlayer(target_player_id=2))

    assert evaluate_mission(mission, board, players, 0) is False

    resolve_attack(board, 0, 1, ScriptedDiceRoller([6, 6, 6, 1]))
    assert board[1].owner == 0
    assert evaluate_mission(mission, board, players, 0) is False

    # Bob takes Carol's last territory: the mission completes for Alice anyway
    resolve_attack(board, 2, 3, ScriptedDiceRoller([5, 4, 1]))
    assert board[3].owner == 1
    assert evaluate_mission(mission, board, players, 0) is True
    assert mission.completed


@pytest.mark.parametrize("target", [-1, 3, 99])
def test_eliminate_unknown_player_never_completes(make_board, players, target):
    # Nobody owns anything as `target`, but the target is not in the roster
    board = make_board((4, 0), (2, 1))
    mission = Mission("Eliminate a ghost", EliminatePlayer(target_player_id=target))
    assert evaluate_mission(mission, board, players, 0) is False
    assert mission.completed is False


def test_have_troops_total(make_board, players):
    board = make_board((5, 0), (4, 0), (9, 1))
    mission = Mission("Hold 10 troops", HaveTroopsTotal(required_count=10))
    assert evaluate_mission(mission, board, players, 0) is False

    board[1].troops = 5
    assert evaluate_mission(mission, board, players, 0) is True

    board[0].troops = 0
    assert evaluate_mission(mission, board, players, 0) is True


def test_completed_mission_is_not_recomputed(make_board, players):
    """Once completed, the board is not consulted, even if it is inconsistent."""
    mission = Mission("Already done", ConquerTerritories(required_count=50), completed=True)
    assert evaluate_mission(mission, {}, players, 0) is True
    assert evaluate_mission(mission, make_board((1, 1)), players, 0) is True


def test_pending_mission_not_mutated_on_failure(make_board, players):
    mission = Mission("Conquer 4", ConquerTerritories(required_count=4))
    before = mission.to_dict()
    evaluate_mission(mission, make_board((2, 0)), players, 0)
    assert mission.to_dict() == before


def test_zero_requirement_is_met_immediately(make_board, players):
    mission = Mission("Trivial", ConquerTerritories(required_count=0))
    assert evaluate_mission(mission, make_board((2, 1)), players, 0) is True


def test_unknown_objective_raises(make_board, players):
    mission = Mission("Broken", objective="conquer everything")
    with pytest.raises(TypeError):
        evaluate_mission(mission, make_board((2, 0)), players, 0)
