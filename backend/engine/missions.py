"""
Mission evaluation.
A mission is pending until its objective is met, then completed for good.
"""

from backend.engine.state import (
    Territory,
    Player,
    Mission,
    ConquerTerritories,
    EliminatePlayer,
    HaveTroopsTotal,
)


def count_territories_of_player(territories: dict[int, Territory], player_id: int) -> int:
    """Number of territories owned by a player."""
    return sum(1 for t in territories.values() if t.owner == player_id)


def total_troops_of_player(territories: dict[int, Territory], player_id: int) -> int:
    """Sum of troops across a player's territories."""
    return sum(t.troops for t in territories.values() if t.owner == player_id)


def is_player_eliminated(territories: dict[int, Territory], player_id: int) -> bool:
    """A player with no territory is eliminated."""
    return all(t.owner != player_id for t in territories.values())


def _objective_met(
    mission: Mission,
    territories: dict[int, Territory],
    players: dict[int, Player],
    owner_id: int,
) -> bool:
    objective = mission.objective

    if isinstance(objective, ConquerTerritories):
        return count_territories_of_player(territories, owner_id) >= objective.required_count

    if isinstance(objective, EliminatePlayer):
        # A target outside the roster can never be eliminated.
        if objective.target_player_id not in players:
            return False
        return is_player_eliminated(territories, objective.target_player_id)

    if isinstance(objective, HaveTroopsTotal):
        return total_troops_of_player(territories, owner_id) >= objective.required_count

    raise TypeError(f"Unknown mission objective: {type(objective).__name__}")


def evaluate_mission(
    mission: Mission,
    territories: dict[int, Territory],
    players: dict[int, Player],
    owner_id: int,
) -> bool:
    """
    Check a mission for owner_id and mark it completed if its objective is met.

    Completion is sticky: once mission.completed is True this returns True
    without looking at the board again. A pending mission that is not met is
    left untouched.

    Args:
        mission: Mission to check (completed flag may be set)
        territories: Registry of territories by id
        players: Player roster by id
        owner_id: Player the mission belongs to

    Returns:
        True if the mission is (now or already) completed
    """
    if mission.completed:
        return True
    if _objective_met(mission, territories, players, owner_id):
        mission.completed = True
        return True
    return False
