"""
Game state representation.
Territories, players and missions are plain dataclasses keyed by integer id.
The reducer works on deep copies; combat mutates only the two records it is given.
"""

from dataclasses import dataclass, field
from copy import deepcopy
from typing import Any


@dataclass
class Territory:
    """State of a single territory."""
    id: int  # Stable index in the registry
    name: str
    color: str  # Display color / occupant label
    troops: int  # Never negative
    owner: int | None = None  # player id, or None if neutral

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "troops": self.troops,
            "owner": self.owner,
        }


@dataclass(frozen=True)
class Player:
    """A participant. Immutable; referenced by id everywhere else."""
    id: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


# ===== Mission objectives =====
# One dataclass per objective kind; each carries only its own parameters.

MISSION_CONQUER_TERRITORIES = "conquer_territories"
MISSION_ELIMINATE_PLAYER = "eliminate_player"
MISSION_HAVE_TROOPS_TOTAL = "have_troops_total"


@dataclass(frozen=True)
class ConquerTerritories:
    """Own at least required_count territories."""
    required_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"type": MISSION_CONQUER_TERRITORIES, "required_count": self.required_count}


@dataclass(frozen=True)
class EliminatePlayer:
    """Leave target_player_id without any territory."""
    target_player_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"type": MISSION_ELIMINATE_PLAYER, "target_player_id": self.target_player_id}


@dataclass(frozen=True)
class HaveTroopsTotal:
    """Hold at least required_count troops across owned territories."""
    required_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"type": MISSION_HAVE_TROOPS_TOTAL, "required_count": self.required_count}


MissionObjective = ConquerTerritories | EliminatePlayer | HaveTroopsTotal


@dataclass
class Mission:
    """A victory condition. completed only ever goes from False to True."""
    description: str
    objective: MissionObjective
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "objective": self.objective.to_dict(),
            "completed": self.completed,
        }


@dataclass
class GameState:
    """Complete game state."""
    territories: dict[int, Territory]  # territory_id -> Territory
    players: dict[int, Player]  # player_id -> Player
    # player_id -> missions owned by that player
    missions: dict[int, list[Mission]] = field(default_factory=dict)
    # Number of attack actions applied (valid or rejected)
    attack_count: int = 0
    # Winning player id (None while the game is ongoing)
    winner: int | None = None
    # Setup this state was created from (e.g. "demo")
    setup_id: str | None = None

    def copy(self) -> "GameState":
        """Return a deep copy of this game state."""
        return deepcopy(self)

    def territories_owned_by(self, player_id: int | None) -> list[Territory]:
        return [t for t in self.territories.values() if t.owner == player_id]

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view for summaries and event payloads."""
        return {
            "territories": {tid: t.to_dict() for tid, t in self.territories.items()},
            "players": {pid: p.to_dict() for pid, p in self.players.items()},
            "missions": {
                pid: [m.to_dict() for m in missions]
                for pid, missions in self.missions.items()
            },
            "attack_count": self.attack_count,
            "winner": self.winner,
            "setup_id": self.setup_id,
        }
