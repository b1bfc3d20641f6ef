"""
Game events for UI hooks and logging.
Events describe what happened during action processing.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        return cls(type=data["type"], payload=data["payload"])


# ===== Event Type Constants =====

# Combat events
ATTACK_RESOLVED = "attack_resolved"
ATTACK_REJECTED = "attack_rejected"

# Territory events
TERRITORY_CAPTURED = "territory_captured"

# Mission events
MISSION_COMPLETED = "mission_completed"

# Victory events
VICTORY = "victory"


# ===== Event Factory Functions =====

def attack_resolved(
    player: int,
    outcome: dict[str, Any],
    attacker_troops: int,
    defender_troops: int,
) -> GameEvent:
    """
    Emitted for every attack that rolled dice.

    outcome is AttackOutcome.to_dict(); attacker_troops/defender_troops are
    the troop counts after losses and any conquest transfer.
    """
    return GameEvent(ATTACK_RESOLVED, {
        "player": player,
        "outcome": outcome,
        "attacker_troops": attacker_troops,
        "defender_troops": defender_troops,
    })


def attack_rejected(
    player: int,
    attacker_id: int,
    defender_id: int,
    reason: str,
) -> GameEvent:
    return GameEvent(ATTACK_REJECTED, {
        "player": player,
        "attacker_id": attacker_id,
        "defender_id": defender_id,
        "reason": reason,
    })


def territory_captured(
    territory: int,
    old_owner: int | None,
    new_owner: int | None,
    troops_moved: int,
    from_territory: int,
) -> GameEvent:
    return GameEvent(TERRITORY_CAPTURED, {
        "territory": territory,
        "old_owner": old_owner,
        "new_owner": new_owner,
        "troops_moved": troops_moved,
        "from_territory": from_territory,
    })


def mission_completed(
    player: int,
    mission_index: int,
    description: str,
    objective: dict[str, Any],
) -> GameEvent:
    return GameEvent(MISSION_COMPLETED, {
        "player": player,
        "mission_index": mission_index,
        "description": description,
        "objective": objective,
    })


def victory(
    winner: int,
    completed_missions: list[str],
) -> GameEvent:
    """
    Emitted when a player completes every one of their missions.

    Args:
        winner: The winning player id
        completed_missions: Descriptions of the winner's missions
    """
    return GameEvent(VICTORY, {
        "winner": winner,
        "completed_missions": completed_missions,
    })
