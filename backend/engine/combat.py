"""
Combat resolution system.
One attack = one exchange of dice between an attacking and a defending territory.
Dice are sorted high to low and paired by position; ties go to the defender.
Rule rejections are returned as an "invalid" outcome, never raised.
"""

from dataclasses import dataclass, field
from typing import Any

from backend.engine import MAX_ATTACKER_DICE, MAX_DEFENDER_DICE
from backend.engine.dice import DiceRoller, sort_descending
from backend.engine.state import Territory

OUTCOME_INVALID = "invalid"
OUTCOME_REPELLED = "repelled"
OUTCOME_CONQUERED = "conquered"

# Invalid outcome reasons
REASON_NOT_FOUND = "not_found"
REASON_SAME_OWNER = "same_owner"
REASON_INSUFFICIENT_TROOPS = "insufficient_troops"

# An attacker must risk one troop and keep one at home.
MIN_ATTACKING_TROOPS = 2


@dataclass
class AttackOutcome:
    """Result of a single attack."""
    kind: str  # OUTCOME_INVALID, OUTCOME_REPELLED or OUTCOME_CONQUERED
    attacker_id: int
    defender_id: int
    reason: str | None = None  # Only set when kind is OUTCOME_INVALID
    attacker_dice: int = 0  # Dice count used by the attacker
    defender_dice: int = 0
    attacker_rolls: list[int] = field(default_factory=list)  # sorted high to low
    defender_rolls: list[int] = field(default_factory=list)  # sorted high to low
    attacker_losses: int = 0
    defender_losses: int = 0
    troops_transferred: int | None = None  # Only set when kind is OUTCOME_CONQUERED

    @property
    def is_valid(self) -> bool:
        return self.kind != OUTCOME_INVALID

    @property
    def conquered(self) -> bool:
        return self.kind == OUTCOME_CONQUERED

    @property
    def comparisons(self) -> int:
        return min(len(self.attacker_rolls), len(self.defender_rolls))

    def to_dict(self) -> dict[str, Any]:
        out = {
            "kind": self.kind,
            "attacker_id": self.attacker_id,
            "defender_id": self.defender_id,
            "attacker_dice": self.attacker_dice,
            "defender_dice": self.defender_dice,
            "attacker_rolls": self.attacker_rolls,
            "defender_rolls": self.defender_rolls,
            "attacker_losses": self.attacker_losses,
            "defender_losses": self.defender_losses,
        }
        if self.reason is not None:
            out["reason"] = self.reason
        if self.troops_transferred is not None:
            out["troops_transferred"] = self.troops_transferred
        return out


def get_attack_rejection(
    territories: dict[int, Territory],
    attacker_id: int,
    defender_id: int,
) -> str | None:
    """
    Check attack preconditions. Returns a REASON_* code, or None if the attack may proceed.

    Checked in order: both territories exist, different owners,
    attacker has at least MIN_ATTACKING_TROOPS.
    """
    attacker = territories.get(attacker_id)
    defender = territories.get(defender_id)
    if attacker is None or defender is None:
        return REASON_NOT_FOUND
    if attacker.owner == defender.owner:
        return REASON_SAME_OWNER
    if attacker.troops < MIN_ATTACKING_TROOPS:
        return REASON_INSUFFICIENT_TROOPS
    return None


def calculate_dice_counts(
    attacker_troops: int,
    defender_troops: int,
    attacker_dice_limit: int = MAX_ATTACKER_DICE,
    defender_dice_limit: int = MAX_DEFENDER_DICE,
) -> tuple[int, int]:
    """
    Dice each side rolls: attacker up to troops-1, defender up to troops.
    Both capped by their limit and floored at 1.
    """
    attacker_dice = max(1, min(attacker_troops - 1, attacker_dice_limit))
    defender_dice = max(1, min(defender_troops, defender_dice_limit))
    return attacker_dice, defender_dice


def compare_dice(attacker_rolls: list[int], defender_rolls: list[int]) -> tuple[int, int]:
    """
    Pair sorted rolls highest-to-highest and count losses.

    The attacker needs a strictly higher die to win a pair; a tie is a
    defender win. Every compared pair produces exactly one loss.

    Returns:
        (attacker_losses, defender_losses)
    """
    attacker_losses = 0
    defender_losses = 0
    for attack_roll, defend_roll in zip(attacker_rolls, defender_rolls):
        if attack_roll > defend_roll:
            defender_losses += 1
        else:
            attacker_losses += 1
    return attacker_losses, defender_losses


def calculate_conquest_transfer(attacker_dice: int, attacker_troops: int) -> int:
    """
    Troops moved into a conquered territory.

    Moves as many troops as dice rolled, but leaves at least one behind,
    and always moves at least one.
    """
    transfer = attacker_dice
    if transfer >= attacker_troops:
        transfer = attacker_troops - 1
    if transfer < 1:
        transfer = 1
    return transfer


def resolve_attack(
    territories: dict[int, Territory],
    attacker_id: int,
    defender_id: int,
    roller: DiceRoller,
    attacker_dice_limit: int = MAX_ATTACKER_DICE,
    defender_dice_limit: int = MAX_DEFENDER_DICE,
) -> AttackOutcome:
    """
    Resolve one attack between two territories.

    Combat rules:
    - Attacker rolls min(troops-1, limit) dice, defender min(troops, limit), at least 1 each
    - Both pools sorted descending, compared pairwise; ties go to the defender
    - Each lost pair costs that side one troop
    - If the defender drops to 0 troops, the attacker's owner takes the territory
      and moves calculate_conquest_transfer() troops into it

    Note: This function MODIFIES the attacker and defender Territory records in
    place. No other territory is touched. Invalid attacks change nothing and
    roll no dice.

    Args:
        territories: Registry of territories by id
        attacker_id: Attacking territory id
        defender_id: Defending territory id
        roller: Source of dice rolls
        attacker_dice_limit: Rule cap on attacker dice (classic 3)
        defender_dice_limit: Rule cap on defender dice (classic 2)

    Returns:
        AttackOutcome with dice, losses and (on conquest) the transfer
    """
    reason = get_attack_rejection(territories, attacker_id, defender_id)
    if reason is not None:
        return AttackOutcome(
            kind=OUTCOME_INVALID,
            attacker_id=attacker_id,
            defender_id=defender_id,
            reason=reason,
        )

    attacker = territories[attacker_id]
    defender = territories[defender_id]

    attacker_dice, defender_dice = calculate_dice_counts(
        attacker.troops, defender.troops, attacker_dice_limit, defender_dice_limit)

    attacker_rolls = sort_descending(roller.roll_many(attacker_dice))
    defender_rolls = sort_descending(roller.roll_many(defender_dice))

    attacker_losses, defender_losses = compare_dice(attacker_rolls, defender_rolls)

    attacker.troops = max(0, attacker.troops - attacker_losses)
    defender.troops = max(0, defender.troops - defender_losses)

    outcome = AttackOutcome(
        kind=OUTCOME_REPELLED,
        attacker_id=attacker_id,
        defender_id=defender_id,
        attacker_dice=attacker_dice,
        defender_dice=defender_dice,
        attacker_rolls=attacker_rolls,
        defender_rolls=defender_rolls,
        attacker_losses=attacker_losses,
        defender_losses=defender_losses,
    )

    if defender.troops <= 0:
        transfer = calculate_conquest_transfer(attacker_dice, attacker.troops)
        defender.owner = attacker.owner
        attacker.troops -= transfer
        defender.troops = transfer
        outcome.kind = OUTCOME_CONQUERED
        outcome.troops_transferred = transfer

    return outcome
