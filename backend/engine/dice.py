"""
Dice rolling.
The roller is passed into combat explicitly so tests can script the rolls.
"""

import random
from collections.abc import Iterable

from backend.engine import DICE_SIDES


class DiceRoller:
    """
    Uniform d6 roller backed by its own random.Random.

    With seed=None the generator seeds itself from OS entropy once, when the
    roller is constructed. Not safe to share between threads.
    """

    def __init__(self, seed: int | None = None, sides: int = DICE_SIDES):
        self.sides = sides
        self._rng = random.Random(seed)

    def roll(self) -> int:
        return self._rng.randint(1, self.sides)

    def roll_many(self, count: int) -> list[int]:
        """Roll `count` dice, in roll order (unsorted)."""
        return [self.roll() for _ in range(count)]


class ScriptedDiceRoller(DiceRoller):
    """
    Replays a fixed sequence of rolls. Used by tests and replays.

    Raises ValueError when the script runs out or holds a value that
    cannot come off a die.
    """

    def __init__(self, values: Iterable[int], sides: int = DICE_SIDES):
        super().__init__(seed=0, sides=sides)
        self._values = list(values)
        self._position = 0
        for value in self._values:
            if not 1 <= value <= sides:
                raise ValueError(f"Scripted roll {value} outside 1..{sides}")

    @property
    def remaining(self) -> int:
        return len(self._values) - self._position

    def roll(self) -> int:
        if self._position >= len(self._values):
            raise ValueError(
                f"Scripted dice exhausted after {len(self._values)} rolls")
        value = self._values[self._position]
        self._position += 1
        return value


def sort_descending(values: Iterable[int]) -> list[int]:
    """Return a new list sorted highest first (dice are paired by position)."""
    return sorted(values, reverse=True)
