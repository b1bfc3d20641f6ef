"""
Shared pytest fixtures for the engine tests.

- demo_state: the bundled "demo" setup (Alice, Bob, Carol on six territories)
- make_board: build a small territory registry from (troops, owner) pairs
- players: a three-player roster
"""

import pytest

from backend.engine.state import Territory, Player
from backend.engine.utils import new_game


@pytest.fixture
def demo_state():
    """
    Fresh state from data/setups/demo.

    Territories: 0 Brasil(5, Alice), 1 Argentina(3, Alice), 2 EUA(6, Bob),
    3 Canada(2, Bob), 4 China(4, Carol), 5 India(3, Carol).
    Alice (0) has two missions: conquer 3 territories, eliminate Carol (2).
    """
    return new_game("demo")


@pytest.fixture
def players():
    return {
        0: Player(0, "Alice"),
        1: Player(1, "Bob"),
        2: Player(2, "Carol"),
    }


@pytest.fixture
def make_board():
    """
    Factory: make_board((5, 0), (6, 1)) -> {0: Territory(troops=5, owner=0), 1: ...}
    Territory ids follow argument order.
    """
    def _make(*layout: tuple[int, int | None]) -> dict[int, Territory]:
        return {
            index: Territory(id=index, name=f"T{index}", color="", troops=troops, owner=owner)
            for index, (troops, owner) in enumerate(layout)
        }
    return _make
