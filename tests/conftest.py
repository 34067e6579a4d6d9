"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Iterable, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import MEDIUM, Difficulty, Game, Grid, create_grid


GridBuilder = Callable[[int, int, Iterable[Tuple[int, int]]], Grid]


def build_grid(rows: int, cols: int, mines: Iterable[Tuple[int, int]]) -> Grid:
    """Build a grid with mines at fixed positions and counts filled in."""
    mine_set = set(mines)
    cells = create_grid(rows, cols).thaw()
    for row in range(rows):
        for col in range(cols):
            count = sum(
                1
                for r in range(row - 1, row + 2)
                for c in range(col - 1, col + 2)
                if (r, c) != (row, col) and (r, c) in mine_set
            )
            is_mine = (row, col) in mine_set
            cells[row][col] = replace(
                cells[row][col],
                is_mine=is_mine,
                neighbor_mines=0 if is_mine else count,
            )
    return Grid(cells)


class FixedRandom:
    """Random source whose ``sample`` returns preset mine positions."""

    def __init__(self, positions: Iterable[Tuple[int, int]]) -> None:
        self.positions = list(positions)

    def sample(self, population, k):
        assert k == len(self.positions)
        assert all(position in population for position in self.positions)
        return list(self.positions)


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def grid_builder() -> GridBuilder:
    """Factory for grids with hand-placed mines."""
    return build_grid


@pytest.fixture
def empty_grid() -> Grid:
    """Create a 5x5 grid with no mines for cascade testing."""
    return create_grid(5, 5)


@pytest.fixture
def corner_mine_grid() -> Grid:
    """
    4x4 grid with a single mine in the bottom-right corner.

        0 0 0 0
        0 0 0 0
        0 0 1 1
        0 0 1 *
    """
    return build_grid(4, 4, [(3, 3)])


@pytest.fixture
def walled_grid() -> Grid:
    """
    5x5 grid split by a column of mines.

        0 2 * 2 0
        0 3 * 3 0
        0 3 * 3 0
        0 3 * 3 0
        0 2 * 2 0
    """
    return build_grid(5, 5, [(row, 2) for row in range(5)])


# ============================================================================
# Random Source Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for deterministic mine placement."""
    return random.Random(1234)


@pytest.fixture
def fixed_random() -> Callable[..., FixedRandom]:
    """Factory for random sources that place mines at given positions."""
    return FixedRandom


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def tiny_difficulty() -> Difficulty:
    """4x4 board with a single mine."""
    return Difficulty("Tiny", 4, 4, 1)


@pytest.fixture
def no_mine_difficulty() -> Difficulty:
    """3x3 board without mines; any click wins."""
    return Difficulty("Empty", 3, 3, 0)


@pytest.fixture
def game(rng: random.Random, clock: FakeClock) -> Game:
    """Medium game with seeded placement and a fake clock."""
    return Game(MEDIUM, rng=rng, clock=clock)
