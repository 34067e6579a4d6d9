"""
Game session for the Minesweeper board engine.

Holds the current grid and game phase, decides when mines get placed,
and tracks elapsed time. The pure operations in ``board`` do the work;
this module only sequences them the way an interactive front end would.
"""
import logging
import random
import time
from enum import Enum, auto
from typing import Callable, Optional

from .board import (
    EASY,
    Difficulty,
    Grid,
    RevealResult,
    check_win,
    chord,
    create_grid,
    mines_remaining,
    place_mines,
    reveal,
    toggle_flag,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GamePhase(Enum):
    """Possible phases of a game."""

    IDLE = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    Single-player Minesweeper game.

    The grid starts empty. The first click places mines around it and
    then reveals, so the opening is always safe. Each action swaps in the
    grid returned by the engine; grids handed out earlier stay valid.
    """

    def __init__(
        self,
        difficulty: Difficulty = EASY,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize a new game.

        Args:
            difficulty: Board preset to play.
            rng: Random source for mine placement (default: ``random``).
            clock: Monotonic time source used for elapsed time.
        """
        self.difficulty = difficulty
        self._rng = rng
        self._clock = clock
        self.reset()

    def reset(self, difficulty: Optional[Difficulty] = None) -> None:
        """Start over with an empty grid, optionally switching presets."""
        if difficulty is not None:
            self.difficulty = difficulty
        self.grid: Grid = create_grid(self.difficulty.rows, self.difficulty.cols)
        self.phase = GamePhase.IDLE
        self._started_at: Optional[float] = None
        self._finished_at: Optional[float] = None

    # ========================================================================
    # Game Actions
    # ========================================================================

    def click(self, row: int, col: int) -> bool:
        """
        Reveal a cell.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if the click was applied, False if the game is over, the
            position is invalid, or the cell is not hidden.
        """
        if self.is_over:
            return False
        cell = self.grid.get_cell(row, col)
        if cell is None or not cell.is_hidden:
            return False

        if self.phase == GamePhase.IDLE:
            self._start(row, col)

        self._apply(reveal(self.grid, row, col))
        return True

    def flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if self.is_over:
            return False
        cell = self.grid.get_cell(row, col)
        if cell is None or cell.is_revealed:
            return False
        self.grid = toggle_flag(self.grid, row, col)
        return True

    def chord(self, row: int, col: int) -> bool:
        """
        Reveal the unflagged neighbors of a satisfied numbered cell.

        Returns:
            True if any cell changed, False otherwise.
        """
        if self.phase != GamePhase.PLAYING:
            return False
        if not self.grid.in_bounds(row, col):
            return False
        result = chord(self.grid, row, col)
        if result.grid is self.grid:
            return False
        self._apply(result)
        return True

    def _start(self, row: int, col: int) -> None:
        """Handle first click: place mines and start the clock."""
        self.grid = place_mines(self.grid, self.difficulty, row, col, self._rng)
        self.phase = GamePhase.PLAYING
        self._started_at = self._clock()
        logger.info(
            "Started %s game at (%d, %d)", self.difficulty.name, row, col
        )

    def _apply(self, result: RevealResult) -> None:
        """Swap in a reveal result and update the phase."""
        self.grid = result.grid
        if result.exploded:
            self._finish(GamePhase.LOST)
        elif check_win(self.grid):
            self._finish(GamePhase.WON)

    def _finish(self, phase: GamePhase) -> None:
        self.phase = phase
        self._finished_at = self._clock()
        logger.info(
            "Game %s after %.1f seconds", phase.name.lower(), self.elapsed
        )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def is_over(self) -> bool:
        """Check if the game has ended."""
        return self.phase in (GamePhase.WON, GamePhase.LOST)

    @property
    def mines_remaining(self) -> int:
        """Mine counter for display, never negative."""
        return mines_remaining(self.grid, self.difficulty)

    @property
    def elapsed(self) -> float:
        """Seconds since the first click, frozen once the game ends."""
        if self._started_at is None:
            return 0.0
        end = self._finished_at if self._finished_at is not None else self._clock()
        return end - self._started_at
