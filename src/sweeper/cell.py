"""
Cell module for the Minesweeper board engine.

Represents individual grid positions with their state
(hidden/revealed/flagged) and content (mine/number).
"""
from dataclasses import dataclass, replace
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

class CellStatus(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    A single position in the Minesweeper grid.

    Cells are immutable. Engine operations build changed copies with
    ``with_status`` and friends, so a grid handed to the engine is never
    modified.

    Attributes:
        row: Row index, fixed at creation.
        col: Column index, fixed at creation.
        is_mine: Whether this cell contains a mine.
        status: Current visual state (hidden, revealed, or flagged).
        neighbor_mines: Count of mines in neighboring cells (0-8).
            Only meaningful for non-mine cells.
        is_exploded: True only on the mine that was clicked to lose.
    """

    row: int
    col: int
    is_mine: bool = False
    status: CellStatus = CellStatus.HIDDEN
    neighbor_mines: int = 0
    is_exploded: bool = False

    def with_status(self, status: CellStatus) -> "Cell":
        """Return a copy of this cell with a different status."""
        return replace(self, status=status)

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.status == CellStatus.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.status == CellStatus.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.status == CellStatus.FLAGGED

    def to_observation(self) -> int:
        """
        Convert cell to an observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with neighbor mine count
            9: Revealed mine (game over state)
        """
        if self.status == CellStatus.HIDDEN:
            return -1
        if self.status == CellStatus.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.neighbor_mines
