"""
Board module for the Minesweeper board engine.

Implements the difficulty presets, the immutable grid, and the pure
operations over it: grid creation, deferred mine placement with a safe
opening zone, flood-fill revealing, flagging, and win/flag queries.

Every operation takes a grid and returns a new one. The grid passed in is
never modified, so callers can keep earlier grids around and swap in the
returned one after each call.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, NamedTuple, Optional, Sequence, Set, Tuple

import numpy as np

from .cell import Cell, CellStatus

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

# Chebyshev radius around the first click that never receives a mine.
SAFE_ZONE_RADIUS = 1


def _largest_safe_zone(rows: int, cols: int) -> int:
    """Size of the biggest safe zone a first click can produce."""
    side = 2 * SAFE_ZONE_RADIUS + 1
    return min(rows, side) * min(cols, side)


@dataclass(frozen=True)
class Difficulty:
    """
    Immutable board preset.

    Attributes:
        name: Display name of the preset.
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Total mines to place.
    """

    name: str
    rows: int
    cols: int
    mine_count: int

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure the mines always fit outside the safe zone."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mine_count < 0:
            raise ValueError("Number of mines cannot be negative")
        if self.mine_count > self.max_mines:
            raise ValueError(
                f"Too many mines for a {self.rows}x{self.cols} board "
                f"(max {self.max_mines})"
            )

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.total_cells - self.mine_count

    @property
    def max_mines(self) -> int:
        """Most mines that fit wherever the first click lands."""
        return self.total_cells - _largest_safe_zone(self.rows, self.cols)


# Preset difficulty levels
EASY = Difficulty("Easy", 9, 9, 10)
MEDIUM = Difficulty("Medium", 16, 16, 40)
HARD = Difficulty("Hard", 16, 30, 99)

DIFFICULTIES: Dict[str, Difficulty] = {
    preset.name.lower(): preset for preset in (EASY, MEDIUM, HARD)
}


def get_difficulty(name: str) -> Difficulty:
    """
    Look up a preset by name, ignoring case.

    Raises:
        ValueError: If no preset has that name.
    """
    try:
        return DIFFICULTIES[name.strip().lower()]
    except KeyError:
        known = ", ".join(DIFFICULTIES)
        raise ValueError(
            f"Unknown difficulty {name!r} (expected one of: {known})"
        ) from None


# ============================================================================
# Neighbor Utilities (Low-level)
# ============================================================================

def _neighbors(rows: int, cols: int, row: int, col: int) -> List[Position]:
    """Get the in-bounds 8-neighbors of a position."""
    neighbors = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if 0 <= new_row < rows and 0 <= new_col < cols:
                neighbors.append((new_row, new_col))
    return neighbors


def _in_safe_zone(row: int, col: int, safe_row: int, safe_col: int) -> bool:
    return (
        abs(row - safe_row) <= SAFE_ZONE_RADIUS
        and abs(col - safe_col) <= SAFE_ZONE_RADIUS
    )


# ============================================================================
# Grid Class
# ============================================================================

class Grid:
    """
    Immutable rectangular collection of cells indexed by (row, col).

    Use ``thaw`` to get a mutable working copy and pass the edited rows
    back to the constructor to freeze a new grid.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Sequence[Sequence[Cell]]) -> None:
        frozen = tuple(tuple(row) for row in cells)
        if not frozen or not frozen[0]:
            raise ValueError("Grid must have at least one row and one column")
        width = len(frozen[0])
        if any(len(row) != width for row in frozen):
            raise ValueError("Grid rows must all have the same length")
        self._cells: Tuple[Tuple[Cell, ...], ...] = frozen

    @property
    def rows(self) -> int:
        return len(self._cells)

    @property
    def cols(self) -> int:
        return len(self._cells[0])

    @property
    def mine_count(self) -> int:
        """Number of cells holding a mine."""
        return sum(1 for cell in self if cell.is_mine)

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        """
        Get the cell at a position.

        Raises:
            IndexError: If the position is outside the grid.
        """
        if not self.in_bounds(row, col):
            raise IndexError(
                f"Position ({row}, {col}) is outside the "
                f"{self.rows}x{self.cols} grid"
            )
        return self._cells[row][col]

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.in_bounds(row, col):
            return None
        return self._cells[row][col]

    def neighbors(self, row: int, col: int) -> List[Position]:
        """Get valid neighboring cell positions."""
        return _neighbors(self.rows, self.cols, row, col)

    def thaw(self) -> List[List[Cell]]:
        """Return the cells as a mutable list of rows."""
        return [list(row) for row in self._cells]

    def __iter__(self) -> Iterator[Cell]:
        for row in self._cells:
            yield from row

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols})"


class RevealResult(NamedTuple):
    """Outcome of a reveal: the new grid and whether a mine went off."""

    grid: Grid
    exploded: bool


# ============================================================================
# Grid Creation and Mine Placement
# ============================================================================

def create_grid(rows: int, cols: int) -> Grid:
    """
    Create an empty grid with every cell hidden and mine-free.

    Raises:
        ValueError: If a dimension is not positive.
    """
    if rows < 1 or cols < 1:
        raise ValueError("Board dimensions must be positive")
    return Grid([[Cell(row, col) for col in range(cols)] for row in range(rows)])


def place_mines(
    grid: Grid,
    difficulty: Difficulty,
    safe_row: int,
    safe_col: int,
    rng: Optional[random.Random] = None,
) -> Grid:
    """
    Place mines randomly, keeping the first click and its neighbors clear.

    Mines are drawn without replacement from every cell outside the
    3x3 zone around (safe_row, safe_col), then neighbor counts are
    computed for the remaining cells.

    Args:
        grid: Empty grid matching the difficulty's dimensions.
        difficulty: Preset supplying the mine count.
        safe_row: Row of the first click.
        safe_col: Column of the first click.
        rng: Random source with a ``sample`` method. Defaults to the
            ``random`` module.

    Returns:
        New grid with mines placed and neighbor counts filled in.

    Raises:
        ValueError: If the grid does not match the difficulty, already
            holds mines, or has too few eligible cells.
        IndexError: If the safe position is outside the grid.
    """
    if (grid.rows, grid.cols) != (difficulty.rows, difficulty.cols):
        raise ValueError(
            f"Grid is {grid.rows}x{grid.cols} but difficulty "
            f"{difficulty.name!r} is {difficulty.rows}x{difficulty.cols}"
        )
    grid.cell(safe_row, safe_col)
    if grid.mine_count:
        raise ValueError("Mines have already been placed on this grid")

    positions = _get_valid_mine_positions(grid, safe_row, safe_col)
    if difficulty.mine_count > len(positions):
        raise ValueError(
            f"Cannot place {difficulty.mine_count} mines in "
            f"{len(positions)} eligible cells"
        )

    source = rng if rng is not None else random
    mine_positions = source.sample(positions, difficulty.mine_count)

    cells = grid.thaw()
    for row, col in mine_positions:
        cells[row][col] = replace(cells[row][col], is_mine=True)
    _calculate_neighbor_mines(cells)

    logger.debug(
        "Placed %d mines on %dx%d grid, safe at (%d, %d)",
        len(mine_positions), grid.rows, grid.cols, safe_row, safe_col,
    )
    return Grid(cells)


def _get_valid_mine_positions(
    grid: Grid, safe_row: int, safe_col: int
) -> List[Position]:
    """Get all positions outside the safe zone."""
    positions = []
    for row in range(grid.rows):
        for col in range(grid.cols):
            if not _in_safe_zone(row, col, safe_row, safe_col):
                positions.append((row, col))
    return positions


def _calculate_neighbor_mines(cells: List[List[Cell]]) -> None:
    """Fill in neighbor mine counts for all non-mine cells."""
    rows, cols = len(cells), len(cells[0])
    for row in range(rows):
        for col in range(cols):
            cell = cells[row][col]
            if cell.is_mine:
                continue
            count = sum(
                1 for neighbor_row, neighbor_col in _neighbors(rows, cols, row, col)
                if cells[neighbor_row][neighbor_col].is_mine
            )
            cells[row][col] = replace(cell, neighbor_mines=count)


# ============================================================================
# Game Actions (Mid-level)
# ============================================================================

def reveal(grid: Grid, row: int, col: int) -> RevealResult:
    """
    Reveal a cell.

    A mine explodes and uncovers every other mine on the grid. Any other
    cell is revealed with a breadth-first flood fill that spreads through
    zero-count cells and stops at numbered ones. Cells that are already
    revealed or flagged are left alone.

    Raises:
        IndexError: If the position is outside the grid.
    """
    target = grid.cell(row, col)
    cells = grid.thaw()

    if target.is_mine:
        _explode(cells, row, col)
        logger.debug("Mine hit at (%d, %d)", row, col)
        return RevealResult(Grid(cells), True)

    revealed = _flood_fill(cells, row, col)
    logger.debug("Revealed %d cells from (%d, %d)", revealed, row, col)
    return RevealResult(Grid(cells), False)


def _explode(cells: List[List[Cell]], row: int, col: int) -> None:
    """Mark the clicked mine as exploded and uncover all mines."""
    cells[row][col] = replace(
        cells[row][col], status=CellStatus.REVEALED, is_exploded=True
    )
    for row_cells in cells:
        for index, cell in enumerate(row_cells):
            if cell.is_mine and not cell.is_revealed:
                row_cells[index] = cell.with_status(CellStatus.REVEALED)


def _flood_fill(cells: List[List[Cell]], row: int, col: int) -> int:
    """Reveal outward from a position; returns the number of cells revealed."""
    rows, cols = len(cells), len(cells[0])
    queue = deque([(row, col)])
    visited: Set[Position] = set()
    revealed = 0

    while queue:
        position = queue.popleft()
        if position in visited:
            continue
        visited.add(position)

        current_row, current_col = position
        cell = cells[current_row][current_col]
        if cell.status != CellStatus.HIDDEN:
            continue

        cells[current_row][current_col] = cell.with_status(CellStatus.REVEALED)
        revealed += 1

        if cell.is_mine or cell.neighbor_mines != 0:
            continue
        for neighbor_row, neighbor_col in _neighbors(
            rows, cols, current_row, current_col
        ):
            neighbor = cells[neighbor_row][neighbor_col]
            if neighbor.is_hidden and not neighbor.is_mine:
                queue.append((neighbor_row, neighbor_col))

    return revealed


def toggle_flag(grid: Grid, row: int, col: int) -> Grid:
    """
    Toggle the flag on a cell. Revealed cells are left unchanged.

    Raises:
        IndexError: If the position is outside the grid.
    """
    cell = grid.cell(row, col)
    if cell.is_revealed:
        return grid

    if cell.is_hidden:
        status = CellStatus.FLAGGED
    else:
        status = CellStatus.HIDDEN
    cells = grid.thaw()
    cells[row][col] = cell.with_status(status)
    return Grid(cells)


def chord(grid: Grid, row: int, col: int) -> RevealResult:
    """
    Chord action: reveal all unflagged neighbors if flag count matches.

    Only applies to a revealed numbered cell whose flagged neighbors
    equal its neighbor mine count. A wrongly placed flag means one of the
    revealed neighbors is a mine, which explodes as in ``reveal``.

    Raises:
        IndexError: If the position is outside the grid.
    """
    cell = grid.cell(row, col)
    unchanged = RevealResult(grid, False)
    if not cell.is_revealed or cell.is_mine or cell.neighbor_mines == 0:
        return unchanged

    neighbors = grid.neighbors(row, col)
    flag_count = sum(1 for r, c in neighbors if grid.cell(r, c).is_flagged)
    if flag_count != cell.neighbor_mines:
        return unchanged

    result = unchanged
    for neighbor_row, neighbor_col in neighbors:
        if result.grid.cell(neighbor_row, neighbor_col).is_hidden:
            result = reveal(result.grid, neighbor_row, neighbor_col)
            if result.exploded:
                break
    return result


# ============================================================================
# State Queries (High-level)
# ============================================================================

def check_win(grid: Grid) -> bool:
    """Check if every non-mine cell is revealed."""
    return all(cell.is_revealed for cell in grid if not cell.is_mine)


def count_flags(grid: Grid) -> int:
    """Count flagged cells."""
    return sum(1 for cell in grid if cell.is_flagged)


def mines_remaining(grid: Grid, difficulty: Difficulty) -> int:
    """Mines left to flag, clamped at zero when the player over-flags."""
    return max(0, difficulty.mine_count - count_flags(grid))


def hidden_positions(grid: Grid) -> List[Position]:
    """
    Get list of cells that can still be revealed.

    Returns:
        List of (row, col) positions of hidden cells.
    """
    return [(cell.row, cell.col) for cell in grid if cell.is_hidden]


def to_observation(grid: Grid) -> np.ndarray:
    """
    Get grid state as a numpy array.

    Returns:
        2D int8 array where:
            -1 = hidden
            -2 = flagged
            0-8 = revealed with neighbor count
            9 = revealed mine
    """
    obs = np.zeros((grid.rows, grid.cols), dtype=np.int8)
    for cell in grid:
        obs[cell.row, cell.col] = cell.to_observation()
    return obs
