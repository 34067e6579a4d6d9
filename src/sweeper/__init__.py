"""
Minesweeper board engine.

Provides the immutable grid, the pure reveal/flag/mine-placement
operations, a game session, and a Gymnasium environment.
"""
from .cell import Cell, CellStatus
from .board import (
    Difficulty,
    Grid,
    RevealResult,
    EASY,
    MEDIUM,
    HARD,
    DIFFICULTIES,
    get_difficulty,
    create_grid,
    place_mines,
    reveal,
    toggle_flag,
    chord,
    check_win,
    count_flags,
    mines_remaining,
    hidden_positions,
    to_observation,
)
from .session import Game, GamePhase
from .environment import MinesweeperEnv, make_vec_env

__version__ = "1.0.0"

__all__ = [
    "Cell",
    "CellStatus",
    "Difficulty",
    "Grid",
    "RevealResult",
    "EASY",
    "MEDIUM",
    "HARD",
    "DIFFICULTIES",
    "get_difficulty",
    "create_grid",
    "place_mines",
    "reveal",
    "toggle_flag",
    "chord",
    "check_win",
    "count_flags",
    "mines_remaining",
    "hidden_positions",
    "to_observation",
    "Game",
    "GamePhase",
    "MinesweeperEnv",
    "make_vec_env",
]
