"""
Gymnasium environment wrapper for Minesweeper.

Exposes a game session through the standard RL interface.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import EASY, Difficulty, hidden_positions, to_observation
from .session import Game, GamePhase


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with neighbor mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size rows * cols.
        Action i corresponds to cell at (i // cols, i % cols).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        difficulty: Optional[Difficulty] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            difficulty: Board preset (default: Easy, 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.difficulty = difficulty or EASY
        self.render_mode = render_mode
        self.game = Game(self.difficulty)

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.difficulty.rows, self.difficulty.cols),
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(
            self.difficulty.rows * self.difficulty.cols
        )

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        placement_seed = int(self.np_random.integers(2**32))
        self.game = Game(self.difficulty, rng=random.Random(placement_seed))
        self._steps = 0

        return to_observation(self.game.grid), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)
        observation = to_observation(self.game.grid)
        terminated = self.game.is_over

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return divmod(int(action), self.difficulty.cols)

    def _calculate_reward(self, row: int, col: int) -> float:
        """Reveal a cell and score the outcome."""
        if not self.game.click(row, col):
            return -0.1
        if self.game.phase == GamePhase.WON:
            return 10.0
        if self.game.phase == GamePhase.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        grid = self.game.grid
        revealed = sum(
            1 for cell in grid if cell.is_revealed and not cell.is_mine
        )
        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self.difficulty.safe_cells,
            "phase": self.game.phase.name,
            "mines_remaining": self.game.mines_remaining,
            "valid_actions": len(hidden_positions(grid)),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        symbols = {-1: ".", -2: "F", 9: "*", 0: " "}
        lines = []
        for values in to_observation(self.game.grid):
            lines.append(
                " ".join(symbols.get(int(val), str(val)) for val in values)
            )
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in hidden_positions(self.game.grid):
            mask[row * self.difficulty.cols + col] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    difficulty: Optional[Difficulty] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel rollouts.

    Args:
        n_envs: Number of parallel environments.
        difficulty: Board preset.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(difficulty=difficulty)

    return gym.vector.AsyncVectorEnv([make_env for _ in range(n_envs)])
