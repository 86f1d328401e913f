"""
Gymnasium environment wrapper for 3D Minesweeper.

Provides a standard RL interface on top of GameEngine.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, ConfigSelector, Difficulty, resolve_config
from .cell import MINE_VALUE
from .engine import GameEngine


# ============================================================================
# Minesweeper Environment
# ============================================================================

class CubeSweeperEnv(gym.Env):
    """
    Gymnasium environment for 3D Minesweeper.

    Observation:
        3D array indexed [x, y, z] where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-26 = revealed cell with neighbour mine count
        - 27 = revealed mine

    Actions:
        Discrete action space of size size**3.
        Action i corresponds to numpy.unravel_index(i, (size, size, size)).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: ConfigSelector = Difficulty.EASY,
        render_mode: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Difficulty, difficulty name or BoardConfig.
            render_mode: How to render the environment.
            seed: Seed for mine placement.
        """
        super().__init__()

        self.selector = config
        self.config, _ = resolve_config(config)
        self.engine = GameEngine(seed=seed)
        self.engine.generate(self.selector)
        self.render_mode = render_mode

        self.shape = (self.config.size,) * 3

        self.observation_space = spaces.Box(
            low=-2,
            high=MINE_VALUE,
            shape=self.shape,
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    @property
    def board(self) -> Board:
        return self.engine.board

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.engine.seed(seed)
        self.engine.restart()
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat cell index to reveal.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        position = self.action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(position)

        observation = self.board.get_observation()
        terminated = not self.board.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def action_to_position(self, action: int) -> Tuple[int, int, int]:
        """Convert flat action index to (x, y, z) position."""
        x, y, z = np.unravel_index(int(action), self.shape)
        return int(x), int(y), int(z)

    def position_to_action(self, x: int, y: int, z: int) -> int:
        """Convert (x, y, z) position to flat action index."""
        return int(np.ravel_multi_index((x, y, z), self.shape))

    def _calculate_reward(self, position: Tuple[int, int, int]) -> float:
        """Reveal a cell through the engine and score the outcome."""
        cell = self.board.get_cell(*position)

        if cell is None or not cell.is_hidden:
            return -0.1

        self.engine.reveal(*position)

        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count,
            "total_safe": self.board.total_safe_cells,
            "game_state": self.board.status.name,
            "valid_actions": len(self.board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render the cube as one ASCII grid per z layer."""
        obs = self.board.get_observation()
        size = self.config.size
        lines = []

        for z in range(size):
            lines.append(f"z={z}")
            for y in range(size):
                row_str = ""
                for x in range(size):
                    row_str += _cell_glyph(int(obs[x, y, z])) + " "
                lines.append(row_str.rstrip())
            lines.append("")

        return "\n".join(lines).rstrip("\n")

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for position in self.board.get_valid_actions():
            mask[self.position_to_action(*position)] = True
        return mask


def _cell_glyph(value: int) -> str:
    if value == -1:
        return "."
    if value == -2:
        return "F"
    if value == MINE_VALUE:
        return "*"
    if value == 0:
        return " "
    # Counts above 9 do not fit one column
    return str(value) if value < 10 else "#"


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: ConfigSelector = Difficulty.EASY,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel rollouts.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> CubeSweeperEnv:
        return CubeSweeperEnv(config=config)

    return gym.vector.AsyncVectorEnv([make_env for _ in range(n_envs)])
