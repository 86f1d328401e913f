"""
Base agent interface for 3D Minesweeper.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for 3D Minesweeper agents.

    All agents must implement the select_action method to choose
    which cell to reveal based on the current observation.
    """

    def __init__(self, size: int) -> None:
        """
        Initialize the agent.

        Args:
            size: Edge length of the cube.
        """
        self.size = size
        self.shape = (size, size, size)
        self.total_cells = size ** 3

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 3D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Flat action index.
        """

    def action_to_position(self, action: int) -> Tuple[int, int, int]:
        """Convert flat action index to (x, y, z) position."""
        x, y, z = np.unravel_index(int(action), self.shape)
        return int(x), int(y), int(z)

    def position_to_action(self, x: int, y: int, z: int) -> int:
        """Convert (x, y, z) position to flat action index."""
        return int(np.ravel_multi_index((x, y, z), self.shape))

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get valid actions mask from observation.

        Returns:
            Boolean mask where True = valid action.
        """
        # Hidden cells (value -1) are valid actions
        return observation.flatten() == -1

    def reset(self) -> None:
        """Reset agent state for new episode."""

    def update(
        self,
        observation: np.ndarray,
        action: int,
        reward: float,
        next_observation: np.ndarray,
        done: bool,
    ) -> None:
        """Update agent with experience (for learning agents)."""
