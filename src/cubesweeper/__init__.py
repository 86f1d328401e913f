"""
3D Minesweeper engine and agents.

Cubic grids, 26-neighbour mine counts, flood reveal and win/loss tracking,
plus a gymnasium environment and baseline agents built on top of it.
"""
from .errors import CubeSweeperError, InvalidConfiguration, OutOfRange
from .game import (
    Board,
    BoardConfig,
    Difficulty,
    DIFFICULTIES,
    GameEngine,
    GameStatus,
    Snapshot,
)

__version__ = "0.1.0"

__all__ = [
    "Board",
    "BoardConfig",
    "CubeSweeperError",
    "DIFFICULTIES",
    "Difficulty",
    "GameEngine",
    "GameStatus",
    "InvalidConfiguration",
    "OutOfRange",
    "Snapshot",
]
