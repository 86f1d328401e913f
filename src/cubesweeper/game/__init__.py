"""
3D Minesweeper game module.

Provides the board engine: cells, board generation and actions,
snapshots, the engine facade and the gymnasium environment.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    Difficulty,
    DIFFICULTIES,
    GameStatus,
    NEIGHBOR_OFFSETS,
    resolve_config,
)
from .snapshot import (
    FLAG_MARK,
    MINE_MARK,
    Snapshot,
    SnapshotCell,
    observation_from_snapshot,
    take_snapshot,
)
from .engine import GameEngine
from .environment import CubeSweeperEnv, make_vec_env

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "Difficulty",
    "DIFFICULTIES",
    "GameStatus",
    "NEIGHBOR_OFFSETS",
    "resolve_config",
    "FLAG_MARK",
    "MINE_MARK",
    "Snapshot",
    "SnapshotCell",
    "observation_from_snapshot",
    "take_snapshot",
    "GameEngine",
    "CubeSweeperEnv",
    "make_vec_env",
]
