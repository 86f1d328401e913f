"""
Read-only projection of a board for advisors and displays.

A snapshot carries the counters and the visible cells only: revealed cells
with their neighbour count (or the mine mark) and flagged cells. Hidden
cells never appear, so nothing about unrevealed mines leaks out.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import numpy as np

from .board import Board, Difficulty, GameStatus
from .cell import FLAGGED_VALUE, HIDDEN_VALUE, MINE_VALUE

FLAG_MARK = "F"
MINE_MARK = "*"

CellValue = Union[int, str]


@dataclass(frozen=True)
class SnapshotCell:
    """A visible cell: neighbour count, MINE_MARK or FLAG_MARK."""

    x: int
    y: int
    z: int
    value: CellValue

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "z": self.z, "value": self.value}


@dataclass(frozen=True)
class Snapshot:
    """
    Visible state of a game at one instant.

    Attributes:
        status: Game status.
        size: Edge length of the cube (0 before any board exists).
        mine_count: Mines placed at generation.
        revealed_count: Non-mine cells revealed.
        flag_count: Cells currently flagged.
        elapsed: Seconds since generation, frozen at game end.
        difficulty: Preset the board came from, None for custom boards.
        cells: Revealed and flagged cells.
    """

    status: GameStatus = GameStatus.IDLE
    size: int = 0
    mine_count: int = 0
    revealed_count: int = 0
    flag_count: int = 0
    elapsed: float = 0.0
    difficulty: Optional[Difficulty] = None
    cells: List[SnapshotCell] = field(default_factory=list)

    @property
    def mines_remaining(self) -> int:
        return max(0, self.mine_count - self.flag_count)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "status": self.status.name,
            "size": self.size,
            "mine_count": self.mine_count,
            "mines_remaining": self.mines_remaining,
            "revealed_count": self.revealed_count,
            "flag_count": self.flag_count,
            "elapsed": self.elapsed,
            "difficulty": self.difficulty.name if self.difficulty else None,
            "cells": [cell.to_dict() for cell in self.cells],
        }


def take_snapshot(board: Board, now: Optional[float] = None) -> Snapshot:
    """Project a board onto its visible cells and counters."""
    cells = []
    for cell in board.iter_cells():
        if cell.is_flagged:
            value: CellValue = FLAG_MARK
        elif not cell.is_revealed:
            continue
        elif cell.is_mine:
            value = MINE_MARK
        else:
            value = cell.neighbor_mines
        cells.append(SnapshotCell(cell.x, cell.y, cell.z, value))

    return Snapshot(
        status=board.status,
        size=board.size,
        mine_count=board.mine_count,
        revealed_count=board.revealed_count,
        flag_count=board.flag_count,
        elapsed=board.elapsed(now),
        difficulty=board.difficulty,
        cells=cells,
    )


def observation_from_snapshot(snapshot: Snapshot) -> np.ndarray:
    """
    Rebuild an agent observation from a snapshot.

    Cells missing from the snapshot are hidden (-1); values follow
    Cell.to_observation().
    """
    size = snapshot.size
    obs = np.full((size, size, size), HIDDEN_VALUE, dtype=np.int8)
    for cell in snapshot.cells:
        if cell.value == FLAG_MARK:
            obs[cell.x, cell.y, cell.z] = FLAGGED_VALUE
        elif cell.value == MINE_MARK:
            obs[cell.x, cell.y, cell.z] = MINE_VALUE
        else:
            obs[cell.x, cell.y, cell.z] = cell.value
    return obs
