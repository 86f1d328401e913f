"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from collections import deque
from pathlib import Path
from typing import Set, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cubesweeper.game import Board, BoardConfig, Cell, Difficulty, GameEngine


# ============================================================================
# Helpers
# ============================================================================

class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def expected_flood(board: Board, start: Tuple[int, int, int]) -> Set[Tuple[int, int, int]]:
    """Zero region reachable from start plus its numbered border."""
    region = {start}
    queue = deque([start])
    while queue:
        position = queue.popleft()
        if board.get_cell(*position).neighbor_mines != 0:
            continue
        for neighbor in board.neighbors(*position):
            cell = board.get_cell(*neighbor)
            if neighbor not in region and not cell.is_mine and not cell.is_flagged:
                region.add(neighbor)
                queue.append(neighbor)
    return region


def revealed_positions(board: Board) -> Set[Tuple[int, int, int]]:
    return {cell.position for cell in board.iter_cells() if cell.is_revealed}


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def easy_board(clock: FakeClock) -> Board:
    """Seeded EASY board (4x4x4, 6 mines)."""
    return Board.generate(
        BoardConfig(4, 6),
        rng=random.Random(1234),
        difficulty=Difficulty.EASY,
        clock=clock,
    )


@pytest.fixture
def walled_board(clock: FakeClock) -> Board:
    """4x4x4 board whose x=2 plane is entirely mined."""
    mines = [(2, y, z) for y in range(4) for z in range(4)]
    return Board.from_mines(4, mines, clock=clock)


@pytest.fixture
def corner_cluster_board(clock: FakeClock) -> Board:
    """EASY-sized board with six mines packed near the far corner."""
    mines = [(3, 3, 3), (3, 3, 2), (3, 2, 3), (2, 3, 3), (3, 2, 2), (2, 2, 3)]
    return Board.from_mines(4, mines, difficulty=Difficulty.EASY, clock=clock)


@pytest.fixture
def center_mine_board(clock: FakeClock) -> Board:
    """3x3x3 board with a single mine in the middle."""
    return Board.from_mines(3, [(1, 1, 1)], clock=clock)


@pytest.fixture
def empty_board(clock: FakeClock) -> Board:
    """Board with no mines for cascade testing."""
    return Board.from_mines(3, [], clock=clock)


@pytest.fixture
def engine(clock: FakeClock) -> GameEngine:
    return GameEngine(seed=42, clock=clock)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)
