"""
Board module for 3D Minesweeper.

Implements the cubic game board with mine placement, 26-neighbour counts,
flood reveal, flagging and win/loss bookkeeping.
"""
import itertools
import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import numpy as np

from ..errors import InvalidConfiguration, OutOfRange
from .cell import Cell

logger = logging.getLogger(__name__)

Position = Tuple[int, int, int]


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    IDLE = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()


class Difficulty(Enum):
    """Named board presets."""

    EASY = auto()
    MEDIUM = auto()
    HARD = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a cubic board.

    Attributes:
        size: Edge length of the cube.
        num_mines: Total mines to place.
    """

    size: int = 4
    num_mines: int = 6

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size < 1:
            raise InvalidConfiguration("Board size must be positive")
        if self.num_mines < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        max_mines = self.total_cells - 1
        if self.num_mines > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.size ** 3

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.num_mines


# Preset difficulty levels
DIFFICULTIES: Mapping[Difficulty, BoardConfig] = MappingProxyType({
    Difficulty.EASY: BoardConfig(4, 6),
    Difficulty.MEDIUM: BoardConfig(6, 25),
    Difficulty.HARD: BoardConfig(8, 60),
})

# Every (dx, dy, dz) in {-1, 0, 1}^3 except the origin
NEIGHBOR_OFFSETS: Tuple[Position, ...] = tuple(
    offset for offset in itertools.product((-1, 0, 1), repeat=3)
    if offset != (0, 0, 0)
)

ConfigSelector = Union[Difficulty, str, BoardConfig]


def resolve_config(
    selector: ConfigSelector,
) -> Tuple[BoardConfig, Optional[Difficulty]]:
    """
    Resolve a difficulty, difficulty name or explicit config.

    Returns:
        Tuple of (config, difficulty); difficulty is None for a custom config.
    """
    if isinstance(selector, BoardConfig):
        return selector, None
    if isinstance(selector, str):
        try:
            selector = Difficulty[selector.strip().upper()]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown difficulty {selector!r}"
            ) from None
    if isinstance(selector, Difficulty):
        return DIFFICULTIES[selector], selector
    raise InvalidConfiguration(f"Cannot build a board from {selector!r}")


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Cubic Minesweeper board.

    Cells are addressed as (x, y, z). A bare Board is an empty IDLE grid;
    playable boards come from generate() or from_mines(). The board is
    mutated in place by reveal() and flag() while PLAYING and frozen once
    the game is WON or LOST.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    difficulty: Optional[Difficulty] = None
    clock: Callable[[], float] = field(default=time.time, repr=False)
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    _grid: List[List[List[Cell]]] = field(default_factory=list, repr=False)
    _status: GameStatus = GameStatus.IDLE
    _revealed_count: int = 0
    _flag_count: int = 0

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def generate(
        cls,
        config: BoardConfig,
        rng: Optional[random.Random] = None,
        difficulty: Optional[Difficulty] = None,
        clock: Callable[[], float] = time.time,
    ) -> "Board":
        """
        Build a new board with randomly placed mines, ready to play.

        Args:
            config: Board size and mine count.
            rng: Random source for mine placement (module random if None).
            difficulty: Label recorded on the board.
            clock: Time source for start/end timestamps.
        """
        board = cls(config, difficulty=difficulty, clock=clock)
        board._place_random_mines(rng or random.Random())
        board._calculate_neighbor_mines()
        board._start()
        return board

    @classmethod
    def from_mines(
        cls,
        size: int,
        mines: Iterable[Position],
        difficulty: Optional[Difficulty] = None,
        clock: Callable[[], float] = time.time,
    ) -> "Board":
        """
        Build a board with mines at the given positions.

        Used for deterministic layouts. Duplicate positions count once.
        """
        positions = set(tuple(position) for position in mines)
        config = BoardConfig(size, len(positions))
        board = cls(config, difficulty=difficulty, clock=clock)
        for position in positions:
            board._require_valid_position(*position)
            board._cell(*position).is_mine = True
        board._calculate_neighbor_mines()
        board._start()
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        size = self.config.size
        self._grid = [
            [[Cell(x, y, z) for z in range(size)] for y in range(size)]
            for x in range(size)
        ]

    def _place_random_mines(self, rng: random.Random) -> None:
        """
        Place mines by rejection sampling.

        Draws uniform coordinates and keeps those not already mined until
        the configured count is reached. Terminates because the config
        guarantees at least one safe cell.
        """
        size = self.config.size
        placed = 0
        draws = 0
        while placed < self.config.num_mines:
            draws += 1
            cell = self._grid[rng.randrange(size)][rng.randrange(size)][
                rng.randrange(size)
            ]
            if not cell.is_mine:
                cell.is_mine = True
                placed += 1
        logger.debug("Placed %d mines in %d draws", placed, draws)

    def _calculate_neighbor_mines(self) -> None:
        """Calculate neighbour mine counts for all non-mine cells."""
        for cell in self.iter_cells():
            if not cell.is_mine:
                cell.neighbor_mines = self._count_neighbor_mines(*cell.position)

    def _count_neighbor_mines(self, x: int, y: int, z: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for position in self.neighbors(x, y, z)
            if self._cell(*position).is_mine
        )

    def _start(self) -> None:
        self._status = GameStatus.PLAYING
        self.start_time = self.clock()
        self.end_time = None

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, x: int, y: int, z: int) -> List[Position]:
        """
        Get valid neighbouring cell positions.

        Returns:
            List of (x, y, z) tuples, 7 at a corner and 26 in the interior.
        """
        neighbors = []
        for dx, dy, dz in NEIGHBOR_OFFSETS:
            position = (x + dx, y + dy, z + dz)
            if self.is_valid_position(*position):
                neighbors.append(position)
        return neighbors

    def is_valid_position(self, x: int, y: int, z: int) -> bool:
        """Check if position is within board bounds."""
        size = self.config.size
        return 0 <= x < size and 0 <= y < size and 0 <= z < size

    def _require_valid_position(self, x: int, y: int, z: int) -> None:
        if not self.is_valid_position(x, y, z):
            raise OutOfRange((x, y, z), self.config.size)

    def _cell(self, x: int, y: int, z: int) -> Cell:
        return self._grid[x][y][z]

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int, z: int) -> bool:
        """
        Reveal a cell at the given position.

        A mine ends the game and discloses every mine. A safe cell with no
        neighbouring mines floods outward through the connected zero region
        and its numbered border.

        Returns:
            True if the board changed, False if the call was a no-op
            (game not in progress, cell revealed or flagged).

        Raises:
            OutOfRange: If the position is outside the cube.
        """
        self._require_valid_position(x, y, z)
        if not self._can_reveal(x, y, z):
            return False

        if self._cell(x, y, z).is_mine:
            self._lose()
            return True

        self._flood_reveal(x, y, z)
        self._check_win_condition()
        return True

    def _can_reveal(self, x: int, y: int, z: int) -> bool:
        """Check if a cell can be revealed."""
        if self._status != GameStatus.PLAYING:
            return False
        return self._cell(x, y, z).is_hidden

    def _flood_reveal(self, x: int, y: int, z: int) -> None:
        """Reveal from a safe cell using an explicit work stack."""
        stack = [(x, y, z)]
        while stack:
            position = stack.pop()
            cell = self._cell(*position)
            # Already revealed or flagged cells are skipped
            if not cell.reveal():
                continue
            self._revealed_count += 1
            if cell.neighbor_mines == 0:
                stack.extend(
                    neighbor for neighbor in self.neighbors(*position)
                    if self._cell(*neighbor).is_hidden
                )

    def _lose(self) -> None:
        """Disclose every mine and end the game."""
        for cell in self.iter_cells():
            if cell.is_mine:
                if cell.is_flagged:
                    self._flag_count -= 1
                cell.force_reveal()
        self._finish(GameStatus.LOST)

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        if self._revealed_count == self.config.safe_cells:
            self._finish(GameStatus.WON)

    def _finish(self, status: GameStatus) -> None:
        self._status = status
        self.end_time = self.clock()
        logger.info(
            "Game %s after revealing %d of %d safe cells",
            status.name, self._revealed_count, self.config.safe_cells,
        )

    def flag(self, x: int, y: int, z: int) -> bool:
        """
        Toggle flag on a cell.

        Returns:
            True if flag was toggled, False otherwise.

        Raises:
            OutOfRange: If the position is outside the cube.
        """
        self._require_valid_position(x, y, z)
        if self._status != GameStatus.PLAYING:
            return False
        cell = self._cell(x, y, z)
        if not cell.toggle_flag():
            return False
        self._flag_count += 1 if cell.is_flagged else -1
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._status == GameStatus.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._status == GameStatus.LOST

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def mine_count(self) -> int:
        return self.config.num_mines

    @property
    def revealed_count(self) -> int:
        """Number of non-mine cells revealed so far."""
        return self._revealed_count

    @property
    def flag_count(self) -> int:
        return self._flag_count

    @property
    def mines_remaining(self) -> int:
        """Mine count minus flags placed, never below zero."""
        return max(0, self.mine_count - self._flag_count)

    @property
    def total_safe_cells(self) -> int:
        return self.config.safe_cells

    def elapsed(self, now: Optional[float] = None) -> float:
        """
        Seconds since generation.

        Measured to the current time while playing and frozen at the end
        time once the game is over. Zero for an IDLE board.
        """
        if self.start_time is None:
            return 0.0
        if self.end_time is not None:
            return self.end_time - self.start_time
        if now is None:
            now = self.clock()
        return now - self.start_time

    def get_cell(self, x: int, y: int, z: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(x, y, z):
            return None
        return self._cell(x, y, z)

    def iter_cells(self) -> Iterator[Cell]:
        """Iterate over all cells in x, y, z order."""
        for plane in self._grid:
            for column in plane:
                yield from column

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for agents.

        Returns:
            3D numpy array indexed [x, y, z] where:
                -1 = hidden
                -2 = flagged
                0-26 = revealed with neighbour count
                27 = revealed mine
        """
        size = self.config.size
        obs = np.zeros((size, size, size), dtype=np.int8)
        for cell in self.iter_cells():
            obs[cell.position] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can be revealed.

        Returns:
            List of (x, y, z) positions of hidden cells.
        """
        return [cell.position for cell in self.iter_cells() if cell.is_hidden]
