"""
Game engine owning the current board.

The engine is the surface a presentation layer talks to: it generates
boards, forwards reveal and flag actions and hands out snapshots. Each
generate() replaces the board entirely; the engine is the only writer.
"""
import logging
import random
import time
from typing import Callable, Optional

from .board import Board, ConfigSelector, Difficulty, resolve_config
from .snapshot import Snapshot, take_snapshot

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Single-writer owner of one Board.

    Operations run synchronously on the caller's thread; callers must
    serialise access.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the engine with no board (status IDLE).

        Args:
            seed: Seed for mine placement.
            clock: Time source for board timestamps.
        """
        self._rng = random.Random(seed)
        self._clock = clock
        self._board: Optional[Board] = None
        self._selector: ConfigSelector = Difficulty.EASY

    @property
    def board(self) -> Optional[Board]:
        """The current board, or None before the first generate()."""
        return self._board

    def seed(self, value: Optional[int]) -> None:
        """Reseed mine placement."""
        self._rng.seed(value)

    def generate(self, selector: ConfigSelector = Difficulty.EASY) -> Board:
        """
        Replace the current board with a freshly generated one.

        Args:
            selector: Difficulty, difficulty name, or explicit BoardConfig.

        Raises:
            InvalidConfiguration: If the selector cannot be resolved.
        """
        config, difficulty = resolve_config(selector)
        self._selector = selector
        self._board = Board.generate(
            config, rng=self._rng, difficulty=difficulty, clock=self._clock
        )
        logger.debug(
            "Generated %s board: size=%d mines=%d",
            difficulty.name if difficulty else "custom",
            config.size,
            config.num_mines,
        )
        return self._board

    def restart(self) -> Board:
        """Generate a new board with the last selector used."""
        return self.generate(self._selector)

    def load(self, board: Board) -> Board:
        """Install a prebuilt board, e.g. one from Board.from_mines()."""
        self._board = board
        return board

    def reveal(self, x: int, y: int, z: int) -> None:
        """Reveal a cell; no-op before the first board exists."""
        if self._board is not None:
            self._board.reveal(x, y, z)

    def flag(self, x: int, y: int, z: int) -> None:
        """Toggle a flag; no-op before the first board exists."""
        if self._board is not None:
            self._board.flag(x, y, z)

    def get_snapshot(self) -> Snapshot:
        """Visible state of the current game, IDLE if there is none."""
        if self._board is None:
            return Snapshot()
        return take_snapshot(self._board)
