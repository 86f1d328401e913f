"""
Exception types raised by the 3D Minesweeper engine.
"""


class CubeSweeperError(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(CubeSweeperError, ValueError):
    """Board configuration that cannot produce a playable board."""


class OutOfRange(CubeSweeperError, IndexError):
    """Coordinates outside the cube."""

    def __init__(self, position, size: int) -> None:
        self.position = tuple(position)
        self.size = size
        super().__init__(
            f"Position {self.position} is outside a board of size {size}"
        )
