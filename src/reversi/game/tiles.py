"""
Tile and side constants for Reversi.
The integer values match the numpy board snapshot: 0 empty, 1 black, 2 white.
"""
from enum import Enum, IntEnum


class Tile(IntEnum):
    """Content of a single board cell."""
    EMPTY = 0
    BLACK = 1
    WHITE = 2


class Color(Enum):
    """A side of the game."""
    BLACK = 1
    WHITE = 2

    @property
    def tile(self) -> Tile:
        return Tile(self.value)

    @property
    def opponent(self) -> 'Color':
        # Toggle between BLACK (1) and WHITE (2)
        return Color(3 - self.value)

    @property
    def index(self) -> int:
        """Position of this side in a two-element side table."""
        return self.value - 1

    def __str__(self) -> str:
        return self.name.capitalize()
