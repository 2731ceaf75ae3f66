"""
Geometry primitives for the Reversi board.
Coordinates and the 8 compass directions used by the directional scans.
"""
from enum import Enum
from types import MappingProxyType
from typing import Iterator, NamedTuple


class Coordinate(NamedTuple):
    """
    Immutable board coordinate.

    ``x`` is the column and ``y`` the row; (0, 0) is the north-west corner.
    """
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Direction(Enum):
    """The 8 compass directions, valued by their (dx, dy) step."""

    # Clockwise order; opposites are 4 members apart
    NORTH = (0, -1)
    NORTHEAST = (1, -1)
    EAST = (1, 0)
    SOUTHEAST = (1, 1)
    SOUTH = (0, 1)
    SOUTHWEST = (-1, 1)
    WEST = (-1, 0)
    NORTHWEST = (-1, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def next(self, coord: Coordinate) -> Coordinate:
        """Return the coordinate one step away from ``coord`` in this direction."""
        return Coordinate(coord[0] + self.value[0], coord[1] + self.value[1])

    @property
    def opposite(self) -> 'Direction':
        return OPPOSITES[self]

    @staticmethod
    def neighbours(coord: Coordinate) -> Iterator[Coordinate]:
        """Yield the 8 neighbouring coordinates of ``coord``, on-board or not."""
        for direction in DIRECTIONS:
            yield direction.next(coord)


DIRECTIONS = tuple(Direction)

OPPOSITES = MappingProxyType({
    direction: DIRECTIONS[(i + 4) % len(DIRECTIONS)]
    for i, direction in enumerate(DIRECTIONS)
})
