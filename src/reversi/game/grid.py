"""
Fixed-size two-dimensional tile storage.
Backed by a row-major numpy array indexed as [y, x].
"""
from typing import Iterator, List

import numpy as np

from .errors import ConstructionError, OutOfRange
from .geometry import Coordinate, Direction
from .tiles import Tile


class Grid:
    """
    A width x height grid of tiles with bounds-checked access.

    All traversal methods are generators, so each call starts a fresh,
    finite sequence.
    """

    def __init__(self, width: int, height: int, fill: Tile = Tile.EMPTY):
        """
        Create a grid filled with ``fill``.

        Args:
            width: Number of columns, strictly positive
            height: Number of rows, strictly positive
            fill: Initial tile for every cell

        Raises:
            ConstructionError: If either dimension is not positive
        """
        if width <= 0 or height <= 0:
            raise ConstructionError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self._cells = np.full((height, width), int(fill), dtype=np.int8)

    @classmethod
    def from_array(cls, cells: np.ndarray) -> 'Grid':
        """
        Create a grid from a (height, width) array of Tile values, which is copied.

        Raises:
            ConstructionError: If the array is not two-dimensional or holds unknown values
        """
        cells = np.asarray(cells)
        if cells.ndim != 2:
            raise ConstructionError(f"Expected a 2D array, got shape {cells.shape}")
        if not np.isin(cells, [int(tile) for tile in Tile]).all():
            raise ConstructionError("Array holds values that are not tiles")

        height, width = cells.shape
        grid = cls(width, height)
        grid._cells[:, :] = cells
        return grid

    def copy(self) -> 'Grid':
        """Create a deep copy of the grid."""
        new_grid = Grid.__new__(Grid)
        new_grid.width = self.width
        new_grid.height = self.height
        new_grid._cells = self._cells.copy()
        return new_grid

    def contains(self, coord: Coordinate) -> bool:
        """Check whether ``coord`` lies within the grid."""
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, coord: Coordinate) -> None:
        if not self.contains(coord):
            raise OutOfRange(f"{coord} is outside of a {self.width}x{self.height} grid")

    def get(self, coord: Coordinate) -> Tile:
        self._check(coord)
        return Tile(int(self._cells[coord[1], coord[0]]))

    def set(self, coord: Coordinate, tile: Tile) -> None:
        self._check(coord)
        self._cells[coord[1], coord[0]] = int(tile)

    def fill(self, tile: Tile) -> None:
        self._cells.fill(int(tile))

    def traverse(self) -> Iterator[Coordinate]:
        """Yield every coordinate in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate(x, y)

    def tiles(self) -> Iterator[Tile]:
        """Yield every tile in row-major order."""
        for value in self._cells.flat:
            yield Tile(int(value))

    def row(self, y: int) -> Iterator[Tile]:
        """
        Get the tiles of row ``y`` in column order.

        Raises:
            OutOfRange: If ``y`` is not a row of the grid
        """
        if not 0 <= y < self.height:
            raise OutOfRange(f"Row {y} is outside of a grid of height {self.height}")
        return (Tile(int(value)) for value in self._cells[y, :])

    def column(self, x: int) -> Iterator[Tile]:
        """
        Get the tiles of column ``x`` in row order.

        Raises:
            OutOfRange: If ``x`` is not a column of the grid
        """
        if not 0 <= x < self.width:
            raise OutOfRange(f"Column {x} is outside of a grid of width {self.width}")
        return (Tile(int(value)) for value in self._cells[:, x])

    def ray(self, origin: Coordinate, direction: Direction) -> Iterator[Coordinate]:
        """Yield coordinates from ``origin`` (exclusive) to the edge of the grid."""
        coord = direction.next(origin)
        while self.contains(coord):
            yield coord
            coord = direction.next(coord)

    def occupied(self) -> List[Coordinate]:
        """Get the coordinates of all non-empty cells."""
        return [Coordinate(int(x), int(y)) for y, x in np.argwhere(self._cells != Tile.EMPTY)]

    def count(self, tile: Tile) -> int:
        return int(np.count_nonzero(self._cells == int(tile)))

    def to_array(self) -> np.ndarray:
        """Get a copy of the board as a (height, width) numpy array."""
        return self._cells.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"
