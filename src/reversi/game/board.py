"""
Board module for Reversi.
Handles the board state, move validation and tile captures.
Keeps a set of edge cells so that move search only looks at cells next to
occupied tiles instead of scanning the whole board.
"""
from typing import List, Optional, Set, FrozenSet

import numpy as np

from .errors import ConstructionError, InvalidMove
from .geometry import Coordinate, Direction, DIRECTIONS
from .grid import Grid
from .tiles import Color, Tile


class Board:
    """
    Represents a Reversi board of any even size from 4x4 upwards.

    The board knows the rules of a single placement (brackets and captures)
    but nothing about turns; see ``ReversiGame`` for the turn state machine.
    """

    MIN_SIZE = 4

    def __init__(self, width: int = 8, height: int = 8):
        """
        Initialize a new board with the four starting tiles in the centre.

        Args:
            width: Board width, even and at least 4
            height: Board height, even and at least 4

        Raises:
            ConstructionError: If either dimension is odd or smaller than 4
        """
        self.validate_size(width, height)

        self.width = width
        self.height = height
        self.grid = Grid(width, height)
        self._edges: Set[Coordinate] = set()
        self.reset()

    @classmethod
    def validate_size(cls, width: int, height: int) -> None:
        for name, value in (('width', width), ('height', height)):
            if value < cls.MIN_SIZE or value % 2 != 0:
                raise ConstructionError(
                    f"Board {name} must be even and at least {cls.MIN_SIZE}, got {value}"
                )

    @classmethod
    def from_grid(cls, grid: Grid) -> 'Board':
        """
        Build a board around an existing grid, which is copied.

        Raises:
            ConstructionError: If the grid dimensions are not valid board dimensions
        """
        cls.validate_size(grid.width, grid.height)

        board = cls.__new__(cls)
        board.width = grid.width
        board.height = grid.height
        board.grid = grid.copy()
        board._edges = set()
        board._initialize_edges()
        return board

    def reset(self) -> None:
        """Put the board back to the starting layout."""
        self.grid.fill(Tile.EMPTY)

        # Initial centre tiles:
        # w b
        # b w
        top_left = Coordinate(self.width // 2 - 1, self.height // 2 - 1)
        self.grid.set(top_left, Tile.WHITE)
        self.grid.set(Direction.SOUTHEAST.next(top_left), Tile.WHITE)
        self.grid.set(Direction.EAST.next(top_left), Tile.BLACK)
        self.grid.set(Direction.SOUTH.next(top_left), Tile.BLACK)

        self._initialize_edges()

    def copy(self) -> 'Board':
        """Create a deep copy of the board."""
        new_board = Board.__new__(Board)
        new_board.width = self.width
        new_board.height = self.height
        new_board.grid = self.grid.copy()
        new_board._edges = set(self._edges)
        return new_board

    @property
    def edges(self) -> FrozenSet[Coordinate]:
        """Empty cells with at least one occupied neighbour."""
        return frozenset(self._edges)

    def _initialize_edges(self) -> None:
        self._edges.clear()
        for coord in self.grid.occupied():
            self._update_edges(coord)

    def _update_edges(self, center: Coordinate) -> None:
        """Record that ``center`` is no longer empty."""
        self._edges.discard(center)
        for neighbour in Direction.neighbours(center):
            if self.grid.contains(neighbour) and self.grid.get(neighbour) == Tile.EMPTY:
                self._edges.add(neighbour)

    def _find_bracket(self, color: Color, origin: Coordinate, direction: Direction) -> List[Coordinate]:
        """
        Find the opposing tiles enclosed from ``origin`` in ``direction``.

        Walks the contiguous run of opponent tiles next to ``origin``. The run
        is a bracket only if it holds at least one tile and ends on one of
        ``color``'s own tiles.

        Returns:
            Coordinates of the enclosed tiles, empty if nothing is enclosed
        """
        own = color.tile
        opponent = color.opponent.tile
        run = []

        for coord in self.grid.ray(origin, direction):
            tile = self.grid.get(coord)
            if tile == opponent:
                run.append(coord)
                continue
            if tile == own:
                return run
            break  # Empty cell

        # Ran off the board or hit an empty cell
        return []

    def _encloses_any(self, color: Color, origin: Coordinate) -> bool:
        for direction in DIRECTIONS:
            if self._find_bracket(color, origin, direction):
                return True
        return False

    def get_flipped_pieces(self, color: Color, move: Coordinate) -> List[Coordinate]:
        """Get every tile that ``color`` would capture by playing ``move``."""
        flipped = []
        for direction in DIRECTIONS:
            flipped.extend(self._find_bracket(color, move, direction))
        return flipped

    def is_valid_move(self, color: Color, move: Coordinate) -> bool:
        """
        Check if ``move`` is legal for ``color``.

        A legal move targets an empty cell and encloses at least one opposing
        tile in at least one direction. Off-board coordinates are never legal.
        """
        if not self.grid.contains(move) or self.grid.get(move) != Tile.EMPTY:
            return False
        return self._encloses_any(color, move)

    def make_move(self, color: Color, move: Coordinate) -> List[Coordinate]:
        """
        Place ``color``'s tile at ``move`` and flip every enclosed tile.

        Args:
            color: The side making the move
            move: Target coordinate

        Returns:
            Coordinates of the captured tiles, never empty

        Raises:
            InvalidMove: If the move is not legal; the board is left untouched
        """
        if not self.grid.contains(move):
            raise InvalidMove(move, "outside of the board")
        if self.grid.get(move) != Tile.EMPTY:
            raise InvalidMove(move, "cell is occupied")

        flipped = self.get_flipped_pieces(color, move)
        if not flipped:
            raise InvalidMove(move, "no tile enclosed")

        tile = color.tile
        self.grid.set(move, tile)
        for coord in flipped:
            self.grid.set(coord, tile)

        self._update_edges(move)
        for coord in flipped:
            self._update_edges(coord)

        return flipped

    def count(self, color: Optional[Color] = None) -> int:
        """Count the tiles of ``color``, or the empty cells if ``color`` is None."""
        return self.grid.count(color.tile if color is not None else Tile.EMPTY)

    def get_board_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            (height, width) array of Tile values
        """
        return self.grid.to_array()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid
