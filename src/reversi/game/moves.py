"""
Legal move queries over a board.
Only cells from the board's edge set are ever examined.
"""
from typing import FrozenSet, Iterator, Set

from .board import Board
from .geometry import Coordinate
from .tiles import Color


class MoveGenerator:
    """
    Read-only view of the legal moves on a board.

    Search is bounded by the number of edge cells rather than the board
    area, which keeps large boards tractable.
    """

    def __init__(self, board: Board):
        self._board = board

    @property
    def candidates(self) -> FrozenSet[Coordinate]:
        """The cells move search is restricted to."""
        return self._board.edges

    def is_legal(self, color: Color, move: Coordinate) -> bool:
        return self._board.is_valid_move(color, move)

    def iter_legal_moves(self, color: Color) -> Iterator[Coordinate]:
        """Lazily yield the legal moves for ``color``."""
        for coord in self._board.edges:
            if self._board.is_valid_move(color, coord):
                yield coord

    def legal_moves(self, color: Color) -> Set[Coordinate]:
        """
        Get all legal moves for ``color``.

        Returns:
            Set of coordinates, empty if ``color`` has to pass
        """
        return set(self.iter_legal_moves(color))

    def has_legal_move(self, color: Color) -> bool:
        """Check if ``color`` can move; stops at the first legal move found."""
        return next(self.iter_legal_moves(color), None) is not None
