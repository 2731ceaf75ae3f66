"""
Reversi game module.
This package contains the core game logic for Reversi.
"""

from .board import Board
from .errors import ConstructionError, GameOverError, InvalidMove, OutOfRange, ReversiError
from .game import Player, ReversiGame
from .geometry import Coordinate, Direction
from .grid import Grid
from .moves import MoveGenerator
from .tiles import Color, Tile

__all__ = [
    'Board', 'Color', 'ConstructionError', 'Coordinate', 'Direction', 'GameOverError',
    'Grid', 'InvalidMove', 'MoveGenerator', 'OutOfRange', 'Player', 'ReversiError',
    'ReversiGame', 'Tile',
]
