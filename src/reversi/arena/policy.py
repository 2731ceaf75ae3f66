"""
Move policies: anything that picks the next move from the legal moves.
"""
import random
from itertools import islice
from typing import Callable, Iterable, Mapping, Optional

import numpy as np

from ..game.geometry import Coordinate
from ..game.grid import Grid
from ..game.render import ASCII_TILE_MAP, render_grid
from ..game.tiles import Tile


class MovePolicy:
    """
    Base class for move policies.

    ``select_move`` receives the legal moves of the side to move and a
    read-only snapshot of the board, and returns one of the legal moves.
    The moves may be a lazy iterator that can be consumed only once; a
    policy that needs them all should materialise them first. There is
    always at least one legal move.
    """

    name = "policy"

    def select_move(self, legal_moves: Iterable[Coordinate], board_state: np.ndarray) -> Coordinate:
        raise NotImplementedError

    def reset(self):
        """Reset any per-game state."""


class RandomPolicy(MovePolicy):
    """
    Picks a legal move at random.

    Without ``sample_limit`` every legal move is equally likely. With
    ``sample_limit`` set, only the first ``sample_limit`` moves of the legal
    move stream are examined and one of them is chosen. The cost per move is
    then bounded by the limit rather than by the number of legal moves, but
    moves later in the stream are never picked.
    """

    name = "random"

    def __init__(self, seed: Optional[int] = None, sample_limit: Optional[int] = None):
        if sample_limit is not None and sample_limit < 1:
            raise ValueError(f"sample_limit must be at least 1, got {sample_limit}")
        self.seed = seed
        self.sample_limit = sample_limit
        self.rng = random.Random(seed)

    def select_move(self, legal_moves: Iterable[Coordinate], board_state: np.ndarray) -> Coordinate:
        if self.sample_limit is not None:
            legal_moves = islice(legal_moves, self.sample_limit)

        # Sort so that a seeded policy is reproducible
        moves = sorted(legal_moves)
        if not moves:
            raise ValueError("No legal move to choose from")
        return self.rng.choice(moves)

    def reset(self):
        self.rng = random.Random(self.seed)


def parse_coordinate(text: str, width: int, height: int) -> Coordinate:
    """
    Parse "x y" or "x,y" into a coordinate on a width x height board.

    Raises:
        ValueError: With a printable message if the input is not two integers within the board
    """
    parts = text.replace(',', ' ').split()
    if len(parts) != 2:
        raise ValueError(f"Expected two numbers 'x y', got {text!r}")
    try:
        x, y = (int(part) for part in parts)
    except ValueError:
        raise ValueError(f"Not an integer ({text.strip()})") from None
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"({x}, {y}) is not within the board")
    return Coordinate(x, y)


class ConsolePolicy(MovePolicy):
    """Asks a human for moves, re-prompting until a legal move is entered."""

    name = "human"

    def __init__(self, input_fn: Optional[Callable[[str], str]] = None,
                 output_fn: Optional[Callable[[str], None]] = None,
                 tile_map: Mapping[Tile, str] = ASCII_TILE_MAP):
        self.input_fn = input_fn if input_fn is not None else input
        self.output_fn = output_fn if output_fn is not None else print
        self.tile_map = tile_map

    def select_move(self, legal_moves: Iterable[Coordinate], board_state: np.ndarray) -> Coordinate:
        legal_moves = set(legal_moves)
        if not legal_moves:
            raise ValueError("No legal move to choose from")

        grid = Grid.from_array(board_state)
        self.output_fn(render_grid(grid, self.tile_map, indexed=True))

        while True:
            try:
                move = parse_coordinate(self.input_fn("Next move (x y): "), grid.width, grid.height)
            except ValueError as e:
                self.output_fn(str(e))
                continue
            if move in legal_moves:
                return move
            self.output_fn(f"{move} is not a valid move")
