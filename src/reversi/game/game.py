"""
Reversi game module.
Handles turn flow, scores and game state.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Set, Tuple

import numpy as np

from .board import Board
from .errors import GameOverError, InvalidMove
from .geometry import Coordinate
from .moves import MoveGenerator
from .render import ASCII_TILE_MAP, parse_layout, render_grid
from .tiles import Color, Tile

logger = logging.getLogger(__name__)


@dataclass
class Player:
    """A side of one game and its score (the number of tiles it owns)."""
    color: Color
    score: int = 0

    def __str__(self) -> str:
        return f"{self.color} ({self.score})"


class ReversiGame:
    """
    Main game class for Reversi that manages the game state and flow.

    White moves first. After every move the turn goes to the opponent if it
    can move; otherwise the mover plays again (a forced pass, reported by
    ``skipped``); if neither side can move the game is over.
    """

    def __init__(self, width: int = 8, height: int = 8):
        """
        Initialize a new Reversi game.

        Args:
            width: Board width, even and at least 4
            height: Board height, even and at least 4

        Raises:
            ConstructionError: If the dimensions are invalid
        """
        self._setup(Board(width, height), Color.WHITE)

    @classmethod
    def from_layout(cls, rows: Iterable[str], to_move: Color = Color.WHITE) -> 'ReversiGame':
        """
        Create a game from a text layout using 'w', 'b' and '.' symbols.

        If ``to_move`` has no legal move in the layout, the forced-pass rule
        is applied straight away.

        Args:
            rows: One string per board row
            to_move: Side to play first

        Raises:
            ConstructionError: If the layout is malformed or has invalid dimensions
        """
        game = cls.__new__(cls)
        game._setup(Board.from_grid(parse_layout(rows, ASCII_TILE_MAP)), to_move)
        return game

    def _setup(self, board: Board, to_move: Color) -> None:
        self.board = board
        self.moves = MoveGenerator(board)
        # Side table indexed by Color.index
        self._players = (Player(Color.BLACK), Player(Color.WHITE))
        self._initialize_state(to_move)

    def _initialize_state(self, to_move: Color) -> None:
        self.turn = 1
        self.skipped = False
        self.over = False
        self._current = to_move
        self._legal_moves: Optional[Set[Coordinate]] = None

        for player in self._players:
            player.score = self.board.count(player.color)

        if not self.moves.has_legal_move(to_move):
            self._pass_or_end(to_move.opponent)

    def reset(self) -> None:
        """Reset the game to its initial state."""
        self.board.reset()
        self._initialize_state(Color.WHITE)

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def height(self) -> int:
        return self.board.height

    def player(self, color: Color) -> Player:
        return self._players[color.index]

    def opponent(self, player: Player) -> Player:
        return self._players[player.color.opponent.index]

    @property
    def white(self) -> Player:
        return self.player(Color.WHITE)

    @property
    def black(self) -> Player:
        return self.player(Color.BLACK)

    def current_player(self) -> Player:
        """Get the player whose turn it is (the last mover once the game is over)."""
        return self.player(self._current)

    def score(self, color: Color) -> int:
        return self.player(color).score

    def get_score(self) -> Tuple[int, int]:
        """
        Get the current score (black, white).

        Returns:
            Tuple of (black_score, white_score)
        """
        return self.black.score, self.white.score

    def legal_moves(self) -> Set[Coordinate]:
        """
        Get all legal moves for the current player.

        Returns:
            Set of coordinates, empty only once the game is over
        """
        if self.over:
            return set()
        if self._legal_moves is None:
            self._legal_moves = self.moves.legal_moves(self._current)
        return set(self._legal_moves)

    def iter_legal_moves(self) -> Iterator[Coordinate]:
        """
        Lazily yield the legal moves for the current player.

        Moves are checked one at a time as the iterator is consumed, so a
        caller that stops early never pays for the full legal set. The
        iterator is only valid until the next move is applied.
        """
        if self.over:
            return iter(())
        if self._legal_moves is not None:
            return iter(tuple(self._legal_moves))
        return self.moves.iter_legal_moves(self._current)

    def is_legal(self, move: Coordinate) -> bool:
        """Check whether ``move`` is legal for the current player."""
        if self.over:
            return False
        return self.moves.is_legal(self._current, Coordinate(*move))

    def apply_move(self, move: Coordinate, color: Optional[Color] = None) -> int:
        """
        Play ``move`` for the current player and advance the turn.

        Args:
            move: Target coordinate, as a Coordinate or an (x, y) tuple
            color: If given, the side expected to be moving

        Returns:
            Number of opposing tiles captured, at least one

        Raises:
            GameOverError: If the game is already over
            InvalidMove: If the move is illegal or ``color`` is not the side
                to move; the game is left unchanged
        """
        if self.over:
            raise GameOverError()

        move = Coordinate(*move)
        mover = self.current_player()
        if color is not None and color != mover.color:
            raise InvalidMove(move, f"it is {mover.color}'s turn")

        captured = len(self.board.make_move(mover.color, move))

        mover.score += captured + 1
        self.opponent(mover).score -= captured

        self._advance_turn()
        return captured

    def _advance_turn(self) -> None:
        self._legal_moves = None
        opponent = self._current.opponent

        if self.moves.has_legal_move(opponent):
            self._current = opponent
            self.skipped = False
            self.turn += 1
        else:
            self._pass_or_end(self._current)

    def _pass_or_end(self, retained: Color) -> None:
        """Hand the turn to ``retained`` if it can move, otherwise end the game."""
        if self.moves.has_legal_move(retained):
            logger.debug("Turn %d: %s has no legal move and passes", self.turn, retained.opponent)
            self._current = retained
            self.skipped = True
            self.turn += 1
        else:
            self.over = True
            self.skipped = False
            logger.debug("Game over after %d turns, score black %d white %d",
                         self.turn, self.black.score, self.white.score)

    def is_game_over(self) -> bool:
        return self.over

    is_over = is_game_over

    def winner(self) -> Optional[Color]:
        """
        Get the winner of the game.

        Returns:
            The color with the higher score, None for a draw or if the game is not over
        """
        if not self.over or self.black.score == self.white.score:
            return None
        return Color.BLACK if self.black.score > self.white.score else Color.WHITE

    def is_draw(self) -> bool:
        return self.over and self.black.score == self.white.score

    def row(self, y: int) -> Iterator[Tile]:
        return self.board.grid.row(y)

    def column(self, x: int) -> Iterator[Tile]:
        return self.board.grid.column(x)

    def tiles(self) -> Iterator[Tile]:
        return self.board.grid.tiles()

    def get_board_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            (height, width) array of Tile values
        """
        return self.board.get_board_state()

    def copy(self) -> 'ReversiGame':
        """Create a deep copy of the game."""
        new_game = ReversiGame.__new__(ReversiGame)
        new_game.board = self.board.copy()
        new_game.moves = MoveGenerator(new_game.board)
        new_game._players = tuple(Player(p.color, p.score) for p in self._players)
        new_game.turn = self.turn
        new_game.skipped = self.skipped
        new_game.over = self.over
        new_game._current = self._current
        new_game._legal_moves = None
        return new_game

    def __str__(self) -> str:
        """String representation of the game state."""
        lines = [render_grid(self.board.grid)]
        lines.append(f"Turn {self.turn}, current player: {self._current}")
        lines.append(f"Score - Black: {self.black.score}, White: {self.white.score}")

        if self.over:
            winner = self.winner()
            if winner is None:
                lines.append("Game over! It's a draw!")
            else:
                lines.append(f"Game over! {winner} wins!")
        elif self.skipped:
            lines.append(f"{self._current.opponent} had no legal move and passed")

        return "\n".join(lines)
