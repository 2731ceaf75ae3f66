"""
Test script for the Reversi game implementation.
"""
import random
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from reversi.game import (
    Color, ConstructionError, Coordinate, GameOverError, InvalidMove, OutOfRange, ReversiGame, Tile,
)
from reversi.game.render import parse_layout

STEPS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)]


def brute_force_captures(state, color, x, y):
    """Count the tiles ``color`` would capture at (x, y) by scanning the raw array."""
    if state[y, x] != Tile.EMPTY:
        return 0
    height, width = state.shape
    own, opponent = color.tile, color.opponent.tile
    total = 0
    for dx, dy in STEPS:
        cx, cy, run = x + dx, y + dy, 0
        while 0 <= cx < width and 0 <= cy < height and state[cy, cx] == opponent:
            run += 1
            cx, cy = cx + dx, cy + dy
        if run and 0 <= cx < width and 0 <= cy < height and state[cy, cx] == own:
            total += run
    return total


def brute_force_legal_moves(state, color):
    """Full-board scan for legal moves, used as an oracle for the edge-set search."""
    height, width = state.shape
    return {
        Coordinate(x, y)
        for y in range(height)
        for x in range(width)
        if brute_force_captures(state, color, x, y) > 0
    }


def brute_force_edges(state):
    height, width = state.shape
    edges = set()
    for y in range(height):
        for x in range(width):
            if state[y, x] != Tile.EMPTY:
                continue
            for dx, dy in STEPS:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and 0 <= ny < height and state[ny, nx] != Tile.EMPTY:
                    edges.add(Coordinate(x, y))
                    break
    return edges


def check_invariants(game):
    state = game.get_board_state()
    empty = int(np.sum(state == Tile.EMPTY))

    assert game.width % 2 == 0 and game.width >= 4
    assert game.height % 2 == 0 and game.height >= 4
    assert game.black.score + game.white.score + empty == game.width * game.height
    assert game.black.score == int(np.sum(state == Tile.BLACK))
    assert game.white.score == int(np.sum(state == Tile.WHITE))
    assert game.board.edges == brute_force_edges(state)

    black_moves = brute_force_legal_moves(state, Color.BLACK)
    white_moves = brute_force_legal_moves(state, Color.WHITE)
    assert game.is_over() == (not black_moves and not white_moves)
    if not game.is_over():
        expected = black_moves if game.current_player().color == Color.BLACK else white_moves
        assert game.legal_moves() == expected


def snapshot(game):
    return (game.get_board_state(), game.get_score(), game.turn, game.current_player().color,
            game.skipped, game.is_over())


def assert_same_snapshot(a, b):
    assert np.array_equal(a[0], b[0])
    assert a[1:] == b[1:]


def test_initial_board():
    """Test the initial board setup."""
    game = ReversiGame()
    board = game.get_board_state()

    assert board.shape == (8, 8), "Board should be 8x8"

    # Initial pieces, indexed [row][column]
    mid = 3
    assert board[mid][mid] == Tile.WHITE
    assert board[mid + 1][mid + 1] == Tile.WHITE
    assert board[mid][mid + 1] == Tile.BLACK
    assert board[mid + 1][mid] == Tile.BLACK
    assert np.sum(board == Tile.EMPTY) == 60, "Should have 60 empty squares initially"

    assert game.get_score() == (2, 2)
    assert game.turn == 1
    assert game.current_player().color == Color.WHITE
    assert not game.skipped
    assert not game.is_over()
    check_invariants(game)


def test_opening_moves_on_smallest_board():
    game = ReversiGame(4, 4)
    moves = game.legal_moves()
    assert moves == {Coordinate(2, 0), Coordinate(3, 1), Coordinate(0, 2), Coordinate(1, 3)}

    for move in moves:
        trial = game.copy()
        assert trial.apply_move(move) == 1


def test_first_move_scores_and_turn():
    game = ReversiGame(4, 4)
    captured = game.apply_move(Coordinate(2, 0))

    assert captured == 1
    assert game.white.score == 4
    assert game.black.score == 1
    assert game.current_player().color == Color.BLACK
    assert game.turn == 2
    assert not game.skipped
    assert list(game.column(2)) == [Tile.WHITE, Tile.WHITE, Tile.WHITE, Tile.EMPTY]
    check_invariants(game)


@pytest.mark.parametrize("width,height", [(3, 4), (4, 3), (2, 2), (6, 7), (0, 8)])
def test_construction_errors(width, height):
    with pytest.raises(ConstructionError):
        ReversiGame(width, height)


def test_illegal_moves_leave_game_unchanged():
    game = ReversiGame(4, 4)
    before = snapshot(game)

    for move in [(1, 1), (0, 0), (-1, 0), (4, 4), (3, 3)]:
        with pytest.raises(InvalidMove):
            game.apply_move(move)
        assert_same_snapshot(snapshot(game), before)

    # Legal square, but not black's turn
    with pytest.raises(InvalidMove):
        game.apply_move((2, 0), Color.BLACK)
    assert_same_snapshot(snapshot(game), before)

    # Recoverable: the caller can choose again
    assert game.apply_move((2, 0), Color.WHITE) == 1


def test_is_legal_is_idempotent():
    game = ReversiGame(6, 6)
    game.apply_move(game.legal_moves().pop())
    before = snapshot(game)

    for coord in game.board.grid.traverse():
        first = game.is_legal(coord)
        assert all(game.is_legal(coord) == first for _ in range(3))

    assert game.legal_moves() == game.legal_moves()
    assert not game.is_legal((-1, -1))
    assert_same_snapshot(snapshot(game), before)


def test_forced_pass_after_move():
    """After white's move black cannot play, so white moves again."""
    game = ReversiGame.from_layout([
        "w b . .",
        ". . . .",
        ". . . .",
        "w b . .",
    ])
    assert game.current_player().color == Color.WHITE
    assert not game.skipped
    assert game.get_score() == (2, 2)

    assert game.apply_move((2, 3)) == 1

    assert game.skipped
    assert game.current_player().color == Color.WHITE
    assert game.turn == 2
    assert not game.is_over()
    assert game.get_score() == (1, 4)
    assert game.legal_moves() == {Coordinate(2, 0)}
    expected = parse_layout([
        "w b . .",
        ". . . .",
        ". . . .",
        "w w w .",
    ])
    assert np.array_equal(game.get_board_state(), expected.to_array())
    check_invariants(game)

    # Neither side can move afterwards
    assert game.apply_move((2, 0)) == 1
    assert game.is_over()
    assert not game.skipped
    assert game.turn == 2
    assert game.winner() == Color.WHITE
    assert game.get_score() == (0, 6)
    assert game.legal_moves() == set()
    assert not game.is_legal((3, 0))
    check_invariants(game)

    with pytest.raises(GameOverError):
        game.apply_move((3, 0))


def test_forced_pass_on_layout():
    """A side that starts without a legal move passes straight away."""
    rows = [
        "w b . .",
        ". . . .",
        ". . . .",
        "w b . .",
    ]
    game = ReversiGame.from_layout(rows, to_move=Color.BLACK)

    assert game.skipped
    assert game.current_player().color == Color.WHITE
    assert game.turn == 2
    assert not game.is_over()
    assert np.array_equal(game.get_board_state(), parse_layout(rows).to_array())
    check_invariants(game)


def test_layout_without_moves_is_over():
    game = ReversiGame.from_layout([
        "w w . .",
        ". . . .",
        ". . . .",
        ". . . .",
    ])
    assert game.is_over()
    assert game.legal_moves() == set()
    assert game.winner() == Color.WHITE
    with pytest.raises(GameOverError):
        game.apply_move((2, 0))


def test_malformed_layouts():
    with pytest.raises(ConstructionError):
        ReversiGame.from_layout(["w b", "b w"])
    with pytest.raises(ConstructionError):
        ReversiGame.from_layout(["w b . .", ". . .", ". . . .", ". . . ."])
    with pytest.raises(ConstructionError):
        ReversiGame.from_layout(["w b x .", ". . . .", ". . . .", ". . . ."])


def test_game_over_full_board():
    """Test game over condition by filling the board completely."""
    game = ReversiGame.from_layout([
        ". b w w",
        "w w w w",
        "w w w w",
        "w w w w",
    ])
    assert game.legal_moves() == {Coordinate(0, 0)}

    assert game.apply_move((0, 0)) == 1
    assert game.is_game_over(), "Game should be over after filling the board"
    assert game.get_score() == (0, 16)
    assert game.winner() == Color.WHITE
    assert not game.is_draw()


def test_draw():
    game = ReversiGame.from_layout([
        ". b w w",
        "b b w w",
        "b b b w",
        "b b w b",
    ])
    assert game.get_score() == (9, 6)

    assert game.apply_move((0, 0)) == 1
    assert game.is_over()
    assert game.get_score() == (8, 8)
    assert game.winner() is None
    assert game.is_draw()
    assert "draw" in str(game)


@pytest.mark.parametrize("width,height,seed", [
    (4, 4, 0), (4, 4, 1), (6, 6, 2), (8, 8, 3), (8, 8, 4), (10, 6, 5), (4, 8, 6),
])
def test_random_games_preserve_invariants(width, height, seed):
    rng = random.Random(seed)
    game = ReversiGame(width, height)
    check_invariants(game)

    while not game.is_over():
        mover = game.current_player().color
        turn = game.turn
        move = rng.choice(sorted(game.legal_moves()))
        expected_captures = brute_force_captures(game.get_board_state(), mover, move.x, move.y)

        captured = game.apply_move(move)

        assert captured >= 1
        assert captured == expected_captures
        check_invariants(game)

        # Exactly one of: switch, pass, game over
        if game.is_over():
            assert game.turn == turn and not game.skipped
        elif game.skipped:
            assert game.current_player().color == mover and game.turn == turn + 1
        else:
            assert game.current_player().color == mover.opponent and game.turn == turn + 1


def test_large_board_searches_edges_only():
    game = ReversiGame(200, 200)
    assert len(game.board.edges) == 12

    checked = []
    is_valid_move = game.board.is_valid_move

    def recording_is_valid_move(color, move):
        checked.append(move)
        return is_valid_move(color, move)

    game.board.is_valid_move = recording_is_valid_move
    moves = game.legal_moves()

    assert moves == {Coordinate(101, 99), Coordinate(100, 98), Coordinate(98, 100), Coordinate(99, 101)}
    assert len(checked) == 12
    assert set(checked) == game.board.edges

    game.apply_move(Coordinate(101, 99))
    assert game.get_score() == (1, 4)
    assert len(game.board.edges) == 14


def test_iter_legal_moves_is_lazy():
    game = ReversiGame(200, 200)
    checked = []
    is_valid_move = game.board.is_valid_move

    def recording_is_valid_move(color, move):
        checked.append(move)
        return is_valid_move(color, move)

    game.board.is_valid_move = recording_is_valid_move
    first = next(game.iter_legal_moves())

    # 4 of the 12 edge cells are legal, so at most 8 are rejected first
    assert checked[-1] == first
    assert len(checked) <= 9

    assert set(game.iter_legal_moves()) == game.legal_moves()
    # Served from the cached set once it exists
    checked.clear()
    assert set(game.iter_legal_moves()) == game.legal_moves()
    assert checked == []


def test_iter_legal_moves_when_over():
    game = ReversiGame.from_layout([
        "w w w w",
        "w w w w",
        "w w w w",
        "w w w w",
    ])
    assert game.is_over()
    assert list(game.iter_legal_moves()) == []


def test_copy_is_independent():
    game = ReversiGame(6, 6)
    clone = game.copy()
    clone.apply_move(clone.legal_moves().pop())

    assert game.turn == 1
    assert game.get_score() == (2, 2)
    assert clone.turn == 2
    assert not np.array_equal(game.get_board_state(), clone.get_board_state())
    check_invariants(game)
    check_invariants(clone)


def test_reset():
    game = ReversiGame(6, 6)
    for _ in range(3):
        game.apply_move(sorted(game.legal_moves())[0])
    game.reset()

    fresh = ReversiGame(6, 6)
    assert_same_snapshot(snapshot(game), snapshot(fresh))
    assert game.legal_moves() == fresh.legal_moves()


def test_row_and_column_access():
    game = ReversiGame(4, 4)
    assert list(game.row(0)) == [Tile.EMPTY] * 4
    assert list(game.row(1)) == [Tile.EMPTY, Tile.WHITE, Tile.BLACK, Tile.EMPTY]
    assert list(game.column(1)) == [Tile.EMPTY, Tile.WHITE, Tile.BLACK, Tile.EMPTY]
    assert len(list(game.tiles())) == 16

    with pytest.raises(OutOfRange):
        game.row(4)
    with pytest.raises(OutOfRange):
        game.column(-1)


def test_str():
    text = str(ReversiGame(4, 4))
    assert text.splitlines()[:4] == [". . . .", ". w b .", ". b w .", ". . . ."]
    assert "Score - Black: 2, White: 2" in text
    assert "current player: White" in text


if __name__ == "__main__":
    sys.exit(pytest.main([__file__]))
