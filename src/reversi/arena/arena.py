"""
Arena for running matches between move policies.
"""
import os
import json
import logging
import time
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Dict, List, Optional

from tqdm import tqdm

from ..config import ArenaConfig, GameConfig
from ..game import Color, InvalidMove, ReversiGame
from .policy import MovePolicy

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    """Outcome of a single game."""
    game_number: int
    white: str
    black: str
    width: int
    height: int
    winner: Optional[str]  # 'white', 'black' or None for a draw
    white_score: int
    black_score: int
    turns: int
    passes: int
    invalid_moves: int
    duration: float


@dataclass
class MatchSummary:
    """Tally of a series of games between the same two policies."""
    white: str
    black: str
    white_wins: int = 0
    black_wins: int = 0
    draws: int = 0
    games: List[GameRecord] = field(default_factory=list)

    @property
    def games_played(self) -> int:
        return len(self.games)

    def add(self, record: GameRecord):
        if record.winner == 'white':
            self.white_wins += 1
        elif record.winner == 'black':
            self.black_wins += 1
        else:
            self.draws += 1
        self.games.append(record)

    def to_dict(self) -> Dict:
        result = asdict(self)
        result['games_played'] = self.games_played
        return result


class Arena:
    """Plays complete games between two move policies."""

    def __init__(self, config: Optional[ArenaConfig] = None, game_config: Optional[GameConfig] = None):
        """
        Initialize the arena.

        Args:
            config: Match settings (default: ArenaConfig())
            game_config: Board settings (default: GameConfig())
        """
        self.config = config if config is not None else ArenaConfig()
        self.game_config = game_config if game_config is not None else GameConfig()

    def _select_and_apply(self, game: ReversiGame, policy: MovePolicy) -> int:
        """
        Ask ``policy`` for a move until the game accepts one.

        Returns:
            Number of illegal moves the policy made before a legal one

        Raises:
            InvalidMove: If the policy keeps playing illegal moves
        """
        color = game.current_player().color
        invalid = 0

        while True:
            move = policy.select_move(game.iter_legal_moves(), game.get_board_state())
            try:
                game.apply_move(move, color)
                return invalid
            except InvalidMove as e:
                invalid += 1
                logger.warning("%s playing %s: %s", policy.name, color, e)
                if invalid > self.config.max_invalid_moves:
                    raise

    def play_game(self, white: MovePolicy, black: MovePolicy, game_number: int = 1,
                  verbose: bool = False) -> GameRecord:
        """
        Play a single game to the end.

        Args:
            white: Policy playing white, which moves first
            black: Policy playing black
            game_number: Number recorded in the result
            verbose: Whether to print the board after every move

        Returns:
            The game record
        """
        game = ReversiGame(self.game_config.width, self.game_config.height)
        policies = {Color.WHITE: white, Color.BLACK: black}
        white.reset()
        black.reset()

        passes = 0
        invalid_moves = 0
        start_time = time.perf_counter()

        if verbose:
            print(f"Starting game: {white.name} (White) vs {black.name} (Black)")
            print(game)

        while not game.is_over():
            policy = policies[game.current_player().color]
            invalid_moves += self._select_and_apply(game, policy)

            if game.skipped:
                passes += 1
            if verbose:
                print()
                print(game)

        duration = time.perf_counter() - start_time
        winner = game.winner()

        return GameRecord(
            game_number=game_number,
            white=white.name,
            black=black.name,
            width=game.width,
            height=game.height,
            winner=winner.name.lower() if winner is not None else None,
            white_score=game.white.score,
            black_score=game.black.score,
            turns=game.turn,
            passes=passes,
            invalid_moves=invalid_moves,
            duration=duration,
        )

    def run_match(self, white: MovePolicy, black: MovePolicy, num_games: Optional[int] = None,
                  verbose: bool = False) -> MatchSummary:
        """
        Play a series of games with fixed colors.

        Args:
            white: Policy playing white
            black: Policy playing black
            num_games: Number of games (default: config.num_games)
            verbose: Whether to print every board

        Returns:
            Summary of all games played
        """
        num_games = num_games if num_games is not None else self.config.num_games
        summary = MatchSummary(white=white.name, black=black.name)

        games = tqdm(range(1, num_games + 1), desc="Games", disable=not self.config.show_progress)
        for game_number in games:
            record = self.play_game(white, black, game_number, verbose=verbose)
            summary.add(record)
            logger.info("Game %d: winner=%s white=%d black=%d turns=%d passes=%d time=%.3fs",
                        game_number, record.winner or 'draw', record.white_score, record.black_score,
                        record.turns, record.passes, record.duration)

        return summary

    def save_results(self, summary: MatchSummary, filepath: Optional[str] = None) -> str:
        """
        Save a match summary to a JSON file.

        Returns:
            Path of the written file
        """
        if filepath is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filepath = os.path.join(self.config.output_dir, f'match_{timestamp}.json')

        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(summary.to_dict(), f, indent=2)
        return filepath
