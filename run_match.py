"""
Script for running Reversi matches between the random policy and itself or a human.
"""
import os
import sys
import argparse
from pathlib import Path

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from reversi.arena import Arena, ConsolePolicy, RandomPolicy
from reversi.config import Config, get_default_config
from reversi.game import Board, ConstructionError
from reversi.game.render import TILE_MAPS
from reversi.logger import parse_level, setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run Reversi matches')

    parser.add_argument('--config', type=str, default=None,
                        help='Path to a JSON config file')

    # Board parameters
    parser.add_argument('--width', type=int, default=None,
                        help='Board width (even, at least 4)')
    parser.add_argument('--height', type=int, default=None,
                        help='Board height (even, at least 4)')

    # Match parameters
    parser.add_argument('--games', type=int, default=None,
                        help='Number of games to play')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the random policies')
    parser.add_argument('--sample-limit', type=int, default=None,
                        help='Choose among at most this many sampled legal moves')
    parser.add_argument('--human', choices=['white', 'black'], default=None,
                        help='Play one game against the random policy with this color')
    parser.add_argument('--tiles', choices=sorted(TILE_MAPS), default='ascii',
                        help='Tile symbols for console output')

    # Output
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory to save match results')
    parser.add_argument('--verbose', action='store_true',
                        help='Print the board after every move')
    return parser


def load_config(args) -> Config:
    """Load the config file if any, then apply command line overrides."""
    if args.config is not None:
        if not os.path.exists(args.config):
            raise FileNotFoundError(f"Config file not found: {args.config}")
        config = Config.load(args.config)
    else:
        config = get_default_config()

    if args.width is not None:
        config.game.width = args.width
    if args.height is not None:
        config.game.height = args.height
    if args.games is not None:
        config.arena.num_games = args.games
    if args.seed is not None:
        config.policy.seed = args.seed
    if args.sample_limit is not None:
        config.policy.sample_limit = args.sample_limit
    if args.output_dir is not None:
        config.arena.output_dir = args.output_dir
    if args.verbose:
        config.arena.show_progress = False
    return config


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args)

    # Board size, log level and policy settings may come from a config file
    try:
        Board.validate_size(config.game.width, config.game.height)
        parse_level(config.logging.log_level)
        computer = RandomPolicy(config.policy.seed, config.policy.sample_limit)
    except (ConstructionError, ValueError) as e:
        parser.error(str(e))

    logger = setup_logger(config)
    arena = Arena(config.arena, config.game)
    tile_map = TILE_MAPS[args.tiles]

    try:
        if args.human is not None:
            human = ConsolePolicy(tile_map=tile_map)
            white, black = (human, computer) if args.human == 'white' else (computer, human)

            record = arena.play_game(white, black, verbose=args.verbose)
            print(f"\nFinal score - White: {record.white_score}, Black: {record.black_score}")
            print("It's a draw!" if record.winner is None else f"{record.winner.capitalize()} wins!")
            return

        print(f"Running {config.arena.num_games} random games on a "
              f"{config.game.width} x {config.game.height} = {config.game.width * config.game.height} tiles board")

        white = computer
        black = RandomPolicy(None if config.policy.seed is None else config.policy.seed + 1,
                             config.policy.sample_limit)
        summary = arena.run_match(white, black, verbose=args.verbose)

        total_time = sum(game.duration for game in summary.games)
        print(f"\nWhite wins: {summary.white_wins}, Black wins: {summary.black_wins}, Draws: {summary.draws}")
        print(f"Running time: {total_time:.3f} s ({total_time / max(summary.games_played, 1):.3f} s per game)")

        results_file = arena.save_results(summary)
        print(f"Results saved to {results_file}")
    finally:
        logger.close()


if __name__ == '__main__':
    main()
