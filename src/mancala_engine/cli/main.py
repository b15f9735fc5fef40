"""
Main CLI for the Kalah engine.
"""

import argparse
import logging
import random
import sys
from typing import Optional, Tuple

from tqdm import tqdm

from ..config import PLAY_DEPTH, EngineConfig
from ..core import (
    GameState,
    Player,
    apply_move,
    children_of,
    create_starting_state,
    evaluate_terminal,
    get_game_result,
    is_terminal,
    validate_move,
)
from ..solver import AlphaBetaSolver, TranspositionCache
from ..utils import cache_budget_bytes, log_memory_status
from ..utils.rich_display import GameDisplay, setup_rich_logging

QUIT_WORDS = ("q", "quit", "exit")


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_move(text: str, state: GameState) -> int:
    """
    Parse a pit index typed by a human and check it is playable.

    Raises:
        ValueError: if the text isn't an integer
        IllegalMoveError: if the pit can't be played in this position
    """
    text = text.strip()
    try:
        move = int(text)
    except ValueError:
        raise ValueError(f"Expected a pit index, got {text!r}") from None

    validate_move(state, move)
    return move


def parse_board(text: str) -> Tuple[int, ...]:
    """Parse a comma or space separated list of seed counts."""
    parts = text.replace(",", " ").split()
    try:
        board = tuple(int(part) for part in parts)
    except ValueError:
        raise ValueError(f"Board must be a list of integers, got {text!r}") from None

    if len(board) < 4 or len(board) % 2:
        raise ValueError(f"Board needs an even number of positions (pits + 2 stores), got {len(board)}")
    return board


def build_cache(cfg: EngineConfig) -> TranspositionCache:
    """
    Create the transposition cache described by the config.

    An explicit memory budget wins, then an explicit entry count; otherwise
    the cache is sized from a share of the RAM currently available.
    """
    if cfg.cache_memory_mb is not None:
        return TranspositionCache.from_memory_limit(cache_budget_bytes(cfg.cache_memory_mb))
    if cfg.cache_entries is not None:
        return TranspositionCache(max_entries=cfg.cache_entries)
    return TranspositionCache.from_memory_limit(cache_budget_bytes())


def load_config(args, logger: logging.Logger) -> EngineConfig:
    """Build the engine config, exiting with status 2 on invalid options."""
    try:
        return EngineConfig.from_args(args)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(2)


def play_command(args):
    """Play an interactive game against the engine."""
    setup_rich_logging(args.log_level)
    logger = logging.getLogger(__name__)

    cfg = load_config(args, logger)
    human = Player(args.human_player - 1)
    display = GameDisplay()
    solver = AlphaBetaSolver(cache=build_cache(cfg))

    display.show_header("Kalah", cfg.num_pits, cfg.num_seeds, cfg.depth)
    display.log_info(f"You are {human}. Enter a pit index, or 'q' to quit.")

    state = create_starting_state(cfg.num_pits, cfg.num_seeds)

    while not is_terminal(state):
        display.show_board(state)

        if state.player == human:
            try:
                text = display.prompt(f"{human}, your move: ")
            except EOFError:
                display.log_warning("Input closed, leaving game")
                return

            if text.strip().lower() in QUIT_WORDS:
                display.log_info("Bye")
                return

            try:
                move = parse_move(text, state)
            except ValueError as e:
                display.log_error(str(e))
                continue

            state, _ = apply_move(state, move)
        else:
            display.log("computing...", style="dim")
            choice = solver.choose_move(state, cfg.depth)
            display.show_engine_move(choice.path, choice.score, solver.nodes)
            logger.debug(f"Engine chose child {choice.index}: {choice.path}\n{choice.state}")
            state = choice.state

    display.show_result(get_game_result(state), state)
    log_memory_status()


def analyze_command(args):
    """Search a single position and report the best move."""
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        board = parse_board(args.board)
        state = GameState(num_pits=(len(board) - 2) // 2, board=board, player=Player(args.player - 1))
    except ValueError as e:
        logger.error(str(e))
        sys.exit(2)

    cfg = load_config(args, logger)
    display = GameDisplay()
    display.show_board(state)

    if is_terminal(state):
        display.log_info(get_game_result(state))
        return

    solver = AlphaBetaSolver(cache=build_cache(cfg))
    choice = solver.choose_move(state, cfg.depth)

    logger.info(f"Searched {solver.nodes:,} nodes ({solver.cutoffs:,} cutoffs)")
    logger.info(f"Score at depth {cfg.depth}: {choice.score:+d}")
    logger.info(f"Best move: {' -> '.join(str(pit) for pit in choice.path)}")
    display.show_board(choice.state)


def selfplay_command(args):
    """Play the engine against itself."""
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    cfg = load_config(args, logger)
    rng = random.Random(args.seed)
    results = {"p1": 0, "p2": 0, "tie": 0}
    margins = []

    logger.info(
        f"Self-play: {args.games} games of Kalah({cfg.num_pits},{cfg.num_seeds}) "
        f"at depth {cfg.depth}, {args.opening_plies} random opening plies"
    )

    for game in tqdm(range(args.games), desc="Self-play", unit=" game"):
        # One cache per game
        solver = AlphaBetaSolver(cache=build_cache(cfg))
        state = create_starting_state(cfg.num_pits, cfg.num_seeds)
        plies = 0

        while not is_terminal(state):
            if plies < args.opening_plies:
                state = rng.choice(children_of(state)).state
            else:
                state = solver.choose_move(state, cfg.depth).state
            plies += 1

        value = evaluate_terminal(state)
        margins.append(value)
        if value > 0:
            results["p1"] += 1
        elif value < 0:
            results["p2"] += 1
        else:
            results["tie"] += 1
        logger.debug(f"Game {game + 1}: {get_game_result(state)} after {plies} plies")

    logger.info("=" * 60)
    logger.info("SELF-PLAY COMPLETE")
    logger.info("=" * 60)
    logger.info(f"Player 1 wins: {results['p1']}")
    logger.info(f"Player 2 wins: {results['p2']}")
    logger.info(f"Ties: {results['tie']}")
    if margins:
        logger.info(f"Mean margin (P1 - P2): {sum(margins) / len(margins):+.2f}")
    log_memory_status()


def _add_engine_args(
    parser: argparse.ArgumentParser, with_variant: bool = True, depth: Optional[int] = None
) -> None:
    defaults = EngineConfig()
    if depth is None:
        depth = defaults.depth
    if with_variant:
        parser.add_argument(
            "--num-pits", type=int, default=defaults.num_pits, help="Number of pits per player"
        )
        parser.add_argument(
            "--num-seeds", type=int, default=defaults.num_seeds, help="Initial seeds per pit"
        )
    parser.add_argument(
        "--depth",
        type=int,
        default=depth,
        help=f"Search depth in plies (default {depth}; depth 13 takes minutes per move)",
    )
    parser.add_argument(
        "--cache-entries",
        type=int,
        default=defaults.cache_entries,
        help="Maximum transposition cache entries (default: sized from available RAM)",
    )
    parser.add_argument(
        "--cache-memory-mb",
        type=int,
        default=None,
        help="Size the cache from a memory budget instead of --cache-entries",
    )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Kalah engine")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play against the engine")
    _add_engine_args(play_parser, depth=PLAY_DEPTH)
    play_parser.add_argument(
        "--human-player", type=int, choices=[1, 2], default=1, help="Side you play (Player 1 moves first)"
    )
    play_parser.set_defaults(func=play_command)

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Find the best move in a position")
    analyze_parser.add_argument(
        "--board",
        required=True,
        help="Seed counts for every position, e.g. '6,6,6,6,6,6,0,6,6,6,6,6,6,0'",
    )
    analyze_parser.add_argument(
        "--player", type=int, choices=[1, 2], default=1, help="Side to move"
    )
    _add_engine_args(analyze_parser, with_variant=False)
    analyze_parser.set_defaults(func=analyze_command)

    # Self-play command
    selfplay_parser = subparsers.add_parser("selfplay", help="Play the engine against itself")
    _add_engine_args(selfplay_parser)
    selfplay_parser.add_argument("--games", type=int, default=10, help="Number of games")
    selfplay_parser.add_argument(
        "--opening-plies", type=int, default=2, help="Random plies before the engine takes over"
    )
    selfplay_parser.add_argument("--seed", type=int, default=None, help="Random seed for openings")
    selfplay_parser.set_defaults(func=selfplay_command)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
