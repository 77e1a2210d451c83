"""
Command-line driver.

Generates a puzzle, prints it, waits for ENTER and prints the solution.
With --solve, counts the solutions of a supplied puzzle instead.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence

from .config import SUPPORTED_SIZES, Config, load_config, merge_configs
from .data.base import parse_grid
from .display import format_board
from .generator import PuzzleGenerator
from .logging_utils import get_logger
from .random_utils import seed_everything
from .solver import SearchBudgetExceeded, solve_and_count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="sudokugen: generate minimal Sudoku puzzles or count solutions"
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML config file",
    )

    # Board / generation
    parser.add_argument(
        "--size",
        type=int,
        default=None,
        choices=list(SUPPORTED_SIZES),
        help="Board size: 4 (4x4), 9 (9x9) or 16 (16x16) (default: 9)",
    )
    parser.add_argument(
        "--max-empty",
        type=int,
        default=None,
        help="Maximum number of blanked cells (default: size^2, 130 for 16x16)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: current time)",
    )

    # Solving
    parser.add_argument(
        "--solve",
        type=str,
        default=None,
        metavar="PUZZLE",
        help="Count solutions of PUZZLE ('0' or '.' for blanks; comma-separated for 16x16)",
    )

    parser.add_argument(
        "--no-pause",
        action="store_true",
        help="Print the solution without waiting for ENTER",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: INFO)",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    """Apply CLI overrides on top of the YAML (or default) config."""
    config = load_config(Path(args.config) if args.config else None)

    overrides: dict[str, Any] = {}
    if args.size is not None:
        overrides["board"] = {"size": args.size}
    if args.max_empty is not None:
        overrides["generator"] = {"max_empty": args.max_empty}
    if args.log_level is not None:
        overrides["logging"] = {"level": args.log_level}
    if args.seed is not None:
        overrides["seed"] = args.seed
    return merge_configs(config, overrides) if overrides else config


def run_generate(config: Config, pause: bool = True) -> None:
    generator = PuzzleGenerator.from_config(config)
    result = generator.generate()
    size = config.board.size

    print(format_board(result.puzzle))
    print("\n")
    print(f"There are {size * size - result.removed_count} cells already filled in on this Sudoku board.")
    if pause:
        print("Press ENTER to display the solution.")
        try:
            input()
        except EOFError:
            pass

    print(format_board(result.solution))
    print("\n")


def run_solve(puzzle_text: str, config: Config) -> int:
    grid = parse_grid(puzzle_text)
    result = solve_and_count(grid, max_steps=config.solver.max_steps)

    print(format_board(grid))
    print("\n")
    print(f"Solutions: {result.count}")
    if result.first_solution is not None:
        print(format_board(result.first_solution))
        print("\n")
    return result.count


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point with CLI argument parsing."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except (ValueError, TypeError, FileNotFoundError) as e:
        print(f"Error loading config: {e}")
        return 1

    logger = get_logger(
        level=config.logging.level,
        log_file=Path(config.logging.log_file) if config.logging.log_file else None,
    )

    # Seed once for the whole process.
    seed = seed_everything(config.seed)
    logger.info("Random seed: %d", seed)

    if args.solve is not None:
        try:
            run_solve(args.solve, config)
        except ValueError as e:
            logger.error("Invalid puzzle: %s", e)
            return 1
        except SearchBudgetExceeded as e:
            logger.error("Gave up counting: %s", e)
            return 1
        return 0

    run_generate(config, pause=not args.no_pause)
    return 0


if __name__ == "__main__":
    sys.exit(main())
