"""
sudokugen: minimal Sudoku puzzle generation and solution counting.

Builds a random complete grid by backtracking, then blanks cells while the
puzzle keeps a unique solution. The same engine counts the solutions of
any grid.
"""

from sudokugen.config import Config, load_config, merge_configs
from sudokugen.data import (
    InvalidGridError,
    MinimalPuzzleDataset,
    candidates,
    encode_puzzle,
    encode_solution,
    find_next_empty,
    parse_grid,
    validate_grid,
)
from sudokugen.display import format_board
from sudokugen.generator import (
    GeneratedPuzzle,
    GenerationError,
    PuzzleGenerator,
    generate,
)
from sudokugen.logging_utils import get_logger
from sudokugen.random_utils import seed_everything, shuffle
from sudokugen.solver import (
    SearchBudgetExceeded,
    SearchMode,
    SolveResult,
    count_solutions,
    fill_grid,
    solve,
    solve_and_count,
)

__version__ = "0.1.0"
__all__ = [
    # Core entry points
    "generate",
    "solve_and_count",
    # Search
    "SearchMode",
    "SolveResult",
    "SearchBudgetExceeded",
    "count_solutions",
    "fill_grid",
    "solve",
    # Generation
    "GeneratedPuzzle",
    "GenerationError",
    "PuzzleGenerator",
    # Grids
    "InvalidGridError",
    "candidates",
    "find_next_empty",
    "parse_grid",
    "validate_grid",
    "format_board",
    # Data
    "MinimalPuzzleDataset",
    "encode_puzzle",
    "encode_solution",
    # Utilities
    "seed_everything",
    "shuffle",
    "get_logger",
    # Configuration
    "Config",
    "load_config",
    "merge_configs",
]
