"""Grid utilities, encoding and dataset classes."""

from .base import (
    InvalidGridError,
    as_grid,
    candidates,
    empty_grid,
    find_next_empty,
    grid_to_string,
    is_complete,
    parse_grid,
    require_square_sudoku,
    validate_grid,
)
from .sudoku import (
    MinimalPuzzleDataset,
    encode_puzzle,
    encode_solution,
    generate_encoded_sample,
)

__all__ = [
    # Grid utilities
    "InvalidGridError",
    "as_grid",
    "candidates",
    "empty_grid",
    "find_next_empty",
    "grid_to_string",
    "is_complete",
    "parse_grid",
    "require_square_sudoku",
    "validate_grid",
    # Encoding / datasets
    "MinimalPuzzleDataset",
    "encode_puzzle",
    "encode_solution",
    "generate_encoded_sample",
]
