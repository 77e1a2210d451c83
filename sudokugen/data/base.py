import math
import re
from typing import Sequence

import numpy as np


class InvalidGridError(ValueError):
    """Raised when a grid is malformed or breaks the row/column/box rule."""


def require_square_sudoku(n: int) -> int:
    """Validate that n is a supported Sudoku order and return box size."""
    if n <= 1:
        raise ValueError(f"n must be at least 4 (a square of an integer >= 2), got {n}")
    box = int(math.isqrt(n))
    if box * box != n:
        raise ValueError(f"n must be a perfect square (e.g. 4, 9, 16); got {n}")
    return box


def empty_grid(n: int) -> np.ndarray:
    """Create an all-blank n×n grid."""
    require_square_sudoku(n)
    return np.zeros((n, n), dtype=np.int64)


def as_grid(values: Sequence[Sequence[int]] | np.ndarray) -> np.ndarray:
    """
    Copy a 2-D integer sequence into a grid array.

    Checks shape and value range only; see `validate_grid` for the
    duplicate checks.

    Args:
        values: List of lists or array of shape (n, n), 0 for blanks.

    Returns:
        A new int64 array of shape (n, n).
    """
    try:
        raw = np.array(values)
    except (TypeError, ValueError) as e:
        raise InvalidGridError(f"grid must be a rectangular array of integers: {e}") from e

    if raw.ndim != 2 or raw.shape[0] != raw.shape[1]:
        raise InvalidGridError(f"grid must be square; got shape={raw.shape}")
    n = int(raw.shape[0])
    try:
        require_square_sudoku(n)
    except ValueError as e:
        raise InvalidGridError(str(e)) from e

    # Ints too large for int64 come through as object arrays; floats must be whole.
    if raw.dtype.kind == "f":
        if not np.all(np.isfinite(raw)) or not np.all(raw == np.floor(raw)):
            raise InvalidGridError("grid values must be whole numbers")
    elif raw.dtype.kind not in "iu":
        raise InvalidGridError(f"grid values must be integers in [0, {n}]; got dtype={raw.dtype}")
    if raw.min() < 0 or raw.max() > n:
        raise InvalidGridError(f"grid values must be in [0, {n}]")
    return raw.astype(np.int64)


def _first_duplicate(values: np.ndarray) -> int | None:
    filled = values[values != 0]
    counts = np.bincount(filled)
    dupes = np.flatnonzero(counts > 1)
    return int(dupes[0]) if dupes.size else None


def validate_grid(values: Sequence[Sequence[int]] | np.ndarray) -> np.ndarray:
    """
    Convert and fully validate a grid.

    Every row, column and box must hold pairwise distinct nonzero values.

    Returns:
        A validated copy of the grid.

    Raises:
        InvalidGridError: If the grid is malformed or contains a duplicate.
    """
    grid = as_grid(values)
    n = int(grid.shape[0])
    box = require_square_sudoku(n)

    for r in range(n):
        dup = _first_duplicate(grid[r, :])
        if dup is not None:
            raise InvalidGridError(f"value {dup} repeated in row {r}")
    for c in range(n):
        dup = _first_duplicate(grid[:, c])
        if dup is not None:
            raise InvalidGridError(f"value {dup} repeated in column {c}")
    for br in range(0, n, box):
        for bc in range(0, n, box):
            dup = _first_duplicate(grid[br:br + box, bc:bc + box].ravel())
            if dup is not None:
                raise InvalidGridError(f"value {dup} repeated in box at ({br}, {bc})")
    return grid


def is_complete(grid: np.ndarray) -> bool:
    """True if no cell is blank."""
    return bool(np.all(grid != 0))


def find_next_empty(grid: np.ndarray) -> tuple[int, int] | None:
    """
    Find the first blank cell in row-major order.

    Returns:
        (row, col) of the first 0, or None if the grid is full.
    """
    flat = grid.ravel()
    idx = int(np.argmin(flat))
    if flat[idx] != 0:
        return None
    n = grid.shape[1]
    return idx // n, idx % n


def candidates(grid: np.ndarray, row: int, col: int) -> list[int]:
    """
    Digits that may legally go into (row, col).

    A digit is excluded if it already appears in the cell's row, column
    or box. Blank (0) is never a candidate.

    Returns:
        Ascending list of digits in 1..n.
    """
    n = int(grid.shape[0])
    box = math.isqrt(n)
    r0 = (row // box) * box
    c0 = (col // box) * box

    permitted = np.ones(n + 1, dtype=bool)
    permitted[grid[row, :]] = False
    permitted[grid[:, col]] = False
    permitted[grid[r0:r0 + box, c0:c0 + box].ravel()] = False
    permitted[0] = False
    return np.flatnonzero(permitted).tolist()


_TOKEN_SPLIT = re.compile(r"[\s,]+")


def parse_grid(text: str) -> np.ndarray:
    """
    Parse a puzzle string into a validated grid.

    Two forms are accepted:
      - one character per cell, digits with '0' or '.' for blanks
        (e.g. an 81-character 9x9 puzzle);
      - comma/whitespace separated tokens, needed once values exceed 9
        (16x16 puzzles).

    The cell count must be a perfect square of a supported order.
    """
    text = text.strip()
    if not text:
        raise InvalidGridError("empty puzzle string")

    if _TOKEN_SPLIT.search(text):
        tokens = [t for t in _TOKEN_SPLIT.split(text) if t]
    else:
        tokens = list(text)

    cells: list[int] = []
    for idx, token in enumerate(tokens):
        if token in ("0", "."):
            cells.append(0)
        elif token.isdecimal():
            cells.append(int(token))
        else:
            raise InvalidGridError(f"invalid cell {token!r} at position {idx}")

    n = math.isqrt(len(cells))
    if n * n != len(cells):
        raise InvalidGridError(f"cell count must be a perfect square; got {len(cells)}")
    return validate_grid([cells[r * n:(r + 1) * n] for r in range(n)])


def grid_to_string(grid: np.ndarray) -> str:
    """Inverse of `parse_grid`, using the compact form when every value fits one digit."""
    n = int(grid.shape[0])
    if n <= 9:
        return "".join(str(int(v)) for v in grid.ravel())
    return ",".join(str(int(v)) for v in grid.ravel())
