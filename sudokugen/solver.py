"""
Backtracking search over Sudoku grids.

Two variants share the cell scanner and candidate evaluator:
- fill mode: randomized candidate order, stops at the first complete grid
- counting mode: exhaustive, counts every completion and keeps the first

Both write into the grid in place and undo every write on the way back
out of a failed branch.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from .data.base import candidates, find_next_empty, validate_grid
from .random_utils import shuffle


class SearchMode(str, Enum):
    """Which backtracking variant to run."""

    FILL = "fill"
    COUNT = "count"


class SearchBudgetExceeded(RuntimeError):
    """Raised when counting mode visits more nodes than allowed."""


@dataclass
class SolveResult:
    """Outcome of a counting-mode search."""

    count: int
    first_solution: np.ndarray | None
    nodes: int = 0  # candidate placements tried during this call

    @property
    def is_unique(self) -> bool:
        return self.count == 1


class _Search:
    """State for one top-level search call."""

    def __init__(
        self,
        grid: np.ndarray,
        limit: int | None = None,
        max_steps: int | None = None,
    ):
        self.grid = grid
        self.limit = limit
        self.max_steps = max_steps
        self.nodes = 0
        self.first_solution: np.ndarray | None = None

    def _place(self, row: int, col: int, value: int) -> None:
        self.nodes += 1
        if self.max_steps is not None and self.nodes > self.max_steps:
            raise SearchBudgetExceeded(f"search exceeded {self.max_steps} steps")
        self.grid[row, col] = value

    def fill(self) -> bool:
        cell = find_next_empty(self.grid)
        if cell is None:
            return True

        row, col = cell
        for value in shuffle(candidates(self.grid, row, col)):
            self._place(row, col, value)
            if self.fill():
                return True
            self.grid[row, col] = 0
        return False

    def count(self) -> int:
        cell = find_next_empty(self.grid)
        if cell is None:
            if self.first_solution is None:
                self.first_solution = self.grid.copy()
            return 1

        row, col = cell
        total = 0
        for value in candidates(self.grid, row, col):
            self._place(row, col, value)
            try:
                total += self.count()
            finally:
                self.grid[row, col] = 0
            if self.limit is not None and total >= self.limit:
                break
        return total


def fill_grid(grid: np.ndarray, max_steps: int | None = None) -> bool:
    """
    Complete `grid` in place with a random valid assignment.

    Args:
        grid: Grid to fill; blanks are 0.
        max_steps: Optional cap on candidate placements.

    Returns:
        True if the grid was completed. On False the grid is back in its
        original state.
    """
    return _Search(grid, max_steps=max_steps).fill()


def count_solutions(
    grid: np.ndarray,
    limit: int | None = None,
    max_steps: int | None = None,
) -> SolveResult:
    """
    Count the completions of `grid` by exhaustive backtracking.

    The grid is used as scratch space and is restored before returning.
    The caller must pass a grid that already satisfies the Sudoku rule.

    Args:
        grid: Grid to search, blanks are 0.
        limit: Stop once this many solutions are found (None = count all).
            Any count >= limit is reported as found so far.
        max_steps: Optional cap on candidate placements; exceeding it raises
            SearchBudgetExceeded.

    Returns:
        SolveResult with the count, the first solution found (or None) and
        the number of nodes visited.
    """
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")
    search = _Search(grid, limit=limit, max_steps=max_steps)
    total = search.count()
    return SolveResult(count=total, first_solution=search.first_solution, nodes=search.nodes)


def solve(
    grid: np.ndarray,
    mode: SearchMode = SearchMode.COUNT,
    limit: int | None = None,
    max_steps: int | None = None,
) -> bool | SolveResult:
    """Dispatch to `fill_grid` or `count_solutions` by mode."""
    mode = SearchMode(mode)
    if mode is SearchMode.FILL:
        return fill_grid(grid, max_steps=max_steps)
    return count_solutions(grid, limit=limit, max_steps=max_steps)


def solve_and_count(
    grid: Sequence[Sequence[int]] | np.ndarray,
    limit: int | None = None,
    max_steps: int | None = None,
) -> SolveResult:
    """
    Validate an arbitrary grid and count its solutions.

    The caller's grid is never modified.

    Raises:
        InvalidGridError: If the grid is malformed or already breaks the
            row/column/box rule.
    """
    board = validate_grid(grid)
    return count_solutions(board, limit=limit, max_steps=max_steps)
