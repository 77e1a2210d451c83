"""
Minimal-puzzle generation.

A random complete grid is filled first. Cells are then blanked one at a
time in shuffled order; a blank is kept only while the puzzle still has a
single solution.
"""

import logging
from typing import NamedTuple

import numpy as np

from .config import BoardConfig, Config, GeneratorConfig, SolverConfig, default_max_empty
from .data.base import empty_grid
from .random_utils import shuffle
from .solver import SearchBudgetExceeded, count_solutions, fill_grid

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Raised when generation hits a state that should be impossible."""


class GeneratedPuzzle(NamedTuple):
    """A unique-solution puzzle with its solution."""

    puzzle: np.ndarray
    solution: np.ndarray
    removed_count: int

    @property
    def filled_count(self) -> int:
        return int(np.count_nonzero(self.puzzle))


class PuzzleGenerator:
    """
    Generates puzzles of one board size.

    Args:
        size: Board order (4, 9 or 16).
        generator_config: Removal budget and early-exit setting.
        solver_config: Search limits applied to each uniqueness check.
    """

    def __init__(
        self,
        size: int = 9,
        generator_config: GeneratorConfig | None = None,
        solver_config: SolverConfig | None = None,
    ):
        self.size = BoardConfig(size).size
        self.generator_config = generator_config or GeneratorConfig()
        self.solver_config = solver_config or SolverConfig()

    @classmethod
    def from_config(cls, config: Config) -> "PuzzleGenerator":
        return cls(config.board.size, config.generator, config.solver)

    @property
    def max_empty(self) -> int:
        if self.generator_config.max_empty is None:
            return default_max_empty(self.size)
        return self.generator_config.max_empty

    def make_solution(self) -> np.ndarray:
        """Fill an empty board with a random valid assignment."""
        grid = empty_grid(self.size)
        # An empty board is always completable, so the fill runs unbounded.
        if not fill_grid(grid):
            raise GenerationError(f"failed to fill an empty {self.size}x{self.size} grid")
        logger.debug("Filled %dx%d solution grid", self.size, self.size)
        return grid

    def _is_unique(self, puzzle: np.ndarray) -> tuple[bool, np.ndarray | None]:
        limit = 2 if self.generator_config.early_exit else None
        try:
            result = count_solutions(puzzle, limit=limit, max_steps=self.solver_config.max_steps)
        except SearchBudgetExceeded:
            logger.warning("Uniqueness check exceeded step budget; keeping cell filled")
            return False, None
        if result.count == 0:
            raise GenerationError("puzzle derived from a valid solution has no completion")
        return result.count == 1, result.first_solution

    def carve(self, solution: np.ndarray) -> tuple[np.ndarray, int, np.ndarray]:
        """
        Blank cells of `solution` while the puzzle stays uniquely solvable.

        Returns:
            (puzzle, removed_count, last captured solution)
        """
        n = self.size
        puzzle = solution.copy()
        captured = solution
        removed_count = 0
        max_empty = self.max_empty

        for index in shuffle(range(n * n)):
            if removed_count >= max_empty:
                break
            row, col = index // n, index % n
            value = puzzle[row, col]
            puzzle[row, col] = 0

            unique, first = self._is_unique(puzzle)
            if unique:
                removed_count += 1
                captured = first
                logger.debug("Removed (%d, %d); %d blanks", row, col, removed_count)
            else:
                puzzle[row, col] = value

        return puzzle, removed_count, captured

    def generate(self) -> GeneratedPuzzle:
        """Build a solution and carve a minimal puzzle from it."""
        solution = self.make_solution()
        puzzle, removed_count, captured = self.carve(solution)

        if not np.array_equal(captured, solution):
            raise GenerationError("uniqueness check converged on a different solution")

        logger.info(
            "Generated %dx%d puzzle: %d cells removed, %d filled",
            self.size,
            self.size,
            removed_count,
            self.size * self.size - removed_count,
        )
        return GeneratedPuzzle(puzzle=puzzle, solution=solution, removed_count=removed_count)


def generate(size: int = 9, max_empty: int | None = None) -> GeneratedPuzzle:
    """
    Generate a unique-solution puzzle.

    Args:
        size: Board order (4, 9 or 16).
        max_empty: Cap on blanked cells (None = default for the size).

    Returns:
        GeneratedPuzzle(puzzle, solution, removed_count).
    """
    return PuzzleGenerator(size, GeneratorConfig(max_empty=max_empty)).generate()
