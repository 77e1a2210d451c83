import numpy as np
import torch
from torch.utils.data import Dataset
from typing import Tuple

from .base import InvalidGridError, as_grid


def encode_puzzle(puzzle: np.ndarray) -> np.ndarray:
    """
    One-hot encode an n*n puzzle into (n^2, n+1).

    Channel 0 represents blank (0 in the puzzle).
    Channels 1..n represent digits 1..n.

    Args:
        puzzle (np.ndarray): An n*n Sudoku puzzle grid with blanks represented as 0.
    Returns:
        np.ndarray: One-hot encoded representation of shape (n^2, n+1).
    """
    puzzle = as_grid(puzzle)
    n = int(puzzle.shape[0])
    encoded = np.zeros((n * n, n + 1), dtype=np.float32)
    encoded[np.arange(n * n), puzzle.ravel()] = 1.0
    return encoded


def encode_solution(solution: np.ndarray) -> np.ndarray:
    """
    Encode an n*n solution into class indices in [0, n-1] with shape (n^2,).

    Args:
        solution (np.ndarray): A complete n*n Sudoku grid.
    Returns:
        np.ndarray: Encoded solution as class indices with shape (n^2,).
    """
    solution = as_grid(solution)
    if np.any(solution == 0):
        raise InvalidGridError("solution must not contain blanks")
    return solution.ravel().astype(np.int64) - 1


def generate_encoded_sample(n: int = 4, max_empty: int | None = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate a single unique-solution puzzle and encode it.

    Args:
        n (int): Size of the Sudoku grid (n x n). Must be a perfect square.
        max_empty (int | None): Cap on blanked cells.
    Returns:
        Tuple[np.ndarray, np.ndarray]: Encoded puzzle and solution.
    """
    from ..generator import generate

    puzzle, solution, _ = generate(n, max_empty=max_empty)
    return encode_puzzle(puzzle), encode_solution(solution)


class MinimalPuzzleDataset(Dataset):
    """Freshly generated minimal puzzles, one per item."""

    def __init__(self, num_samples: int, n: int = 4, max_empty: int | None = None):
        self.num_samples = num_samples
        self.n = n
        self.max_empty = max_empty

    def __len__(self) -> int:
        return self.num_samples

    def __getitem__(self, idx: int) -> Tuple[torch.Tensor, torch.Tensor]:
        x, y = generate_encoded_sample(n=self.n, max_empty=self.max_empty)
        return (
            torch.tensor(x, dtype=torch.float32),
            torch.tensor(y, dtype=torch.long)
        )
