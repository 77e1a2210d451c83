"""Text rendering of grids for the console."""

import math

import numpy as np


def format_board(grid: np.ndarray, blank: str | None = None) -> str:
    """
    Render a grid as aligned text with box separators.

    Each value takes three columns; "  |" precedes every box column after
    the first and a dashed line precedes every box row after the first.

    Args:
        grid: n×n grid (array or list of lists).
        blank: Symbol printed for empty cells. None prints 0.

    Returns:
        The rendered board, one line per grid row plus separator lines.
    """
    grid = np.asarray(grid)
    n = int(grid.shape[0])
    box = math.isqrt(n)
    separator = "---" * (n + box - 1)

    lines: list[str] = []
    for i in range(n):
        if i % box == 0 and i > 0:
            lines.append(separator)
        row = []
        for j in range(n):
            if j % box == 0 and j > 0:
                row.append("  |")
            value = int(grid[i, j])
            cell = blank if (value == 0 and blank is not None) else str(value)
            row.append(f"{cell:>3}")
        lines.append("".join(row))
    return "\n".join(lines)
