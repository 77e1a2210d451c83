"""Tests for grid utilities, encoding and dataset classes."""

import numpy as np
import pytest
import torch

from sudokugen.data import (
    InvalidGridError,
    MinimalPuzzleDataset,
    as_grid,
    candidates,
    empty_grid,
    encode_puzzle,
    encode_solution,
    find_next_empty,
    generate_encoded_sample,
    grid_to_string,
    is_complete,
    parse_grid,
    require_square_sudoku,
    validate_grid,
)

SOLVED_4 = np.array([
    [1, 2, 3, 4],
    [3, 4, 1, 2],
    [2, 1, 4, 3],
    [4, 3, 2, 1],
])


class TestRequireSquareSudoku:
    """Tests for board size validation."""

    @pytest.mark.parametrize("n,box", [(4, 2), (9, 3), (16, 4)])
    def test_supported_sizes(self, n, box):
        """Perfect squares should return their box size."""
        assert require_square_sudoku(n) == box

    @pytest.mark.parametrize("n", [0, 1, -4, 5, 8, 10])
    def test_invalid_sizes(self, n):
        """Degenerate and non-square sizes should raise ValueError."""
        with pytest.raises(ValueError):
            require_square_sudoku(n)


class TestGridConversion:
    """Tests for as_grid / validate_grid."""

    def test_empty_grid(self):
        """empty_grid should be all zeros."""
        grid = empty_grid(9)
        assert grid.shape == (9, 9)
        assert not grid.any()

    def test_as_grid_copies(self):
        """as_grid should not alias the input."""
        source = SOLVED_4.copy()
        grid = as_grid(source)
        grid[0, 0] = 0
        assert source[0, 0] == 1

    def test_as_grid_accepts_lists(self):
        """Lists of lists should be converted to arrays."""
        grid = as_grid(SOLVED_4.tolist())
        assert isinstance(grid, np.ndarray)
        assert np.array_equal(grid, SOLVED_4)

    def test_non_square_rejected(self):
        """Non-square input should raise InvalidGridError."""
        with pytest.raises(InvalidGridError):
            as_grid([[1, 2, 3, 4], [3, 4, 1, 2]])

    def test_unsupported_order_rejected(self):
        """A 5x5 grid has no box structure."""
        with pytest.raises(InvalidGridError):
            as_grid(np.zeros((5, 5), dtype=int))

    def test_out_of_range_rejected(self):
        """Values above n should raise InvalidGridError."""
        grid = SOLVED_4.copy()
        grid[0, 0] = 5
        with pytest.raises(InvalidGridError):
            as_grid(grid)

    def test_oversized_value_rejected(self):
        """Integers too large for int64 should be reported, not overflow."""
        grid = SOLVED_4.tolist()
        grid[3][3] = 2**70
        with pytest.raises(InvalidGridError):
            as_grid(grid)

    def test_fractional_value_rejected(self):
        """Non-whole floats must not be truncated into digits."""
        grid = SOLVED_4.tolist()
        grid[0][0] = 1.9
        with pytest.raises(InvalidGridError, match="whole"):
            as_grid(grid)

    def test_whole_floats_accepted(self):
        """Floats holding whole numbers convert cleanly."""
        grid = as_grid(SOLVED_4.astype(float))
        assert grid.dtype == np.int64
        assert np.array_equal(grid, SOLVED_4)

    def test_non_numeric_rejected(self):
        """String cells should be rejected."""
        grid = SOLVED_4.astype(str).tolist()
        with pytest.raises(InvalidGridError):
            as_grid(grid)

    def test_invalid_grid_is_value_error(self):
        """InvalidGridError should be catchable as ValueError."""
        assert issubclass(InvalidGridError, ValueError)

    def test_validate_accepts_solution(self):
        """A valid solution should pass validation."""
        assert np.array_equal(validate_grid(SOLVED_4), SOLVED_4)

    def test_validate_row_duplicate(self):
        """Duplicate in a row should be reported."""
        grid = [[1, 1, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]
        with pytest.raises(InvalidGridError, match="row 0"):
            validate_grid(grid)

    def test_validate_column_duplicate(self):
        """Duplicate in a column should be reported."""
        grid = [[2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [2, 0, 0, 0]]
        with pytest.raises(InvalidGridError, match="column 0"):
            validate_grid(grid)

    def test_validate_box_duplicate(self):
        """Duplicate in a box should be reported."""
        grid = [[3, 0, 0, 0], [0, 3, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]
        with pytest.raises(InvalidGridError, match="box"):
            validate_grid(grid)

    def test_is_complete(self):
        """is_complete should detect blanks."""
        assert is_complete(SOLVED_4)
        grid = SOLVED_4.copy()
        grid[3, 3] = 0
        assert not is_complete(grid)


class TestFindNextEmpty:
    """Tests for the row-major cell scanner."""

    def test_full_grid(self):
        """A full grid has no empty cell."""
        assert find_next_empty(SOLVED_4) is None

    def test_first_cell(self):
        """An empty grid starts at the origin."""
        assert find_next_empty(empty_grid(9)) == (0, 0)

    def test_row_major_order(self):
        """The earliest blank in row-major order should win."""
        grid = SOLVED_4.copy()
        grid[2, 0] = 0
        grid[1, 3] = 0
        assert find_next_empty(grid) == (1, 3)

    def test_no_side_effects(self):
        """Scanning should not modify the grid."""
        grid = SOLVED_4.copy()
        grid[3, 3] = 0
        before = grid.copy()
        find_next_empty(grid)
        assert np.array_equal(grid, before)


class TestCandidates:
    """Tests for the candidate evaluator."""

    def test_empty_grid_all_digits(self):
        """Every digit is a candidate on an empty board."""
        assert candidates(empty_grid(9), 4, 4) == list(range(1, 10))

    def test_single_gap(self):
        """The only missing digit should be the single candidate."""
        grid = SOLVED_4.copy()
        grid[3, 3] = 0
        assert candidates(grid, 3, 3) == [1]

    def test_excludes_row_column_and_box(self):
        """Digits in the row, column and box should all be excluded."""
        grid = empty_grid(9)
        grid[0, 8] = 1  # row
        grid[8, 0] = 2  # column
        grid[1, 1] = 3  # box
        grid[5, 5] = 4  # unrelated
        assert candidates(grid, 0, 0) == [4, 5, 6, 7, 8, 9]

    def test_box_bounds_16(self):
        """Box bounds should follow the 4x4 boxes of a 16x16 board."""
        grid = empty_grid(16)
        grid[4, 4] = 16  # same box as (7, 7)
        grid[3, 3] = 15  # previous box
        result = candidates(grid, 7, 7)
        assert 16 not in result
        assert 15 in result
        assert len(result) == 15

    def test_no_candidates(self):
        """A cell that sees every digit has no candidates."""
        grid = np.array([
            [0, 2, 3, 4],
            [3, 4, 0, 0],
            [1, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        assert candidates(grid, 0, 0) == []


class TestParseGrid:
    """Tests for puzzle string parsing."""

    def test_compact_form(self):
        """One character per cell, '0' and '.' are blanks."""
        grid = parse_grid("1234341221434.20")
        assert grid.shape == (4, 4)
        assert grid[3, 1] == 0
        assert grid[3, 2] == 2
        assert grid[3, 3] == 0

    def test_token_form(self):
        """Comma separated tokens allow two-digit values."""
        values = ["0"] * 256
        values[0] = "16"
        grid = parse_grid(",".join(values))
        assert grid.shape == (16, 16)
        assert grid[0, 0] == 16

    def test_round_trip_9(self):
        """grid_to_string should invert parse_grid."""
        text = "0" * 80 + "9"
        assert grid_to_string(parse_grid(text)) == text

    def test_bad_length(self):
        """Cell counts that are not squares should be rejected."""
        with pytest.raises(InvalidGridError):
            parse_grid("123")

    def test_bad_character(self):
        """Letters are not valid cells."""
        with pytest.raises(InvalidGridError):
            parse_grid("123434122143432x")

    def test_oversized_token(self):
        """A huge number should be reported as an invalid grid."""
        with pytest.raises(InvalidGridError):
            parse_grid(",".join(["99999999999999999999"] + ["0"] * 15))

    def test_non_decimal_digit(self):
        """Characters like superscripts are not digits."""
        with pytest.raises(InvalidGridError, match="position 0"):
            parse_grid("\u00b2" + "0" * 15)

    def test_duplicate_rejected(self):
        """Parsed grids should be validated."""
        with pytest.raises(InvalidGridError):
            parse_grid("1100000000000000")


class TestEncoding:
    """Tests for puzzle/solution encoding."""

    def test_encode_puzzle_shape(self):
        """Encoded puzzle should have shape (16, 5)."""
        encoded = encode_puzzle(SOLVED_4)
        assert encoded.shape == (16, 5)

    def test_encode_puzzle_onehot(self):
        """Encoding should be one-hot."""
        puzzle = np.array([
            [1, 0, 3, 0],
            [0, 4, 0, 2],
            [2, 0, 4, 0],
            [0, 3, 0, 1],
        ])
        encoded = encode_puzzle(puzzle)
        assert np.allclose(encoded.sum(axis=1), 1.0)
        assert encoded[0, 1] == 1.0
        assert encoded[1, 0] == 1.0

    def test_encode_puzzle_blank_channel(self):
        """Blank cells should be encoded in channel 0."""
        encoded = encode_puzzle(empty_grid(4))
        assert np.all(encoded[:, 0] == 1.0)
        assert np.all(encoded[:, 1:] == 0.0)

    def test_encode_solution(self):
        """Solutions should map to class indices 0..n-1."""
        encoded = encode_solution(SOLVED_4)
        assert encoded.shape == (16,)
        assert encoded.dtype == np.int64
        assert encoded.min() == 0
        assert encoded.max() == 3
        assert encoded[0] == 0

    def test_encode_solution_rejects_blanks(self):
        """A solution must be complete."""
        with pytest.raises(InvalidGridError):
            encode_solution(empty_grid(4))

    def test_generate_encoded_sample(self):
        """Filled puzzle cells should agree with the solution classes."""
        x, y = generate_encoded_sample(n=4)
        assert x.shape == (16, 5)
        assert y.shape == (16,)
        digits = x.argmax(axis=1)
        filled = digits != 0
        assert np.all(digits[filled] == y[filled] + 1)


class TestMinimalPuzzleDataset:
    """Tests for the PyTorch Dataset class."""

    def test_dataset_length(self):
        """Dataset should report correct length."""
        dataset = MinimalPuzzleDataset(num_samples=100)
        assert len(dataset) == 100

    def test_dataset_getitem(self):
        """Dataset should return tensors with correct shapes and dtypes."""
        dataset = MinimalPuzzleDataset(num_samples=2, n=4)
        x, y = dataset[0]

        assert isinstance(x, torch.Tensor)
        assert isinstance(y, torch.Tensor)
        assert x.shape == (16, 5)
        assert y.shape == (16,)
        assert x.dtype == torch.float32
        assert y.dtype == torch.long

    def test_dataset_respects_max_empty(self):
        """No more than max_empty cells should be blank."""
        dataset = MinimalPuzzleDataset(num_samples=2, n=4, max_empty=3)
        x, _ = dataset[0]
        assert int(x[:, 0].sum().item()) <= 3
