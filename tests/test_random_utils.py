"""Tests for the shuffle utility and seeding."""

import random
from collections import Counter

import numpy as np
import pytest
import torch

from sudokugen.random_utils import seed_everything, shuffle


class TestShuffle:
    """Tests for shuffle()."""

    @pytest.mark.parametrize("values", [[], [7], [1, 2], list(range(81))])
    def test_is_permutation(self, values):
        """Output should hold the same multiset of elements."""
        result = shuffle(values)
        assert Counter(result) == Counter(values)
        assert len(result) == len(values)

    def test_returns_new_list(self):
        """The input list should not be modified."""
        values = [1, 2, 3, 4]
        shuffle(values)
        assert values == [1, 2, 3, 4]

    def test_accepts_iterables(self):
        """Ranges and generators should be accepted."""
        assert sorted(shuffle(range(5))) == [0, 1, 2, 3, 4]
        assert sorted(shuffle(x for x in "abc")) == ["a", "b", "c"]

    def test_duplicates_preserved(self):
        """Repeated values should survive shuffling."""
        assert Counter(shuffle([1, 1, 2, 2, 2])) == Counter({1: 2, 2: 3})

    def test_position_frequencies_uniform(self):
        """Each element should land in each position about equally often."""
        random.seed(0)
        k = 4
        trials = 4000
        counts = np.zeros((k, k), dtype=int)
        for _ in range(trials):
            for position, value in enumerate(shuffle(range(k))):
                counts[value, position] += 1

        expected = trials / k
        # Binomial std is about 27 here; allow more than 5 sigma.
        assert np.all(np.abs(counts - expected) < 150)


class TestSeedEverything:
    """Tests for process-wide seeding."""

    def test_seed_reproducible(self):
        """The same seed should give the same shuffle."""
        seed_everything(42)
        first = shuffle(range(20))
        seed_everything(42)
        second = shuffle(range(20))
        assert first == second

    def test_seeds_numpy_and_torch(self):
        """numpy and torch should be seeded too."""
        seed_everything(5)
        a = (np.random.rand(), torch.rand(1).item())
        seed_everything(5)
        b = (np.random.rand(), torch.rand(1).item())
        assert a == b

    def test_returns_seed(self):
        """The seed used should be returned."""
        assert seed_everything(3) == 3
        seed = seed_everything()
        assert isinstance(seed, int)
        assert 0 <= seed < 2**32
