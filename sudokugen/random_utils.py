"""Process-wide random source used for candidate order and removal order."""

import random
import time
from typing import Iterable, TypeVar

import numpy as np
import torch

T = TypeVar("T")


def seed_everything(seed: int | None = None) -> int:
    """
    Seed `random`, numpy and torch once at process start.

    Args:
        seed: Seed value. If None, derived from the current time.

    Returns:
        The seed actually used, so a run can be reproduced.
    """
    if seed is None:
        seed = time.time_ns() % (2**32)
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)
    return seed


def shuffle(values: Iterable[T]) -> list[T]:
    """Return a uniformly shuffled copy of `values` (Fisher-Yates via `random.shuffle`)."""
    values = list(values)
    random.shuffle(values)
    return values
