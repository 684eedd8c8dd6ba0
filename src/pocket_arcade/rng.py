"""Pluggable random source shared by both engines."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    """Anything that can draw an integer from ``[low, high)``.

    :class:`numpy.random.Generator` satisfies this; tests pass scripted
    sources to pin symbols and food placement.
    """

    def integers(self, low: int, high: int) -> int: ...


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Return a seeded NumPy generator for deterministic, reproducible play."""
    return np.random.default_rng(seed)


def draw_index(rng: RandomSource, count: int) -> int:
    """Draw a uniform index into a collection of *count* items."""
    if count < 1:
        raise ValueError("count must be at least 1.")
    return int(rng.integers(0, count))
