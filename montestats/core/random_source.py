"""
Explicit random source shared by every sampling and permutation call.

A RandomSource is created once at the start of a run and passed down to
each computation. It wraps a single numpy Generator, so every draw
advances the same stream and a fixed seed reproduces a whole run.

Usage:
    from montestats.core.random_source import RandomSource

    source = RandomSource(seed=42)
    draws = source.exponential(0.2, size=(1000, 40))
    shuffled = source.permutation(pooled)

    # Independent streams for independent work units
    children = source.spawn(4)
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from montestats.core.validation import check_positive, check_positive_int


class RandomSource:
    """
    Seeded pseudo-random stream.

    Args:
        seed: Integer seed, or None for fresh OS entropy.
    """

    def __init__(self, seed: int | None = None):
        self._seed = seed
        self._generator = np.random.default_rng(seed)

    @classmethod
    def _from_generator(cls, generator: np.random.Generator) -> RandomSource:
        source = cls.__new__(cls)
        source._seed = None
        source._generator = generator
        return source

    @property
    def seed(self) -> int | None:
        """Seed the source was created with (None for spawned children)."""
        return self._seed

    @property
    def generator(self) -> np.random.Generator:
        """Underlying numpy Generator."""
        return self._generator

    def exponential(
        self,
        rate: float,
        size: int | tuple[int, ...],
    ) -> NDArray[np.floating[Any]]:
        """
        Draw from Exponential(rate), i.e. mean 1/rate.

        Raises:
            InvalidArgumentError: If rate is not > 0
        """
        rate = check_positive(rate, "rate")
        return self._generator.exponential(scale=1.0 / rate, size=size)

    def permutation(self, values: ArrayLike) -> NDArray:
        """Uniform random permutation of values (a shuffled copy)."""
        return self._generator.permutation(np.asarray(values))

    def spawn(self, n_children: int) -> list[RandomSource]:
        """
        Split off independent child streams.

        Children are derived from this source's seed sequence, so a fixed
        parent seed gives the same children on every run.
        """
        n_children = check_positive_int(n_children, "n_children")
        return [
            RandomSource._from_generator(g)
            for g in self._generator.spawn(n_children)
        ]

    def __repr__(self) -> str:
        return f"RandomSource(seed={self._seed!r})"


def as_random_source(seed: int | RandomSource | None) -> RandomSource:
    """
    Normalize a seed argument.

    Solvers accept either an integer seed (a fresh source is built) or an
    existing RandomSource (used as is, so its stream keeps advancing).
    """
    if isinstance(seed, RandomSource):
        return seed
    return RandomSource(seed)
