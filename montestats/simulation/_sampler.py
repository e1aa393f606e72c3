"""
Sampling distributions for the CLT simulation.

Exponential is the only family the simulation draws from. It knows its
own population moments, which the asymptotic model consumes, and how to
draw a trial batch from an explicit RandomSource.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from montestats.core.random_source import RandomSource
from montestats.core.validation import check_positive, check_positive_int

# Rows drawn per chunk; bounds memory at chunk_size * sample_size floats
DEFAULT_CHUNK_SIZE = 100_000


@dataclass(frozen=True)
class Exponential:
    """
    Exponential distribution with rate lambda (mean 1/lambda).

    Raises:
        InvalidArgumentError: If rate is not > 0
    """
    rate: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'rate', check_positive(self.rate, "rate"))

    @property
    def name(self) -> str:
        return 'exponential'

    @property
    def mean(self) -> float:
        """Population mean, 1/lambda."""
        return 1.0 / self.rate

    @property
    def variance(self) -> float:
        """Population variance, 1/lambda^2."""
        return 1.0 / self.rate ** 2

    def draw(
        self,
        source: RandomSource,
        n_trials: int,
        sample_size: int,
    ) -> NDArray[np.floating[Any]]:
        """
        Draw a trial batch: n_trials independent samples of sample_size draws.

        Returns:
            Array of shape (n_trials, sample_size); row t is sample t.
        """
        n_trials = check_positive_int(n_trials, "n_trials")
        sample_size = check_positive_int(sample_size, "sample_size")
        return source.exponential(self.rate, size=(n_trials, sample_size))

    def iter_batches(
        self,
        source: RandomSource,
        n_trials: int,
        sample_size: int,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> Iterator[NDArray[np.floating[Any]]]:
        """
        Draw a trial batch in row chunks of at most chunk_size trials.

        Chunks are drawn in order from the same stream, so the sequence
        of trials is reproducible for a fixed seed and chunk_size.
        """
        n_trials = check_positive_int(n_trials, "n_trials")
        chunk_size = check_positive_int(chunk_size, "chunk_size")
        remaining = n_trials
        while remaining > 0:
            rows = min(chunk_size, remaining)
            yield self.draw(source, rows, sample_size)
            remaining -= rows

    def __repr__(self) -> str:
        return f"Exponential(rate={self.rate:g})"
