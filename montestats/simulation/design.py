"""
Design class for the CLT simulation.

SimulationDesign encapsulates all inputs needed by backends to draw the
trial batch. Immutable, validated at construction.
"""

from __future__ import annotations

from dataclasses import dataclass

from montestats.core.random_source import RandomSource, as_random_source
from montestats.core.validation import check_positive_int
from montestats.simulation._sampler import Exponential, DEFAULT_CHUNK_SIZE


@dataclass(frozen=True)
class SimulationDesign:
    """
    Frozen design for a sample-mean simulation.

    Attributes:
        distribution: Population distribution the draws come from.
        sample_size: Draws per trial, n.
        n_trials: Number of independent trials, T.
        chunk_size: Trials drawn per chunk.
        source: Random source the draws advance.
    """
    distribution: Exponential
    sample_size: int
    n_trials: int
    chunk_size: int
    source: RandomSource

    @classmethod
    def for_exponential(
        cls,
        rate: float,
        sample_size: int,
        n_trials: int,
        *,
        seed: int | RandomSource | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> SimulationDesign:
        """
        Create a simulation design with validation.

        Args:
            rate: Exponential rate lambda. Must be > 0.
            sample_size: Draws per trial. Must be >= 1.
            n_trials: Number of trials. Must be >= 1.
            seed: Integer seed or an existing RandomSource.
            chunk_size: Trials drawn per chunk. Must be >= 1.

        Raises:
            InvalidArgumentError: If any count or the rate is not positive.
        """
        return cls(
            distribution=Exponential(rate),
            sample_size=check_positive_int(sample_size, "sample_size"),
            n_trials=check_positive_int(n_trials, "n_trials"),
            chunk_size=check_positive_int(chunk_size, "chunk_size"),
            source=as_random_source(seed),
        )
