"""
Solver dispatch for the CLT simulation.

Provides simulate_means() for one run and convergence_study() for the
same model at increasing trial counts.
"""

from __future__ import annotations

from typing import Sequence

from montestats.core.exceptions import ValidationError
from montestats.core.random_source import RandomSource, as_random_source
from montestats.simulation._sampler import DEFAULT_CHUNK_SIZE
from montestats.simulation.design import SimulationDesign
from montestats.simulation.solution import SimulationSolution, ConvergenceStudy
from montestats.simulation.backends.cpu import CPUSimulationBackend


DEFAULT_RATE = 0.2
DEFAULT_SAMPLE_SIZE = 40
DEFAULT_TRIAL_COUNTS = (1_000, 10_000, 100_000, 1_000_000)


def _get_backend(backend: str = 'cpu'):
    if backend in ('cpu', 'auto'):
        return CPUSimulationBackend()
    raise ValidationError(f"Unknown backend: {backend!r}. Use 'cpu'.")


def simulate_means(
    rate: float = DEFAULT_RATE,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    n_trials: int = 1_000,
    *,
    seed: int | RandomSource | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    backend: str = 'cpu',
) -> SimulationSolution:
    """
    Simulate the sampling distribution of the mean of exponential draws.

    Parameters
    ----------
    rate : float
        Exponential rate lambda (> 0). Default 0.2.
    sample_size : int
        Draws averaged per trial, n. Default 40.
    n_trials : int
        Number of independent trials, T. Default 1000.
    seed : int, RandomSource or None
        Integer seed, or a RandomSource shared with other calls.
    chunk_size : int
        Trials drawn per chunk. The trial sequence depends on it, so keep
        it fixed when comparing runs.
    backend : str
        'cpu' (default).

    Returns
    -------
    SimulationSolution
        Trial means, their mean and variance, and the asymptotic moments
        mu and sigma^2 / n.

    Raises
    ------
    InvalidArgumentError
        If rate, sample_size, n_trials or chunk_size is not positive.
    """
    design = SimulationDesign.for_exponential(
        rate, sample_size, n_trials, seed=seed, chunk_size=chunk_size,
    )
    be = _get_backend(backend)
    result = be.solve(design)
    return SimulationSolution(_result=result, _design=design)


def convergence_study(
    trial_counts: Sequence[int] = DEFAULT_TRIAL_COUNTS,
    *,
    rate: float = DEFAULT_RATE,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    seed: int | RandomSource | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    backend: str = 'cpu',
) -> ConvergenceStudy:
    """
    Run simulate_means() at each trial count on independent streams.

    Each trial count draws from its own child of the seeded source, so
    the runs are independent and the study is reproducible as a whole.

    Raises
    ------
    ValidationError
        If trial_counts is empty.
    """
    trial_counts = tuple(trial_counts)
    if not trial_counts:
        raise ValidationError("trial_counts must contain at least one count")

    source = as_random_source(seed)
    children = source.spawn(len(trial_counts))
    solutions = tuple(
        simulate_means(
            rate, sample_size, T,
            seed=child, chunk_size=chunk_size, backend=backend,
        )
        for T, child in zip(trial_counts, children)
    )
    return ConvergenceStudy(solutions=solutions)
