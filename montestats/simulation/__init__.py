"""
CLT simulation for the mean of exponential draws.

Draws T independent samples of n exponential values, averages each one,
and compares the distribution of the averages with its asymptotic
Normal(1/lambda, 1/(lambda^2 n)) limit.

Usage:
    from montestats.simulation import simulate_means, convergence_study

    sol = simulate_means(rate=0.2, sample_size=40, n_trials=1000, seed=42)
    sol.mean, sol.variance                   # ~5.0, ~0.625
    sol.asymptotic_mean, sol.asymptotic_variance

    study = convergence_study((1_000, 1_000_000), seed=42)
    study.to_frame()
"""

from montestats.simulation.solvers import (
    simulate_means,
    convergence_study,
    DEFAULT_RATE,
    DEFAULT_SAMPLE_SIZE,
    DEFAULT_TRIAL_COUNTS,
)
from montestats.simulation._sampler import Exponential
from montestats.simulation._asymptotic import AsymptoticParams, asymptotic_moments
from montestats.simulation._moments import trial_means, sample_mean, sample_variance
from montestats.simulation.design import SimulationDesign
from montestats.simulation.solution import (
    SimulationSolution,
    ConvergenceStudy,
    NormalityCheck,
)

__all__ = [
    "simulate_means",
    "convergence_study",
    "Exponential",
    "asymptotic_moments",
    "AsymptoticParams",
    "trial_means",
    "sample_mean",
    "sample_variance",
    "SimulationDesign",
    "SimulationSolution",
    "ConvergenceStudy",
    "NormalityCheck",
    "DEFAULT_RATE",
    "DEFAULT_SAMPLE_SIZE",
    "DEFAULT_TRIAL_COUNTS",
]
