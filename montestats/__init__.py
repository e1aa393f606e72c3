"""
montestats: resampling-based statistical inference.

Two pipelines built on one explicitly seeded random source.

Submodules:
    simulation: Monte Carlo sampling distribution of the mean vs its CLT limit
    hypothesis: Welch t-tests, pairwise group comparisons, p-value adjustment
    montecarlo: Label-permutation tests, unstratified and per stratum
    datasets: Reference data (ToothGrowth)
    reports: End-to-end pipelines for the two reports
"""

__version__ = "0.1.0"

from montestats import simulation
from montestats import hypothesis
from montestats import montecarlo
from montestats.core import GroupedData, RandomSource

__all__ = [
    "__version__",
    "simulation",
    "hypothesis",
    "montecarlo",
    "GroupedData",
    "RandomSource",
]
