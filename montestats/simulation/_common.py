"""
Common data structures for the CLT simulation.

SimulationParams is the parameter payload wrapped by Result[P] and
exposed through SimulationSolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from montestats.simulation._asymptotic import AsymptoticParams


@dataclass(frozen=True)
class SimulationParams:
    """
    Parameter payload for a simulation run.

    - trial_means: one mean per trial, shape (n_trials,)
    - mean: mean of the trial means
    - variance: unbiased variance of the trial means; NaN when n_trials == 1
    - asymptotic: limiting moments the simulation is compared against
    """
    trial_means: NDArray[np.floating[Any]]     # shape (n_trials,)
    mean: float
    variance: float
    n_trials: int
    sample_size: int
    asymptotic: AsymptoticParams
