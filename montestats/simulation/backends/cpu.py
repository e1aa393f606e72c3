"""
CPU backend for the CLT simulation.

Draws the trial batch chunk by chunk, reduces each sample to its mean,
then summarizes the trial means.
"""

from __future__ import annotations

import numpy as np

from montestats.core.exceptions import UndefinedStatisticError
from montestats.core.result import Result
from montestats.core.compute.timing import Timer
from montestats.simulation._asymptotic import asymptotic_moments
from montestats.simulation._common import SimulationParams
from montestats.simulation._moments import trial_means, sample_mean, sample_variance
from montestats.simulation.design import SimulationDesign


class CPUSimulationBackend:
    """CPU backend for sample-mean simulation."""

    @property
    def name(self) -> str:
        return 'cpu_simulation'

    def solve(self, design: SimulationDesign) -> Result[SimulationParams]:
        """Run the simulation and return Result[SimulationParams]."""
        timer = Timer()
        timer.start()

        dist = design.distribution
        T = design.n_trials
        n = design.sample_size
        warnings_list: list[str] = []

        means = np.empty(T, dtype=np.float64)
        with timer.section('draw_samples'):
            offset = 0
            for batch in dist.iter_batches(design.source, T, n, design.chunk_size):
                rows = batch.shape[0]
                means[offset:offset + rows] = trial_means(batch)
                offset += rows

        with timer.section('summary_statistics'):
            mean = sample_mean(means)
            try:
                variance = sample_variance(means)
            except UndefinedStatisticError as e:
                variance = float('nan')
                warnings_list.append(f"variance of trial means: {e}")

        asymptotic = asymptotic_moments(dist, n)

        timer.stop()

        params = SimulationParams(
            trial_means=means,
            mean=mean,
            variance=variance,
            n_trials=T,
            sample_size=n,
            asymptotic=asymptotic,
        )

        return Result(
            params=params,
            info={
                'distribution': dist.name,
                'rate': dist.rate,
                'n_trials': T,
                'sample_size': n,
                'chunk_size': design.chunk_size,
                'seed': design.source.seed,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
