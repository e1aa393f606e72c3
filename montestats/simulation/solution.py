"""
Solution wrappers for simulation results.

SimulationSolution wraps Result[SimulationParams] and compares the
simulated sampling distribution of the mean against its CLT limit.
ConvergenceStudy collects solutions run at several trial counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from montestats.core.exceptions import UndefinedStatisticError
from montestats.core.result import Result
from montestats.simulation._common import SimulationParams

if TYPE_CHECKING:
    import pandas as pd
    from montestats.simulation.design import SimulationDesign


class NormalityCheck(NamedTuple):
    """Kolmogorov-Smirnov comparison of trial means with the CLT normal."""
    statistic: float
    p_value: float


@dataclass
class SimulationSolution:
    """
    User-facing simulation results.

    Provides the trial means, their sample moments, the asymptotic
    moments, and the errors between the two.
    """
    _result: Result[SimulationParams]
    _design: 'SimulationDesign'

    # --- Core fields ---

    @property
    def trial_means(self) -> NDArray[np.floating[Any]]:
        """Mean of each trial's sample, shape (n_trials,)."""
        return self._result.params.trial_means

    @property
    def mean(self) -> float:
        """Sample mean of the trial means."""
        return self._result.params.mean

    @property
    def variance(self) -> float:
        """
        Unbiased sample variance of the trial means.

        Raises:
            UndefinedStatisticError: If the run has a single trial
        """
        p = self._result.params
        if p.n_trials < 2:
            raise UndefinedStatisticError(
                "variance of trial means is undefined for a single trial",
                statistic='variance',
                n=p.n_trials,
            )
        return p.variance

    @property
    def variance_estimate(self) -> float:
        """Variance as stored in the payload: NaN, not an error, for one trial."""
        return self._result.params.variance

    @property
    def n_trials(self) -> int:
        return self._result.params.n_trials

    @property
    def sample_size(self) -> int:
        return self._result.params.sample_size

    # --- Asymptotic comparison ---

    @property
    def asymptotic_mean(self) -> float:
        """Limiting mean of the sample mean, mu."""
        return self._result.params.asymptotic.mean

    @property
    def asymptotic_variance(self) -> float:
        """Limiting variance of the sample mean, sigma^2 / n."""
        return self._result.params.asymptotic.variance

    @property
    def mean_error(self) -> float:
        """|simulated mean - asymptotic mean|."""
        return abs(self.mean - self.asymptotic_mean)

    @property
    def variance_error(self) -> float:
        """|simulated variance - asymptotic variance|; NaN for one trial."""
        return abs(self.variance_estimate - self.asymptotic_variance)

    @property
    def standard_error(self) -> float:
        """Monte Carlo standard error of the simulated mean."""
        return float(np.sqrt(self.variance / self.n_trials))

    def conf_int(self, conf_level: float = 0.95) -> NDArray[np.floating[Any]]:
        """Normal-theory interval for the simulated mean, shape (2,)."""
        z = sp_stats.norm.ppf(0.5 + conf_level / 2.0)
        se = self.standard_error
        return np.array([self.mean - z * se, self.mean + z * se])

    def normality(self) -> NormalityCheck:
        """
        KS test of the trial means against Normal(mu, sigma^2 / n).

        A small statistic means the CLT approximation fits the simulated
        sampling distribution well.
        """
        res = sp_stats.kstest(
            self.trial_means,
            'norm',
            args=(self.asymptotic_mean, np.sqrt(self.asymptotic_variance)),
        )
        return NormalityCheck(float(res.statistic), float(res.pvalue))

    # --- Metadata ---

    @property
    def seed(self) -> int | None:
        return self._design.source.seed

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def to_frame(self) -> 'pd.DataFrame':
        """Simulated vs asymptotic moments as a two-row table."""
        import pandas as pd

        return pd.DataFrame(
            {
                'mean': [self.mean, self.asymptotic_mean],
                'variance': [self.variance_estimate, self.asymptotic_variance],
            },
            index=pd.Index(['simulated', 'asymptotic'], name='source'),
        )

    def summary(self) -> str:
        """Simulation summary."""
        dist = self._design.distribution
        lines = [
            "\nSAMPLE MEAN SIMULATION",
            "",
            f"Distribution: {dist!r}, n = {self.sample_size}, "
            f"trials = {self.n_trials}",
            "",
            f"{'':>12s} {'mean':>12s} {'variance':>12s}",
            f"{'simulated':>12s} {self.mean:12.6f} "
            f"{self.variance_estimate:12.6f}",
            f"{'asymptotic':>12s} {self.asymptotic_mean:12.6f} "
            f"{self.asymptotic_variance:12.6f}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SimulationSolution(n_trials={self.n_trials}, "
            f"sample_size={self.sample_size}, mean={self.mean:.4g}, "
            f"variance={self.variance_estimate:.4g})"
        )


@dataclass
class ConvergenceStudy:
    """Simulations of the same model at increasing trial counts."""
    solutions: tuple[SimulationSolution, ...]

    @property
    def trial_counts(self) -> tuple[int, ...]:
        return tuple(s.n_trials for s in self.solutions)

    def to_frame(self) -> 'pd.DataFrame':
        """One row per trial count: moments and absolute errors."""
        import pandas as pd

        rows = []
        for s in self.solutions:
            rows.append({
                'n_trials': s.n_trials,
                'mean': s.mean,
                'variance': s.variance_estimate,
                'mean_error': s.mean_error,
                'variance_error': s.variance_error,
            })
        return pd.DataFrame(rows).set_index('n_trials')

    def summary(self) -> str:
        lines = [
            "\nCONVERGENCE STUDY",
            "",
            f"{'trials':>10s} {'mean':>10s} {'variance':>10s} "
            f"{'|d mean|':>10s} {'|d var|':>10s}",
        ]
        for s in self.solutions:
            lines.append(
                f"{s.n_trials:>10d} {s.mean:10.5f} "
                f"{s.variance_estimate:10.5f} "
                f"{s.mean_error:10.5f} {s.variance_error:10.5f}"
            )
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ConvergenceStudy(trial_counts={self.trial_counts})"
