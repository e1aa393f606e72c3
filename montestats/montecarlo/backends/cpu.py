"""
CPU backend for permutation testing.

CPUPermutationBackend: reassigns the label multiset over the pooled
observations R times and recomputes the statistic under each labelling.
"""

from __future__ import annotations

import numpy as np

from montestats.core.result import Result
from montestats.core.compute.timing import Timer
from montestats.montecarlo._common import PermutationParams
from montestats.montecarlo.design import PermutationDesign

# Below this many permutations the tail fraction is too coarse to report
MIN_RECOMMENDED_PERMUTATIONS = 1000


class CPUPermutationBackend:
    """
    CPU backend for permutation testing.

    Label counts are held fixed: each permutation shuffles the pooled
    label vector, so A keeps n_a observations and B keeps n_b.
    """

    @property
    def name(self) -> str:
        return 'cpu_permutation'

    def solve(self, design: PermutationDesign) -> Result[PermutationParams]:
        """Run permutation test and return Result[PermutationParams]."""
        timer = Timer()
        timer.start()

        x = design.x
        y = design.y
        statistic = design.statistic
        R = design.R
        alternative = design.alternative
        warnings_list: list[str] = []

        if R < MIN_RECOMMENDED_PERMUTATIONS:
            warnings_list.append(
                f"only {R} permutations; tail fraction resolution is 1/{R}"
            )

        with timer.section('observed_stat'):
            observed = float(statistic(x, y))

        with timer.section('permutation_replicates'):
            pooled = np.concatenate([x, y])
            is_a = np.zeros(len(pooled), dtype=bool)
            is_a[:len(x)] = True
            perm_stats = np.empty(R, dtype=np.float64)

            for b in range(R):
                shuffled = design.source.permutation(is_a)
                perm_stats[b] = statistic(pooled[shuffled], pooled[~shuffled])

        with timer.section('null_summary'):
            null_mean = float(np.mean(perm_stats))
            null_sd = float(np.std(perm_stats, ddof=1)) if R > 1 else float('nan')
            tail_fraction = float(np.sum(perm_stats > observed)) / R

            if alternative == "two.sided":
                count = np.sum(np.abs(perm_stats) >= np.abs(observed))
            elif alternative == "greater":
                count = np.sum(perm_stats >= observed)
            elif alternative == "less":
                count = np.sum(perm_stats <= observed)
            else:
                raise ValueError(f"Unknown alternative: {alternative!r}")

            p_value = float(count + 1) / float(R + 1)

        timer.stop()

        params = PermutationParams(
            observed_stat=observed,
            perm_stats=perm_stats,
            null_mean=null_mean,
            null_sd=null_sd,
            tail_fraction=tail_fraction,
            p_value=p_value,
            R=R,
            alternative=alternative,
            labels=design.labels,
            n_a=len(x),
            n_b=len(y),
        )

        return Result(
            params=params,
            info={
                'n_a': len(x),
                'n_b': len(y),
                'alternative': alternative,
                'stratum': design.stratum,
                'seed': design.source.seed,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
