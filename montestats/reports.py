"""
End-to-end pipelines behind the two reports.

clt_report() runs the exponential-mean simulation and its convergence
study; tooth_growth_report() runs the exploratory summary, the t-tests
and the per-dose permutation tests on ToothGrowth. Both return the
structured results a rendering layer turns into figures and tables.

A single RandomSource is created per report from ``seed`` and threaded
through every random computation in a fixed order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TYPE_CHECKING

from montestats.core.exceptions import ValidationError
from montestats.core.grouping import GroupedData
from montestats.core.random_source import RandomSource, as_random_source
from montestats.datasets import tooth_growth
from montestats.hypothesis import (
    welch_t_test,
    pairwise_t_test,
    TTestSolution,
    PairwiseSolution,
    DEFAULT_ALPHA,
)
from montestats.montecarlo import (
    stratified_permutation_test,
    StratifiedPermutationSolution,
    DEFAULT_PERMUTATIONS,
)
from montestats.simulation import (
    simulate_means,
    convergence_study,
    SimulationSolution,
    ConvergenceStudy,
    DEFAULT_RATE,
    DEFAULT_SAMPLE_SIZE,
    DEFAULT_TRIAL_COUNTS,
)

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class CLTReport:
    """Results of the sample-mean simulation report."""
    simulation: SimulationSolution
    convergence: ConvergenceStudy


@dataclass(frozen=True)
class ToothGrowthReport:
    """Results of the tooth-growth inference report."""
    data: GroupedData
    group_summary: 'pd.DataFrame'
    supp_test: TTestSolution
    pairwise: PairwiseSolution
    permutation: StratifiedPermutationSolution


def clt_report(
    *,
    rate: float = DEFAULT_RATE,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    n_trials: int = 1_000,
    trial_counts: Sequence[int] = DEFAULT_TRIAL_COUNTS,
    seed: int | RandomSource | None = None,
) -> CLTReport:
    """Simulate the mean of ``sample_size`` exponentials and its convergence."""
    source = as_random_source(seed)
    simulation = simulate_means(rate, sample_size, n_trials, seed=source)
    convergence = convergence_study(
        trial_counts, rate=rate, sample_size=sample_size, seed=source,
    )
    return CLTReport(simulation=simulation, convergence=convergence)


def tooth_growth_report(
    df: 'pd.DataFrame | None' = None,
    *,
    alpha: float = DEFAULT_ALPHA,
    R: int = DEFAULT_PERMUTATIONS,
    seed: int | RandomSource | None = None,
) -> ToothGrowthReport:
    """
    Tooth-growth analysis: group summary, OJ vs VC t-test, pairwise
    t-tests with BH adjustment, and OJ - VC permutation tests per dose.

    Args:
        df: Frame with columns len, supp, dose. Defaults to ToothGrowth.
        alpha: Significance level for the adjusted pairwise p-values.
        R: Permutations per dose.
        seed: Integer seed or RandomSource for the permutation tests.

    Raises:
        ValidationError: If supp does not have exactly two levels.
    """
    if df is None:
        df = tooth_growth()

    data = GroupedData.from_frame(df, response='len', factors=('supp', 'dose'))
    supp_levels = data.levels('supp')
    if len(supp_levels) != 2:
        raise ValidationError(
            f"tooth-growth report compares two supplements, got supp levels "
            f"{supp_levels}"
        )
    supp_a, supp_b = supp_levels

    supp_test = welch_t_test(
        df.loc[df['supp'] == supp_a, 'len'].to_numpy(),
        df.loc[df['supp'] == supp_b, 'len'].to_numpy(),
    )
    pairwise = pairwise_t_test(data, alpha=alpha)
    permutation = stratified_permutation_test(
        data, 'supp', R=R, seed=as_random_source(seed),
    )

    return ToothGrowthReport(
        data=data,
        group_summary=data.describe(),
        supp_test=supp_test,
        pairwise=pairwise,
        permutation=permutation,
    )
