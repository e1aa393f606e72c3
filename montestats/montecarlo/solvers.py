"""
Solver dispatch for permutation tests.

Provides permutation_test() for one two-label comparison and
stratified_permutation_test() for one comparison per stratum.
"""

from __future__ import annotations

import warnings
from typing import Any, Callable, Literal

from numpy.typing import ArrayLike

from montestats.core.exceptions import ValidationError
from montestats.core.grouping import GroupedData
from montestats.core.random_source import RandomSource
from montestats.montecarlo._common import DEFAULT_PERMUTATIONS
from montestats.montecarlo.design import (
    PermutationDesign,
    StratifiedPermutationDesign,
    mean_difference,
)
from montestats.montecarlo.solution import (
    PermutationSolution,
    StratifiedPermutationSolution,
)
from montestats.montecarlo.backends.cpu import CPUPermutationBackend

Alternative = Literal["two.sided", "less", "greater"]


def _get_backend(backend: str = 'cpu'):
    if backend in ('cpu', 'auto'):
        return CPUPermutationBackend()
    raise ValidationError(f"Unknown backend: {backend!r}. Use 'cpu'.")


def permutation_test(
    x: ArrayLike,
    y: ArrayLike,
    R: int = DEFAULT_PERMUTATIONS,
    *,
    statistic: Callable = mean_difference,
    alternative: Alternative = "greater",
    labels: tuple[Any, Any] = ("A", "B"),
    seed: int | RandomSource | None = None,
    backend: str = 'cpu',
) -> PermutationSolution:
    """
    Two-sample label-permutation test.

    Parameters
    ----------
    x : array-like
        Observations carrying label A.
    y : array-like
        Observations carrying label B.
    R : int
        Number of permutations. Default 10000.
    statistic : callable
        fn(a, b) -> float. Default mean(a) - mean(b), so swapping x and y
        negates the observed statistic.
    alternative : str
        Direction of the Phipson-Smyth p-value. The tail fraction is
        always the share of permuted statistics strictly greater than
        the observed one.
    labels : tuple
        Names for labels A and B, for reporting.
    seed : int, RandomSource or None
        Integer seed, or a RandomSource shared with other calls.

    Raises
    ------
    InvalidArgumentError
        If R is not a positive integer.
    DegenerateStratumError
        If x or y is empty.
    """
    design = PermutationDesign.for_permutation_test(
        x, y, R,
        statistic=statistic,
        alternative=alternative,
        labels=labels,
        seed=seed,
    )
    be = _get_backend(backend)
    result = be.solve(design)
    return PermutationSolution(_result=result, _design=design)


def stratified_permutation_test(
    data: GroupedData,
    label: str,
    *,
    labels: tuple[Any, Any] | None = None,
    R: int = DEFAULT_PERMUTATIONS,
    statistic: Callable = mean_difference,
    alternative: Alternative = "greater",
    seed: int | RandomSource | None = None,
    backend: str = 'cpu',
) -> StratifiedPermutationSolution:
    """
    Permutation test of ``label`` within each level of the other factor.

    Each stratum is permuted independently; observations are never
    pooled across strata. Strata draw from one random source in stratum
    level order, so a fixed seed reproduces every stratum.

    Example:
        stratified_permutation_test(tooth, 'supp', seed=42)
        # one OJ - VC test per dose

    Raises
    ------
    DegenerateStratumError
        If a stratum holds observations for only one label.
    InvalidArgumentError
        If R is not a positive integer.
    """
    design = StratifiedPermutationDesign.for_groups(
        data, label,
        labels=labels,
        R=R,
        statistic=statistic,
        alternative=alternative,
        seed=seed,
    )
    be = _get_backend(backend)
    solutions = tuple(
        (level, PermutationSolution(_result=be.solve(d), _design=d))
        for level, d in design.strata
    )
    out = StratifiedPermutationSolution(_solutions=solutions, _design=design)

    if out.warnings:
        warnings.warn(
            "; ".join(out.warnings),
            RuntimeWarning,
            stacklevel=2,
        )

    return out
