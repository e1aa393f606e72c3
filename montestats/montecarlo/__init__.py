"""
montestats Monte Carlo methods.

Provides label-permutation testing, unstratified and per stratum.

Usage:
    from montestats.montecarlo import permutation_test, stratified_permutation_test

    result = permutation_test(x, y, R=10000, seed=42)
    result.observed_stat, result.tail_fraction

    by_dose = stratified_permutation_test(tooth, 'supp', seed=42)
    by_dose.to_frame()
"""

from montestats.montecarlo.solvers import permutation_test, stratified_permutation_test
from montestats.montecarlo._common import PermutationParams, DEFAULT_PERMUTATIONS
from montestats.montecarlo.design import (
    PermutationDesign,
    StratifiedPermutationDesign,
    mean_difference,
)
from montestats.montecarlo.solution import (
    PermutationSolution,
    StratifiedPermutationSolution,
)

__all__ = [
    "permutation_test",
    "stratified_permutation_test",
    "mean_difference",
    "PermutationParams",
    "PermutationDesign",
    "StratifiedPermutationDesign",
    "PermutationSolution",
    "StratifiedPermutationSolution",
    "DEFAULT_PERMUTATIONS",
]
