"""
Common data structures for permutation testing.

PermutationParams is the parameter payload wrapped by Result[P] and
exposed through PermutationSolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


VALID_ALTERNATIVES = ("two.sided", "less", "greater")

DEFAULT_PERMUTATIONS = 10_000


@dataclass(frozen=True)
class PermutationParams:
    """
    Parameter payload for permutation test results.

    - observed_stat: statistic on the original labelling, A minus B
    - perm_stats: statistics from R label permutations, shape (R,)
    - null_mean, null_sd: mean and sd (ddof=1) of perm_stats
    - tail_fraction: count(perm_stats > observed_stat) / R
    - p_value: (count + 1) / (R + 1) with Phipson-Smyth correction
    """
    observed_stat: float
    perm_stats: NDArray[np.floating[Any]]      # shape (R,)
    null_mean: float
    null_sd: float
    tail_fraction: float
    p_value: float
    R: int
    alternative: str                            # "two.sided" | "less" | "greater"
    labels: tuple[Any, Any]                     # (label A, label B)
    n_a: int
    n_b: int
