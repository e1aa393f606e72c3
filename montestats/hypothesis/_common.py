"""
Common types for hypothesis testing.

TTestParams is the payload of a single two-sample t-test; PairComparison
and PairwiseParams are the payload of a batch of pairwise tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


VALID_ALTERNATIVES = ("two.sided", "less", "greater")

DEFAULT_ALPHA = 0.05


@dataclass(frozen=True)
class TTestParams:
    """
    Parameter payload for a two-sample t-test.

    Attributes
    ----------
    statistic : float
        t statistic; NaN when both samples are constant.
    df : float
        Degrees of freedom (fractional for Welch).
    p_value : float
        p-value for the requested alternative; NaN when undefined.
    conf_int : ndarray
        Confidence interval for mean(x) - mean(y), shape (2,).
    conf_level : float
        Confidence level (e.g. 0.95).
    mean_x, mean_y : float
        Sample means.
    alternative : str
        "two.sided", "less", or "greater".
    method : str
        "Welch Two Sample t-test" or " Two Sample t-test".
    """
    statistic: float
    df: float
    p_value: float
    conf_int: NDArray[np.floating[Any]]
    conf_level: float
    mean_x: float
    mean_y: float
    alternative: str
    method: str

    @property
    def diff(self) -> float:
        """mean(x) - mean(y)."""
        return self.mean_x - self.mean_y


@dataclass(frozen=True)
class PairComparison:
    """
    One tested pair of groups.

    group1 precedes group2 in the data's canonical key order, and
    diff = mean1 - mean2.
    """
    group1: tuple[Any, Any]
    group2: tuple[Any, Any]
    factor: str                 # the one factor whose level differs
    mean1: float
    mean2: float
    diff: float
    statistic: float
    df: float
    p_value: float
    p_adjusted: float
    ci_lower: float
    ci_upper: float
    significant: bool


@dataclass(frozen=True)
class PairwiseParams:
    """Parameter payload for a batch of pairwise t-tests."""
    comparisons: tuple[PairComparison, ...]
    factors: tuple[str, str]
    alpha: float
    p_adjust_method: str
    conf_level: float
    method: str
