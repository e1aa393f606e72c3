"""
Solver dispatch for hypothesis tests.

Provides welch_t_test() for a single two-sample comparison and
pairwise_t_test() for every comparable pair of groups in a two-factor
dataset. Also re-exports p_adjust() for convenience.
"""

from __future__ import annotations

import warnings
from typing import Literal

from numpy.typing import ArrayLike

from montestats.core.exceptions import ValidationError
from montestats.core.grouping import GroupedData
from montestats.hypothesis._common import DEFAULT_ALPHA
from montestats.hypothesis.design import TTestDesign, PairwiseDesign
from montestats.hypothesis.solution import TTestSolution, PairwiseSolution
from montestats.hypothesis.backends.cpu import CPUHypothesisBackend
from montestats.hypothesis._p_adjust import p_adjust  # re-export


def _get_backend(backend: str = 'cpu'):
    if backend in ('cpu', 'auto'):
        return CPUHypothesisBackend()
    raise ValidationError(f"Unknown backend: {backend!r}. Use 'cpu'.")


def welch_t_test(
    x: ArrayLike,
    y: ArrayLike,
    *,
    alternative: Literal["two.sided", "less", "greater"] = "two.sided",
    var_equal: bool = False,
    conf_level: float = 0.95,
    backend: str = 'cpu',
) -> TTestSolution:
    """
    Two-sample t-test. Matches R t.test(x, y).

    Parameters
    ----------
    x, y : array-like
        The two samples. NaN values are dropped.
    alternative : str
        "two.sided" (default), "less", or "greater".
    var_equal : bool
        If True, use pooled variance (Student's t). If False (default),
        use Welch's approximation with Welch-Satterthwaite degrees of
        freedom.
    conf_level : float
        Confidence level for the interval on mean(x) - mean(y).

    Raises
    ------
    InsufficientDataError
        If either sample has fewer than 2 observations.
    """
    design = TTestDesign.for_two_sample(
        x, y,
        var_equal=var_equal,
        alternative=alternative,
        conf_level=conf_level,
    )
    be = _get_backend(backend)
    result = be.solve(design)
    return TTestSolution(_result=result, _design=design)


def pairwise_t_test(
    data: GroupedData,
    *,
    alpha: float = DEFAULT_ALPHA,
    p_adjust_method: str = "BH",
    var_equal: bool = False,
    conf_level: float = 0.95,
    backend: str = 'cpu',
) -> PairwiseSolution:
    """
    Two-sided t-tests between groups differing in exactly one factor.

    Groups are keyed by (first_level, second_level). Pairs are enumerated
    over the Cartesian product of factor levels; pairs differing in both
    factors are not tested and do not appear in the result. For each
    tested pair, diff = mean(group1) - mean(group2), with group1 the
    earlier group in first-factor-major level order.

    After all pairs are tested, the raw p-values are adjusted together
    (Benjamini-Hochberg by default) and a pair is flagged significant iff
    its adjusted p-value is strictly below ``alpha``.

    Parameters
    ----------
    data : GroupedData
        Dataset partitioned by two factors.
    alpha : float
        Significance level for the adjusted p-values. Default 0.05.
    p_adjust_method : str
        Any method accepted by p_adjust(). Default "BH".
    var_equal : bool
        Pooled-variance tests instead of Welch tests.
    conf_level : float
        Confidence level for each pair's interval.

    Raises
    ------
    InsufficientDataError
        If any group has fewer than 2 observations.
    """
    design = PairwiseDesign.for_groups(
        data,
        alpha=alpha,
        p_adjust_method=p_adjust_method,
        var_equal=var_equal,
        conf_level=conf_level,
    )
    be = _get_backend(backend)
    result = be.solve(design)

    if result.has_warning("essentially constant"):
        warnings.warn(
            "Some pairs have constant data; their p-values are NaN and "
            "they are never flagged significant.",
            RuntimeWarning,
            stacklevel=2,
        )

    return PairwiseSolution(_result=result, _design=design)
