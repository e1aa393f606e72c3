"""
Hypothesis testing module.

Public API:
    welch_t_test(x, y)      - Two-sample t-test (Welch by default)
    pairwise_t_test(data)   - t-tests over comparable group pairs with
                              multiple-comparison adjustment
    p_adjust(p)             - Multiple testing correction (BH, Holm, etc.)
"""

from montestats.hypothesis.solvers import welch_t_test, pairwise_t_test
from montestats.hypothesis._p_adjust import p_adjust
from montestats.hypothesis._common import (
    TTestParams,
    PairComparison,
    PairwiseParams,
    DEFAULT_ALPHA,
)
from montestats.hypothesis.design import TTestDesign, PairwiseDesign
from montestats.hypothesis.solution import TTestSolution, PairwiseSolution

__all__ = [
    "welch_t_test",
    "pairwise_t_test",
    "p_adjust",
    "TTestParams",
    "PairComparison",
    "PairwiseParams",
    "TTestDesign",
    "PairwiseDesign",
    "TTestSolution",
    "PairwiseSolution",
    "DEFAULT_ALPHA",
]
