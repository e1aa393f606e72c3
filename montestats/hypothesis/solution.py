"""
Hypothesis test solution types.

TTestSolution wraps Result[TTestParams] and provides R's print.htest
format. PairwiseSolution wraps Result[PairwiseParams] and exposes the
pairwise table the report renders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from montestats.core.result import Result
from montestats.core.grouping import GroupKey
from montestats.hypothesis._common import TTestParams, PairComparison, PairwiseParams

if TYPE_CHECKING:
    import pandas as pd
    from montestats.hypothesis.design import TTestDesign, PairwiseDesign


@dataclass
class TTestSolution:
    """
    User-facing two-sample t-test results.

    Wraps Result[TTestParams] and provides R's print.htest output format
    via summary().
    """
    _result: Result[TTestParams]
    _design: 'TTestDesign'

    @property
    def statistic(self) -> float:
        """t statistic."""
        return self._result.params.statistic

    @property
    def df(self) -> float:
        """Degrees of freedom."""
        return self._result.params.df

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def conf_int(self) -> NDArray[np.floating[Any]]:
        """Confidence interval for mean(x) - mean(y), shape (2,)."""
        return self._result.params.conf_int

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def estimate(self) -> dict[str, float]:
        """Sample means, keyed like R's htest estimate."""
        p = self._result.params
        return {"mean of x": p.mean_x, "mean of y": p.mean_y}

    @property
    def diff(self) -> float:
        """mean(x) - mean(y)."""
        return self._result.params.diff

    @property
    def alternative(self) -> str:
        return self._result.params.alternative

    @property
    def method(self) -> str:
        return self._result.params.method

    # --- Metadata ---

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

    # --- Formatting ---

    def summary(self) -> str:
        """
        Format as R's print.htest output.

        Produces output like:
            Welch Two Sample t-test

        data:  x and y
        t = 1.9153, df = 55.309, p-value = 0.06063
        alternative hypothesis: true difference in means is not equal to 0
        95 percent confidence interval:
         -0.1710156  7.5710156
        sample estimates:
        mean of x mean of y
         20.66333  16.96333
        """
        p = self._result.params
        relation = {
            "two.sided": "is not equal to",
            "less": "is less than",
            "greater": "is greater than",
        }[p.alternative]
        lo, hi = p.conf_int
        lines = [
            f"\t{p.method}",
            "",
            "data:  x and y",
            f"t = {p.statistic:.5g}, df = {p.df:.5g}, "
            f"p-value = {_format_pvalue(p.p_value)}",
            f"alternative hypothesis: true difference in means {relation} 0",
            f"{int(p.conf_level * 100)} percent confidence interval:",
            f" {_format_number(lo)}  {_format_number(hi)}",
            "sample estimates:",
            f"{'mean of x':>14s} {'mean of y':>14s}",
            f"{p.mean_x:14.7g} {p.mean_y:14.7g}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"TTestSolution(method={p.method!r}, t={p.statistic:.4g}, "
            f"p_value={p.p_value:.4g})"
        )


@dataclass
class PairwiseSolution:
    """
    User-facing pairwise t-test results.

    Each comparison reports diff = mean(group1) - mean(group2), where
    group1 is the earlier group in the data's key order.
    """
    _result: Result[PairwiseParams]
    _design: 'PairwiseDesign'

    @property
    def comparisons(self) -> tuple[PairComparison, ...]:
        """All tested pairs, in enumeration order."""
        return self._result.params.comparisons

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        return np.array([c.p_value for c in self.comparisons])

    @property
    def p_adjusted(self) -> NDArray[np.floating[Any]]:
        return np.array([c.p_adjusted for c in self.comparisons])

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def p_adjust_method(self) -> str:
        return self._result.params.p_adjust_method

    @property
    def factors(self) -> tuple[str, str]:
        return self._result.params.factors

    def significant(self) -> tuple[PairComparison, ...]:
        """Comparisons whose adjusted p-value is below alpha."""
        return tuple(c for c in self.comparisons if c.significant)

    def get(self, group1: GroupKey, group2: GroupKey) -> PairComparison | None:
        """
        Look up the comparison of two groups, in either order.

        Returns None if the pair was not tested (it differs in both factors).
        The returned comparison keeps its own group1/group2 orientation.
        """
        wanted = {tuple(group1), tuple(group2)}
        for c in self.comparisons:
            if {c.group1, c.group2} == wanted:
                return c
        return None

    def __len__(self) -> int:
        return len(self.comparisons)

    # --- Metadata ---

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
        """Pairwise table: one row per tested pair."""
        import pandas as pd

        f1, f2 = self.factors
        rows = []
        for c in self.comparisons:
            rows.append({
                f"{f1}_1": c.group1[0],
                f"{f2}_1": c.group1[1],
                f"{f1}_2": c.group2[0],
                f"{f2}_2": c.group2[1],
                'factor': c.factor,
                'diff': c.diff,
                't': c.statistic,
                'df': c.df,
                'p_value': c.p_value,
                'p_adjusted': c.p_adjusted,
                'ci_lower': c.ci_lower,
                'ci_upper': c.ci_upper,
                'significant': c.significant,
            })
        return pd.DataFrame(rows)

    def summary(self) -> str:
        """Pairwise comparison table."""
        p = self._result.params
        lines = [
            f"\nPAIRWISE {p.method.strip().upper()}S",
            "",
            f"P value adjustment method: {p.p_adjust_method}, "
            f"alpha = {p.alpha:g}",
            "",
            f"{'group 1':>14s} {'group 2':>14s} {'diff':>9s} "
            f"{'p':>10s} {'p adj':>10s}",
        ]
        for c in p.comparisons:
            flag = " *" if c.significant else ""
            lines.append(
                f"{_format_key(c.group1):>14s} {_format_key(c.group2):>14s} "
                f"{c.diff:9.3f} {_format_pvalue(c.p_value):>10s} "
                f"{_format_pvalue(c.p_adjusted):>10s}{flag}"
            )
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PairwiseSolution(n_pairs={len(self)}, "
            f"n_significant={len(self.significant())}, "
            f"method={self.p_adjust_method!r})"
        )


def _format_key(key: GroupKey) -> str:
    return "/".join(str(k) for k in key)


def _format_pvalue(p: float) -> str:
    """Format p-value like R does."""
    if np.isnan(p):
        return "NA"
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"


def _format_number(x: float) -> str:
    """Format a number, handling infinity."""
    if np.isinf(x):
        return "-Inf" if x < 0 else "Inf"
    return f"{x:.7g}"
