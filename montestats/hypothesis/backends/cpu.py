"""
CPU reference backend for hypothesis tests.

Dispatches on design.test_type: a single two-sample t-test, or a batch
of pairwise t-tests followed by a multiple-comparison adjustment.
"""

from __future__ import annotations

import numpy as np

from montestats.core.result import Result
from montestats.core.compute.timing import Timer
from montestats.hypothesis._common import PairComparison, PairwiseParams
from montestats.hypothesis._p_adjust import p_adjust
from montestats.hypothesis.backends._t_test import t_two_sample
from montestats.hypothesis.design import TTestDesign, PairwiseDesign


class CPUHypothesisBackend:
    """CPU reference backend for hypothesis tests."""

    @property
    def name(self) -> str:
        return 'cpu_hypothesis'

    def solve(self, design: TTestDesign | PairwiseDesign) -> Result:
        """Dispatch to test-specific implementation based on design.test_type."""
        test_type = design.test_type
        if test_type == "t_two_sample":
            return self._solve_t_test(design)
        elif test_type == "pairwise_t":
            return self._solve_pairwise(design)
        raise ValueError(f"Unknown test_type: {test_type!r}")

    def _solve_t_test(self, design: TTestDesign) -> Result:
        timer = Timer()
        timer.start()

        with timer.section(design.test_type):
            params, warnings_list = t_two_sample(
                design.x, design.y,
                var_equal=design.var_equal,
                alternative=design.alternative,
                conf_level=design.conf_level,
            )

        timer.stop()

        return Result(
            params=params,
            info={
                'test_type': design.test_type,
                'n_x': len(design.x),
                'n_y': len(design.y),
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _solve_pairwise(self, design: PairwiseDesign) -> Result[PairwiseParams]:
        timer = Timer()
        timer.start()

        data = design.data
        pairs = design.pairs()
        warnings_list: list[str] = []

        tests = []
        with timer.section('pair_tests'):
            for g1, g2, _ in pairs:
                params, w = t_two_sample(
                    data[g1], data[g2],
                    var_equal=design.var_equal,
                    conf_level=design.conf_level,
                )
                tests.append(params)
                warnings_list.extend(f"{g1} vs {g2}: {msg}" for msg in w)

        with timer.section('p_adjust'):
            raw = np.array([t.p_value for t in tests], dtype=np.float64)
            adjusted = p_adjust(raw, method=design.p_adjust_method)

        comparisons = []
        for (g1, g2, factor), t, p_adj in zip(pairs, tests, adjusted):
            comparisons.append(PairComparison(
                group1=g1,
                group2=g2,
                factor=factor,
                mean1=t.mean_x,
                mean2=t.mean_y,
                diff=t.diff,
                statistic=t.statistic,
                df=t.df,
                p_value=t.p_value,
                p_adjusted=float(p_adj),
                ci_lower=float(t.conf_int[0]),
                ci_upper=float(t.conf_int[1]),
                # NaN never compares below alpha
                significant=bool(p_adj < design.alpha),
            ))

        timer.stop()

        method = tests[0].method if tests else "Welch Two Sample t-test"

        return Result(
            params=PairwiseParams(
                comparisons=tuple(comparisons),
                factors=data.factors,
                alpha=design.alpha,
                p_adjust_method=design.p_adjust_method,
                conf_level=design.conf_level,
                method=method,
            ),
            info={
                'test_type': design.test_type,
                'n_groups': len(data),
                'n_pairs': len(comparisons),
                'n_significant': sum(c.significant for c in comparisons),
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
