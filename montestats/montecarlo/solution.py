"""
Solution wrappers for permutation test results.

PermutationSolution wraps Result[PermutationParams];
StratifiedPermutationSolution collects one PermutationSolution per
stratum and renders the per-stratum summary table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from montestats.core.result import Result
from montestats.montecarlo._common import PermutationParams

if TYPE_CHECKING:
    import pandas as pd
    from montestats.montecarlo.design import PermutationDesign, StratifiedPermutationDesign


@dataclass
class PermutationSolution:
    """
    User-facing permutation test results.

    Provides observed statistic, permutation distribution, its summary,
    the tail fraction and the p-value.
    """
    _result: Result[PermutationParams]
    _design: 'PermutationDesign'

    # --- Core fields ---

    @property
    def observed_stat(self) -> float:
        """Statistic on the original labelling, A minus B."""
        return self._result.params.observed_stat

    @property
    def perm_stats(self) -> NDArray[np.floating[Any]]:
        """Permutation distribution, shape (R,)."""
        return self._result.params.perm_stats

    @property
    def null_mean(self) -> float:
        return self._result.params.null_mean

    @property
    def null_sd(self) -> float:
        return self._result.params.null_sd

    @property
    def tail_fraction(self) -> float:
        """Share of permuted statistics strictly greater than observed."""
        return self._result.params.tail_fraction

    @property
    def p_value(self) -> float:
        """Permutation p-value with Phipson-Smyth correction."""
        return self._result.params.p_value

    @property
    def R(self) -> int:
        """Number of permutations."""
        return self._result.params.R

    @property
    def alternative(self) -> str:
        return self._result.params.alternative

    @property
    def labels(self) -> tuple[Any, Any]:
        """(label A, label B)."""
        return self._result.params.labels

    @property
    def stratum(self) -> Any:
        return self._design.stratum

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

    def summary(self) -> str:
        """Permutation test summary."""
        a, b = self.labels
        lines = [
            "\nPERMUTATION TEST",
            "",
            f"Labels: A = {a} (n={self._result.params.n_a}), "
            f"B = {b} (n={self._result.params.n_b})",
            f"Number of permutations: {self.R}",
            f"Observed statistic: {self.observed_stat:.6g}",
            f"Null mean: {self.null_mean:.6g}, null sd: {self.null_sd:.6g}",
            f"Tail fraction (> observed): {self.tail_fraction:.4g}",
            f"p-value ({self.alternative}): {self.p_value:.4g}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PermutationSolution(R={self.R}, "
            f"observed={self.observed_stat:.4g}, "
            f"tail_fraction={self.tail_fraction:.4g})"
        )


@dataclass
class StratifiedPermutationSolution:
    """Independent permutation tests, one per stratum level."""
    _solutions: tuple[tuple[Any, PermutationSolution], ...]
    _design: 'StratifiedPermutationDesign'

    @property
    def strata(self) -> tuple[Any, ...]:
        """Stratum levels, in the order they were tested."""
        return tuple(level for level, _ in self._solutions)

    @property
    def label_factor(self) -> str:
        return self._design.label_factor

    @property
    def stratum_factor(self) -> str:
        return self._design.stratum_factor

    def __getitem__(self, level: Any) -> PermutationSolution:
        for lev, sol in self._solutions:
            if lev == level:
                return sol
        raise KeyError(
            f"no stratum {level!r}. Available: {self.strata}"
        )

    def __iter__(self) -> Iterator[tuple[Any, PermutationSolution]]:
        return iter(self._solutions)

    def __len__(self) -> int:
        return len(self._solutions)

    @property
    def warnings(self) -> tuple[str, ...]:
        return tuple(
            f"{self.stratum_factor}={lev}: {w}"
            for lev, sol in self._solutions
            for w in sol.warnings
        )

    def to_frame(self) -> 'pd.DataFrame':
        """Per-stratum observed delta, null mean/sd and tail fraction."""
        import pandas as pd

        rows = []
        for level, sol in self._solutions:
            rows.append({
                self.stratum_factor: level,
                'observed': sol.observed_stat,
                'null_mean': sol.null_mean,
                'null_sd': sol.null_sd,
                'tail_fraction': sol.tail_fraction,
                'p_value': sol.p_value,
                'R': sol.R,
            })
        return pd.DataFrame(rows).set_index(self.stratum_factor)

    def summary(self) -> str:
        """Per-stratum permutation summary table."""
        if self._solutions:
            a, b = self._solutions[0][1].labels
            header = f"{self.label_factor}: {a} - {b}"
        else:
            header = self.label_factor
        lines = [
            "\nSTRATIFIED PERMUTATION TEST",
            "",
            header,
            "",
            f"{self.stratum_factor:>10s} {'observed':>10s} {'null mean':>10s} "
            f"{'null sd':>10s} {'tail':>8s}",
        ]
        for level, sol in self._solutions:
            lines.append(
                f"{str(level):>10s} {sol.observed_stat:10.4f} "
                f"{sol.null_mean:10.4f} {sol.null_sd:10.4f} "
                f"{sol.tail_fraction:8.4f}"
            )
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"StratifiedPermutationSolution(label={self.label_factor!r}, "
            f"strata={self.strata})"
        )
