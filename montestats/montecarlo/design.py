"""
Design classes for permutation testing.

PermutationDesign encapsulates one two-label comparison;
StratifiedPermutationDesign holds one PermutationDesign per stratum of a
grouped dataset. Immutable, validated at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from montestats.core.exceptions import DegenerateStratumError, ValidationError
from montestats.core.grouping import GroupedData
from montestats.core.random_source import RandomSource, as_random_source
from montestats.core.validation import check_array, check_1d, check_finite, check_positive_int
from montestats.montecarlo._common import VALID_ALTERNATIVES, DEFAULT_PERMUTATIONS


def mean_difference(a: NDArray, b: NDArray) -> float:
    """Default statistic: mean(a) - mean(b)."""
    return float(np.mean(a) - np.mean(b))


def _validate_alternative(alternative: str) -> str:
    if alternative not in VALID_ALTERNATIVES:
        raise ValidationError(
            f"alternative must be 'two.sided', 'less', or 'greater', "
            f"got {alternative!r}"
        )
    return alternative


def _sample(values: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    arr = check_array(values, name).astype(np.float64, copy=True)
    check_1d(arr, name)
    check_finite(arr, name)
    return arr


@dataclass(frozen=True)
class PermutationDesign:
    """
    Frozen design for a two-label permutation test.

    Attributes:
        x: Observations carrying label A, shape (n_a,).
        y: Observations carrying label B, shape (n_b,).
        statistic: fn(a, b) -> float, evaluated as statistic(A, B).
        R: Number of permutations.
        alternative: Direction for the Phipson-Smyth p-value.
        labels: (label A, label B), for reporting.
        stratum: Stratum level, or None for an unstratified test.
        source: Random source the permutations advance.
    """
    x: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    statistic: Callable
    R: int
    alternative: str
    labels: tuple[Any, Any]
    stratum: Any
    source: RandomSource

    @classmethod
    def for_permutation_test(
        cls,
        x,
        y,
        R: int = DEFAULT_PERMUTATIONS,
        *,
        statistic: Callable = mean_difference,
        alternative: str = "greater",
        labels: tuple[Any, Any] = ("A", "B"),
        stratum: Any = None,
        seed: int | RandomSource | None = None,
    ) -> PermutationDesign:
        """
        Create a permutation test design with validation.

        Args:
            x: Label-A data.
            y: Label-B data.
            R: Number of permutations. Must be >= 1.
            statistic: fn(a, b) -> float. Default mean(a) - mean(b).
            alternative: "greater" (default), "less", or "two.sided".
            labels: Names of the two labels.
            stratum: Stratum level, reported on errors and results.
            seed: Integer seed or an existing RandomSource.

        Raises:
            InvalidArgumentError: If R is not a positive integer.
            DegenerateStratumError: If either label has no observations.
        """
        R = check_positive_int(R, "R")
        alternative = _validate_alternative(alternative)

        x_arr = _sample(x, "x")
        y_arr = _sample(y, "y")

        present = tuple(
            lab for lab, arr in zip(labels, (x_arr, y_arr)) if len(arr) > 0
        )
        if len(present) < 2:
            where = "" if stratum is None else f" in stratum {stratum!r}"
            raise DegenerateStratumError(
                f"permutation test needs observations for both labels "
                f"{labels}{where}, found only {present}",
                stratum=stratum,
                labels=present,
            )

        return cls(
            x=x_arr,
            y=y_arr,
            statistic=statistic,
            R=R,
            alternative=alternative,
            labels=tuple(labels),
            stratum=stratum,
            source=as_random_source(seed),
        )


@dataclass(frozen=True)
class StratifiedPermutationDesign:
    """
    Frozen design for per-stratum permutation tests.

    Attributes:
        label_factor: Factor whose two levels are permuted.
        stratum_factor: Factor held fixed within each test.
        strata: (stratum level, PermutationDesign) in stratum level order.
    """
    label_factor: str
    stratum_factor: str
    strata: tuple[tuple[Any, PermutationDesign], ...]

    @classmethod
    def for_groups(
        cls,
        data: GroupedData,
        label: str,
        *,
        labels: tuple[Any, Any] | None = None,
        R: int = DEFAULT_PERMUTATIONS,
        statistic: Callable = mean_difference,
        alternative: str = "greater",
        seed: int | RandomSource | None = None,
    ) -> StratifiedPermutationDesign:
        """
        Create one permutation design per level of the other factor.

        Args:
            data: Dataset partitioned by two factors.
            label: Name of the factor supplying the two labels.
            labels: (label A, label B). Defaults to the label factor's
                levels, which must then number exactly two.
            R: Permutations per stratum. Must be >= 1.
            seed: Integer seed or an existing RandomSource, shared by
                all strata in stratum level order.

        Raises:
            DegenerateStratumError: If a stratum lacks either label, or the
                label factor has a single level.
            ValidationError: If labels is omitted and the label factor has
                more than two levels.
        """
        if not isinstance(data, GroupedData):
            raise ValidationError(
                f"data must be a GroupedData, got {type(data).__name__}"
            )
        idx = data.factor_index(label)
        stratum_factor = data.factors[1 - idx]

        if labels is None:
            levels = data.levels(label)
            if len(levels) < 2:
                raise DegenerateStratumError(
                    f"factor {label!r} has only levels {levels}; every "
                    f"stratum holds a single label",
                    stratum=None,
                    labels=tuple(levels),
                )
            if len(levels) > 2:
                raise ValidationError(
                    f"factor {label!r} has levels {levels}; pass labels=(A, B) "
                    f"to choose two"
                )
            labels = (levels[0], levels[1])
        label_a, label_b = labels

        source = as_random_source(seed)
        empty = np.empty(0, dtype=np.float64)
        strata = []
        for level in data.levels(stratum_factor):
            groups = data.select(stratum_factor, level)
            if not groups:
                continue
            strata.append((level, PermutationDesign.for_permutation_test(
                groups.get(label_a, empty),
                groups.get(label_b, empty),
                R,
                statistic=statistic,
                alternative=alternative,
                labels=(label_a, label_b),
                stratum=level,
                seed=source,
            )))

        return cls(
            label_factor=label,
            stratum_factor=stratum_factor,
            strata=tuple(strata),
        )
