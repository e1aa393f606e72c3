"""
Designs for hypothesis tests.

TTestDesign holds a single two-sample comparison; PairwiseDesign holds a
grouped dataset and the configuration for testing every comparable pair
of its groups. Both are immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np
from numpy.typing import NDArray, ArrayLike

from montestats.core.exceptions import ValidationError
from montestats.core.grouping import GroupedData, GroupKey
from montestats.core.validation import check_min_samples, check_unit_interval
from montestats.hypothesis._common import VALID_ALTERNATIVES, DEFAULT_ALPHA
from montestats.hypothesis._p_adjust import VALID_METHODS


def _validate_alternative(alternative: str) -> str:
    """Validate and return alternative hypothesis string."""
    if alternative not in VALID_ALTERNATIVES:
        raise ValidationError(
            f"alternative must be one of {VALID_ALTERNATIVES}, got {alternative!r}"
        )
    return alternative


def _to_float64_1d(x: ArrayLike, name: str = "x") -> NDArray[np.floating[Any]]:
    """Convert to 1D float64 array, removing NaN values."""
    arr = np.asarray(x, dtype=np.float64).ravel()
    # Remove NaN (R's default na.rm behavior for hypothesis tests)
    mask = ~np.isnan(arr)
    return arr[mask]


@dataclass(frozen=True)
class TTestDesign:
    """
    Design for a single two-sample t-test.

    Do not construct directly; use for_two_sample().
    """
    test_type: ClassVar[str] = "t_two_sample"

    x: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    var_equal: bool
    alternative: str
    conf_level: float

    @classmethod
    def for_two_sample(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        *,
        var_equal: bool = False,
        alternative: str = "two.sided",
        conf_level: float = 0.95,
    ) -> TTestDesign:
        """
        Build design for welch_t_test().

        Raises:
            InsufficientDataError: If x or y has fewer than 2 non-missing values
        """
        alternative = _validate_alternative(alternative)
        conf_level = check_unit_interval(conf_level, "conf_level")

        x_arr = _to_float64_1d(x, "x")
        y_arr = _to_float64_1d(y, "y")
        check_min_samples(x_arr, 2, "x", group="x")
        check_min_samples(y_arr, 2, "y", group="y")

        return cls(
            x=x_arr,
            y=y_arr,
            var_equal=var_equal,
            alternative=alternative,
            conf_level=conf_level,
        )


@dataclass(frozen=True)
class PairwiseDesign:
    """
    Design for pairwise t-tests between groups of a two-factor dataset.

    Only pairs of groups differing in exactly one factor are tested.

    Do not construct directly; use for_groups().
    """
    test_type: ClassVar[str] = "pairwise_t"

    data: GroupedData
    alpha: float
    p_adjust_method: str
    var_equal: bool
    conf_level: float

    @classmethod
    def for_groups(
        cls,
        data: GroupedData,
        *,
        alpha: float = DEFAULT_ALPHA,
        p_adjust_method: str = "BH",
        var_equal: bool = False,
        conf_level: float = 0.95,
    ) -> PairwiseDesign:
        """
        Build design for pairwise_t_test().

        Raises:
            InsufficientDataError: If any group has fewer than 2 observations;
                the error's ``group`` attribute names the group.
            ValidationError: If alpha, conf_level or the method is invalid.
        """
        if not isinstance(data, GroupedData):
            raise ValidationError(
                f"data must be a GroupedData, got {type(data).__name__}"
            )
        alpha = check_unit_interval(alpha, "alpha")
        conf_level = check_unit_interval(conf_level, "conf_level")
        if p_adjust_method not in VALID_METHODS:
            raise ValidationError(
                f"p_adjust_method must be one of {VALID_METHODS}, "
                f"got {p_adjust_method!r}"
            )

        for key, values in data.items():
            check_min_samples(values, 2, f"group {key!r}", group=key)

        return cls(
            data=data,
            alpha=alpha,
            p_adjust_method=p_adjust_method,
            var_equal=var_equal,
            conf_level=conf_level,
        )

    def pairs(self) -> tuple[tuple[GroupKey, GroupKey, str], ...]:
        """
        Comparable pairs as (group1, group2, differing_factor).

        Walks the groups in canonical key order (first factor outer,
        second inner). Each unordered pair is visited once, earlier group
        first; pairs differing in both factors are skipped.
        """
        keys = self.data.keys()
        factors = self.data.factors
        out = []
        for i, k1 in enumerate(keys):
            for k2 in keys[i + 1:]:
                differs = [d for d in (0, 1) if k1[d] != k2[d]]
                if len(differs) == 1:
                    out.append((k1, k2, factors[differs[0]]))
        return tuple(out)
