"""Sample moments over trial statistics."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from montestats.core.exceptions import UndefinedStatisticError
from montestats.core.validation import check_array


def trial_means(samples: ArrayLike) -> NDArray[np.floating[Any]]:
    """Arithmetic mean of each row of a (n_trials, sample_size) batch."""
    arr = check_array(samples, "samples")
    return np.mean(np.atleast_2d(arr), axis=1)


def sample_mean(values: ArrayLike) -> float:
    arr = check_array(values, "values").ravel()
    if arr.size == 0:
        raise UndefinedStatisticError(
            "mean is undefined for 0 values", statistic='mean', n=0,
        )
    return float(np.mean(arr))


def sample_variance(values: ArrayLike) -> float:
    """
    Unbiased sample variance (divide by n - 1).

    Raises:
        UndefinedStatisticError: If fewer than 2 values are given
    """
    arr = check_array(values, "values").ravel()
    n = arr.size
    if n < 2:
        raise UndefinedStatisticError(
            f"variance is undefined for {n} value(s), need at least 2",
            statistic='variance',
            n=n,
        )
    return float(np.var(arr, ddof=1))
