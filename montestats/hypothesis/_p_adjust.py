"""
Multiple-comparison adjustment of p-values, matching R's p.adjust().

The pairwise tester adjusts its whole batch of raw p-values at once with
Benjamini-Hochberg; the other methods are kept for callers who want
family-wise error control instead.

Standalone utility (no Design/Backend pipeline).
"""

from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import NDArray, ArrayLike

from montestats.core.exceptions import ValidationError

VALID_METHODS = ("holm", "bonferroni", "BH", "BY", "fdr", "none")


def _ranked(
    pv: NDArray,
    scale: Callable[[NDArray, NDArray], NDArray],
    accumulate: np.ufunc,
    descending: bool,
) -> NDArray:
    """
    Shared step procedure behind Holm and BH.

    Sorts the p-values, scales each by its 1-based ascending rank, forces
    monotonicity with a running ``accumulate`` in the walk direction, and
    puts the values back in input order.
    """
    order = np.argsort(pv, kind="stable")
    if descending:
        order = order[::-1]
    ranks = np.arange(1, len(pv) + 1, dtype=np.float64)
    if descending:
        ranks = ranks[::-1]
    stepped = accumulate.accumulate(scale(pv[order], ranks))
    out = np.empty_like(stepped)
    out[order] = stepped
    return out


def _bonferroni(pv: NDArray, n: int) -> NDArray:
    return pv * n


def _holm(pv: NDArray, n: int) -> NDArray:
    """Holm step-down: p_(k) * (n - k + 1), running max from the smallest."""
    return _ranked(pv, lambda p, k: p * (n - k + 1), np.maximum, descending=False)


def _bh(pv: NDArray, n: int) -> NDArray:
    """
    Benjamini-Hochberg step-up.

    adj_(k) = min_{j >= k} p_(j) * n / j, walked from the largest p-value
    down so the running minimum gives the j >= k bound.
    """
    return _ranked(pv, lambda p, k: p * (n / k), np.minimum, descending=True)


def _by(pv: NDArray, n: int) -> NDArray:
    """Benjamini-Yekutieli: BH scaled by the harmonic sum over 1..n."""
    return _bh(pv, n) * np.sum(1.0 / np.arange(1, n + 1, dtype=np.float64))


_ADJUSTERS: dict[str, Callable[[NDArray, int], NDArray]] = {
    "holm": _holm,
    "bonferroni": _bonferroni,
    "BH": _bh,
    "fdr": _bh,
    "BY": _by,
}


def p_adjust(
    p: ArrayLike,
    method: str = "BH",
    n: int | None = None,
) -> NDArray[np.floating]:
    """
    Adjust p-values for multiple comparisons. Matches R p.adjust().

    Parameters
    ----------
    p : array-like
        Raw p-values. NaN entries (untestable pairs) are carried through.
    method : str
        "BH" (default, alias "fdr"), "BY", "holm", "bonferroni" or "none".
    n : int or None
        Number of comparisons in the family. Defaults to the number of
        non-NaN p-values; may be larger when some were never computed.

    Returns
    -------
    ndarray
        Adjusted p-values in input order, each >= its raw value and
        clipped to [0, 1]. NaN stays NaN.

    Raises
    ------
    ValidationError
        If the method is unknown, a p-value lies outside [0, 1], or n is
        smaller than the number of non-NaN p-values.
    """
    if method not in VALID_METHODS:
        raise ValidationError(
            f"method must be one of {VALID_METHODS}, got {method!r}"
        )

    p_arr = np.asarray(p, dtype=np.float64).ravel()
    if np.any((p_arr < 0.0) | (p_arr > 1.0)):
        raise ValidationError("p-values must lie in [0, 1]")

    result = p_arr.copy()
    tested = ~np.isnan(p_arr)
    m = int(np.count_nonzero(tested))
    if method == "none" or m == 0:
        return result

    if n is None:
        n = m
    elif n < m:
        raise ValidationError(
            f"n ({n}) must be >= number of non-NaN p-values ({m})"
        )

    adjusted = _ADJUSTERS[method](p_arr[tested], n)
    # rounding in the rank scaling must not push a value below its raw p
    result[tested] = np.clip(np.maximum(adjusted, p_arr[tested]), 0.0, 1.0)
    return result
