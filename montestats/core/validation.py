"""
Input validators shared by the designs.

Fail fast, fail loud: each validator checks one thing, raises at once
with the parameter name and the offending value in the message, and
never repairs its input. Designs call them from their ``for_*``
factories, so backends only ever see validated data.
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from montestats.core.exceptions import (
    ValidationError,
    DimensionError,
    InvalidArgumentError,
    InsufficientDataError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Convert an array-like of numbers to a floating numpy array.

    Integer input is promoted to float64. Strings, mixed-type sequences
    (object dtype) and other non-numeric data are rejected.

    Raises:
        ValidationError: If the input is not numeric
    """
    try:
        arr = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if arr.dtype == object or not np.issubdtype(arr.dtype, np.number):
        raise ValidationError(
            f"{name}: expected numeric data, got dtype {arr.dtype}"
        )
    if np.issubdtype(arr.dtype, np.floating):
        return arr
    return arr.astype(np.float64)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_min_samples(
    array: NDArray[np.floating[Any]],
    min_samples: int,
    name: str,
    group: Any = None,
) -> None:
    """
    Verify array has at least the minimum number of samples.

    Args:
        array: Array to check
        min_samples: Minimum required samples (first dimension)
        name: Parameter name for error messages
        group: Group key reported on the raised error

    Raises:
        InsufficientDataError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise InsufficientDataError(
            f"{name}: requires at least {min_samples} observations, got {n}",
            group=group,
            n_observations=n,
            required=min_samples,
        )


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 1.

    bool is rejected even though it subclasses int.

    Returns:
        The value as a plain int

    Raises:
        InvalidArgumentError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgumentError(
            f"{name} must be a positive integer, got {value!r}",
            name=name,
            value=value,
        )
    if value < 1:
        raise InvalidArgumentError(
            f"{name} must be >= 1, got {value}",
            name=name,
            value=value,
        )
    return int(value)


def check_positive(value: Any, name: str) -> float:
    """
    Verify value is a finite real number > 0.

    Returns:
        The value as a float

    Raises:
        InvalidArgumentError: If value is not strictly positive
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(
            f"{name} must be a positive number, got {value!r}",
            name=name,
            value=value,
        )
    if not np.isfinite(value) or value <= 0:
        raise InvalidArgumentError(
            f"{name} must be finite and > 0, got {value}",
            name=name,
            value=value,
        )
    return float(value)


def check_unit_interval(value: float, name: str) -> float:
    """
    Verify value lies in the open interval (0, 1).

    Raises:
        ValidationError: If value is outside (0, 1)
    """
    if not (0.0 < value < 1.0):
        raise ValidationError(f"{name} must be in (0, 1), got {value}")
    return float(value)
