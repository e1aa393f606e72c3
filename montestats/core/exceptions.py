"""
Exception hierarchy for montestats.

All exceptions inherit from MonteStatsError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from typing import Any


class MonteStatsError(Exception):
    """Base exception for all montestats errors."""
    pass


class ValidationError(MonteStatsError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class InvalidArgumentError(ValidationError):
    """
    A count, rate or size argument is out of range.

    Raised for non-positive trial counts, sample sizes, permutation
    counts and distribution rates.

    Attributes:
        name: Parameter name
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.name = name
        self.value = value


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions.
    """
    pass


class InsufficientDataError(ValidationError):
    """
    A group has too few observations for the requested test.

    Attributes:
        group: Key of the offending group
        n_observations: Number of observations the group holds
        required: Minimum number of observations required
    """

    def __init__(
        self,
        message: str,
        group: Any = None,
        n_observations: int | None = None,
        required: int | None = None,
    ):
        super().__init__(message)
        self.group = group
        self.n_observations = n_observations
        self.required = required


class DegenerateStratumError(ValidationError):
    """
    A permutation stratum holds a single label.

    Shuffling one label over its own observations reproduces the data,
    so no null distribution can be built.

    Attributes:
        stratum: Stratum level, if the test is stratified
        labels: Labels actually present in the stratum
    """

    def __init__(
        self,
        message: str,
        stratum: Any = None,
        labels: tuple[Any, ...] = (),
    ):
        super().__init__(message)
        self.stratum = stratum
        self.labels = labels


class NumericalError(MonteStatsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class UndefinedStatisticError(NumericalError):
    """
    A statistic is undefined for the given number of observations.

    Raised when, e.g., a sample variance is requested over fewer than two
    values. Never reported as zero.

    Attributes:
        statistic: Name of the statistic
        n: Number of observations available
    """

    def __init__(
        self,
        message: str,
        statistic: str | None = None,
        n: int | None = None,
    ):
        super().__init__(message)
        self.statistic = statistic
        self.n = n
