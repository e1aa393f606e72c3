"""
Core infrastructure for montestats.

This module provides shared abstractions and utilities used by all
domain-specific submodules (simulation, hypothesis, montecarlo).

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    random_source: Explicit seeded random stream
    grouping: Dataset partitioned by two categorical factors
    compute: Timing utilities
"""

from montestats.core.result import Result
from montestats.core.random_source import RandomSource, as_random_source
from montestats.core.grouping import GroupedData
from montestats.core.exceptions import (
    MonteStatsError,
    ValidationError,
    InvalidArgumentError,
    DimensionError,
    InsufficientDataError,
    DegenerateStratumError,
    NumericalError,
    UndefinedStatisticError,
)

__all__ = [
    # Result
    "Result",
    # Randomness
    "RandomSource",
    "as_random_source",
    # Data
    "GroupedData",
    # Exceptions
    "MonteStatsError",
    "ValidationError",
    "InvalidArgumentError",
    "DimensionError",
    "InsufficientDataError",
    "DegenerateStratumError",
    "NumericalError",
    "UndefinedStatisticError",
]
