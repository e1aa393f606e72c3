"""
Asymptotic (CLT) model for the sample mean.

For n i.i.d. draws with population mean mu and variance sigma^2, the
sample mean is approximately Normal(mu, sigma^2 / n). Closed form, no
randomness.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from montestats.core.validation import check_positive_int


class HasMoments(Protocol):
    """Any distribution exposing its population mean and variance."""

    @property
    def mean(self) -> float: ...

    @property
    def variance(self) -> float: ...


@dataclass(frozen=True)
class AsymptoticParams:
    """Limiting mean and variance of the mean of sample_size draws."""
    mean: float
    variance: float
    sample_size: int

    @property
    def sd(self) -> float:
        return float(np.sqrt(self.variance))


def asymptotic_moments(distribution: HasMoments, sample_size: int) -> AsymptoticParams:
    """
    Limiting moments of the sample-mean statistic.

    Args:
        distribution: Population distribution (e.g. Exponential(0.2))
        sample_size: Draws per sample, n

    Returns:
        AsymptoticParams with mean = mu and variance = sigma^2 / n

    Raises:
        InvalidArgumentError: If sample_size is not a positive integer
    """
    sample_size = check_positive_int(sample_size, "sample_size")
    return AsymptoticParams(
        mean=float(distribution.mean),
        variance=float(distribution.variance) / sample_size,
        sample_size=sample_size,
    )
