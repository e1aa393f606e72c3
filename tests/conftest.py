"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from montestats.core.grouping import GroupedData
from montestats.datasets import tooth_growth


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def tooth_frame():
    """R's ToothGrowth as a DataFrame."""
    return tooth_growth()


@pytest.fixture
def tooth(tooth_frame):
    """ToothGrowth grouped by (supp, dose)."""
    return GroupedData.from_frame(
        tooth_frame, response='len', factors=('supp', 'dose'),
    )


@pytest.fixture
def two_by_three(rng):
    """Methods {A, B} x doses {1, 2, 3}, five observations per group."""
    groups = {}
    for i, method in enumerate(("A", "B")):
        for dose in (1, 2, 3):
            groups[(method, dose)] = rng.normal(10.0 + i + dose, 1.0, 5)
    return GroupedData.from_mapping(groups, factors=('method', 'dose'))
