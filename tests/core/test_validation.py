"""
Tests for montestats.core.validation.
"""

import numpy as np
import pytest

from montestats.core.exceptions import (
    DimensionError,
    InsufficientDataError,
    InvalidArgumentError,
    ValidationError,
)
from montestats.core.validation import (
    check_1d,
    check_array,
    check_finite,
    check_min_samples,
    check_positive,
    check_positive_int,
    check_unit_interval,
)


class TestCheckArray:

    def test_int_converted_to_float(self):
        arr = check_array([1, 2, 3], "x")
        assert arr.dtype == np.float64

    def test_strings_rejected(self):
        with pytest.raises(ValidationError, match="x"):
            check_array(["a", "b"], "x")

    def test_mixed_rejected(self):
        with pytest.raises(ValidationError):
            check_array([1.0, "a", None], "x")


class TestShapeAndValues:

    def test_check_1d(self):
        check_1d(np.zeros(3), "x")
        with pytest.raises(DimensionError, match="expected 1D"):
            check_1d(np.zeros((2, 2)), "x")

    def test_check_finite(self):
        with pytest.raises(ValidationError, match="1 NaN, 1 Inf"):
            check_finite(np.array([1.0, np.nan, np.inf]), "x")

    def test_check_min_samples(self):
        check_min_samples(np.zeros(2), 2, "x")
        with pytest.raises(InsufficientDataError) as info:
            check_min_samples(np.zeros(1), 2, "x", group=("A", 1))
        assert info.value.group == ("A", 1)
        assert info.value.n_observations == 1


class TestScalars:

    @pytest.mark.parametrize("value", [1, 40, np.int64(7)])
    def test_positive_int_accepts(self, value):
        assert check_positive_int(value, "n") == int(value)

    @pytest.mark.parametrize("value", [0, -3, 2.0, True, "5", None])
    def test_positive_int_rejects(self, value):
        with pytest.raises(InvalidArgumentError) as info:
            check_positive_int(value, "n")
        assert info.value.name == "n"

    @pytest.mark.parametrize("value", [0.2, 1, 1e-9])
    def test_positive_accepts(self, value):
        assert check_positive(value, "rate") == pytest.approx(value)

    @pytest.mark.parametrize("value", [0, -0.2, np.inf, np.nan, "0.2"])
    def test_positive_rejects(self, value):
        with pytest.raises(InvalidArgumentError):
            check_positive(value, "rate")

    def test_unit_interval(self):
        assert check_unit_interval(0.05, "alpha") == 0.05
        for bad in (0.0, 1.0, 1.5):
            with pytest.raises(ValidationError):
                check_unit_interval(bad, "alpha")
