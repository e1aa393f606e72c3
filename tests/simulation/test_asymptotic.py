"""
Tests for the closed-form CLT model.
"""

import pytest

from montestats.core.exceptions import InvalidArgumentError
from montestats.simulation import Exponential, asymptotic_moments


class TestAsymptoticMoments:

    def test_reference_parameters(self):
        params = asymptotic_moments(Exponential(0.2), 40)
        assert params.mean == pytest.approx(5.0)
        assert params.variance == pytest.approx(0.625)
        assert params.sd == pytest.approx(0.625 ** 0.5)
        assert params.sample_size == 40

    @pytest.mark.parametrize("rate,n", [(1.0, 1), (0.5, 10), (3.0, 100)])
    def test_general_form(self, rate, n):
        params = asymptotic_moments(Exponential(rate), n)
        assert params.mean == pytest.approx(1.0 / rate)
        assert params.variance == pytest.approx(1.0 / (rate ** 2 * n))

    def test_rejects_zero_sample_size(self):
        with pytest.raises(InvalidArgumentError):
            asymptotic_moments(Exponential(0.2), 0)
