"""
Tests for p_adjust(), validated against R's p.adjust().
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from montestats.core.exceptions import ValidationError
from montestats.hypothesis import p_adjust

PV1 = [0.001, 0.01, 0.05, 0.1, 0.5, 0.9]
PV2 = [0.01, 0.04, 0.03, 0.005]


class TestBH:

    def test_matches_r(self):
        # R: p.adjust(c(0.001, 0.01, 0.05, 0.1, 0.5, 0.9), "BH")
        assert_allclose(p_adjust(PV1, "BH"), [0.006, 0.03, 0.1, 0.15, 0.6, 0.9])

    def test_unsorted_input_keeps_order(self):
        # R: p.adjust(c(0.01, 0.04, 0.03, 0.005), "BH")
        assert_allclose(p_adjust(PV2, "BH"), [0.02, 0.04, 0.04, 0.02])

    def test_fdr_alias(self):
        assert_allclose(p_adjust(PV2, "fdr"), p_adjust(PV2, "BH"))

    def test_default_method_is_bh(self):
        assert_allclose(p_adjust(PV1), p_adjust(PV1, "BH"))

    def test_adjusted_at_least_raw(self, rng):
        p = rng.uniform(size=50)
        adj = p_adjust(p, "BH")
        assert np.all(adj >= p)
        assert np.all(adj <= 1.0)

    @pytest.mark.parametrize("method", ["BH", "BY", "holm", "bonferroni"])
    def test_never_below_raw_exactly(self, rng, method):
        # no rounding slack: n / k is exact at the largest rank
        for _ in range(2000):
            p = rng.uniform(size=9)
            assert np.all(p_adjust(p, method) >= p)

    def test_largest_p_unchanged(self):
        p = np.array([0.9638515887233757, 0.01, 0.02, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7])
        assert p_adjust(p, "BH")[0] == p[0]

    def test_monotone_in_raw_order(self, rng):
        p = rng.uniform(size=50)
        adj = p_adjust(p, "BH")
        order = np.argsort(p)
        assert np.all(np.diff(adj[order]) >= -1e-15)

    def test_nan_preserved_and_not_counted(self):
        adj = p_adjust([0.01, np.nan, 0.04], "BH")
        assert np.isnan(adj[1])
        assert_allclose(adj[[0, 2]], [0.02, 0.04])

    def test_explicit_n(self):
        assert_allclose(p_adjust([0.01, 0.02], "BH", n=4), [0.04, 0.04])


class TestOtherMethods:

    def test_by(self):
        assert_allclose(
            p_adjust(PV1, "BY"), [0.0147, 0.0735, 0.245, 0.3675, 1.0, 1.0],
        )

    def test_holm(self):
        assert_allclose(p_adjust(PV1, "holm"), [0.006, 0.05, 0.2, 0.3, 1.0, 1.0])

    def test_bonferroni(self):
        assert_allclose(
            p_adjust(PV1, "bonferroni"), [0.006, 0.06, 0.3, 0.6, 1.0, 1.0],
        )

    def test_none(self):
        assert_allclose(p_adjust(PV1, "none"), PV1)


class TestEdgeCases:

    def test_empty(self):
        assert p_adjust([]).shape == (0,)

    def test_all_nan(self):
        assert np.all(np.isnan(p_adjust([np.nan, np.nan])))

    def test_single(self):
        assert_allclose(p_adjust([0.03]), [0.03])

    def test_unknown_method(self):
        with pytest.raises(ValidationError, match="method"):
            p_adjust(PV1, "hochberg")

    @pytest.mark.parametrize("p", [[-0.1, 0.5], [0.5, 1.2]])
    def test_out_of_range(self, p):
        with pytest.raises(ValidationError):
            p_adjust(p)

    def test_n_too_small(self):
        with pytest.raises(ValidationError):
            p_adjust(PV1, n=3)
