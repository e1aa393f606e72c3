"""
Tests for permutation_test().
"""

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from montestats.core.exceptions import (
    DegenerateStratumError,
    InvalidArgumentError,
    ValidationError,
)
from montestats.core.random_source import RandomSource
from montestats.montecarlo import permutation_test


@pytest.fixture
def samples(rng):
    return rng.normal(0.3, 1.0, 20), rng.normal(0.0, 1.0, 20)


class TestBasic:

    def test_observed_is_mean_difference(self, samples):
        x, y = samples
        sol = permutation_test(x, y, 1000, seed=0)
        assert sol.observed_stat == pytest.approx(np.mean(x) - np.mean(y))

    def test_perm_stats_length(self, rng):
        sol = permutation_test(rng.normal(size=3), rng.normal(size=17), 1234, seed=0)
        assert sol.perm_stats.shape == (1234,)
        assert sol.R == 1234

    def test_null_summary(self, samples):
        x, y = samples
        sol = permutation_test(x, y, 2000, seed=1)
        assert sol.null_mean == pytest.approx(np.mean(sol.perm_stats))
        assert sol.null_sd == pytest.approx(np.std(sol.perm_stats, ddof=1))
        assert abs(sol.null_mean) < 4 * sol.null_sd / np.sqrt(2000)

    def test_tail_fraction_strict(self):
        sol = permutation_test([1.0, 1.0], [1.0, 1.0], 1000, seed=0)
        assert sol.tail_fraction == 0.0
        assert sol.p_value == pytest.approx(1.0)

    def test_separated_groups(self):
        sol = permutation_test([10.0, 11, 12, 13], [0.0, 1, 2, 3], 2000, seed=0)
        assert sol.tail_fraction == 0.0
        assert sol.p_value < 0.05
        assert sol.p_value >= 1.0 / 2001

    def test_tail_fraction_matches_perm_stats(self, samples):
        x, y = samples
        sol = permutation_test(x, y, 1000, seed=2)
        expected = np.mean(sol.perm_stats > sol.observed_stat)
        assert sol.tail_fraction == pytest.approx(expected)

    def test_metadata(self, samples):
        x, y = samples
        sol = permutation_test(x, y, 1000, labels=("OJ", "VC"), seed=3)
        assert sol.labels == ("OJ", "VC")
        assert sol.backend_name == 'cpu_permutation'
        assert sol.info['n_a'] == 20
        assert 'permutation_replicates' in sol.timing
        assert sol.warnings == ()


class TestReproducibility:

    def test_same_seed(self, samples):
        x, y = samples
        a = permutation_test(x, y, 1000, seed=42)
        b = permutation_test(x, y, 1000, seed=42)
        assert_array_equal(a.perm_stats, b.perm_stats)

    def test_shared_source_advances(self, samples):
        x, y = samples
        source = RandomSource(42)
        a = permutation_test(x, y, 1000, seed=source)
        b = permutation_test(x, y, 1000, seed=source)
        assert not np.array_equal(a.perm_stats, b.perm_stats)


class TestSymmetry:

    def test_swap_negates_observed(self, samples):
        x, y = samples
        a = permutation_test(x, y, 1000, seed=0)
        b = permutation_test(y, x, 1000, seed=0)
        assert b.observed_stat == pytest.approx(-a.observed_stat)

    def test_swap_complements_tail(self, samples):
        x, y = samples
        a = permutation_test(x, y, 5000, seed=10)
        b = permutation_test(y, x, 5000, seed=11)
        assert a.tail_fraction + b.tail_fraction == pytest.approx(1.0, abs=0.04)


class TestAlternatives:

    def test_p_value_directions(self, samples):
        x, y = samples
        greater = permutation_test(x, y, 2000, alternative="greater", seed=5)
        less = permutation_test(x, y, 2000, alternative="less", seed=5)
        two = permutation_test(x, y, 2000, alternative="two.sided", seed=5)
        stats = greater.perm_stats
        obs = greater.observed_stat
        assert greater.p_value == pytest.approx((np.sum(stats >= obs) + 1) / 2001)
        assert less.p_value == pytest.approx((np.sum(stats <= obs) + 1) / 2001)
        assert two.p_value == pytest.approx(
            (np.sum(np.abs(stats) >= abs(obs)) + 1) / 2001
        )

    def test_custom_statistic(self, samples):
        x, y = samples

        def median_diff(a, b):
            return float(np.median(a) - np.median(b))

        sol = permutation_test(x, y, 1000, statistic=median_diff, seed=0)
        assert sol.observed_stat == pytest.approx(np.median(x) - np.median(y))


class TestValidation:

    @pytest.mark.parametrize("R", [0, -10, 2.5])
    def test_bad_R(self, samples, R):
        x, y = samples
        with pytest.raises(InvalidArgumentError):
            permutation_test(x, y, R, seed=0)

    def test_empty_label(self):
        with pytest.raises(DegenerateStratumError) as info:
            permutation_test([1.0, 2.0], [], 100, labels=("OJ", "VC"), seed=0)
        assert info.value.labels == ("OJ",)

    def test_bad_alternative(self, samples):
        x, y = samples
        with pytest.raises(ValidationError):
            permutation_test(x, y, 100, alternative="both", seed=0)

    def test_few_permutations_noted(self, samples):
        x, y = samples
        sol = permutation_test(x, y, 50, seed=0)
        assert any("permutations" in w for w in sol.warnings)

    def test_summary(self, samples):
        x, y = samples
        text = permutation_test(x, y, 1000, seed=0).summary()
        assert "PERMUTATION TEST" in text
        assert "Tail fraction" in text
