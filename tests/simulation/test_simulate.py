"""
Tests for simulate_means() and convergence_study().

Reference model: Exponential(rate=0.2), n = 40, so the mean of a sample
has limiting mean 5.0 and variance 0.625.
"""

import warnings

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from montestats.core.exceptions import (
    InvalidArgumentError,
    UndefinedStatisticError,
    ValidationError,
)
from montestats.core.random_source import RandomSource
from montestats.simulation import convergence_study, simulate_means


class TestSimulateMeans:

    def test_shapes_and_metadata(self):
        sol = simulate_means(0.2, 40, 500, seed=1)
        assert sol.trial_means.shape == (500,)
        assert sol.n_trials == 500
        assert sol.sample_size == 40
        assert sol.backend_name == 'cpu_simulation'
        assert sol.info['rate'] == pytest.approx(0.2)
        assert sol.seed == 1
        assert set(sol.timing) >= {'draw_samples', 'summary_statistics'}
        assert sol.warnings == ()

    def test_moments_near_clt(self):
        sol = simulate_means(0.2, 40, 10_000, seed=1)
        assert sol.mean == pytest.approx(5.0, abs=0.05)
        assert sol.variance == pytest.approx(0.625, abs=0.05)
        assert sol.asymptotic_mean == pytest.approx(5.0)
        assert sol.asymptotic_variance == pytest.approx(0.625)

    def test_moments_match_trial_means(self):
        sol = simulate_means(0.2, 40, 300, seed=7)
        assert sol.mean == pytest.approx(np.mean(sol.trial_means))
        assert sol.variance == pytest.approx(np.var(sol.trial_means, ddof=1))

    def test_seed_determinism(self):
        a = simulate_means(0.2, 40, 1000, seed=42)
        b = simulate_means(0.2, 40, 1000, seed=42)
        assert_array_equal(a.trial_means, b.trial_means)
        assert a.variance == b.variance

    def test_shared_source_advances(self):
        source = RandomSource(42)
        a = simulate_means(0.2, 40, 100, seed=source)
        b = simulate_means(0.2, 40, 100, seed=source)
        assert not np.allclose(a.trial_means, b.trial_means)

    def test_chunked_draw(self):
        sol = simulate_means(0.2, 40, 100, seed=3, chunk_size=7)
        assert sol.trial_means.shape == (100,)
        assert np.all(np.isfinite(sol.trial_means))

    def test_normality(self):
        check = simulate_means(0.2, 40, 10_000, seed=11).normality()
        assert 0.0 <= check.statistic < 0.05
        assert 0.0 <= check.p_value <= 1.0

    def test_conf_int_brackets_mean(self):
        sol = simulate_means(0.2, 40, 2000, seed=5)
        lo, hi = sol.conf_int()
        assert lo < sol.mean < hi
        assert hi - lo == pytest.approx(2 * 1.959964 * sol.standard_error, rel=1e-5)

    def test_to_frame(self):
        df = simulate_means(0.2, 40, 200, seed=2).to_frame()
        assert list(df.index) == ['simulated', 'asymptotic']
        assert list(df.columns) == ['mean', 'variance']
        assert df.loc['asymptotic', 'variance'] == pytest.approx(0.625)

    def test_summary(self):
        text = simulate_means(0.2, 40, 200, seed=2).summary()
        assert "SAMPLE MEAN SIMULATION" in text
        assert "asymptotic" in text


class TestSingleTrial:

    def test_variance_is_undefined(self):
        sol = simulate_means(0.2, 40, 1, seed=0)
        assert np.isnan(sol.variance_estimate)
        assert sol.warnings
        with pytest.raises(UndefinedStatisticError):
            sol.variance

    def test_warning_records_undefined_variance(self):
        sol = simulate_means(0.2, 40, 1, seed=0)
        assert sol.warnings == (
            "variance of trial means: variance is undefined for 1 value(s), "
            "need at least 2",
        )
        assert sol.mean == pytest.approx(sol.trial_means[0])

    def test_summary_still_renders(self):
        sol = simulate_means(0.2, 40, 1, seed=0)
        assert "nan" in sol.summary()


class TestValidation:

    @pytest.mark.parametrize("kwargs", [
        dict(rate=0.0),
        dict(rate=-1.0),
        dict(sample_size=0),
        dict(n_trials=0),
        dict(n_trials=-5),
        dict(chunk_size=0),
    ])
    def test_rejects_non_positive(self, kwargs):
        with pytest.raises(InvalidArgumentError):
            simulate_means(**kwargs, seed=0)

    def test_unknown_backend(self):
        with pytest.raises(ValidationError, match="Unknown backend"):
            simulate_means(n_trials=10, seed=0, backend='gpu')


class TestConvergenceStudy:

    def test_one_run_per_count(self):
        study = convergence_study((100, 1000), seed=0)
        assert study.trial_counts == (100, 1000)
        df = study.to_frame()
        assert list(df.index) == [100, 1000]
        assert {'mean', 'variance', 'mean_error', 'variance_error'} <= set(df.columns)

    def test_reproducible(self):
        a = convergence_study((100, 200), seed=4).to_frame()
        b = convergence_study((100, 200), seed=4).to_frame()
        assert a.equals(b)

    def test_error_shrinks_with_trials(self):
        # mean absolute errors over seeds, for T = 1e3, 1e4, 1e5, 1e6
        errors = []
        for seed in range(3):
            study = convergence_study(
                (1_000, 10_000, 100_000, 1_000_000), seed=seed,
            )
            errors.append([(s.mean_error, s.variance_error) for s in study.solutions])
        errors = np.mean(errors, axis=0)
        t1e3, t1e4, t1e5, t1e6 = errors
        for col in (0, 1):
            assert t1e5[col] < t1e3[col]
            assert t1e6[col] < t1e4[col]
            assert t1e6[col] < t1e3[col]
        final = study.solutions[-1]
        assert final.n_trials == 1_000_000
        assert final.mean == pytest.approx(5.0, abs=0.01)
        assert final.variance == pytest.approx(0.625, abs=0.01)

    def test_empty_counts(self):
        with pytest.raises(ValidationError):
            convergence_study(())

    def test_summary(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            text = convergence_study((10, 20), seed=0).summary()
        assert "CONVERGENCE STUDY" in text
