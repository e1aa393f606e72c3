"""
Tests for GroupedData construction, ordering and access.
"""

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_allclose

from montestats.core.exceptions import ValidationError
from montestats.core.grouping import GroupedData


class TestFromFrame:

    def test_tooth_keys_in_level_order(self, tooth):
        assert tooth.keys() == (
            ('OJ', 0.5), ('OJ', 1.0), ('OJ', 2.0),
            ('VC', 0.5), ('VC', 1.0), ('VC', 2.0),
        )
        assert tooth.factors == ('supp', 'dose')
        assert tooth.response == 'len'
        assert tooth.n_observations == 60

    def test_categorical_order_respected(self, tooth):
        # categories (OJ, VC) even though the rows list VC first
        assert tooth.levels('supp') == ('OJ', 'VC')
        assert tooth.levels(1) == (0.5, 1.0, 2.0)

    def test_group_means(self, tooth):
        assert np.mean(tooth[('OJ', 0.5)]) == pytest.approx(13.23)
        assert np.mean(tooth[('VC', 2.0)]) == pytest.approx(26.14)

    def test_explicit_levels(self, tooth_frame):
        data = GroupedData.from_frame(
            tooth_frame, response='len', factors=('supp', 'dose'),
            levels=(('VC', 'OJ'), (2.0, 0.5)),
        )
        assert data.keys() == (('VC', 2.0), ('VC', 0.5), ('OJ', 2.0), ('OJ', 0.5))

    def test_missing_column(self, tooth_frame):
        with pytest.raises(ValidationError, match="no column"):
            GroupedData.from_frame(tooth_frame, response='length', factors=('supp', 'dose'))

    def test_plain_string_column_sorted(self):
        df = pd.DataFrame({
            'y': [1.0, 2.0, 3.0, 4.0],
            'g': ['b', 'a', 'b', 'a'],
            'h': [1, 1, 1, 1],
        })
        data = GroupedData.from_frame(df, response='y', factors=('g', 'h'))
        assert data.keys() == (('a', 1), ('b', 1))
        assert_allclose(data[('a', 1)], [2.0, 4.0])


class TestFromMapping:

    def test_sorted_default_levels(self):
        data = GroupedData.from_mapping({('B', 2): [1, 2], ('A', 1): [3, 4]})
        assert data.levels(0) == ('A', 'B')
        assert data.keys() == (('A', 1), ('B', 2))

    def test_numpy_scalar_keys(self):
        data = GroupedData.from_mapping({(np.str_('A'), np.float64(0.5)): [1.0, 2.0]})
        assert ('A', 0.5) in data
        assert type(data.keys()[0][1]) is float

    def test_arrays_read_only(self, two_by_three):
        with pytest.raises(ValueError):
            two_by_three[('A', 1)][0] = 0.0

    def test_source_not_aliased(self):
        values = np.array([1.0, 2.0])
        data = GroupedData.from_mapping({('A', 1): values})
        values[0] = 99.0
        assert data[('A', 1)][0] == 1.0

    def test_bad_key(self):
        with pytest.raises(ValidationError):
            GroupedData.from_mapping({'A': [1.0]})

    def test_empty(self):
        with pytest.raises(ValidationError):
            GroupedData.from_mapping({})

    def test_non_finite(self):
        with pytest.raises(ValidationError):
            GroupedData.from_mapping({('A', 1): [1.0, np.nan]})

    def test_key_outside_levels(self):
        with pytest.raises(ValidationError):
            GroupedData.from_mapping({('A', 1): [1.0]}, levels=(('B',), (1,)))


class TestAccess:

    def test_missing_group_lists_keys(self, two_by_three):
        with pytest.raises(KeyError, match="Available"):
            two_by_three[('C', 1)]

    def test_iteration(self, two_by_three):
        assert list(two_by_three) == list(two_by_three.keys())
        assert len(two_by_three) == 6
        assert [k for k, _ in two_by_three.items()] == list(two_by_three.keys())

    def test_select(self, tooth):
        at_half = tooth.select('dose', 0.5)
        assert list(at_half) == ['OJ', 'VC']
        assert np.mean(at_half['VC']) == pytest.approx(7.98)

    def test_unknown_factor(self, tooth):
        with pytest.raises(ValidationError):
            tooth.factor_index('method')

    def test_describe(self, tooth):
        df = tooth.describe()
        assert list(df.columns) == ['supp', 'dose', 'n', 'mean', 'sd']
        assert len(df) == 6
        assert (df['n'] == 10).all()
        assert_allclose(
            df['mean'], [13.23, 22.70, 26.06, 7.98, 16.77, 26.14], atol=1e-10,
        )
        assert df['sd'].iloc[0] == pytest.approx(np.std(tooth[('OJ', 0.5)], ddof=1))
