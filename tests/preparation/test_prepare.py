"""
Tests for prepare(): column layouts, complete-case filtering, encoding.
"""

import numpy as np
import pytest

from pyols.core.exceptions import MissingVariableError, ShapeError, ValidationError
from pyols.preparation import Categorical, Numeric, as_columns, prepare


# ═══════════════════════════════════════════════════════════════════════
# Accepted predictor layouts
# ═══════════════════════════════════════════════════════════════════════


class TestAsColumns:

    def test_2d_array(self):
        cols = as_columns(np.zeros((4, 3)))
        assert [c.name for c in cols] == ['x1', 'x2', 'x3']
        assert all(isinstance(c, Numeric) for c in cols)

    def test_mapping(self):
        cols = as_columns({'price': [1, 2], 'qty': [3, 4]})
        assert [c.name for c in cols] == ['price', 'qty']

    def test_dataframe(self):
        pd = pytest.importorskip("pandas")
        cols = as_columns(pd.DataFrame({'price': [1.0, 2.0], 'qty': [3.0, 4.0]}))
        assert [c.name for c in cols] == ['price', 'qty']
        assert all(isinstance(c, Numeric) for c in cols)

    def test_flat_sequence_is_one_predictor(self):
        cols = as_columns([1.0, 2.0, None])
        assert len(cols) == 1
        assert cols[0].name == 'x1'

    def test_sequence_of_columns(self):
        cols = as_columns([[1, 2], Categorical('g', ['a', 'b'])])
        assert isinstance(cols[0], Numeric) and cols[0].name == 'x1'
        assert isinstance(cols[1], Categorical)

    def test_single_tagged_column(self):
        cols = as_columns(Categorical('g', ['a', 'b']))
        assert len(cols) == 1

    @pytest.mark.parametrize("X", [None, [], {}])
    def test_no_predictors(self, X):
        with pytest.raises(MissingVariableError):
            as_columns(X)

    def test_duplicate_names(self):
        with pytest.raises(ValidationError, match="Duplicate"):
            as_columns([Numeric('a', [1]), Numeric('a', [2])])


# ═══════════════════════════════════════════════════════════════════════
# Complete-case filtering
# ═══════════════════════════════════════════════════════════════════════


class TestCompleteCases:

    def test_n_is_fully_observed_count(self, spreadsheet_columns):
        cols = spreadsheet_columns
        prepared = prepare(
            Numeric('sales', cols['sales']),
            [Numeric('price', cols['price']), Categorical('region', cols['region'])],
        )
        assert prepared.n_total == 9
        assert prepared.n == 6
        assert prepared.n_dropped == 3
        np.testing.assert_array_equal(prepared.rows, [0, 1, 3, 5, 6, 7])

    def test_column_order_numeric_then_dummies(self, spreadsheet_columns):
        cols = spreadsheet_columns
        prepared = prepare(
            Numeric('sales', cols['sales']),
            [Categorical('region', cols['region']), Numeric('price', cols['price'])],
        )
        assert prepared.column_names == ('price', 'region_S', 'region_E')
        assert prepared.response_name == 'sales'
        assert prepared.numeric_names == ('price',)
        assert prepared.categorical_names == ('region',)

    def test_values_aligned_after_filtering(self):
        prepared = prepare([1.0, None, 3.0, 4.0], [[10.0, 20.0, np.nan, 40.0]])
        np.testing.assert_array_equal(prepared.y, [1.0, 4.0])
        np.testing.assert_array_equal(prepared.X, [[10.0], [40.0]])

    def test_empty_indicator_dropped_with_warning(self):
        y = [1.0, 2.0, None, 4.0, 5.0, 6.0]
        g = ['a', 'b', 'c', 'a', 'b', 'a']
        with pytest.warns(UserWarning, match="region_c"):
            prepared = prepare(y, [Numeric('x', [1, 2, 3, 4, 5, 7]), Categorical('region', g)])
        assert prepared.column_names == ('x', 'region_b')
        assert len(prepared.warnings) == 1

    def test_single_level_contributes_nothing(self):
        prepared = prepare([1, 2, 3], [Numeric('x', [1, 2, 4]), Categorical('g', ['a'] * 3)])
        assert prepared.column_names == ('x',)
        assert prepared.encodings[0].X.shape == (3, 0)


# ═══════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════


class TestPrepareErrors:

    def test_no_response(self):
        with pytest.raises(MissingVariableError, match="response"):
            prepare(None, [[1, 2, 3]])

    def test_empty_response(self):
        with pytest.raises(MissingVariableError):
            prepare([], [[]])

    def test_categorical_response(self):
        with pytest.raises(ValidationError, match="categorical"):
            prepare(Categorical('y', ['a', 'b']), [[1, 2]])

    def test_length_mismatch(self):
        with pytest.raises(ShapeError):
            prepare([1, 2, 3], [Numeric('x', [1, 2])])

    def test_response_matrix_rejected(self):
        with pytest.raises(ShapeError, match="single column") as exc_info:
            prepare(np.ones((4, 2)), [Numeric('x', [1, 2, 3, 4])])
        assert exc_info.value.left_shape == (4, 2)

    def test_column_vector_response_raveled(self):
        prepared = prepare(np.arange(4.0).reshape(-1, 1), [Numeric('x', [1, 2, 3, 5])])
        assert prepared.y.shape == (4,)
        np.testing.assert_array_equal(prepared.y, [0.0, 1.0, 2.0, 3.0])
