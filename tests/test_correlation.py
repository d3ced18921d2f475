"""Tests for the pairwise correlation matrix."""

import numpy as np
import pytest

from eda_backend.services.correlation import compute_correlations, pearson


def _rows(**columns):
    length = len(next(iter(columns.values())))
    return [{name: values[i] for name, values in columns.items()} for i in range(length)]


def test_perfect_negative_correlation():
    assert pearson([1.0, 2.0, 3.0, 4.0], [4.0, 3.0, 2.0, 1.0]) == -1.0


def test_perfect_positive_correlation():
    assert pearson([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)


def test_fewer_than_two_values_gives_zero():
    assert pearson([1.0], [2.0]) == 0.0
    assert pearson([], [1.0, 2.0]) == 0.0


def test_zero_variance_gives_zero():
    assert pearson([5.0, 5.0, 5.0], [1.0, 2.0, 3.0]) == 0.0


def test_truncates_to_shorter_column():
    """Only the first min(len) values of each side are paired."""
    assert pearson([1.0, 2.0, 3.0, 100.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)


def test_matrix_is_full_and_symmetric():
    rows = _rows(
        a=[1.0, 2.0, 3.0, 4.0, 5.0],
        b=[2.0, 1.0, 4.0, 3.0, 6.0],
        c=[9.0, 7.0, 8.0, 1.0, 2.0],
    )
    matrix = compute_correlations(rows, ["a", "b", "c"])

    assert list(matrix) == ["a", "b", "c"]
    for col1 in matrix:
        assert list(matrix[col1]) == ["a", "b", "c"]
        assert matrix[col1][col1] == 1.0
        for col2 in matrix:
            assert matrix[col1][col2] == matrix[col2][col1]
            assert -1.0 <= matrix[col1][col2] <= 1.0


def test_diagonal_is_one_for_constant_column():
    rows = _rows(a=[3.0, 3.0, 3.0], b=[1.0, 2.0, 3.0])
    matrix = compute_correlations(rows, ["a", "b"])
    assert matrix["a"]["a"] == 1.0
    assert matrix["a"]["b"] == 0.0


def test_nulls_are_dropped_per_column_not_per_row():
    """Values of each column are taken in row order after dropping its own nulls."""
    rows = _rows(
        a=[1.0, None, 2.0, 3.0],
        b=[1.0, 2.0, None, 3.0],
    )
    matrix = compute_correlations(rows, ["a", "b"])
    # a -> [1, 2, 3], b -> [1, 2, 3]
    assert matrix["a"]["b"] == pytest.approx(1.0)


def test_text_values_are_not_correlated():
    rows = _rows(a=[1.0, 2.0, 3.0], b=["x", 2.0, 4.0])
    matrix = compute_correlations(rows, ["a", "b"])
    # a -> [1, 2], b -> [2, 4]
    assert matrix["a"]["b"] == pytest.approx(1.0)


def test_no_numeric_columns():
    assert compute_correlations([{"a": "x"}], []) == {}


def test_pearson_matches_numpy_corrcoef():
    x = [0.3, 1.7, 2.2, 5.9, 4.1, 3.3, 8.8]
    y = [10.1, 7.4, 8.0, 2.5, 3.9, 6.6, 1.2]
    expected = np.corrcoef(x, y)[0, 1]
    assert pearson(x, y) == pytest.approx(expected)
    assert pearson(x, y) == pearson(y, x)


def test_pearson_accepts_arrays():
    assert pearson(np.array([1.0, 2.0, 3.0]), (3.0, 2.0, 1.0)) == pytest.approx(-1.0)
