"""Tests for the paginated row preview."""

import pytest

from eda_backend.services.preview import paginate_rows


def _rows(n):
    return [{"i": float(i)} for i in range(n)]


def test_first_page():
    page = paginate_rows(_rows(25), 0, per_page=10)
    assert page.total_pages == 3
    assert page.total_rows == 25
    assert [r["i"] for r in page.rows] == [float(i) for i in range(10)]


def test_last_page_is_partial():
    page = paginate_rows(_rows(25), 2, per_page=10)
    assert len(page.rows) == 5


def test_out_of_range_page_is_clamped():
    assert paginate_rows(_rows(25), 99, per_page=10).page == 2
    assert paginate_rows(_rows(25), -3, per_page=10).page == 0


def test_empty_rows():
    page = paginate_rows([], 4)
    assert page.page == 0
    assert page.total_pages == 0
    assert page.rows == []


def test_per_page_must_be_positive():
    with pytest.raises(ValueError):
        paginate_rows(_rows(3), 0, per_page=0)
