"""Pytest fixtures shared by the test suite."""

import pytest
from fastapi.testclient import TestClient

from eda_backend.main import app


@pytest.fixture
def scenario_records() -> list:
    """Three rows: one numeric column and one categorical column."""
    return [
        {"a": "1", "b": "x"},
        {"a": "2", "b": "y"},
        {"a": "3", "b": "x"},
    ]


@pytest.fixture
def mixed_records() -> list:
    """Rows with nulls, text outliers and an all-empty column."""
    return [
        {"id": "1", "price": "10.5", "city": "Lahore", "qty": "3", "empty": ""},
        {"id": "2", "price": "", "city": "Karachi", "qty": "1", "empty": ""},
        {"id": "3", "price": "12", "city": "Lahore", "qty": "n/a", "empty": ""},
        {"id": "4", "price": "9.25", "city": "", "qty": "4", "empty": ""},
        {"id": "5", "price": "11", "city": "Karachi", "qty": "2", "empty": ""},
        {"id": "6", "price": "10", "city": "Quetta", "qty": "5", "empty": ""},
    ]


@pytest.fixture
def sample_csv() -> bytes:
    return b"id,name,value,score\n1,Alice,100,4\n2,Bob,200,3\n3,Carol,300,2\n4,Dan,,1\n"


@pytest.fixture
def client():
    """FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client
