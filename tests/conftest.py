"""
Pytest fixtures for sales pipeline tests
"""

import pytest

from salesboard.sample_data import add_data_anomalies, generate_sample_data


@pytest.fixture
def sample_sales():
    """Small, clean synthetic dataset."""
    return generate_sample_data(count=200, seed=1)


@pytest.fixture
def anomalous_sales(sample_sales):
    """Synthetic dataset with blank categories and inflated quantities."""
    return add_data_anomalies(sample_sales, missing_count=30, outlier_count=5, seed=3)


@pytest.fixture
def dated_records():
    """Hand-built records spanning three years and several quarters."""
    return [
        {"id": "S-1", "date": "2021-02-10", "region": "Europe", "total_sales": 100.0},
        {"id": "S-2", "date": "2021-08-05", "region": "Asia Pacific", "total_sales": 200.0},
        {"id": "S-3", "date": "2022-03-15", "region": "Europe", "total_sales": 300.0},
        {"id": "S-4", "date": "2022-11-20", "region": "North America", "total_sales": 150.0},
        {"id": "S-5", "date": "2023-05-01", "region": "", "total_sales": 50.0},
    ]
