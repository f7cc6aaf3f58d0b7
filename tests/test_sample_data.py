"""
Tests for synthetic sales generation
"""

import numpy as np
import pandas as pd
import pytest

from salesboard.config import CATEGORICAL_FIELDS, SALES_COLUMNS
from salesboard.sample_data import add_data_anomalies, generate_sample_data


class TestGenerateSampleData:
    """Seeded record factory."""

    def test_same_seed_same_data(self):
        pd.testing.assert_frame_equal(generate_sample_data(50, seed=9), generate_sample_data(50, seed=9))

    def test_different_seeds_differ(self):
        assert not generate_sample_data(50, seed=1).equals(generate_sample_data(50, seed=2))

    def test_shared_generator_advances(self):
        rng = np.random.default_rng(0)

        first = generate_sample_data(20, rng=rng)
        second = generate_sample_data(20, rng=rng)

        assert not first.equals(second)

    def test_schema_and_ranges(self, sample_sales):
        assert list(sample_sales.columns) == SALES_COLUMNS
        assert len(sample_sales) == 200
        assert sample_sales["id"].iloc[0] == "SALE-01000"
        assert sample_sales["id"].is_unique
        assert sample_sales["quantity"].between(1, 20).all()
        assert sample_sales["unit_price"].between(100, 1099).all()
        assert (sample_sales["total_sales"] == sample_sales["quantity"] * sample_sales["unit_price"]).all()

        dates = pd.to_datetime(sample_sales["date"])
        assert dates.min() >= pd.Timestamp("2020-01-01")
        assert dates.max() <= pd.Timestamp("2023-12-31")

    @pytest.mark.parametrize("count", [0, -5])
    def test_non_positive_count_raises(self, count):
        with pytest.raises(ValueError, match="greater than zero"):
            generate_sample_data(count)


class TestAddDataAnomalies:
    """Anomaly injection for demos."""

    def test_blanks_and_inflated_quantities(self, sample_sales, anomalous_sales):
        blanks = sum(int((anomalous_sales[column] == "").sum()) for column in CATEGORICAL_FIELDS)

        assert blanks > 0
        assert (anomalous_sales["quantity"] >= 500).any()
        assert len(anomalous_sales) == len(sample_sales)

    def test_source_frame_untouched(self, sample_sales):
        before = sample_sales.copy()

        add_data_anomalies(sample_sales)

        pd.testing.assert_frame_equal(sample_sales, before)

    def test_empty_frame(self):
        assert add_data_anomalies(pd.DataFrame(columns=SALES_COLUMNS)).empty
