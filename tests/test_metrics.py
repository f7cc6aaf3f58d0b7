"""
Tests for overview KPIs and import statistics
"""

import pytest

from salesboard.metrics import compute_kpis, summarize_dataset


class TestComputeKpis:
    """Overview cards."""

    def test_kpis(self, dated_records):
        kpis = compute_kpis(dated_records)

        assert kpis["total_sales"] == 800.0
        assert kpis["records"] == 5
        assert kpis["average_order_value"] == pytest.approx(160.0)
        # blank region counts as its own value
        assert kpis["unique_regions"] == 4
        assert kpis["unique_products"] == 0

    def test_empty_input(self):
        kpis = compute_kpis(None)

        assert kpis["total_sales"] == 0.0
        assert kpis["average_order_value"] == 0.0
        assert kpis["records"] == 0


class TestSummarizeDataset:
    """Statistics shown after an import."""

    def test_counts_missing_and_outliers(self):
        records = [
            {"date": "2020-01-01", "product": "A", "category": "C", "region": "R", "customer_type": "T",
             "quantity": 10, "unit_price": 5}
            for _ in range(20)
        ]
        records[3]["region"] = ""
        records[7]["product"] = None
        records[11]["quantity"] = 1000
        records[19]["date"] = "2023-06-01"

        stats = summarize_dataset(records)

        assert stats["total_records"] == 20
        assert stats["missing_values"] == 2
        assert stats["outliers"] == 1
        # 100 - (2 + 1) / 20 * 100
        assert stats["data_quality"] == 85.0
        assert stats["data_coverage"] == "3 years"

    @pytest.mark.parametrize(
        "dates, label",
        [
            (["2021-01-01", "2021-12-31"], "< 1 year"),
            (["2021-06-01", "2022-01-01"], "1 year"),
            (["not a date"], "< 1 year"),
        ],
    )
    def test_coverage_label(self, dates, label):
        records = [{"date": date, "quantity": 1, "unit_price": 1} for date in dates]

        assert summarize_dataset(records)["data_coverage"] == label

    def test_clean_dataset_has_full_quality(self, sample_sales):
        assert summarize_dataset(sample_sales.head(10))["data_quality"] == 100.0

    def test_quality_is_floored_at_zero(self):
        records = [{"product": "", "quantity": 1, "unit_price": 1} for _ in range(10)]
        records.append({"product": "", "quantity": 100, "unit_price": 1})

        # 11 blank rows plus one outlier
        assert summarize_dataset(records)["data_quality"] == 0.0

    def test_empty_input(self):
        stats = summarize_dataset([])

        assert stats["total_records"] == 0
        assert stats["data_quality"] == 0.0
