"""
Tests for year-over-year growth and seasonality
"""

import numpy as np
import pytest

from salesboard.trends import calculate_yoy_growth, detect_seasonality, seasonal_sales, summarize_trends


def _records(*pairs):
    return [
        {"id": f"S-{index}", "date": date, "total_sales": sales}
        for index, (date, sales) in enumerate(pairs)
    ]


class TestYoYGrowth:
    """Yearly totals and growth rates."""

    def test_two_year_growth(self):
        result = calculate_yoy_growth(_records(("2021-03-01", 100.0), ("2022-06-01", 150.0)))

        assert list(result["year"]) == [2021, 2022]
        assert list(result["sales"]) == [100.0, 150.0]
        assert list(result["growth"]) == [0.0, 50.0]

    def test_years_sorted_and_first_growth_zero(self, dated_records):
        result = calculate_yoy_growth(list(reversed(dated_records)))

        assert list(result["year"]) == [2021, 2022, 2023]
        assert result["growth"].iloc[0] == 0.0

    def test_growth_rounded_to_two_decimals(self):
        result = calculate_yoy_growth(_records(("2021-01-01", 300.0), ("2022-01-01", 400.0)))

        assert result["growth"].iloc[1] == 33.33

    def test_zero_previous_year_gives_nan(self):
        records = _records(("2020-05-01", 0.0), ("2021-05-01", 100.0), ("2022-05-01", 50.0))

        result = calculate_yoy_growth(records)

        assert np.isnan(result["growth"].iloc[1])
        assert result["growth"].iloc[2] == -50.0

    def test_unreadable_dates_are_ignored(self):
        result = calculate_yoy_growth(_records(("not a date", 999.0), ("2021-01-01", 10.0)))

        assert list(result["year"]) == [2021]
        assert list(result["sales"]) == [10.0]

    def test_empty_input(self):
        result = calculate_yoy_growth(None)

        assert result.empty
        assert list(result.columns) == ["year", "sales", "growth"]


class TestSeasonality:
    """Quarterly averages pooled across years."""

    def test_empty_quarters_average_zero(self):
        result = detect_seasonality(_records(("2021-02-10", 100.0), ("2021-08-05", 200.0)))

        assert list(result["quarter"]) == ["Q1", "Q2", "Q3", "Q4"]
        assert list(result["average_sales"]) == [100.0, 0.0, 200.0, 0.0]

    def test_average_pools_years(self):
        records = _records(("2021-01-15", 100.0), ("2022-03-20", 200.0), ("2022-12-01", 10.0))

        result = detect_seasonality(records).set_index("quarter")

        assert result.loc["Q1", "average_sales"] == 150.0
        assert result.loc["Q4", "average_sales"] == 10.0

    def test_offset_dates_use_wall_clock_month(self):
        result = detect_seasonality(_records(("2021-03-31T23:30:00-05:00", 80.0))).set_index("quarter")

        assert result.loc["Q1", "average_sales"] == 80.0
        assert result.loc["Q2", "average_sales"] == 0.0

    def test_empty_input(self):
        assert detect_seasonality([]).empty


class TestSeasonalSales:
    """Quarter and year totals for charting."""

    def test_sorted_by_year_then_quarter(self):
        records = _records(
            ("2022-08-01", 5.0),
            ("2021-11-01", 7.0),
            ("2021-01-01", 3.0),
            ("2021-01-20", 4.0),
        )

        result = seasonal_sales(records)

        assert list(zip(result["year"], result["quarter"])) == [(2021, "Q1"), (2021, "Q4"), (2022, "Q3")]
        assert list(result["sales"]) == [7.0, 7.0, 5.0]

    def test_empty_input(self):
        assert list(seasonal_sales(None).columns) == ["quarter", "year", "sales"]


class TestSummarizeTrends:
    """Headline numbers for the trend panel."""

    def test_summary_values(self):
        growth = calculate_yoy_growth(
            _records(("2021-01-01", 100.0), ("2022-01-01", 150.0), ("2023-01-01", 135.0))
        )
        seasonal = seasonal_sales(
            _records(("2021-02-01", 100.0), ("2021-07-01", 300.0), ("2022-02-01", 200.0))
        )

        summary = summarize_trends(growth, seasonal)

        assert summary["latest_growth"] == -10.0
        assert summary["average_growth"] == pytest.approx(20.0)
        assert summary["highest_quarter"] == {"quarter": "Q3", "average_sales": 300.0}
        assert summary["lowest_quarter"] == {"quarter": "Q1", "average_sales": 150.0}
        assert summary["seasonality_strength"] == pytest.approx(150.0 / 225.0 * 100)

    def test_single_year_without_seasonal_data(self):
        growth = calculate_yoy_growth(_records(("2021-01-01", 100.0)))

        summary = summarize_trends(growth, seasonal_sales(None))

        assert summary["latest_growth"] == 0.0
        assert summary["average_growth"] == 0.0
        assert summary["highest_quarter"] is None
        assert summary["seasonality_strength"] == 0.0
