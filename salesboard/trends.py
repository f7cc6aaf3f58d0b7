"""
Temporal views over sales records: year-over-year growth and quarterly
seasonality.

Dates are read as local calendar dates. Records whose date cannot be parsed
are left out of every view.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pandas as pd

from .config import QUARTERS
from .data_processing import SalesInput, as_sales_frame, parse_dates, to_numeric

logger = logging.getLogger(__name__)


def _dated_sales(records: SalesInput) -> tuple[pd.Series, pd.Series]:
    df = as_sales_frame(records)
    dates = parse_dates(df["date"])
    valid = dates.notna()

    dropped = int((~valid).sum())
    if dropped:
        logger.warning("Ignoring %d records with an unreadable date", dropped)

    return dates[valid], to_numeric(df.loc[valid, "total_sales"])


def _quarter_for(dates: pd.Series) -> pd.Series:
    return (dates.dt.month - 1).floordiv(3).map(lambda index: QUARTERS[index])


def _safe_growth(current: float, previous: float) -> float:
    if previous == 0:
        return np.nan
    return round((current - previous) / previous * 100, 2)


def calculate_yoy_growth(records: SalesInput) -> pd.DataFrame:
    """Total sales per calendar year with growth against the year before.

    The first year's growth is 0. A year following a zero-sales year has NaN
    growth since the percentage change is undefined.
    """
    columns = ["year", "sales", "growth"]
    dates, sales = _dated_sales(records)
    if dates.empty:
        return pd.DataFrame(columns=columns)

    yearly = sales.groupby(dates.dt.year).sum().sort_index()

    rows: list[dict[str, Any]] = []
    previous_sales: float | None = None
    for year, year_sales in yearly.items():
        growth = 0.0 if previous_sales is None else _safe_growth(float(year_sales), previous_sales)
        rows.append({"year": int(year), "sales": float(year_sales), "growth": growth})
        previous_sales = float(year_sales)

    return pd.DataFrame(rows, columns=columns)


def detect_seasonality(records: SalesInput) -> pd.DataFrame:
    """Average sales per record for each calendar quarter, pooled across years.

    Always returns the four quarters for non-empty input; a quarter without
    records averages 0.
    """
    columns = ["quarter", "average_sales"]
    df = as_sales_frame(records)
    if df.empty:
        return pd.DataFrame(columns=columns)

    dates, sales = _dated_sales(df)
    averages = sales.groupby(_quarter_for(dates)).mean()

    return pd.DataFrame(
        {
            "quarter": QUARTERS,
            "average_sales": [round(float(averages.get(quarter, 0.0)), 2) for quarter in QUARTERS],
        },
        columns=columns,
    )


def seasonal_sales(records: SalesInput) -> pd.DataFrame:
    """Total sales per quarter and year, ordered by year then quarter."""
    columns = ["quarter", "year", "sales"]
    dates, sales = _dated_sales(records)
    if dates.empty:
        return pd.DataFrame(columns=columns)

    frame = pd.DataFrame({"year": dates.dt.year.astype(int), "quarter": _quarter_for(dates), "sales": sales})
    grouped = frame.groupby(["year", "quarter"], as_index=False)["sales"].sum()
    grouped = grouped.sort_values(["year", "quarter"]).reset_index(drop=True)
    return grouped[columns]


def summarize_trends(growth: pd.DataFrame, seasonal: pd.DataFrame) -> dict[str, Any]:
    """Headline numbers for the trend panel.

    Parameters
    ----------
    growth : Output of calculate_yoy_growth().
    seasonal : Output of seasonal_sales().

    Returns
    -------
    Dict with latest_growth, average_growth, highest_quarter, lowest_quarter
    and seasonality_strength. Quarter strength compares the mean of each
    quarter's yearly totals; quarter keys are None without seasonal data.
    """
    latest_growth = 0.0
    average_growth = 0.0
    if len(growth) > 1:
        latest_growth = float(growth["growth"].iloc[-1])
        later_years = growth["growth"].iloc[1:].dropna()
        average_growth = float(later_years.mean()) if not later_years.empty else np.nan

    summary: dict[str, Any] = {
        "latest_growth": latest_growth,
        "average_growth": average_growth,
        "highest_quarter": None,
        "lowest_quarter": None,
        "seasonality_strength": 0.0,
    }
    if seasonal.empty:
        return summary

    quarter_means = seasonal.groupby("quarter")["sales"].mean().sort_index()
    # idxmax/idxmin return the first quarter on ties
    highest = quarter_means.idxmax()
    lowest = quarter_means.idxmin()
    high_value = float(quarter_means[highest])
    low_value = float(quarter_means[lowest])

    midpoint = (high_value + low_value) / 2
    summary["highest_quarter"] = {"quarter": highest, "average_sales": high_value}
    summary["lowest_quarter"] = {"quarter": lowest, "average_sales": low_value}
    summary["seasonality_strength"] = (high_value - low_value) / midpoint * 100 if midpoint else 0.0
    return summary
