"""
Segment aggregation: total sales grouped by a record field, share of total,
and the monthly sales series.
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from .data_processing import SalesInput, as_sales_frame, canonical_field, parse_dates, to_numeric

logger = logging.getLogger(__name__)


def _label_for(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str) and pd.isna(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def aggregate_by(records: SalesInput, field: str) -> pd.DataFrame:
    """Sum total sales per distinct value of ``field``, largest first.

    ``field`` may be a canonical column or a record key such as
    ``customerType``. Rows with a blank key are skipped. Equal totals keep the
    order in which their labels first appear.
    """
    df = as_sales_frame(records)
    if df.empty:
        return pd.DataFrame(columns=["label", "value"])

    column = field if field in df.columns else canonical_field(field)
    if column is None or column not in df.columns:
        raise ValueError(f"Unknown field for aggregation: {field}")

    labels = df[column].map(_label_for)
    valid = labels.ne("")
    sales = to_numeric(df.loc[valid, "total_sales"])

    grouped = sales.groupby(labels[valid], sort=False).sum()
    result = grouped.rename_axis("label").reset_index(name="value")
    result = result.sort_values("value", ascending=False, kind="stable").reset_index(drop=True)

    logger.info("Aggregated %d records into %d %s segments", int(valid.sum()), len(result), column)
    return result


def add_percentages(aggregated: pd.DataFrame) -> pd.DataFrame:
    """Add each segment's share of the overall total, rounded to one decimal."""
    with_share = aggregated.copy()
    if with_share.empty:
        with_share["percentage"] = pd.Series(dtype=float)
        return with_share

    total = float(with_share["value"].sum())
    if total == 0:
        with_share["percentage"] = 0.0
    else:
        with_share["percentage"] = (with_share["value"] / total * 100).round(1)
    return with_share


def monthly_sales(records: SalesInput) -> pd.DataFrame:
    df = as_sales_frame(records)
    if df.empty:
        return pd.DataFrame(columns=["month", "sales"])

    dates = parse_dates(df["date"])
    valid = dates.notna()
    months = dates[valid].dt.strftime("%Y-%m")
    grouped = to_numeric(df.loc[valid, "total_sales"]).groupby(months).sum().sort_index()
    return grouped.rename_axis("month").reset_index(name="sales")
