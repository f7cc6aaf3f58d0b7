from __future__ import annotations

from typing import Any

import pandas as pd

from .config import CATEGORICAL_FIELDS, NUMERIC_FIELDS
from .data_processing import SalesInput, as_sales_frame, blank_mask, find_outliers, parse_dates, to_numeric


def compute_kpis(records: SalesInput) -> dict[str, Any]:
    """Compute the overview cards: total sales, average order and distinct counts."""
    df = as_sales_frame(records)

    total_sales = float(to_numeric(df["total_sales"]).sum()) if not df.empty else 0.0
    record_count = int(len(df))
    average_order = float(total_sales / record_count) if record_count > 0 else 0.0

    return {
        "total_sales": total_sales,
        "records": record_count,
        "average_order_value": average_order,
        "unique_products": int(df["product"].nunique(dropna=True)),
        "unique_regions": int(df["region"].nunique(dropna=True)),
    }


def _coverage_label(dates: pd.Series) -> str:
    valid = dates.dropna()
    if valid.empty:
        return "< 1 year"
    years = int(valid.max().year - valid.min().year)
    if years <= 0:
        return "< 1 year"
    return f"{years} year{'s' if years > 1 else ''}"


def summarize_dataset(records: SalesInput) -> dict[str, Any]:
    """Describe an imported dataset before cleaning."""
    df = as_sales_frame(records)
    if df.empty:
        return {
            "total_records": 0,
            "missing_values": 0,
            "outliers": 0,
            "data_quality": 0.0,
            "data_coverage": "< 1 year",
        }

    missing = pd.Series(False, index=df.index)
    for column in CATEGORICAL_FIELDS:
        missing |= blank_mask(df[column])

    outliers = pd.Series(False, index=df.index)
    for column in NUMERIC_FIELDS:
        outliers |= find_outliers(to_numeric(df[column]))

    total = int(len(df))
    flagged = int(missing.sum()) + int(outliers.sum())
    return {
        "total_records": total,
        "missing_values": int(missing.sum()),
        "outliers": int(outliers.sum()),
        # a row both blank and outlying counts twice
        "data_quality": round(max(0.0, 100 - flagged / total * 100), 1),
        "data_coverage": _coverage_label(parse_dates(df["date"])),
    }
