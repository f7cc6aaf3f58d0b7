from __future__ import annotations

import numpy as np
import pandas as pd

from .config import (
    ANOMALY_QUANTITY_RANGE,
    CATEGORICAL_FIELDS,
    RECORD_ID_OFFSET,
    RECORD_ID_PREFIX,
    SALES_COLUMNS,
    SAMPLE_CATEGORIES,
    SAMPLE_CUSTOMER_TYPES,
    SAMPLE_END_DATE,
    SAMPLE_PRODUCTS,
    SAMPLE_QUANTITY_RANGE,
    SAMPLE_REGIONS,
    SAMPLE_START_DATE,
    SAMPLE_UNIT_PRICE_RANGE,
)


def _resolve_rng(seed: int | None, rng: np.random.Generator | None) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng(seed)


def generate_sample_data(
    count: int = 1000,
    seed: int | None = 42,
    rng: np.random.Generator | None = None,
) -> pd.DataFrame:
    """Generate synthetic sales records for demos and tests.

    Pass ``seed=None`` for a fresh random sample, or an existing ``rng`` to
    share a random stream with the caller.
    """
    if count <= 0:
        raise ValueError("count must be greater than zero.")

    generator = _resolve_rng(seed, rng)
    start_date = pd.Timestamp(SAMPLE_START_DATE)
    span_days = (pd.Timestamp(SAMPLE_END_DATE) - start_date).days

    rows: list[dict[str, object]] = []
    for index in range(count):
        quantity = int(generator.integers(SAMPLE_QUANTITY_RANGE[0], SAMPLE_QUANTITY_RANGE[1] + 1))
        unit_price = int(generator.integers(SAMPLE_UNIT_PRICE_RANGE[0], SAMPLE_UNIT_PRICE_RANGE[1] + 1))
        sale_date = start_date + pd.Timedelta(days=int(generator.integers(0, span_days + 1)))

        rows.append(
            {
                "id": f"{RECORD_ID_PREFIX}{index + RECORD_ID_OFFSET:05d}",
                "date": sale_date.strftime("%Y-%m-%d"),
                "product": str(generator.choice(SAMPLE_PRODUCTS)),
                "category": str(generator.choice(SAMPLE_CATEGORIES)),
                "region": str(generator.choice(SAMPLE_REGIONS)),
                "customer_type": str(generator.choice(SAMPLE_CUSTOMER_TYPES)),
                "quantity": quantity,
                "unit_price": unit_price,
                "total_sales": quantity * unit_price,
            }
        )

    return pd.DataFrame(rows, columns=SALES_COLUMNS)


def add_data_anomalies(
    df: pd.DataFrame,
    missing_count: int = 50,
    outlier_count: int = 10,
    seed: int | None = 7,
    rng: np.random.Generator | None = None,
) -> pd.DataFrame:
    """Return a copy of ``df`` with blanked categorical cells and inflated quantities."""
    modified = df.copy()
    if modified.empty:
        return modified

    generator = _resolve_rng(seed, rng)
    row_count = len(modified)

    for _ in range(missing_count):
        position = int(generator.integers(0, row_count))
        field = str(generator.choice(CATEGORICAL_FIELDS))
        modified.iloc[position, modified.columns.get_loc(field)] = ""

    quantity_column = modified.columns.get_loc("quantity")
    total_column = modified.columns.get_loc("total_sales")
    unit_price_column = modified.columns.get_loc("unit_price")
    for _ in range(outlier_count):
        position = int(generator.integers(0, row_count))
        quantity = int(generator.integers(ANOMALY_QUANTITY_RANGE[0], ANOMALY_QUANTITY_RANGE[1] + 1))
        modified.iloc[position, quantity_column] = quantity
        modified.iloc[position, total_column] = quantity * modified.iloc[position, unit_price_column]

    return modified
