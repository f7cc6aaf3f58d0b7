from __future__ import annotations

import io
import logging
import re
import unicodedata
from collections import Counter
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from .config import (
    CATEGORICAL_FIELDS,
    COLUMN_ALIASES,
    NUMERIC_FIELDS,
    OUTLIER_STD_THRESHOLD,
    RECORD_ID_OFFSET,
    RECORD_ID_PREFIX,
    SALES_COLUMNS,
)

logger = logging.getLogger(__name__)

SalesInput = pd.DataFrame | Iterable[Mapping[str, Any]] | None

_NUMBER_NOISE = re.compile(r"[^\d,.\-]")
_COMMA_GROUPED = re.compile(r"-?\d{1,3}(,\d{3})+")
_DOT_GROUPED = re.compile(r"-?\d{1,3}(\.\d{3})+")


def _normalize_column_name(name: Any) -> str:
    text = unicodedata.normalize("NFKD", str(name)).encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^0-9A-Za-z]+", "_", text.strip().lower())
    return re.sub(r"_+", "_", text).strip("_")


def _deduplicate_column_names(columns: list[str]) -> list[str]:
    counts: Counter[str] = Counter()
    unique: list[str] = []
    for column in columns:
        base = column or "col"
        counts[base] += 1
        unique.append(base if counts[base] == 1 else f"{base}_{counts[base]}")
    return unique


def _alias_candidates(canonical: str) -> list[str]:
    # canonical name first, then aliases in declared order
    return [_normalize_column_name(alias) for alias in [canonical, *COLUMN_ALIASES.get(canonical, [])]]


def canonical_field(name: str) -> str | None:
    """Canonical column for a header or record key such as ``customerType``."""
    normalized = _normalize_column_name(name)
    for canonical in COLUMN_ALIASES:
        if normalized in _alias_candidates(canonical):
            return canonical
    return None


def read_uploaded_file(file_bytes: bytes, filename: str) -> pd.DataFrame:
    """Read CSV, JSON or XLSX from uploaded file bytes."""
    extension = Path(filename).suffix.lower()
    buffer = io.BytesIO(file_bytes)

    if extension == ".csv":
        last_error: Exception | None = None
        for encoding in ("utf-8-sig", "utf-8", "latin1"):
            buffer.seek(0)
            try:
                return pd.read_csv(buffer, sep=None, engine="python", encoding=encoding, dtype=str)
            except Exception as exc:  # pragma: no cover - defensive fallback
                last_error = exc
        raise ValueError(f"Could not read the uploaded CSV: {last_error}") from last_error

    if extension == ".json":
        buffer.seek(0)
        try:
            return pd.read_json(buffer, orient="records", convert_dates=False, dtype=False)
        except ValueError as exc:
            raise ValueError(f"Could not read the uploaded JSON: {exc}") from exc

    if extension in {".xlsx", ".xls"}:
        buffer.seek(0)
        try:
            return pd.read_excel(buffer)
        except Exception as exc:
            raise ValueError(f"Could not read the uploaded spreadsheet: {exc}") from exc

    raise ValueError("Unsupported format. Upload a CSV, JSON or XLSX file.")


def normalize_and_map_columns(df: pd.DataFrame) -> tuple[pd.DataFrame, dict[str, str]]:
    """Rename upload headers or record keys to the canonical schema.

    Returns the renamed frame and a ``canonical -> normalized source`` mapping.
    When several columns could fill one field, the canonical name wins, then
    the earliest alias.
    """
    if df.empty:
        raise ValueError("The uploaded file has no rows.")

    standardized = df.copy()
    standardized.columns = _deduplicate_column_names([_normalize_column_name(column) for column in df.columns])

    mapping: dict[str, str] = {}
    for canonical in COLUMN_ALIASES:
        taken = set(mapping.values())
        source = next(
            (candidate for candidate in _alias_candidates(canonical)
             if candidate in standardized.columns and candidate not in taken),
            None,
        )
        if source is not None:
            mapping[canonical] = source

    standardized = standardized.rename(columns={source: canonical for canonical, source in mapping.items()})
    return standardized, mapping


def _standardize_decimal_text(text: str) -> str:
    """Leave ``.`` as the only decimal mark and drop digit grouping."""
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if "," in text:
        return text.replace(",", "" if _COMMA_GROUPED.fullmatch(text) else ".")
    if text.count(".") > 1 and _DOT_GROUPED.fullmatch(text):
        return text.replace(".", "")
    return text


def _parse_numeric_value(value: Any) -> float:
    if isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool):
        return float(value)
    if value is None or pd.isna(value):
        return np.nan

    # currency symbols, spaces and unit suffixes
    text = _NUMBER_NOISE.sub("", str(value))
    if not any(character.isdigit() for character in text):
        return np.nan

    try:
        return float(_standardize_decimal_text(text))
    except ValueError:
        return np.nan


def parse_date_value(value: Any) -> pd.Timestamp:
    """Parse a date as a local calendar date; offsets are dropped, not converted."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return pd.NaT
    try:
        timestamp = pd.Timestamp(value)
    except (ValueError, TypeError):
        return pd.NaT
    if timestamp is pd.NaT:
        return pd.NaT
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_localize(None)
    return timestamp


def parse_dates(values: pd.Series) -> pd.Series:
    return pd.to_datetime(values.map(parse_date_value), errors="coerce")


def to_numeric(values: pd.Series) -> pd.Series:
    return values.map(_parse_numeric_value).astype(float)


def blank_mask(values: pd.Series) -> pd.Series:
    """Flag missing or empty-string cells."""
    return values.isna() | values.astype(str).eq("")


def _empty_sales_frame() -> pd.DataFrame:
    return pd.DataFrame(columns=SALES_COLUMNS)


def as_sales_frame(records: SalesInput) -> pd.DataFrame:
    """Return a fresh frame holding every canonical sales column.

    Accepts a DataFrame, an iterable of mappings (camelCase keys such as
    ``unitPrice`` are mapped to the canonical names) or ``None``.
    """
    if records is None:
        return _empty_sales_frame()

    if isinstance(records, pd.DataFrame):
        frame = records.copy()
    else:
        frame = pd.DataFrame(list(records))

    if frame.empty and len(frame.columns) == 0:
        return _empty_sales_frame()

    if not frame.empty and not set(SALES_COLUMNS).issubset(frame.columns):
        frame, _ = normalize_and_map_columns(frame)

    for column in SALES_COLUMNS:
        if column not in frame.columns:
            frame[column] = np.nan

    extra_columns = [column for column in frame.columns if column not in SALES_COLUMNS]
    return frame[SALES_COLUMNS + extra_columns].reset_index(drop=True)


def prepare_imported_data(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce a mapped upload into sales records ready for cleaning."""
    if "date" not in df.columns:
        raise ValueError("Could not find a date column in the uploaded data.")

    prepared = as_sales_frame(df)

    missing_ids = blank_mask(prepared["id"])
    if missing_ids.any():
        generated_ids = pd.Series(
            [f"{RECORD_ID_PREFIX}{position + RECORD_ID_OFFSET:05d}" for position in range(len(prepared))],
            index=prepared.index,
        )
        prepared["id"] = prepared["id"].astype(object).mask(missing_ids, generated_ids)

    prepared["date"] = prepared["date"].astype(object).where(~blank_mask(prepared["date"]), np.nan)

    for text_column in CATEGORICAL_FIELDS:
        cleaned_text = prepared[text_column].astype(str).str.strip()
        prepared[text_column] = cleaned_text.mask(cleaned_text.isin(["", "nan", "None"]), np.nan)

    for numeric_column in (*NUMERIC_FIELDS, "total_sales"):
        prepared[numeric_column] = to_numeric(prepared[numeric_column])

    derivable = (
        (prepared["total_sales"].isna() | prepared["total_sales"].eq(0))
        & prepared["quantity"].notna()
        & prepared["unit_price"].notna()
    )
    prepared.loc[derivable, "total_sales"] = prepared.loc[derivable, "quantity"] * prepared.loc[derivable, "unit_price"]

    logger.info("Prepared %d imported records (%d ids generated)", len(prepared), int(missing_ids.sum()))
    return prepared


def most_common_value(values: pd.Series) -> str:
    """Most frequent non-blank value; ties go to the value seen first."""
    present = values[~blank_mask(values)].astype(str)
    if present.empty:
        return ""
    # Counter.most_common keeps insertion order among equal counts.
    return Counter(present).most_common(1)[0][0]


def find_outliers(values: pd.Series, threshold: float = OUTLIER_STD_THRESHOLD) -> pd.Series:
    """Flag values more than ``threshold`` population std devs from the mean."""
    defined = values.dropna()
    if defined.empty:
        return pd.Series(False, index=values.index)
    mean = float(defined.mean())
    std = float(defined.std(ddof=0))
    return (values - mean).abs() > threshold * std


def _defined_mean(values: pd.Series) -> float:
    defined = values.dropna()
    if defined.empty:
        return 0.0
    return float(defined.mean())


def clean_sales_data(records: SalesInput) -> pd.DataFrame:
    """Impute missing fields, replace numeric outliers and recompute total sales.

    Statistics (means, standard deviations, most common values) come from the
    input as given, so every row is judged against the same baseline. The
    input is never modified.
    """
    source = as_sales_frame(records)
    if source.empty:
        return source

    cleaned = source.copy()

    for column in CATEGORICAL_FIELDS:
        fill_value = most_common_value(source[column])
        cleaned[column] = source[column].astype(object).mask(blank_mask(source[column]), fill_value)

    replaced: dict[str, int] = {}
    for column in NUMERIC_FIELDS:
        values = to_numeric(source[column])
        mean_value = _defined_mean(values)
        to_replace = values.isna() | values.eq(0) | find_outliers(values)
        cleaned[column] = values.mask(to_replace, mean_value)
        replaced[column] = int(to_replace.sum())

    cleaned["total_sales"] = cleaned["quantity"] * cleaned["unit_price"]

    logger.info(
        "Cleaned %d records (quantity replaced: %d, unit_price replaced: %d)",
        len(cleaned),
        replaced["quantity"],
        replaced["unit_price"],
    )
    return cleaned
