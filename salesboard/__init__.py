"""Sales data cleaning, segmentation and trend analysis for the dashboard."""

from .aggregation import add_percentages, aggregate_by, monthly_sales
from .data_processing import (
    as_sales_frame,
    clean_sales_data,
    normalize_and_map_columns,
    prepare_imported_data,
    read_uploaded_file,
)
from .insights import build_segment_insights, build_trend_insights
from .metrics import compute_kpis, summarize_dataset
from .sample_data import add_data_anomalies, generate_sample_data
from .trends import calculate_yoy_growth, detect_seasonality, seasonal_sales, summarize_trends

__all__ = [
    "add_percentages",
    "aggregate_by",
    "monthly_sales",
    "as_sales_frame",
    "clean_sales_data",
    "normalize_and_map_columns",
    "prepare_imported_data",
    "read_uploaded_file",
    "build_segment_insights",
    "build_trend_insights",
    "compute_kpis",
    "summarize_dataset",
    "add_data_anomalies",
    "generate_sample_data",
    "calculate_yoy_growth",
    "detect_seasonality",
    "seasonal_sales",
    "summarize_trends",
]
