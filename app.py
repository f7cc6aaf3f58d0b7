from __future__ import annotations

import logging

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from salesboard.aggregation import add_percentages, aggregate_by, monthly_sales
from salesboard.data_processing import (
    clean_sales_data,
    normalize_and_map_columns,
    prepare_imported_data,
    read_uploaded_file,
)
from salesboard.insights import build_segment_insights, build_trend_insights
from salesboard.metrics import compute_kpis, summarize_dataset
from salesboard.sample_data import add_data_anomalies, generate_sample_data
from salesboard.trends import calculate_yoy_growth, detect_seasonality, seasonal_sales, summarize_trends

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="Sales Data Analysis", page_icon=":bar_chart:", layout="wide")

SEGMENT_OPTIONS = {
    "Region": "region",
    "Category": "category",
    "Product": "product",
    "Customer type": "customer_type",
}


def format_currency(value: float | int | None) -> str:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return "N/A"
    return f"${float(value):,.2f}"


def format_integer(value: int | float | None) -> str:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return "N/A"
    return f"{int(value):,}"


def format_growth(value: float | None) -> str:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return "N/A"
    return f"{value:+.1f}%"


@st.cache_data(show_spinner=False)
def load_uploaded_records(file_bytes: bytes, filename: str) -> tuple[pd.DataFrame, dict[str, str]]:
    raw_df = read_uploaded_file(file_bytes, filename)
    mapped_df, mapping = normalize_and_map_columns(raw_df)
    return prepare_imported_data(mapped_df), mapping


@st.cache_data(show_spinner=False)
def load_sample_records(count: int, with_anomalies: bool) -> pd.DataFrame:
    sample_df = generate_sample_data(count=count)
    if with_anomalies:
        sample_df = add_data_anomalies(sample_df)
    return sample_df


@st.cache_data(show_spinner=False)
def clean_records(df: pd.DataFrame) -> pd.DataFrame:
    return clean_sales_data(df)


def render_import_tab(raw_df: pd.DataFrame, cleaned_df: pd.DataFrame) -> None:
    st.subheader("Imported data")
    stats = summarize_dataset(raw_df)
    col_1, col_2, col_3, col_4, col_5 = st.columns(5)
    col_1.metric("Records", format_integer(stats["total_records"]))
    col_2.metric("Rows with missing values", format_integer(stats["missing_values"]))
    col_3.metric("Outliers", format_integer(stats["outliers"]))
    col_4.metric("Data coverage", stats["data_coverage"])
    col_5.metric("Data quality", f"{stats['data_quality']:.1f}%")

    st.caption("Raw preview")
    st.dataframe(raw_df.head(5), use_container_width=True, hide_index=True)
    st.caption("Cleaned preview")
    st.dataframe(cleaned_df.head(5), use_container_width=True, hide_index=True)

    download_bytes = cleaned_df.to_csv(index=False).encode("utf-8-sig")
    st.download_button(
        label="Download cleaned data",
        data=download_bytes,
        file_name="cleaned_sales.csv",
        mime="text/csv",
    )


def render_overview_tab(df: pd.DataFrame) -> None:
    kpis = compute_kpis(df)
    col_1, col_2, col_3, col_4 = st.columns(4)
    col_1.metric("Total sales", format_currency(kpis["total_sales"]))
    col_2.metric("Average order value", format_currency(kpis["average_order_value"]))
    col_3.metric("Products", format_integer(kpis["unique_products"]))
    col_4.metric("Regions", format_integer(kpis["unique_regions"]))

    st.subheader("Sales by month")
    monthly = monthly_sales(df)
    if monthly.empty:
        st.info("No dated records to chart.")
    else:
        chart = px.line(monthly, x="month", y="sales", markers=True, labels={"month": "Month", "sales": "Sales"})
        chart.update_layout(height=360)
        st.plotly_chart(chart, use_container_width=True)


def render_analytics_tab(df: pd.DataFrame) -> None:
    st.subheader("Sales over time")
    timeframe = st.radio("Timeframe", ["Monthly", "Quarterly"], horizontal=True)
    if timeframe == "Monthly":
        series = monthly_sales(df).rename(columns={"month": "period"})
    else:
        quarterly = seasonal_sales(df)
        series = pd.DataFrame(
            {
                "period": quarterly["year"].astype(str) + "-" + quarterly["quarter"],
                "sales": quarterly["sales"],
            }
        )

    if series.empty:
        st.info("No dated records to chart.")
    else:
        chart = px.bar(series, x="period", y="sales", labels={"period": "Period", "sales": "Sales"})
        chart.update_layout(height=360)
        st.plotly_chart(chart, use_container_width=True)

    st.subheader("Yearly sales and growth")
    growth = calculate_yoy_growth(df)
    if growth.empty:
        st.info("No dated records to chart.")
        return

    growth_chart = go.Figure()
    growth_chart.add_trace(go.Bar(x=growth["year"], y=growth["sales"], name="Sales", marker_color="#3b82f6"))
    growth_chart.add_trace(
        go.Scatter(
            x=growth["year"],
            y=growth["growth"],
            name="Growth %",
            mode="lines+markers",
            yaxis="y2",
            line=dict(color="#a855f7"),
        )
    )
    growth_chart.update_layout(
        height=380,
        xaxis=dict(type="category", title="Year"),
        yaxis=dict(title="Sales"),
        yaxis2=dict(title="Growth %", overlaying="y", side="right"),
    )
    st.plotly_chart(growth_chart, use_container_width=True)


def render_trends_tab(df: pd.DataFrame) -> None:
    growth = calculate_yoy_growth(df)
    quarterly = seasonal_sales(df)
    patterns = detect_seasonality(df)
    summary = summarize_trends(growth, quarterly)

    col_1, col_2, col_3 = st.columns(3)
    col_1.metric("Latest growth", format_growth(summary["latest_growth"]))
    col_2.metric("Average growth", format_growth(summary["average_growth"]))
    col_3.metric("Seasonality strength", f"{summary['seasonality_strength']:.1f}%")

    left_col, right_col = st.columns(2)
    with left_col:
        st.subheader("Quarterly sales by year")
        if quarterly.empty:
            st.info("No dated records to chart.")
        else:
            chart = px.bar(
                quarterly.assign(year=quarterly["year"].astype(str)),
                x="quarter",
                y="sales",
                color="year",
                barmode="group",
                labels={"quarter": "Quarter", "sales": "Sales", "year": "Year"},
            )
            chart.update_layout(height=380)
            st.plotly_chart(chart, use_container_width=True)

    with right_col:
        st.subheader("Average sale per quarter")
        if patterns.empty:
            st.info("No dated records to chart.")
        else:
            chart = px.bar(
                patterns,
                x="quarter",
                y="average_sales",
                labels={"quarter": "Quarter", "average_sales": "Average sale"},
                color="average_sales",
                color_continuous_scale="Blues",
            )
            chart.update_layout(height=380)
            st.plotly_chart(chart, use_container_width=True)

    st.subheader("Trend insights")
    for line in build_trend_insights(summary):
        st.markdown(f"- {line}")


def render_segmentation_tab(df: pd.DataFrame) -> None:
    segment_label = st.selectbox("Segment by", list(SEGMENT_OPTIONS.keys()), index=0)
    field = SEGMENT_OPTIONS[segment_label]
    shares = add_percentages(aggregate_by(df, field))

    if shares.empty:
        st.info("No segment data available.")
        return

    chart_type = st.radio("Chart type", ["Pie", "Bars"], horizontal=True)
    if chart_type == "Pie":
        chart = px.pie(shares, names="label", values="value", hole=0.35, labels={"label": segment_label})
    else:
        chart = px.bar(
            shares.sort_values("value", ascending=True),
            x="value",
            y="label",
            orientation="h",
            labels={"label": segment_label, "value": "Sales"},
            color="value",
            color_continuous_scale="Blues",
        )
    chart.update_layout(height=420)
    st.plotly_chart(chart, use_container_width=True)

    st.dataframe(
        shares.rename(columns={"label": segment_label, "value": "Sales", "percentage": "Share (%)"}),
        use_container_width=True,
        hide_index=True,
    )

    st.subheader("Segment insights")
    for line in build_segment_insights(shares, field):
        st.markdown(f"- {line}")


def main() -> None:
    st.title("Sales Data Analysis")
    st.caption("Analyze historical sales data patterns to inform pricing decisions.")

    st.sidebar.header("Data source")
    uploaded_file = st.sidebar.file_uploader("Upload a CSV, JSON or XLSX file", type=["csv", "json", "xlsx", "xls"])

    try:
        if uploaded_file is not None:
            raw_df, mapping = load_uploaded_records(uploaded_file.getvalue(), uploaded_file.name)
            st.sidebar.success(f"Loaded file: {uploaded_file.name}")
            mapped_columns = ", ".join([f"{canonical} <- {source}" for canonical, source in mapping.items()])
            if mapped_columns:
                st.sidebar.caption(f"Column mapping: {mapped_columns}")
        else:
            sample_size = st.sidebar.slider("Sample records", min_value=100, max_value=5000, value=1000, step=100)
            with_anomalies = st.sidebar.checkbox("Inject demo anomalies", value=True)
            raw_df = load_sample_records(sample_size, with_anomalies)
            st.sidebar.info("No file uploaded. Showing a synthetic sample.")
    except ValueError as exc:
        st.error(f"Could not load data: {exc}")
        st.stop()

    if raw_df.empty:
        st.warning("There is no data to display.")
        st.stop()

    cleaned_df = clean_records(raw_df)

    import_tab, overview_tab, analytics_tab, trends_tab, segmentation_tab = st.tabs(
        ["Data Import", "Overview", "Analytics", "Trends", "Segmentation"]
    )
    with import_tab:
        render_import_tab(raw_df, cleaned_df)
    with overview_tab:
        render_overview_tab(cleaned_df)
    with analytics_tab:
        render_analytics_tab(cleaned_df)
    with trends_tab:
        render_trends_tab(cleaned_df)
    with segmentation_tab:
        render_segmentation_tab(cleaned_df)


if __name__ == "__main__":
    main()
