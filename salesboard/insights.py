from __future__ import annotations

from typing import Any

import pandas as pd

SEGMENT_NAMES = {
    "region": "regions",
    "customer_type": "customer types",
    "category": "categories",
    "product": "products",
}


def format_currency(value: float) -> str:
    return f"${value:,.2f}"


def build_segment_insights(shares: pd.DataFrame, field: str) -> list[str]:
    """Describe how concentrated sales are across the segments of ``field``."""
    if shares.empty:
        return ["Not enough data to describe this segmentation."]

    segment_name = SEGMENT_NAMES.get(field, field)
    leader = shares.iloc[0]
    top_share = float(shares["percentage"].head(3).sum())

    insights = [
        f"Top segment: {leader['label']} with {format_currency(float(leader['value']))} "
        f"({float(leader['percentage']):.1f}% of sales).",
        f"Top {min(3, len(shares))} {segment_name} account for {top_share:.1f}% of total sales.",
    ]

    if float(leader["percentage"]) > 50:
        insights.append(
            f"Heavy concentration in {leader['label']} suggests potential market dependency risks."
        )
    else:
        insights.append(
            f"Sales distribution is relatively balanced, reducing dependency on any single {field}."
        )
    return insights


def build_trend_insights(summary: dict[str, Any]) -> list[str]:
    """Turn the output of trends.summarize_trends into short sentences."""
    insights: list[str] = []

    highest = summary.get("highest_quarter")
    lowest = summary.get("lowest_quarter")
    if highest and lowest:
        insights.append(
            f"Strongest quarter: {highest['quarter']} ({format_currency(highest['average_sales'])} on average)."
        )
        insights.append(
            f"Weakest quarter: {lowest['quarter']} ({format_currency(lowest['average_sales'])} on average)."
        )
        insights.append(f"Seasonality strength: {summary['seasonality_strength']:.1f}%.")

    latest_growth = summary.get("latest_growth")
    if latest_growth is not None and not pd.isna(latest_growth):
        insights.append(f"Latest year-over-year growth: {latest_growth:+.1f}%.")

    average_growth = summary.get("average_growth")
    if average_growth is not None and not pd.isna(average_growth):
        insights.append(f"Average annual growth: {average_growth:+.1f}%.")

    if not insights:
        return ["Not enough data to describe sales trends."]
    return insights
