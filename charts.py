"""
charts.py
Income chart: project visible records to a labeled series, render with Plotly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import plotly.graph_objects as go

from models import SubscriptionRecord, parse_price

INCOME_LABEL = "Monthly Income (৳)"


@dataclass(frozen=True)
class ChartSeries:
    labels: list[str]
    values: list[float]


def chart_projection(records: Iterable[SubscriptionRecord]) -> ChartSeries:
    """labels[i] and values[i] describe the same record, in input order."""
    labels: list[str] = []
    values: list[float] = []
    for r in records:
        labels.append(r.name)
        values.append(parse_price(r.price))
    return ChartSeries(labels=labels, values=values)


def chart_data(series: ChartSeries, label: str = INCOME_LABEL) -> dict:
    return {
        "labels": list(series.labels),
        "datasets": [{"label": label, "data": list(series.values)}],
    }


def income_bar_chart(series: ChartSeries, title: str = "Monthly Revenue Chart", label: str = INCOME_LABEL) -> go.Figure:
    if not series.labels:
        fig = go.Figure()
        fig.update_layout(title="No data to display")
        return fig
    fig = go.Figure(
        go.Bar(
            x=series.labels,
            y=series.values,
            name=label,
            marker=dict(color="rgba(75, 192, 192, 0.6)", line=dict(color="rgba(75, 192, 192, 1)", width=1)),
        )
    )
    fig.update_layout(title=title, xaxis_title="Customer", yaxis_title=label, showlegend=True)
    return fig
