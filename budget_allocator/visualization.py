"""Plotly visualisation helpers for the budget allocator.

Each function accepts values derived by :mod:`summary` or the history
helpers and returns a ``plotly.graph_objects.Figure`` that Streamlit can
render via ``st.plotly_chart``. The figures are pure consumers of the
core; none of them mutate state.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.graph_objects as go

from .benchmarks import BenchmarkPercentiles


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_allocation_doughnut(rows: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Generate a doughnut chart of the current allocation shares.

    Parameters
    ----------
    rows : pandas.DataFrame
        Output of :func:`budget_allocator.summary.build_category_rows`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Doughnut chart with one slice per category, coloured by category.
    """
    if rows.empty:
        return _empty_figure()
    fig = go.Figure(
        go.Pie(
            labels=rows["name"],
            values=rows["percent"],
            customdata=rows["id"],
            hole=0.6,
            sort=False,
            marker={"colors": list(rows["color"])},
            textinfo="none",
            hovertemplate="%{label}: %{value:.0f}%<extra></extra>",
        )
    )
    fig.update_layout(title=title or "Allocation", showlegend=False)
    return fig


def create_sparkline(series: Sequence[float], color: str, title: str | None = None) -> go.Figure:
    """Create a minimal line chart of one category's allocation history."""
    if len(series) == 0:
        return _empty_figure()
    fig = go.Figure(
        go.Scatter(
            y=list(series),
            mode="lines",
            line={"color": color, "width": 1.5},
            hoverinfo="skip",
        )
    )
    fig.update_layout(
        title=title,
        height=60,
        margin={"l": 0, "r": 0, "t": 0, "b": 0},
        xaxis={"visible": False},
        yaxis={"visible": False},
        showlegend=False,
    )
    return fig


def create_benchmark_chart(
    value: float,
    benchmarks: BenchmarkPercentiles,
    color: str = "#3b82f6",
    title: str | None = None,
) -> go.Figure:
    """Show the p25..p75 benchmark band, the median and the current value.

    Parameters
    ----------
    value : float
        Current allocation percentage.
    benchmarks : BenchmarkPercentiles
        Anchors for the category at the active stage.
    color : str
        Colour of the current value marker.
    title : str, optional
        Chart title.
    """
    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=[benchmarks.p75 - benchmarks.p25],
            base=[benchmarks.p25],
            y=["Industry"],
            orientation="h",
            marker={"color": "rgba(148, 163, 184, 0.4)"},
            name="p25-p75",
        )
    )
    fig.add_trace(
        go.Scatter(x=[benchmarks.p50], y=["Industry"], mode="markers", marker={"symbol": "line-ns-open", "size": 18}, name="Median")
    )
    fig.add_trace(
        go.Scatter(x=[value], y=["Industry"], mode="markers", marker={"color": color, "size": 12}, name="Current")
    )
    fig.update_layout(
        title=title or "Benchmark range",
        xaxis_title="% of budget",
        height=160,
        showlegend=False,
    )
    return fig
