"""Streamlit app for the budget allocator.

This module wires the allocation store to sliders and selectors and
renders the derived values: the allocation doughnut, per-category
sparklines and percentile badges, the status bar and the comparison line.
All computation happens in the core modules; the app only reads derived
values and forwards user input to the store.

To run the dashboard from the command line::

    streamlit run budget_allocator/dashboard.py

or use ``run_dashboard.py`` at the project root.
"""

from __future__ import annotations

import logging
import os
import sys

import pandas as pd
import streamlit as st

# Support both package execution and ``streamlit run`` on this file.
if __package__:
    from . import visualization as viz
    from .config import configure_logging
    from .formatting import format_currency_compact, format_currency_full, format_percentile
    from .history import category_series, history_trend
    from .schemas import BudgetDataResponse, build_budget_data
    from .store import AllocationStore
    from .summary import build_category_rows, category_benchmark, summarize
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from budget_allocator import visualization as viz  # type: ignore
    from budget_allocator.config import configure_logging  # type: ignore
    from budget_allocator.formatting import format_currency_compact, format_currency_full, format_percentile  # type: ignore
    from budget_allocator.history import category_series, history_trend  # type: ignore
    from budget_allocator.schemas import BudgetDataResponse, build_budget_data  # type: ignore
    from budget_allocator.store import AllocationStore  # type: ignore
    from budget_allocator.summary import build_category_rows, category_benchmark, summarize  # type: ignore

logger = logging.getLogger(__name__)

STATUS_LABELS = {'balanced': '', 'over': ' Over', 'under': ' Under'}
BAND_ICONS = {'normal': '', 'high': '▲ ', 'low': '▼ '}


@st.cache_data
def load_payload() -> BudgetDataResponse:
    """Build the session payload once; history and benchmarks are immutable."""
    return build_budget_data()


def get_store(payload: BudgetDataResponse) -> AllocationStore:
    """Return the session's store, creating it on first use."""
    if 'allocation_store' not in st.session_state:
        logger.info("Starting allocation session at stage '%s'", payload.analytics.default_stage)
        st.session_state['allocation_store'] = AllocationStore(
            payload.to_catalog(), stage=payload.analytics.default_stage
        )
    return st.session_state['allocation_store']


def render_category_row(store: AllocationStore, row: pd.Series, payload: BudgetDataResponse) -> None:
    symbol = payload.config.currency_symbol
    series = category_series(payload.to_history(), row['id'])
    trend = history_trend(series)

    spark_col, slider_col, amount_col, badge_col = st.columns([1, 4, 1, 1])
    with spark_col:
        st.plotly_chart(
            viz.create_sparkline(series, row['color']),
            use_container_width=True,
            config={'displayModeBar': False},
        )
        if trend is not None:
            st.caption(trend.tooltip())
    with slider_col:
        value = st.slider(
            row['name'],
            min_value=0.0,
            max_value=100.0,
            value=float(row['percent']),
            step=1.0,
            key=f"slider_{row['id']}",
        )
        if value != row['percent']:
            store.set_category_percentage(row['id'], value)
            st.rerun()
    with amount_col:
        st.metric('Amount', format_currency_compact(store.category_amount(row['id']), symbol))
    with badge_col:
        if pd.isna(row['percentile']):
            st.write('')
        else:
            st.write(f"{BAND_ICONS[row['band']]}{format_percentile(row['percentile'])}")

    benchmark = category_benchmark(store.state, payload, row['id'])
    if benchmark is not None:
        with st.expander(f"{row['name']} vs. industry"):
            st.plotly_chart(
                viz.create_benchmark_chart(float(row['percent']), benchmark, row['color']),
                use_container_width=True,
                config={'displayModeBar': False},
            )


def main() -> None:
    """Entry point for the Streamlit app."""
    configure_logging()
    st.set_page_config(page_title="Budget Allocator", layout="wide")
    st.title("Budget Allocator")

    payload = load_payload()
    store = get_store(payload)
    config, analytics = payload.config, payload.analytics
    symbol = config.currency_symbol

    budget = st.selectbox(
        "Total budget",
        options=config.preset_budgets,
        index=config.preset_budgets.index(store.state.total_budget)
        if store.state.total_budget in config.preset_budgets else 0,
        format_func=lambda amount: format_currency_full(amount, symbol),
    )
    if store.catalog.is_preset_budget(budget) and budget != store.state.total_budget:
        store.set_total_budget(budget)

    rows = build_category_rows(store.state, payload)
    chart_col, sliders_col = st.columns([2, 5])
    with chart_col:
        st.plotly_chart(viz.create_allocation_doughnut(rows), use_container_width=True)
    with sliders_col:
        for _, row in rows.iterrows():
            render_category_row(store, row, payload)

    summary = summarize(store.state, payload)
    status_text = (
        f"Allocated: {format_currency_full(summary.allocated_amount, symbol)} / "
        f"{format_currency_full(summary.total_budget, symbol)}{STATUS_LABELS[summary.status]}"
    )
    if summary.is_balanced:
        st.success(status_text)
    else:
        st.warning(status_text)

    comparison_col, stage_col = st.columns([4, 1])
    with comparison_col:
        st.write(summary.comparison.describe())
    with stage_col:
        stage = st.selectbox(
            "Stage",
            options=analytics.stages,
            index=analytics.stages.index(store.state.stage) if store.state.stage in analytics.stages else 0,
        )
        if stage != store.state.stage:
            store.set_active_stage(stage)
            st.rerun()


if __name__ == "__main__":  # pragma: no cover
    main()
