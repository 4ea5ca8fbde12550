"""Derived view model consumed by the renderers.

Everything here is a pure function of an :class:`AllocationState` and the
validated payload, recomputed on every read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from .benchmarks import BenchmarkPercentiles, StageBenchmark, get_stage_benchmark
from .comparison import ComparisonSummary, analyze_comparison
from .history import category_series, history_trend
from .percentiles import percentile_band, percentile_for
from .schemas import BudgetDataResponse
from .store import BALANCED, AllocationState, balance_status

ROW_COLUMNS = ['id', 'name', 'color', 'percent', 'amount', 'percentile', 'band', 'trend_diff']


def build_category_rows(state: AllocationState, payload: BudgetDataResponse) -> pd.DataFrame:
    """Return one row per category, in catalog order.

    ``percentile`` is NaN (and ``band`` is ``None``) when the active stage or
    the category has no usable benchmark; ``trend_diff`` is NaN when the
    category has no history.
    """
    history = payload.to_history()
    stage = get_stage_benchmark(state.stage, payload.to_benchmarks())

    rows: List[Dict[str, object]] = []
    for category in payload.config.categories:
        percent = float(state.allocations.get(category.id, 0.0))
        benchmark = stage.for_category(category.id) if stage is not None else None
        rank = percentile_for(percent, benchmark)
        trend = history_trend(category_series(history, category.id))
        rows.append({
            'id': category.id,
            'name': category.name,
            'color': category.color,
            'percent': percent,
            'amount': percent / 100 * state.total_budget,
            'percentile': np.nan if rank is None else rank,
            'band': None if rank is None else percentile_band(rank),
            'trend_diff': np.nan if trend is None else trend.diff,
        })
    return pd.DataFrame(rows, columns=ROW_COLUMNS)


@dataclass(frozen=True)
class BudgetSummary:
    total_allocated: float
    allocated_amount: float
    total_budget: float
    status: str
    gap: float
    comparison: ComparisonSummary

    @property
    def is_balanced(self) -> bool:
        return self.status == BALANCED


def summarize(
    state: AllocationState,
    payload: BudgetDataResponse,
    benchmarks: Optional[List[StageBenchmark]] = None,
) -> BudgetSummary:
    """Compute the status bar and comparison line values for ``state``."""
    catalog = payload.to_catalog()
    total = state.total_allocated
    return BudgetSummary(
        total_allocated=total,
        allocated_amount=state.allocated_amount,
        total_budget=state.total_budget,
        status=balance_status(total),
        gap=total - 100,
        comparison=analyze_comparison(
            state,
            catalog.categories,
            benchmarks if benchmarks is not None else payload.to_benchmarks(),
        ),
    )


def category_benchmark(
    state: AllocationState,
    payload: BudgetDataResponse,
    category_id: str,
) -> Optional[BenchmarkPercentiles]:
    """Return the category's anchors at the active stage, or ``None``."""
    stage = get_stage_benchmark(state.stage, payload.to_benchmarks())
    if stage is None:
        return None
    return stage.for_category(category_id)
