"""Top‑level package for the Budget Allocator.

The core is a small analytics and state engine:

* ``history`` – reproducible synthetic allocation history
* ``benchmarks`` – static industry percentiles by company stage
* ``percentiles`` – percentile ranking against benchmark anchors
* ``store`` – the mutable allocation state and its derived totals
* ``comparison`` – the largest deviation from the industry median

``schemas`` validates the session payload, ``summary`` derives the view
model and ``visualization``/``dashboard`` render it. To run the dashboard:

```bash
streamlit run budget_allocator/dashboard.py
```
"""

from .benchmarks import BenchmarkPercentiles, StageBenchmark, get_stage_benchmark  # noqa: F401
from .catalog import BudgetCatalog, Category, load_catalog  # noqa: F401
from .comparison import ComparisonResult, ComparisonSummary, analyze_comparison  # noqa: F401
from .history import HistoricalMonth, SeededRandom, generate_history  # noqa: F401
from .percentiles import calculate_percentile  # noqa: F401
from .store import AllocationState, AllocationStore  # noqa: F401

# Streamlit may not be installed in all environments (e.g. during unit
# testing), so the dashboard is optional.
try:
    from . import dashboard  # type: ignore  # noqa: F401
except ModuleNotFoundError:
    dashboard = None  # type: ignore


__all__ = [
    "AllocationState",
    "AllocationStore",
    "BenchmarkPercentiles",
    "BudgetCatalog",
    "Category",
    "ComparisonResult",
    "ComparisonSummary",
    "HistoricalMonth",
    "SeededRandom",
    "StageBenchmark",
    "analyze_comparison",
    "calculate_percentile",
    "dashboard",
    "generate_history",
    "get_stage_benchmark",
    "load_catalog",
]
