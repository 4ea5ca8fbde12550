"""Comparison of the current allocation against industry medians.

Finds the category whose share deviates most from its stage benchmark
median and reports it when the deviation is material.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .benchmarks import StageBenchmark, get_stage_benchmark
from .catalog import Category
from .config import MATERIALITY_THRESHOLD
from .store import AllocationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonResult:
    category: str
    deviation: int
    direction: str  # 'above' or 'below'

    @property
    def is_above(self) -> bool:
        return self.direction == 'above'


@dataclass(frozen=True)
class ComparisonSummary:
    available: bool
    result: Optional[ComparisonResult] = None

    def describe(self) -> str:
        if not self.available:
            return "vs. Industry: not available"
        if self.result is None:
            return "vs. Industry: similar to peers"
        arrow = '↑' if self.result.is_above else '↓'
        return (
            f"vs. Industry: {self.result.category} {arrow} "
            f"{self.result.deviation}% {self.result.direction} avg"
        )


def find_largest_deviation(
    state: AllocationState,
    categories: Iterable[Category],
    stage_benchmark: StageBenchmark,
    threshold: float = MATERIALITY_THRESHOLD,
) -> Optional[ComparisonResult]:
    """Return the most deviating category, or ``None`` if nothing is material.

    Categories are scanned in catalog order and a later category only wins
    with a strictly larger deviation. Categories without a benchmark or an
    allocation are skipped.
    """
    max_deviation = 0.0
    winner: Optional[Category] = None

    for category in categories:
        benchmark = stage_benchmark.for_category(category.id)
        if benchmark is None or category.id not in state.allocations:
            continue
        deviation = state.allocations[category.id] - benchmark.p50
        if abs(deviation) > abs(max_deviation):
            max_deviation = deviation
            winner = category

    if winner is None or abs(max_deviation) <= threshold:
        return None
    return ComparisonResult(
        category=winner.name,
        deviation=abs(int(math.floor(max_deviation + 0.5))),
        direction='above' if max_deviation > 0 else 'below',
    )


def analyze_comparison(
    state: AllocationState,
    categories: Iterable[Category],
    benchmarks: Optional[Iterable[StageBenchmark]] = None,
) -> ComparisonSummary:
    """Compare ``state`` against the benchmarks of its active stage."""
    stage_benchmark = get_stage_benchmark(state.stage, benchmarks)
    if stage_benchmark is None:
        logger.debug("No benchmark entry for stage '%s'", state.stage)
        return ComparisonSummary(available=False)
    return ComparisonSummary(
        available=True,
        result=find_largest_deviation(state, categories, stage_benchmark),
    )
