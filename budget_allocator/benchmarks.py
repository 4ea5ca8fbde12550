"""Industry benchmark percentiles by company stage.

Static table of the 25th/50th/75th percentile allocation share observed
for each category at each funding stage. Pure data plus lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class BenchmarkPercentiles:
    p25: float
    p50: float
    p75: float

    def is_ordered(self) -> bool:
        return self.p25 <= self.p50 <= self.p75

    def to_payload(self) -> Dict[str, float]:
        return {'p25': self.p25, 'p50': self.p50, 'p75': self.p75}


@dataclass(frozen=True)
class StageBenchmark:
    stage: str
    category_benchmarks: Dict[str, BenchmarkPercentiles]

    def for_category(self, category_id: str) -> Optional[BenchmarkPercentiles]:
        return self.category_benchmarks.get(category_id)

    def to_payload(self) -> Dict[str, object]:
        return {
            'stage': self.stage,
            'categoryBenchmarks': {
                category_id: percentiles.to_payload()
                for category_id, percentiles in self.category_benchmarks.items()
            },
        }


def _stage(stage: str, rows: Dict[str, Tuple[float, float, float]]) -> StageBenchmark:
    return StageBenchmark(
        stage=stage,
        category_benchmarks={key: BenchmarkPercentiles(*values) for key, values in rows.items()},
    )


STAGES: List[str] = ['Seed', 'Series A', 'Series B', 'Growth']
DEFAULT_STAGE = 'Series A'

BENCHMARKS: List[StageBenchmark] = [
    _stage('Seed', {
        'marketing': (15, 20, 25),
        'engineering': (40, 47, 55),
        'operations': (8, 12, 15),
        'sales': (10, 15, 20),
        'rd': (5, 10, 15),
    }),
    _stage('Series A', {
        'marketing': (20, 25, 30),
        'engineering': (35, 40, 45),
        'operations': (10, 14, 18),
        'sales': (15, 20, 25),
        'rd': (8, 12, 15),
    }),
    _stage('Series B', {
        'marketing': (22, 27, 32),
        'engineering': (30, 35, 40),
        'operations': (12, 16, 20),
        'sales': (18, 23, 28),
        'rd': (8, 12, 15),
    }),
    _stage('Growth', {
        'marketing': (25, 30, 35),
        'engineering': (25, 30, 35),
        'operations': (15, 18, 22),
        'sales': (20, 25, 30),
        'rd': (5, 8, 12),
    }),
]


def get_stage_benchmark(
    stage: str,
    benchmarks: Optional[Iterable[StageBenchmark]] = None,
) -> Optional[StageBenchmark]:
    """Return the benchmark entry for ``stage`` or ``None`` if there is none."""
    for entry in benchmarks if benchmarks is not None else BENCHMARKS:
        if entry.stage == stage:
            return entry
    return None
