"""Percentile ranking of an allocation against benchmark anchors.

The rank is a piecewise-linear interpolation between the 25th, 50th and
75th percentile anchors. Above p75 the rank keeps rising with the same
slope as the p50..p75 segment and saturates at 100 once the value passes
``p75 + (p75 - p50)``.

Degenerate anchors are handled as follows:

* an unordered triple raises :class:`MalformedBenchmarkError`;
* ``p25 == 0`` only matters for values ``<= 0``, which rank 0;
* a zero ``p75 - p50`` span ranks every value above p75 at 100;
* ranks are clamped to ``[0, 100]``.
"""

from __future__ import annotations

import logging
from typing import Optional

from .benchmarks import BenchmarkPercentiles
from .errors import MalformedBenchmarkError

logger = logging.getLogger(__name__)

NORMAL_BAND = (40.0, 60.0)


def _clamp(rank: float) -> float:
    return max(0.0, min(100.0, rank))


def calculate_percentile(value: float, benchmarks: BenchmarkPercentiles) -> float:
    """Map an allocation ``value`` to a 0-100 percentile rank.

    Raises:
        MalformedBenchmarkError: If the anchors are not ordered p25 <= p50 <= p75
    """
    p25, p50, p75 = benchmarks.p25, benchmarks.p50, benchmarks.p75
    if not benchmarks.is_ordered():
        raise MalformedBenchmarkError(f"Benchmark anchors out of order: p25={p25}, p50={p50}, p75={p75}")

    if value <= p25:
        if p25 <= 0:
            return 0.0
        return _clamp(25 * (value / p25))
    # Empty segments (p25 == p50 or p50 == p75) are skipped by these bounds.
    if value <= p50:
        return 25 + 25 * ((value - p25) / (p50 - p25))
    if value <= p75:
        return 50 + 25 * ((value - p50) / (p75 - p50))

    extra_range = p75 - p50
    if extra_range <= 0:
        return 100.0
    return 75 + 25 * min(1.0, (value - p75) / extra_range)


def percentile_for(value: float, benchmarks: Optional[BenchmarkPercentiles]) -> Optional[float]:
    """Return the percentile rank, or ``None`` if there is no usable benchmark."""
    if benchmarks is None:
        return None
    try:
        return calculate_percentile(value, benchmarks)
    except MalformedBenchmarkError as exc:
        logger.warning("Skipping percentile: %s", exc)
        return None


def percentile_band(rank: float) -> str:
    """Classify a rank as ``normal`` (40-60), ``high`` or ``low``."""
    low, high = NORMAL_BAND
    if low <= rank <= high:
        return 'normal'
    if rank > high:
        return 'high'
    return 'low'
