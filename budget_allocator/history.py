"""Synthetic allocation history.

Generates a reproducible month-by-month allocation series for each
category from a fixed seed, the category's trend per month and bounded
noise. The series feeds the sparklines and trend tooltips; it is computed
once per session and never mutated afterwards.

The pseudo-random generator is a plain linear-congruential generator so
that the same seed yields byte-identical percentages in any
implementation that follows the same recurrence and call order.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .catalog import Category
from .config import FLAT_TREND_THRESHOLD, HISTORY_MONTHS, HISTORY_NOISE_SPREAD, HISTORY_SEED

logger = logging.getLogger(__name__)

LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MODULUS = 2 ** 31


class SeededRandom:
    """Deterministic LCG yielding floats in [0, 1]."""

    def __init__(self, seed: int) -> None:
        self.state = int(seed) % LCG_MODULUS

    def random(self) -> float:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state / (LCG_MODULUS - 1)

    __call__ = random


@dataclass(frozen=True)
class HistoricalMonth:
    month: str  # YYYY-MM
    allocations: Dict[str, float]

    def to_payload(self) -> Dict[str, object]:
        return {'month': self.month, 'allocations': dict(self.allocations)}


def _round_one_decimal(value: float) -> float:
    # round half up, not to even
    return math.floor(value * 1000 + 0.5) / 10


def _month_labels(months: int, now: Optional[date]) -> List[str]:
    current = pd.Period(pd.Timestamp(now or date.today()), freq='M')
    return [(current - offset).strftime('%Y-%m') for offset in range(months - 1, -1, -1)]


def generate_history(
    categories: Sequence[Category],
    seed: Optional[int] = None,
    months: int = HISTORY_MONTHS,
    now: Optional[date] = None,
    rng: Optional[SeededRandom] = None,
) -> List[HistoricalMonth]:
    """Generate the normalized allocation history, oldest month first.

    Args:
        categories: Catalog categories, in catalog order
        seed: Seed for the generator. Defaults to ``HISTORY_SEED`` from config.
        months: Number of months in the window, ending at ``now``
        now: Date of the newest month. Defaults to today.
        rng: Optional generator to draw from instead of a fresh one

    Returns:
        List of :class:`HistoricalMonth`, one per month. Each month's
        allocations sum to 100 within rounding error.
    """
    if not categories:
        return []

    random = rng or SeededRandom(HISTORY_SEED if seed is None else seed)
    history: List[HistoricalMonth] = []

    for elapsed, label in enumerate(_month_labels(months, now)):
        raw: Dict[str, float] = {}
        for category in categories:
            trend = elapsed * category.trend_per_month
            noise = (random() - 0.5) * HISTORY_NOISE_SPREAD
            raw[category.id] = max(0.0, min(100.0, category.default_percent + trend + noise))

        total = sum(raw.values())
        if total <= 0:
            # every category clamped to zero; nothing to normalize against
            allocations = {key: 0.0 for key in raw}
        else:
            allocations = {key: _round_one_decimal(value / total) for key, value in raw.items()}
        history.append(HistoricalMonth(month=label, allocations=allocations))

    logger.debug("Generated %d months of history for %d categories", len(history), len(categories))
    return history


def history_frame(history: Iterable[HistoricalMonth]) -> pd.DataFrame:
    """Return history as a DataFrame indexed by month with one column per category."""
    rows = {entry.month: entry.allocations for entry in history}
    if not rows:
        return pd.DataFrame()
    frame = pd.DataFrame.from_dict(rows, orient='index')
    frame.index.name = 'Month'
    return frame


def category_series(history: Iterable[HistoricalMonth], category_id: str) -> List[float]:
    """Return the category's allocation for every month that has data for it."""
    return [entry.allocations[category_id] for entry in history if category_id in entry.allocations]


@dataclass(frozen=True)
class HistoryTrend:
    first: float
    last: float
    diff: float
    direction: str  # 'up', 'down' or 'flat'

    def tooltip(self) -> str:
        sign = ' +' if self.direction == 'up' else ' '
        return f"Past allocations: {self.first:.0f}%{sign}{self.diff:.1f}%"


def history_trend(series: Sequence[float]) -> Optional[HistoryTrend]:
    """Summarize a sparkline series, or ``None`` when there is no data."""
    if not series:
        return None
    first, last = float(series[0]), float(series[-1])
    diff = last - first
    if abs(diff) < FLAT_TREND_THRESHOLD:
        direction = 'flat'
    else:
        direction = 'up' if diff > 0 else 'down'
    return HistoryTrend(first=first, last=last, diff=diff, direction=direction)
