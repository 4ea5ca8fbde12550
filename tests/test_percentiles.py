from __future__ import annotations

import numpy as np
import pytest

from budget_allocator.benchmarks import BenchmarkPercentiles
from budget_allocator.errors import MalformedBenchmarkError
from budget_allocator.percentiles import calculate_percentile, percentile_band, percentile_for

TRIPLE = BenchmarkPercentiles(20, 25, 30)


def test_anchors_map_to_their_percentiles() -> None:
    assert calculate_percentile(20, TRIPLE) == 25
    assert calculate_percentile(25, TRIPLE) == 50
    assert calculate_percentile(30, TRIPLE) == 75


def test_extrapolation_saturates_at_100() -> None:
    assert calculate_percentile(35, TRIPLE) == 100
    assert calculate_percentile(32.5, TRIPLE) == pytest.approx(87.5)
    assert calculate_percentile(90, TRIPLE) == 100


def test_segments_interpolate_linearly() -> None:
    assert calculate_percentile(10, TRIPLE) == pytest.approx(12.5)
    assert calculate_percentile(22.5, TRIPLE) == pytest.approx(37.5)
    assert calculate_percentile(27.5, TRIPLE) == pytest.approx(62.5)
    assert calculate_percentile(0, TRIPLE) == 0


@pytest.mark.parametrize('triple', [
    BenchmarkPercentiles(15, 20, 25),
    BenchmarkPercentiles(40, 47, 55),
    BenchmarkPercentiles(5, 8, 12),
    BenchmarkPercentiles(5, 5, 10),
])
def test_rank_is_monotonic(triple) -> None:
    values = np.linspace(-5, 80, 500)
    ranks = [calculate_percentile(v, triple) for v in values]
    assert all(b >= a for a, b in zip(ranks, ranks[1:]))
    assert min(ranks) >= 0
    assert max(ranks) <= 100


def test_zero_p25_ranks_zero_for_non_positive_values() -> None:
    triple = BenchmarkPercentiles(0, 5, 10)
    assert calculate_percentile(0, triple) == 0
    assert calculate_percentile(-3, triple) == 0
    assert calculate_percentile(2.5, triple) == pytest.approx(37.5)


def test_zero_upper_span_ranks_100_above_p75() -> None:
    triple = BenchmarkPercentiles(5, 10, 10)
    assert calculate_percentile(10, triple) == 50
    assert calculate_percentile(10.5, triple) == 100


def test_unordered_triple_is_rejected() -> None:
    with pytest.raises(MalformedBenchmarkError):
        calculate_percentile(10, BenchmarkPercentiles(10, 5, 20))


def test_percentile_for_handles_missing_and_malformed() -> None:
    assert percentile_for(10, None) is None
    assert percentile_for(10, BenchmarkPercentiles(30, 20, 10)) is None
    assert percentile_for(25, TRIPLE) == 50


@pytest.mark.parametrize('rank, band', [
    (50, 'normal'),
    (40, 'normal'),
    (60, 'normal'),
    (60.5, 'high'),
    (39.9, 'low'),
    (0, 'low'),
    (100, 'high'),
])
def test_percentile_band(rank, band) -> None:
    assert percentile_band(rank) == band
