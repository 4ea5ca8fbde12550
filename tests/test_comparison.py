from __future__ import annotations

from budget_allocator.benchmarks import BENCHMARKS, BenchmarkPercentiles, StageBenchmark, get_stage_benchmark
from budget_allocator.catalog import Category, load_catalog
from budget_allocator.comparison import analyze_comparison, find_largest_deviation
from budget_allocator.store import AllocationState


def _state_at_medians(stage: str) -> AllocationState:
    catalog = load_catalog()
    state = AllocationState.initial(catalog, stage)
    for category_id, benchmark in get_stage_benchmark(stage).category_benchmarks.items():
        state = state.with_allocation(category_id, benchmark.p50)
    return state


def test_allocation_at_medians_is_similar_to_peers() -> None:
    summary = analyze_comparison(_state_at_medians('Series B'), load_catalog().categories)

    assert summary.available
    assert summary.result is None
    assert summary.describe() == 'vs. Industry: similar to peers'


def test_single_category_above_median_is_reported() -> None:
    state = _state_at_medians('Series A').with_allocation('marketing', 35)
    summary = analyze_comparison(state, load_catalog().categories)

    assert summary.result.category == 'Marketing'
    assert summary.result.deviation == 10
    assert summary.result.direction == 'above'
    assert summary.result.is_above
    assert summary.describe() == 'vs. Industry: Marketing ↑ 10% above avg'


def test_ties_go_to_first_category_in_catalog_order() -> None:
    # defaults vs Series A: engineering 35/40 and sales 15/20 are both 5 below
    catalog = load_catalog()
    summary = analyze_comparison(AllocationState.initial(catalog), catalog.categories)

    assert summary.result.category == 'Engineering'
    assert summary.result.deviation == 5
    assert summary.result.direction == 'below'
    assert summary.describe() == 'vs. Industry: Engineering ↓ 5% below avg'


def test_deviation_at_threshold_is_not_material() -> None:
    state = _state_at_medians('Seed').with_allocation('sales', 18)
    assert analyze_comparison(state, load_catalog().categories).result is None


def test_signed_deviation_is_rounded_before_taking_magnitude() -> None:
    catalog = load_catalog()
    below = analyze_comparison(_state_at_medians('Seed').with_allocation('sales', 11.5), catalog.categories)
    above = analyze_comparison(_state_at_medians('Seed').with_allocation('sales', 18.5), catalog.categories)

    # -3.5 rounds toward +inf to -3; +3.5 rounds to 4
    assert below.result.deviation == 3
    assert below.result.direction == 'below'
    assert below.describe() == 'vs. Industry: Sales ↓ 3% below avg'
    assert above.result.deviation == 4
    assert above.result.direction == 'above'


def test_unknown_stage_is_not_available() -> None:
    state = AllocationState.initial(load_catalog(), 'Series Z')
    summary = analyze_comparison(state, load_catalog().categories)

    assert not summary.available
    assert summary.result is None
    assert summary.describe() == 'vs. Industry: not available'


def test_categories_without_benchmark_are_skipped() -> None:
    categories = [
        Category('extra', 'Extra', '#000000', 90),
        Category('marketing', 'Marketing', '#3b82f6', 10),
    ]
    stage = StageBenchmark('Custom', {'marketing': BenchmarkPercentiles(5, 10, 15)})
    state = AllocationState(allocations={'extra': 90, 'marketing': 15}, total_budget=100, stage='Custom')

    result = find_largest_deviation(state, categories, stage)
    assert result.category == 'Marketing'
    assert result.deviation == 5


def test_custom_benchmark_list_is_used() -> None:
    catalog = load_catalog()
    state = AllocationState.initial(catalog, 'Growth')
    assert analyze_comparison(state, catalog.categories, benchmarks=BENCHMARKS[:2]).available is False
    assert analyze_comparison(state, catalog.categories, benchmarks=BENCHMARKS).available is True
