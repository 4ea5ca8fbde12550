from __future__ import annotations

import copy
from datetime import date

import pytest
from pydantic import ValidationError

from budget_allocator.benchmarks import BENCHMARKS
from budget_allocator.catalog import load_catalog
from budget_allocator.history import generate_history
from budget_allocator.schemas import build_budget_data, format_budget_summary, parse_budget_data

NOW = date(2024, 3, 15)


def _raw():
    return build_budget_data(seed=42, now=NOW).model_dump(by_alias=True)


def test_build_budget_data_shape() -> None:
    payload = build_budget_data(seed=42, now=NOW)

    assert [c.id for c in payload.config.categories] == load_catalog().category_ids()
    assert payload.config.default_budget == 100000
    assert len(payload.analytics.history) == 24
    assert payload.analytics.history[-1].month == '2024-03'
    assert payload.analytics.stages == ['Seed', 'Series A', 'Series B', 'Growth']
    assert payload.analytics.default_stage == 'Series A'


def test_payload_uses_camel_case_on_the_wire() -> None:
    raw = _raw()
    assert 'defaultPercent' in raw['config']['categories'][0]
    assert 'presetBudgets' in raw['config']
    assert 'categoryBenchmarks' in raw['analytics']['benchmarks'][0]
    assert 'trendPerMonth' not in raw['config']['categories'][0]


def test_parse_round_trip_to_core_types() -> None:
    payload = parse_budget_data(_raw())

    assert payload.to_benchmarks() == BENCHMARKS
    assert payload.to_history() == generate_history(load_catalog().categories, seed=42, now=NOW)
    catalog = payload.to_catalog()
    assert catalog.category_ids() == load_catalog().category_ids()
    assert catalog.default_budget == 100000


def test_unknown_default_stage_is_rejected() -> None:
    raw = _raw()
    raw['analytics']['defaultStage'] = 'Series Z'
    with pytest.raises(ValidationError):
        parse_budget_data(raw)


def test_default_budget_outside_presets_is_rejected() -> None:
    raw = _raw()
    raw['config']['defaultBudget'] = 12345
    with pytest.raises(ValidationError):
        parse_budget_data(raw)


def test_duplicate_category_id_is_rejected() -> None:
    raw = _raw()
    duplicate = copy.deepcopy(raw['config']['categories'][0])
    duplicate['name'] = 'Marketing Again'
    raw['config']['categories'].append(duplicate)
    with pytest.raises(ValidationError, match='marketing'):
        parse_budget_data(raw)


def test_missing_section_is_rejected() -> None:
    raw = _raw()
    del raw['analytics']
    with pytest.raises(ValidationError):
        parse_budget_data(raw)


def test_unordered_benchmark_is_accepted_with_warning(caplog) -> None:
    raw = copy.deepcopy(_raw())
    raw['analytics']['benchmarks'][0]['categoryBenchmarks']['marketing'] = {'p25': 30, 'p50': 20, 'p75': 10}
    with caplog.at_level('WARNING', logger='budget_allocator.schemas'):
        payload = parse_budget_data(raw)
    assert payload.analytics.benchmarks[0].category_benchmarks['marketing'].p25 == 30
    assert 'out of order' in caplog.text


def test_format_budget_summary() -> None:
    text = format_budget_summary(build_budget_data(seed=42, now=NOW))
    lines = text.splitlines()

    assert lines[0] == 'Budget Allocator Configuration'
    assert 'Default Budget: $100,000' in lines
    assert 'Available Presets: $50,000, $100,000, $250,000, $500,000' in lines
    assert '  - Marketing: 25% default' in lines
    assert '  - R&D: 10% default' in lines
    assert 'Historical Data: 24 months' in lines
    assert 'Benchmark Stages: Seed, Series A, Series B, Growth' in lines
    assert lines[-1] == 'Default Stage: Series A'
