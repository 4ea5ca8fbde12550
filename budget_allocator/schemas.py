"""Payload models shared with the data-fetch and rendering collaborators.

The payload carries the catalog (``config``) and the immutable analytics
tables (``analytics``). It is validated once on arrival; the core only
computes over validated payloads.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .benchmarks import BENCHMARKS, DEFAULT_STAGE, STAGES, BenchmarkPercentiles, StageBenchmark
from .catalog import BudgetCatalog, Category, load_catalog
from .formatting import format_currency_full
from .history import HistoricalMonth, generate_history

logger = logging.getLogger(__name__)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class BudgetCategoryModel(_CamelModel):
    id: str
    name: str
    color: str
    default_percent: float = Field(..., alias='defaultPercent', ge=0, le=100)


class HistoricalMonthModel(_CamelModel):
    month: str = Field(..., description="Calendar month as YYYY-MM")
    allocations: Dict[str, float]


class BenchmarkPercentilesModel(_CamelModel):
    p25: float
    p50: float
    p75: float


class StageBenchmarkModel(_CamelModel):
    stage: str
    category_benchmarks: Dict[str, BenchmarkPercentilesModel] = Field(..., alias='categoryBenchmarks')


class BudgetConfigModel(_CamelModel):
    categories: List[BudgetCategoryModel]
    preset_budgets: List[float] = Field(..., alias='presetBudgets')
    default_budget: float = Field(..., alias='defaultBudget')
    currency: str
    currency_symbol: str = Field(..., alias='currencySymbol')

    @model_validator(mode='after')
    def _default_budget_is_preset(self) -> 'BudgetConfigModel':
        if self.preset_budgets and self.default_budget not in self.preset_budgets:
            raise ValueError(f"defaultBudget {self.default_budget} is not one of presetBudgets")
        return self

    @model_validator(mode='after')
    def _category_ids_are_unique(self) -> 'BudgetConfigModel':
        seen = set()
        for category in self.categories:
            if category.id in seen:
                raise ValueError(f"Duplicate category id '{category.id}'")
            seen.add(category.id)
        return self


class BudgetAnalyticsModel(_CamelModel):
    history: List[HistoricalMonthModel]
    benchmarks: List[StageBenchmarkModel]
    stages: List[str]
    default_stage: str = Field(..., alias='defaultStage')

    @model_validator(mode='after')
    def _default_stage_is_listed(self) -> 'BudgetAnalyticsModel':
        if self.default_stage not in self.stages:
            raise ValueError(f"defaultStage '{self.default_stage}' is not one of stages {self.stages}")
        return self


class BudgetDataResponse(_CamelModel):
    config: BudgetConfigModel
    analytics: BudgetAnalyticsModel

    # Conversion to core types ------------------------------------------------

    def to_catalog(self) -> BudgetCatalog:
        return BudgetCatalog(
            categories=tuple(
                Category(id=c.id, name=c.name, color=c.color, default_percent=c.default_percent)
                for c in self.config.categories
            ),
            preset_budgets=tuple(self.config.preset_budgets),
            default_budget=self.config.default_budget,
            currency=self.config.currency,
            currency_symbol=self.config.currency_symbol,
        )

    def to_benchmarks(self) -> List[StageBenchmark]:
        return [
            StageBenchmark(
                stage=entry.stage,
                category_benchmarks={
                    key: BenchmarkPercentiles(p.p25, p.p50, p.p75)
                    for key, p in entry.category_benchmarks.items()
                },
            )
            for entry in self.analytics.benchmarks
        ]

    def to_history(self) -> List[HistoricalMonth]:
        return [
            HistoricalMonth(month=entry.month, allocations=dict(entry.allocations))
            for entry in self.analytics.history
        ]


def build_budget_data(
    catalog: Optional[BudgetCatalog] = None,
    seed: Optional[int] = None,
    now: Optional[date] = None,
) -> BudgetDataResponse:
    """Assemble the session payload from the catalog and static tables."""
    catalog = catalog or load_catalog()
    history = generate_history(catalog.categories, seed=seed, now=now)
    raw = {
        'config': {
            'categories': [category.to_payload() for category in catalog.categories],
            'presetBudgets': list(catalog.preset_budgets),
            'defaultBudget': catalog.default_budget,
            'currency': catalog.currency,
            'currencySymbol': catalog.currency_symbol,
        },
        'analytics': {
            'history': [entry.to_payload() for entry in history],
            'benchmarks': [entry.to_payload() for entry in BENCHMARKS],
            'stages': list(STAGES),
            'defaultStage': DEFAULT_STAGE,
        },
    }
    return BudgetDataResponse.model_validate(raw)


def parse_budget_data(raw: Mapping[str, Any]) -> BudgetDataResponse:
    """Validate an incoming payload.

    Raises:
        pydantic.ValidationError: If the payload shape or its defaults are invalid
    """
    payload = BudgetDataResponse.model_validate(raw)
    for entry in payload.analytics.benchmarks:
        for key, p in entry.category_benchmarks.items():
            if not p.p25 <= p.p50 <= p.p75:
                logger.warning("Benchmark for %s at stage %s is out of order", key, entry.stage)
    return payload


def format_budget_summary(payload: BudgetDataResponse) -> str:
    """Render a plain-text overview of the payload configuration."""
    config, analytics = payload.config, payload.analytics
    lines = [
        'Budget Allocator Configuration',
        '==============================',
        '',
        f"Default Budget: {format_currency_full(config.default_budget, config.currency_symbol)}",
        "Available Presets: " + ', '.join(format_currency_full(b, config.currency_symbol) for b in config.preset_budgets),
        '',
        'Categories:',
        *[f"  - {c.name}: {c.default_percent:g}% default" for c in config.categories],
        '',
        f"Historical Data: {len(analytics.history)} months",
        f"Benchmark Stages: {', '.join(analytics.stages)}",
        f"Default Stage: {analytics.default_stage}",
    ]
    return '\n'.join(lines)
