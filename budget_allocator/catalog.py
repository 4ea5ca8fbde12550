"""Category catalog loading.

The catalog is fixed configuration: the spending categories with their
default shares and historical trend, the preset budget amounts and the
currency used for display. It is stored as JSON inside the package so it
can be edited without code changes.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import CATALOG_PATH
from .errors import CatalogError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    color: str
    default_percent: float
    trend_per_month: float = 0.0  # internal, only used for history synthesis

    def to_payload(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'color': self.color,
            'defaultPercent': self.default_percent,
        }


@dataclass(frozen=True)
class BudgetCatalog:
    """Ordered category catalog plus budget presets and currency."""

    categories: Tuple[Category, ...]
    preset_budgets: Tuple[float, ...]
    default_budget: float
    currency: str = 'USD'
    currency_symbol: str = '$'
    _index: Dict[str, Category] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[str, Category] = {}
        for category in self.categories:
            if category.id in index:
                raise CatalogError(f"Duplicate category id '{category.id}' in catalog")
            index[category.id] = category
        if self.preset_budgets and self.default_budget not in self.preset_budgets:
            raise CatalogError(
                f"Default budget {self.default_budget} is not one of the presets {list(self.preset_budgets)}"
            )
        object.__setattr__(self, '_index', index)

    def category_ids(self) -> List[str]:
        return [category.id for category in self.categories]

    def get(self, category_id: str) -> Optional[Category]:
        return self._index.get(category_id)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._index

    def is_preset_budget(self, amount: float) -> bool:
        """Return True if ``amount`` is one of the configured preset budgets."""
        return amount in self.preset_budgets

    def default_allocations(self) -> Dict[str, float]:
        return {category.id: float(category.default_percent) for category in self.categories}


def _category_from_dict(entry: Dict[str, Any]) -> Category:
    try:
        return Category(
            id=str(entry['id']),
            name=str(entry['name']),
            color=str(entry.get('color', '#888888')),
            default_percent=float(entry['defaultPercent']),
            trend_per_month=float(entry.get('trendPerMonth', 0.0)),
        )
    except KeyError as exc:
        raise CatalogError(f"Category entry missing field {exc}: {entry}") from exc


def catalog_from_dict(data: Dict[str, Any]) -> BudgetCatalog:
    """Build a :class:`BudgetCatalog` from its JSON representation."""
    categories = tuple(_category_from_dict(entry) for entry in data.get('categories') or [])
    presets = tuple(float(amount) for amount in data.get('presetBudgets') or [])
    default_budget = float(data.get('defaultBudget', presets[0] if presets else 0.0))
    return BudgetCatalog(
        categories=categories,
        preset_budgets=presets,
        default_budget=default_budget,
        currency=str(data.get('currency', 'USD')),
        currency_symbol=str(data.get('currencySymbol', '$')),
    )


def load_catalog(path: Optional[Path] = None) -> BudgetCatalog:
    """Load the category catalog from disk.

    Args:
        path: Optional catalog file. Defaults to ``CATALOG_PATH`` from config.

    Returns:
        The parsed catalog

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        CatalogError: If the catalog is inconsistent (duplicate ids, bad default budget)
    """
    target = Path(path) if path is not None else CATALOG_PATH
    if not target.exists():
        raise FileNotFoundError(f"Catalog file not found: {target}")

    with target.open('r', encoding='utf-8') as handle:
        data = json.load(handle)

    catalog = catalog_from_dict(data)
    logger.debug("Loaded %d categories from %s", len(catalog.categories), target)
    return catalog
