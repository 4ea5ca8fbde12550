"""Allocation state and the session store that holds it.

:class:`AllocationState` is an immutable snapshot: every mutation returns
a new snapshot. :class:`AllocationStore` keeps the current snapshot for a
session and exposes the derived totals, which are always recomputed from
the snapshot so they cannot go stale.

The store never rebalances or normalizes. Totals above or below 100 are a
valid state that the UI surfaces as a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .benchmarks import DEFAULT_STAGE
from .catalog import BudgetCatalog
from .config import BALANCE_TOLERANCE
from .errors import UnknownCategoryError

logger = logging.getLogger(__name__)

BALANCED = 'balanced'
OVER = 'over'
UNDER = 'under'


@dataclass(frozen=True)
class AllocationState:
    allocations: Mapping[str, float]
    total_budget: float
    stage: str

    def __post_init__(self) -> None:
        # read-only view over a private copy; callers cannot edit a snapshot in place
        object.__setattr__(self, 'allocations', MappingProxyType(dict(self.allocations)))

    @classmethod
    def initial(cls, catalog: BudgetCatalog, stage: str = DEFAULT_STAGE) -> 'AllocationState':
        """Every category at its default share, budget and stage at their defaults."""
        return cls(
            allocations=catalog.default_allocations(),
            total_budget=catalog.default_budget,
            stage=stage,
        )

    def with_allocation(self, category_id: str, value: float) -> 'AllocationState':
        if not 0 <= value <= 100:
            raise ValueError(f"Allocation for '{category_id}' must be between 0 and 100, got {value}")
        allocations: Dict[str, float] = dict(self.allocations)
        allocations[category_id] = float(value)
        return replace(self, allocations=allocations)

    def with_budget(self, amount: float) -> 'AllocationState':
        return replace(self, total_budget=float(amount))

    def with_stage(self, stage: str) -> 'AllocationState':
        return replace(self, stage=stage)

    @property
    def total_allocated(self) -> float:
        return float(sum(self.allocations.values()))

    @property
    def allocated_amount(self) -> float:
        return self.total_allocated / 100 * self.total_budget

    def category_amount(self, category_id: str) -> float:
        return self.allocations.get(category_id, 0.0) / 100 * self.total_budget


def balance_status(total_allocated: float, tolerance: float = BALANCE_TOLERANCE) -> str:
    """Return ``balanced``, ``over`` or ``under`` for a total percentage."""
    if abs(total_allocated - 100) < tolerance:
        return BALANCED
    return OVER if total_allocated > 100 else UNDER


class AllocationStore:
    """Holds the current :class:`AllocationState` for one session."""

    def __init__(self, catalog: BudgetCatalog, stage: str = DEFAULT_STAGE) -> None:
        self.catalog = catalog
        self._default_stage = stage
        self._state = AllocationState.initial(catalog, stage)

    @property
    def state(self) -> AllocationState:
        return self._state

    # Mutations ---------------------------------------------------------------

    def set_category_percentage(self, category_id: str, value: float) -> AllocationState:
        """Replace one category's share. Other categories are left untouched."""
        if category_id not in self.catalog:
            raise UnknownCategoryError(category_id)
        self._state = self._state.with_allocation(category_id, value)
        logger.debug("Set %s to %.1f%% (total %.1f%%)", category_id, value, self._state.total_allocated)
        return self._state

    def set_total_budget(self, amount: float) -> AllocationState:
        """Replace the budget amount. Callers validate it against the presets."""
        self._state = self._state.with_budget(amount)
        return self._state

    def set_active_stage(self, stage: str) -> AllocationState:
        self._state = self._state.with_stage(stage)
        return self._state

    def reset(self, stage: Optional[str] = None) -> AllocationState:
        self._state = AllocationState.initial(self.catalog, stage or self._default_stage)
        return self._state

    # Derived values ----------------------------------------------------------

    def total_allocated(self) -> float:
        return self._state.total_allocated

    def allocated_amount(self) -> float:
        return self._state.allocated_amount

    def category_amount(self, category_id: str) -> float:
        return self._state.category_amount(category_id)

    def allocation_gap(self) -> float:
        """Percentage points above (positive) or below (negative) 100."""
        return self._state.total_allocated - 100

    def balance_status(self) -> str:
        return balance_status(self._state.total_allocated)
