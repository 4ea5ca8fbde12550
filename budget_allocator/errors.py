"""Exception types raised by the budget allocator core."""

from __future__ import annotations


class BudgetAllocatorError(Exception):
    """Base class for all budget allocator errors."""


class CatalogError(BudgetAllocatorError, ValueError):
    """The category catalog file is inconsistent."""


class MalformedBenchmarkError(BudgetAllocatorError, ValueError):
    """A benchmark triple is not ordered p25 <= p50 <= p75."""


class UnknownCategoryError(BudgetAllocatorError, KeyError):
    """A category id is not part of the catalog."""
