"""Configuration management for the budget allocator.

This module centralizes all configuration values including the catalog
path, the history seed, numeric thresholds and environment variable
overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Package root - assumes this file is in budget_allocator/
_PACKAGE_ROOT = Path(__file__).parent.resolve()

# Category catalog (categories, presets, currency)
CATALOG_PATH = Path(
    os.getenv("BUDGET_ALLOCATOR_CATALOG_PATH", _PACKAGE_ROOT / "data" / "catalog.json")
).resolve()

# History synthesis
HISTORY_SEED = int(os.getenv("BUDGET_ALLOCATOR_HISTORY_SEED", "42"))
HISTORY_MONTHS = 24
HISTORY_NOISE_SPREAD = 3.0

# Comparison and status thresholds (percentage points)
MATERIALITY_THRESHOLD = 3.0
BALANCE_TOLERANCE = 0.1
FLAT_TREND_THRESHOLD = 0.5

LOG_LEVEL = os.getenv("BUDGET_ALLOCATOR_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the app entry points."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)


def get_catalog_path() -> str:
    """Get the catalog path as a string."""
    return str(CATALOG_PATH)
