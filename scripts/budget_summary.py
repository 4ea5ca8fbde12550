#!/usr/bin/env python3
"""Print the budget allocator configuration and current comparison."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from budget_allocator.config import configure_logging  # noqa: E402
from budget_allocator.schemas import build_budget_data, format_budget_summary  # noqa: E402
from budget_allocator.store import AllocationState  # noqa: E402
from budget_allocator.summary import summarize  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="History seed (defaults to config)")
    parser.add_argument("--stage", default=None, help="Benchmark stage to compare against")
    parser.add_argument("--json", action="store_true", help="Dump the full payload as JSON")
    args = parser.parse_args()

    configure_logging()
    payload = build_budget_data(seed=args.seed)
    if args.json:
        print(json.dumps(payload.model_dump(by_alias=True), indent=2))
        return 0

    print(format_budget_summary(payload))
    state = AllocationState.initial(payload.to_catalog(), args.stage or payload.analytics.default_stage)
    print()
    print(summarize(state, payload).comparison.describe())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
