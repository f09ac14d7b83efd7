#!/usr/bin/env python3
"""Collect baseline timings for the marginal relief calculation engine."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path
from time import perf_counter

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from marginalrelief.backend.app.models import CalculationRequest  # noqa: E402
from marginalrelief.backend.app.services.calculation_service import (  # noqa: E402
    calculate_marginal_relief_result,
)
from marginalrelief.backend.config.year_config import load_calculator_config  # noqa: E402

SAMPLE_REQUESTS = {
    "single_year": CalculationRequest(
        accounting_period_start=date(2023, 4, 1),
        accounting_period_end=date(2024, 3, 31),
        profit=Decimal("60000"),
    ),
    "straddled": CalculationRequest(
        accounting_period_start=date(2023, 10, 1),
        accounting_period_end=date(2024, 9, 30),
        profit=Decimal("120000"),
        exempt_distributions=Decimal("5000"),
        associated_companies_fy1=1,
        associated_companies_fy2=2,
    ),
}


def measure(iterations: int) -> dict[str, float]:
    """Return the mean duration in milliseconds for each sample request."""

    config = load_calculator_config()
    results: dict[str, float] = {}
    for name, request in SAMPLE_REQUESTS.items():
        calculate_marginal_relief_result(request, config)  # Warm up
        start = perf_counter()
        for _ in range(iterations):
            calculate_marginal_relief_result(request, config)
        elapsed = perf_counter() - start
        results[name] = round(elapsed / iterations * 1000, 4)
    return results


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--iterations", type=int, default=1000)
    args = parser.parse_args()

    print(json.dumps({"mean_ms": measure(args.iterations)}, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
