"""Utilities for validating financial year configuration and surfacing issues.

The schema already rejects structurally broken tables. These checks cover
values that load fine but are probably not what an operator intended, such as
a standard fraction that does not taper relief down to the small profits rate.
"""

from __future__ import annotations

import argparse
from decimal import Decimal
from pathlib import Path
from typing import Sequence

from .year_config import (
    CalculatorConfig,
    ConfigurationError,
    FinancialYearConfig,
    MarginalReliefConfig,
    load_calculator_config,
    load_config_file,
)

FRACTION_TOLERANCE = Decimal("0.0001")


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _expected_fraction(config: MarginalReliefConfig) -> Decimal:
    band = Decimal(config.upper_threshold - config.lower_threshold)
    return (config.main_rate - config.small_profit_rate) * config.lower_threshold / band


def _validate_marginal_relief(config: MarginalReliefConfig) -> list[str]:
    errors: list[str] = []

    if config.small_profit_rate > config.main_rate:
        errors.append(
            _format_scope(
                "rates",
                f"small profit rate {config.small_profit_rate} exceeds main rate "
                f"{config.main_rate}",
            )
        )

    if config.marginal_relief_fraction == 0:
        errors.append(
            _format_scope("marginal_relief_fraction", "fraction is zero so no relief applies")
        )
    else:
        expected = _expected_fraction(config)
        if abs(expected - config.marginal_relief_fraction) > FRACTION_TOLERANCE:
            errors.append(
                _format_scope(
                    "marginal_relief_fraction",
                    f"fraction {config.marginal_relief_fraction} does not taper to the "
                    f"small profit rate at the lower threshold (expected {expected:.4f})",
                )
            )

    return errors


def validate_financial_year(config: FinancialYearConfig) -> list[str]:
    """Return a list of validation issues for a single financial year."""

    if isinstance(config, MarginalReliefConfig):
        return _validate_marginal_relief(config)
    return []


def validate_calculator_config(config: CalculatorConfig) -> dict[int, list[str]]:
    """Validate every configured year and return issues keyed by year."""

    results: dict[int, list[str]] = {}
    previous_year: int | None = None

    for entry in config.financial_years:
        issues = validate_financial_year(entry)
        if previous_year is not None and entry.year != previous_year + 1:
            missing = ", ".join(str(year) for year in range(previous_year + 1, entry.year))
            issues.insert(
                0,
                _format_scope("coverage", f"no configuration for financial year(s) {missing}"),
            )
        results[entry.year] = issues
        previous_year = entry.year

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the configured financial years and report issues."
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to report (defaults to all configured years)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file to validate (defaults to the service configuration)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    try:
        if args.config is not None:
            config = load_config_file(args.config)
        else:
            config = load_calculator_config()
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"failed to load configuration: {error}")
        return 1

    results = validate_calculator_config(config)
    years = args.years or list(results)

    if not years:
        parser.print_help()
        return 1

    exit_code = 0

    for year in years:
        if year not in results:
            print(f"[{year}] not configured")
            exit_code = 1
            continue

        issues = results[year]
        if issues:
            exit_code = 1
            print(f"[{year}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{year}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
