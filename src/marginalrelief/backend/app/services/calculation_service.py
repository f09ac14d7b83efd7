"""Marginal relief calculation engine.

The engine maps an accounting period onto the April to March financial year
calendar, looks up the rules for the year(s) involved and apportions profit,
thresholds and associated companies between them. It is a pure function of the
request and the read-only configuration table, so a single table can be shared
by any number of concurrent requests.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from time import perf_counter

from marginalrelief.backend.app.models import (
    CalculationRequest,
    DualResult,
    MarginalReliefByYear,
    MarginalReliefResult,
    SingleResult,
)
from marginalrelief.backend.config.year_config import (
    CalculatorConfig,
    FinancialYearConfig,
    FlatRateConfig,
    MarginalReliefConfig,
)

from .calculators import (
    TaxComputation,
    annual_basis,
    calculate_flat_rate,
    calculate_marginal_relief,
    days_between_inclusive,
    financial_year_end,
    is_single_financial_year,
    percentage_of,
    round_currency,
    round_rate,
    spans_at_most_two_financial_years,
    threshold_ratio,
)
from .errors import ConfigMissingError

_LOGGER = logging.getLogger(__name__)

PROFILE_ENV = "MARGINALRELIEF_PROFILE_CALCULATIONS"


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv(PROFILE_ENV, "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _validate_request(request: CalculationRequest) -> None:
    # The HTTP layer rejects most of these first; library callers get the same guard.
    if request.accounting_period_end < request.accounting_period_start:
        raise ValueError("Accounting period end cannot be before its start")
    if not spans_at_most_two_financial_years(
        request.accounting_period_start, request.accounting_period_end
    ):
        raise ValueError("Accounting period cannot span more than two financial years")
    if request.profit < 0:
        raise ValueError("Profit cannot be negative")
    if request.exempt_distributions < 0:
        raise ValueError("Exempt distributions cannot be negative")
    for label, count in (
        ("associated companies", request.associated_companies),
        ("associated companies (FY1)", request.associated_companies_fy1),
        ("associated companies (FY2)", request.associated_companies_fy2),
    ):
        if count is not None and count < 0:
            raise ValueError(f"Number of {label} cannot be negative")


def resolve_associated_companies(
    request: CalculationRequest,
    year: int,
    fy1: int,
    fy1_config: MarginalReliefConfig,
    fy2_config: MarginalReliefConfig,
) -> int:
    """Return the number of companies sharing the thresholds for ``year``.

    The count includes the company itself. Rules, in order: a whole-period
    count wins; a single per-year count applies to both years; two per-year
    counts collapse to their maximum when thresholds are unchanged, otherwise
    each year uses its own count; with nothing supplied the company is alone.
    """

    if request.associated_companies is not None:
        return request.associated_companies + 1

    count_fy1 = request.associated_companies_fy1
    count_fy2 = request.associated_companies_fy2

    if count_fy1 is not None and count_fy2 is None:
        return count_fy1 + 1
    if count_fy2 is not None and count_fy1 is None:
        return count_fy2 + 1
    if count_fy1 is not None and count_fy2 is not None:
        if fy1_config.thresholds_match(fy2_config):
            return max(count_fy1, count_fy2) + 1
        return (count_fy1 if year == fy1 else count_fy2) + 1
    return 1


def _single_result(computation: TaxComputation) -> SingleResult:
    return SingleResult(
        corporation_tax_before_mr=round_currency(computation.corporation_tax_before_mr),
        effective_rate_before_mr=round_rate(computation.effective_rate_before_mr),
        corporation_tax=round_currency(computation.corporation_tax),
        effective_rate=round_rate(computation.effective_rate),
        marginal_relief=round_currency(computation.marginal_relief),
    )


def _by_year(computation: TaxComputation) -> MarginalReliefByYear:
    return MarginalReliefByYear(
        year=computation.year,
        corporation_tax_before_mr=round_currency(computation.corporation_tax_before_mr),
        effective_rate_before_mr=round_rate(computation.effective_rate_before_mr),
        corporation_tax=round_currency(computation.corporation_tax),
        effective_rate=round_rate(computation.effective_rate),
        marginal_relief=round_currency(computation.marginal_relief),
    )


def _dual_result(
    first: TaxComputation, second: TaxComputation, profit: Decimal
) -> DualResult:
    before_mr = first.corporation_tax_before_mr + second.corporation_tax_before_mr
    after_mr = first.corporation_tax + second.corporation_tax
    return DualResult(
        year_one=_by_year(first),
        year_two=_by_year(second),
        effective_rate_before_mr=round_rate(percentage_of(before_mr, profit)),
        effective_rate=round_rate(percentage_of(after_mr, profit)),
    )


def _calculate_single_year(
    request: CalculationRequest,
    config: CalculatorConfig,
    days_in_period: int,
) -> SingleResult:
    year = request.accounting_period_start.year
    fy_config = config.find(year)
    if fy_config is None:
        raise ConfigMissingError((year,))

    if isinstance(fy_config, FlatRateConfig):
        _LOGGER.debug("Single financial year %s at flat rate", year)
        computation = calculate_flat_rate(request.profit, Decimal(1), fy_config)
    else:
        _LOGGER.debug("Single financial year %s with marginal relief", year)
        companies = (request.associated_companies or 0) + 1
        computation = calculate_marginal_relief(
            request.profit,
            request.exempt_distributions,
            Decimal(1),
            fy_config,
            companies=companies,
            ratio=Decimal(days_in_period) / annual_basis(days_in_period),
        )

    return _single_result(computation)


def _calculate_part(
    request: CalculationRequest,
    fy_config: FinancialYearConfig,
    ap_days_in_year: int,
    days_in_period: int,
    *,
    companies: int,
    upper_thresholds_differ: bool = False,
) -> TaxComputation:
    ap_fy_ratio = Decimal(ap_days_in_year) / days_in_period
    if isinstance(fy_config, FlatRateConfig):
        return calculate_flat_rate(request.profit, ap_fy_ratio, fy_config)
    return calculate_marginal_relief(
        request.profit,
        request.exempt_distributions,
        ap_fy_ratio,
        fy_config,
        companies=companies,
        ratio=threshold_ratio(
            ap_days_in_year,
            fy_config.year,
            days_in_period,
            upper_thresholds_differ=upper_thresholds_differ,
        ),
    )


def _calculate_straddled(
    request: CalculationRequest,
    config: CalculatorConfig,
    days_in_period: int,
    fy_end: date,
) -> DualResult:
    fy1 = fy_end.year - 1
    fy2 = fy_end.year
    ap_days_fy1 = days_between_inclusive(request.accounting_period_start, fy_end)
    ap_days_fy2 = days_in_period - ap_days_fy1

    fy1_config = config.find(fy1)
    fy2_config = config.find(fy2)
    missing = [year for year, entry in ((fy1, fy1_config), (fy2, fy2_config)) if entry is None]
    if missing:
        raise ConfigMissingError(missing)

    _LOGGER.debug(
        "Accounting period straddles %s (%s) and %s (%s)",
        fy1,
        fy1_config.kind,
        fy2,
        fy2_config.kind,
    )

    if isinstance(fy1_config, MarginalReliefConfig) and isinstance(
        fy2_config, MarginalReliefConfig
    ):
        differ = fy1_config.upper_threshold != fy2_config.upper_threshold
        first = _calculate_part(
            request,
            fy1_config,
            ap_days_fy1,
            days_in_period,
            companies=resolve_associated_companies(request, fy1, fy1, fy1_config, fy2_config),
            upper_thresholds_differ=differ,
        )
        second = _calculate_part(
            request,
            fy2_config,
            ap_days_fy2,
            days_in_period,
            companies=resolve_associated_companies(request, fy2, fy1, fy1_config, fy2_config),
            upper_thresholds_differ=differ,
        )
    else:
        # At most one side has thresholds, so both use the 365/366 day basis.
        first = _calculate_part(
            request,
            fy1_config,
            ap_days_fy1,
            days_in_period,
            companies=(request.associated_companies_fy1 or 0) + 1,
        )
        second = _calculate_part(
            request,
            fy2_config,
            ap_days_fy2,
            days_in_period,
            companies=(request.associated_companies_fy2 or 0) + 1,
        )

    return _dual_result(first, second, request.profit)


def calculate_marginal_relief_result(
    request: CalculationRequest, config: CalculatorConfig
) -> MarginalReliefResult:
    """Compute corporation tax, marginal relief and effective rates.

    Raises :class:`ConfigMissingError` naming the financial year(s) without
    configuration; nothing is computed in that case.
    """

    _validate_request(request)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    start = request.accounting_period_start
    end = request.accounting_period_end
    days_in_period = days_between_inclusive(start, end)

    result: MarginalReliefResult
    if is_single_financial_year(start, end):
        with _profile_section("single_year", timings):
            result = _calculate_single_year(request, config, days_in_period)
    else:
        with _profile_section("straddled", timings):
            result = _calculate_straddled(
                request, config, days_in_period, financial_year_end(start)
            )

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_marginal_relief_result timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    return result


__all__ = [
    "ConfigMissingError",
    "calculate_marginal_relief_result",
    "resolve_associated_companies",
]
