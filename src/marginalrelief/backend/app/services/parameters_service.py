"""Decide which associated company counts a caller must collect up front.

Unlike the calculation engine, which stops at the first lookup failure, this
service checks both financial years of a straddling period and reports every
missing one so a client can fix all gaps in one round trip.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from marginalrelief.backend.app.models import (
    AssociatedCompaniesRequirement,
    NotRequired,
    OnePeriod,
    Period,
    TwoPeriods,
)
from marginalrelief.backend.config.year_config import (
    CalculatorConfig,
    FinancialYearConfig,
    FlatRateConfig,
    MarginalReliefConfig,
)

from .calculators import financial_year_end, spans_at_most_two_financial_years
from .errors import AssociatedCompaniesParameterError, ConfigMissingError

_LOGGER = logging.getLogger(__name__)


def _lookup(
    config: CalculatorConfig, year: int, errors: list[ConfigMissingError]
) -> FinancialYearConfig | None:
    entry = config.find(year)
    if entry is None:
        errors.append(ConfigMissingError((year,)))
    return entry


def associated_companies_parameters(
    accounting_period_start: date,
    accounting_period_end: date,
    config: CalculatorConfig,
) -> AssociatedCompaniesRequirement:
    """Return whether and for which period(s) associated companies are needed.

    Raises :class:`AssociatedCompaniesParameterError` listing one error per
    financial year that has no configuration.
    """

    if accounting_period_end < accounting_period_start:
        raise ValueError("Accounting period end cannot be before its start")
    if not spans_at_most_two_financial_years(accounting_period_start, accounting_period_end):
        raise ValueError("Accounting period cannot span more than two financial years")

    fy_end = financial_year_end(accounting_period_start)
    errors: list[ConfigMissingError] = []

    if fy_end >= accounting_period_end:
        fy_config = _lookup(config, fy_end.year - 1, errors)
        if fy_config is None:
            raise AssociatedCompaniesParameterError(errors)
        if isinstance(fy_config, FlatRateConfig):
            return NotRequired()
        return OnePeriod(Period(accounting_period_start, accounting_period_end))

    fy1_config = _lookup(config, fy_end.year - 1, errors)
    fy2_config = _lookup(config, fy_end.year, errors)
    if fy1_config is None or fy2_config is None:
        raise AssociatedCompaniesParameterError(errors)

    first_part = Period(accounting_period_start, fy_end)
    second_part = Period(fy_end + timedelta(days=1), accounting_period_end)
    _LOGGER.debug(
        "Associated companies requirement for %s (%s) and %s (%s)",
        fy1_config.year,
        fy1_config.kind,
        fy2_config.year,
        fy2_config.kind,
    )

    if isinstance(fy1_config, MarginalReliefConfig) and isinstance(
        fy2_config, MarginalReliefConfig
    ):
        if fy1_config.thresholds_match(fy2_config):
            return OnePeriod(Period(accounting_period_start, accounting_period_end))
        return TwoPeriods(first_part, second_part)
    if isinstance(fy1_config, MarginalReliefConfig):
        return OnePeriod(first_part)
    if isinstance(fy2_config, MarginalReliefConfig):
        return OnePeriod(second_part)
    return NotRequired()


__all__ = ["associated_companies_parameters"]
