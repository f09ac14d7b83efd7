"""Typed request and result models shared across the calculation services.

Incoming query strings are validated by the Pydantic models in ``api``; the
services themselves work on the plain frozen dataclasses defined here so that
the engine stays free of any HTTP or serialisation concerns.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Union

from .api import (
    AssociatedCompaniesQuery,
    CalculationQuery,
    DualResultResponse,
    MarginalReliefByYearResponse,
    NotRequiredResponse,
    OnePeriodResponse,
    PeriodResponse,
    SingleResultResponse,
    TwoPeriodResponse,
    format_validation_error,
)

__all__ = [
    "AssociatedCompaniesQuery",
    "AssociatedCompaniesRequirement",
    "CalculationQuery",
    "CalculationRequest",
    "DualResult",
    "DualResultResponse",
    "MarginalReliefByYear",
    "MarginalReliefByYearResponse",
    "MarginalReliefResult",
    "NotRequired",
    "NotRequiredResponse",
    "OnePeriod",
    "OnePeriodResponse",
    "Period",
    "PeriodResponse",
    "SingleResult",
    "SingleResultResponse",
    "TwoPeriodResponse",
    "TwoPeriods",
    "format_validation_error",
]


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@dataclass(frozen=True)
class CalculationRequest:
    """Inputs for a single marginal relief calculation.

    The per-year associated company counts only matter when the accounting
    period straddles two financial years.
    """

    accounting_period_start: date
    accounting_period_end: date
    profit: Decimal
    exempt_distributions: Decimal = Decimal(0)
    associated_companies: int | None = None
    associated_companies_fy1: int | None = None
    associated_companies_fy2: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "profit", _as_decimal(self.profit))
        object.__setattr__(
            self, "exempt_distributions", _as_decimal(self.exempt_distributions)
        )


@dataclass(frozen=True)
class Period:
    """Inclusive date range."""

    start: date
    end: date


@dataclass(frozen=True)
class SingleResult:
    corporation_tax_before_mr: Decimal
    effective_rate_before_mr: Decimal
    corporation_tax: Decimal
    effective_rate: Decimal
    marginal_relief: Decimal


@dataclass(frozen=True)
class MarginalReliefByYear:
    year: int
    corporation_tax_before_mr: Decimal
    effective_rate_before_mr: Decimal
    corporation_tax: Decimal
    effective_rate: Decimal
    marginal_relief: Decimal


@dataclass(frozen=True)
class DualResult:
    """Per-year breakdown for a period straddling two financial years.

    The top-level rates are computed over the profit of the whole period.
    """

    year_one: MarginalReliefByYear
    year_two: MarginalReliefByYear
    effective_rate_before_mr: Decimal
    effective_rate: Decimal


MarginalReliefResult = Union[SingleResult, DualResult]


@dataclass(frozen=True)
class NotRequired:
    """No associated company information is needed for the calculation."""


@dataclass(frozen=True)
class OnePeriod:
    period: Period


@dataclass(frozen=True)
class TwoPeriods:
    period1: Period
    period2: Period


AssociatedCompaniesRequirement = Union[NotRequired, OnePeriod, TwoPeriods]
