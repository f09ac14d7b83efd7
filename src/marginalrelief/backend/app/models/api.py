"""Pydantic models describing the public API surface."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

__all__ = [
    "AssociatedCompaniesQuery",
    "CalculationQuery",
    "DualResultResponse",
    "MarginalReliefByYearResponse",
    "NotRequiredResponse",
    "OnePeriodResponse",
    "PeriodResponse",
    "SingleResultResponse",
    "TwoPeriodResponse",
    "format_validation_error",
]


class _QueryModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class AssociatedCompaniesQuery(_QueryModel):
    """Query parameters accepted by the associated companies parameter endpoint."""

    accounting_period_start: date = Field(..., alias="accountingPeriodStart")
    accounting_period_end: date = Field(..., alias="accountingPeriodEnd")
    profit: Decimal = Field(..., ge=0, allow_inf_nan=False)
    exempt_distributions: Decimal = Field(
        default=Decimal(0), ge=0, alias="exemptDistributions", allow_inf_nan=False
    )

    @model_validator(mode="after")
    def _check_period(self) -> "AssociatedCompaniesQuery":
        if self.accounting_period_end < self.accounting_period_start:
            raise ValueError("accountingPeriodEnd cannot be before accountingPeriodStart")
        return self


class CalculationQuery(AssociatedCompaniesQuery):
    """Query parameters accepted by the calculation endpoint."""

    associated_companies: int | None = Field(
        default=None, ge=0, alias="associatedCompanies"
    )
    associated_companies_fy1: int | None = Field(
        default=None, ge=0, alias="associatedCompaniesFY1"
    )
    associated_companies_fy2: int | None = Field(
        default=None, ge=0, alias="associatedCompaniesFY2"
    )


class _ResponseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class SingleResultResponse(_ResponseModel):
    type: Literal["SingleResult"] = "SingleResult"
    corporation_tax_before_mr: float = Field(..., alias="corporationTaxBeforeMR")
    effective_tax_rate_before_mr: float = Field(..., alias="effectiveTaxRateBeforeMR")
    corporation_tax: float = Field(..., alias="corporationTax")
    effective_tax_rate: float = Field(..., alias="effectiveTaxRate")
    marginal_relief: float = Field(..., alias="marginalRelief")


class MarginalReliefByYearResponse(_ResponseModel):
    year: int
    corporation_tax_before_mr: float = Field(..., alias="corporationTaxBeforeMR")
    effective_tax_rate_before_mr: float = Field(..., alias="effectiveTaxRateBeforeMR")
    corporation_tax: float = Field(..., alias="corporationTax")
    effective_tax_rate: float = Field(..., alias="effectiveTaxRate")
    marginal_relief: float = Field(..., alias="marginalRelief")


class DualResultResponse(_ResponseModel):
    type: Literal["DualResult"] = "DualResult"
    year_one: MarginalReliefByYearResponse = Field(..., alias="yearOne")
    year_two: MarginalReliefByYearResponse = Field(..., alias="yearTwo")
    effective_tax_rate_before_mr: float = Field(..., alias="effectiveTaxRateBeforeMR")
    effective_tax_rate: float = Field(..., alias="effectiveTaxRate")


class PeriodResponse(_ResponseModel):
    start: date
    end: date


class NotRequiredResponse(_ResponseModel):
    type: Literal["NotRequired"] = "NotRequired"


class OnePeriodResponse(_ResponseModel):
    type: Literal["OnePeriod"] = "OnePeriod"
    period: PeriodResponse


class TwoPeriodResponse(_ResponseModel):
    type: Literal["TwoPeriod"] = "TwoPeriod"
    period1: PeriodResponse
    period2: PeriodResponse


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        if issue.get("type") == "missing":
            message = "missing parameter"
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid query parameters: {details}"
