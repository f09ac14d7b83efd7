"""Utilities for serialising calculation and parameter responses."""

from __future__ import annotations

from typing import Any, Tuple

from flask import jsonify

from marginalrelief.backend.app.models import (
    AssociatedCompaniesRequirement,
    DualResult,
    DualResultResponse,
    MarginalReliefByYear,
    MarginalReliefByYearResponse,
    MarginalReliefResult,
    NotRequiredResponse,
    OnePeriod,
    OnePeriodResponse,
    Period,
    PeriodResponse,
    SingleResultResponse,
    TwoPeriodResponse,
    TwoPeriods,
)

ResponseTuple = Tuple[Any, int]


def _by_year_model(entry: MarginalReliefByYear) -> MarginalReliefByYearResponse:
    return MarginalReliefByYearResponse(
        year=entry.year,
        corporation_tax_before_mr=float(entry.corporation_tax_before_mr),
        effective_tax_rate_before_mr=float(entry.effective_rate_before_mr),
        corporation_tax=float(entry.corporation_tax),
        effective_tax_rate=float(entry.effective_rate),
        marginal_relief=float(entry.marginal_relief),
    )


def serialise_result(result: MarginalReliefResult) -> dict[str, Any]:
    """Return the JSON payload for a calculation result."""

    model: SingleResultResponse | DualResultResponse
    if isinstance(result, DualResult):
        model = DualResultResponse(
            year_one=_by_year_model(result.year_one),
            year_two=_by_year_model(result.year_two),
            effective_tax_rate_before_mr=float(result.effective_rate_before_mr),
            effective_tax_rate=float(result.effective_rate),
        )
    else:
        model = SingleResultResponse(
            corporation_tax_before_mr=float(result.corporation_tax_before_mr),
            effective_tax_rate_before_mr=float(result.effective_rate_before_mr),
            corporation_tax=float(result.corporation_tax),
            effective_tax_rate=float(result.effective_rate),
            marginal_relief=float(result.marginal_relief),
        )
    return model.model_dump(mode="json", by_alias=True)


def _period_model(period: Period) -> PeriodResponse:
    return PeriodResponse(start=period.start, end=period.end)


def serialise_requirement(requirement: AssociatedCompaniesRequirement) -> dict[str, Any]:
    """Return the JSON payload for an associated companies requirement."""

    model: NotRequiredResponse | OnePeriodResponse | TwoPeriodResponse
    if isinstance(requirement, OnePeriod):
        model = OnePeriodResponse(period=_period_model(requirement.period))
    elif isinstance(requirement, TwoPeriods):
        model = TwoPeriodResponse(
            period1=_period_model(requirement.period1),
            period2=_period_model(requirement.period2),
        )
    else:
        model = NotRequiredResponse()
    return model.model_dump(mode="json", by_alias=True)


def build_calculation_response(result: MarginalReliefResult) -> ResponseTuple:
    """Return a Flask JSON response for the calculation ``result``."""

    return jsonify(serialise_result(result)), 200


def build_parameters_response(requirement: AssociatedCompaniesRequirement) -> ResponseTuple:
    """Return a Flask JSON response for the parameter ``requirement``."""

    return jsonify(serialise_requirement(requirement)), 200
