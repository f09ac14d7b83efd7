"""Helpers for turning query strings into validated service inputs."""

from __future__ import annotations

from typing import TypeVar

from flask import Request
from pydantic import BaseModel, ValidationError

from marginalrelief.backend.app.models import (
    AssociatedCompaniesQuery,
    CalculationQuery,
    CalculationRequest,
    format_validation_error,
)

QueryModel = TypeVar("QueryModel", bound=BaseModel)


def _parse_query(req: Request, model: type[QueryModel]) -> QueryModel:
    """Validate the query string of ``req`` against ``model``."""

    params = {key: value for key, value in req.args.items() if value != ""}
    try:
        return model.model_validate(params)
    except ValidationError as error:
        raise ValueError(format_validation_error(error)) from error


def parse_calculation_query(req: Request) -> CalculationRequest:
    """Extract the calculation inputs from the query string of ``req``."""

    query = _parse_query(req, CalculationQuery)
    return CalculationRequest(
        accounting_period_start=query.accounting_period_start,
        accounting_period_end=query.accounting_period_end,
        profit=query.profit,
        exempt_distributions=query.exempt_distributions,
        associated_companies=query.associated_companies,
        associated_companies_fy1=query.associated_companies_fy1,
        associated_companies_fy2=query.associated_companies_fy2,
    )


def parse_associated_companies_query(req: Request) -> AssociatedCompaniesQuery:
    """Extract the associated companies parameter inputs from ``req``."""

    return _parse_query(req, AssociatedCompaniesQuery)
