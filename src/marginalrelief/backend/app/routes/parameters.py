"""REST endpoint telling clients which optional parameters to collect."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from marginalrelief.backend.app.http import current_calculator_config
from marginalrelief.backend.services import (
    associated_companies_parameters,
    build_parameters_response,
    parse_associated_companies_query,
)

blueprint = Blueprint("parameters", __name__, url_prefix="/api/v1/params")


@blueprint.get("/associated-companies")
def associated_companies() -> tuple[Any, int]:
    """Report whether associated company counts are needed, and for which periods."""

    query = parse_associated_companies_query(request)
    requirement = associated_companies_parameters(
        query.accounting_period_start,
        query.accounting_period_end,
        current_calculator_config(),
    )

    return build_parameters_response(requirement)
