"""REST endpoint for marginal relief calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from marginalrelief.backend.app.http import current_calculator_config
from marginalrelief.backend.services import (
    build_calculation_response,
    calculate_marginal_relief_result,
    parse_calculation_query,
)

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1")


@blueprint.get("/calculate")
def calculate() -> tuple[Any, int]:
    """Calculate corporation tax and marginal relief from query parameters."""

    calculation_request = parse_calculation_query(request)
    result = calculate_marginal_relief_result(
        calculation_request, current_calculator_config()
    )

    return build_calculation_response(result)
