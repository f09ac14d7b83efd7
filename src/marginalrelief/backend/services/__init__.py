"""Service-layer helpers for the marginal relief backend."""

from marginalrelief.backend.app.services.calculation_service import (
    calculate_marginal_relief_result,
)
from marginalrelief.backend.app.services.errors import (
    AssociatedCompaniesParameterError,
    ConfigMissingError,
)
from marginalrelief.backend.app.services.parameters_service import (
    associated_companies_parameters,
)

from .request_parser import parse_associated_companies_query, parse_calculation_query
from .response_builder import build_calculation_response, build_parameters_response

__all__ = [
    "AssociatedCompaniesParameterError",
    "ConfigMissingError",
    "associated_companies_parameters",
    "build_calculation_response",
    "build_parameters_response",
    "calculate_marginal_relief_result",
    "parse_associated_companies_query",
    "parse_calculation_query",
]
