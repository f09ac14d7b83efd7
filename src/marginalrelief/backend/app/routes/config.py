"""Expose the financial year configuration consumed by the calculator.

Clients use these endpoints to show which years are supported and the rates
and thresholds that apply, without duplicating the configuration table.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from flask import Blueprint, jsonify

from marginalrelief.backend.app.http import current_calculator_config, problem_response
from marginalrelief.backend.app.services.calculators import format_percentage
from marginalrelief.backend.config.year_config import (
    FinancialYearConfig,
    MarginalReliefConfig,
)
from marginalrelief.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the configuration table."""

    supported_years = list(current_calculator_config().supported_years)
    latest_year = supported_years[-1] if supported_years else None
    return {
        "version": get_project_version(),
        "supported_years": supported_years,
        "latest_year": latest_year,
    }


def _serialise_rate(value: Decimal) -> dict[str, Any]:
    return {"value": float(value), "label": format_percentage(value)}


def _serialise_financial_year(config: FinancialYearConfig) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "year": config.year,
        "type": config.kind,
        "main_rate": _serialise_rate(config.main_rate),
    }
    if isinstance(config, MarginalReliefConfig):
        payload.update(
            {
                "lower_threshold": config.lower_threshold,
                "upper_threshold": config.upper_threshold,
                "small_profit_rate": _serialise_rate(config.small_profit_rate),
                "marginal_relief_fraction": float(config.marginal_relief_fraction),
            }
        )
    return payload


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    """Expose lightweight application metadata such as the version identifier."""

    return jsonify(get_configuration_metadata()), 200


@blueprint.get("/financial-years")
def list_financial_years() -> tuple[Any, int]:
    """Return every configured financial year with its rules."""

    config = current_calculator_config()
    payload = {
        "financial_years": [
            _serialise_financial_year(entry) for entry in config.financial_years
        ],
        "supported_years": list(config.supported_years),
    }
    return jsonify(payload), 200


@blueprint.get("/financial-years/<int:year>")
def get_financial_year(year: int) -> tuple[Any, int]:
    """Return the rules configured for a single financial year."""

    entry = current_calculator_config().find(year)
    if entry is None:
        return problem_response(
            "not_found",
            status=404,
            message=f"Financial year {year} is not configured",
        ).to_response()

    return jsonify(_serialise_financial_year(entry)), 200
