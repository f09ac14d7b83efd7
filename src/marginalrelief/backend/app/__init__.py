"""Application factory for the marginal relief calculator service."""

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import BadRequest

from marginalrelief.backend.app.services.errors import (
    AssociatedCompaniesParameterError,
    ConfigMissingError,
)
from marginalrelief.backend.config.year_config import (
    CalculatorConfig,
    load_calculator_config,
)

from .http import CALCULATOR_CONFIG_KEY, problem_response
from .routes import register_routes
from .routes.config import get_configuration_metadata

_LOGGER = logging.getLogger(__name__)


def create_app(calculator_config: CalculatorConfig | None = None) -> Flask:
    """Create and configure the Flask application instance.

    The configuration table is loaded once here; a broken or missing table
    stops start-up rather than failing individual requests.
    """

    app = Flask(__name__)

    if calculator_config is None:
        calculator_config = load_calculator_config()
    app.config[CALCULATOR_CONFIG_KEY] = calculator_config

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {"status": "ok", **get_configuration_metadata()}
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed requests."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(ConfigMissingError)
    def handle_config_missing(error: ConfigMissingError):
        """Surface missing financial year configuration as 422 responses."""

        _LOGGER.warning("%s", error)
        return problem_response(
            "config_missing", status=422, message=str(error), years=list(error.years)
        ).to_response()

    @app.errorhandler(AssociatedCompaniesParameterError)
    def handle_parameter_errors(error: AssociatedCompaniesParameterError):
        """Report every missing financial year found by the parameter service."""

        _LOGGER.warning("%s", error)
        return problem_response(
            "config_missing",
            status=422,
            message=str(error),
            years=list(error.years),
            errors=[error_entry.message for error_entry in error.errors],
        ).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Gracefully surface domain validation errors to clients."""

        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()

    return app
