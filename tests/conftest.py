"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from marginalrelief.backend.app import create_app  # noqa: E402
from marginalrelief.backend.config.year_config import (  # noqa: E402
    CalculatorConfig,
    parse_calculator_config,
)

STANDARD_MARGINAL_RELIEF = {
    "lower_threshold": 50000,
    "upper_threshold": 250000,
    "small_profit_rate": 0.19,
    "main_rate": 0.25,
    "marginal_relief_fraction": 0.015,
}


def build_config(*entries: dict) -> CalculatorConfig:
    """Return a configuration table built from raw year mappings."""

    return parse_calculator_config({"financial_years": list(entries)})


def flat_rate_year(year: int, main_rate: float = 0.19) -> dict:
    return {"year": year, "main_rate": main_rate}


def marginal_relief_year(year: int, **overrides: object) -> dict:
    return {"year": year, **STANDARD_MARGINAL_RELIEF, **overrides}


@pytest.fixture()
def calculator_config() -> CalculatorConfig:
    """Flat rate 2022 followed by two identical marginal relief years."""

    return build_config(
        flat_rate_year(2022),
        marginal_relief_year(2023),
        marginal_relief_year(2024),
    )


@pytest.fixture()
def app(calculator_config: CalculatorConfig) -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app(calculator_config)
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
