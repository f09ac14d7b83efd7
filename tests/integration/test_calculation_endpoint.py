"""Integration tests for the marginal relief calculation endpoint."""

from __future__ import annotations

from http import HTTPStatus

import pytest
from flask.testing import FlaskClient

ENDPOINT = "/api/v1/calculate"


def test_single_year_calculation(client: FlaskClient) -> None:
    response = client.get(
        ENDPOINT,
        query_string={
            "accountingPeriodStart": "2023-04-01",
            "accountingPeriodEnd": "2024-03-31",
            "profit": "60000",
        },
    )

    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {
        "type": "SingleResult",
        "corporationTaxBeforeMR": pytest.approx(15000),
        "effectiveTaxRateBeforeMR": pytest.approx(25),
        "corporationTax": pytest.approx(12150),
        "effectiveTaxRate": pytest.approx(20.25),
        "marginalRelief": pytest.approx(2850),
    }


def test_straddled_calculation_reports_each_year(client: FlaskClient) -> None:
    response = client.get(
        ENDPOINT,
        query_string={
            "accountingPeriodStart": "2023-01-01",
            "accountingPeriodEnd": "2023-12-31",
            "profit": "60000",
            "associatedCompaniesFY2": "2",
        },
    )

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["type"] == "DualResult"
    assert payload["yearOne"] == {
        "year": 2022,
        "corporationTaxBeforeMR": pytest.approx(2810.96),
        "effectiveTaxRateBeforeMR": pytest.approx(19),
        "corporationTax": pytest.approx(2810.96),
        "effectiveTaxRate": pytest.approx(19),
        "marginalRelief": pytest.approx(0),
    }
    assert payload["yearTwo"]["year"] == 2023
    assert payload["yearTwo"]["corporationTax"] == pytest.approx(11037.67)
    assert payload["yearTwo"]["marginalRelief"] == pytest.approx(263.70)
    assert payload["effectiveTaxRateBeforeMR"] == pytest.approx(23.52)
    assert payload["effectiveTaxRate"] == pytest.approx(23.08)


def test_missing_profit_is_a_validation_error(client: FlaskClient) -> None:
    response = client.get(
        ENDPOINT,
        query_string={"accountingPeriodStart": "2023-04-01", "accountingPeriodEnd": "2024-03-31"},
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "profit: missing parameter" in payload["message"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"accountingPeriodStart": "not-a-date"},
        {"profit": "-100"},
        {"associatedCompanies": "1.5"},
        {"accountingPeriodEnd": "2023-01-01"},
    ],
    ids=["bad-date", "negative-profit", "fractional-count", "reversed-period"],
)
def test_invalid_parameters_are_rejected(client: FlaskClient, overrides: dict[str, str]) -> None:
    query = {
        "accountingPeriodStart": "2023-04-01",
        "accountingPeriodEnd": "2024-03-31",
        "profit": "1000",
        **overrides,
    }

    response = client.get(ENDPOINT, query_string=query)

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "validation_error"


def test_unconfigured_year_returns_unprocessable_entity(client: FlaskClient) -> None:
    response = client.get(
        ENDPOINT,
        query_string={
            "accountingPeriodStart": "2020-04-01",
            "accountingPeriodEnd": "2021-03-31",
            "profit": "1000",
        },
    )

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert response.get_json() == {
        "error": "config_missing",
        "message": "Configuration missing for financial year(s): 2020",
        "years": [2020],
    }


def test_period_over_three_financial_years_is_a_validation_error(client: FlaskClient) -> None:
    response = client.get(
        ENDPOINT,
        query_string={
            "accountingPeriodStart": "2023-04-01",
            "accountingPeriodEnd": "2025-06-30",
            "profit": "1000",
        },
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "more than two financial years" in payload["message"]
