"""Integration tests for the health check endpoint."""

from http import HTTPStatus

from flask.testing import FlaskClient

from marginalrelief.backend.version import get_project_version


def test_health_endpoint_reports_status(client: FlaskClient) -> None:
    response = client.get("/health")

    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {
        "status": "ok",
        "version": get_project_version(),
        "supported_years": [2022, 2023, 2024],
        "latest_year": 2024,
    }
