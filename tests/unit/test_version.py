"""Unit coverage for the project version helper."""

from __future__ import annotations

import tomllib
from importlib import metadata
from pathlib import Path

import pytest

from marginalrelief.backend import version as version_module
from marginalrelief.backend.version import get_project_version


def read_pyproject_version() -> str:
    pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    with pyproject_path.open("rb") as handle:
        return tomllib.load(handle)["project"]["version"]


@pytest.fixture(autouse=True)
def _clear_version_cache():
    get_project_version.cache_clear()  # type: ignore[attr-defined]
    yield
    get_project_version.cache_clear()  # type: ignore[attr-defined]


def test_get_project_version_prefers_package_metadata(monkeypatch) -> None:
    monkeypatch.setattr(metadata, "version", lambda package: "9.9.9")

    assert get_project_version() == "9.9.9"


def test_get_project_version_falls_back_to_pyproject(monkeypatch) -> None:
    def raise_package_not_found(_: str) -> str:
        raise metadata.PackageNotFoundError

    monkeypatch.setattr(metadata, "version", raise_package_not_found)

    assert get_project_version() == read_pyproject_version()


def test_missing_version_in_pyproject_is_an_error(tmp_path, monkeypatch) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "marginalrelief"\n', encoding="utf-8")

    def raise_package_not_found(_: str) -> str:
        raise metadata.PackageNotFoundError

    monkeypatch.setattr(metadata, "version", raise_package_not_found)
    monkeypatch.setattr(version_module, "PYPROJECT_PATH", pyproject)

    with pytest.raises(RuntimeError, match="Unable to determine project version"):
        get_project_version()
