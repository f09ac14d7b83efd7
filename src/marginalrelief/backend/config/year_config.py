"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    CalculatorConfig,
    ConfigurationError,
    FinancialYearConfig,
    FlatRateConfig,
    MarginalReliefConfig,
    parse_financial_year,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
CONFIG_FILE = CONFIG_DIRECTORY / "financial_years.yaml"
CONFIG_FILE_ENV = "MARGINALRELIEF_CONFIG_FILE"

_LOGGER = logging.getLogger(__name__)


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def resolve_config_path() -> Path:
    """Return the configuration file honouring the environment override."""

    override = os.getenv(CONFIG_FILE_ENV, "").strip()
    if override:
        return Path(override)
    return CONFIG_FILE


def parse_calculator_config(raw_config: dict[str, Any]) -> CalculatorConfig:
    """Validate an in-memory mapping as a calculator configuration table."""

    try:
        return CalculatorConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Configuration validation failed: {error}") from error


def load_config_file(path: Path) -> CalculatorConfig:
    """Load and validate the configuration table stored at ``path``."""

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    configuration = parse_calculator_config(_load_yaml(path))
    _LOGGER.info(
        "Loaded financial year configuration from %s (years: %s)",
        path.name,
        ", ".join(str(year) for year in configuration.supported_years) or "none",
    )
    return configuration


@lru_cache(maxsize=1)
def load_calculator_config() -> CalculatorConfig:
    """Load and cache the configuration table used by the running service."""

    return load_config_file(resolve_config_path())


__all__ = [
    "CONFIG_DIRECTORY",
    "CONFIG_FILE",
    "CONFIG_FILE_ENV",
    "CalculatorConfig",
    "ConfigurationError",
    "FinancialYearConfig",
    "FlatRateConfig",
    "MarginalReliefConfig",
    "load_calculator_config",
    "load_config_file",
    "parse_calculator_config",
    "parse_financial_year",
    "resolve_config_path",
]
