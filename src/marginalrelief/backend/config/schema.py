"""Pydantic models describing the financial year configuration schema."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _coerce_decimal(value: Any) -> Any:
    # YAML hands floats over; go through ``str`` so 0.19 stays exactly 0.19.
    if isinstance(value, float):
        return str(value)
    return value


def _check_rate(label: str, value: Decimal) -> None:
    if value < 0 or value > 1:
        raise ConfigurationError(f"{label} {value} must be between 0 and 1")


class FlatRateConfig(ImmutableModel):
    """A financial year taxed at a single main rate with no relief."""

    year: int = Field(..., ge=1900)
    main_rate: Decimal = Field(..., alias="main-rate")

    @field_validator("main_rate", mode="before")
    @classmethod
    def _coerce_rate(cls, value: Any) -> Any:
        return _coerce_decimal(value)

    @model_validator(mode="after")
    def _validate_rate(self) -> FlatRateConfig:
        _check_rate("Main rate", self.main_rate)
        return self

    @property
    def kind(self) -> str:
        return "FlatRate"


class MarginalReliefConfig(ImmutableModel):
    """A financial year with small profits rate, main rate and tapering relief."""

    year: int = Field(..., ge=1900)
    lower_threshold: int = Field(..., alias="lower-threshold")
    upper_threshold: int = Field(..., alias="upper-threshold")
    small_profit_rate: Decimal = Field(..., alias="small-profit-rate")
    main_rate: Decimal = Field(..., alias="main-rate")
    marginal_relief_fraction: Decimal = Field(..., alias="marginal-relief-fraction")

    @field_validator(
        "small_profit_rate", "main_rate", "marginal_relief_fraction", mode="before"
    )
    @classmethod
    def _coerce_rates(cls, value: Any) -> Any:
        return _coerce_decimal(value)

    @model_validator(mode="after")
    def _validate_values(self) -> MarginalReliefConfig:
        if self.lower_threshold <= 0:
            raise ConfigurationError("Lower threshold must be a positive amount")
        if self.lower_threshold >= self.upper_threshold:
            raise ConfigurationError(
                f"Lower threshold {self.lower_threshold} must be below upper threshold "
                f"{self.upper_threshold}"
            )
        _check_rate("Small profit rate", self.small_profit_rate)
        _check_rate("Main rate", self.main_rate)
        _check_rate("Marginal relief fraction", self.marginal_relief_fraction)
        return self

    @property
    def kind(self) -> str:
        return "MarginalRelief"

    def thresholds_match(self, other: MarginalReliefConfig) -> bool:
        """Return ``True`` when both years share lower and upper thresholds."""

        return (
            self.lower_threshold == other.lower_threshold
            and self.upper_threshold == other.upper_threshold
        )


FinancialYearConfig = Union[FlatRateConfig, MarginalReliefConfig]

MARGINAL_RELIEF_KEYS = frozenset(
    {
        "lower_threshold",
        "upper_threshold",
        "small_profit_rate",
        "marginal_relief_fraction",
        "lower-threshold",
        "upper-threshold",
        "small-profit-rate",
        "marginal-relief-fraction",
    }
)


def parse_financial_year(data: Any) -> FinancialYearConfig:
    """Validate a raw mapping as whichever financial year variant it describes.

    Any marginal relief key selects the marginal relief variant, which then
    requires all of its fields; otherwise the entry must be a flat rate year.
    """

    if isinstance(data, (FlatRateConfig, MarginalReliefConfig)):
        return data
    if not isinstance(data, Mapping):
        raise ConfigurationError("Financial year entries must be mappings")
    if MARGINAL_RELIEF_KEYS.intersection(data):
        return MarginalReliefConfig.model_validate(data)
    return FlatRateConfig.model_validate(data)


class CalculatorConfig(ImmutableModel):
    """Read-only table of per financial year tax rules."""

    financial_years: tuple[FinancialYearConfig, ...] = Field(
        default=(), alias="fy-configs"
    )

    @field_validator("financial_years", mode="before")
    @classmethod
    def _parse_entries(cls, value: Any) -> tuple[FinancialYearConfig, ...]:
        if value is None:
            return ()
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            raise ConfigurationError("Financial years must be provided as a list")
        entries = tuple(parse_financial_year(entry) for entry in value)
        return tuple(sorted(entries, key=lambda entry: entry.year))

    @model_validator(mode="after")
    def _validate_unique_years(self) -> CalculatorConfig:
        duplicates = [
            year
            for year, count in Counter(entry.year for entry in self.financial_years).items()
            if count > 1
        ]
        if duplicates:
            raise ConfigurationError(
                f"Duplicate financial years detected: {sorted(duplicates)}"
            )
        return self

    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(entry.year for entry in self.financial_years)

    def find(self, year: int) -> FinancialYearConfig | None:
        """Return the configuration for exactly ``year`` or ``None``."""

        for entry in self.financial_years:
            if entry.year == year:
                return entry
        return None


__all__ = [
    "CalculatorConfig",
    "ConfigurationError",
    "FinancialYearConfig",
    "FlatRateConfig",
    "ImmutableModel",
    "MARGINAL_RELIEF_KEYS",
    "MarginalReliefConfig",
    "parse_financial_year",
]
