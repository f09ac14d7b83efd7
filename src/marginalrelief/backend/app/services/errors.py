"""Errors raised by the calculation and parameter services."""

from __future__ import annotations

from collections.abc import Iterable


def _format_years(years: Iterable[int]) -> str:
    return ",".join(str(year) for year in years)


class ConfigMissingError(LookupError):
    """No configuration exists for one or both of the financial years involved."""

    def __init__(self, years: Iterable[int]) -> None:
        ordered = tuple(sorted(set(years)))
        if not ordered:
            raise ValueError("At least one missing financial year is required")
        self.years = ordered
        super().__init__(f"Configuration missing for financial year(s): {_format_years(ordered)}")

    @property
    def message(self) -> str:
        return str(self)


class AssociatedCompaniesParameterError(LookupError):
    """Every configuration lookup failure found while deciding required parameters."""

    def __init__(self, errors: Iterable[ConfigMissingError]) -> None:
        self.errors = tuple(errors)
        if not self.errors:
            raise ValueError("At least one error is required")
        super().__init__("; ".join(error.message for error in self.errors))

    @property
    def years(self) -> tuple[int, ...]:
        return tuple(sorted({year for error in self.errors for year in error.years}))


__all__ = ["AssociatedCompaniesParameterError", "ConfigMissingError"]
