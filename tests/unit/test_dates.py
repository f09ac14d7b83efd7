"""Unit coverage for the financial year calendar helpers."""

from __future__ import annotations

from datetime import date

import pytest

from marginalrelief.backend.app.services.calculators import (
    annual_basis,
    days_between_inclusive,
    days_in_financial_year,
    financial_year_end,
    is_single_financial_year,
    spans_at_most_two_financial_years,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (date(2023, 1, 1), date(2023, 3, 31)),
        (date(2023, 3, 31), date(2023, 3, 31)),
        (date(2023, 4, 1), date(2024, 3, 31)),
        (date(2023, 12, 31), date(2024, 3, 31)),
    ],
)
def test_financial_year_end(value: date, expected: date) -> None:
    assert financial_year_end(value) == expected


def test_days_between_inclusive_counts_both_ends() -> None:
    assert days_between_inclusive(date(2023, 4, 1), date(2023, 4, 1)) == 1
    assert days_between_inclusive(date(2023, 4, 1), date(2024, 3, 31)) == 366
    assert days_between_inclusive(date(2024, 4, 1), date(2025, 3, 31)) == 365


@pytest.mark.parametrize(
    ("year", "expected"),
    [(2022, 365), (2023, 366), (2024, 365), (2027, 366), (2031, 366)],
)
def test_days_in_financial_year_is_leap_aware(year: int, expected: int) -> None:
    assert days_in_financial_year(year) == expected


def test_is_single_financial_year() -> None:
    assert is_single_financial_year(date(2023, 4, 1), date(2024, 3, 31))
    assert is_single_financial_year(date(2024, 1, 1), date(2024, 3, 31))
    assert not is_single_financial_year(date(2024, 1, 1), date(2024, 4, 1))


def test_annual_basis_only_uses_366_for_a_366_day_period() -> None:
    assert annual_basis(366) == 366
    assert annual_basis(365) == 365
    assert annual_basis(182) == 365


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        (date(2023, 4, 1), date(2025, 3, 31), True),
        (date(2023, 4, 1), date(2025, 4, 1), False),
        (date(2024, 1, 1), date(2024, 12, 31), True),
        (date(2024, 1, 1), date(2025, 4, 1), False),
    ],
)
def test_spans_at_most_two_financial_years(start: date, end: date, expected: bool) -> None:
    assert spans_at_most_two_financial_years(start, end) is expected
