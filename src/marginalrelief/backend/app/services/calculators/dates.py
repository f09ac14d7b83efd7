"""Date arithmetic for the UK financial year calendar (1 April to 31 March)."""

from __future__ import annotations

from datetime import date


def financial_year_end(value: date) -> date:
    """Return the 31 March that closes the financial year containing ``value``."""

    if value.month <= 3:
        return date(value.year, 3, 31)
    return date(value.year + 1, 3, 31)


def days_between_inclusive(start: date, end: date) -> int:
    """Count the days from ``start`` to ``end`` with both ends included."""

    return (end - start).days + 1


def days_in_financial_year(year: int) -> int:
    """Return 365 or 366 for the financial year starting 1 April ``year``."""

    return days_between_inclusive(date(year, 4, 1), date(year + 1, 3, 31))


def is_single_financial_year(start: date, end: date) -> bool:
    return financial_year_end(start) >= end


def annual_basis(days_in_period: int) -> int:
    """Day count used to scale annual thresholds for a period of this length."""

    return 366 if days_in_period == 366 else 365


def spans_at_most_two_financial_years(start: date, end: date) -> bool:
    """Return ``True`` when ``end`` falls no later than the financial year after ``start``'s."""

    return end <= date(financial_year_end(start).year + 1, 3, 31)
