"""Utility helpers for calculator modules."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal(100)
ZERO = Decimal(0)


def round_currency(value: Decimal) -> Decimal:
    """Round monetary amounts half-up to two decimals."""

    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def round_rate(value: Decimal) -> Decimal:
    """Round percentage rates half-up to two decimals."""

    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def percentage_of(amount: Decimal, base: Decimal) -> Decimal:
    """Return ``amount`` as a percentage of ``base``; zero when nothing is taxed."""

    if base == 0:
        return ZERO
    return amount / base * HUNDRED


def format_percentage(value: Decimal) -> str:
    """Return a human-readable percentage label for a fractional ``value``."""

    percentage = value * HUNDRED
    if percentage == percentage.to_integral_value():
        return f"{int(percentage)}%"
    return f"{percentage:.2f}%"
