"""Calculator helpers used by the marginal relief services."""

from .dates import (
    annual_basis,
    days_between_inclusive,
    days_in_financial_year,
    financial_year_end,
    is_single_financial_year,
    spans_at_most_two_financial_years,
)
from .marginal_relief import (
    TaxComputation,
    calculate_flat_rate,
    calculate_marginal_relief,
    threshold_ratio,
)
from .utils import format_percentage, percentage_of, round_currency, round_rate

__all__ = [
    "TaxComputation",
    "annual_basis",
    "calculate_flat_rate",
    "calculate_marginal_relief",
    "days_between_inclusive",
    "days_in_financial_year",
    "financial_year_end",
    "format_percentage",
    "is_single_financial_year",
    "percentage_of",
    "round_currency",
    "round_rate",
    "spans_at_most_two_financial_years",
    "threshold_ratio",
]
