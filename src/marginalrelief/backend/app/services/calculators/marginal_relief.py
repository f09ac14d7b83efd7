"""Corporation tax and marginal relief arithmetic for one (sub-)period.

Everything here works at full ``Decimal`` precision; rounding happens only when
results are emitted by the calculation service.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from marginalrelief.backend.config.year_config import FlatRateConfig, MarginalReliefConfig

from .dates import annual_basis, days_in_financial_year
from .utils import ZERO, percentage_of


@dataclass(frozen=True)
class TaxComputation:
    """Unrounded tax figures for the share of profit falling in one financial year."""

    year: int
    adjusted_profit: Decimal
    corporation_tax_before_mr: Decimal
    marginal_relief: Decimal = ZERO

    @property
    def corporation_tax(self) -> Decimal:
        return self.corporation_tax_before_mr - self.marginal_relief

    @property
    def effective_rate_before_mr(self) -> Decimal:
        return percentage_of(self.corporation_tax_before_mr, self.adjusted_profit)

    @property
    def effective_rate(self) -> Decimal:
        return percentage_of(self.corporation_tax, self.adjusted_profit)


def threshold_ratio(
    ap_days_in_year: int,
    year: int,
    days_in_period: int,
    *,
    upper_thresholds_differ: bool,
) -> Decimal:
    """Fraction of the annual thresholds available to this part of the period.

    When the upper threshold changes between the two years each part is scaled
    against the length of its own financial year, otherwise against the
    365/366 day basis of the whole accounting period.
    """

    if upper_thresholds_differ:
        return Decimal(ap_days_in_year) / days_in_financial_year(year)
    return Decimal(ap_days_in_year) / annual_basis(days_in_period)


def calculate_flat_rate(
    profit: Decimal,
    ap_fy_ratio: Decimal,
    config: FlatRateConfig,
) -> TaxComputation:
    """Apply the main rate to the apportioned profit; no relief is available."""

    adjusted_profit = profit * ap_fy_ratio
    return TaxComputation(
        year=config.year,
        adjusted_profit=adjusted_profit,
        corporation_tax_before_mr=adjusted_profit * config.main_rate,
    )


def calculate_marginal_relief(
    profit: Decimal,
    exempt_distributions: Decimal,
    ap_fy_ratio: Decimal,
    config: MarginalReliefConfig,
    *,
    companies: int,
    ratio: Decimal,
) -> TaxComputation:
    """Compute tax before relief and the marginal relief for one period.

    ``ap_fy_ratio`` apportions profit and exempt distributions to the period,
    ``ratio`` scales the annual thresholds, which are then shared between
    ``companies`` (the company itself plus its associated companies).
    """

    adjusted_profit = profit * ap_fy_ratio
    adjusted_augmented_profit = adjusted_profit + exempt_distributions * ap_fy_ratio

    lower_threshold = config.lower_threshold * ratio / companies
    upper_threshold = config.upper_threshold * ratio / companies

    if adjusted_augmented_profit <= lower_threshold:
        rate = config.small_profit_rate
    else:
        rate = config.main_rate
    corporation_tax_before_mr = adjusted_profit * rate

    marginal_relief = ZERO
    if lower_threshold < adjusted_augmented_profit <= upper_threshold:
        marginal_relief = (
            config.marginal_relief_fraction
            * (upper_threshold - adjusted_augmented_profit)
            * (adjusted_profit / adjusted_augmented_profit)
        )

    return TaxComputation(
        year=config.year,
        adjusted_profit=adjusted_profit,
        corporation_tax_before_mr=corporation_tax_before_mr,
        marginal_relief=marginal_relief,
    )
