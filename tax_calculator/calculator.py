"""
Calculator for UK income tax.

The personal allowance is taken off the gross income first, and what is
left is spread over the marginal bands of the tax year in order.
"""

from __future__ import annotations

import dataclasses
import decimal
from collections.abc import Mapping, Sequence

from tax_calculator.exceptions import ScheduleInvariantError
from tax_calculator.gbp import Gbp
from tax_calculator.schedules import Band, Schedule, schedule_for_year


@dataclasses.dataclass(frozen=True)
class BandEntry:
    """
    The income taxed in a band, and the tax due on it.
    """

    band: Band
    amount: Gbp
    tax: Gbp

    @property
    def rate(self) -> decimal.Decimal:
        return self.band.rate


@dataclasses.dataclass(frozen=True)
class Breakdown:
    """
    Tax due on a gross income, band by band.
    """

    tax_year: int
    gross_income: Gbp
    personal_allowance: Gbp
    taxable_income: Gbp
    entries: tuple[BandEntry, ...]
    total_tax: Gbp


def calculate_tax(schedule: Schedule, gross_income: Gbp) -> Breakdown:
    """
    Calculate the tax due on a gross income.

    :param schedule: The tax schedule to apply.
    :param gross_income: The annual income before tax.
    """
    taxable_income = max(gross_income - schedule.personal_allowance, Gbp.zero())
    entries = _spread_over_bands(taxable_income, schedule)

    return Breakdown(
        tax_year=schedule.tax_year,
        gross_income=gross_income,
        personal_allowance=schedule.personal_allowance,
        taxable_income=taxable_income,
        entries=tuple(entries),
        total_tax=sum((entry.tax for entry in entries), start=Gbp.zero()),
    )


def calculate_tax_for_year(
    tax_year: int,
    gross_income: Gbp,
    schedules: Mapping[int, Schedule] | None = None,
) -> Breakdown:
    """
    Calculate the tax due on a gross income for a tax year.

    :param tax_year: The starting calendar year of the tax year.
    :param gross_income: The annual income before tax.
    :param schedules: The schedules to choose from. Defaults to the schedules
        shipped with the package.
    """
    return calculate_tax(schedule_for_year(tax_year, schedules), gross_income)


def _spread_over_bands(
    taxable_income: Gbp,
    schedule: Schedule,
) -> Sequence[BandEntry]:
    """
    Spread taxable income over the bands of a schedule.

    For example, £15,000 spread over bands ending at £2,000 and £12,000 and
    an unbounded band would put £2,000, £10,000 and £3,000 into them. Bands
    that no income reaches are left out.

    :param taxable_income: The income above the personal allowance.
    :param schedule: The schedule whose bands to spread the income over.
    """
    entries = []
    remaining = taxable_income
    lower_bound = Gbp.zero()
    for band in schedule.bands:
        if not remaining.is_positive():
            break

        if band.is_bounded:
            amount = min(remaining, band.upper_bound - lower_bound)
            lower_bound = band.upper_bound
        else:
            amount = remaining

        entries.append(BandEntry(band, amount, amount.multiply_by_rate(band.rate)))
        remaining -= amount

    if remaining.is_positive():
        raise ScheduleInvariantError(
            f"{remaining} of taxable income exceeds the bands for"
            f" {schedule.tax_year}"
        )

    return entries
