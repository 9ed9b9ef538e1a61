"""
Plain text reports of a tax breakdown.
"""

from __future__ import annotations

import decimal

from tax_calculator.calculator import BandEntry, Breakdown
from tax_calculator.schedules import tax_year_label

RATE_PLACES = decimal.Decimal("0.01")


def _format_rate(rate: decimal.Decimal) -> str:
    """
    Format a rate with at least two decimal places, like ``0.20`` or
    ``0.125``, without rounding it.
    """
    rate = rate.normalize()
    if rate.as_tuple().exponent > RATE_PLACES.as_tuple().exponent:
        rate = rate.quantize(RATE_PLACES)
    return f"{rate:f}"


def _render_entry(entry: BandEntry) -> str:
    return (
        f"{entry.band.name}: {entry.amount}"
        f" @ {_format_rate(entry.rate)} = {entry.tax}"
    )


def render_breakdown(breakdown: Breakdown) -> str:
    """
    Render a breakdown as the lines of a report.

    Only bands that some income falls into are listed.
    """
    sections = [
        [
            f"Tax Year: {tax_year_label(breakdown.tax_year)}",
            f"Gross Salary: {breakdown.gross_income}",
            f"Personal Allowance: {breakdown.personal_allowance}",
            f"Taxable Income: {breakdown.taxable_income}",
        ],
        [_render_entry(entry) for entry in breakdown.entries],
        [f"Total Tax Due: {breakdown.total_tax}"],
    ]

    return "\n\n".join("\n".join(lines) for lines in sections if lines)
