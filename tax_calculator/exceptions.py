"""
Errors raised by the tax calculator.
"""

from __future__ import annotations

import pathlib
from collections.abc import Iterable


class TaxCalculatorError(Exception):
    """
    Base class for tax calculator errors.
    """


class ParseError(TaxCalculatorError, ValueError):
    """
    Text could not be parsed as an amount or a tax year.
    """

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"{reason}: {text!r}")


class UnsupportedYearError(TaxCalculatorError, ValueError):
    """
    No tax bands are defined for the requested tax year.
    """

    def __init__(self, tax_year: int, supported_years: Iterable[int]):
        self.tax_year = tax_year
        self.supported_years = sorted(supported_years)
        supported = ", ".join(str(year) for year in self.supported_years)
        super().__init__(
            f"No tax bands defined for year: {tax_year}"
            f" (supported years: {supported or 'none'})"
        )


class ScheduleInvariantError(TaxCalculatorError):
    """
    A tax schedule is malformed.

    This is a programming error in the schedule data rather than bad input.
    """


class ScheduleLoadError(TaxCalculatorError):
    """
    The tax schedule files could not be read.
    """

    def __init__(self, path: pathlib.Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read tax schedules from {path}: {reason}")
