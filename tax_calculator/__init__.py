"""
Calculator for UK income tax.
"""

from tax_calculator.calculator import (
    BandEntry,
    Breakdown,
    calculate_tax,
    calculate_tax_for_year,
)
from tax_calculator.exceptions import (
    ParseError,
    ScheduleInvariantError,
    ScheduleLoadError,
    TaxCalculatorError,
    UnsupportedYearError,
)
from tax_calculator.gbp import Gbp
from tax_calculator.schedules import (
    Band,
    Schedule,
    load_schedules,
    parse_tax_year,
    schedule_for_year,
)

__version__ = "0.1.0"

__all__ = [
    "Band",
    "BandEntry",
    "Breakdown",
    "Gbp",
    "ParseError",
    "Schedule",
    "ScheduleInvariantError",
    "ScheduleLoadError",
    "TaxCalculatorError",
    "UnsupportedYearError",
    "calculate_tax",
    "calculate_tax_for_year",
    "load_schedules",
    "parse_tax_year",
    "schedule_for_year",
]
