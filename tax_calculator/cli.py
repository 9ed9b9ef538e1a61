"""
Command line interface for the tax calculator.

Usage:
    tax-calculator 2018 £43,500.00
    python -m tax_calculator 2018/2019 43500
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

from tax_calculator import __version__
from tax_calculator.calculator import calculate_tax
from tax_calculator.exceptions import (
    ParseError,
    ScheduleLoadError,
    UnsupportedYearError,
)
from tax_calculator.gbp import Gbp
from tax_calculator.report import render_breakdown
from tax_calculator.schedules import (
    default_schedules,
    load_schedules,
    parse_tax_year,
    schedule_for_year,
)

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tax-calculator",
        description="Calculate the UK income tax due on a gross income.",
    )
    parser.add_argument(
        "year",
        help="The tax year, such as 2018 or 2018/2019",
    )
    parser.add_argument(
        "gross_income",
        help="The annual gross income, such as £43,500.00",
    )
    parser.add_argument(
        "--data-dir",
        type=pathlib.Path,
        help="Directory holding the personal allowances and tax bands CSV files",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run the tax calculator and return the exit code.

    :param argv: The command line arguments, without the program name.
        Defaults to ``sys.argv[1:]``.
    """
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        tax_year = parse_tax_year(args.year)
        gross_income = Gbp.parse(args.gross_income)
        schedules = (
            default_schedules()
            if args.data_dir is None
            else load_schedules(args.data_dir)
        )
        schedule = schedule_for_year(tax_year, schedules)
    except (ParseError, ScheduleLoadError, UnsupportedYearError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1

    logger.debug("Calculating tax for %s on %s", schedule.label, gross_income)
    print(render_breakdown(calculate_tax(schedule, gross_income)))

    return 0
