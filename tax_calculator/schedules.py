"""
Tax schedules: the personal allowance and marginal bands for each tax year.

Tax bands and rates can be found at:

- https://www.gov.uk/income-tax-rates

The schedules are read from the CSV files alongside this module. Band upper
bounds are measured in *taxable* income, that is, income above the personal
allowance.
"""

from __future__ import annotations

import dataclasses
import decimal
import functools
import itertools
import logging
import operator
import pathlib
import re
import types
from collections.abc import Mapping

import duckdb

from tax_calculator.exceptions import (
    ParseError,
    ScheduleInvariantError,
    ScheduleLoadError,
    UnsupportedYearError,
)
from tax_calculator.gbp import Gbp

HERE = pathlib.Path(__file__).parent
PERSONAL_ALLOWANCES_FILE = "personal-allowances.csv"
TAX_BANDS_FILE = "tax-bands.csv"

_TAX_YEAR_PATTERN = re.compile(
    r"(?P<start>\d{4})(?:[/-](?P<end>\d{4}))?",
    re.ASCII,
)

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Band:
    """
    A marginal tax band.

    A band without an upper bound covers all remaining income, so it can
    only be the last band of a schedule.
    """

    name: str
    rate: decimal.Decimal
    upper_bound: Gbp | None = None

    @property
    def is_bounded(self) -> bool:
        return self.upper_bound is not None


@dataclasses.dataclass(frozen=True)
class Schedule:
    """
    The personal allowance and tax bands for a tax year.
    """

    tax_year: int
    personal_allowance: Gbp
    bands: tuple[Band, ...]

    def __post_init__(self):
        """
        Check that the bands cover taxable income without gaps or overlaps.
        """
        object.__setattr__(self, "bands", tuple(self.bands))

        if self.personal_allowance.is_negative():
            raise ScheduleInvariantError(
                f"Negative personal allowance for {self.tax_year}:"
                f" {self.personal_allowance}"
            )
        if not self.bands:
            raise ScheduleInvariantError(
                f"No tax bands defined for {self.tax_year}"
            )

        lower_bound = Gbp.zero()
        for position, band in enumerate(self.bands, start=1):
            if not 0 <= band.rate <= 1:
                raise ScheduleInvariantError(
                    f"Rate for {band.name!r} in {self.tax_year} is not"
                    f" between 0 and 1: {band.rate}"
                )
            if not band.is_bounded:
                if position != len(self.bands):
                    raise ScheduleInvariantError(
                        f"Unbounded band {band.name!r} in {self.tax_year}"
                        " must be the last band"
                    )
                continue
            if band.upper_bound <= lower_bound:
                raise ScheduleInvariantError(
                    f"Upper bound of {band.name!r} in {self.tax_year} must be"
                    f" above {lower_bound}, got {band.upper_bound}"
                )
            lower_bound = band.upper_bound

    @property
    def label(self) -> str:
        return tax_year_label(self.tax_year)


def tax_year_label(tax_year: int) -> str:
    """
    Return the label for a tax year, like ``2018/2019``.
    """
    return f"{tax_year}/{tax_year + 1}"


def parse_tax_year(text: str) -> int:
    """
    Parse a tax year, given as ``2018``, ``2018/2019`` or ``2018-2019``.

    :param text: The text to parse.
    """
    match = _TAX_YEAR_PATTERN.fullmatch(text.strip())
    if match is None:
        raise ParseError(text, "not a valid tax year")

    tax_year = int(match["start"])
    if match["end"] is not None and int(match["end"]) != tax_year + 1:
        raise ParseError(text, "tax year must span consecutive years")

    return tax_year


def _read_csv(
    path: pathlib.Path,
    dtype: dict[str, str],
    order_by: str,
) -> list[tuple]:
    """
    Return the rows of a CSV file with typed columns, in the given order.

    :param path: The CSV file to read.
    :param dtype: The column names and their duckdb types, in output order.
    :param order_by: The ``order by`` clause to sort the rows with.
    """
    try:
        return (
            duckdb.read_csv(str(path), header=True, dtype=dtype)
            .project(", ".join(dtype))
            .order(order_by)
            .fetchall()
        )
    except duckdb.Error as error:
        raise ScheduleLoadError(path, str(error)) from error


def load_schedules(directory: pathlib.Path = HERE) -> dict[int, Schedule]:
    """
    Load the tax schedule for every tax year defined in a directory.

    :param directory: The directory holding the personal allowances and tax
        bands CSV files.
    """
    directory = pathlib.Path(directory).absolute()
    allowances = _read_csv(
        directory / PERSONAL_ALLOWANCES_FILE,
        dtype={
            "tax_year": "INTEGER",
            "personal_allowance": "DECIMAL(18, 2)",
        },
        order_by="tax_year",
    )
    bands = _read_csv(
        directory / TAX_BANDS_FILE,
        dtype={
            "tax_year": "INTEGER",
            "band": "VARCHAR",
            "upper_bound": "DECIMAL(18, 2)",
            "rate": "DECIMAL(5, 4)",
        },
        order_by="tax_year, upper_bound nulls last",
    )

    personal_allowances = {
        tax_year: Gbp(personal_allowance)
        for tax_year, personal_allowance in allowances
    }
    schedules = {}
    for tax_year, rows in itertools.groupby(bands, key=operator.itemgetter(0)):
        if tax_year not in personal_allowances:
            raise ScheduleInvariantError(
                f"No personal allowance defined for {tax_year}"
            )
        schedules[tax_year] = Schedule(
            tax_year=tax_year,
            personal_allowance=personal_allowances[tax_year],
            bands=tuple(
                Band(
                    name=name,
                    rate=rate,
                    upper_bound=None if upper_bound is None else Gbp(upper_bound),
                )
                for _, name, upper_bound, rate in rows
            ),
        )

    missing_bands = personal_allowances.keys() - schedules.keys()
    if missing_bands:
        raise ScheduleInvariantError(
            f"No tax bands defined for {', '.join(map(str, sorted(missing_bands)))}"
        )

    logger.debug(
        "Loaded tax schedules for %s from %s",
        ", ".join(map(str, schedules)),
        directory,
    )
    return schedules


@functools.cache
def default_schedules() -> Mapping[int, Schedule]:
    """
    Return the tax schedules shipped with the package.

    These are loaded once per process and are read-only.
    """
    return types.MappingProxyType(load_schedules(HERE))


def schedule_for_year(
    tax_year: int,
    schedules: Mapping[int, Schedule] | None = None,
) -> Schedule:
    """
    Return the tax schedule for a tax year.

    :param tax_year: The starting calendar year of the tax year.
    :param schedules: The schedules to look the year up in. Defaults to the
        schedules shipped with the package.
    """
    if schedules is None:
        schedules = default_schedules()

    try:
        return schedules[tax_year]
    except KeyError:
        raise UnsupportedYearError(tax_year, schedules) from None
