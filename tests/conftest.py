from __future__ import annotations

import dataclasses
import decimal
import pathlib
from typing import Any

import pytest
import yaml

from tax_calculator import Band, Gbp, Schedule

HERE = pathlib.Path(__file__).parent


def to_decimal(value: Any) -> decimal.Decimal:
    """
    Return the value as a decimal.
    """
    return decimal.Decimal(str(value))


def to_gbp(value: Any) -> Gbp:
    """
    Return the value as a GBP amount.
    """
    return Gbp(to_decimal(value))


@dataclasses.dataclass
class BandCase:
    """
    The expected income, rate, and tax for a band.
    """

    band: str
    amount: Gbp
    rate: decimal.Decimal
    tax: Gbp


@dataclasses.dataclass
class TestCase:
    """
    A tax calculator test case.
    """

    tax_year: int
    gross_income: Gbp
    personal_allowance: Gbp
    taxable_income: Gbp
    bands: list[BandCase]
    total_tax: Gbp

    @classmethod
    def construct(
        cls,
        loader: yaml.SafeLoader,
        node: yaml.nodes.MappingNode,
    ) -> TestCase:
        """
        Construct a test case from the data.
        """
        test_case = loader.construct_mapping(node, deep=True)
        return cls(
            tax_year=int(test_case["tax_year"]),
            gross_income=to_gbp(test_case["gross_income"]),
            personal_allowance=to_gbp(test_case["personal_allowance"]),
            taxable_income=to_gbp(test_case["taxable_income"]),
            bands=[
                BandCase(
                    band=band["band"],
                    amount=to_gbp(band["amount"]),
                    rate=to_decimal(band["rate"]),
                    tax=to_gbp(band["tax"]),
                )
                for band in test_case["bands"]
            ],
            total_tax=to_gbp(test_case["total_tax"]),
        )


def get_loader() -> type[yaml.SafeLoader]:
    """
    Return a YAML loader with a custom constructor for ``TestCase``s.
    """

    class Loader(yaml.SafeLoader):
        pass

    Loader.add_constructor("!TestCase", TestCase.construct)

    return Loader


def test_cases() -> list[TestCase]:
    """
    Return the test cases from the YAML file.
    """
    with open(HERE / "test-cases.yaml") as f:
        return yaml.load(f, Loader=get_loader())["test-cases"]  # noqa: S506


@pytest.fixture(
    params=test_cases(),
    ids=lambda case: f"{case.tax_year}-{case.gross_income.amount}",
)
def test_case(request) -> TestCase:
    """
    Return a test case.
    """
    return request.param


@pytest.fixture
def simple_schedule() -> Schedule:
    """
    Return a small schedule with round numbers.
    """
    return Schedule(
        tax_year=2000,
        personal_allowance=Gbp.from_pounds(1_000),
        bands=(
            Band("Low rate", decimal.Decimal("0.1"), Gbp.from_pounds(1_000)),
            Band("Mid rate", decimal.Decimal("0.2"), Gbp.from_pounds(5_000)),
            Band("High rate", decimal.Decimal("0.5")),
        ),
    )
