"""
Amounts of Great British Pounds.

Amounts are held as ``decimal.Decimal`` pounds, rounded to the nearest penny
(ties away from zero) whenever they are created, so repeated band
calculations never drift the way binary floats do.
"""

from __future__ import annotations

import dataclasses
import decimal
import re

from tax_calculator.exceptions import ParseError

PENCE = decimal.Decimal("0.01")
SYMBOL = "£"

_AMOUNT_PATTERN = re.compile(
    rf"{SYMBOL}?(?P<pounds>\d(?:,?\d)*)(?:\.(?P<pence>\d{{1,2}}))?",
    re.ASCII,
)


@dataclasses.dataclass(frozen=True, order=True)
class Gbp:
    """
    An amount of GBP.
    """

    amount: decimal.Decimal

    def __post_init__(self):
        """
        Round the amount to the nearest penny.
        """
        object.__setattr__(
            self,
            "amount",
            decimal.Decimal(self.amount).quantize(
                PENCE,
                rounding=decimal.ROUND_HALF_UP,
            ),
        )

    @classmethod
    def zero(cls) -> Gbp:
        return cls(decimal.Decimal(0))

    @classmethod
    def from_pounds(cls, pounds: int, pence: int = 0) -> Gbp:
        """
        Create an amount from whole pounds and pence.
        """
        return cls(decimal.Decimal(pounds) + decimal.Decimal(pence) * PENCE)

    @classmethod
    def parse(cls, text: str) -> Gbp:
        """
        Parse an amount such as ``£1,234,567.89``.

        The ``£`` symbol and the thousands separators are optional, and at
        most two decimal places are allowed.

        :param text: The text to parse.
        """
        match = _AMOUNT_PATTERN.fullmatch(text.strip())
        if match is None:
            raise ParseError(text, "not a valid GBP amount")

        pounds = match["pounds"].replace(",", "")
        pence = match["pence"] or "0"
        try:
            return cls(decimal.Decimal(f"{pounds}.{pence}"))
        except decimal.InvalidOperation:
            raise ParseError(text, "amount is too large") from None

    def format(self) -> str:
        """
        Format the amount like ``£1,234,567.89``.
        """
        sign = "-" if self.is_negative() else ""
        return f"{sign}{SYMBOL}{abs(self.amount):,.2f}"

    def multiply_by_rate(self, rate: decimal.Decimal | int) -> Gbp:
        """
        Multiply the amount by a rate, rounding to the nearest penny.

        Half pennies round away from zero, so ``£0.05 * 0.5`` is ``£0.03``.
        """
        return Gbp(self.amount * decimal.Decimal(rate))

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def __add__(self, other: Gbp) -> Gbp:
        if not isinstance(other, Gbp):
            return NotImplemented
        return Gbp(self.amount + other.amount)

    def __sub__(self, other: Gbp) -> Gbp:
        if not isinstance(other, Gbp):
            return NotImplemented
        return Gbp(self.amount - other.amount)

    def __mul__(self, rate: decimal.Decimal | int) -> Gbp:
        if not isinstance(rate, (decimal.Decimal, int)):
            return NotImplemented
        return self.multiply_by_rate(rate)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return self.format()
