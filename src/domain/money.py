"""Money helpers

All monetary arithmetic in the billing pipeline goes through ``round2`` so
that line amounts, invoice totals, payments and balances share one rounding
rule: two decimal places, half-up.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal, going through ``str`` so float residue is not kept"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value: Number) -> Decimal:
    """
    Round a monetary value to cents (ROUND_HALF_UP)

    Example:
        round2(Decimal("10.455"))  # Decimal("10.46")
        round2(10.454)             # Decimal("10.45")
    """
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def apply_discount(price: Number, discount_pct: Number) -> Decimal:
    """Linear percentage discount, rounded to cents"""
    factor = Decimal(1) - to_decimal(discount_pct) / Decimal(100)
    return round2(to_decimal(price) * factor)
