"""Money helpers. All amounts are Decimal, rounded to cents with ROUND_HALF_UP."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

CENTS = Decimal("0.01")


def to_money(value: Union[Decimal, int, str, float]) -> Decimal:
    """Convert a value to a Decimal rounded to currency precision"""
    if isinstance(value, float):
        # repr-based conversion avoids binary float drift (0.1 -> 0.1, not 0.1000000000000000055)
        value = repr(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Invalid monetary amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid monetary amount: {value!r}")
    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        # more digits than the decimal context precision
        raise ValueError(f"Monetary amount out of range: {value!r}") from e


def format_money(amount: Decimal) -> str:
    """Format an amount as a plain 2-decimal string, e.g. '15.00'"""
    return f"{to_money(amount):.2f}"
