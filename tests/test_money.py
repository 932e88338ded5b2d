from decimal import Decimal

import pytest

from utils.money import format_money, to_money


def test_rounds_half_up_to_cents():
    assert to_money(Decimal("45.005")) == Decimal("45.01")
    assert to_money("0.125") == Decimal("0.13")
    assert to_money(29.99) == Decimal("29.99")
    assert format_money(Decimal("15")) == "15.00"


@pytest.mark.parametrize("value", ["abc", "NaN", "Infinity", "1e30"])
def test_invalid_or_out_of_range_amounts_raise_value_error(value):
    with pytest.raises(ValueError):
        to_money(value)
