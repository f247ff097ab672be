"""Stock status classification and price formatting."""

from decimal import Decimal

import pytest

from stockroom.inventory.service import format_price, stock_status


@pytest.mark.parametrize(
    "quantity, status, label",
    [
        (-5, "critical", "Out of stock"),
        (-1, "critical", "Out of stock"),
        (0, "critical", "Out of stock"),
        (1, "warning", "Low stock"),
        (9, "warning", "Low stock"),
        (10, "success", "In stock"),
        (11, "success", "In stock"),
        (10_000, "success", "In stock"),
    ],
)
def test_stock_status_thresholds(quantity, status, label):
    result = stock_status(quantity)
    assert result.status == status
    assert result.label == label


def test_format_price_uses_two_decimals_and_currency_prefix():
    assert format_price(Decimal("9.99")) == "$9.99"
    assert format_price(Decimal("5")) == "$5.00"
    assert format_price(Decimal("0.00")) == "$0.00"
