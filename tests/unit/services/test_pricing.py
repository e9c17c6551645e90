"""Tests for pricing and tax calculation."""

from decimal import Decimal

import pytest

from billwise.core.exceptions import InvalidRequestError
from billwise.core.services.pricing import (
    TAX_RATE,
    calculate_totals,
    check_discount_percentage,
)


class TestCalculateTotals:
    def test_discount_and_tax(self):
        totals = calculate_totals([Decimal("100.0"), Decimal("50.0")], Decimal("10"))
        assert totals.subtotal == Decimal("150.0")
        assert totals.total_discount == Decimal("15.0")
        assert totals.total_tax == Decimal("24.3")
        assert totals.grand_total == Decimal("159.3")
        assert totals.taxable_amount == Decimal("135.0")

    def test_no_discount(self):
        totals = calculate_totals([Decimal("200.00")])
        assert totals.total_discount == Decimal("0")
        assert totals.total_tax == Decimal("36.00")
        assert totals.grand_total == Decimal("236.00")

    def test_full_discount(self):
        totals = calculate_totals([Decimal("80.00")], Decimal("100"))
        assert totals.grand_total == Decimal("0")

    def test_no_rounding(self):
        totals = calculate_totals([Decimal("0.01")], Decimal("33"))
        assert totals.total_discount == Decimal("0.0033")
        assert totals.total_tax == Decimal("0.0067") * TAX_RATE

    def test_grand_total_identity(self):
        totals = calculate_totals([Decimal("19.99"), Decimal("5.25")], Decimal("7.5"))
        assert totals.grand_total == (totals.subtotal - totals.total_discount) * (1 + TAX_RATE)

    @pytest.mark.parametrize("rate", [Decimal("-1"), Decimal("100.01")])
    def test_out_of_range_discount(self, rate: Decimal):
        with pytest.raises(InvalidRequestError) as exc_info:
            calculate_totals([Decimal("10.00")], rate)
        assert exc_info.value.details["field"] == "total_discount_percentage"


class TestCheckDiscountPercentage:
    def test_none_is_zero(self):
        assert check_discount_percentage(None) == Decimal("0")

    def test_bounds_inclusive(self):
        assert check_discount_percentage(Decimal("0")) == Decimal("0")
        assert check_discount_percentage(Decimal("100")) == Decimal("100")
