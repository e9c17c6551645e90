"""
Pricing and tax calculation.

Pure functions over Decimal amounts. No rounding is applied at any step:
prices carry at most two decimal places and quantities are integral, so
line totals and the subtotal are exact; discount, tax and grand total are
kept at full precision.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from billwise.core.exceptions import InvalidRequestError

# Flat GST rate applied to the discounted subtotal
TAX_RATE = Decimal("0.18")

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class InvoiceTotals:
    """Monetary totals for one invoice."""

    subtotal: Decimal
    total_discount: Decimal
    total_tax: Decimal
    grand_total: Decimal

    @property
    def taxable_amount(self) -> Decimal:
        return self.subtotal - self.total_discount


def check_discount_percentage(discount_percentage: Decimal | None) -> Decimal:
    """Normalize a discount percentage; None means 0. Raises outside 0-100."""
    rate = _ZERO if discount_percentage is None else Decimal(discount_percentage)
    if rate < _ZERO or rate > _HUNDRED:
        raise InvalidRequestError(
            "total_discount_percentage",
            "must be between 0 and 100",
            discount_percentage,
        )
    return rate


def calculate_totals(
    line_totals: Iterable[Decimal],
    discount_percentage: Decimal | None = None,
) -> InvoiceTotals:
    """
    Compute subtotal, discount, tax and grand total.

    Args:
        line_totals: Per-line totals (quantity * unit price at sale).
        discount_percentage: Percentage off the subtotal, 0-100. None means 0.

    Returns:
        InvoiceTotals
    """
    rate = check_discount_percentage(discount_percentage)

    subtotal = sum((Decimal(t) for t in line_totals), _ZERO)
    total_discount = subtotal * (rate / _HUNDRED)
    taxable = subtotal - total_discount
    total_tax = taxable * TAX_RATE

    return InvoiceTotals(
        subtotal=subtotal,
        total_discount=total_discount,
        total_tax=total_tax,
        grand_total=taxable + total_tax,
    )
