"""Tests for invoice response serialization."""

from datetime import datetime
from decimal import Decimal

import pytest

from billwise.application.dto.responses import (
    InvoiceItemResponse,
    InvoiceResponse,
    to_cents,
)


def _response(**amounts) -> InvoiceResponse:
    fields = {
        "subtotal": Decimal("200.00"),
        "total_discount": Decimal("20.000"),
        "total_tax": Decimal("32.40000"),
        "grand_total": Decimal("212.40000"),
    }
    fields.update(amounts)
    return InvoiceResponse(
        id=1,
        invoice_number="INV-1",
        invoice_date=datetime(2026, 3, 1, 9, 30),
        customer_name="Anonymous",
        items=[
            InvoiceItemResponse(
                product_name="Rice",
                product_sku="RICE-1",
                quantity_sold=2,
                unit_price_at_sale=Decimal("100.00"),
                line_total=Decimal("200.00"),
            )
        ],
        discount_percentage=Decimal("10"),
        **fields,
    )


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        ("32.40000", "32.40"),
        ("0.005", "0.01"),
        ("2.344999", "2.34"),
        ("19.125", "19.13"),
        ("7", "7.00"),
    ],
)
def test_to_cents_rounds_half_up(amount: str, expected: str):
    assert str(to_cents(Decimal(amount))) == expected


def test_json_amounts_share_two_decimal_scale():
    body = _response().model_dump(mode="json")

    assert body["subtotal"] == "200.00"
    assert body["total_discount"] == "20.00"
    assert body["total_tax"] == "32.40"
    assert body["grand_total"] == "212.40"
    assert body["items"][0]["unit_price_at_sale"] == "100.00"


def test_python_dump_keeps_exact_amounts():
    response = _response(total_tax=Decimal("32.4051"))

    assert response.total_tax == Decimal("32.4051")
    assert response.model_dump()["total_tax"] == Decimal("32.4051")
    assert response.model_dump(mode="json")["total_tax"] == "32.41"
