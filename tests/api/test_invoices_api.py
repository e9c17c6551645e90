"""API tests for invoice endpoints."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from billwise.api.dependencies import get_create_invoice_use_case
from billwise.api.main import app
from billwise.application.use_cases.create_invoice import (
    CreateInvoiceResult,
    CreateInvoiceUseCase,
)
from billwise.core.entities import Customer, Invoice, InvoiceItem
from billwise.core.exceptions import InsufficientStockError, InvalidRequestError


def _invoice(customer: Customer | None = None) -> Invoice:
    return Invoice(
        id=1,
        invoice_number="INV-1",
        customer=customer,
        items=(
            InvoiceItem(
                id=1,
                invoice_id=1,
                product_id=1,
                product_sku="A",
                product_name="Product A",
                quantity_sold=1,
                unit_price_at_sale=Decimal("100.00"),
            ),
            InvoiceItem(
                id=2,
                invoice_id=1,
                product_id=2,
                product_sku="B",
                product_name="Product B",
                quantity_sold=1,
                unit_price_at_sale=Decimal("50.00"),
            ),
        ),
        discount_percentage=Decimal("10"),
        subtotal=Decimal("150.00"),
        total_discount=Decimal("15.00"),
        total_tax=Decimal("24.3000"),
        grand_total=Decimal("159.3000"),
    )


@pytest.fixture
def create_uc():
    uc = AsyncMock(spec=CreateInvoiceUseCase)
    result = CreateInvoiceResult(invoice=_invoice(), customer_name="Anonymous")
    uc.execute.return_value = result
    uc.to_response.return_value = CreateInvoiceUseCase().to_response(result)
    app.dependency_overrides[get_create_invoice_use_case] = lambda: uc
    return uc


SALE = {
    "items": [
        {"product_sku": "A", "quantity_sold": 1},
        {"product_sku": "B", "quantity_sold": 1},
    ],
    "total_discount_percentage": "10",
}


class TestCreateInvoice:
    async def test_created(self, client, create_uc):
        response = await client.post("/api/invoices", json=SALE)

        assert response.status_code == 201
        body = response.json()
        assert body["invoice_number"] == "INV-1"
        assert body["customer_name"] == "Anonymous"
        assert Decimal(body["grand_total"]) == Decimal("159.3")
        assert [i["product_sku"] for i in body["items"]] == ["A", "B"]
        assert Decimal(body["items"][0]["line_total"]) == Decimal("100.00")

    async def test_money_fields_in_cents(self, client, create_uc):
        body = (await client.post("/api/invoices", json=SALE)).json()

        assert body["subtotal"] == "150.00"
        assert body["total_discount"] == "15.00"
        assert body["total_tax"] == "24.30"
        assert body["grand_total"] == "159.30"
        assert [i["line_total"] for i in body["items"]] == ["100.00", "50.00"]

    async def test_blank_contact_sent_as_anonymous(self, client, create_uc):
        await client.post("/api/invoices", json={**SALE, "customer_contact_number": "  "})

        request = create_uc.execute.call_args.args[0]
        assert request.customer_contact_number is None

    async def test_insufficient_stock_is_conflict(self, client, create_uc):
        create_uc.execute.side_effect = InsufficientStockError("A", requested=5, available=1)

        response = await client.post("/api/invoices", json=SALE)

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "INSUFFICIENT_STOCK"
        assert body["detail"]["available"] == 1
        assert body["hint"]

    async def test_invalid_request_is_bad_request(self, client, create_uc):
        create_uc.execute.side_effect = InvalidRequestError(
            "items", "a sale needs at least one item"
        )

        response = await client.post("/api/invoices", json={"items": []})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_REQUEST"

    async def test_malformed_body(self, client, create_uc):
        response = await client.post(
            "/api/invoices", json={"items": [{"product_sku": "A", "quantity_sold": "many"}]}
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        create_uc.execute.assert_not_called()


class TestReadInvoices:
    async def test_list(self, client, read_uow):
        read_uow.invoices.list_invoices.return_value = [_invoice()]
        read_uow.invoices.count.return_value = 7

        response = await client.get("/api/invoices", params={"limit": 1})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 7
        assert len(body["invoices"]) == 1
        read_uow.invoices.list_invoices.assert_awaited_once_with(limit=1, offset=0)

    async def test_get_with_customer(self, client, read_uow):
        read_uow.invoices.get.return_value = _invoice(
            Customer(id=4, name="Asha", contact_number="9876543210")
        )

        response = await client.get("/api/invoices/1")

        assert response.status_code == 200
        assert response.json()["customer_name"] == "Asha"
        assert response.json()["customer_contact_number"] == "9876543210"

    async def test_get_missing(self, client, read_uow):
        read_uow.invoices.get.return_value = None

        response = await client.get("/api/invoices/999")

        assert response.status_code == 404
        assert response.json()["error_code"] == "INVOICE_NOT_FOUND"
        assert response.json()["path"] == "/api/invoices/999"
