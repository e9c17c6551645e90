"""API tests for customer endpoints."""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from billwise.api.dependencies import get_register_customer_use_case
from billwise.api.main import app
from billwise.application.use_cases import (
    RegisterCustomerResult,
    RegisterCustomerUseCase,
    customer_to_response,
)
from billwise.core.entities import Customer
from billwise.core.exceptions import CustomerConflictError, InvalidRequestError

NEW_CUSTOMER = {
    "name": "Asha Traders",
    "contact_number": "9876543210",
    "email": "accounts@asha.example",
    "gst_number": "29ABCDE1234F1Z5",
}


def _customer() -> Customer:
    return Customer(
        id=3,
        name="Asha Traders",
        contact_number="9876543210",
        email="accounts@asha.example",
        gst_number="29ABCDE1234F1Z5",
        created_at=datetime(2026, 1, 5, 10, 0),
    )


@pytest.fixture
def register_uc():
    uc = AsyncMock(spec=RegisterCustomerUseCase)
    uc.execute.return_value = RegisterCustomerResult(customer=_customer())
    uc.to_response.return_value = customer_to_response(_customer())
    app.dependency_overrides[get_register_customer_use_case] = lambda: uc
    return uc


class TestRegisterCustomerAPI:
    async def test_register(self, client, register_uc):
        response = await client.post("/api/customers", json=NEW_CUSTOMER)

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "accounts@asha.example"
        assert body["gst_number"] == "29ABCDE1234F1Z5"
        request = register_uc.execute.call_args.args[0]
        assert request.contact_number == "9876543210"

    async def test_register_duplicate_contact(self, client, register_uc):
        register_uc.execute.side_effect = CustomerConflictError("9876543210")

        response = await client.post("/api/customers", json=NEW_CUSTOMER)

        assert response.status_code == 409
        assert response.json()["error_code"] == "CUSTOMER_CONFLICT"

    async def test_register_bad_contact_format(self, client, register_uc):
        register_uc.execute.side_effect = InvalidRequestError(
            "contact_number", "contact number has an invalid format", "12"
        )

        response = await client.post("/api/customers", json={**NEW_CUSTOMER, "contact_number": "12"})

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "contact_number"

    async def test_register_malformed_email(self, client, register_uc):
        response = await client.post("/api/customers", json={**NEW_CUSTOMER, "email": "nope"})

        assert response.status_code == 422
        register_uc.execute.assert_not_awaited()


class TestCustomersAPI:
    async def test_lookup(self, client, read_uow):
        read_uow.customers.find_by_contact_number.return_value = Customer(
            id=1, name="Asha", contact_number="9876543210"
        )

        response = await client.get(
            "/api/customers/lookup", params={"contact_number": "9876543210"}
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Asha"

    async def test_lookup_missing(self, client, read_uow):
        read_uow.customers.find_by_contact_number.return_value = None

        response = await client.get(
            "/api/customers/lookup", params={"contact_number": "9876543210"}
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "CUSTOMER_NOT_FOUND"

    async def test_lookup_requires_contact(self, client):
        response = await client.get("/api/customers/lookup")
        assert response.status_code == 422

    async def test_list(self, client, read_uow):
        read_uow.customers.list_customers.return_value = [
            Customer(id=1, name="Asha", contact_number="9876543210"),
            Customer(id=2, name="Walk-in"),
        ]

        response = await client.get("/api/customers", params={"offset": 0})

        assert response.status_code == 200
        assert response.json()["count"] == 2
