"""Unit tests for the register customer use case."""

from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from billwise.application.dto.requests import CreateCustomerRequest
from billwise.application.use_cases import RegisterCustomerResult, RegisterCustomerUseCase
from billwise.config import BillingSettings
from billwise.core.entities import Customer
from billwise.core.exceptions import CustomerConflictError, InvalidRequestError


class FakeUnitOfWork:
    def __init__(self):
        self.products = AsyncMock()
        self.customers = AsyncMock()
        self.invoices = AsyncMock()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None


@pytest.fixture
def uow():
    uow = FakeUnitOfWork()
    uow.customers.find_by_contact_number.return_value = None
    uow.customers.save.side_effect = lambda c: c.model_copy(update={"id": 5})
    return uow


@pytest.fixture
def use_case(uow):
    return RegisterCustomerUseCase(uow_factory=lambda: uow, settings=BillingSettings())


def _request(**overrides) -> CreateCustomerRequest:
    fields = {
        "name": "Asha Traders",
        "contact_number": "9876543210",
        "email": "accounts@asha.example",
        "gst_number": "29ABCDE1234F1Z5",
    }
    fields.update(overrides)
    return CreateCustomerRequest(**fields)


class TestRegisterCustomerUseCase:
    async def test_registers_with_email_and_gst(self, use_case, uow):
        result = await use_case.execute(_request())

        assert result.customer.id == 5
        saved = uow.customers.save.call_args.args[0]
        assert saved.email == "accounts@asha.example"
        assert saved.gst_number == "29ABCDE1234F1Z5"
        assert saved.contact_number == "9876543210"

    async def test_optional_fields_may_be_omitted(self, use_case):
        result = await use_case.execute(_request(email=None, gst_number=None))

        assert result.customer.email is None
        assert result.customer.gst_number is None

    async def test_existing_contact_conflicts(self, use_case, uow):
        uow.customers.find_by_contact_number.return_value = Customer(
            id=1, name="Someone", contact_number="9876543210"
        )

        with pytest.raises(CustomerConflictError) as exc_info:
            await use_case.execute(_request())

        assert "already exists" in exc_info.value.message
        uow.customers.save.assert_not_awaited()

    async def test_store_conflict_propagates(self, use_case, uow):
        uow.customers.save.side_effect = CustomerConflictError("9876543210")

        with pytest.raises(CustomerConflictError):
            await use_case.execute(_request())

    async def test_contact_format_checked_against_settings(self, uow):
        use_case = RegisterCustomerUseCase(
            uow_factory=lambda: uow,
            settings=BillingSettings(contact_number_pattern=r"^\+91[0-9]{10}$"),
        )

        with pytest.raises(InvalidRequestError) as exc_info:
            await use_case.execute(_request())

        assert exc_info.value.details["field"] == "contact_number"
        uow.customers.find_by_contact_number.assert_not_awaited()

    def test_to_response(self, use_case):
        customer = Customer(id=5, name="Asha", contact_number="9876543210", email="a@b.co")
        response = use_case.to_response(RegisterCustomerResult(customer=customer))

        assert response.id == 5
        assert response.email == "a@b.co"


class TestCreateCustomerRequest:
    def test_strips_and_blanks_to_none(self):
        request = _request(name="  Asha  ", email="  ", gst_number="")
        assert request.name == "Asha"
        assert request.email is None
        assert request.gst_number is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": "   "},
            {"contact_number": ""},
            {"email": "not-an-email"},
            {"gst_number": "X" * 51},
        ],
    )
    def test_rejects_bad_input(self, overrides):
        with pytest.raises(ValidationError):
            _request(**overrides)
