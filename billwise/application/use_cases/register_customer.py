"""Register Customer Use Case: adds a customer outside of a sale."""

import re
from dataclasses import dataclass

from billwise.application.dto.requests import CreateCustomerRequest
from billwise.application.dto.responses import CustomerResponse
from billwise.application.use_cases.create_invoice import UnitOfWorkFactory
from billwise.config import BillingSettings, get_logger, get_settings
from billwise.core.entities.customer import Customer
from billwise.core.exceptions import CustomerConflictError, InvalidRequestError

logger = get_logger(__name__)


@dataclass
class RegisterCustomerResult:
    """Result of registering a customer."""

    customer: Customer


class RegisterCustomerUseCase:
    """Create a customer with contact details, email and GST number."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory | None = None,
        settings: BillingSettings | None = None,
    ):
        self._uow_factory = uow_factory
        self._settings = settings

    async def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            from billwise.infrastructure.storage.sqlite import (
                get_pool,
                sqlite_uow_factory,
            )

            self._uow_factory = sqlite_uow_factory(await get_pool())
        return self._uow_factory

    def _get_settings(self) -> BillingSettings:
        if self._settings is None:
            self._settings = get_settings().billing
        return self._settings

    async def execute(self, request: CreateCustomerRequest) -> RegisterCustomerResult:
        """Execute register customer use case."""
        settings = self._get_settings()
        if not re.match(settings.contact_number_pattern, request.contact_number):
            raise InvalidRequestError(
                "contact_number",
                "contact number has an invalid format",
                request.contact_number,
            )

        uow_factory = await self._get_uow_factory()
        async with uow_factory() as uow:
            if await uow.customers.find_by_contact_number(request.contact_number) is not None:
                raise CustomerConflictError(
                    request.contact_number,
                    f"Customer with contact number '{request.contact_number}' already exists",
                )
            customer = await uow.customers.save(
                Customer(
                    name=request.name,
                    contact_number=request.contact_number,
                    email=request.email,
                    gst_number=request.gst_number,
                )
            )

        logger.info(
            "register_customer_complete",
            customer_id=customer.id,
            contact_number=customer.contact_number,
        )
        return RegisterCustomerResult(customer=customer)

    def to_response(self, result: RegisterCustomerResult) -> CustomerResponse:
        """Convert result to API response."""
        return customer_to_response(result.customer)


def customer_to_response(customer: Customer) -> CustomerResponse:
    """Snapshot a customer entity as its API response."""
    return CustomerResponse(
        id=customer.id,  # type: ignore[arg-type]
        name=customer.name,
        contact_number=customer.contact_number,
        email=customer.email,
        gst_number=customer.gst_number,
        created_at=customer.created_at,
    )
