"""Create Invoice Use Case: the sale workflow.

Resolves the customer, reserves stock for every line, prices the sale and
persists the invoice, all inside one unit of work. Any failure rolls the
whole sale back: stock deductions, a customer created for this sale, and
the invoice number drawn for it.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import aiosqlite
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
)

from billwise.application.dto.requests import CreateInvoiceRequest
from billwise.application.dto.responses import InvoiceItemResponse, InvoiceResponse
from billwise.config import BillingSettings, get_logger, get_settings
from billwise.core.entities.customer import Customer
from billwise.core.entities.invoice import Invoice, InvoiceItem
from billwise.core.exceptions import (
    BillWiseError,
    CustomerConflictError,
    InvalidRequestError,
    PersistenceError,
)
from billwise.core.interfaces.unit_of_work import IUnitOfWork
from billwise.core.services import (
    CustomerResolver,
    InventoryLedger,
    calculate_totals,
    check_discount_percentage,
)

logger = get_logger(__name__)

UnitOfWorkFactory = Callable[[], IUnitOfWork]


class SaleState(str, Enum):
    """Progress of one sale through the workflow."""

    RECEIVED = "received"
    CUSTOMER_RESOLVED = "customer_resolved"
    ITEMS_RESERVED = "items_reserved"
    PRICED = "priced"
    PERSISTED = "persisted"
    FAILED = "failed"


@dataclass
class CreateInvoiceResult:
    """Result of recording a sale."""

    invoice: Invoice
    customer_name: str


class CreateInvoiceUseCase:
    """Record a sale atomically and return the persisted invoice."""

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

    async def execute(self, request: CreateInvoiceRequest) -> CreateInvoiceResult:
        """Execute the sale workflow."""
        settings = self._get_settings()
        state = SaleState.RECEIVED
        step = "validate_request"
        logger.info(
            "create_invoice_started",
            items=len(request.items),
            anonymous=request.customer_contact_number is None,
        )

        try:
            self._validate(request)
            uow_factory = await self._get_uow_factory()

            async with uow_factory() as uow:
                step = "resolve_customer"
                customer = await self._resolve_customer(uow, request, settings)
                state = self._advance(state, SaleState.CUSTOMER_RESOLVED)

                step = "reserve_stock"
                items = await self._reserve_items(uow, request)
                state = self._advance(state, SaleState.ITEMS_RESERVED)

                step = "calculate_totals"
                totals = calculate_totals(
                    (item.line_total for item in items),
                    request.total_discount_percentage,
                )
                state = self._advance(state, SaleState.PRICED)

                step = "persist_invoice"
                sequence = await uow.invoices.next_number()
                invoice = Invoice(
                    invoice_number=f"{settings.invoice_prefix}{sequence}",
                    customer=customer,
                    items=tuple(items),
                    discount_percentage=check_discount_percentage(
                        request.total_discount_percentage
                    ),
                    subtotal=totals.subtotal,
                    total_discount=totals.total_discount,
                    total_tax=totals.total_tax,
                    grand_total=totals.grand_total,
                )
                invoice = await uow.invoices.save(invoice)
                step = "commit"

            state = self._advance(state, SaleState.PERSISTED)

        except BillWiseError as e:
            self._fail(state, step, e.code)
            raise e.with_context(step=step)
        except aiosqlite.Error as e:
            self._fail(state, step, e.__class__.__name__)
            raise PersistenceError(step, str(e)) from e

        customer_name = (
            invoice.customer.name
            if invoice.customer
            else settings.anonymous_customer_name
        )
        logger.info(
            "invoice_created",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            customer_id=invoice.customer.id if invoice.customer else None,
            items=len(invoice.items),
            grand_total=str(invoice.grand_total),
        )
        return CreateInvoiceResult(invoice=invoice, customer_name=customer_name)

    @staticmethod
    def _validate(request: CreateInvoiceRequest) -> None:
        """Reject malformed sales before anything is touched."""
        if not request.items:
            raise InvalidRequestError("items", "a sale needs at least one item")
        for index, item in enumerate(request.items):
            if item.quantity_sold < 1:
                raise InvalidRequestError(
                    f"items[{index}].quantity_sold",
                    "must be at least 1",
                    item.quantity_sold,
                )
        check_discount_percentage(request.total_discount_percentage)

    async def _resolve_customer(
        self,
        uow: IUnitOfWork,
        request: CreateInvoiceRequest,
        settings: BillingSettings,
    ) -> Customer | None:
        resolver = CustomerResolver(
            uow.customers,
            contact_pattern=settings.contact_number_pattern,
            default_name=settings.anonymous_customer_name,
        )
        resolve = self._get_retry_decorator(settings)(resolver.resolve)
        return await resolve(request.customer_contact_number, request.customer_name)

    @classmethod
    def _get_retry_decorator(cls, settings: BillingSettings) -> Any:
        """Re-resolve after losing a contact number uniqueness race."""
        return retry(
            stop=stop_after_attempt(settings.customer_conflict_retries + 1),
            retry=retry_if_exception_type(CustomerConflictError),
            before_sleep=cls._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "customer_conflict_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    @staticmethod
    async def _reserve_items(
        uow: IUnitOfWork, request: CreateInvoiceRequest
    ) -> list[InvoiceItem]:
        ledger = InventoryLedger(uow.products)
        items: list[InvoiceItem] = []
        for index, line in enumerate(request.items):
            try:
                reservation = await ledger.reserve(line.product_sku, line.quantity_sold)
            except BillWiseError as e:
                raise e.with_context(line=index)

            product = reservation.product
            items.append(
                InvoiceItem(
                    product_id=product.id,  # type: ignore[arg-type]
                    product_sku=product.sku,
                    product_name=product.name,
                    quantity_sold=reservation.quantity,
                    unit_price_at_sale=reservation.unit_price,
                )
            )
        return items

    @staticmethod
    def _advance(current: SaleState, new: SaleState) -> SaleState:
        logger.debug("sale_state_changed", from_state=current.value, to_state=new.value)
        return new

    @staticmethod
    def _fail(state: SaleState, step: str, error_code: str) -> None:
        logger.warning(
            "create_invoice_failed",
            from_state=state.value,
            to_state=SaleState.FAILED.value,
            step=step,
            error_code=error_code,
        )

    def to_response(self, result: CreateInvoiceResult) -> InvoiceResponse:
        """Convert result to API response."""
        return invoice_to_response(result.invoice, result.customer_name)


def invoice_to_response(invoice: Invoice, anonymous_name: str) -> InvoiceResponse:
    """Snapshot an invoice entity as its API response."""
    return InvoiceResponse(
        id=invoice.id,  # type: ignore[arg-type]
        invoice_number=invoice.invoice_number,
        invoice_date=invoice.invoice_date,
        customer_name=invoice.customer.name if invoice.customer else anonymous_name,
        customer_contact_number=(
            invoice.customer.contact_number if invoice.customer else None
        ),
        items=[
            InvoiceItemResponse(
                product_name=item.product_name,
                product_sku=item.product_sku,
                quantity_sold=item.quantity_sold,
                unit_price_at_sale=item.unit_price_at_sale,
                line_total=item.line_total,
            )
            for item in invoice.items
        ],
        discount_percentage=invoice.discount_percentage,
        subtotal=invoice.subtotal,
        total_discount=invoice.total_discount,
        total_tax=invoice.total_tax,
        grand_total=invoice.grand_total,
    )
