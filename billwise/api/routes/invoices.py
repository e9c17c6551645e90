"""Sales invoice endpoints."""

from fastapi import APIRouter, Depends, Query, status

from billwise.api.dependencies import (
    get_app_settings,
    get_create_invoice_use_case,
    get_read_uow,
)
from billwise.application.dto.requests import CreateInvoiceRequest
from billwise.application.dto.responses import (
    ErrorResponse,
    InvoiceListResponse,
    InvoiceResponse,
)
from billwise.application.use_cases import CreateInvoiceUseCase, invoice_to_response
from billwise.config import Settings
from billwise.core.exceptions import InvoiceNotFoundError
from billwise.core.interfaces import IUnitOfWork

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_invoice(
    request: CreateInvoiceRequest,
    use_case: CreateInvoiceUseCase = Depends(get_create_invoice_use_case),
) -> InvoiceResponse:
    """Record a sale: reserve stock, price it and issue the invoice."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    uow: IUnitOfWork = Depends(get_read_uow),
    settings: Settings = Depends(get_app_settings),
) -> InvoiceListResponse:
    """List invoices, newest first."""
    invoices = await uow.invoices.list_invoices(limit=limit, offset=offset)
    anonymous = settings.billing.anonymous_customer_name
    return InvoiceListResponse(
        invoices=[invoice_to_response(inv, anonymous) for inv in invoices],
        total=await uow.invoices.count(),
    )


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_invoice(
    invoice_id: int,
    uow: IUnitOfWork = Depends(get_read_uow),
    settings: Settings = Depends(get_app_settings),
) -> InvoiceResponse:
    """Get an invoice by ID."""
    invoice = await uow.invoices.get(invoice_id)
    if invoice is None:
        raise InvoiceNotFoundError(invoice_id)
    return invoice_to_response(invoice, settings.billing.anonymous_customer_name)
