"""Customer endpoints."""

from fastapi import APIRouter, Depends, Query, status

from billwise.api.dependencies import get_read_uow, get_register_customer_use_case
from billwise.application.dto.requests import CreateCustomerRequest
from billwise.application.dto.responses import (
    CustomerListResponse,
    CustomerResponse,
    ErrorResponse,
)
from billwise.application.use_cases import RegisterCustomerUseCase, customer_to_response
from billwise.core.exceptions import CustomerNotFoundError
from billwise.core.interfaces import IUnitOfWork

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def register_customer(
    request: CreateCustomerRequest,
    use_case: RegisterCustomerUseCase = Depends(get_register_customer_use_case),
) -> CustomerResponse:
    """Register a customer with optional email and GST number."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/lookup",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse}},
)
async def lookup_customer(
    contact_number: str = Query(..., min_length=1),
    uow: IUnitOfWork = Depends(get_read_uow),
) -> CustomerResponse:
    """Find a customer by contact number."""
    customer = await uow.customers.find_by_contact_number(contact_number.strip())
    if customer is None:
        raise CustomerNotFoundError(contact_number)
    return customer_to_response(customer)


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    uow: IUnitOfWork = Depends(get_read_uow),
) -> CustomerListResponse:
    """List customers."""
    customers = await uow.customers.list_customers(limit=limit, offset=offset)
    return CustomerListResponse(
        customers=[customer_to_response(c) for c in customers],
        count=len(customers),
    )
