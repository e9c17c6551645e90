"""Data transfer objects between the API and the use cases."""

from billwise.application.dto.requests import (
    CreateCustomerRequest,
    CreateInvoiceRequest,
    CreateProductRequest,
    InvoiceItemRequest,
    UpdateProductRequest,
)
from billwise.application.dto.responses import (
    ComponentHealthResponse,
    CustomerListResponse,
    CustomerResponse,
    ErrorResponse,
    HealthResponse,
    InvoiceItemResponse,
    InvoiceListResponse,
    InvoiceResponse,
    ProductListResponse,
    ProductResponse,
)

__all__ = [
    # Requests
    "CreateInvoiceRequest",
    "InvoiceItemRequest",
    "CreateProductRequest",
    "UpdateProductRequest",
    "CreateCustomerRequest",
    # Responses
    "InvoiceResponse",
    "InvoiceItemResponse",
    "InvoiceListResponse",
    "ProductResponse",
    "ProductListResponse",
    "CustomerResponse",
    "CustomerListResponse",
    "HealthResponse",
    "ComponentHealthResponse",
    "ErrorResponse",
]
