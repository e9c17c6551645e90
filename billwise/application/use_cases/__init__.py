"""Application use cases."""

from billwise.application.use_cases.create_invoice import (
    CreateInvoiceResult,
    CreateInvoiceUseCase,
    SaleState,
    invoice_to_response,
)
from billwise.application.use_cases.register_customer import (
    RegisterCustomerResult,
    RegisterCustomerUseCase,
    customer_to_response,
)
from billwise.application.use_cases.register_product import (
    RegisterProductResult,
    RegisterProductUseCase,
    product_to_response,
)
from billwise.application.use_cases.update_product import (
    UpdateProductResult,
    UpdateProductUseCase,
)

__all__ = [
    "CreateInvoiceUseCase",
    "CreateInvoiceResult",
    "SaleState",
    "invoice_to_response",
    "RegisterCustomerUseCase",
    "RegisterCustomerResult",
    "customer_to_response",
    "RegisterProductUseCase",
    "RegisterProductResult",
    "product_to_response",
    "UpdateProductUseCase",
    "UpdateProductResult",
]
