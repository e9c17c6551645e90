"""Core interfaces (ports) implemented by infrastructure adapters."""

from billwise.core.interfaces.customer_store import ICustomerStore
from billwise.core.interfaces.invoice_store import IInvoiceStore
from billwise.core.interfaces.product_store import IProductStore
from billwise.core.interfaces.unit_of_work import IUnitOfWork

__all__ = [
    "IProductStore",
    "ICustomerStore",
    "IInvoiceStore",
    "IUnitOfWork",
]
