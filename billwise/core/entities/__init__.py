"""Core domain entities."""

from billwise.core.entities.customer import Customer
from billwise.core.entities.invoice import Invoice, InvoiceItem
from billwise.core.entities.product import Product, UnitType

__all__ = [
    # Catalog
    "Product",
    "UnitType",
    # Customers
    "Customer",
    # Invoices
    "Invoice",
    "InvoiceItem",
]
