"""
Domain exceptions for the BillWise sales core.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class BillWiseError(Exception):
    """Base exception for all BillWise errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def with_context(self, **context: Any) -> "BillWiseError":
        """Attach extra context (step, line index, ...) and return self."""
        self.details.update(context)
        return self


# Request Exceptions
class InvalidRequestError(BillWiseError):
    """Sale or catalog request rejected before any mutation."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Invalid request for '{field}': {message}",
            code="INVALID_REQUEST",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Inventory Exceptions
class InventoryError(BillWiseError):
    """Base exception for stock and catalog operations."""

    pass


class ProductNotFoundError(InventoryError):
    """No product exists for the requested SKU."""

    def __init__(self, sku: str):
        super().__init__(
            f"Product not found with SKU: {sku}",
            code="PRODUCT_NOT_FOUND",
            details={"sku": sku},
        )


class InsufficientStockError(InventoryError):
    """Requested quantity exceeds the product's current stock."""

    def __init__(self, sku: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for product '{sku}'. "
            f"Requested: {requested}, available: {available}",
            code="INSUFFICIENT_STOCK",
            details={"sku": sku, "requested": requested, "available": available},
        )


class DuplicateSkuError(InventoryError):
    """A product with the same SKU already exists."""

    def __init__(self, sku: str):
        super().__init__(
            f"Product with SKU '{sku}' already exists",
            code="DUPLICATE_SKU",
            details={"sku": sku},
        )


# Customer Exceptions
class CustomerError(BillWiseError):
    """Base exception for customer operations."""

    pass

    """A customer with this contact number already exists (or was just created)."""
class CustomerConflictError(CustomerError):
    """Concurrent creation violated the contact number uniqueness constraint."""

    def __init__(self, contact_number: str, message: str | None = None):
        super().__init__(
            message
            or f"Customer with contact number '{contact_number}' was created concurrently",
            code="CUSTOMER_CONFLICT",
            details={"contact_number": contact_number},
        )


class CustomerNotFoundError(CustomerError):
    """No customer exists for the contact number."""

    def __init__(self, contact_number: str):
        super().__init__(
            f"Customer not found with contact number: {contact_number}",
            code="CUSTOMER_NOT_FOUND",
            details={"contact_number": contact_number},
        )


# Storage Exceptions
class StorageError(BillWiseError):
    """Base exception for storage operations."""

    pass


class InvoiceNotFoundError(StorageError):
    """Invoice not found in storage."""

    def __init__(self, invoice_id: int):
        super().__init__(
            f"Invoice not found: {invoice_id}",
            code="INVOICE_NOT_FOUND",
            details={"invoice_id": invoice_id},
        )


class PersistenceError(StorageError):
    """Storage layer failed; the unit of work was rolled back."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Persistence failure during {operation}: {error}",
            code="PERSISTENCE_FAILURE",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(BillWiseError):
    """Settings or deployment state that prevents the service from starting."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, "CONFIGURATION_ERROR", details)
