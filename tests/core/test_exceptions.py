"""Tests for domain exceptions."""

from billwise.core.exceptions import (
    BillWiseError,
    ConfigurationError,
    CustomerConflictError,
    CustomerError,
    DuplicateSkuError,
    InsufficientStockError,
    InvalidRequestError,
    InventoryError,
    InvoiceNotFoundError,
    PersistenceError,
    ProductNotFoundError,
    StorageError,
)


class TestBillWiseError:
    def test_default_code_is_class_name(self):
        err = BillWiseError("boom")
        assert err.code == "BillWiseError"
        assert err.details == {}
        assert str(err) == "boom"

    def test_to_dict(self):
        err = BillWiseError("boom", code="X", details={"a": 1})
        assert err.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}

    def test_with_context_returns_self(self):
        err = ProductNotFoundError("SKU-9")
        assert err.with_context(step="reserve_stock", line=2) is err
        assert err.details == {"sku": "SKU-9", "step": "reserve_stock", "line": 2}

    def test_default_code_is_class_name(self):
        assert BillWiseError("boom").code == "BillWiseError"

    def test_configuration_error(self):
        err = ConfigurationError("schema behind", details={"pending": ["002"]})
        assert err.code == "CONFIGURATION_ERROR"
        assert err.details == {"pending": ["002"]}


class TestCodes:
    def test_invalid_request(self):
        err = InvalidRequestError("items", "a sale needs at least one item")
        assert err.code == "INVALID_REQUEST"
        assert err.details["field"] == "items"
        assert err.details["value"] is None

    def test_invalid_request_truncates_value(self):
        err = InvalidRequestError("customer_contact_number", "bad", "9" * 500)
        assert len(err.details["value"]) == 100

    def test_insufficient_stock_details(self):
        err = InsufficientStockError("SKU-1", requested=5, available=2)
        assert err.code == "INSUFFICIENT_STOCK"
        assert err.details == {"sku": "SKU-1", "requested": 5, "available": 2}
        assert isinstance(err, InventoryError)

    def test_codes(self):
        assert ProductNotFoundError("A").code == "PRODUCT_NOT_FOUND"
        assert DuplicateSkuError("A").code == "DUPLICATE_SKU"
        assert CustomerConflictError("9876543210").code == "CUSTOMER_CONFLICT"
        assert InvoiceNotFoundError(3).code == "INVOICE_NOT_FOUND"
        assert PersistenceError("persist_invoice", "disk I/O error").code == "PERSISTENCE_FAILURE"

    def test_hierarchy(self):
        assert issubclass(CustomerConflictError, CustomerError)
        assert issubclass(PersistenceError, StorageError)
        assert issubclass(InvoiceNotFoundError, StorageError)
        for cls in (InventoryError, CustomerError, StorageError, InvalidRequestError):
            assert issubclass(cls, BillWiseError)
