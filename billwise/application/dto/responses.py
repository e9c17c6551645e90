"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field, field_serializer

from billwise.core.entities.product import UnitType

CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round a money amount half-up to two decimal places."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


# --- Sales ---


class InvoiceItemResponse(BaseModel):
    """Invoice line response DTO."""

    product_name: str
    product_sku: str
    quantity_sold: int
    unit_price_at_sale: Decimal
    line_total: Decimal

    @field_serializer("unit_price_at_sale", "line_total", when_used="json")
    def serialize_money(self, value: Decimal) -> Decimal:
        return to_cents(value)


class InvoiceResponse(BaseModel):
    """Invoice snapshot returned after a sale or on lookup."""

    id: int
    invoice_number: str
    invoice_date: datetime
    customer_name: str
    customer_contact_number: str | None = None
    items: list[InvoiceItemResponse]
    discount_percentage: Decimal
    subtotal: Decimal
    total_discount: Decimal
    total_tax: Decimal
    grand_total: Decimal

    # Stored amounts stay exact; JSON shows them in cents
    @field_serializer(
        "subtotal", "total_discount", "total_tax", "grand_total", when_used="json"
    )
    def serialize_money(self, value: Decimal) -> Decimal:
        return to_cents(value)


class InvoiceListResponse(BaseModel):
    """Paginated list of invoices."""

    invoices: list[InvoiceResponse]
    total: int


# --- Catalog ---


class ProductResponse(BaseModel):
    """Product response DTO."""

    id: int
    sku: str
    name: str
    selling_price_per_base_unit: Decimal
    unit_type: UnitType
    base_unit: str
    current_stock: int
    min_stock_level: int
    is_low_stock: bool
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    """List of products."""

    products: list[ProductResponse]
    count: int


# --- Customers ---


class CustomerResponse(BaseModel):
    """Customer response DTO."""

    id: int
    name: str
    contact_number: str | None = None
    email: str | None = None
    gst_number: str | None = None
    created_at: datetime


class CustomerListResponse(BaseModel):
    """List of customers."""

    customers: list[CustomerResponse]
    count: int


# --- Health / Errors ---


class ComponentHealthResponse(BaseModel):
    """Health of a single backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    schema_version: str | None = None
    pending_migrations: list[str] = Field(default_factory=list)
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | dict | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
