"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from billwise.core.entities.product import SQLITE_MAX_INT, UnitType


# --- Sales ---


class InvoiceItemRequest(BaseModel):
    """One requested sale line.

    Quantity rules (>= 1) are enforced by the sale workflow so that they
    are reported as INVALID_REQUEST like every other sale rejection.
    """

    product_sku: str = Field(..., min_length=1, description="Product SKU")
    quantity_sold: int = Field(..., description="Units sold, in the product's base unit")


class CreateInvoiceRequest(BaseModel):
    """Request to record a sale."""

    customer_contact_number: str | None = Field(
        default=None,
        description="Ten-digit contact number; omit for an anonymous sale",
        examples=["9876543210"],
    )
    customer_name: str | None = Field(
        default=None,
        description="Name used if the customer is created by this sale",
    )
    items: list[InvoiceItemRequest] = Field(
        default_factory=list,
        description="Sale lines in order",
    )
    total_discount_percentage: Decimal | None = Field(
        default=None,
        description="Invoice-level discount, 0-100",
        examples=["10"],
    )

    @field_validator("customer_contact_number", "customer_name")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


# --- Catalog ---


class CreateProductRequest(BaseModel):
    """Request to register a product."""

    sku: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    selling_price_per_base_unit: Decimal = Field(..., gt=0, decimal_places=2)
    unit_type: UnitType
    base_unit: str = Field(..., min_length=1, examples=["kg", "ml", "pcs"])
    current_stock: int = Field(default=0, ge=0, le=SQLITE_MAX_INT)
    min_stock_level: int = Field(default=0, ge=0, le=SQLITE_MAX_INT)


class UpdateProductRequest(BaseModel):
    """Partial product update. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1)
    selling_price_per_base_unit: Decimal | None = Field(
        default=None, gt=0, decimal_places=2
    )
    current_stock: int | None = Field(default=None, ge=0, le=SQLITE_MAX_INT)
    min_stock_level: int | None = Field(default=None, ge=0, le=SQLITE_MAX_INT)


# --- Customers ---


class CreateCustomerRequest(BaseModel):
    """Request to register a customer ahead of their first sale."""

    name: str = Field(..., min_length=1, max_length=100)
    contact_number: str = Field(
        ...,
        min_length=1,
        description="Must match the configured contact number format",
        examples=["9876543210"],
    )
    email: str | None = Field(
        default=None,
        max_length=100,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        examples=["asha@example.com"],
    )
    gst_number: str | None = Field(default=None, max_length=50)

    @field_validator("name", "contact_number", "email", "gst_number", mode="before")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v
