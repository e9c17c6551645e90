"""Sales invoice domain entities.

Invoices and their items are immutable audit records: both models are
frozen, and storage assigns ids by returning updated copies.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from billwise.core.entities.customer import Customer


class InvoiceItem(BaseModel):
    """A single sold line, priced at the moment of sale."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    invoice_id: int | None = None  # FK -> invoices.id
    product_id: int  # FK -> products.id
    product_sku: str
    product_name: str
    quantity_sold: int = Field(..., ge=1)
    unit_price_at_sale: Decimal = Field(..., gt=0)
    # Modeled but never applied to totals
    item_discount: Decimal = Decimal("0")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def line_total(self) -> Decimal:
        return self.unit_price_at_sale * self.quantity_sold


class Invoice(BaseModel):
    """A persisted sale with its owned line items and totals."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    invoice_number: str
    invoice_date: datetime = Field(default_factory=datetime.utcnow)
    customer: Customer | None = None  # None = anonymous sale
    items: tuple[InvoiceItem, ...] = Field(..., min_length=1)
    discount_percentage: Decimal = Decimal("0")
    subtotal: Decimal
    total_discount: Decimal
    total_tax: Decimal
    grand_total: Decimal

    @model_validator(mode="after")
    def check_line_totals(self) -> "Invoice":
        """Subtotal must equal the sum of the line totals exactly."""
        line_sum = sum((item.line_total for item in self.items), Decimal("0"))
        if line_sum != self.subtotal:
            raise ValueError(
                f"Subtotal {self.subtotal} does not match sum of line totals {line_sum}"
            )
        return self

    @property
    def is_anonymous(self) -> bool:
        return self.customer is None

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity_sold for item in self.items)
