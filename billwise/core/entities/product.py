"""Product catalog domain entities."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, model_validator

# Largest value an SQLite INTEGER column can hold
SQLITE_MAX_INT = 2**63 - 1


class UnitType(str, Enum):
    """How a product's stock and price are measured."""

    WEIGHT = "WEIGHT"  # g, kg
    LIQUID = "LIQUID"  # ml, l
    COUNT = "COUNT"  # pcs, box, pack


class Product(BaseModel):
    """A sellable product with its live stock level."""

    id: int | None = None
    sku: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    selling_price_per_base_unit: Decimal = Field(..., gt=0, decimal_places=2)
    unit_type: UnitType
    base_unit: str = Field(..., min_length=1)
    current_stock: int = Field(default=0, ge=0, le=SQLITE_MAX_INT)
    min_stock_level: int = Field(default=0, ge=0, le=SQLITE_MAX_INT)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def check_base_unit(self) -> "Product":
        """Base unit must describe the unit type (volume for LIQUID, mass for WEIGHT)."""
        unit = self.base_unit.lower().strip()
        if self.unit_type == UnitType.LIQUID and not ("ml" in unit or "l" in unit):
            raise ValueError(
                "Base unit must reflect volume (e.g., 'ml' or 'l') for LIQUID type."
            )
        if self.unit_type == UnitType.WEIGHT and not ("g" in unit or "kg" in unit):
            raise ValueError(
                "Base unit must reflect mass (e.g., 'g' or 'kg') for WEIGHT type."
            )
        return self

    @property
    def is_low_stock(self) -> bool:
        """Stock at or below the reorder threshold."""
        return self.current_stock <= self.min_stock_level
