"""Test data builders."""

from decimal import Decimal

from billwise.core.entities import Product, UnitType


def make_product(
    sku: str = "SKU-1",
    price: str = "100.00",
    stock: int = 10,
    **overrides,
) -> Product:
    """Build a COUNT product with sensible defaults."""
    fields = {
        "sku": sku,
        "name": f"Product {sku}",
        "selling_price_per_base_unit": Decimal(price),
        "unit_type": UnitType.COUNT,
        "base_unit": "pcs",
        "current_stock": stock,
        "min_stock_level": 2,
    }
    fields.update(overrides)
    return Product(**fields)
