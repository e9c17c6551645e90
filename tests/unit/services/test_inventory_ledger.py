"""Tests for the inventory ledger."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from billwise.core.entities import Product, UnitType
from billwise.core.exceptions import (
    InsufficientStockError,
    InvalidRequestError,
    ProductNotFoundError,
)
from billwise.core.services.inventory_ledger import InventoryLedger


def _product(stock: int = 10) -> Product:
    return Product(
        id=7,
        sku="OIL-1L",
        name="Sunflower Oil",
        selling_price_per_base_unit=Decimal("140.00"),
        unit_type=UnitType.LIQUID,
        base_unit="l",
        current_stock=stock,
    )


@pytest.fixture
def product_store():
    store = AsyncMock()
    store.find_by_sku.return_value = _product()
    store.save.side_effect = lambda p: p
    return store


class TestReserve:
    async def test_deducts_and_captures_price(self, product_store):
        ledger = InventoryLedger(product_store)

        reservation = await ledger.reserve("OIL-1L", 4)

        assert reservation.product.current_stock == 6
        assert reservation.unit_price == Decimal("140.00")
        assert reservation.quantity == 4
        saved = product_store.save.call_args.args[0]
        assert saved.current_stock == 6

    async def test_exact_stock_allowed(self, product_store):
        reservation = await InventoryLedger(product_store).reserve("OIL-1L", 10)
        assert reservation.product.current_stock == 0

    async def test_insufficient_stock(self, product_store):
        with pytest.raises(InsufficientStockError) as exc_info:
            await InventoryLedger(product_store).reserve("OIL-1L", 11)

        assert exc_info.value.details["available"] == 10
        product_store.save.assert_not_called()

    async def test_unknown_sku(self, product_store):
        product_store.find_by_sku.return_value = None

        with pytest.raises(ProductNotFoundError):
            await InventoryLedger(product_store).reserve("NOPE", 1)
        product_store.save.assert_not_called()

    async def test_zero_quantity_rejected(self, product_store):
        with pytest.raises(InvalidRequestError):
            await InventoryLedger(product_store).reserve("OIL-1L", 0)
        product_store.find_by_sku.assert_not_called()
