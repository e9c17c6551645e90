"""
Inventory ledger.

Owns Product.current_stock during a sale. Every reservation is a
read-modify-write through the product store bound to the caller's unit of
work, so it commits or rolls back together with the rest of the invoice.
"""

from dataclasses import dataclass
from decimal import Decimal

from billwise.config import get_logger
from billwise.core.entities.product import Product
from billwise.core.exceptions import (
    InsufficientStockError,
    InvalidRequestError,
    ProductNotFoundError,
)
from billwise.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class StockReservation:
    """Outcome of a successful reservation."""

    product: Product  # state after the deduction
    quantity: int
    unit_price: Decimal  # audit price captured at reservation time


class InventoryLedger:
    """
    Atomic check-and-deduct over product stock.

    Pure service. The product store is injected and must belong to the
    active unit of work. No stock values are cached between calls.
    """

    def __init__(self, product_store: IProductStore) -> None:
        self._products = product_store

    async def reserve(self, sku: str, quantity: int) -> StockReservation:
        """
        Deduct quantity from the product's stock and capture its current price.

        Raises:
            InvalidRequestError: quantity < 1
            ProductNotFoundError: unknown SKU
            InsufficientStockError: current_stock < quantity
        """
        if quantity < 1:
            raise InvalidRequestError("quantity_sold", "must be at least 1", quantity)

        product = await self._products.find_by_sku(sku)
        if product is None:
            raise ProductNotFoundError(sku)

        if product.current_stock < quantity:
            raise InsufficientStockError(
                sku=sku,
                requested=quantity,
                available=product.current_stock,
            )

        updated = product.model_copy(
            update={"current_stock": product.current_stock - quantity}
        )
        updated = await self._products.save(updated)

        logger.info(
            "stock_reserved",
            sku=sku,
            quantity=quantity,
            remaining=updated.current_stock,
        )

        return StockReservation(
            product=updated,
            quantity=quantity,
            unit_price=product.selling_price_per_base_unit,
        )
