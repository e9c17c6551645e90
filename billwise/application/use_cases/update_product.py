"""Update Product Use Case: price, stock level, threshold or name."""

from dataclasses import dataclass

from billwise.application.dto.requests import UpdateProductRequest
from billwise.application.dto.responses import ProductResponse
from billwise.application.use_cases.create_invoice import UnitOfWorkFactory
from billwise.application.use_cases.register_product import product_to_response
from billwise.config import get_logger
from billwise.core.entities.product import Product
from billwise.core.exceptions import InvalidRequestError, ProductNotFoundError

logger = get_logger(__name__)


@dataclass
class UpdateProductResult:
    """Result of updating a product."""

    product: Product
    changed: list[str]


class UpdateProductUseCase:
    """
    Apply a partial update to a product.

    Price changes affect future sales only: invoice lines keep the
    unit_price_at_sale captured when they were sold.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    async def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            from billwise.infrastructure.storage.sqlite import (
                get_pool,
                sqlite_uow_factory,
            )

            self._uow_factory = sqlite_uow_factory(await get_pool())
        return self._uow_factory

    async def execute(self, sku: str, request: UpdateProductRequest) -> UpdateProductResult:
        """Execute update product use case."""
        changes = request.model_dump(exclude_none=True)
        if not changes:
            raise InvalidRequestError("body", "no fields to update")

        uow_factory = await self._get_uow_factory()
        async with uow_factory() as uow:
            product = await uow.products.find_by_sku(sku)
            if product is None:
                raise ProductNotFoundError(sku)
            product = await uow.products.save(product.model_copy(update=changes))

        logger.info("product_updated", sku=sku, changed=sorted(changes))
        return UpdateProductResult(product=product, changed=sorted(changes))

    def to_response(self, result: UpdateProductResult) -> ProductResponse:
        """Convert result to API response."""
        return product_to_response(result.product)
