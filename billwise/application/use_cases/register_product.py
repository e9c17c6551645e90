"""Register Product Use Case: adds a product to the catalog."""

from dataclasses import dataclass

from pydantic import ValidationError

from billwise.application.dto.requests import CreateProductRequest
from billwise.application.dto.responses import ProductResponse
from billwise.application.use_cases.create_invoice import UnitOfWorkFactory
from billwise.config import get_logger
from billwise.core.entities.product import Product
from billwise.core.exceptions import DuplicateSkuError, InvalidRequestError

logger = get_logger(__name__)


@dataclass
class RegisterProductResult:
    """Result of registering a product."""

    product: Product


class RegisterProductUseCase:
    """Create a product after checking SKU uniqueness and unit rules."""

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

    async def execute(self, request: CreateProductRequest) -> RegisterProductResult:
        """Execute register product use case."""
        logger.info("register_product_started", sku=request.sku)

        try:
            product = Product(**request.model_dump())
        except ValidationError as e:
            # Unit rules (LIQUID -> ml/l, WEIGHT -> g/kg) live on the entity
            raise InvalidRequestError(
                "base_unit", e.errors()[0]["msg"], request.base_unit
            ) from e

        uow_factory = await self._get_uow_factory()
        async with uow_factory() as uow:
            if await uow.products.find_by_sku(product.sku) is not None:
                raise DuplicateSkuError(product.sku)
            product = await uow.products.create(product)

        logger.info("register_product_complete", sku=product.sku, product_id=product.id)
        return RegisterProductResult(product=product)

    def to_response(self, result: RegisterProductResult) -> ProductResponse:
        """Convert result to API response."""
        return product_to_response(result.product)


def product_to_response(product: Product) -> ProductResponse:
    """Snapshot a product entity as its API response."""
    return ProductResponse(
        id=product.id,  # type: ignore[arg-type]
        sku=product.sku,
        name=product.name,
        selling_price_per_base_unit=product.selling_price_per_base_unit,
        unit_type=product.unit_type,
        base_unit=product.base_unit,
        current_stock=product.current_stock,
        min_stock_level=product.min_stock_level,
        is_low_stock=product.is_low_stock,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )
