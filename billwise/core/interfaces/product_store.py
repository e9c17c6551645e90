"""Abstract interface for product storage."""

from abc import ABC, abstractmethod

from billwise.core.entities.product import Product


class IProductStore(ABC):
    """Interface for product catalog and stock persistence."""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """Insert a new product. Raises DuplicateSkuError on SKU collision."""
        pass

    @abstractmethod
    async def find_by_sku(self, sku: str) -> Product | None:
        """Get product by SKU."""
        pass

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """Persist changes to an existing product (price, stock, ...)."""
        pass

    @abstractmethod
    async def list_products(
        self, limit: int = 100, offset: int = 0
    ) -> list[Product]:
        """List products with pagination."""
        pass

    @abstractmethod
    async def list_low_stock(
        self, limit: int = 100, offset: int = 0
    ) -> list[Product]:
        """List products whose current_stock is at or below min_stock_level."""
        pass
