"""SQLite implementation of product catalog and stock storage."""

from datetime import datetime
from decimal import Decimal

import aiosqlite

from billwise.config import get_logger
from billwise.core.entities.product import Product, UnitType
from billwise.core.exceptions import DuplicateSkuError, ProductNotFoundError
from billwise.core.interfaces.product_store import IProductStore

logger = get_logger(__name__)


class SQLiteProductStore(IProductStore):
    """Product store bound to a single (usually transactional) connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def create(self, product: Product) -> Product:
        now = datetime.utcnow()
        try:
            cursor = await self._conn.execute(
                """
                INSERT INTO products (
                    sku, name, selling_price_per_base_unit, unit_type,
                    base_unit, current_stock, min_stock_level,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    product.sku,
                    product.name,
                    str(product.selling_price_per_base_unit),
                    product.unit_type.value,
                    product.base_unit,
                    product.current_stock,
                    product.min_stock_level,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
        except aiosqlite.IntegrityError as e:
            if "products.sku" in str(e):
                raise DuplicateSkuError(product.sku) from e
            raise

        logger.info("product_created", sku=product.sku, product_id=cursor.lastrowid)
        return product.model_copy(
            update={"id": cursor.lastrowid, "created_at": now, "updated_at": now}
        )

    async def find_by_sku(self, sku: str) -> Product | None:
        cursor = await self._conn.execute(
            "SELECT * FROM products WHERE sku = ?",
            (sku,),
        )
        row = await cursor.fetchone()
        return self._row_to_product(row) if row else None

    async def save(self, product: Product) -> Product:
        """
        Write back name, price, stock and threshold.

        Stock is guarded at the row level too: the CHECK constraint on
        current_stock rejects any negative value regardless of caller.
        """
        now = datetime.utcnow()
        cursor = await self._conn.execute(
            """
            UPDATE products SET
                name = ?,
                selling_price_per_base_unit = ?,
                current_stock = ?,
                min_stock_level = ?,
                updated_at = ?
            WHERE sku = ?
            """,
            (
                product.name,
                str(product.selling_price_per_base_unit),
                product.current_stock,
                product.min_stock_level,
                now.isoformat(),
                product.sku,
            ),
        )
        if cursor.rowcount == 0:
            raise ProductNotFoundError(product.sku)

        logger.debug(
            "product_saved",
            sku=product.sku,
            current_stock=product.current_stock,
        )
        return product.model_copy(update={"updated_at": now})

    async def list_products(
        self, limit: int = 100, offset: int = 0
    ) -> list[Product]:
        cursor = await self._conn.execute(
            "SELECT * FROM products ORDER BY sku LIMIT ? OFFSET ?",
            (limit, offset),
        )
        rows = await cursor.fetchall()
        return [self._row_to_product(r) for r in rows]

    async def list_low_stock(
        self, limit: int = 100, offset: int = 0
    ) -> list[Product]:
        cursor = await self._conn.execute(
            """
            SELECT * FROM products
            WHERE current_stock <= min_stock_level
            ORDER BY current_stock ASC, sku
            LIMIT ? OFFSET ?
            """,
            (limit, offset),
        )
        rows = await cursor.fetchall()
        return [self._row_to_product(r) for r in rows]

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        """Convert a database row to a Product entity."""
        return Product(
            id=row["id"],
            sku=row["sku"],
            name=row["name"],
            selling_price_per_base_unit=Decimal(row["selling_price_per_base_unit"]),
            unit_type=UnitType(row["unit_type"]),
            base_unit=row["base_unit"],
            current_stock=row["current_stock"],
            min_stock_level=row["min_stock_level"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
