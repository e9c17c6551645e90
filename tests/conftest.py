"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from billwise.config import BillingSettings
from billwise.core.entities import Product
from billwise.infrastructure.storage.sqlite import ConnectionPool, sqlite_uow_factory
from billwise.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def migrated_db(temp_db_path: Path) -> Path:
    """Temporary database with every migration applied."""
    results = await initialize_database(temp_db_path, create_backup_before=False)
    assert all(r.success for r in results)
    return temp_db_path


@pytest.fixture
async def pool(migrated_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Connection pool over the migrated database."""
    pool = ConnectionPool(migrated_db, pool_size=4, busy_timeout=5000)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def uow_factory(pool: ConnectionPool):
    """Zero-argument writer unit of work factory."""
    return sqlite_uow_factory(pool)


@pytest.fixture
def billing_settings() -> BillingSettings:
    return BillingSettings()


@pytest.fixture
def seed_products(uow_factory):
    """Insert products and return them with ids assigned."""

    async def _seed(*products: Product) -> list[Product]:
        async with uow_factory() as uow:
            return [await uow.products.create(p) for p in products]

    return _seed
