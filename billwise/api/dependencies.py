"""
Dependency injection container for FastAPI.

Provides use cases and read-only units of work to route handlers.
"""

from collections.abc import AsyncIterator
from functools import lru_cache

from billwise.application.use_cases import (
    CreateInvoiceUseCase,
    RegisterCustomerUseCase,
    RegisterProductUseCase,
    UpdateProductUseCase,
)
from billwise.config import Settings, get_settings
from billwise.core.interfaces import IUnitOfWork
from billwise.infrastructure.storage.sqlite import SQLiteUnitOfWork, get_pool


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


async def get_read_uow() -> AsyncIterator[IUnitOfWork]:
    """Read-only unit of work scoped to one request."""
    pool = await get_pool()
    async with SQLiteUnitOfWork(pool, write=False) as uow:
        yield uow


# Use case dependencies
def get_create_invoice_use_case() -> CreateInvoiceUseCase:
    """Get create invoice use case."""
    return CreateInvoiceUseCase()


def get_register_customer_use_case() -> RegisterCustomerUseCase:
    """Get register customer use case."""
    return RegisterCustomerUseCase()


def get_register_product_use_case() -> RegisterProductUseCase:
    """Get register product use case."""
    return RegisterProductUseCase()


def get_update_product_use_case() -> UpdateProductUseCase:
    """Get update product use case."""
    return UpdateProductUseCase()
