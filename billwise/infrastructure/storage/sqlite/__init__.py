"""SQLite storage implementations."""

from billwise.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
)
from billwise.infrastructure.storage.sqlite.customer_store import SQLiteCustomerStore
from billwise.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from billwise.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from billwise.infrastructure.storage.sqlite.unit_of_work import (
    SQLiteUnitOfWork,
    sqlite_uow_factory,
)

__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    # Stores
    "SQLiteProductStore",
    "SQLiteCustomerStore",
    "SQLiteInvoiceStore",
    # Unit of work
    "SQLiteUnitOfWork",
    "sqlite_uow_factory",
]
