"""SQLite unit of work binding all stores to one pooled transaction."""

from contextlib import AsyncExitStack
from types import TracebackType

from billwise.config import get_logger
from billwise.core.interfaces.unit_of_work import IUnitOfWork
from billwise.infrastructure.storage.sqlite.connection import ConnectionPool
from billwise.infrastructure.storage.sqlite.customer_store import SQLiteCustomerStore
from billwise.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from billwise.infrastructure.storage.sqlite.product_store import SQLiteProductStore

logger = get_logger(__name__)


class SQLiteUnitOfWork(IUnitOfWork):
    """
    One SQLite transaction shared by the product, customer and invoice stores.

    Writers open with BEGIN IMMEDIATE: the database write lock is held from
    the first statement, so concurrent sales touching the same products are
    serialized rather than interleaved. Nothing written inside the block is
    visible to other connections until a clean exit commits it.
    """

    def __init__(self, pool: ConnectionPool, write: bool = True):
        self._pool = pool
        self._write = write
        self._stack: AsyncExitStack | None = None

    async def __aenter__(self) -> "SQLiteUnitOfWork":
        stack = AsyncExitStack()
        conn = await stack.enter_async_context(
            self._pool.transaction(immediate=self._write)
        )
        self._stack = stack
        self.products = SQLiteProductStore(conn)
        self.customers = SQLiteCustomerStore(conn)
        self.invoices = SQLiteInvoiceStore(conn)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        stack, self._stack = self._stack, None
        if stack is None:
            return
        if exc_type is not None:
            logger.warning(
                "unit_of_work_rolled_back",
                error_type=exc_type.__name__,
            )
        await stack.__aexit__(exc_type, exc, tb)


def sqlite_uow_factory(pool: ConnectionPool, write: bool = True):
    """Bind a pool into a zero-argument unit of work factory."""

    def factory() -> SQLiteUnitOfWork:
        return SQLiteUnitOfWork(pool, write=write)

    return factory
