"""Abstract unit of work spanning the product, customer and invoice stores."""

from abc import ABC, abstractmethod
from types import TracebackType

from billwise.core.interfaces.customer_store import ICustomerStore
from billwise.core.interfaces.invoice_store import IInvoiceStore
from billwise.core.interfaces.product_store import IProductStore


class IUnitOfWork(ABC):
    """
    One atomic transaction over all stores.

    Usage:
        async with uow_factory() as uow:
            product = await uow.products.find_by_sku("SKU-1")
            ...

    Commits on clean exit; rolls back on any exception, including cancellation.
    """

    products: IProductStore
    customers: ICustomerStore
    invoices: IInvoiceStore

    @abstractmethod
    async def __aenter__(self) -> "IUnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        pass
