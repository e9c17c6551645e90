"""Abstract interface for sales invoice storage."""

from abc import ABC, abstractmethod

from billwise.core.entities.invoice import Invoice


class IInvoiceStore(ABC):
    """Interface for invoice persistence. Items are only written with their invoice."""

    @abstractmethod
    async def save(self, invoice: Invoice) -> Invoice:
        """Insert an invoice with all its items; returns a copy with ids assigned."""
        pass

    @abstractmethod
    async def next_number(self) -> int:
        """Allocate the next invoice sequence value inside the current transaction."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of persisted invoices."""
        pass

    @abstractmethod
    async def get(self, invoice_id: int) -> Invoice | None:
        """Get invoice by ID with items and customer."""
        pass

    @abstractmethod
    async def list_invoices(
        self, limit: int = 100, offset: int = 0
    ) -> list[Invoice]:
        """List invoices, newest first."""
        pass
