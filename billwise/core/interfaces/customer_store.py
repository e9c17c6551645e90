"""Abstract interface for customer storage."""

from abc import ABC, abstractmethod

from billwise.core.entities.customer import Customer


class ICustomerStore(ABC):
    """Interface for customer persistence."""

    @abstractmethod
    async def find_by_contact_number(self, contact_number: str) -> Customer | None:
        """Get customer by contact number."""
        pass

    @abstractmethod
    async def save(self, customer: Customer) -> Customer:
        """Insert a new customer. Raises CustomerConflictError on duplicate contact."""
        pass

    @abstractmethod
    async def list_customers(
        self, limit: int = 100, offset: int = 0
    ) -> list[Customer]:
        """List customers with pagination."""
        pass
