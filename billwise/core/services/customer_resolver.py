"""
Customer resolution at checkout.

Maps a contact number to an existing customer or lazily creates one. The
creation goes through the customer store of the caller's unit of work, so
a later failure in the sale rolls the new customer back too.
"""

import re

from billwise.config import get_logger
from billwise.core.entities.customer import Customer
from billwise.core.exceptions import InvalidRequestError
from billwise.core.interfaces.customer_store import ICustomerStore

logger = get_logger(__name__)

DEFAULT_CONTACT_PATTERN = r"^[0-9]{10}$"
DEFAULT_CUSTOMER_NAME = "Anonymous"


class CustomerResolver:
    """Lookup-or-create for the purchasing customer."""

    def __init__(
        self,
        customer_store: ICustomerStore,
        contact_pattern: str = DEFAULT_CONTACT_PATTERN,
        default_name: str = DEFAULT_CUSTOMER_NAME,
    ) -> None:
        self._customers = customer_store
        self._contact_re = re.compile(contact_pattern)
        self._default_name = default_name

    async def resolve(
        self,
        contact_number: str | None,
        name: str | None = None,
    ) -> Customer | None:
        """
        Resolve the customer for a sale.

        Returns None for anonymous sales (no contact number). Raises
        CustomerConflictError (from the store) if a concurrent sale created
        the same contact number first; callers re-resolve in that case.
        """
        if contact_number is None or not contact_number.strip():
            return None

        contact_number = contact_number.strip()
        if not self._contact_re.match(contact_number):
            raise InvalidRequestError(
                "customer_contact_number",
                "contact number has an invalid format",
                contact_number,
            )

        existing = await self._customers.find_by_contact_number(contact_number)
        if existing is not None:
            return existing

        customer_name = name.strip() if name and name.strip() else self._default_name
        customer = await self._customers.save(
            Customer(name=customer_name, contact_number=contact_number)
        )
        logger.info(
            "customer_created_at_checkout",
            customer_id=customer.id,
            contact_number=contact_number,
        )
        return customer
