"""SQLite implementation of customer storage."""

from datetime import datetime

import aiosqlite

from billwise.config import get_logger
from billwise.core.entities.customer import Customer
from billwise.core.exceptions import CustomerConflictError
from billwise.core.interfaces.customer_store import ICustomerStore

logger = get_logger(__name__)


class SQLiteCustomerStore(ICustomerStore):
    """Customer store bound to a single (usually transactional) connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def find_by_contact_number(self, contact_number: str) -> Customer | None:
        cursor = await self._conn.execute(
            "SELECT * FROM customers WHERE contact_number = ?",
            (contact_number,),
        )
        row = await cursor.fetchone()
        return self._row_to_customer(row) if row else None

    async def save(self, customer: Customer) -> Customer:
        """
        Insert a customer.

        The insert runs under a savepoint so a uniqueness violation on
        contact_number only undoes this statement; stock already reserved
        in the enclosing transaction is left untouched.
        """
        await self._conn.execute("SAVEPOINT customer_insert")
        try:
            cursor = await self._conn.execute(
                """
                INSERT INTO customers (
                    name, contact_number, email, gst_number, created_at
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    customer.name,
                    customer.contact_number,
                    customer.email,
                    customer.gst_number,
                    customer.created_at.isoformat(),
                ),
            )
        except aiosqlite.IntegrityError as e:
            await self._conn.execute("ROLLBACK TO customer_insert")
            await self._conn.execute("RELEASE customer_insert")
            logger.warning(
                "customer_contact_conflict",
                contact_number=customer.contact_number,
            )
            raise CustomerConflictError(customer.contact_number or "") from e
        await self._conn.execute("RELEASE customer_insert")

        logger.info("customer_created", customer_id=cursor.lastrowid)
        return customer.model_copy(update={"id": cursor.lastrowid})

    async def list_customers(
        self, limit: int = 100, offset: int = 0
    ) -> list[Customer]:
        cursor = await self._conn.execute(
            "SELECT * FROM customers ORDER BY id LIMIT ? OFFSET ?",
            (limit, offset),
        )
        rows = await cursor.fetchall()
        return [self._row_to_customer(r) for r in rows]

    @staticmethod
    def _row_to_customer(row: aiosqlite.Row) -> Customer:
        """Convert a database row to a Customer entity."""
        return Customer(
            id=row["id"],
            name=row["name"],
            contact_number=row["contact_number"],
            email=row["email"],
            gst_number=row["gst_number"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
