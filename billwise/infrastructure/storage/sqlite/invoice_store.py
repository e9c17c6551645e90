"""SQLite implementation of sales invoice storage."""

from datetime import datetime
from decimal import Decimal

import aiosqlite

from billwise.config import get_logger
from billwise.core.entities.customer import Customer
from billwise.core.entities.invoice import Invoice, InvoiceItem
from billwise.core.interfaces.invoice_store import IInvoiceStore

logger = get_logger(__name__)

INVOICE_SEQUENCE = "invoice"

_INVOICE_SELECT = """
    SELECT
        i.*,
        c.name AS customer_name,
        c.contact_number AS customer_contact_number,
        c.email AS customer_email,
        c.gst_number AS customer_gst_number,
        c.created_at AS customer_created_at
    FROM invoices i
    LEFT JOIN customers c ON c.id = i.customer_id
"""


class SQLiteInvoiceStore(IInvoiceStore):
    """Invoice store bound to a single (usually transactional) connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def save(self, invoice: Invoice) -> Invoice:
        """Insert invoice header and items; returns a copy with ids assigned."""
        cursor = await self._conn.execute(
            """
            INSERT INTO invoices (
                invoice_number, invoice_date, customer_id,
                discount_percentage, subtotal, total_discount,
                total_tax, grand_total
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                invoice.invoice_number,
                invoice.invoice_date.isoformat(),
                invoice.customer.id if invoice.customer else None,
                str(invoice.discount_percentage),
                str(invoice.subtotal),
                str(invoice.total_discount),
                str(invoice.total_tax),
                str(invoice.grand_total),
            ),
        )
        invoice_id = cursor.lastrowid

        items = []
        for item in invoice.items:
            item_cursor = await self._conn.execute(
                """
                INSERT INTO invoice_items (
                    invoice_id, product_id, product_sku, product_name,
                    quantity_sold, unit_price_at_sale, item_discount, line_total
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    invoice_id,
                    item.product_id,
                    item.product_sku,
                    item.product_name,
                    item.quantity_sold,
                    str(item.unit_price_at_sale),
                    str(item.item_discount),
                    str(item.line_total),
                ),
            )
            items.append(
                item.model_copy(
                    update={"id": item_cursor.lastrowid, "invoice_id": invoice_id}
                )
            )

        logger.info(
            "invoice_saved",
            invoice_id=invoice_id,
            invoice_number=invoice.invoice_number,
            items=len(items),
        )
        return invoice.model_copy(update={"id": invoice_id, "items": tuple(items)})

    async def next_number(self) -> int:
        """
        Increment the invoice counter row and return the new value.

        Runs inside the caller's transaction: a rollback returns the value,
        so committed invoice numbers have no gaps.
        """
        cursor = await self._conn.execute(
            "UPDATE sequences SET current_value = current_value + 1 WHERE name = ?",
            (INVOICE_SEQUENCE,),
        )
        if cursor.rowcount == 0:
            await self._conn.execute(
                "INSERT INTO sequences (name, current_value) VALUES (?, 1)",
                (INVOICE_SEQUENCE,),
            )
            return 1

        cursor = await self._conn.execute(
            "SELECT current_value FROM sequences WHERE name = ?",
            (INVOICE_SEQUENCE,),
        )
        row = await cursor.fetchone()
        logger.debug("invoice_number_allocated", value=row["current_value"])
        return row["current_value"]

    async def count(self) -> int:
        cursor = await self._conn.execute("SELECT COUNT(*) FROM invoices")
        row = await cursor.fetchone()
        return row[0]

    async def get(self, invoice_id: int) -> Invoice | None:
        """Get invoice by ID with items and customer."""
        cursor = await self._conn.execute(
            f"{_INVOICE_SELECT} WHERE i.id = ?",
            (invoice_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None

        items = await self._load_items(invoice_id)
        return self._row_to_invoice(row, items)

    async def list_invoices(
        self, limit: int = 100, offset: int = 0
    ) -> list[Invoice]:
        """List invoices, newest first."""
        cursor = await self._conn.execute(
            f"{_INVOICE_SELECT} ORDER BY i.id DESC LIMIT ? OFFSET ?",
            (limit, offset),
        )
        rows = await cursor.fetchall()

        invoices = []
        for row in rows:
            items = await self._load_items(row["id"])
            invoices.append(self._row_to_invoice(row, items))
        return invoices

    async def _load_items(self, invoice_id: int) -> list[InvoiceItem]:
        cursor = await self._conn.execute(
            "SELECT * FROM invoice_items WHERE invoice_id = ? ORDER BY id",
            (invoice_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_item(r) for r in rows]

    @staticmethod
    def _row_to_invoice(row: aiosqlite.Row, items: list[InvoiceItem]) -> Invoice:
        """Convert a joined database row to an Invoice entity."""
        customer = None
        if row["customer_id"] is not None:
            customer = Customer(
                id=row["customer_id"],
                name=row["customer_name"],
                contact_number=row["customer_contact_number"],
                email=row["customer_email"],
                gst_number=row["customer_gst_number"],
                created_at=datetime.fromisoformat(row["customer_created_at"]),
            )

        return Invoice(
            id=row["id"],
            invoice_number=row["invoice_number"],
            invoice_date=datetime.fromisoformat(row["invoice_date"]),
            customer=customer,
            items=tuple(items),
            discount_percentage=Decimal(row["discount_percentage"]),
            subtotal=Decimal(row["subtotal"]),
            total_discount=Decimal(row["total_discount"]),
            total_tax=Decimal(row["total_tax"]),
            grand_total=Decimal(row["grand_total"]),
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> InvoiceItem:
        """Convert a database row to an InvoiceItem entity."""
        return InvoiceItem(
            id=row["id"],
            invoice_id=row["invoice_id"],
            product_id=row["product_id"],
            product_sku=row["product_sku"],
            product_name=row["product_name"],
            quantity_sold=row["quantity_sold"],
            unit_price_at_sale=Decimal(row["unit_price_at_sale"]),
            item_discount=Decimal(row["item_discount"]),
        )
