"""
Core business logic services.

Layer-pure services that depend only on:
- billwise/core/entities/*
- billwise/core/interfaces/*
- billwise/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from billwise.core.services.customer_resolver import CustomerResolver
from billwise.core.services.inventory_ledger import InventoryLedger, StockReservation
from billwise.core.services.pricing import (
    TAX_RATE,
    InvoiceTotals,
    calculate_totals,
    check_discount_percentage,
)

__all__ = [
    # Inventory
    "InventoryLedger",
    "StockReservation",
    # Customers
    "CustomerResolver",
    # Pricing
    "TAX_RATE",
    "InvoiceTotals",
    "calculate_totals",
    "check_discount_percentage",
]
