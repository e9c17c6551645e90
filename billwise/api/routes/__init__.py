"""API route modules."""

from billwise.api.routes.customers import router as customers_router
from billwise.api.routes.health import router as health_router
from billwise.api.routes.invoices import router as invoices_router
from billwise.api.routes.products import router as products_router

__all__ = [
    "health_router",
    "invoices_router",
    "products_router",
    "customers_router",
]
