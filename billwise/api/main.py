"""
FastAPI application factory for the sales API.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from billwise.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from billwise.api.middleware.error_handler import setup_exception_handlers
from billwise.api.routes import (
    customers_router,
    health_router,
    invoices_router,
    products_router,
)
from billwise.config import configure_logging, get_logger, get_settings
from billwise.core.exceptions import ConfigurationError

logger = get_logger(__name__)

ROUTERS = (health_router, invoices_router, products_router, customers_router)


async def prepare_database() -> None:
    """
    Bring the schema up to date before the first sale is accepted.

    With ``STORAGE_AUTO_MIGRATE=false`` nothing is applied and startup is
    refused while migrations are pending.
    """
    from billwise.infrastructure.storage.sqlite.migrations.migrator import (
        get_migration_status,
        run_migrations,
    )

    storage = get_settings().storage

    if not storage.auto_migrate:
        status = await get_migration_status(storage.db_path)
        if not status.up_to_date:
            raise ConfigurationError(
                "Database schema is not up to date; run billwise-migrate",
                details={"pending": status.pending, "exists": status.exists},
            )
        return

    results = await run_migrations(storage.db_path)
    failed = [r.version for r in results if not r.success]
    if failed:
        logger.error("database_init_failed", failed_migrations=failed)
        raise ConfigurationError(
            "Database migrations failed", details={"failed": failed}
        )
    logger.info("database_initialized", applied=[r.version for r in results])


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    from billwise.infrastructure.storage.sqlite import close_pool, get_pool

    settings = get_settings()
    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        db_path=str(settings.storage.db_path),
    )

    await prepare_database()
    await get_pool()
    logger.info("application_started")
    try:
        yield
    finally:
        await close_pool()
        logger.info("application_stopped")


def create_app() -> FastAPI:
    """Build the app: logging, middleware, error handlers and routers."""
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="BillWise Sales API",
        description="Point-of-sale invoicing with atomic stock reservation",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Added last runs first: request ids are bound before errors are logged
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(LoggingMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_methods=["GET", "POST", "PATCH"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Response-Time"],
        )

    setup_exception_handlers(app)

    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def root_health() -> dict[str, str]:
        """Liveness check for container orchestrators."""
        return {"status": "healthy", "version": settings.app_version}

    return app


app = create_app()


def serve() -> None:
    """Run the API with uvicorn (``billwise-api``)."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "billwise.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )


if __name__ == "__main__":
    serve()
