"""Fixtures for API tests: ASGI client with dependency overrides."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from billwise.api.dependencies import get_read_uow
from billwise.api.main import app


class FakeReadUnitOfWork:
    def __init__(self):
        self.products = AsyncMock()
        self.customers = AsyncMock()
        self.invoices = AsyncMock()


@pytest.fixture
def read_uow() -> FakeReadUnitOfWork:
    return FakeReadUnitOfWork()


@pytest.fixture
async def client(read_uow) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_read_uow] = lambda: read_uow
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
