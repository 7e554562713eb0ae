# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Shared fixtures for all tests
# ==============================================================================

from __future__ import annotations

import asyncio
import os
import tempfile
from typing import AsyncGenerator, Callable
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment before importing app
_TEST_DIR = tempfile.mkdtemp(prefix="bizdash-tests-")
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_TYPE"] = "sqlite"
os.environ["SQLITE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'default.db')}"
os.environ["DEFAULT_TAX_RATE"] = "0.19"
os.environ["LOG_LEVEL"] = "WARNING"


def _database_url(directory) -> str:
    return f"sqlite+aiosqlite:///{os.path.join(str(directory), f'{uuid4().hex}.db')}"


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest_asyncio.fixture
async def adapter(tmp_path) -> AsyncGenerator:
    """Connected SQLite document store on a fresh file."""
    from bizdash.database.adapters.sqlite_adapter import SQLiteAdapter

    store = SQLiteAdapter(database_url=_database_url(tmp_path))
    await store.connect()
    yield store
    await store.disconnect()


@pytest.fixture
def repositories(adapter):
    """Repositories for every collection, sharing one adapter."""
    from bizdash.database.repositories import (
        ClientRepository,
        InvoiceRepository,
        OrderRepository,
        ProductRepository,
    )

    return {
        "clients": ClientRepository(adapter),
        "products": ProductRepository(adapter),
        "orders": OrderRepository(adapter),
        "invoices": InvoiceRepository(adapter),
    }


# ==============================================================================
# HTTP CLIENT FIXTURES
# ==============================================================================

@pytest_asyncio.fixture
async def client(tmp_path) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    from bizdash.core.settings import DatabaseType
    from bizdash.database.factory import DatabaseFactory
    from bizdash.main import app
    from bizdash.services.order_locks import OrderLockRegistry

    DatabaseFactory.reset()
    await DatabaseFactory.initialize(
        DatabaseType.SQLITE,
        database_url=_database_url(tmp_path),
    )
    app.state.order_locks = OrderLockRegistry()

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        timeout=30.0,
    ) as async_client:
        yield async_client

    await DatabaseFactory.shutdown()
    DatabaseFactory.reset()


# ==============================================================================
# HELPER FIXTURES
# ==============================================================================

@pytest.fixture
def sample_client_data() -> dict:
    """Generate sample client data."""
    return {
        "cin": f"CIN{uuid4().hex[:6].upper()}",
        "name": "John Doe",
        "email": "john.doe@example.com",
        "phone": "+216 20 123 456",
        "location": "Tunis",
    }


@pytest.fixture
def sample_product_data() -> dict:
    """Generate sample product data."""
    return {
        "reference": f"ref-{uuid4().hex[:6]}",
        "name": "Desk Lamp",
        "description": "LED desk lamp",
        "features": ["Dimmable", "USB-C"],
        "price": 25.5,
        "stock": 15,
        "status": "In Stock",
    }


class Rendezvous:
    """
    Holds every caller until ``parties`` callers have arrived.

    Calls made one after another never reach the count, so the first
    caller times out.
    """

    def __init__(self, parties: int, timeout: float = 2.0) -> None:
        self.parties = parties
        self.timeout = timeout
        self.arrived = 0
        self._all_arrived = asyncio.Event()

    async def wait(self) -> None:
        self.arrived += 1
        if self.arrived >= self.parties:
            self._all_arrived.set()
        await asyncio.wait_for(self._all_arrived.wait(), self.timeout)


@pytest.fixture
def rendezvous() -> Callable[[int], Rendezvous]:
    """Factory for a rendezvous of the given number of callers."""
    return Rendezvous
