"""
Coffee Menu Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Points DATABASE_URL at a throwaway SQLite file BEFORE the application
       package is imported, so the module-level engine targets it.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── catalog_tables (autouse): create tables before, drop after
    ├── db_session: AsyncSession on the test database
    ├── test_client: HTTPX AsyncClient talking to the ASGI app
    ├── admin_headers: Authorization header carrying the admin token
    └── sample_category / sample_item: request bodies in wire format
"""

import os
import tempfile

# Override settings for testing BEFORE any coffeemenu imports
_TEST_DIR = tempfile.mkdtemp(prefix="coffeemenu_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/menu.db"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "123"
os.environ["ADMIN_TOKEN"] = "test-admin-token"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from coffeemenu.database import Base, async_session_factory, engine, init_models


TEST_ADMIN_TOKEN = "test-admin-token"


@pytest_asyncio.fixture(autouse=True)
async def catalog_tables():
    """Fresh, empty tables for every test (ids restart at 1)."""
    await init_models()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session():
    """
    Provides a real AsyncSession on the test database.

    Usage:
        async def test_x(db_session):
            new_id = await catalog_store.create_category(db_session, "Кофе", "Coffee", "x")
    """
    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight into the FastAPI app via ASGITransport.

    The lifespan is not run; catalog_tables has already created the schema.
    """
    from coffeemenu.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {TEST_ADMIN_TOKEN}"}


@pytest.fixture
def sample_category():
    return {"nameRu": "Кофе", "nameEn": "Coffee", "image": "https://img.example/coffee.jpg"}


@pytest.fixture
def sample_item():
    """Item body without categoryId; tests add the id they created."""
    return {
        "nameRu": "Латте",
        "nameEn": "Latte",
        "descRu": "Эспрессо с молоком",
        "descEn": "Espresso with steamed milk",
        "price": 150.5,
        "image": "https://img.example/latte.jpg",
    }
