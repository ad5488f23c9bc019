"""
Blog API: Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── sample_post_data: Field values of a stored post
    ├── database_url: SQLite file URL inside the test's tmp_path
    ├── database: Connected Database handle on that file
    └── test_client: HTTPX AsyncClient talking to the app over ASGITransport
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Override settings for testing BEFORE any blog_api imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from blog_api.database import Database
from blog_api.main import create_app


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_post(mock_db_session):
            mock_db_session.get.return_value = post
            result = await blog_post_service.get_post(mock_db_session, str(post.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_post_data():
    """Field values of a stored blog post."""
    return {
        "id": uuid4(),
        "title": "First post",
        "content": "Hello from the blog.",
        "author": "Ada",
        "created": datetime.now(timezone.utc),
    }


@pytest.fixture
def database_url(tmp_path):
    """A throwaway SQLite database file per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}"


@pytest_asyncio.fixture
async def database(database_url):
    """Connected Database handle, disconnected after the test."""
    db = Database(database_url)
    await db.connect()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan; the `database` fixture has
    already connected the handle the app uses.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/posts")
            assert response.status_code == 200
    """
    app = create_app(database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
