"""
PostBoard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── sample_post: An unsaved Post ORM instance
    ├── app_settings: Settings pointing at a per-test SQLite file
    ├── test_app: FastAPI app built from app_settings
    └── test_client: HTTPX AsyncClient with the app's lifespan running
"""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Override settings for testing BEFORE any app imports; postboard.main
# builds its module-level app from the environment
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from postboard.config import Settings
from postboard.main import create_app
from postboard.models.post import Post


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_delete(mock_db_session, sample_post):
            result = MagicMock()
            result.scalar_one_or_none.return_value = sample_post
            mock_db_session.execute.return_value = result
            post = await post_service.delete_post(mock_db_session, str(sample_post.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_post():
    """A Post as it would look after being loaded from the database."""
    created = datetime.now(timezone.utc) - timedelta(hours=1)
    return Post(
        id=uuid4(),
        title="First post",
        content="Hello from the test suite.",
        author="Ada",
        created_at=created,
        updated_at=created,
    )


@pytest.fixture
def app_settings(tmp_path):
    """Settings with a fresh SQLite database file per test."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        log_level="WARNING",
    )


@pytest.fixture
def test_app(app_settings):
    return create_app(app_settings)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP client talking to a started application.

    ASGITransport does not send lifespan events, so the app's lifespan is
    entered explicitly; it connects the database and creates the tables.
    """
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
