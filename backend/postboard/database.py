"""
PostBoard Backend — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   `Database` owns one async engine and its session factory. The
       application creates a single instance in `create_app()` and stores
       it on `app.state.db`; `get_db_session` hands out one session per
       request from that instance.
When:  Engine is created with the app; `connect()` runs in the lifespan
       before the server accepts requests; sessions are per-request.

Connection lifecycle:
    connect()  → check with SELECT 1, then create missing tables
    session()  → new AsyncSession (expire_on_commit=False)
    dispose()  → close every pooled connection at shutdown
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models register their tables on `Base.metadata`, which `Database.connect()`
    uses to create the schema.
    """
    pass


class Database:
    """
    Holds the async engine and session factory for one application instance.

    Attributes:
        url:              The SQLAlchemy URL the engine was created with
        engine:           AsyncEngine managing the connection pool
        session_factory:  async_sessionmaker producing AsyncSession objects
        connected:        True once connect() has succeeded
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        # Pool settings are left at SQLAlchemy's defaults for the dialect
        self.engine: AsyncEngine = create_async_engine(
            url,
            pool_pre_ping=True,
            echo=echo,
        )
        # expire_on_commit=False: attributes stay readable after commit,
        # outside of the session's lazy-load context
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.connected = False

    async def connect(self) -> None:
        """
        Open the database and make sure the schema exists.

        Raises:
            Any driver/SQLAlchemy exception if the database is unreachable.
            The lifespan treats this as fatal.
        """
        # Import models so their tables are registered on Base.metadata
        from postboard.models import post  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
        self.connected = True
        logger.info("Database connection established")

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self.engine.dispose()
        self.connected = False


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app's `Database`
        2. Yields it to the route handler
        3. On error: rolls back anything left uncommitted
        4. Always: closes the session (returns connection to pool)

    Commits are issued by the service layer, inside the operation that
    performs the write, so a failed commit surfaces as that operation's error.

    Example usage in a route:
        @router.get("/posts")
        async def list_posts(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    db: Database = request.app.state.db
    async with db.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
