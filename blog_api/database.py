"""
Blog API: Database Handle and Session Management
==================================================

What:  The persistence gateway: an explicit `Database` handle around the async
       SQLAlchemy engine and session factory, plus the FastAPI session dependency.
How:   `Database.connect()` creates the engine, verifies connectivity and creates
       the `blog_posts` table; `Database.session()` hands out one AsyncSession per
       request; `Database.disconnect()` disposes the pool.
Who:   Created by `run_server()` (or by the app lifespan) and stored on
       `app.state.database`; route handlers receive sessions via `get_db_session`.
When:  Connected once at startup, disconnected once at shutdown.

There is no module-level engine. Whoever starts the process owns the handle
and passes it to whoever stops it.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blog_api.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shares one metadata object)."""
    pass


class Database:
    """
    Connection handle for the blog post store.

    Attributes:
        url:    Async SQLAlchemy URL this handle connects to
        engine: The live AsyncEngine, or None while disconnected
    """

    def __init__(self, url: str, pool_pre_ping: Optional[bool] = None):
        self.url = url
        self.pool_pre_ping = settings.db_pool_pre_ping if pool_pre_ping is None else pool_pre_ping
        self.engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self) -> None:
        """
        Open the connection pool and make sure the store is usable.

        Runs `SELECT 1` and creates missing tables. If either step fails the
        engine is disposed before the error propagates, so a failed connect
        leaves nothing behind.
        """
        if self.engine is not None:
            return

        # Importing the models registers their tables on Base.metadata
        from blog_api.models import blog_post  # noqa: F401

        engine = create_async_engine(
            self.url,
            pool_pre_ping=self.pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )
        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            await engine.dispose()
            raise

        self.engine = engine
        # expire_on_commit=False: attributes stay readable after commit for serialization
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Connected to blog post store (%s)", engine.url.render_as_string(hide_password=True))

    async def disconnect(self) -> None:
        """Dispose the engine, closing every pooled connection. Safe to call twice."""
        engine = self.engine
        if engine is None:
            return
        self.engine = None
        self._session_factory = None
        await engine.dispose()
        logger.info("Disconnected from blog post store")

    async def ping(self) -> None:
        """Run a trivial query; raises if the store is unreachable or not connected."""
        if self.engine is None:
            raise RuntimeError("Database is not connected")
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide an AsyncSession that rolls back on error and always closes.

        Writes are committed explicitly by the service layer so that a failed
        commit surfaces inside the request that caused it.
        """
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/posts")
        async def list_posts(db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        Any database exceptions propagate to the service layer, which wraps
        them in DatabaseError for the global error handler.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
