"""
Database Session Management
===========================

Async SQLAlchemy engine/session ownership and the request-scoped
session dependency.

The ``Database`` object is created by the application factory and
stored on ``app.state``; nothing here is a module-level connection.

Author: PMIS Team
Version: 1.0.0
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
from sqlalchemy.pool import StaticPool

from pmis.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Owns one async engine and its session factory.

    Usage:
        db = Database("sqlite+aiosqlite:///./pmis.db")
        await db.init()
        async with db.session_factory() as session:
            ...
        await db.close()
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine: AsyncEngine = self._create_engine(url, echo)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self.available = False

    @property
    def backend(self) -> str:
        """Dialect name, e.g. ``sqlite`` or ``postgresql``."""
        return self.engine.dialect.name

    @staticmethod
    def _create_engine(url: str, echo: bool) -> AsyncEngine:
        if url.startswith("sqlite") and ":memory:" in url:
            # One shared connection, otherwise every session sees an empty DB
            return create_async_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_async_engine(url, echo=echo, pool_pre_ping=True)

    async def init(self) -> None:
        """
        Create tables and verify connectivity.

        Called during application startup.
        """
        logger.info("Initializing database connection...")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self.available = True
        logger.info("Database connection established")

    async def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    async def close(self) -> None:
        """
        Close database connections.

        Called during application shutdown.
        """
        logger.info("Closing database connections...")
        await self.engine.dispose()
        self.available = False
        logger.info("Database connections closed")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Usage:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...

    Yields:
        AsyncSession: Database session committed on success
    """
    database: Database = request.app.state.container.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
