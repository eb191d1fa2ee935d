"""
Database Session Management

This module owns the async SQLAlchemy engine and hands out sessions. A
``Database`` is created by the application factory and passed explicitly to
whatever needs it; nothing here is a module-level singleton.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from inkwell.common.logger import app_logger
from inkwell.database.base import Base

logger = app_logger.getChild("db.session")


def get_engine_kwargs(
    database_url: str,
    echo: bool = False,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: int = 30
) -> Dict[str, Any]:
    """
    Get engine keyword arguments based on database type.

    Only PostgreSQL gets pool tuning; SQLite uses SQLAlchemy's defaults.
    """
    kwargs: Dict[str, Any] = {"echo": echo}

    if database_url.startswith("postgresql"):
        kwargs.update({
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_timeout": pool_timeout,
            "pool_pre_ping": True,
            "pool_recycle": 300,
        })

    return kwargs


class Database:
    """
    Handle on one database: engine, session factory and schema helpers.
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30
    ):
        """
        Create the engine. No connection is opened until first use.

        Args:
            database_url: SQLAlchemy async URL (postgresql+asyncpg or sqlite+aiosqlite)
            echo: Whether to echo SQL statements
            pool_size: Connection pool size (PostgreSQL only)
            max_overflow: Connections allowed above pool_size (PostgreSQL only)
            pool_timeout: Seconds to wait for a pooled connection (PostgreSQL only)
        """
        self.database_url = database_url
        self.engine: AsyncEngine = create_async_engine(
            database_url,
            **get_engine_kwargs(database_url, echo, pool_size, max_overflow, pool_timeout)
        )
        self.session_factory = sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info(f"Database engine created for {database_url.split(':', 1)[0]}")

    async def ping(self) -> None:
        """Run a trivial query to prove the database is reachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_schema(self) -> None:
        """Create every table registered on the declarative metadata."""
        # Importing the model modules registers their tables.
        from inkwell.assessments import database_models as _assessment_models  # noqa: F401
        from inkwell.stories import database_models as _story_models  # noqa: F401
        from inkwell.users import database_models as _user_models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema created")

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Open a session for one unit of work.

        Repositories commit their own writes; anything left uncommitted when
        an exception escapes is rolled back.
        """
        session = self.session_factory()
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.debug(f"Rolled back session after {type(e).__name__}")
            raise
        finally:
            await session.close()
