"""
Database connection management

The ``Database`` object owns the async SQLAlchemy engine for the lifetime of
the process. It is created by the application lifespan, stored on
``app.state.database`` and handed to request handlers through ``get_session``.
"""

import asyncio
import logging
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from order_service.utils.error_handler import DatabaseError

logger = logging.getLogger(__name__)

Base = declarative_base()

ORDER_TABLE = "order"


class Database:
    """Lazily initialised, shared store connection"""

    def __init__(self, url: str, reset_schema: bool = False, echo: bool = False):
        self.url = url
        self.reset_schema = reset_schema
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None
        self._init_task: Optional[asyncio.Task] = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> AsyncEngine:
        """Return the engine, initialising it on first use.

        Concurrent callers share one in-flight initialisation. A failed attempt
        is discarded so the next caller starts over.
        """
        if self._engine is not None:
            return self._engine

        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._initialize())

        return await asyncio.shield(self._init_task)

    async def _initialize(self) -> AsyncEngine:
        logger.info("Starting database initialization")
        engine = self._create_engine()
        try:
            async with engine.begin() as conn:
                if self.reset_schema:
                    logger.info("Synchronizing test database")
                    await conn.run_sync(Base.metadata.drop_all)
                await conn.run_sync(Base.metadata.create_all)
                await self._verify_schema(conn)
        except Exception as e:
            self._init_task = None
            await engine.dispose()
            logger.error(f"Database initialization failed: {e}")
            raise

        self._engine = engine
        self._sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
        logger.info("Database initialization completed")
        return engine

    def _create_engine(self) -> AsyncEngine:
        if ":memory:" in self.url:
            # One shared connection, otherwise every checkout sees an empty database
            return create_async_engine(
                self.url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_async_engine(self.url, echo=self.echo)

    async def _verify_schema(self, conn) -> None:
        has_table = await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(ORDER_TABLE))
        if not has_table:
            raise DatabaseError("Order table was not created properly")

    async def session(self) -> AsyncSession:
        await self.connect()
        return self._sessionmaker()

    async def close(self) -> None:
        if self._init_task is not None and not self._init_task.done():
            await asyncio.gather(self._init_task, return_exceptions=True)
        if self._engine is not None:
            logger.info("Closing database connection")
            await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        self._init_task = None


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding one session per request"""
    database: Database = request.app.state.database
    session = await database.session()
    try:
        yield session
    finally:
        await session.close()
