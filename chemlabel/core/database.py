"""Async SQLAlchemy engine, session factory and database client."""

import time
from collections.abc import AsyncGenerator

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from chemlabel.core.config import settings
from chemlabel.utils.logging import get_logger

LOGGER = get_logger(__name__)

SDS_TABLE = "sds_documents"


class Base(DeclarativeBase):
    """Declarative base for the SDS tables."""


engine = create_async_engine(
    settings.database_url,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    echo=settings.database_echo,
    # PgBouncer in transaction mode cannot hold prepared statements
    connect_args={"statement_cache_size": 0},
)

async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session; the context manager closes it."""
    async with async_session_maker() as session:
        yield session


class DatabaseClient:
    """Owns startup, shutdown and health probing of the SDS database."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def startup(self, auto_migrate: bool = True) -> None:
        """Verify connectivity and, when asked, create missing tables.

        Existing tables are never dropped or altered; schema changes go
        through the Alembic migrations.

        Args:
            auto_migrate: Create tables that do not exist yet
        """
        # Registers SDSDocument on Base.metadata
        from chemlabel.database import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if auto_migrate:
                await conn.run_sync(Base.metadata.create_all)

        self._connected = True
        LOGGER.info(
            "SDS database ready",
            extra={"auto_migrate": auto_migrate, "tables": sorted(Base.metadata.tables)},
        )

    async def shutdown(self) -> None:
        await self.engine.dispose()
        self._connected = False
        LOGGER.info("SDS database pool disposed")

    async def health_check(self) -> dict:
        """Probe the database and report latency and schema presence.

        Returns:
            ``status`` is ``healthy`` only when the probe succeeds and the
            SDS table exists; failures are reported, never raised.
        """
        started = time.perf_counter()
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                has_table = await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(SDS_TABLE))
        except Exception as e:
            self._connected = False
            LOGGER.warning("SDS database health probe failed", extra={"error": str(e)})
            return {"status": "unhealthy", "connected": False, "error": str(e)}

        self._connected = True
        return {
            "status": "healthy" if has_table else "unhealthy",
            "connected": True,
            "database": "postgresql",
            "sds_table_present": has_table,
            "latency_ms": round((time.perf_counter() - started) * 1000, 1),
        }


db_client = DatabaseClient(engine)


async def init_database(auto_migrate: bool = True) -> None:
    LOGGER.info("Initializing SDS database connection")
    await db_client.startup(auto_migrate=auto_migrate)


async def close_database() -> None:
    await db_client.shutdown()
