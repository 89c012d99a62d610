from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from hotelsite.db.models import Base
from hotelsite.settings import settings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def build_engine(database_url: str) -> AsyncEngine:
    # NullPool keeps connections off shared event loops in tests.
    return create_async_engine(database_url, pool_pre_ping=True, poolclass=NullPool)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = build_engine(settings.database_url)
        logger.info("db.engine_initialized", extra={"event": "db.engine_initialized"})
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(get_engine())
    return _session_factory


async def get_db_session() -> AsyncIterator[AsyncSession]:
    async with get_session_factory()() as session:
        yield session


async def create_schema(engine: AsyncEngine | None = None) -> None:
    """Create every table the models declare; existing tables are left alone."""
    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(
        "db.schema_ready",
        extra={"event": "db.schema_ready", "tables": sorted(Base.metadata.tables)},
    )


async def drop_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def check_database(engine: AsyncEngine | None = None) -> bool:
    try:
        async with (engine or get_engine()).connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar_one() == 1
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
        logger.warning(
            "db.healthcheck_failed",
            extra={"event": "db.healthcheck_failed", "error": str(exc)},
        )
        return False


async def close_engine() -> None:
    global _engine, _session_factory
    if _engine is None:
        return
    await _engine.dispose()
    logger.info("db.engine_disposed", extra={"event": "db.engine_disposed"})
    _engine = None
    _session_factory = None
