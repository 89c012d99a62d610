from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from hotelsite.db.session import build_engine, build_session_factory, create_schema, drop_schema


@pytest_asyncio.fixture
async def db_engine() -> AsyncIterator[AsyncEngine]:
    database_url = os.getenv("TEST_DATABASE_URL", "").strip()
    if not database_url:
        pytest.skip("TEST_DATABASE_URL is not set")

    engine = build_engine(database_url)
    await drop_schema(engine)
    await create_schema(engine)
    try:
        yield engine
    finally:
        await drop_schema(engine)
        await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    async with build_session_factory(db_engine)() as session:
        yield session
