"""Test configuration and fixtures for listql."""

from dotenv import load_dotenv
import pytest
import os
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from tests.models import Base

# Try to load environment variables from .env file
load_dotenv()


@pytest.fixture(scope="function")
async def engine():
    """Create a test database engine for each test function."""
    # LISTQL_TEST_DATABASE_URL points the suite at an external database
    test_db_url = os.getenv('LISTQL_TEST_DATABASE_URL')

    if test_db_url:
        engine = create_async_engine(test_db_url, echo=False, future=True, pool_pre_ping=True)
        # Clean slate: drop then create all tables
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        is_external_db = True
    else:
        # In-memory SQLite shared across connections
        engine = create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            echo=False,
            future=True,
            poolclass=StaticPool,
        )
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        is_external_db = False

    yield engine

    if is_external_db:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new database session for each test function."""
    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session


# Import fixtures from fixtures module
from tests.fixtures import (  # noqa: E402,F401
    sample_suppliers,
    sample_items,
    sample_logs,
    populated_db,
)
