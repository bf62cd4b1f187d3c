import os
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from psycopg_pool import AsyncConnectionPool

from docintel.config.settings import Settings
from docintel.storage.connection import close_pool, open_pool
from docintel.storage.memory_storage import InMemoryStorage
from docintel.storage.postgres_storage import PostgresStorage


def _offline_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "storage_backend": "memory",
        "extraction_providers": "example",
        "summary_providers": "example",
        "llm_provider": "example",
        "provider_timeout_seconds": 5,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]


@pytest.fixture
def offline_settings() -> Settings:
    """Settings wired to the network-free example provider and memory storage."""
    return _offline_settings()


@pytest.fixture
def text_layer_settings() -> Settings:
    """No vision providers: PDFs go straight to the local text layer."""
    return _offline_settings(extraction_providers="")


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture(scope="session")
def postgres_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docintel_test")
    return Settings(storage_backend="postgres")


@pytest_asyncio.fixture
async def postgres_pool(postgres_settings: Settings) -> AsyncGenerator[AsyncConnectionPool, None]:
    try:
        pool = await open_pool(postgres_settings, max_size=2, timeout_seconds=3.0)
    except Exception as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run these tests")
    try:
        yield pool
    finally:
        await close_pool(pool)


@pytest.fixture
def owner_id() -> str:
    return f"it-{uuid.uuid4()}"


@pytest_asyncio.fixture
async def postgres_storage(
    postgres_pool: AsyncConnectionPool,
    owner_id: str,
) -> AsyncGenerator[PostgresStorage, None]:
    storage = PostgresStorage(postgres_pool)
    await storage.create_schema()
    try:
        yield storage
    finally:
        async with postgres_pool.connection() as conn:
            await conn.execute("DELETE FROM assets WHERE user_id = %s", (owner_id,))
            await conn.commit()
