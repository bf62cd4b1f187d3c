from psycopg_pool import AsyncConnectionPool

from docintel.config.settings import Settings
from docintel.storage.base import BaseStorage
from docintel.storage.memory_storage import InMemoryStorage
from docintel.storage.postgres_storage import PostgresStorage


class StorageFactory:
    """Creates the storage adapter named by settings.storage_backend."""

    BACKENDS = ("memory", "postgres")

    @classmethod
    def create(
        cls,
        settings: Settings,
        pool: AsyncConnectionPool | None = None,
    ) -> BaseStorage:
        backend = settings.storage_backend.lower()
        if backend == "memory":
            return InMemoryStorage()
        if backend == "postgres":
            if pool is None:
                raise ValueError("storage_backend=postgres requires an open connection pool")
            return PostgresStorage(pool)
        raise ValueError(f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}")
