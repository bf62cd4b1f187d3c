from psycopg_pool import AsyncConnectionPool

from docintel.config.settings import Settings


def build_conninfo(settings: Settings) -> str:
    return (
        f"host={settings.db_host} "
        f"port={settings.db_port} "
        f"dbname={settings.db_database} "
        f"user={settings.db_username} "
        f"password={settings.db_password}"
    )


async def open_pool(
    settings: Settings,
    *,
    min_size: int = 1,
    max_size: int = 10,
    timeout_seconds: float = 10.0,
) -> AsyncConnectionPool:
    """Open a connection pool, waiting until the first connection succeeds.

    Raises:
        psycopg_pool.PoolTimeout: if the database is unreachable.
    """
    pool = AsyncConnectionPool(
        build_conninfo(settings),
        min_size=min_size,
        max_size=max_size,
        open=False,
    )
    try:
        await pool.open(wait=True, timeout=timeout_seconds)
    except Exception:
        await pool.close()
        raise
    return pool


async def close_pool(pool: AsyncConnectionPool | None) -> None:
    if pool is not None:
        await pool.close()
