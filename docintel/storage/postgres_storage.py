from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from docintel.storage.base import BaseStorage
from docintel.storage.exceptions import StorageError, StorageWriteError
from docintel.storage.models import ActionStatus, Asset, DocumentActionLog

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS assets (
    id VARCHAR PRIMARY KEY DEFAULT gen_random_uuid()::text,
    user_id VARCHAR NOT NULL,
    type VARCHAR NOT NULL,
    name VARCHAR NOT NULL,
    url VARCHAR,
    metadata JSONB DEFAULT '{}'::jsonb,
    created_at TIMESTAMPTZ DEFAULT now(),
    updated_at TIMESTAMPTZ DEFAULT now()
);

CREATE TABLE IF NOT EXISTS document_action_logs (
    id VARCHAR PRIMARY KEY DEFAULT gen_random_uuid()::text,
    asset_id VARCHAR NOT NULL REFERENCES assets(id) ON DELETE CASCADE,
    user_id VARCHAR NOT NULL,
    action_type VARCHAR NOT NULL,
    status VARCHAR NOT NULL,
    data_used JSONB DEFAULT '{}'::jsonb,
    result JSONB,
    confidence_score INTEGER,
    error_message TEXT,
    created_at TIMESTAMPTZ DEFAULT now()
);
"""

_ASSET_COLUMNS = "id, user_id, type, name, url, metadata, created_at"
_LOG_COLUMNS = (
    "id, asset_id, user_id, action_type, status, data_used, result, "
    "confidence_score, error_message, created_at"
)


class PostgresStorage(BaseStorage):
    """Database operations for the assets and document_action_logs tables."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def create_schema(self) -> None:
        async with self._pool.connection() as conn:
            await conn.execute(SCHEMA_SQL)
            await conn.commit()

    async def create_asset(
        self,
        owner_id: str,
        type: str,
        name: str,
        url: str,
        metadata: dict[str, object],
    ) -> Asset:
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(
                        f"""
                        INSERT INTO assets (user_id, type, name, url, metadata)
                        VALUES (%s, %s, %s, %s, %s)
                        RETURNING {_ASSET_COLUMNS}
                        """,
                        (owner_id, type, name, url, Jsonb(metadata)),
                    )
                    row = await cur.fetchone()
                await conn.commit()
        except psycopg.Error as exc:
            raise StorageWriteError(f"Failed to create asset '{name}': {exc}") from exc

        if row is None:
            raise StorageWriteError(f"Asset insert for '{name}' returned no row")
        return _asset_from_row(row)

    async def get_asset(self, asset_id: str) -> Asset | None:
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(
                        f"SELECT {_ASSET_COLUMNS} FROM assets WHERE id = %s",
                        (asset_id,),
                    )
                    row = await cur.fetchone()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to load asset {asset_id}: {exc}") from exc

        if row is None:
            return None
        return _asset_from_row(row)

    async def create_document_action_log(
        self,
        asset_id: str,
        owner_id: str,
        action_type: str,
        status: ActionStatus,
        data_used: dict[str, object],
        result: dict[str, object] | None = None,
        confidence_score: int | None = None,
        error_message: str | None = None,
    ) -> DocumentActionLog:
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(
                        f"""
                        INSERT INTO document_action_logs
                        (asset_id, user_id, action_type, status, data_used, result,
                         confidence_score, error_message)
                        VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                        RETURNING {_LOG_COLUMNS}
                        """,
                        (
                            asset_id,
                            owner_id,
                            action_type,
                            ActionStatus(status).value,
                            Jsonb(data_used),
                            Jsonb(result) if result is not None else None,
                            confidence_score,
                            error_message,
                        ),
                    )
                    row = await cur.fetchone()
                await conn.commit()
        except psycopg.Error as exc:
            raise StorageWriteError(
                f"Failed to log {action_type} action for asset {asset_id}: {exc}"
            ) from exc

        if row is None:
            raise StorageWriteError(f"Action log insert for asset {asset_id} returned no row")
        return _log_from_row(row)

    async def list_document_action_logs(
        self,
        asset_id: str,
        owner_id: str,
    ) -> list[DocumentActionLog]:
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(
                        f"""
                        SELECT {_LOG_COLUMNS}
                        FROM document_action_logs
                        WHERE asset_id = %s AND user_id = %s
                        ORDER BY created_at, id
                        """,
                        (asset_id, owner_id),
                    )
                    rows = await cur.fetchall()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to load action logs for asset {asset_id}: {exc}") from exc
        return [_log_from_row(row) for row in rows]


def _asset_from_row(row: dict[str, Any]) -> Asset:
    return Asset(
        id=str(row["id"]),
        owner_id=str(row["user_id"]),
        type=row["type"],
        name=row["name"],
        url=row["url"],
        metadata=row["metadata"] or {},
        created_at=row["created_at"],
    )


def _log_from_row(row: dict[str, Any]) -> DocumentActionLog:
    return DocumentActionLog(
        id=str(row["id"]),
        asset_id=str(row["asset_id"]),
        owner_id=str(row["user_id"]),
        action_type=row["action_type"],
        status=ActionStatus(row["status"]),
        data_used=row["data_used"] or {},
        result=row["result"],
        confidence_score=row["confidence_score"],
        error_message=row["error_message"],
        created_at=row["created_at"],
    )
