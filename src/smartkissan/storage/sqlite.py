"""SQLite key-value store.

Persists client state across sessions in a single table. Uses aiosqlite for
async access.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import aiosqlite

from ..errors import StorageError
from .base import KeyValueStore


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite-backed key-value store with JSON-encoded values."""

    def __init__(self, path: str | Path = "./smartkissan.db"):
        self._db_path = Path(path)
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database and create the table if needed."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise StorageError("SQLite store is not connected")
        return self._connection

    async def get(self, key: str) -> Any | None:
        conn = self._require_connection()
        async with conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)) as cursor:
            row = await cursor.fetchone()

        if row is None:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt value for key {key!r}") from e

    async def set(self, key: str, value: Any) -> None:
        conn = self._require_connection()
        await conn.execute(
            """
            INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
            """,
            (key, json.dumps(value), datetime.now(timezone.utc).isoformat()),
        )
        await conn.commit()

    async def delete(self, key: str) -> None:
        conn = self._require_connection()
        await conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        await conn.commit()

    async def keys(self) -> list[str]:
        conn = self._require_connection()
        async with conn.execute("SELECT key FROM kv_store ORDER BY key") as cursor:
            rows = await cursor.fetchall()
        return [row[0] for row in rows]

    @property
    def backend_type(self) -> str:
        return "sqlite"
