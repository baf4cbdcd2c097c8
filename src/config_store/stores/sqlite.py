"""SQLiteStore — durable, single-file storage backend using aiosqlite."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

import aiosqlite

from config_store._internal.clock import Clock, SystemClock
from config_store.exceptions import StoreError
from config_store.record import ConfigRecord
from config_store.stores.base import RecordStore

logger = logging.getLogger(__name__)

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS configs (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    key        TEXT NOT NULL,
    value      TEXT,
    created_by TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    UNIQUE (key, created_by)
)
"""

_COLUMNS = "key, value, created_by, created_at, updated_at"

_UPSERT = """
INSERT INTO configs (key, value, created_by, created_at, updated_at)
VALUES (?, ?, ?, ?, ?)
ON CONFLICT (key, created_by) DO UPDATE SET
    value = excluded.value,
    updated_at = excluded.updated_at
"""

_SORT_COLUMNS = {"key": "key", "createdBy": "created_by"}

# Stay well below SQLITE_MAX_VARIABLE_NUMBER on older builds.
_IN_CHUNK = 500


def _to_record(row: aiosqlite.Row) -> ConfigRecord:
    return ConfigRecord(
        key=row["key"],
        value=row["value"],
        created_by=row["created_by"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def _filters(contains: str, owner: str | None) -> tuple[str, list[Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    if contains:
        clauses.append("instr(key, ?) > 0")
        params.append(contains)
    if owner is not None:
        clauses.append("created_by = ?")
        params.append(owner)
    where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


class SQLiteStore(RecordStore):
    """Persistent store backed by a single SQLite file.

    Every statement is parameterized; only whitelisted column names are
    ever interpolated into SQL.

    Parameters:
        db_path: Path to the SQLite database file.  Use ``":memory:"``
                 for an in-memory database (useful for testing).
        clock:   Source of ``created_at`` / ``updated_at`` stamps.
    """

    def __init__(self, db_path: str = "config_store.db", clock: Clock | None = None) -> None:
        self._db_path = db_path
        self._clock = clock or SystemClock()
        self._db: aiosqlite.Connection | None = None
        self._connect_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    async def _connect(self) -> aiosqlite.Connection:
        if self._db is not None:
            return self._db
        async with self._connect_lock:
            if self._db is None:
                db = await aiosqlite.connect(self._db_path)
                db.row_factory = aiosqlite.Row
                await db.execute(_CREATE_TABLE)
                await db.commit()
                self._db = db
        return self._db

    @asynccontextmanager
    async def _guard(
        self, operation: str, write: bool = False
    ) -> AsyncIterator[aiosqlite.Connection]:
        """Yield the connection, wrapping driver errors in ``StoreError``.

        Write operations hold the write lock for their whole transaction and
        roll it back on any failure.  Reads never roll back.
        """
        try:
            db = await self._connect()
        except aiosqlite.Error as exc:
            logger.error("sqlite connect failed during %s: %s", operation, exc)
            raise StoreError(operation, str(exc)) from exc
        if not write:
            try:
                yield db
            except aiosqlite.Error as exc:
                logger.error("sqlite %s failed: %s", operation, exc)
                raise StoreError(operation, str(exc)) from exc
            return
        async with self._write_lock:
            try:
                yield db
            except aiosqlite.Error as exc:
                logger.error("sqlite %s failed: %s", operation, exc)
                await db.rollback()
                raise StoreError(operation, str(exc)) from exc
            except BaseException:
                await db.rollback()
                raise

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    async def _fetch(self, operation: str, sql: str, params: list[Any]) -> list[ConfigRecord]:
        async with self._guard(operation) as db:
            cursor = await db.execute(sql, params)
            rows = await cursor.fetchall()
        return [_to_record(row) for row in rows]

    async def _write(self, db: aiosqlite.Connection, key: str, owner: str, value: str) -> None:
        stamp = self._clock.now().isoformat()
        await db.execute(_UPSERT, (key, value, owner, stamp, stamp))

    async def _reload(self, db: aiosqlite.Connection, key: str, owner: str) -> ConfigRecord:
        cursor = await db.execute(
            f"SELECT {_COLUMNS} FROM configs WHERE key = ? AND created_by = ?",
            (key, owner),
        )
        row = await cursor.fetchone()
        if row is None:
            raise StoreError("upsert", f"row for {key!r}/{owner!r} vanished after write")
        return _to_record(row)

    # ── RecordStore protocol ─────────────────────────────────

    async def get(self, key: str, owner: str | None) -> ConfigRecord | None:
        where, params = _filters("", owner)
        where = f"{where} AND key = ?" if where else " WHERE key = ?"
        params.append(key)
        records = await self._fetch(
            "get",
            f"SELECT {_COLUMNS} FROM configs{where} ORDER BY created_by, id LIMIT 1",
            params,
        )
        return records[0] if records else None

    async def find_many(self, keys: list[str], owner: str | None) -> list[ConfigRecord]:
        unique = sorted(set(keys))
        records: list[ConfigRecord] = []
        for start in range(0, len(unique), _IN_CHUNK):
            chunk = unique[start : start + _IN_CHUNK]
            where, params = _filters("", owner)
            marks = ", ".join("?" for _ in chunk)
            where = f"{where} AND key IN ({marks})" if where else f" WHERE key IN ({marks})"
            params.extend(chunk)
            records.extend(
                await self._fetch(
                    "find_many",
                    f"SELECT {_COLUMNS} FROM configs{where} ORDER BY key, created_by, id",
                    params,
                )
            )
        return records

    async def search(
        self,
        contains: str,
        owner: str | None,
        *,
        offset: int,
        limit: int,
        sort_field: str | None = None,
        descending: bool = False,
    ) -> list[ConfigRecord]:
        where, params = _filters(contains, owner)
        order = "id"
        if sort_field is not None:
            column = _SORT_COLUMNS.get(sort_field)
            if column is None:
                raise StoreError("search", f"unsupported sort field {sort_field!r}")
            order = f"{column} {'DESC' if descending else 'ASC'}, id"
        params.extend([limit, offset])
        return await self._fetch(
            "search",
            f"SELECT {_COLUMNS} FROM configs{where} ORDER BY {order} LIMIT ? OFFSET ?",
            params,
        )

    async def count(self, contains: str, owner: str | None) -> int:
        where, params = _filters(contains, owner)
        async with self._guard("count") as db:
            cursor = await db.execute(f"SELECT COUNT(*) FROM configs{where}", params)
            row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def upsert(self, key: str, owner: str, value: str) -> ConfigRecord:
        async with self._guard("upsert", write=True) as db:
            await self._write(db, key, owner, value)
            record = await self._reload(db, key, owner)
            await db.commit()
        return record

    async def upsert_many(self, items: list[tuple[str, str]], owner: str) -> list[ConfigRecord]:
        async with self._guard("upsert_many", write=True) as db:
            for key, value in items:
                await self._write(db, key, owner, value)
            records = [await self._reload(db, key, owner) for key, _ in items]
            await db.commit()
        return records

    async def delete(self, key: str, owner: str) -> int:
        async with self._guard("delete", write=True) as db:
            cursor = await db.execute(
                "DELETE FROM configs WHERE key = ? AND created_by = ?",
                (key, owner),
            )
            await db.commit()
        return cursor.rowcount

    async def delete_owner(self, owner: str) -> int:
        async with self._guard("delete_owner", write=True) as db:
            cursor = await db.execute("DELETE FROM configs WHERE created_by = ?", (owner,))
            await db.commit()
        return cursor.rowcount
