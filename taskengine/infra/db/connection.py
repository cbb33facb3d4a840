# taskengine/infra/db/connection.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Sequence

import aiosqlite

from taskengine.domain.common.errors import StoreError

logger = logging.getLogger(__name__)


class Database:
    """
    Async SQLite helper:
    - opens a new connection per operation (simple + safe)
    - sets row_factory to aiosqlite.Row
    - enables WAL
    - reports driver failures as StoreError
    """

    def __init__(self, path: str) -> None:
        self._path = path

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        try:
            async with aiosqlite.connect(self._path) as db:
                db.row_factory = aiosqlite.Row
                yield db
        except aiosqlite.Error as e:
            logger.error("SQLite failure on %s: %s", self._path, e, exc_info=True)
            raise StoreError(str(e)) from e

    async def executescript(self, sql: str) -> None:
        async with self._connect() as db:
            await db.execute("PRAGMA journal_mode=WAL;")
            await db.executescript(sql)
            await db.commit()

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement. Returns the number of affected rows."""
        async with self._connect() as db:
            cur = await db.execute(sql, params)
            await db.commit()
            return cur.rowcount

    async def insert(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run an INSERT. Returns the new rowid."""
        async with self._connect() as db:
            cur = await db.execute(sql, params)
            await db.commit()
            return cur.lastrowid

    async def fetchone(self, sql: str, params: Sequence[Any] = ()) -> Optional[aiosqlite.Row]:
        async with self._connect() as db:
            cur = await db.execute(sql, params)
            return await cur.fetchone()

    async def fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[aiosqlite.Row]:
        async with self._connect() as db:
            cur = await db.execute(sql, params)
            return list(await cur.fetchall())
