# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Process-wide aiosqlite connection.

The API and the CLI share one connection per process. ``init_db`` opens it
(WAL journal, foreign keys enforced so deleting a log removes its findings)
and ``close_db`` releases it; everything else asks ``get_db``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiosqlite

from logtriage.core.exceptions import StorageError
from logtriage.storage.migrations import run_migrations

logger = logging.getLogger("logtriage.storage.database")

_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA foreign_keys=ON",
)

_db: aiosqlite.Connection | None = None


async def _open(db_path: Path | str, auto_migrate: bool) -> aiosqlite.Connection:
    conn = await aiosqlite.connect(str(db_path))
    try:
        conn.row_factory = aiosqlite.Row
        for pragma in _PRAGMAS:
            await conn.execute(pragma)
        if auto_migrate:
            await run_migrations(conn)
    except BaseException:
        await conn.close()
        raise
    return conn


async def init_db(
    db_path: Path | str = "logtriage.db",
    *,
    auto_migrate: bool = True,
) -> aiosqlite.Connection:
    """Open the shared connection if needed and return it.

    Raises StorageError when the file cannot be opened or migrated.
    """
    global _db

    if _db is None:
        try:
            _db = await _open(db_path, auto_migrate)
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(f"Cannot open database at {db_path}: {exc}") from exc
        logger.info("Opened database %s", db_path)
    return _db


async def get_db() -> aiosqlite.Connection:
    if _db is None:
        raise StorageError("Database not initialized; call init_db() first")
    return _db


async def close_db() -> None:
    global _db

    conn, _db = _db, None
    if conn is not None:
        await conn.close()
