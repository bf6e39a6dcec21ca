# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Versioned database migrations for the logtriage database.

Applied versions are recorded in ``schema_migrations``. A migration and its
version row are committed together; a failing migration is rolled back and
reported as :class:`StorageError`, leaving earlier versions in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

import aiosqlite

from logtriage.core.exceptions import StorageError

logger = logging.getLogger("logtriage.storage.migrations")

# ---------------------------------------------------------------------------
# Migration registry infrastructure
# ---------------------------------------------------------------------------

MigrationFunc = Callable[[aiosqlite.Connection], Coroutine[Any, Any, None]]


@dataclass(frozen=True, slots=True)
class Migration:
    """A single database migration."""

    version: int
    name: str
    func: MigrationFunc


# Registered in version order; append, never renumber.
_MIGRATIONS: list[Migration] = []


def _register(version: int, name: str) -> Callable[[MigrationFunc], MigrationFunc]:
    """Register the decorated coroutine as schema version *version*."""

    def decorator(fn: MigrationFunc) -> MigrationFunc:
        if _MIGRATIONS and version <= _MIGRATIONS[-1].version:
            msg = f"Migration {version} registered after {_MIGRATIONS[-1].version}"
            raise ValueError(msg)
        _MIGRATIONS.append(Migration(version=version, name=name, func=fn))
        return fn

    return decorator


_VERSION_TABLE_DDL = (
    "CREATE TABLE IF NOT EXISTS schema_migrations ("
    " version INTEGER PRIMARY KEY,"
    " name TEXT NOT NULL,"
    " applied_at TEXT NOT NULL DEFAULT (datetime('now')))"
)


async def get_current_version(db: aiosqlite.Connection) -> int:
    """Highest applied schema version; 0 for a fresh database."""
    await db.execute(_VERSION_TABLE_DDL)
    await db.commit()
    return await read_version(db)


async def read_version(db: aiosqlite.Connection) -> int:
    """Like :func:`get_current_version` but issues no writes."""
    try:
        cursor = await db.execute("SELECT MAX(version) FROM schema_migrations")
    except aiosqlite.OperationalError:
        return 0
    row = await cursor.fetchone()
    return int(row[0]) if row and row[0] is not None else 0


def latest_version() -> int:
    return _MIGRATIONS[-1].version if _MIGRATIONS else 0


async def get_pending_migrations(db: aiosqlite.Connection) -> list[Migration]:
    current = await get_current_version(db)
    return [m for m in _MIGRATIONS if m.version > current]


async def run_migrations(db: aiosqlite.Connection) -> list[Migration]:
    """Apply every pending migration in version order; return the ones applied."""
    applied: list[Migration] = []

    for migration in await get_pending_migrations(db):
        logger.info("Applying schema version %03d (%s)", migration.version, migration.name)
        try:
            await migration.func(db)
            await db.execute(
                "INSERT INTO schema_migrations (version, name) VALUES (?, ?)",
                (migration.version, migration.name),
            )
            await db.commit()
        except aiosqlite.Error as exc:
            await db.rollback()
            msg = f"Migration {migration.version:03d} ({migration.name}) failed: {exc}"
            raise StorageError(msg) from exc
        applied.append(migration)

    if applied:
        logger.info("Database schema now at version %03d", applied[-1].version)
    return applied


# =========================================================================
# Migration 001 -- logs, findings, notifications
# =========================================================================

_CREATE_LOGS = """
CREATE TABLE IF NOT EXISTS logs (
    id TEXT PRIMARY KEY,
    file_name TEXT NOT NULL,
    file_hash TEXT NOT NULL UNIQUE,
    file_size INTEGER NOT NULL,
    uploaded_by TEXT,
    status TEXT NOT NULL DEFAULT 'processing',
    error TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""

_CREATE_FINDINGS = """
CREATE TABLE IF NOT EXISTS findings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    log_id TEXT NOT NULL REFERENCES logs(id) ON DELETE CASCADE,
    category TEXT NOT NULL,
    message TEXT NOT NULL,
    line_number INTEGER NOT NULL,
    severity TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""

_CREATE_NOTIFICATIONS = """
CREATE TABLE IF NOT EXISTS notifications (
    id TEXT PRIMARY KEY,
    user_id TEXT,
    type TEXT NOT NULL,
    message TEXT NOT NULL,
    sent INTEGER NOT NULL DEFAULT 0,
    sent_at TEXT,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""

_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_logs_created ON logs(created_at);",
    "CREATE INDEX IF NOT EXISTS idx_logs_status ON logs(status);",
    "CREATE INDEX IF NOT EXISTS idx_findings_log ON findings(log_id, line_number);",
    "CREATE INDEX IF NOT EXISTS idx_findings_severity ON findings(severity);",
    "CREATE INDEX IF NOT EXISTS idx_findings_category ON findings(category);",
    "CREATE INDEX IF NOT EXISTS idx_notifications_sent ON notifications(sent);",
]


@_register(1, "initial_schema")
async def _migration_001(db: aiosqlite.Connection) -> None:
    for ddl in (_CREATE_LOGS, _CREATE_FINDINGS, _CREATE_NOTIFICATIONS, *_INDEXES):
        await db.execute(ddl)


# =========================================================================
# Migration 002 -- time-window indexes for dashboard and daily summary
# =========================================================================


@_register(2, "time_window_indexes")
async def _migration_002(db: aiosqlite.Connection) -> None:
    await db.execute(
        "CREATE INDEX IF NOT EXISTS idx_findings_created ON findings(created_at, severity);"
    )
    await db.execute(
        "CREATE INDEX IF NOT EXISTS idx_notifications_user ON notifications(user_id, created_at);"
    )
