# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository for uploaded log file records."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import aiosqlite

from logtriage.core.constants import FileStatus
from logtriage.core.exceptions import DuplicateFileError, LogNotFoundError, StorageError
from logtriage.models.log_file import LogFile


class LogRepository:
    """CRUD operations for the logs table."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def create(self, log: LogFile) -> None:
        """Insert a log record.

        Raises DuplicateFileError if another record already has the same hash.
        A conflicting hash leaves the connection's open transaction untouched.
        """
        try:
            cursor = await self._db.execute(
                """
                INSERT INTO logs (
                    id, file_name, file_hash, file_size, uploaded_by,
                    status, error, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(file_hash) DO NOTHING
                """,
                (
                    log.id,
                    log.file_name,
                    log.file_hash,
                    log.file_size,
                    log.uploaded_by,
                    str(log.status),
                    log.error,
                    log.created_at.isoformat(),
                    log.updated_at.isoformat(),
                ),
            )
        except aiosqlite.IntegrityError as exc:
            raise StorageError(f"Failed to insert log {log.id}: {exc}") from exc

        if cursor.rowcount == 0:
            existing = await self.get_by_hash(log.file_hash)
            if existing is None:
                raise StorageError(f"Failed to insert log {log.id}: hash conflict vanished")
            raise DuplicateFileError(existing.id, log.file_hash)
        await self._db.commit()

    async def get(self, log_id: str) -> LogFile | None:
        cursor = await self._db.execute("SELECT * FROM logs WHERE id = ?", (log_id,))
        row = await cursor.fetchone()
        return self._row_to_log(row) if row is not None else None

    async def require(self, log_id: str) -> LogFile:
        """Like :meth:`get`, but raise LogNotFoundError for an unknown id."""
        log = await self.get(log_id)
        if log is None:
            raise LogNotFoundError(f"Log {log_id} not found")
        return log

    async def get_by_hash(self, file_hash: str) -> LogFile | None:
        """Look up a previously ingested file by content fingerprint."""
        cursor = await self._db.execute(
            "SELECT * FROM logs WHERE file_hash = ?", (file_hash,)
        )
        row = await cursor.fetchone()
        return self._row_to_log(row) if row is not None else None

    async def list_recent(
        self,
        limit: int = 50,
        offset: int = 0,
        *,
        uploaded_by: str | None = None,
    ) -> list[dict[str, Any]]:
        """List logs newest first, each with its finding count."""
        where, params = "", []
        if uploaded_by:
            where, params = "WHERE l.uploaded_by = ?", [uploaded_by]
        cursor = await self._db.execute(
            f"""
            SELECT l.*, (
                SELECT COUNT(*) FROM findings f WHERE f.log_id = l.id
            ) AS finding_count
            FROM logs l
            {where}
            ORDER BY l.created_at DESC
            LIMIT ? OFFSET ?
            """,
            (*params, limit, offset),
        )
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def update_status(
        self,
        log_id: str,
        status: FileStatus | str,
        *,
        error: str | None = None,
        commit: bool = True,
    ) -> bool:
        """Set a log's status. Returns False if no such log exists."""
        cursor = await self._db.execute(
            "UPDATE logs SET status = ?, error = ?, updated_at = ? WHERE id = ?",
            (str(status), error, datetime.now(UTC).isoformat(), log_id),
        )
        if commit:
            await self._db.commit()
        return cursor.rowcount > 0

    async def delete(self, log_id: str) -> bool:
        """Delete a log and, through the foreign key cascade, its findings."""
        cursor = await self._db.execute("DELETE FROM logs WHERE id = ?", (log_id,))
        await self._db.commit()
        return cursor.rowcount > 0

    async def stats(self, since: datetime | None = None) -> dict[str, int]:
        """Count logs in total and per status, optionally only those created since."""
        cursor = await self._db.execute(
            "SELECT status, COUNT(*) AS n FROM logs WHERE created_at >= ? GROUP BY status",
            (since.astimezone(UTC).isoformat() if since else "",),
        )
        rows = await cursor.fetchall()
        counts = {str(s): 0 for s in FileStatus}
        for row in rows:
            counts[row["status"]] = row["n"]
        return {"total": sum(counts.values()), **counts}

    @staticmethod
    def _row_to_log(row: aiosqlite.Row) -> LogFile:
        data = dict(row)
        return LogFile(
            id=data["id"],
            file_name=data["file_name"],
            file_hash=data["file_hash"],
            file_size=data["file_size"],
            uploaded_by=data.get("uploaded_by"),
            status=FileStatus(data["status"]),
            error=data.get("error"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
