# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository for finding records."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import aiosqlite

from logtriage.core.constants import Severity
from logtriage.models.finding import Finding


def _sql_time(value: datetime | None) -> str:
    """Format like SQLite datetime('now') so text comparison orders correctly."""
    return value.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S") if value else ""


class FindingRepository:
    """CRUD and aggregate queries for the findings table."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def create_many(
        self, log_id: str, findings: list[Finding], *, commit: bool = True
    ) -> None:
        """Bulk-insert findings for a log in classification order."""
        rows = [
            (log_id, f.category, f.message, f.line_number, str(f.severity))
            for f in findings
        ]
        await self._db.executemany(
            """
            INSERT INTO findings (log_id, category, message, line_number, severity)
            VALUES (?, ?, ?, ?, ?)
            """,
            rows,
        )
        if commit:
            await self._db.commit()

    async def get_by_log(self, log_id: str) -> list[Finding]:
        """Retrieve a log's findings in the order they were classified."""
        cursor = await self._db.execute(
            "SELECT * FROM findings WHERE log_id = ? ORDER BY id",
            (log_id,),
        )
        rows = await cursor.fetchall()
        return [
            Finding(
                category=row["category"],
                message=row["message"],
                line_number=row["line_number"],
                severity=Severity(row["severity"]),
            )
            for row in rows
        ]

    async def count_by_log(self, log_id: str) -> int:
        cursor = await self._db.execute(
            "SELECT COUNT(*) FROM findings WHERE log_id = ?", (log_id,)
        )
        row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def delete_by_log(self, log_id: str) -> int:
        cursor = await self._db.execute(
            "DELETE FROM findings WHERE log_id = ?", (log_id,)
        )
        await self._db.commit()
        return cursor.rowcount

    async def severity_stats(self, since: datetime | None = None) -> dict[str, int]:
        """Count findings per severity bucket."""
        cursor = await self._db.execute(
            "SELECT severity, COUNT(*) AS n FROM findings WHERE created_at >= ? GROUP BY severity",
            (_sql_time(since),),
        )
        rows = await cursor.fetchall()
        counts = {str(s): 0 for s in Severity}
        for row in rows:
            counts[row["severity"]] = row["n"]
        return counts

    async def top_categories(
        self, limit: int = 5, since: datetime | None = None
    ) -> list[dict[str, Any]]:
        cursor = await self._db.execute(
            """
            SELECT category, COUNT(*) AS count FROM findings WHERE created_at >= ?
            GROUP BY category ORDER BY count DESC, category LIMIT ?
            """,
            (_sql_time(since), limit),
        )
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def trends(self, days: int = 7) -> list[dict[str, Any]]:
        """Per-day finding counts by severity for the last *days* days."""
        since = _sql_time(datetime.now(UTC) - timedelta(days=days))
        cursor = await self._db.execute(
            """
            SELECT date(created_at) AS day, severity, COUNT(*) AS n
            FROM findings WHERE created_at >= ?
            GROUP BY day, severity ORDER BY day
            """,
            (since,),
        )
        rows = await cursor.fetchall()

        by_day: dict[str, dict[str, Any]] = {}
        for row in rows:
            entry = by_day.setdefault(
                row["day"], {"date": row["day"], **{str(s): 0 for s in Severity}}
            )
            entry[row["severity"]] = row["n"]
        return list(by_day.values())
