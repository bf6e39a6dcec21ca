# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository for persisted notifications."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

import aiosqlite


class NotificationRepository:
    """Stores notifications so they can be shown or re-sent later."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def create(
        self,
        notification_type: str,
        message: str,
        *,
        user_id: str | None = None,
        sent: bool = False,
    ) -> str:
        notification_id = uuid.uuid4().hex[:12]
        await self._db.execute(
            """
            INSERT INTO notifications (id, user_id, type, message, sent, sent_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                notification_id,
                user_id,
                notification_type,
                message,
                int(sent),
                datetime.now(UTC).isoformat() if sent else None,
            ),
        )
        await self._db.commit()
        return notification_id

    async def list_pending(self, limit: int = 100) -> list[dict[str, Any]]:
        cursor = await self._db.execute(
            "SELECT * FROM notifications WHERE sent = 0 ORDER BY created_at LIMIT ?",
            (limit,),
        )
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def mark_sent(self, notification_id: str) -> bool:
        cursor = await self._db.execute(
            "UPDATE notifications SET sent = 1, sent_at = ? WHERE id = ?",
            (datetime.now(UTC).isoformat(), notification_id),
        )
        await self._db.commit()
        return cursor.rowcount > 0

    async def counts(self) -> dict[str, int]:
        """Total notifications and how many are still unsent."""
        cursor = await self._db.execute(
            "SELECT COUNT(*) AS total, COALESCE(SUM(sent = 0), 0) AS pending FROM notifications"
        )
        row = await cursor.fetchone()
        if row is None:
            return {"total": 0, "pending": 0}
        return {"total": row["total"], "pending": row["pending"]}
