# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Daily activity summary built from stored logs and findings."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import aiosqlite

from logtriage.notifications.events import CategoryCount, DailySummary
from logtriage.storage.repositories.findings import FindingRepository
from logtriage.storage.repositories.logs import LogRepository


async def build_daily_summary(
    db: aiosqlite.Connection,
    *,
    days: int = 1,
    now: datetime | None = None,
) -> DailySummary:
    """Summarise files and findings recorded in the last *days* days."""
    since = (now or datetime.now(UTC)) - timedelta(days=days)

    log_stats = await LogRepository(db).stats(since=since)
    findings = FindingRepository(db)
    severity = await findings.severity_stats(since=since)
    top = await findings.top_categories(limit=5, since=since)

    return DailySummary(
        files_processed=log_stats["total"],
        failed_files=log_stats["failed"],
        total_findings=sum(severity.values()),
        critical_findings=severity["critical"],
        top_categories=[CategoryCount(category=r["category"], count=r["count"]) for r in top],
    )
