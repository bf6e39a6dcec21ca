# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Database management commands."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from typing import Annotated

import typer

app = typer.Typer()


@app.command()
def init() -> None:
    """Initialize the SQLite database schema."""
    asyncio.run(_init_db())


async def _init_db() -> None:
    from logtriage.core.config import get_settings
    from logtriage.storage.database import close_db, init_db

    settings = get_settings()
    typer.echo(f"Initializing database at {settings.db_path}...")
    await init_db(settings.db_path)
    await close_db()
    typer.echo("Database initialized.")


@app.command()
def migrate() -> None:
    """Apply pending database migrations."""
    asyncio.run(_migrate_db())


async def _migrate_db() -> None:
    from logtriage.core.config import get_settings
    from logtriage.storage.database import close_db, init_db
    from logtriage.storage.migrations import (
        get_current_version,
        get_pending_migrations,
        run_migrations,
    )

    settings = get_settings()
    db = await init_db(settings.db_path, auto_migrate=False)

    try:
        current = await get_current_version(db)
        pending = await get_pending_migrations(db)

        typer.echo(f"Database: {settings.db_path}")
        typer.echo(f"Current schema version: {current}")

        if not pending:
            typer.echo("No pending migrations.")
            return

        for m in await run_migrations(db):
            typer.echo(f"Applied migration {m.version:03d}: {m.name}")

        typer.echo(f"Schema version is now: {await get_current_version(db)}")
    finally:
        await close_db()


@app.command()
def stats(
    days: Annotated[
        int | None, typer.Option("--days", help="Only count activity from the last N days")
    ] = None,
) -> None:
    """Show stored log, finding, and notification counts."""
    asyncio.run(_stats(days))


async def _stats(days: int | None) -> None:
    from logtriage.core.config import get_settings
    from logtriage.storage.database import close_db, init_db
    from logtriage.storage.repositories.findings import FindingRepository
    from logtriage.storage.repositories.logs import LogRepository
    from logtriage.storage.repositories.notifications import NotificationRepository

    settings = get_settings()
    since = datetime.now(UTC) - timedelta(days=days) if days else None
    db = await init_db(settings.db_path, auto_migrate=settings.auto_migrate)
    try:
        logs = await LogRepository(db).stats(since=since)
        findings = FindingRepository(db)
        severity = await findings.severity_stats(since=since)
        top = await findings.top_categories(limit=5, since=since)
        notifications = await NotificationRepository(db).counts()
    finally:
        await close_db()

    window = f"last {days} day(s)" if days else "all time"
    typer.echo(f"Database: {settings.db_path} ({window})")
    typer.echo(
        f"Logs: {logs['total']} (completed {logs['completed']}, "
        f"processing {logs['processing']}, failed {logs['failed']})"
    )
    typer.echo(
        f"Findings: {sum(severity.values())} (critical {severity['critical']}, "
        f"medium {severity['medium']}, low {severity['low']})"
    )
    for row in top:
        typer.echo(f"  {row['category']}: {row['count']}")
    typer.echo(
        f"Notifications: {notifications['total']} ({notifications['pending']} unsent)"
    )
