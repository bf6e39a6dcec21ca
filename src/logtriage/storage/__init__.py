# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Storage layer -- database connection, migrations, and repositories."""

from logtriage.storage.database import close_db, get_db, init_db
from logtriage.storage.migrations import run_migrations
from logtriage.storage.repositories.findings import FindingRepository
from logtriage.storage.repositories.logs import LogRepository
from logtriage.storage.repositories.notifications import NotificationRepository

__all__ = [
    "FindingRepository",
    "LogRepository",
    "NotificationRepository",
    "close_db",
    "get_db",
    "init_db",
    "run_migrations",
]
