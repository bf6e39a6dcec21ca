# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the SQLite storage layer: database, migrations, and repositories."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import aiosqlite
import pytest

from logtriage.core.constants import FileStatus, Severity
from logtriage.core.exceptions import DuplicateFileError, LogNotFoundError, StorageError
from logtriage.models.finding import Finding
from logtriage.models.log_file import LogFile
from logtriage.storage.database import get_db
from logtriage.storage import migrations
from logtriage.storage.migrations import (
    Migration,
    get_current_version,
    get_pending_migrations,
    run_migrations,
)
from logtriage.storage.repositories.findings import FindingRepository
from logtriage.storage.repositories.logs import LogRepository
from logtriage.storage.repositories.notifications import NotificationRepository

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def log_repo(db: aiosqlite.Connection) -> LogRepository:
    return LogRepository(db)


@pytest.fixture
def finding_repo(db: aiosqlite.Connection) -> FindingRepository:
    return FindingRepository(db)


@pytest.fixture
def notification_repo(db: aiosqlite.Connection) -> NotificationRepository:
    return NotificationRepository(db)


def _make_log(
    log_id: str = "log-001",
    file_hash: str = "a" * 64,
    created_at: datetime | None = None,
) -> LogFile:
    kwargs = {"created_at": created_at, "updated_at": created_at} if created_at else {}
    return LogFile(
        id=log_id,
        file_name="app.log",
        file_hash=file_hash,
        file_size=128,
        uploaded_by="ops",
        **kwargs,
    )


def _findings() -> list[Finding]:
    return [
        Finding(category="500", message="Internal Server Error: x", line_number=1,
                severity=Severity.CRITICAL),
        Finding(category="APPLICATION_ERROR", message="ERROR y", line_number=2,
                severity=Severity.MEDIUM),
        Finding(category="APPLICATION_ERROR", message="ERROR z", line_number=3,
                severity=Severity.MEDIUM),
        Finding(category="WARNING", message="WARN w", line_number=4, severity=Severity.LOW),
    ]


# ---------------------------------------------------------------------------
# Database and migrations
# ---------------------------------------------------------------------------


class TestDatabase:
    async def test_schema_is_current(self, db: aiosqlite.Connection) -> None:
        assert await get_current_version(db) == 2
        assert await get_pending_migrations(db) == []

    async def test_rerun_is_noop(self, db: aiosqlite.Connection) -> None:
        assert await run_migrations(db) == []

    async def test_fresh_connection_migrates_in_order(self) -> None:
        async with aiosqlite.connect(":memory:") as conn:
            applied = await run_migrations(conn)
        assert [m.version for m in applied] == [1, 2]

    async def test_failed_migration_is_rolled_back(self, monkeypatch) -> None:
        async def _broken(conn: aiosqlite.Connection) -> None:
            await conn.execute("CREATE TABLE broken (")

        monkeypatch.setattr(migrations, "_MIGRATIONS", [Migration(1, "broken", _broken)])
        async with aiosqlite.connect(":memory:") as conn:
            with pytest.raises(StorageError, match="broken"):
                await run_migrations(conn)
            assert await get_current_version(conn) == 0

    async def test_tables_exist(self, db: aiosqlite.Connection) -> None:
        cursor = await db.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {row[0] for row in await cursor.fetchall()}
        assert {"logs", "findings", "notifications", "schema_migrations"} <= tables

    async def test_get_db_returns_active_connection(self, db: aiosqlite.Connection) -> None:
        assert await get_db() is db

    async def test_get_db_without_init(self) -> None:
        import logtriage.storage.database as db_mod

        db_mod._db = None
        with pytest.raises(StorageError):
            await get_db()


# ---------------------------------------------------------------------------
# LogRepository
# ---------------------------------------------------------------------------


class TestLogRepository:
    async def test_create_and_get(self, log_repo: LogRepository) -> None:
        await log_repo.create(_make_log())
        log = await log_repo.get("log-001")

        assert log is not None
        assert log.file_name == "app.log"
        assert log.status == FileStatus.PROCESSING
        assert log.uploaded_by == "ops"

    async def test_get_missing(self, log_repo: LogRepository) -> None:
        assert await log_repo.get("nope") is None

    async def test_require_missing_raises(self, log_repo: LogRepository) -> None:
        with pytest.raises(LogNotFoundError):
            await log_repo.require("nope")

    async def test_duplicate_hash_raises(self, log_repo: LogRepository) -> None:
        await log_repo.create(_make_log())

        with pytest.raises(DuplicateFileError) as exc_info:
            await log_repo.create(_make_log(log_id="log-002"))

        assert exc_info.value.existing_id == "log-001"
        assert await log_repo.get("log-002") is None

    async def test_get_by_hash(self, log_repo: LogRepository) -> None:
        await log_repo.create(_make_log(file_hash="b" * 64))
        log = await log_repo.get_by_hash("b" * 64)
        assert log is not None
        assert log.id == "log-001"

    async def test_update_status(self, log_repo: LogRepository) -> None:
        await log_repo.create(_make_log())

        assert await log_repo.update_status("log-001", FileStatus.FAILED, error="boom")
        log = await log_repo.get("log-001")
        assert log is not None
        assert log.status == FileStatus.FAILED
        assert log.error == "boom"

    async def test_update_status_missing(self, log_repo: LogRepository) -> None:
        assert not await log_repo.update_status("nope", FileStatus.COMPLETED)

    async def test_delete_cascades_to_findings(
        self, log_repo: LogRepository, finding_repo: FindingRepository
    ) -> None:
        await log_repo.create(_make_log())
        await finding_repo.create_many("log-001", _findings())

        assert await log_repo.delete("log-001")
        assert await finding_repo.count_by_log("log-001") == 0
        assert not await log_repo.delete("log-001")

    async def test_list_recent_includes_finding_count(
        self, log_repo: LogRepository, finding_repo: FindingRepository
    ) -> None:
        old = datetime.now(UTC) - timedelta(hours=1)
        await log_repo.create(_make_log("log-old", "c" * 64, created_at=old))
        await log_repo.create(_make_log("log-new", "d" * 64))
        await finding_repo.create_many("log-old", _findings())

        rows = await log_repo.list_recent()
        assert [r["id"] for r in rows] == ["log-new", "log-old"]
        assert [r["finding_count"] for r in rows] == [0, 4]

        assert len(await log_repo.list_recent(limit=1, offset=1)) == 1

    async def test_stats(self, log_repo: LogRepository) -> None:
        await log_repo.create(_make_log("l1", "1" * 64))
        await log_repo.create(_make_log("l2", "2" * 64))
        await log_repo.create(
            _make_log("l3", "3" * 64, created_at=datetime(2020, 1, 1, tzinfo=UTC))
        )
        await log_repo.update_status("l2", FileStatus.COMPLETED)
        await log_repo.update_status("l3", FileStatus.FAILED, error="x")

        assert await log_repo.stats() == {
            "total": 3,
            "processing": 1,
            "completed": 1,
            "failed": 1,
        }
        recent = await log_repo.stats(since=datetime.now(UTC) - timedelta(days=1))
        assert recent["total"] == 2
        assert recent["failed"] == 0

    async def test_list_recent_filters_by_uploader(self, log_repo: LogRepository) -> None:
        await log_repo.create(_make_log("log-ops", "e" * 64))
        other = _make_log("log-dev", "f" * 64).model_copy(update={"uploaded_by": "dev"})
        await log_repo.create(other)

        assert [r["id"] for r in await log_repo.list_recent(uploaded_by="dev")] == ["log-dev"]
        assert [r["id"] for r in await log_repo.list_recent(uploaded_by="ops")] == ["log-ops"]
        assert await log_repo.list_recent(uploaded_by="nobody") == []
        assert len(await log_repo.list_recent()) == 2

    async def test_duplicate_does_not_undo_concurrent_delete(
        self, log_repo: LogRepository
    ) -> None:
        await log_repo.create(_make_log("keep", "1" * 64))
        await log_repo.create(_make_log("gone", "2" * 64))

        results = await asyncio.gather(
            log_repo.create(_make_log("dup", "1" * 64)),
            log_repo.delete("gone"),
            return_exceptions=True,
        )

        assert isinstance(results[0], DuplicateFileError)
        assert results[1] is True
        assert await log_repo.get("gone") is None
        assert await log_repo.get("keep") is not None

    async def test_duplicate_keeps_pending_statements(
        self, db: aiosqlite.Connection, log_repo: LogRepository
    ) -> None:
        await log_repo.create(_make_log("keep", "1" * 64))
        await log_repo.create(_make_log("other", "2" * 64))
        await log_repo.update_status("other", FileStatus.COMPLETED, commit=False)

        with pytest.raises(DuplicateFileError):
            await log_repo.create(_make_log("dup", "1" * 64))

        assert db.in_transaction
        await db.commit()
        other = await log_repo.get("other")
        assert other is not None
        assert other.status == FileStatus.COMPLETED


# ---------------------------------------------------------------------------
# FindingRepository
# ---------------------------------------------------------------------------


class TestFindingRepository:
    async def test_round_trip_preserves_order(
        self, log_repo: LogRepository, finding_repo: FindingRepository
    ) -> None:
        await log_repo.create(_make_log())
        await finding_repo.create_many("log-001", _findings())

        stored = await finding_repo.get_by_log("log-001")
        assert stored == _findings()
        assert await finding_repo.count_by_log("log-001") == 4

    async def test_uncommitted_insert_can_be_rolled_back(
        self, db: aiosqlite.Connection, log_repo: LogRepository, finding_repo: FindingRepository
    ) -> None:
        await log_repo.create(_make_log())
        await finding_repo.create_many("log-001", _findings(), commit=False)
        await db.rollback()

        assert await finding_repo.count_by_log("log-001") == 0

    async def test_delete_by_log(
        self, log_repo: LogRepository, finding_repo: FindingRepository
    ) -> None:
        await log_repo.create(_make_log())
        await finding_repo.create_many("log-001", _findings())

        assert await finding_repo.delete_by_log("log-001") == 4
        assert await finding_repo.get_by_log("log-001") == []

    async def test_severity_stats_and_top_categories(
        self, log_repo: LogRepository, finding_repo: FindingRepository
    ) -> None:
        await log_repo.create(_make_log())
        await finding_repo.create_many("log-001", _findings())

        assert await finding_repo.severity_stats() == {"critical": 1, "medium": 2, "low": 1}
        top = await finding_repo.top_categories(limit=2)
        assert top == [
            {"category": "APPLICATION_ERROR", "count": 2},
            {"category": "500", "count": 1},
        ]

    async def test_severity_stats_since_future_is_empty(
        self, log_repo: LogRepository, finding_repo: FindingRepository
    ) -> None:
        await log_repo.create(_make_log())
        await finding_repo.create_many("log-001", _findings())

        future = datetime.now(UTC) + timedelta(days=1)
        assert await finding_repo.severity_stats(since=future) == {
            "critical": 0,
            "medium": 0,
            "low": 0,
        }

    async def test_trends(
        self, log_repo: LogRepository, finding_repo: FindingRepository
    ) -> None:
        await log_repo.create(_make_log())
        await finding_repo.create_many("log-001", _findings())

        trends = await finding_repo.trends(days=7)
        assert len(trends) == 1
        assert trends[0]["date"] == datetime.now(UTC).strftime("%Y-%m-%d")
        assert (trends[0]["critical"], trends[0]["medium"], trends[0]["low"]) == (1, 2, 1)


# ---------------------------------------------------------------------------
# NotificationRepository
# ---------------------------------------------------------------------------


class TestNotificationRepository:
    async def test_create_and_mark_sent(self, notification_repo: NotificationRepository) -> None:
        nid = await notification_repo.create("processing_complete", "Analysis of app.log")

        pending = await notification_repo.list_pending()
        assert [p["id"] for p in pending] == [nid]
        assert pending[0]["type"] == "processing_complete"

        assert await notification_repo.mark_sent(nid)
        assert await notification_repo.list_pending() == []

    async def test_create_already_sent(self, notification_repo: NotificationRepository) -> None:
        await notification_repo.create("critical_findings", "3 critical", sent=True)
        assert await notification_repo.list_pending() == []

    async def test_mark_sent_missing(self, notification_repo: NotificationRepository) -> None:
        assert not await notification_repo.mark_sent("missing")

    async def test_counts(self, notification_repo: NotificationRepository) -> None:
        assert await notification_repo.counts() == {"total": 0, "pending": 0}

        nid = await notification_repo.create("processing_complete", "done")
        await notification_repo.create("critical_findings", "3 critical", sent=True)
        assert await notification_repo.counts() == {"total": 2, "pending": 1}

        await notification_repo.mark_sent(nid)
        assert await notification_repo.counts() == {"total": 2, "pending": 0}
