# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Log processing service -- the caller side of the classification engine.

``submit`` fingerprints the content, refuses duplicates, records the file as
``processing`` and returns at once. Classification runs as an asyncio task
that executes the engine in a worker thread; its completion or failure is
translated into exactly one status transition:

    processing -> completed   findings and status committed together
    processing -> failed      nothing persisted except the status and error
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid

import aiosqlite

from logtriage.classifier.engine import ClassificationEngine
from logtriage.core.config import Settings, get_settings
from logtriage.core.constants import FileStatus
from logtriage.core.exceptions import ClassificationError, DuplicateFileError, StorageError
from logtriage.models.log_file import LogFile, ProcessingOutcome
from logtriage.models.result import ClassificationResult
from logtriage.notifications.events import AlertEvent
from logtriage.notifications.factory import build_router
from logtriage.notifications.router import AlertRouter
from logtriage.processing.upload import decode_upload, fingerprint, validate_upload
from logtriage.storage.repositories.findings import FindingRepository
from logtriage.storage.repositories.logs import LogRepository
from logtriage.storage.repositories.notifications import NotificationRepository

logger = logging.getLogger("logtriage.processing.service")


class LogProcessingService:
    """Accepts uploaded log files and classifies them in the background."""

    def __init__(
        self,
        db: aiosqlite.Connection,
        *,
        settings: Settings | None = None,
        engine: ClassificationEngine | None = None,
        alert_router: AlertRouter | None = None,
    ) -> None:
        self._db = db
        self._settings = settings or get_settings()
        self._engine = engine or ClassificationEngine()
        self._router = alert_router if alert_router is not None else build_router(self._settings)
        self._logs = LogRepository(db)
        self._findings = FindingRepository(db)
        self._notifications = NotificationRepository(db)
        # One shared connection: serialise multi-statement writes so another
        # coroutine's commit cannot land in the middle of a run's transaction.
        self._write_lock = asyncio.Lock()
        self._tasks: dict[str, asyncio.Task[ProcessingOutcome]] = {}

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def submit(
        self,
        file_name: str,
        data: bytes | str,
        *,
        uploaded_by: str | None = None,
    ) -> LogFile:
        """Register an upload and schedule its classification.

        Raises:
            UnsupportedFileTypeError, FileTooLargeError: the upload is rejected.
            DuplicateFileError: identical content was already ingested.
        """
        size = len(data.encode("utf-8")) if isinstance(data, str) else len(data)
        validate_upload(file_name, size, self._settings)

        content = decode_upload(data)
        file_hash = fingerprint(content)

        existing = await self._logs.get_by_hash(file_hash)
        if existing is not None:
            logger.info(
                "Duplicate upload %s matches log %s; skipping classification",
                file_name,
                existing.id,
            )
            raise DuplicateFileError(existing.id, file_hash)

        log = LogFile(
            id=uuid.uuid4().hex,
            file_name=file_name,
            file_hash=file_hash,
            file_size=size,
            uploaded_by=uploaded_by,
        )
        async with self._write_lock:
            await self._logs.create(log)

        task = asyncio.create_task(self.process(log, content), name=f"classify-{log.id}")
        self._tasks[log.id] = task
        task.add_done_callback(lambda _t, log_id=log.id: self._tasks.pop(log_id, None))

        logger.info("Accepted %s (%d bytes) as log %s", file_name, size, log.id)
        return log

    async def delete(self, log_id: str) -> bool:
        """Delete a log and its findings. Returns False if no such log exists."""
        async with self._write_lock:
            deleted = await self._logs.delete(log_id)
        if deleted:
            logger.info("Deleted log %s", log_id)
        return deleted

    async def wait_for(self, log_id: str) -> ProcessingOutcome | None:
        """Await the background run for *log_id*, if one is still in flight."""
        task = self._tasks.get(log_id)
        if task is None:
            return None
        return await task

    async def drain(self) -> list[ProcessingOutcome]:
        """Wait for every in-flight run to finish."""
        tasks = list(self._tasks.values())
        if not tasks:
            return []
        return list(await asyncio.gather(*tasks))

    async def process(self, log: LogFile, content: str) -> ProcessingOutcome:
        """Classify *content* and persist the outcome for *log*.

        Never raises: every failure becomes a ``failed`` outcome.
        """
        start = time.monotonic()
        timeout = self._settings.classification_timeout_seconds

        try:
            result = await self._classify(content, timeout)
            async with self._write_lock:
                await self._persist(log.id, result)
        except Exception as exc:
            logger.exception("Processing failed for log %s (%s)", log.id, log.file_name)
            return await self._fail(log, str(exc), start)

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "Log %s classified: %d findings (critical=%d) in %dms",
            log.id,
            result.total,
            result.critical_count,
            elapsed_ms,
        )

        await self._record_notification(
            "processing_complete", _summary_message(log.file_name, result), log
        )
        alerts = await self._alert(log, result)

        return ProcessingOutcome(
            log_id=log.id,
            status=FileStatus.COMPLETED,
            result=result,
            duration_ms=elapsed_ms,
            alerts_sent=alerts,
        )

    async def _classify(self, content: str, timeout: float) -> ClassificationResult:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._engine.classify, content), timeout=timeout
            )
        except TimeoutError as exc:
            raise ClassificationError(f"Classification timed out after {timeout:g}s") from exc

    async def _persist(self, log_id: str, result: ClassificationResult) -> None:
        """Write all findings and the completed status in one transaction."""
        try:
            await self._findings.create_many(log_id, result.findings, commit=False)
            updated = await self._logs.update_status(
                log_id, FileStatus.COMPLETED, commit=False
            )
            if not updated:
                raise StorageError(f"Log {log_id} no longer exists")
            await self._db.commit()
        except Exception:
            await self._db.rollback()
            raise

    async def _fail(self, log: LogFile, error: str, start: float) -> ProcessingOutcome:
        try:
            async with self._write_lock:
                await self._logs.update_status(log.id, FileStatus.FAILED, error=error)
        except Exception:
            logger.exception("Could not mark log %s as failed", log.id)

        await self._record_notification(
            "processing_failed", f"Analysis of {log.file_name} failed: {error}", log
        )
        return ProcessingOutcome(
            log_id=log.id,
            status=FileStatus.FAILED,
            error=error,
            duration_ms=int((time.monotonic() - start) * 1000),
        )

    async def _record_notification(self, kind: str, message: str, log: LogFile) -> None:
        try:
            async with self._write_lock:
                await self._notifications.create(kind, message, user_id=log.uploaded_by)
        except Exception:
            logger.exception("Failed to record %s notification for log %s", kind, log.id)

    async def _alert(self, log: LogFile, result: ClassificationResult) -> dict[str, bool]:
        """Invoke the alert channels when the critical count meets the threshold."""
        threshold = max(1, self._settings.alert_min_critical)
        if result.critical_count < threshold or not self._router.channels:
            return {}
        try:
            event = AlertEvent.from_result(log.id, log.file_name, result)
            return await self._router.dispatch(event)
        except Exception:
            logger.exception("Failed to dispatch alerts for log %s", log.id)
            return {}


def _summary_message(file_name: str, result: ClassificationResult) -> str:
    counts = result.severity_counts
    return (
        f"Analysis of {file_name}: "
        f"Low: {counts['low']}, Medium: {counts['medium']}, Critical: {counts['critical']}"
    )
