# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Log upload and retrieval endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from logtriage.api.deps import get_processing_service
from logtriage.api.schemas import (
    FindingResponse,
    LogDetailResponse,
    LogListItem,
    LogResponse,
    UploadRequestBody,
    log_to_response,
)
from logtriage.core.exceptions import (
    DuplicateFileError,
    FileTooLargeError,
    LogNotFoundError,
    UnsupportedFileTypeError,
)
from logtriage.models.result import ClassificationResult
from logtriage.processing.service import LogProcessingService

router = APIRouter()


@router.post("/logs", response_model=LogResponse, status_code=status.HTTP_202_ACCEPTED)
async def upload_log(
    body: UploadRequestBody,
    service: LogProcessingService = Depends(get_processing_service),
) -> LogResponse:
    """Accept a log file; classification continues in the background."""
    try:
        log = await service.submit(body.file_name, body.content, uploaded_by=body.uploaded_by)
    except UnsupportedFileTypeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except FileTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from exc
    except DuplicateFileError as exc:
        raise HTTPException(
            status_code=409,
            detail={"message": "File already exists", "log_id": exc.existing_id},
        ) from exc
    return log_to_response(log)


@router.get("/logs", response_model=list[LogListItem])
async def list_logs(
    limit: int = 50, offset: int = 0, uploaded_by: str | None = None
) -> list[LogListItem]:
    """List uploaded logs, newest first, optionally only one uploader's."""
    from logtriage.storage.database import get_db
    from logtriage.storage.repositories.logs import LogRepository

    db = await get_db()
    rows = await LogRepository(db).list_recent(
        limit=limit, offset=offset, uploaded_by=uploaded_by
    )
    return [LogListItem(**row) for row in rows]


@router.get("/logs/{log_id}", response_model=LogDetailResponse)
async def get_log(log_id: str) -> LogDetailResponse:
    """Retrieve a log record with its findings."""
    from logtriage.storage.database import get_db
    from logtriage.storage.repositories.findings import FindingRepository
    from logtriage.storage.repositories.logs import LogRepository

    db = await get_db()
    try:
        log = await LogRepository(db).require(log_id)
    except LogNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    findings = await FindingRepository(db).get_by_log(log_id)
    # Reuse the result model so counts come from the same tally as classify().
    tally = ClassificationResult(findings=findings)

    return LogDetailResponse(
        **log_to_response(log).model_dump(),
        finding_count=tally.total,
        severity_counts=tally.severity_counts,
        findings=[FindingResponse(**f.model_dump(mode="json")) for f in findings],
    )


@router.delete("/logs/{log_id}")
async def delete_log(
    log_id: str,
    service: LogProcessingService = Depends(get_processing_service),
) -> dict[str, str]:
    """Delete a log record and its findings."""
    if not await service.delete(log_id):
        raise HTTPException(status_code=404, detail=f"Log {log_id} not found")
    return {"message": "Log deleted", "log_id": log_id}
