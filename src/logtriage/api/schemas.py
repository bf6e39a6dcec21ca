# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Request and response bodies shared by the API routes."""

from __future__ import annotations

from pydantic import BaseModel, Field

from logtriage.models.log_file import LogFile
from logtriage.models.result import ClassificationResult


class FindingResponse(BaseModel):
    category: str
    message: str
    line_number: int
    severity: str


class ClassifyRequestBody(BaseModel):
    content: str = Field(description="Decoded log file text")


class ClassifyResponseBody(BaseModel):
    line_count: int
    total: int
    severity_counts: dict[str, int]
    findings: list[FindingResponse]


class UploadRequestBody(BaseModel):
    file_name: str = Field(description="Original file name; must end in .log or .txt")
    content: str
    uploaded_by: str | None = None


class LogResponse(BaseModel):
    id: str
    file_name: str
    file_hash: str
    file_size: int
    uploaded_by: str | None
    status: str
    error: str | None
    created_at: str
    updated_at: str


class LogListItem(LogResponse):
    finding_count: int


class LogDetailResponse(LogResponse):
    finding_count: int
    severity_counts: dict[str, int]
    findings: list[FindingResponse]


def result_to_response(result: ClassificationResult) -> ClassifyResponseBody:
    return ClassifyResponseBody(
        line_count=result.line_count,
        total=result.total,
        severity_counts=result.severity_counts,
        findings=[FindingResponse(**f.model_dump(mode="json")) for f in result.findings],
    )


def log_to_response(log: LogFile) -> LogResponse:
    return LogResponse(
        id=log.id,
        file_name=log.file_name,
        file_hash=log.file_hash,
        file_size=log.file_size,
        uploaded_by=log.uploaded_by,
        status=log.status,
        error=log.error,
        created_at=log.created_at.isoformat(),
        updated_at=log.updated_at.isoformat(),
    )
