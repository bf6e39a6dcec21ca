# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Uploaded log file record and processing outcome models."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from logtriage.core.constants import FileStatus
from logtriage.models.result import ClassificationResult


class LogFile(BaseModel):
    """A log file accepted for classification."""

    id: str
    file_name: str
    file_hash: str = Field(description="SHA-256 of the decoded content")
    file_size: int = Field(ge=0)
    uploaded_by: str | None = None
    status: FileStatus = FileStatus.PROCESSING
    error: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ProcessingOutcome(BaseModel):
    """Final state of one background classification run."""

    log_id: str
    status: FileStatus
    result: ClassificationResult | None = None
    error: str | None = None
    duration_ms: int | None = None
    alerts_sent: dict[str, bool] = Field(default_factory=dict)
