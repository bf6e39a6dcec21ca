# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Alert event models dispatched to notification channels."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from logtriage.models.result import ClassificationResult


class EventType(StrEnum):
    CRITICAL_FINDINGS = "critical_findings"
    PROCESSING_COMPLETE = "processing_complete"
    DAILY_SUMMARY = "daily_summary"


class CategoryCount(BaseModel):
    category: str
    count: int


class DailySummary(BaseModel):
    """Aggregate statistics for the daily summary message."""

    files_processed: int
    total_findings: int
    critical_findings: int
    failed_files: int = 0
    top_categories: list[CategoryCount] = Field(default_factory=list)

    @property
    def success_rate(self) -> float:
        if not self.files_processed:
            return 100.0
        return (self.files_processed - self.failed_files) / self.files_processed * 100


class AlertEvent(BaseModel):
    """Summary of one file's classification, or of a day's activity."""

    event_type: EventType
    file_name: str | None = None
    log_id: str | None = None
    critical_count: int = 0
    total_findings: int = 0
    severity_counts: dict[str, int] = Field(default_factory=dict)
    top_categories: list[CategoryCount] = Field(default_factory=list)
    summary: DailySummary | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_result(
        cls, log_id: str, file_name: str, result: ClassificationResult
    ) -> AlertEvent:
        """Build an event for a completed classification."""
        event_type = (
            EventType.CRITICAL_FINDINGS
            if result.critical_count > 0
            else EventType.PROCESSING_COMPLETE
        )
        top = sorted(result.category_counts.items(), key=lambda kv: (-kv[1], kv[0]))[:5]
        return cls(
            event_type=event_type,
            log_id=log_id,
            file_name=file_name,
            critical_count=result.critical_count,
            total_findings=result.total,
            severity_counts=result.severity_counts,
            top_categories=[CategoryCount(category=c, count=n) for c, n in top],
        )

    @classmethod
    def daily_summary(cls, summary: DailySummary) -> AlertEvent:
        return cls(
            event_type=EventType.DAILY_SUMMARY,
            critical_count=summary.critical_findings,
            total_findings=summary.total_findings,
            top_categories=summary.top_categories,
            summary=summary,
        )
