# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Dashboard statistics endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()


class DashboardStats(BaseModel):
    logs: dict[str, int]
    findings: dict[str, int]
    total_findings: int
    top_categories: list[dict[str, Any]]
    trends: list[dict[str, Any]]


@router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(days: int = 7) -> DashboardStats:
    """Aggregate counts for the dashboard overview."""
    from logtriage.storage.database import get_db
    from logtriage.storage.repositories.findings import FindingRepository
    from logtriage.storage.repositories.logs import LogRepository

    db = await get_db()
    findings = FindingRepository(db)
    severity = await findings.severity_stats()

    return DashboardStats(
        logs=await LogRepository(db).stats(),
        findings=severity,
        total_findings=sum(severity.values()),
        top_categories=await findings.top_categories(),
        trends=await findings.trends(days),
    )
