# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Liveness and readiness endpoints."""

from __future__ import annotations

import logging

import aiosqlite
from fastapi import APIRouter, Request
from pydantic import BaseModel

from logtriage import __version__
from logtriage.classifier.catalogue import CATALOGUE_VERSION
from logtriage.core.exceptions import StorageError

logger = logging.getLogger("logtriage.api.health")

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    catalogue_version: str


class ReadyResponse(BaseModel):
    status: str
    database: str
    schema_version: int
    latest_schema_version: int
    pending_classifications: int


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        service="logtriage",
        version=__version__,
        catalogue_version=CATALOGUE_VERSION,
    )


@router.get("/ready", response_model=ReadyResponse)
async def ready(request: Request) -> ReadyResponse:
    """Ready once the database is reachable and fully migrated.

    Reports how many uploads are still being classified in the background.
    """
    from logtriage.storage.database import get_db
    from logtriage.storage.migrations import latest_version, read_version

    latest = latest_version()
    service = getattr(request.app.state, "processing_service", None)
    pending = service.pending if service is not None else 0

    try:
        schema = await read_version(await get_db())
    except (StorageError, aiosqlite.Error) as exc:
        logger.warning("Readiness check failed: %s", exc)
        return ReadyResponse(
            status="not_ready",
            database=str(exc),
            schema_version=0,
            latest_schema_version=latest,
            pending_classifications=pending,
        )

    return ReadyResponse(
        status="ready" if schema >= latest else "not_ready",
        database="connected" if schema >= latest else "schema outdated",
        schema_version=schema,
        latest_schema_version=latest,
        pending_classifications=pending,
    )
