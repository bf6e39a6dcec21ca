# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from logtriage.processing.service import LogProcessingService


async def get_processing_service(request: Request) -> LogProcessingService:
    """Return the app's processing service, creating it on first use."""
    service = getattr(request.app.state, "processing_service", None)
    if service is None:
        from logtriage.core.config import get_settings
        from logtriage.storage.database import get_db

        db = await get_db()
        service = LogProcessingService(db, settings=get_settings())
        request.app.state.processing_service = service
    return service
