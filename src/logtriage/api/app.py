# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from logtriage import __version__
from logtriage.api.routes import classify, dashboard, health, logs, rules

logger = logging.getLogger("logtriage.api.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    from logtriage.core.config import get_settings
    from logtriage.processing.service import LogProcessingService
    from logtriage.storage.database import close_db, init_db

    settings = get_settings()
    db = await init_db(settings.db_path, auto_migrate=settings.auto_migrate)
    app.state.processing_service = LogProcessingService(db, settings=settings)

    yield

    pending = app.state.processing_service.pending
    if pending:
        logger.info("Waiting for %d classification run(s) to finish", pending)
        await app.state.processing_service.drain()
    await close_db()


def create_app() -> FastAPI:
    from logtriage.core.config import get_settings

    settings = get_settings()
    app = FastAPI(
        title="logtriage",
        description="Rule-based severity classification for uploaded log files",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(classify.router, prefix="/api/v1", tags=["classify"])
    app.include_router(logs.router, prefix="/api/v1", tags=["logs"])
    app.include_router(dashboard.router, prefix="/api/v1", tags=["dashboard"])
    app.include_router(rules.router, prefix="/api/v1", tags=["rules"])

    return app
