# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Stateless classification endpoint."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter

from logtriage.api.schemas import ClassifyRequestBody, ClassifyResponseBody, result_to_response
from logtriage.classifier.engine import classify as classify_content

router = APIRouter()


@router.post("/classify", response_model=ClassifyResponseBody)
async def classify(body: ClassifyRequestBody) -> ClassifyResponseBody:
    """Classify raw log text without storing anything."""
    result = await asyncio.to_thread(classify_content, body.content)
    return result_to_response(result)
