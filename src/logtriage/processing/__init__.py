# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Upload processing: fingerprinting, background classification, persistence."""

from logtriage.processing.service import LogProcessingService
from logtriage.processing.summary import build_daily_summary
from logtriage.processing.upload import decode_upload, fingerprint, validate_upload

__all__ = [
    "LogProcessingService",
    "build_daily_summary",
    "decode_upload",
    "fingerprint",
    "validate_upload",
]
