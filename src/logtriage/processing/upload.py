# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Upload validation, decoding, and content fingerprinting."""

from __future__ import annotations

import hashlib
from pathlib import PurePath

from logtriage.core.config import Settings
from logtriage.core.exceptions import FileTooLargeError, UnsupportedFileTypeError


def fingerprint(content: str) -> str:
    """Return the hex SHA-256 of the UTF-8 encoded content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def decode_upload(data: bytes | str) -> str:
    """Decode uploaded bytes as UTF-8, replacing undecodable sequences."""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")


def validate_upload(file_name: str, size: int, settings: Settings) -> None:
    """Reject files with a disallowed extension or over the size cap."""
    suffix = PurePath(file_name).suffix.lower()
    allowed = [ext.lower() for ext in settings.upload_allowed_extensions]
    if suffix not in allowed:
        raise UnsupportedFileTypeError(
            f"Only {', '.join(allowed)} files are allowed, got {file_name!r}"
        )
    if size > settings.upload_max_bytes:
        raise FileTooLargeError(
            f"{file_name} is {size} bytes; the limit is {settings.upload_max_bytes} bytes"
        )
