# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for logtriage."""


class LogTriageError(Exception):
    """Base exception for all logtriage errors."""


class ConfigurationError(LogTriageError):
    """Invalid or missing configuration."""


class StorageError(LogTriageError):
    """Database or storage operation failed."""


class ClassificationError(LogTriageError):
    """Classification of a log file failed or timed out."""


class LogNotFoundError(LogTriageError):
    """No log file record exists for the requested id."""


class UploadError(LogTriageError):
    """An uploaded file was rejected before classification."""


class UnsupportedFileTypeError(UploadError):
    """File extension is not on the allow-list."""


class FileTooLargeError(UploadError):
    """File exceeds the configured upload size cap."""


class DuplicateFileError(UploadError):
    """A file with the same content fingerprint was already ingested."""

    def __init__(self, existing_id: str, file_hash: str) -> None:
        super().__init__(f"File already exists as {existing_id}")
        self.existing_id = existing_id
        self.file_hash = file_hash
