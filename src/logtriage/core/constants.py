# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations, severity ordering, and threshold constants."""

from enum import StrEnum


class Severity(StrEnum):
    CRITICAL = "critical"
    MEDIUM = "medium"
    LOW = "low"


class RuleFamily(StrEnum):
    HTTP = "http"
    APPLICATION = "application"
    SECURITY = "security"


class FileStatus(StrEnum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


# Evaluation order of the rule families within a single line.
FAMILY_ORDER: tuple[RuleFamily, ...] = (
    RuleFamily.HTTP,
    RuleFamily.APPLICATION,
    RuleFamily.SECURITY,
)

SEVERITY_RANK: dict[Severity, int] = {
    Severity.CRITICAL: 2,
    Severity.MEDIUM: 1,
    Severity.LOW: 0,
}

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
ALLOWED_EXTENSIONS = (".log", ".txt")
DEFAULT_ALERT_MIN_CRITICAL = 1
