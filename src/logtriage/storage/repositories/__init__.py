# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository classes for each table."""

from logtriage.storage.repositories.findings import FindingRepository
from logtriage.storage.repositories.logs import LogRepository
from logtriage.storage.repositories.notifications import NotificationRepository

__all__ = ["FindingRepository", "LogRepository", "NotificationRepository"]
