# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Alert dispatch for classification results."""

from logtriage.notifications.base import AlertChannel
from logtriage.notifications.events import AlertEvent, CategoryCount, DailySummary, EventType
from logtriage.notifications.generic_webhook import GenericWebhookChannel
from logtriage.notifications.router import AlertRouter
from logtriage.notifications.telegram import TelegramChannel

__all__ = [
    "AlertChannel",
    "AlertEvent",
    "AlertRouter",
    "CategoryCount",
    "DailySummary",
    "EventType",
    "GenericWebhookChannel",
    "TelegramChannel",
]
