# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Factory to build an AlertRouter from application settings."""

from __future__ import annotations

import logging

from logtriage.core.config import Settings
from logtriage.notifications.events import EventType
from logtriage.notifications.generic_webhook import GenericWebhookChannel
from logtriage.notifications.router import AlertRouter
from logtriage.notifications.telegram import TelegramChannel

logger = logging.getLogger("logtriage.notifications.factory")

# Routine completions and failures are recorded in the notifications table only.
ALERT_EVENT_TYPES = frozenset({EventType.CRITICAL_FINDINGS, EventType.DAILY_SUMMARY})


def build_router(settings: Settings) -> AlertRouter:
    """Create an :class:`AlertRouter` from :class:`Settings`.

    Channels listed in ``settings.notification_channels`` are instantiated
    and registered. If the list is empty, channels are auto-detected from the
    credentials that are present.
    """
    router = AlertRouter()
    channels = set(settings.notification_channels)

    if not channels:
        if settings.telegram_bot_token and settings.telegram_admin_chat_id:
            channels.add("telegram")
        if settings.webhook_urls:
            channels.add("webhook")

    for ch_name in sorted(channels):
        if ch_name == "telegram" and settings.telegram_bot_token:
            router.register(
                TelegramChannel(
                    settings.telegram_bot_token,
                    settings.telegram_admin_chat_id,
                    api_base=settings.telegram_api_base,
                    app_url=settings.app_url,
                ),
                event_types=ALERT_EVENT_TYPES,
                min_critical=settings.alert_min_critical,
            )
        elif ch_name == "webhook" and settings.webhook_urls:
            for url in settings.webhook_urls:
                router.register(
                    GenericWebhookChannel(url, secret=settings.webhook_secret),
                    event_types=ALERT_EVENT_TYPES,
                    min_critical=settings.alert_min_critical,
                )
        else:
            logger.warning(
                "Notification channel '%s' requested but not configured", ch_name
            )

    return router
