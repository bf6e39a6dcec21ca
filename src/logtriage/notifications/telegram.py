# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Telegram alert channel using the Bot API ``sendMessage`` method."""

from __future__ import annotations

import html
import logging

import httpx

from logtriage.notifications.base import AlertChannel
from logtriage.notifications.events import AlertEvent, EventType

logger = logging.getLogger("logtriage.notifications.telegram")

_TIMEOUT_SECONDS = 10.0
_DEFAULT_API_BASE = "https://api.telegram.org"

TEST_MESSAGE = (
    "✅ Telegram integration test successful! "
    "You will now receive log analysis notifications."
)


def _format_time(event: AlertEvent) -> str:
    return event.timestamp.strftime("%Y-%m-%d %H:%M:%S UTC")


def build_message(event: AlertEvent, *, app_url: str = "") -> str:
    """Render an event as Telegram HTML."""
    name = html.escape(event.file_name or "unknown")

    if event.event_type == EventType.DAILY_SUMMARY and event.summary is not None:
        s = event.summary
        lines = [
            "\U0001f4ca <b>Daily Log Analysis Summary</b>",
            "",
            f"\U0001f4c1 <b>Files Processed:</b> {s.files_processed}",
            f"\U0001f50d <b>Total Findings:</b> {s.total_findings}",
            f"\U0001f6a8 <b>Critical Findings:</b> {s.critical_findings}",
            f"✅ <b>Success Rate:</b> {s.success_rate:.1f}%",
            "",
            "Top Categories:",
            *[f"• {html.escape(c.category)}: {c.count}" for c in s.top_categories],
        ]
        if app_url:
            lines += ["", f"View detailed reports at: {html.escape(app_url)}"]
        return "\n".join(lines)

    counts = event.severity_counts
    lines = [
        "\U0001f6a8 <b>Critical Errors Detected</b>"
        if event.critical_count
        else "✅ <b>Log Analysis Complete</b>",
        "",
        f"\U0001f4c1 <b>File:</b> {name}",
        f"\U0001f525 <b>Critical Errors:</b> {event.critical_count}",
        f"\U0001f4cb <b>Total Findings:</b> {event.total_findings}"
        f" (low {counts.get('low', 0)}, medium {counts.get('medium', 0)},"
        f" critical {counts.get('critical', 0)})",
        f"⏰ <b>Time:</b> {_format_time(event)}",
        "",
        "Please check the dashboard for detailed analysis and resolution suggestions.",
    ]
    return "\n".join(lines)


class TelegramChannel(AlertChannel):
    """Send alerts to a Telegram chat through a bot."""

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        *,
        api_base: str = _DEFAULT_API_BASE,
        app_url: str = "",
    ) -> None:
        self._bot_token = bot_token
        self._chat_id = chat_id
        self._api_base = api_base.rstrip("/")
        self._app_url = app_url

    @property
    def name(self) -> str:
        return "telegram"

    def is_configured(self) -> bool:
        return bool(self._bot_token and self._chat_id)

    @property
    def _send_url(self) -> str:
        return f"{self._api_base}/bot{self._bot_token}/sendMessage"

    async def send_message(self, text: str, chat_id: str | None = None) -> bool:
        if not self._bot_token:
            logger.warning("Telegram bot token not configured")
            return False
        target = chat_id or self._chat_id
        if not target:
            logger.warning("Telegram chat id not configured")
            return False

        payload = {"chat_id": target, "text": text, "parse_mode": "HTML"}
        try:
            async with httpx.AsyncClient(timeout=_TIMEOUT_SECONDS) as client:
                response = await client.post(self._send_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Failed to send Telegram message to chat %s", target)
            return False
        return True

    async def send(self, event: AlertEvent) -> bool:
        ok = await self.send_message(build_message(event, app_url=self._app_url))
        if ok:
            logger.info(
                "Telegram alert sent: %s for %s", event.event_type, event.file_name
            )
        return ok

    async def test_connection(self, chat_id: str | None = None) -> bool:
        return await self.send_message(TEST_MESSAGE, chat_id=chat_id)
