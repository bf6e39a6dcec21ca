# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Alert router -- fans one event out to every channel whose filters accept it."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from logtriage.notifications.base import AlertChannel
from logtriage.notifications.events import AlertEvent, EventType

logger = logging.getLogger("logtriage.notifications.router")


@dataclass
class ChannelEntry:
    """A registered channel and the events it wants.

    ``min_critical`` only applies to critical-findings events; summaries and
    completions ignore it.
    """

    channel: AlertChannel
    event_types: frozenset[EventType] = field(default_factory=lambda: frozenset(EventType))
    min_critical: int = 0

    def matches(self, event: AlertEvent) -> bool:
        if event.event_type not in self.event_types:
            return False
        if event.event_type is EventType.CRITICAL_FINDINGS:
            return event.critical_count >= self.min_critical
        return True


class AlertRouter:
    """Deliver :class:`AlertEvent` instances to registered channels."""

    def __init__(self) -> None:
        self._entries: list[ChannelEntry] = []

    @property
    def channels(self) -> list[AlertChannel]:
        return [entry.channel for entry in self._entries]

    def register(
        self,
        channel: AlertChannel,
        *,
        event_types: frozenset[EventType] | None = None,
        min_critical: int = 0,
    ) -> None:
        entry = ChannelEntry(channel, min_critical=min_critical)
        if event_types:
            entry.event_types = frozenset(event_types)
        self._entries.append(entry)
        logger.info("Registered alert channel %s", channel.name)

    async def dispatch(self, event: AlertEvent) -> dict[str, bool]:
        """Send *event* to all matching channels concurrently.

        Never raises. Returns channel name -> delivered.
        """
        targets = [entry.channel for entry in self._entries if entry.matches(event)]
        if not targets:
            logger.debug(
                "No channel accepts %s (critical=%d)", event.event_type, event.critical_count
            )
            return {}

        outcomes = await asyncio.gather(
            *(channel.send(event) for channel in targets), return_exceptions=True
        )

        results: dict[str, bool] = {}
        for channel, outcome in zip(targets, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                logger.error(
                    "Alert channel %s raised while sending %s",
                    channel.name,
                    event.event_type,
                    exc_info=outcome,
                )
                results[channel.name] = False
            else:
                results[channel.name] = bool(outcome)
        return results

    def get_channel_status(self) -> list[dict[str, object]]:
        return [
            {
                "name": entry.channel.name,
                "configured": entry.channel.is_configured(),
                "event_types": sorted(entry.event_types),
                "min_critical": entry.min_critical,
            }
            for entry in self._entries
        ]
