# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract base class for alert channels."""

from __future__ import annotations

import abc

from logtriage.notifications.events import AlertEvent


class AlertChannel(abc.ABC):
    """Base class for all alert channels.

    Each concrete channel implements ``send()`` to deliver an
    :class:`AlertEvent` to its backing service.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Human-readable channel name (e.g. ``'telegram'``)."""

    @abc.abstractmethod
    async def send(self, event: AlertEvent) -> bool:
        """Deliver an alert event.

        Returns:
            ``True`` if the delivery succeeded, ``False`` otherwise.
        """

    def is_configured(self) -> bool:
        """Return ``True`` if the channel has valid configuration."""
        return True
