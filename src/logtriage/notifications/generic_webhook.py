# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Generic webhook alert channel.

The body is the compact, key-sorted JSON of the event. When a secret is
configured the receiver can verify it against ``X-Logtriage-Signature``, the
hex HMAC-SHA256 of exactly those bytes.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging

import httpx

from logtriage.notifications.base import AlertChannel
from logtriage.notifications.events import AlertEvent

logger = logging.getLogger("logtriage.notifications.generic_webhook")

_TIMEOUT_SECONDS = 10.0
SIGNATURE_HEADER = "X-Logtriage-Signature"


def compute_signature(payload_bytes: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload_bytes, hashlib.sha256).hexdigest()


def encode_event(event: AlertEvent) -> bytes:
    return json.dumps(
        event.model_dump(mode="json"), separators=(",", ":"), sort_keys=True
    ).encode("utf-8")


class GenericWebhookChannel(AlertChannel):
    """POST alert events as JSON to an arbitrary URL."""

    def __init__(
        self,
        url: str,
        *,
        secret: str = "",
        headers: dict[str, str] | None = None,
    ) -> None:
        self._url = url
        self._secret = secret
        self._extra_headers = dict(headers or {})

    @property
    def name(self) -> str:
        return "webhook"

    def is_configured(self) -> bool:
        return bool(self._url)

    def _headers(self, body: bytes) -> dict[str, str]:
        headers = {"Content-Type": "application/json", **self._extra_headers}
        if self._secret:
            headers[SIGNATURE_HEADER] = compute_signature(body, self._secret)
        return headers

    async def send(self, event: AlertEvent) -> bool:
        if not self._url:
            logger.warning("Webhook channel has no URL; dropping %s", event.event_type)
            return False

        body = encode_event(event)
        try:
            async with httpx.AsyncClient(timeout=_TIMEOUT_SECONDS) as client:
                response = await client.post(self._url, content=body, headers=self._headers(body))
                response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Webhook delivery to %s failed for log %s", self._url, event.log_id)
            return False

        logger.info("Webhook %s accepted %s for log %s", self._url, event.event_type, event.log_id)
        return True
