# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Logging setup for the ``logtriage`` logger tree, with secret redaction.

Alert channel credentials end up in request URLs and exception text (the
Telegram bot token is part of every Bot API path), so both formatters scrub
them before anything reaches the handler.
"""

import json
import logging
import re
import sys
from typing import Any

REDACT_PATTERNS = [
    # Telegram bot token, bare or inside /bot<token>/ API paths
    re.compile(r"((?:bot)?\d{6,12}:[A-Za-z0-9_\-]{4})[A-Za-z0-9_\-]{20,}"),
    re.compile(r"(Bearer\s+[a-zA-Z0-9\-._~+/]{10})[a-zA-Z0-9\-._~+/]*"),
    # Webhook secrets and tokens passed as query parameters
    re.compile(r"((?:secret|token|key)=[^&\s]{4})[^&\s]*", re.IGNORECASE),
]

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def redact_sensitive(text: str) -> str:
    for pattern in REDACT_PATTERNS:
        text = pattern.sub(r"\1[REDACTED]", text)
    return text


class JsonFormatter(logging.Formatter):
    """One JSON object per line; exception text is redacted too."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sensitive(record.getMessage()),
        }
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            entry["exception"] = redact_sensitive(f"{type(exc).__name__}: {exc}")
        return json.dumps(entry)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return redact_sensitive(super().format(record))


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Route the ``logtriage`` loggers to stderr in the given format.

    Safe to call repeatedly; earlier handlers are replaced.
    """
    root = logging.getLogger("logtriage")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if fmt == "json" else TextFormatter(_TEXT_FORMAT))
    root.addHandler(handler)
