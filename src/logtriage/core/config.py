# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pathlib import Path
from typing import Annotated

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from logtriage.core.constants import (
    ALLOWED_EXTENSIONS,
    DEFAULT_ALERT_MIN_CRITICAL,
    MAX_UPLOAD_BYTES,
)
from logtriage.core.exceptions import ConfigurationError


def _split_csv(v: object) -> list[str]:
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v if isinstance(v, list) else []


# Comma-separated in the environment rather than JSON.
CsvList = Annotated[list[str], NoDecode]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LOGTRIAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Database
    db_path: Path = Path("logtriage.db")
    auto_migrate: bool = True

    # API server
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_workers: int = 1
    cors_origins: CsvList = ["*"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v: object) -> list[str]:
        return _split_csv(v)

    # Uploads
    upload_max_bytes: int = MAX_UPLOAD_BYTES
    upload_allowed_extensions: CsvList = list(ALLOWED_EXTENSIONS)

    @field_validator("upload_allowed_extensions", mode="before")
    @classmethod
    def _parse_extensions(cls, v: object) -> list[str]:
        return [e if e.startswith(".") else f".{e}" for e in _split_csv(v)]

    # Classification
    classification_timeout_seconds: float = 300.0

    @field_validator("upload_max_bytes", "classification_timeout_seconds")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    # Alerting
    alert_min_critical: int = DEFAULT_ALERT_MIN_CRITICAL
    notification_channels: CsvList = []
    telegram_bot_token: str = ""
    telegram_admin_chat_id: str = ""
    telegram_api_base: str = "https://api.telegram.org"
    webhook_urls: CsvList = []
    webhook_secret: str = ""
    app_url: str = ""

    @field_validator("notification_channels", mode="before")
    @classmethod
    def _parse_notification_channels(cls, v: object) -> list[str]:
        return _split_csv(v)

    @field_validator("webhook_urls", mode="before")
    @classmethod
    def _parse_webhook_urls(cls, v: object) -> list[str]:
        return _split_csv(v)

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def _known_log_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in ("json", "text"):
            raise ValueError(f"unknown log format {v!r}; expected json or text")
        return fmt


def get_settings() -> Settings:
    """Load settings from the environment.

    Raises ConfigurationError naming every invalid LOGTRIAGE_* value.
    """
    try:
        return Settings()
    except ValidationError as exc:
        problems = "; ".join(
            f"LOGTRIAGE_{'_'.join(map(str, err['loc'])).upper()}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc
