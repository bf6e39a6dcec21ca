# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "logs"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def mixed_log() -> str:
    return (FIXTURES_DIR / "mixed.log").read_text(encoding="utf-8")


@pytest.fixture
def clean_log() -> str:
    return (FIXTURES_DIR / "clean.log").read_text(encoding="utf-8")


@pytest.fixture
async def db():
    """Create an in-memory database, run migrations, yield, then close."""
    # Reset the module-level _db so init_db creates a fresh connection
    import logtriage.storage.database as db_mod

    db_mod._db = None

    conn = await db_mod.init_db(":memory:")
    yield conn
    await db_mod.close_db()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep developer LOGTRIAGE_* variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("LOGTRIAGE_"):
            monkeypatch.delenv(key)
