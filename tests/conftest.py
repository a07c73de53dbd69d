"""Pytest configuration shared by the seed export test suite.

Settings are read from the environment and from a .env file. Tests point the
.env lookup at a file that does not exist and clear every backend variable so
that a developer's real credentials are never picked up.
"""

from __future__ import annotations

import os
from pathlib import Path

# Must happen before seed_export.config.settings is imported
os.environ["SEED_EXPORT_ENV_FILE"] = str(Path(__file__).parent / ".env.test-does-not-exist")

from typing import Any, Dict, List

import pytest

from seed_export.config.settings import get_settings
from seed_export.config.table_registry import TableSpec
from seed_export.io.connectors.exceptions import SourceUnavailableError

BACKEND_ENV_VARS = [
    "SUPABASE_URL",
    "SUPABASE_PROJECT_ID",
    "SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "SEED_EXPORT_SUPABASE_URL",
    "SEED_EXPORT_SUPABASE_PROJECT_ID",
    "SEED_EXPORT_SERVICE_ROLE_KEY",
    "SEED_EXPORT_ANON_KEY",
    "SEED_EXPORT_OUTPUT_PATH",
    "SEED_EXPORT_REGISTRY_PATH",
    "SEED_EXPORT_REQUEST_TIMEOUT",
    "SEED_EXPORT_RETRY_MAX",
]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Run every test with a clean backend environment and fresh settings."""
    for name in BACKEND_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeRowSource:
    """In-memory RowSource; a table mapped to an exception raises it."""

    def __init__(self, tables: Dict[str, Any]):
        self.tables = tables
        self.calls: List[str] = []

    def fetch_rows(self, table_name: str) -> List[Dict[str, Any]]:
        self.calls.append(table_name)
        result = self.tables.get(table_name, [])
        if isinstance(result, Exception):
            raise result
        return [dict(row) for row in result]


@pytest.fixture
def fake_source_factory():
    return FakeRowSource


@pytest.fixture
def unavailable():
    """Build a SourceUnavailableError for a table."""

    def _make(table_name: str, message: str = "connection refused") -> SourceUnavailableError:
        return SourceUnavailableError(message, table_name=table_name)

    return _make


@pytest.fixture
def alpaca_spec() -> TableSpec:
    return TableSpec(name="alpaca_stocks", primary_key="id", unique_constraint="symbol")
