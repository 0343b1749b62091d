# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from pm_tracker.cli.bootstrap import load_state
from pm_tracker.core.state import AppState

from .fakes import FakeKeyValueStore

# Every date-relative assertion pins "today" to this key.
FIXED_TODAY = "2025-01-15"


@pytest.fixture()
def today() -> str:
    return FIXED_TODAY


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="pm-tracker-test",
        log_level="DEBUG",
        log_to_file=False,
        data_dir=tmp_path,
        store_path=tmp_path / "store.sqlite3",
        backup_dir=tmp_path / "backups",
    )


@pytest.fixture()
def store() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def state(settings: SimpleNamespace, store: FakeKeyValueStore) -> AppState:
    """AppState loaded from an empty in-memory store (defaults + migrations)."""
    return load_state(settings, store)
