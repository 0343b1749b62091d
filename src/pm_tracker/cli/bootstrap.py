# src/pm_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- opens the key-value store,
- loads machines, runs migrations and resolves the active machine.
"""

from __future__ import annotations

import logging
from functools import partial

from ..config import get_settings
from ..core.ports import KeyValueStore
from ..core.state import AppState
from ..machines.gateway import get_or_create_device_id, load_active_id, load_machines, save_machines
from ..machines.migrations import run_migrations
from ..storage.kv_store import SqliteKeyValueStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)
    settings.backup_dir.mkdir(parents=True, exist_ok=True)


def load_state(settings, store: KeyValueStore) -> AppState:
    """Load -> migrate -> resolve active machine. Migrations run exactly once here."""
    machines = load_machines(store)
    active_id = load_active_id(machines, store)
    active_id = run_migrations(machines, active_id, partial(save_machines, store=store))

    state = AppState(
        settings=settings,
        store=store,
        machines=machines,
        active_machine_id=active_id,
        device_id=get_or_create_device_id(store),
    )
    logger.info(
        "State loaded: %d machines, active=%s, device=%s",
        len(machines),
        active_id,
        state.device_id,
    )
    return state


def create_initial_state(*, settings=None, store: KeyValueStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings/store injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if store is None:
        store = SqliteKeyValueStore(settings.store_path)

    return load_state(settings, store)
