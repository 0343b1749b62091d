# src/pm_tracker/machines/backup.py

"""
JSON export/import of the whole machine collection.

Export format (compatible with the web app's backups):
    {"machines": {...}, "exportedAt": "<ISO-8601 UTC>", "deviceId": "PM-...", "app": "pm-tracker"}

Import only requires the "machines" key. A failed import never touches the store.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..core.ports import KeyValueStore, MachineCollection
from .gateway import LS_ACTIVE, resolve_active_id, save_active_id, save_machines
from .migrations import run_migrations

logger = logging.getLogger(__name__)

APP_TAG = "pm-tracker"


class BackupError(ValueError):
    """Base class for user-facing import failures."""


class EmptyBackupError(BackupError):
    def __init__(self) -> None:
        super().__init__("Backup file is empty.")


class InvalidBackupJsonError(BackupError):
    def __init__(self, detail: str = "") -> None:
        msg = "Backup file is not valid JSON."
        super().__init__(f"{msg} ({detail})" if detail else msg)


class MissingMachinesError(BackupError):
    def __init__(self) -> None:
        super().__init__('Backup file has no "machines" data.')


def build_export(
    machines: MachineCollection,
    *,
    device_id: str | None,
    now: datetime | None = None,
) -> dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    return {
        "machines": machines,
        "exportedAt": now.astimezone(timezone.utc).isoformat().replace("+00:00", "Z"),
        "deviceId": device_id,
        "app": APP_TAG,
    }


def default_export_name(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"pm-tracker-backup-{now.strftime('%Y-%m-%d')}.json"


def write_export(path: str | Path, payload: dict[str, Any]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    try:
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    logger.info("Exported %d machines to %s", len(payload.get("machines") or {}), path)
    return path


def parse_import(text: str) -> MachineCollection:
    if not text or not text.strip():
        raise EmptyBackupError()

    try:
        data = json.loads(text)
    except ValueError as exc:
        raise InvalidBackupJsonError(str(exc)) from exc

    if not isinstance(data, dict):
        raise InvalidBackupJsonError("top level is not an object")

    machines = data.get("machines")
    if not isinstance(machines, dict):
        raise MissingMachinesError()
    return machines


def import_backup(text: str, store: KeyValueStore) -> tuple[MachineCollection, str | None]:
    """
    Replace the stored collection with the one in `text`.

    Returns (machines, active_id). The active id is kept when it still exists.
    """
    machines = parse_import(text)
    active_id = run_migrations(machines, store.get_item(LS_ACTIVE))
    save_machines(machines, store)

    active_id = resolve_active_id(machines, active_id)
    save_active_id(active_id, store)
    logger.info("Imported %d machines (active=%s)", len(machines), active_id)
    return machines, active_id
