# src/pm_tracker/machines/gateway.py

"""
Load/save the machine collection through an injected KeyValueStore.

Store layout (no version field; schema drift is handled by migrations.py):
- LS_MACHINES: JSON object machine_id -> machine
- LS_ACTIVE:   plain active machine id
- LS_DEVICE:   plain device id ("PM-XXXXXXXX")
"""

from __future__ import annotations

import copy
import json
import logging

from ..core.ports import KeyValueStore, MachineCollection
from .defaults import DEFAULT_MACHINES
from .device_id import generate_device_id

logger = logging.getLogger(__name__)

LS_MACHINES = "pmtracker_machines"
LS_ACTIVE = "pmtracker_activemachine"
LS_DEVICE = "pmtracker_deviceid"


def default_machines() -> MachineCollection:
    """Fresh deep copy of the built-in collection."""
    return copy.deepcopy(DEFAULT_MACHINES)  # type: ignore[arg-type]


def load_machines(store: KeyValueStore) -> MachineCollection:
    """
    Read the stored collection.

    Missing, empty or unreadable content falls back to the defaults;
    a corrupt store never raises.
    """
    raw = store.get_item(LS_MACHINES)
    if not raw:
        logger.info("No stored machines; using defaults.")
        return default_machines()

    try:
        data = json.loads(raw)
    except ValueError as exc:
        logger.warning("Corrupt machines entry, resetting to defaults: %s", exc)
        return default_machines()

    if not isinstance(data, dict):
        logger.warning("Stored machines is %s, not an object; resetting to defaults.", type(data).__name__)
        return default_machines()

    logger.debug("Loaded %d machines from store.", len(data))
    return data


def save_machines(machines: MachineCollection, store: KeyValueStore) -> None:
    store.set_item(LS_MACHINES, json.dumps(machines, ensure_ascii=False))


def resolve_active_id(machines: MachineCollection, stored_id: str | None) -> str | None:
    """stored_id if it still names a machine, else the first machine id (or None)."""
    if stored_id and stored_id in machines:
        return stored_id
    fallback = next(iter(machines), None)
    if stored_id:
        logger.debug("Active machine %s is gone; falling back to %s", stored_id, fallback)
    return fallback


def load_active_id(machines: MachineCollection, store: KeyValueStore) -> str | None:
    return resolve_active_id(machines, store.get_item(LS_ACTIVE))


def save_active_id(machine_id: str | None, store: KeyValueStore) -> None:
    if machine_id is None:
        store.remove_item(LS_ACTIVE)
        return
    store.set_item(LS_ACTIVE, machine_id)


def get_or_create_device_id(store: KeyValueStore) -> str:
    device_id = store.get_item(LS_DEVICE)
    if device_id:
        return device_id
    device_id = generate_device_id()
    store.set_item(LS_DEVICE, device_id)
    logger.info("Generated device id %s", device_id)
    return device_id
