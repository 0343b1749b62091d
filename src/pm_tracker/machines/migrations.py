# src/pm_tracker/machines/migrations.py

from __future__ import annotations

import logging

from ..core.ports import MachineCollection, SaveMachines
from .defaults import DEPRECATED_MACHINE_ID, REQUIRED_MACHINE_ID, REQUIRED_MACHINE_NAME
from .models import new_machine

logger = logging.getLogger(__name__)


def run_migrations(
    machines: MachineCollection,
    active_id: str | None,
    save: SaveMachines | None = None,
) -> str | None:
    """
    One-shot structural fixes applied right after loading.

    Mutates `machines` in place:
    - drops the retired antihaze machine
    - adds the VTI 4 machine if it is missing (never overwrites an existing one)

    `save` is called once if anything changed, never per step. Returns the
    active machine id, re-pointed to the first machine if it named the
    removed one. Running it again on migrated data is a no-op.
    """
    changed = False

    if DEPRECATED_MACHINE_ID in machines:
        del machines[DEPRECATED_MACHINE_ID]
        logger.info("Migration: removed machine %s", DEPRECATED_MACHINE_ID)
        changed = True

    if REQUIRED_MACHINE_ID not in machines:
        machines[REQUIRED_MACHINE_ID] = dict(new_machine(REQUIRED_MACHINE_ID, REQUIRED_MACHINE_NAME))
        logger.info("Migration: added machine %s", REQUIRED_MACHINE_ID)
        changed = True

    if changed and save is not None:
        save(machines)

    if active_id == DEPRECATED_MACHINE_ID:
        return next(iter(machines), None)
    return active_id
