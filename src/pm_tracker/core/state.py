# src/pm_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..machines.gateway import save_active_id, save_machines
from .ports import KeyValueStore, MachineCollection


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    store: KeyValueStore
    machines: MachineCollection = field(default_factory=dict)
    active_machine_id: str | None = None
    device_id: str | None = None

    def active_machine(self) -> dict[str, Any] | None:
        if self.active_machine_id is None:
            return None
        return self.machines.get(self.active_machine_id)

    def flush(self) -> None:
        """Write machines + active id back to the store (call after every mutation)."""
        save_machines(self.machines, self.store)
        save_active_id(self.active_machine_id, self.store)
