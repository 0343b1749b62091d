# src/pm_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage swappable and lets tests use an in-memory fake.
"""

from typing import Any, Callable, Protocol

MachineCollection = dict[str, dict[str, Any]]
# machine_id -> {"id", "name", "tasks", "state", "notes"} (JSON-shaped).

SaveMachines = Callable[[MachineCollection], None]


class KeyValueStore(Protocol):
    """
    String key -> string value storage (localStorage semantics).

    get_item returns None for a missing key. Each set_item replaces the whole value.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...
