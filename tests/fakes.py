# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pm_tracker.core.ports import KeyValueStore, MachineCollection


@dataclass(slots=True)
class FakeKeyValueStore(KeyValueStore):
    """
    In-memory KeyValueStore (localStorage stand-in) for unit tests.

    Records every write so tests can assert how often the store was touched.
    """

    data: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.data[key] = str(value)
        self.writes.append(key)

    def remove_item(self, key: str) -> None:
        self.data.pop(key, None)


class SaveRecorder:
    """Callable save hook that keeps a copy of what it was given."""

    def __init__(self) -> None:
        self.calls: list[MachineCollection] = []

    def __call__(self, machines: MachineCollection) -> None:
        self.calls.append(dict(machines))


def machine(machine_id: str, name: str | None = None, **extra: Any) -> dict[str, Any]:
    m: dict[str, Any] = {"id": machine_id, "name": name or machine_id, "tasks": [], "state": {}, "notes": {}}
    m.update(extra)
    return m
