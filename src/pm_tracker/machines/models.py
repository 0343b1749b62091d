# src/pm_tracker/machines/models.py

"""
Shapes of the persisted machine collection.

The collection stays plain JSON-compatible dicts in memory (what gets saved
is exactly what gets exported), so these are TypedDicts rather than classes.
Key names are camelCase to stay compatible with files exported by the web app.
"""

from __future__ import annotations

from typing import NotRequired, TypedDict


class Task(TypedDict):
    id: str
    name: str
    freq: str
    freqLabel: str


class CompletionRecord(TypedDict):
    date: str
    nextDue: str
    note: NotRequired[str]


class TaskState(TypedDict):
    nextDue: str | None
    history: list[CompletionRecord]


class Machine(TypedDict):
    id: str
    name: str
    tasks: list[Task]
    state: dict[str, TaskState]
    notes: dict[str, str]


def new_machine(machine_id: str, name: str) -> Machine:
    return {"id": machine_id, "name": name, "tasks": [], "state": {}, "notes": {}}
