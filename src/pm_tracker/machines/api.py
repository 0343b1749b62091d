# src/pm_tracker/machines/api.py

"""
High-level operations on machines and their tasks.

Everything mutates the passed collection/machine in place. Persisting is the
caller's job (gateway.save_machines right after the mutation).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from ..core.ports import MachineCollection
from ..schedule.dates import days_diff, format_display, parse_date, today_key
from ..schedule.frequency import creation_label, is_valid_frequency, label_for, next_due_date
from ..schedule.status import TaskStatus, get_status
from .models import new_machine

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"[^a-z0-9]+")
_TASK_NUM_RE = re.compile(r"^(.*)_([0-9]+)$")


class MachineError(ValueError):
    """Operation on an unknown machine/task or an invalid edit."""


@dataclass(slots=True, frozen=True)
class TaskRow:
    """One task as the front end displays it."""

    task_id: str
    name: str
    label: str
    status: TaskStatus
    next_due: str | None
    next_due_display: str | None
    days_left: int | None


# ---- machines ----


def get_machine(machines: MachineCollection, machine_id: str | None) -> dict[str, Any]:
    if not machine_id or machine_id not in machines:
        raise MachineError(f"Unknown machine: {machine_id}")
    return machines[machine_id]


def add_machine(machines: MachineCollection, name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise MachineError("Machine name is required")

    base = "machine_" + (_SLUG_RE.sub("", name.lower()) or "unit")
    machine_id = base
    n = 2
    while machine_id in machines:
        machine_id = f"{base}_{n}"
        n += 1

    machines[machine_id] = dict(new_machine(machine_id, name))
    logger.info("Machine added id=%s name=%s", machine_id, name)
    return machine_id


def rename_machine(machines: MachineCollection, machine_id: str, name: str) -> None:
    name = (name or "").strip()
    if not name:
        raise MachineError("Machine name is required")
    get_machine(machines, machine_id)["name"] = name


def delete_machine(machines: MachineCollection, machine_id: str) -> None:
    get_machine(machines, machine_id)
    if len(machines) <= 1:
        raise MachineError("Cannot delete the last machine")
    del machines[machine_id]
    logger.info("Machine deleted id=%s", machine_id)


# ---- tasks ----


def find_task(machine: dict[str, Any], task_id: str) -> dict[str, Any]:
    for task in machine.get("tasks", []):
        if task.get("id") == task_id:
            return task
    raise MachineError(f"Unknown task: {task_id}")


def _next_task_id(machine: dict[str, Any]) -> str:
    prefix = "t"
    highest = 0
    for task in machine.get("tasks", []):
        m = _TASK_NUM_RE.match(str(task.get("id", "")))
        if not m:
            continue
        prefix = m.group(1)
        highest = max(highest, int(m.group(2)))
    return f"{prefix}_{highest + 1}"


def add_task(
    machine: dict[str, Any],
    name: str,
    freq: str,
    freq_label: str | None = None,
) -> str:
    name = (name or "").strip()
    if not name:
        raise MachineError("Task name is required")
    if not is_valid_frequency(freq):
        raise MachineError(f"Unknown frequency code: {freq}")

    task_id = _next_task_id(machine)
    machine.setdefault("tasks", []).append(
        {"id": task_id, "name": name, "freq": freq, "freqLabel": freq_label or creation_label(freq)}
    )
    logger.info("Task added machine=%s id=%s freq=%s", machine.get("id"), task_id, freq)
    return task_id


def edit_task(
    machine: dict[str, Any],
    task_id: str,
    *,
    name: str | None = None,
    freq: str | None = None,
    freq_label: str | None = None,
) -> None:
    """Replace the task with an edited copy. Completion state is kept as-is."""
    old = find_task(machine, task_id)
    if freq is not None and not is_valid_frequency(freq):
        raise MachineError(f"Unknown frequency code: {freq}")

    new_freq = freq if freq is not None else old["freq"]
    if freq_label is None:
        freq_label = creation_label(new_freq) if freq is not None else old.get("freqLabel", "")

    replacement = {
        "id": task_id,
        "name": (name or "").strip() or old["name"],
        "freq": new_freq,
        "freqLabel": freq_label,
    }
    tasks = machine["tasks"]
    for i, task in enumerate(tasks):
        if task is old:
            tasks[i] = replacement
            break


def remove_task(machine: dict[str, Any], task_id: str) -> None:
    task = find_task(machine, task_id)
    machine["tasks"].remove(task)
    machine.get("state", {}).pop(task_id, None)
    machine.get("notes", {}).pop(task_id, None)


def complete_task(
    machine: dict[str, Any],
    task_id: str,
    done_date: str | None = None,
    note: str | None = None,
) -> str:
    """Record a completion and schedule the next one. Returns the new due date."""
    task = find_task(machine, task_id)
    done = done_date or today_key()
    parse_date(done)

    next_due = next_due_date(done, task["freq"])
    entry = machine.setdefault("state", {}).setdefault(task_id, {"nextDue": None, "history": []})
    record: dict[str, str] = {"date": done, "nextDue": next_due}
    if note:
        record["note"] = note
    entry.setdefault("history", []).append(record)
    entry["nextDue"] = next_due

    logger.info("Task completed machine=%s id=%s done=%s next=%s", machine.get("id"), task_id, done, next_due)
    return next_due


def reset_task(machine: dict[str, Any], task_id: str) -> None:
    find_task(machine, task_id)
    machine.get("state", {}).pop(task_id, None)


def set_note(machine: dict[str, Any], task_id: str, text: str | None) -> None:
    find_task(machine, task_id)
    notes = machine.setdefault("notes", {})
    text = (text or "").strip()
    if text:
        notes[task_id] = text
    else:
        notes.pop(task_id, None)


# ---- render boundary ----


def _due_fields(next_due: str | None, today: str) -> tuple[str | None, int | None]:
    """(display date, days left); an unreadable date is shown raw with no day count."""
    if not next_due:
        return None, None
    try:
        return format_display(next_due), days_diff(next_due, today)
    except (ValueError, IndexError, AttributeError):
        return str(next_due), None


def task_rows(machine: dict[str, Any], today: str | None = None) -> list[TaskRow]:
    today = today or today_key()
    states = machine.get("state", {})
    rows: list[TaskRow] = []
    for task in machine.get("tasks", []):
        entry = states.get(task["id"]) or {}
        next_due = entry.get("nextDue")
        display, days_left = _due_fields(next_due, today)
        rows.append(
            TaskRow(
                task_id=task["id"],
                name=task.get("name", ""),
                label=task.get("freqLabel") or label_for(task.get("freq", "")),
                status=get_status(task, states, today),
                next_due=next_due,
                next_due_display=display,
                days_left=days_left,
            )
        )
    return rows


def status_counts(machine: dict[str, Any], today: str | None = None) -> dict[TaskStatus, int]:
    counts = {status: 0 for status in TaskStatus}
    for row in task_rows(machine, today):
        counts[row.status] += 1
    return counts
