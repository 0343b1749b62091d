# src/pm_tracker/schedule/status.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from .dates import days_diff
from .frequency import total_days

logger = logging.getLogger(__name__)


class TaskStatus(StrEnum):
    """
    Urgency of a maintenance task, recomputed on every call.

    Values match the strings the web front end used as CSS classes.
    """

    PENDING = "pending"  # never completed
    OVERDUE = "overdue"
    DUE_SOON = "due-soon"
    OK = "ok"


def soon_window(freq: str) -> int:
    """Days before the due date at which a task turns due-soon."""
    total = total_days(freq)
    if total <= 7:
        return 3
    if total <= 60:
        return 7
    if total <= 180:
        return 14
    return 30


def get_status(
    task: Mapping[str, Any],
    task_states: Mapping[str, Any] | None,
    today: str | None = None,
) -> TaskStatus:
    """
    Classify `task` using the owning machine's state map.

    Boundaries are inclusive: a task exactly `soon_window` days out is due-soon.
    An unreadable nextDue (e.g. from a hand-edited backup) counts as overdue.
    """
    entry = (task_states or {}).get(task["id"])
    next_due = entry.get("nextDue") if entry else None
    if not next_due:
        return TaskStatus.PENDING

    try:
        diff = days_diff(str(next_due), today)
    except ValueError:
        logger.warning("Task %s has unreadable nextDue %r; treating as overdue", task["id"], next_due)
        return TaskStatus.OVERDUE
    if diff < 0:
        return TaskStatus.OVERDUE
    if diff <= soon_window(task.get("freq", "")):
        return TaskStatus.DUE_SOON
    return TaskStatus.OK
