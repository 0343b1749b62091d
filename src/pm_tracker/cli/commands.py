# src/pm_tracker/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Callable
from pathlib import Path
from typing import cast

from ..core.state import AppState
from ..machines import api
from ..machines.api import MachineError
from ..machines.backup import (
    BackupError,
    build_export,
    default_export_name,
    import_backup,
    write_export,
)
from ..machines.gateway import save_active_id
from ..schedule.dates import format_display
from ..schedule.status import TaskStatus

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

STATUS_MARKS = {
    TaskStatus.OVERDUE: "!!",
    TaskStatus.DUE_SOON: " !",
    TaskStatus.OK: "  ",
    TaskStatus.PENDING: " ?",
}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError:
            parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except (MachineError, BackupError) as exc:
            return str(exc)
        except ValueError as exc:
            logger.debug("Command /%s rejected input: %s", name, exc)
            return f"Invalid input: {exc}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _active(state: AppState) -> dict:
    return api.get_machine(state.machines, state.active_machine_id)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_machines(state: AppState, args: list[str]) -> str:
    lines = ["Machines:"]
    for machine_id, machine in state.machines.items():
        counts = api.status_counts(machine)
        marker = "*" if machine_id == state.active_machine_id else " "
        lines.append(
            f" {marker} {machine_id} - {machine.get('name', machine_id)} "
            f"({len(machine.get('tasks', []))} tasks, "
            f"{counts[TaskStatus.OVERDUE]} overdue, {counts[TaskStatus.DUE_SOON]} due soon)"
        )
    return "\n".join(lines)


def cmd_use(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /use <machine_id>"
    machine = api.get_machine(state.machines, args[0])
    state.active_machine_id = args[0]
    save_active_id(state.active_machine_id, state.store)
    return f"Active machine: {machine.get('name', args[0])}"


def cmd_tasks(state: AppState, args: list[str]) -> str:
    machine = _active(state)
    rows = api.task_rows(machine)
    if not rows:
        return f"{machine.get('name')}: no tasks. Add one with /add <freq> <name>."

    lines = [f"{machine.get('name')} tasks:"]
    for row in rows:
        if row.next_due is None:
            due = "never done"
        elif row.days_left is None:
            due = f"due {row.next_due_display} (unreadable date)"
        elif row.days_left < 0:
            due = f"due {row.next_due_display} ({-row.days_left}d overdue)"
        else:
            due = f"due {row.next_due_display} (in {row.days_left}d)"
        lines.append(f" {STATUS_MARKS[row.status]} {row.task_id:<6} {row.name} [{row.label}] {due}")
        note = machine.get("notes", {}).get(row.task_id)
        if note:
            lines.append(f"        note: {note}")
    return "\n".join(lines)


def cmd_done(state: AppState, args: list[str]) -> str:
    """
    /done <task_id>              -> completed today
    /done <task_id> YYYY-MM-DD   -> completed on that date
    """
    if not args:
        return "Usage: /done <task_id> [YYYY-MM-DD]"
    machine = _active(state)
    done_date = args[1] if len(args) > 1 else None
    next_due = api.complete_task(machine, args[0], done_date)
    state.flush()
    return f"Marked {args[0]} done. Next due {format_display(next_due)}."


def cmd_reset(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /reset <task_id>"
    api.reset_task(_active(state), args[0])
    state.flush()
    return f"Task {args[0]} reset to pending."


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <freq> <name...>  e.g. /add 3mo Replace door seal"""
    if len(args) < 2:
        return "Usage: /add <freq> <name>  (freq like 14d, 2w, 3mo, 1y)"
    task_id = api.add_task(_active(state), " ".join(args[1:]), args[0])
    state.flush()
    return f"Added task {task_id}."


def cmd_remove(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /remove <task_id>"
    api.remove_task(_active(state), args[0])
    state.flush()
    return f"Removed task {args[0]}."


def cmd_note(state: AppState, args: list[str]) -> str:
    """/note <task_id> [text...] (no text clears the note)"""
    if not args:
        return "Usage: /note <task_id> [text]"
    api.set_note(_active(state), args[0], " ".join(args[1:]))
    state.flush()
    return f"Note {'saved' if len(args) > 1 else 'cleared'} for {args[0]}."


def cmd_machine(state: AppState, args: list[str]) -> str:
    """
    /machine add <name>
    /machine rename <name>       (active machine)
    /machine delete <machine_id>
    """
    usage = "Usage: /machine add <name> | /machine rename <name> | /machine delete <machine_id>"
    if len(args) < 2:
        return usage

    sub, rest = args[0].lower(), args[1:]

    if sub == "add":
        machine_id = api.add_machine(state.machines, " ".join(rest))
        state.active_machine_id = machine_id
        state.flush()
        return f"Added machine {machine_id} (now active)."

    if sub == "rename":
        api.rename_machine(state.machines, state.active_machine_id or "", " ".join(rest))
        state.flush()
        return "Machine renamed."

    if sub == "delete":
        api.delete_machine(state.machines, rest[0])
        if state.active_machine_id == rest[0]:
            state.active_machine_id = next(iter(state.machines), None)
        state.flush()
        return f"Deleted machine {rest[0]}."

    return usage


def cmd_export(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if args:
        path = Path(args[0]).expanduser()
    else:
        path = Path(state.settings.backup_dir) / default_export_name()

    payload = build_export(state.machines, device_id=state.device_id)
    written = write_export(path, payload)
    return f"Exported {len(state.machines)} machines to {written}"


def cmd_import(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /import <path>"
    path = Path(args[0]).expanduser()
    try:
        text = path.read_text("utf-8")
    except OSError as exc:
        return f"Cannot read {path}: {exc.strerror or exc}"

    if emit:
        emit(f"Importing {path} (replaces all current data)...")

    machines, active_id = import_backup(text, state.store)
    state.machines = machines
    state.active_machine_id = active_id
    return f"Imported {len(machines)} machines. Active: {active_id}"


def cmd_device(state: AppState, args: list[str]) -> str:
    return f"Device id: {state.device_id}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("machines", cmd_machines, help_text="List machines with overdue/due-soon counts.", aliases=["m"])
registry.register("use", cmd_use, help_text="Switch active machine: /use <machine_id>.")
registry.register("tasks", cmd_tasks, help_text="Show tasks of the active machine with status.", aliases=["t", "ls"])
registry.register("done", cmd_done, help_text="Mark a task done: /done <task_id> [YYYY-MM-DD].")
registry.register("reset", cmd_reset, help_text="Forget completion state: /reset <task_id>.")
registry.register("add", cmd_add, help_text="Add a task: /add <freq> <name>.")
registry.register("remove", cmd_remove, help_text="Remove a task: /remove <task_id>.", aliases=["rm"])
registry.register("note", cmd_note, help_text="Set or clear a task note: /note <task_id> [text].")
registry.register("machine", cmd_machine, help_text="Manage machines: /machine add|rename|delete ...")
registry.register("export", cmd_export, help_text="Write a JSON backup: /export [path].")
registry.register("import", cmd_import, help_text="Restore a JSON backup: /import <path>.")
registry.register("device", cmd_device, help_text="Show this install's device id.")
