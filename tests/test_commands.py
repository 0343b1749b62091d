# tests/test_commands.py

from __future__ import annotations

import json
from pathlib import Path

from pm_tracker.cli.commands import CommandRegistry, registry
from pm_tracker.machines.gateway import LS_ACTIVE, LS_MACHINES, load_machines


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_commands(state) -> None:
    out = registry.handle(state, "/help") or ""
    for name in ("/tasks", "/done", "/export", "/import", "/machine"):
        assert name in out


def test_machines_and_use(state, store) -> None:
    out = registry.handle(state, "/machines") or ""
    assert "* machine_mustang" in out
    assert "machine_vti4" in out

    assert "VTI 4" in (registry.handle(state, "/use machine_vti4") or "")
    assert state.active_machine_id == "machine_vti4"
    assert store.data[LS_ACTIVE] == "machine_vti4"

    assert "Unknown machine" in (registry.handle(state, "/use machine_ghost") or "")
    assert state.active_machine_id == "machine_vti4"


def test_corrupt_due_date_still_lists(state) -> None:
    state.machines["machine_mustang"]["state"] = {
        "m_1": {"nextDue": "2025-13-01", "history": []},
        "m_5": {"nextDue": "2099-01-01", "history": []},
    }

    tasks_out = registry.handle(state, "/tasks") or ""
    assert "m_1" in tasks_out
    assert "due 2025-13-01 (unreadable date)" in tasks_out
    assert "due Jan 1, 2099" in tasks_out

    machines_out = registry.handle(state, "/machines") or ""
    assert "machine_mustang" in machines_out
    assert "1 overdue" in machines_out


def test_done_persists_and_shows_next_due(state, store) -> None:
    out = registry.handle(state, "/done m_5 2025-01-31") or ""
    assert "Feb 28, 2025" in out
    saved = load_machines(store)
    assert saved["machine_mustang"]["state"]["m_5"]["nextDue"] == "2025-02-28"

    assert "Invalid input" in (registry.handle(state, "/done m_5 2025-02-30") or "")
    assert "Unknown task" in (registry.handle(state, "/done nope") or "")


def test_add_note_remove_flow(state, store) -> None:
    out = registry.handle(state, '/add 2w "Grease rails"') or ""
    assert "m_18" in out
    registry.handle(state, "/note m_18 use the blue grease")
    tasks_out = registry.handle(state, "/tasks") or ""
    assert "Grease rails [2 Weeks] never done" in tasks_out
    assert "note: use the blue grease" in tasks_out

    registry.handle(state, "/remove m_18")
    saved = load_machines(store)["machine_mustang"]
    assert "m_18" not in [t["id"] for t in saved["tasks"]]
    assert "m_18" not in saved["notes"]

    assert "Unknown frequency" in (registry.handle(state, "/add 3x Something") or "")


def test_machine_subcommands(state, store) -> None:
    out = registry.handle(state, "/machine add Laser Cutter") or ""
    assert "machine_lasercutter" in out
    assert state.active_machine_id == "machine_lasercutter"

    registry.handle(state, "/machine rename Laser Cutter 2")
    assert state.machines["machine_lasercutter"]["name"] == "Laser Cutter 2"

    registry.handle(state, "/machine delete machine_lasercutter")
    assert state.active_machine_id == "machine_mustang"
    assert "machine_lasercutter" not in load_machines(store)


def test_export_then_import(state, store, tmp_path: Path) -> None:
    registry.handle(state, "/done m_1 2025-01-01")
    target = tmp_path / "backup.json"
    assert "Exported 2" in (registry.handle(state, f"/export {target}") or "")
    data = json.loads(target.read_text("utf-8"))
    assert data["deviceId"] == state.device_id

    registry.handle(state, "/done m_1 2025-01-08")
    emitted: list[str] = []
    out = registry.handle(state, f"/import {target}", emit=emitted.append) or ""
    assert "Imported 2 machines" in out
    assert emitted
    assert state.machines["machine_mustang"]["state"]["m_1"]["nextDue"] == "2025-01-08"
    assert json.loads(store.data[LS_MACHINES]) == state.machines


def test_export_default_path(state, settings) -> None:
    out = registry.handle(state, "/export") or ""
    assert str(settings.backup_dir) in out
    assert list(Path(settings.backup_dir).glob("pm-tracker-backup-*.json"))


def test_import_reports_bad_files(state, tmp_path: Path) -> None:
    empty = tmp_path / "empty.json"
    empty.write_text("", "utf-8")
    assert "empty" in (registry.handle(state, f"/import {empty}") or "")

    bad = tmp_path / "bad.json"
    bad.write_text("{oops", "utf-8")
    assert "not valid JSON" in (registry.handle(state, f"/import {bad}") or "")

    assert "Cannot read" in (registry.handle(state, f"/import {tmp_path / 'missing.json'}") or "")
