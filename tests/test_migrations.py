# tests/test_migrations.py

from __future__ import annotations

import copy

from pm_tracker.machines.migrations import run_migrations

from .fakes import SaveRecorder, machine


def test_removes_antihaze() -> None:
    machines = {
        "machine_antihaze": machine("machine_antihaze", "PMMA Antihaze"),
        "machine_mustang": machine("machine_mustang", "Mustang"),
    }
    run_migrations(machines, "machine_mustang")
    assert "machine_antihaze" not in machines
    assert "machine_mustang" in machines


def test_adds_missing_vti4() -> None:
    machines = {"machine_mustang": machine("machine_mustang", "Mustang")}
    run_migrations(machines, "machine_mustang")
    assert machines["machine_vti4"] == {
        "id": "machine_vti4",
        "name": "VTI 4",
        "tasks": [],
        "state": {},
        "notes": {},
    }


def test_existing_vti4_is_not_overwritten() -> None:
    vti4 = machine("machine_vti4", "VTI 4", tasks=[{"id": "custom"}])
    machines = {"machine_mustang": machine("machine_mustang"), "machine_vti4": vti4}
    run_migrations(machines, "machine_mustang")
    assert machines["machine_vti4"]["tasks"] == [{"id": "custom"}]


def test_save_called_once_for_several_changes() -> None:
    machines = {
        "machine_antihaze": machine("machine_antihaze"),
        "machine_mustang": machine("machine_mustang"),
    }
    save = SaveRecorder()
    run_migrations(machines, "machine_mustang", save)
    assert len(save.calls) == 1
    assert set(save.calls[0]) == {"machine_mustang", "machine_vti4"}


def test_no_save_when_nothing_changed() -> None:
    machines = {"machine_mustang": machine("machine_mustang"), "machine_vti4": machine("machine_vti4")}
    save = SaveRecorder()
    assert run_migrations(machines, "machine_mustang", save) == "machine_mustang"
    assert save.calls == []


def test_active_antihaze_is_repointed() -> None:
    machines = {
        "machine_antihaze": machine("machine_antihaze"),
        "machine_mustang": machine("machine_mustang"),
    }
    assert run_migrations(machines, "machine_antihaze") == "machine_mustang"


def test_only_antihaze_leaves_a_non_empty_collection() -> None:
    machines = {"machine_antihaze": machine("machine_antihaze")}
    new_active = run_migrations(machines, "machine_antihaze")
    assert list(machines) == ["machine_vti4"]
    assert new_active == "machine_vti4"


def test_idempotent() -> None:
    machines = {
        "machine_antihaze": machine("machine_antihaze"),
        "machine_mustang": machine("machine_mustang"),
    }
    save = SaveRecorder()
    active = run_migrations(machines, "machine_antihaze", save)
    after_first = copy.deepcopy(machines)

    assert run_migrations(machines, active, save) == active
    assert machines == after_first
    assert len(save.calls) == 1
