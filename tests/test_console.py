# tests/test_console.py

from __future__ import annotations

from collections.abc import Iterator

from pm_tracker.connectors.console_connector import run_console_loop


def _feed(monkeypatch, lines: list[str]) -> None:
    it: Iterator[str] = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_console_runs_commands_until_exit(monkeypatch, capsys, state) -> None:
    _feed(monkeypatch, ["", "hello", "/done m_1 2025-01-01", "/exit", "/tasks"])
    run_console_loop(state)
    out = capsys.readouterr().out
    assert "Try /help" in out
    assert "Next due Jan 8, 2025" in out
    # nothing after /exit is handled
    assert "Mustang tasks:" not in out


def test_console_survives_crashing_command(monkeypatch, capsys, state) -> None:
    def boom(state, args):
        raise RuntimeError("boom")

    from pm_tracker.cli.commands import registry

    registry.register("boom", boom, "test only")
    try:
        _feed(monkeypatch, ["/boom", "/device"])
        run_console_loop(state)
    finally:
        registry._handlers.pop("boom", None)
        registry._help.pop("boom", None)

    out = capsys.readouterr().out
    assert "Internal error" in out
    assert state.device_id in out
