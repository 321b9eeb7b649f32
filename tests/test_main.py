from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import pytest

import adventure.main as main_mod
from adventure.parser import UnknownCommand


@pytest.fixture()
def session_log(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Replace the curses session with one that records enter/exit."""

    log: list[str] = []

    @contextmanager
    def _fake_session() -> Iterator[object]:
        log.append("enter")
        try:
            yield object()
        finally:
            log.append("exit")

    monkeypatch.setattr(main_mod, "terminal_session", _fake_session)
    monkeypatch.setattr(main_mod, "CursesScreen", lambda stdscr: object())
    monkeypatch.setattr(main_mod, "load_env_file", lambda: False)
    return log


def test_parse_error_aborts_before_terminal(
    monkeypatch: pytest.MonkeyPatch, session_log: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    def _bad_story():  # type: ignore[no-untyped-def]
        raise UnknownCommand("FROB", position=0, source="+FROB")

    monkeypatch.setattr(main_mod, "load_bundled_story", _bad_story)

    assert main_mod.main() == 1
    assert session_log == []
    assert "Unknown command: +FROB" in capsys.readouterr().err


def test_runtime_error_restores_terminal_then_reports(
    monkeypatch: pytest.MonkeyPatch, session_log: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    def _boom(engine, **kwargs):  # type: ignore[no-untyped-def]
        raise OSError("screen too small")

    monkeypatch.setattr(main_mod, "run_playback", _boom)

    assert main_mod.main() == 1
    assert session_log == ["enter", "exit"]
    assert "screen too small" in capsys.readouterr().err


def test_normal_run_plays_bundled_story(monkeypatch: pytest.MonkeyPatch, session_log: list[str]) -> None:
    seen: dict[str, object] = {}

    def _play(engine, **kwargs):  # type: ignore[no-untyped-def]
        seen["events"] = len(engine.events)
        seen["tick_interval"] = kwargs["tick_interval"]
        return engine.store

    monkeypatch.setenv("ADVENTURE_TICK_MS", "0")
    monkeypatch.setattr(main_mod, "run_playback", _play)

    assert main_mod.main() == 0
    assert session_log == ["enter", "exit"]
    assert seen["events"] > 0  # type: ignore[operator]
    assert seen["tick_interval"] == 0


def test_bad_config_exits_before_terminal(
    monkeypatch: pytest.MonkeyPatch, session_log: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("ADVENTURE_CHAR_MS", "soon")

    assert main_mod.main() == 1
    assert session_log == []
    assert "ADVENTURE_CHAR_MS" in capsys.readouterr().err
