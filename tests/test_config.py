from __future__ import annotations

import logging
from pathlib import Path

import pytest

from adventure.config import ConfigError, load_env_file, settings_from_env


def test_defaults() -> None:
    s = settings_from_env()

    assert s.char_duration == pytest.approx(0.03)
    assert s.tick_interval == pytest.approx(0.016)
    assert s.log_file is None
    assert s.log_level == logging.INFO


def test_values_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ADVENTURE_CHAR_MS", "50")
    monkeypatch.setenv("ADVENTURE_TICK_MS", "0")
    monkeypatch.setenv("ADVENTURE_LOG_FILE", str(tmp_path / "play.log"))
    monkeypatch.setenv("ADVENTURE_LOG_LEVEL", "debug")

    s = settings_from_env()

    assert s.char_duration == pytest.approx(0.05)
    assert s.tick_interval == 0
    assert s.log_file == tmp_path / "play.log"
    assert s.log_level == logging.DEBUG


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("ADVENTURE_CHAR_MS", "fast"),
        ("ADVENTURE_CHAR_MS", "0"),
        ("ADVENTURE_TICK_MS", "-1"),
        ("ADVENTURE_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError) as e:
        settings_from_env()
    assert name in str(e.value)


def test_env_file_does_not_override_real_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("ADVENTURE_CHAR_MS=70\nADVENTURE_TICK_MS=5\n", encoding="utf-8")
    monkeypatch.setenv("ADVENTURE_TICK_MS", "1")

    assert load_env_file(env_path)
    s = settings_from_env()

    assert s.char_duration == pytest.approx(0.07)
    assert s.tick_interval == pytest.approx(0.001)


def test_missing_env_file_is_skipped(tmp_path: Path) -> None:
    assert load_env_file(tmp_path / "absent.env") is False
