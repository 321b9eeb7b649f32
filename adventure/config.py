from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_CHAR_MS = 30
DEFAULT_TICK_MS = 16


class ConfigError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class PlayerSettings:
    # Seconds per revealed character.
    char_duration: float
    # Minimum seconds per tick of the terminal loop (0 = busy poll).
    tick_interval: float
    log_file: Path | None
    log_level: int


def _ms_from_env(name: str, default: int, *, allow_zero: bool) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default / 1000

    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer number of milliseconds, got {raw!r}") from e

    if value < 0 or (value == 0 and not allow_zero):
        raise ConfigError(f"{name} must be {'>= 0' if allow_zero else '> 0'}, got {value}")
    return value / 1000


def _log_level_from_env(name: str, default: str) -> int:
    raw = os.environ.get(name, default).strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ConfigError(f"{name} must be a logging level name, got {raw!r}")
    return level


def settings_from_env() -> PlayerSettings:
    log_file = os.environ.get("ADVENTURE_LOG_FILE")
    return PlayerSettings(
        char_duration=_ms_from_env("ADVENTURE_CHAR_MS", DEFAULT_CHAR_MS, allow_zero=False),
        tick_interval=_ms_from_env("ADVENTURE_TICK_MS", DEFAULT_TICK_MS, allow_zero=True),
        # stderr belongs to curses while playing, so logs only go to a file.
        log_file=Path(log_file) if log_file else None,
        log_level=_log_level_from_env("ADVENTURE_LOG_LEVEL", "INFO"),
    )


def load_env_file(path: Path | None = None) -> bool:
    """Load a `.env` file without overriding variables already set.

    Defaults to `.env` in the current working directory.
    """

    from dotenv import load_dotenv

    env_path = path or Path.cwd() / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(dotenv_path=env_path, override=False)


def configure_logging(settings: PlayerSettings) -> None:
    if settings.log_file is None:
        return
    logging.basicConfig(
        filename=str(settings.log_file),
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
