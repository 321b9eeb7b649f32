from __future__ import annotations

import os
from collections import deque
from collections.abc import Iterable, Iterator

import pytest

from adventure.keys import KeyEvent
from adventure.view import ViewModel


@pytest.fixture(autouse=True)
def _hermetic_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop any ADVENTURE_* settings from the developer's shell.

    Config tests set exactly what they need with monkeypatch.setenv. Values a
    test loads from a `.env` file bypass monkeypatch, so they are removed afterwards.
    """

    for name in list(os.environ):
        if name.startswith("ADVENTURE_"):
            monkeypatch.delenv(name, raising=False)
    yield
    for name in list(os.environ):
        if name.startswith("ADVENTURE_"):
            del os.environ[name]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingRenderer:
    def __init__(self) -> None:
        self.views: list[ViewModel] = []

    def render(self, view: ViewModel) -> None:
        self.views.append(view)


class ScriptedKeys:
    """Key source that hands out one scripted key per poll, then nothing."""

    def __init__(self, keys: Iterable[KeyEvent | None] = ()) -> None:
        self.pending: deque[KeyEvent | None] = deque(keys)
        self.polls = 0

    def poll(self) -> KeyEvent | None:
        self.polls += 1
        if not self.pending:
            return None
        return self.pending.popleft()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def scripted_keys() -> type[ScriptedKeys]:
    return ScriptedKeys
