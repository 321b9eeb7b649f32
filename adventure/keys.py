from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class KeyKind(StrEnum):
    char = "char"
    backspace = "backspace"
    enter = "enter"
    quit = "quit"
    other = "other"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """A classified key press.

    `char` is only set for `KeyKind.char`.
    """

    kind: KeyKind
    char: str | None = None

    @staticmethod
    def of_char(char: str) -> "KeyEvent":
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        return KeyEvent(kind=KeyKind.char, char=char)


BACKSPACE = KeyEvent(KeyKind.backspace)
ENTER = KeyEvent(KeyKind.enter)
QUIT = KeyEvent(KeyKind.quit)
OTHER = KeyEvent(KeyKind.other)


def keys_for_text(text: str) -> list[KeyEvent]:
    """Char key events for every character of `text` (handy for scripted input)."""

    return [KeyEvent.of_char(c) for c in text]


class KeySource(Protocol):
    def poll(self) -> KeyEvent | None:  # pragma: no cover
        """Return the next pending key without blocking, or None."""
        ...
