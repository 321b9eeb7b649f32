from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union


@dataclass(frozen=True, slots=True)
class TextEvent:
    """A block of narrative prose, revealed progressively."""

    content: str


@dataclass(frozen=True, slots=True)
class InputEvent:
    """Ask the player for a line of input and store it under `label`."""

    label: str


@dataclass(frozen=True, slots=True)
class PauseEvent:
    """Wait for any key."""


@dataclass(frozen=True, slots=True)
class ClearEvent:
    """Drop everything shown so far."""


StoryEvent: TypeAlias = Union[TextEvent, InputEvent, PauseEvent, ClearEvent]

# Parsed once at startup; never mutated afterwards.
Story: TypeAlias = tuple[StoryEvent, ...]
