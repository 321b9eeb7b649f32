from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from adventure.fsm import EnginePhase, InputMode


PROMPT_PREFIX = "> "


class ViewModel(BaseModel):
    """Snapshot of the engine handed to the renderer each tick."""

    model_config = ConfigDict(frozen=True)

    mode: InputMode
    phase: EnginePhase
    input_buffer: str = ""

    # Fully revealed entries, oldest first.
    output_log: tuple[str, ...] = Field(default_factory=tuple)

    # Partially revealed text; only set while responding.
    revealing: str | None = None

    @property
    def prompt(self) -> str:
        return PROMPT_PREFIX + self.input_buffer

    @property
    def shows_cursor(self) -> bool:
        return self.mode == InputMode.awaiting_input

    def display_lines(self) -> list[str]:
        entries = list(self.output_log)
        if self.revealing is not None:
            entries.append(self.revealing)

        lines: list[str] = []
        for entry in entries:
            lines.extend(entry.split("\n"))
        return lines


class Renderer(Protocol):
    def render(self, view: ViewModel) -> None:  # pragma: no cover
        ...
