from __future__ import annotations

import logging
import math
import time
from collections import deque
from collections.abc import Callable, Iterable
from typing import assert_never

from adventure.core.events import ClearEvent, InputEvent, PauseEvent, StoryEvent, TextEvent
from adventure.fsm import EnginePhase, InputMode, PlaybackFSM
from adventure.game_store import GameStore
from adventure.keys import KeyEvent, KeyKind
from adventure.view import ViewModel


logger = logging.getLogger(__name__)

# Seconds per revealed character.
DEFAULT_CHAR_DURATION = 0.03


class PlaybackEngine:
    """Plays a story back one step at a time.

    A driver calls `step()` once per tick and feeds polled keys to `handle_key()`.
    Nothing here blocks: waiting for a key is just a phase that `step()` leaves alone.
    Text reveal is paced by `clock`, so ticking faster never reveals text faster.
    """

    def __init__(
        self,
        story: Iterable[StoryEvent],
        *,
        char_duration: float = DEFAULT_CHAR_DURATION,
        clock: Callable[[], float] = time.monotonic,
        store: GameStore | None = None,
    ) -> None:
        if char_duration <= 0:
            raise ValueError("char_duration must be positive")

        self.events: deque[StoryEvent] = deque(story)
        self.char_duration = char_duration
        self.clock = clock
        self.store = store if store is not None else GameStore()
        self.fsm = PlaybackFSM()

        self.mode = InputMode.disabled
        self.current_response = ""
        self.reveal_started_at = 0.0
        self.revealed = 0
        self.input_buffer = ""
        self.pending_label: str | None = None
        self.output: list[str] = []

    @property
    def phase(self) -> EnginePhase:
        return self.fsm.phase

    @property
    def finished(self) -> bool:
        return self.fsm.is_finished

    @property
    def revealed_text(self) -> str:
        return self.current_response[: self.revealed]

    def step(self) -> None:
        """Run one phase transition for this tick."""

        phase = self.phase
        if phase == EnginePhase.update:
            self._play_next_event()
        elif phase == EnginePhase.responding:
            self._advance_reveal()
        elif phase == EnginePhase.awaiting_external_event:
            # Busy wait; the driver keeps polling keys.
            pass
        elif phase == EnginePhase.committing_input:
            self._commit_input()
        elif phase == EnginePhase.finished:
            pass
        else:
            assert_never(phase)

    def _play_next_event(self) -> None:
        # Clear never suspends, so keep going until something does.
        while self.events:
            event = self.events.popleft()
            logger.debug("Playing %r", event)

            if isinstance(event, ClearEvent):
                self.output.clear()
                continue

            if isinstance(event, TextEvent):
                self.current_response = event.content
                self.revealed = 0
                self.reveal_started_at = self.clock()
                self.mode = InputMode.disabled
                self.fsm.respond()
            elif isinstance(event, InputEvent):
                self.pending_label = event.label
                self.mode = InputMode.awaiting_input
                self.fsm.await_key()
            elif isinstance(event, PauseEvent):
                self.mode = InputMode.awaiting_any_key
                self.fsm.await_key()
            else:
                assert_never(event)
            return

        logger.info("Story finished")
        self.fsm.finish()

    def _advance_reveal(self) -> None:
        total = len(self.current_response)
        elapsed = max(0.0, self.clock() - self.reveal_started_at)
        self.revealed = min(total, math.floor(elapsed / self.char_duration))

        if self.revealed >= total:
            self.output.append(self.current_response)
            self.revealed = 0
            self.current_response = ""
            self.fsm.reveal_done()

    def _commit_input(self) -> None:
        label = self.pending_label
        if label is None:
            raise RuntimeError("Committing input without a pending label")

        self.store.set_value(label, self.input_buffer)
        logger.info("Stored input for %r", label)

        self.input_buffer = ""
        self.pending_label = None
        self.mode = InputMode.disabled
        self.fsm.input_committed()

    def handle_key(self, key: KeyEvent) -> None:
        """Apply one polled key. The quit key ends playback from any phase."""

        if self.finished:
            return

        if key.kind == KeyKind.quit:
            self.quit()
            return

        if self.phase != EnginePhase.awaiting_external_event:
            return

        mode = self.mode
        if mode == InputMode.awaiting_input:
            self._handle_input_key(key)
        elif mode == InputMode.awaiting_any_key:
            self.mode = InputMode.disabled
            self.fsm.resume()
        elif mode == InputMode.disabled:
            pass
        else:
            assert_never(mode)

    def _handle_input_key(self, key: KeyEvent) -> None:
        if key.kind == KeyKind.char and key.char is not None:
            self.input_buffer += key.char
        elif key.kind == KeyKind.backspace:
            self.input_buffer = self.input_buffer[:-1]
        elif key.kind == KeyKind.enter:
            self.fsm.submit_input()

    def quit(self) -> None:
        if self.finished:
            return
        logger.info("Quit requested in phase %s", self.phase.value)

        self.current_response = ""
        self.revealed = 0
        self.input_buffer = ""
        self.pending_label = None
        self.mode = InputMode.disabled
        self.fsm.finish()

    def view(self) -> ViewModel:
        return ViewModel(
            mode=self.mode,
            phase=self.phase,
            input_buffer=self.input_buffer,
            output_log=tuple(self.output),
            revealing=self.revealed_text if self.phase == EnginePhase.responding else None,
        )
