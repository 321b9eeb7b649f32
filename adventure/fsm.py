from __future__ import annotations

from enum import StrEnum

from statemachine import State, StateMachine


class EnginePhase(StrEnum):
    update = "update"
    responding = "responding"
    awaiting_external_event = "awaiting_external_event"
    committing_input = "committing_input"
    finished = "finished"


class InputMode(StrEnum):
    """What a key press means right now (also drives prompt styling)."""

    disabled = "disabled"
    awaiting_input = "awaiting_input"
    awaiting_any_key = "awaiting_any_key"


class PlaybackFSM(StateMachine):
    """FSM guarding the playback engine's phase transitions.

    The engine mutates its own state; the FSM only allows or denies the move:
    - update -> responding (text) | awaiting_external_event (input/pause)
    - responding -> update once the text is fully revealed
    - awaiting_external_event -> committing_input (enter) | update (any key on pause)
    - committing_input -> update
    - any phase -> finished (story exhausted or quit key)
    """

    updating = State(EnginePhase.update.value, value=EnginePhase.update.value, initial=True)
    responding = State(EnginePhase.responding.value, value=EnginePhase.responding.value)
    awaiting_external_event = State(
        EnginePhase.awaiting_external_event.value,
        value=EnginePhase.awaiting_external_event.value,
    )
    committing_input = State(EnginePhase.committing_input.value, value=EnginePhase.committing_input.value)
    finished = State(EnginePhase.finished.value, value=EnginePhase.finished.value, final=True)

    respond = updating.to(responding)
    await_key = updating.to(awaiting_external_event)
    reveal_done = responding.to(updating)
    submit_input = awaiting_external_event.to(committing_input)
    resume = awaiting_external_event.to(updating)
    input_committed = committing_input.to(updating)
    finish = (
        updating.to(finished)
        | responding.to(finished)
        | awaiting_external_event.to(finished)
        | committing_input.to(finished)
    )

    def __init__(self, phase: EnginePhase = EnginePhase.update):
        super().__init__(start_value=phase.value)

    @property
    def phase(self) -> EnginePhase:
        return EnginePhase(str(self.current_state.value))

    @property
    def is_finished(self) -> bool:
        return self.phase == EnginePhase.finished
