from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from adventure.core.events import ClearEvent, InputEvent, PauseEvent, Story, StoryEvent, TextEvent


logger = logging.getLogger(__name__)

INLINE_WHITESPACE = " \t"
TRAILING_WHITESPACE = " \t\n"
COMMAND_PREFIX = "+"
ARGUMENT_PREFIX = ":"

# Text runs until a newline that is immediately followed by a command.
TEXT_TERMINATOR = "\n" + COMMAND_PREFIX

ExpectedRule = Literal["command", "argument", "text", "event"]


def _line_and_column(source: str, position: int) -> tuple[int, int]:
    line = source.count("\n", 0, position) + 1
    column = position - (source.rfind("\n", 0, position) + 1) + 1
    return line, column


class ParseError(ValueError):
    """Story markup could not be parsed.

    `position` is a 0-based offset into the source; `line` and `column` are 1-based.
    """

    def __init__(self, message: str, *, position: int, source: str = "") -> None:
        self.message = message
        self.position = position
        self.line, self.column = _line_and_column(source, position)
        super().__init__(f"{message} at line {self.line}, column {self.column}")


class UnknownCommand(ParseError):
    def __init__(self, name: str, *, position: int, source: str = "") -> None:
        self.name = name
        super().__init__(f"Unknown command: {COMMAND_PREFIX}{name}", position=position, source=source)


class MissingArgument(ParseError):
    def __init__(self, command: str, *, position: int, source: str = "") -> None:
        self.command = command
        super().__init__(
            f"Command {COMMAND_PREFIX}{command} requires an argument ({COMMAND_PREFIX}{command}{ARGUMENT_PREFIX}value)",
            position=position,
            source=source,
        )


class StorySyntaxError(ParseError):
    def __init__(self, expected: ExpectedRule, *, position: int, source: str = "") -> None:
        self.expected = expected
        super().__init__(f"Expected {expected}", position=position, source=source)


@dataclass(frozen=True, slots=True)
class CommandSpec:
    name: str
    requires_argument: bool
    build: Callable[[str | None], StoryEvent]


COMMANDS: dict[str, CommandSpec] = {
    "PAUSE": CommandSpec("PAUSE", False, lambda _arg: PauseEvent()),
    "CLEAR": CommandSpec("CLEAR", False, lambda _arg: ClearEvent()),
    "INPUT": CommandSpec("INPUT", True, lambda arg: InputEvent(label=str(arg))),
}


class _StoryParser:
    """Recursive-descent parser over a whole story document.

    Grammar:
        story    = blank* (event (separator event)*)? trailer
        event    = command / text
        command  = "+" [A-Z]+ inline? argument? inline?          (then newline or end)
        argument = ":" inline? (!whitespace .)+
        text     = (!("\\n+") .)+
        separator = inline? "\\n" blank*
        blank    = inline? "\\n"
        trailer  = [ \\t\\n]*
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0

    def story(self) -> Story:
        events: list[StoryEvent] = []
        self._skip_blank_lines()
        while not self._at_trailer():
            events.append(self._event())
            if self._at_trailer():
                break
            self._separator()
        return tuple(events)

    def _event(self) -> StoryEvent:
        if self._peek(COMMAND_PREFIX):
            return self._command()
        return self._text()

    def _command(self) -> StoryEvent:
        start = self.pos
        self.pos += len(COMMAND_PREFIX)

        name_start = self.pos
        while self.pos < len(self.source) and "A" <= self.source[self.pos] <= "Z":
            self.pos += 1
        name = self.source[name_start : self.pos]
        if not name:
            raise StorySyntaxError("command", position=self.pos, source=self.source)

        self._skip_inline()
        argument: str | None = None
        if self._peek(ARGUMENT_PREFIX):
            argument = self._argument()
            self._skip_inline()

        spec = COMMANDS.get(name)
        if spec is None:
            raise UnknownCommand(name, position=start, source=self.source)
        if spec.requires_argument and argument is None:
            raise MissingArgument(name, position=start, source=self.source)

        if not self._at_line_end():
            expected: ExpectedRule = "argument" if argument is None else "event"
            raise StorySyntaxError(expected, position=self.pos, source=self.source)
        return spec.build(argument)

    def _argument(self) -> str:
        self.pos += len(ARGUMENT_PREFIX)
        self._skip_inline()
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] not in TRAILING_WHITESPACE:
            self.pos += 1
        if self.pos == start:
            raise StorySyntaxError("argument", position=self.pos, source=self.source)
        return self.source[start : self.pos]

    def _text(self) -> StoryEvent:
        start = self.pos
        end = self.source.find(TEXT_TERMINATOR, start)
        if end == -1:
            end = len(self.source)

        # Trailing whitespace belongs to the separator (or the trailer at end of document).
        content = self.source[start:end].rstrip(TRAILING_WHITESPACE)
        if not content:
            raise StorySyntaxError("text", position=start, source=self.source)
        self.pos = start + len(content)
        return TextEvent(content=content)

    def _separator(self) -> None:
        self._skip_inline()
        if not self._peek("\n"):
            raise StorySyntaxError("event", position=self.pos, source=self.source)
        self.pos += 1
        self._skip_blank_lines()

    def _skip_inline(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos] in INLINE_WHITESPACE:
            self.pos += 1

    def _skip_blank_lines(self) -> None:
        while True:
            end = self.pos
            while end < len(self.source) and self.source[end] in INLINE_WHITESPACE:
                end += 1
            if end < len(self.source) and self.source[end] == "\n":
                self.pos = end + 1
            else:
                return

    def _peek(self, token: str) -> bool:
        return self.source.startswith(token, self.pos)

    def _at_line_end(self) -> bool:
        return self.pos == len(self.source) or self.source[self.pos] == "\n"

    def _at_trailer(self) -> bool:
        end = self.pos
        while end < len(self.source) and self.source[end] in TRAILING_WHITESPACE:
            end += 1
        return end == len(self.source)


def parse_story(text: str) -> Story:
    """Compile story markup into an ordered tuple of events.

    Pure: the same text always yields an equal story. Raises a `ParseError`
    subclass at the first problem; nothing is returned for a partially valid document.

    Example:
        parse_story("Line one\\n+CLEAR\\nLine two")
        -> (TextEvent("Line one"), ClearEvent(), TextEvent("Line two"))
    """

    story = _StoryParser(text).story()
    logger.debug("Parsed story with %d events", len(story))
    return story
