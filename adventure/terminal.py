from __future__ import annotations

import curses
import logging
import textwrap
from collections.abc import Iterator
from contextlib import contextmanager

from adventure.fsm import InputMode
from adventure.keys import BACKSPACE, ENTER, OTHER, QUIT, KeyEvent
from adventure.view import ViewModel


logger = logging.getLogger(__name__)

# Colour pair ids for the prompt line.
INPUT_PAIR = 1
PAUSE_PAIR = 2

QUIT_KEYS = {curses.KEY_HOME}
ENTER_KEYS = {"\n", "\r", curses.KEY_ENTER}
BACKSPACE_KEYS = {curses.KEY_BACKSPACE, "\x7f", "\x08"}

# Screen events that arrive through get_wch() but are not key presses.
NON_KEY_EVENTS = {curses.KEY_RESIZE, curses.KEY_MOUSE}


def classify_key(raw: int | str) -> KeyEvent:
    """Map a curses `get_wch()` result onto the engine's key kinds.

    Home quits; function keys and control characters other than enter/backspace are `other`.
    """

    if raw in QUIT_KEYS:
        return QUIT
    if raw in ENTER_KEYS:
        return ENTER
    if raw in BACKSPACE_KEYS:
        return BACKSPACE
    if isinstance(raw, str) and len(raw) == 1 and raw.isprintable():
        return KeyEvent.of_char(raw)
    return OTHER


@contextmanager
def terminal_session() -> Iterator[curses.window]:
    """Put the terminal into curses mode and always restore it on the way out."""

    stdscr = curses.initscr()
    try:
        curses.noecho()
        curses.cbreak()
        stdscr.keypad(True)
        stdscr.nodelay(True)
        _init_colours()
        yield stdscr
    finally:
        stdscr.keypad(False)
        curses.nocbreak()
        curses.echo()
        curses.endwin()
        logger.debug("Terminal restored")


def _init_colours() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        logger.debug("Terminal has no default colours; using a black background")
        background = curses.COLOR_BLACK
    curses.init_pair(INPUT_PAIR, curses.COLOR_YELLOW, background)
    curses.init_pair(PAUSE_PAIR, curses.COLOR_GREEN, background)


def _set_cursor(visible: bool) -> None:
    try:
        curses.curs_set(1 if visible else 0)
    except curses.error:
        # Some terminals cannot hide the cursor.
        pass


class CursesScreen:
    """Renders a `ViewModel` and polls keys on a curses window.

    The last row is the prompt; everything above it shows the newest output lines.
    """

    def __init__(self, stdscr: curses.window) -> None:
        self.stdscr = stdscr

    def poll(self) -> KeyEvent | None:
        try:
            raw = self.stdscr.get_wch()
        except curses.error:
            # No key pending (non-blocking mode).
            return None
        if raw in NON_KEY_EVENTS:
            return None
        return classify_key(raw)

    def render(self, view: ViewModel) -> None:
        height, width = self.stdscr.getmaxyx()
        self.stdscr.erase()

        output_rows = max(0, height - 1)
        lines = wrap_lines(view.display_lines(), width=max(1, width - 1))
        visible = lines[-output_rows:] if output_rows else []
        for row, line in enumerate(visible):
            self.stdscr.addnstr(row, 0, line, max(1, width - 1))

        prompt_row = height - 1
        self.stdscr.addnstr(prompt_row, 0, view.prompt, max(1, width - 1), self._prompt_attr(view.mode))

        _set_cursor(view.shows_cursor)
        if view.shows_cursor:
            self.stdscr.move(prompt_row, min(len(view.prompt), width - 1))

        self.stdscr.refresh()

    @staticmethod
    def _prompt_attr(mode: InputMode) -> int:
        if not curses.has_colors():
            return curses.A_NORMAL
        if mode == InputMode.awaiting_input:
            return curses.color_pair(INPUT_PAIR)
        if mode == InputMode.awaiting_any_key:
            return curses.color_pair(PAUSE_PAIR)
        return curses.A_NORMAL


def wrap_lines(lines: list[str], *, width: int) -> list[str]:
    out: list[str] = []
    for line in lines:
        # Keep blank lines; textwrap drops them.
        out.extend(textwrap.wrap(line, width=width) or [""])
    return out
