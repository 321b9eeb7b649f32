from __future__ import annotations

import logging
import sys

from adventure.config import ConfigError, configure_logging, load_env_file, settings_from_env
from adventure.engine import PlaybackEngine
from adventure.game_loop import run_playback
from adventure.parser import ParseError
from adventure.stories import StoryLoadError, load_bundled_story
from adventure.terminal import CursesScreen, terminal_session


logger = logging.getLogger(__name__)


def main() -> int:
    load_env_file()
    try:
        settings = settings_from_env()
    except ConfigError as e:
        print(f"text-adventure: {e}", file=sys.stderr)
        return 1
    configure_logging(settings)

    # A story that does not parse never reaches the terminal.
    try:
        story = load_bundled_story()
    except (ParseError, StoryLoadError) as e:
        logger.error("Could not load story: %s", e)
        print(f"text-adventure: {e}", file=sys.stderr)
        return 1

    engine = PlaybackEngine(story, char_duration=settings.char_duration)
    try:
        with terminal_session() as stdscr:
            screen = CursesScreen(stdscr)
            run_playback(engine, renderer=screen, keys=screen, tick_interval=settings.tick_interval)
    except Exception as e:
        # The terminal is restored by now; report on the normal screen.
        logger.exception("Playback failed")
        print(f"text-adventure: {e!r}", file=sys.stderr)
        return 1

    logger.info("Game store at exit: %s", engine.store.as_dict())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
