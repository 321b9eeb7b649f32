from __future__ import annotations

from pathlib import Path

from adventure.core.events import Story
from adventure.parser import parse_story


DEFAULT_STORY = "entry.story"


class StoryLoadError(RuntimeError):
    pass


def stories_dir() -> Path:
    # adventure/stories.py -> adventure/stories/
    return Path(__file__).resolve().parent / "stories"


def load_story_text(name: str = DEFAULT_STORY) -> str:
    """Load a story bundled in the package `stories/` directory.

    Example:
        load_story_text("entry.story")
    """

    path = stories_dir() / name
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise StoryLoadError(f"Story not found: {path}") from e


def load_bundled_story(name: str = DEFAULT_STORY) -> Story:
    return parse_story(load_story_text(name))
