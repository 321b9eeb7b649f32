from __future__ import annotations

import logging
import time
from collections.abc import Callable

from adventure.engine import PlaybackEngine
from adventure.game_store import GameStore
from adventure.keys import KeySource
from adventure.view import Renderer


logger = logging.getLogger(__name__)


def run_tick(*, engine: PlaybackEngine, renderer: Renderer, keys: KeySource) -> bool:
    """Run a single tick: step, render, then poll at most one key.

    Returns False once playback has finished.
    """

    engine.step()
    if engine.finished:
        return False

    renderer.render(engine.view())

    key = keys.poll()
    if key is not None:
        engine.handle_key(key)
    return not engine.finished


def run_playback(
    engine: PlaybackEngine,
    *,
    renderer: Renderer,
    keys: KeySource,
    tick_interval: float = 0.0,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> GameStore:
    """Drive `engine` until the story ends or the player quits.

    With `tick_interval` > 0, each tick is padded out to that many seconds;
    with 0 the loop polls as fast as it can. Renderer and key source errors propagate.
    """

    ticks = 0
    while True:
        tick_started = clock()
        ticks += 1
        if not run_tick(engine=engine, renderer=renderer, keys=keys):
            break

        if tick_interval > 0:
            remaining = tick_interval - (clock() - tick_started)
            if remaining > 0:
                sleep(remaining)

    logger.info("Playback ended after %d ticks", ticks)
    return engine.store
