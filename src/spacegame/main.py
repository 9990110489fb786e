"""Terminal front-end — plays the space grid game on stdin/stdout.

Usage:
    spacegame --seed 42
    python -m spacegame.main --log-level DEBUG

Commands (one per line): w/a/s/d or up/left/down/right, ``wait`` to let a
turn pass without moving, ``q`` to quit.
"""

from __future__ import annotations

import argparse
import queue
import sys
from typing import TextIO

from loguru import logger

from spacegame.comms.event_bus import EventBus
from spacegame.config import GameSettings
from spacegame.display import EventBusDisplay, render_ascii
from spacegame.simulation.engine import TurnEngine
from spacegame.simulation.entities import Direction
from spacegame.simulation.errors import SpaceGameError
from spacegame.simulation.game_mode import GameState

_KEYMAP: dict[str, Direction] = {
    "w": Direction.UP,
    "a": Direction.LEFT,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
}

_QUIT = {"q", "quit", "exit"}


def parse_command(line: str) -> Direction | None:
    """Map an input line to a direction; None means "wait a turn".

    Raises ValueError for anything unrecognised.
    """
    cmd = line.strip().lower()
    if cmd in ("", "wait", "."):
        return None
    if cmd in _KEYMAP:
        return _KEYMAP[cmd]
    direction = Direction.parse(cmd)
    if direction is Direction.NONE:
        return None
    return direction


def _announce_levels(events: queue.Queue, out: TextIO) -> None:
    while True:
        try:
            msg = events.get_nowait()
        except queue.Empty:
            return
        out.write(f"LEVEL CLEARED ({msg['data']['levels_cleared']} total)\n")


def run(
    engine: TurnEngine,
    display: EventBusDisplay,
    bus: EventBus,
    lines: TextIO,
    out: TextIO,
) -> GameState:
    """Read commands from *lines* until quit, EOF or game over."""
    levels = bus.subscribe("level_cleared")
    engine.start()
    out.write(render_ascii(display.last_snapshot) + "\n")

    for line in lines:
        if line.strip().lower() in _QUIT:
            logger.info("Player quit")
            break
        try:
            direction = parse_command(line)
        except ValueError as e:
            out.write(f"{e}\n")
            continue

        if direction is None:
            state = engine.do_turn()
        else:
            state = engine.move_player(direction)
        _announce_levels(levels, out)
        out.write(render_ascii(display.last_snapshot) + "\n")

        if state is GameState.GAME_OVER:
            out.write(
                f"GAME OVER after clearing {engine.levels_cleared} level(s)\n"
            )
            break
    return engine.state


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Space grid game (terminal)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--log-level", type=str, default=None, help="Loguru level")
    args = parser.parse_args(argv)

    config = GameSettings()
    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})

    logger.remove()
    logger.add(sys.stderr, level=(args.log_level or config.log_level).upper())

    bus = EventBus()
    display = EventBusDisplay(bus)
    engine = TurnEngine(display=display, config=config, event_bus=bus)

    try:
        state = run(engine, display, bus, sys.stdin, sys.stdout)
    except SpaceGameError as e:
        logger.error(f"Engine failure: {e}")
        return 1
    return 0 if state is not GameState.GAME_OVER else 2


if __name__ == "__main__":
    sys.exit(main())
