"""Display collaborators — where snapshots go after each turn.

``EventBusDisplay`` forwards snapshots onto an EventBus as ``snapshot``
events so any number of observers can draw them.  ``render_ascii`` turns
a snapshot into a text frame for the terminal front-end.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from spacegame.simulation.grid import TileType

if TYPE_CHECKING:
    from spacegame.comms.event_bus import EventBus
    from spacegame.simulation.snapshot import Snapshot


_TILE_GLYPHS: dict[TileType, str] = {
    TileType.SPACE: ".",
    TileType.BLACK_HOLE: "@",
    TileType.PULSAR_ACTIVE: "*",
    TileType.PULSAR_INACTIVE: "o",
}

# Drawn over tiles, highest priority last
_PLAYER_GLYPH = "P"
_ALIEN_GLYPH = "A"
_ASTEROID_GLYPH = "#"


class EventBusDisplay:
    """Publishes every snapshot on an EventBus."""

    def __init__(self, event_bus: EventBus) -> None:
        self._event_bus = event_bus
        self.last_snapshot: Snapshot | None = None

    def publish_snapshot(self, snapshot: Snapshot) -> None:
        self.last_snapshot = snapshot
        self._event_bus.publish("snapshot", snapshot.to_dict())


def render_ascii(snapshot: Snapshot) -> str:
    """Render *snapshot* as rows of glyphs plus a status line."""
    cells = [
        [_TILE_GLYPHS[snapshot.tile_at(x, y)] for x in range(snapshot.width)]
        for y in range(snapshot.height)
    ]
    for rock in snapshot.asteroids:
        if rock is not None:
            cells[rock.y][rock.x] = _ASTEROID_GLYPH
    for alien in snapshot.aliens:
        if alien is not None:
            cells[alien.y][alien.x] = _ALIEN_GLYPH
    cells[snapshot.player.y][snapshot.player.x] = _PLAYER_GLYPH

    aliens_alive = sum(1 for a in snapshot.aliens if a is not None)
    status = (
        f"hull {snapshot.player.hull_strength} | "
        f"level {snapshot.levels_cleared + 1} | "
        f"points {snapshot.points_this_level} | "
        f"aliens {aliens_alive} | "
        f"turn {snapshot.turn_number} | {snapshot.state}"
    )
    return "\n".join("".join(row) for row in cells) + "\n" + status
