"""Snapshot — read-only picture of the game handed to the display.

Nothing in a snapshot aliases engine state: tiles are a non-writeable
numpy copy and entities are frozen views.  Empty alien/asteroid slots
are kept as ``None`` so slot indices stay stable for the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from .grid import TileType

if TYPE_CHECKING:
    from .entities import Alien, Asteroid, EntitySlots, Player
    from .grid import Grid


@dataclass(frozen=True)
class ShipView:
    hull_strength: int
    x: int
    y: int


@dataclass(frozen=True)
class AsteroidView:
    x: int
    y: int
    direction: str


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Post-turn state of one game."""

    tiles: np.ndarray
    player: ShipView
    aliens: tuple[ShipView | None, ...]
    asteroids: tuple[AsteroidView | None, ...]
    state: str
    levels_cleared: int
    points_this_level: int
    turn_number: int

    @classmethod
    def capture(
        cls,
        grid: Grid,
        player: Player,
        aliens: EntitySlots[Alien],
        asteroids: EntitySlots[Asteroid],
        state: str,
        levels_cleared: int,
        points_this_level: int,
        turn_number: int,
    ) -> Snapshot:
        alien_views = tuple(
            None if alien is None else ShipView(alien.hull_strength, alien.x, alien.y)
            for alien in (aliens[i] for i in range(len(aliens)))
        )
        asteroid_views = tuple(
            None if rock is None else AsteroidView(rock.x, rock.y, rock.direction.name)
            for rock in (asteroids[i] for i in range(len(asteroids)))
        )
        return cls(
            tiles=grid.snapshot(),
            player=ShipView(player.hull_strength, player.x, player.y),
            aliens=alien_views,
            asteroids=asteroid_views,
            state=state,
            levels_cleared=levels_cleared,
            points_this_level=points_this_level,
            turn_number=turn_number,
        )

    @property
    def width(self) -> int:
        return self.tiles.shape[0]

    @property
    def height(self) -> int:
        return self.tiles.shape[1]

    def tile_at(self, x: int, y: int) -> TileType:
        return TileType(int(self.tiles[x, y]))

    def to_dict(self) -> dict:
        """Serialize for EventBus consumers."""
        return {
            "tiles": [
                [TileType(int(self.tiles[x, y])).name for x in range(self.width)]
                for y in range(self.height)
            ],
            "player": {
                "hull_strength": self.player.hull_strength,
                "x": self.player.x,
                "y": self.player.y,
            },
            "aliens": [
                None if a is None else {"hull_strength": a.hull_strength, "x": a.x, "y": a.y}
                for a in self.aliens
            ],
            "asteroids": [
                None if r is None else {"x": r.x, "y": r.y, "direction": r.direction}
                for r in self.asteroids
            ],
            "state": self.state,
            "levels_cleared": self.levels_cleared,
            "points_this_level": self.points_this_level,
            "turn_number": self.turn_number,
        }
