"""SpawnPool — free coordinates an entity can be placed on this level.

The pool is built once per level from the grid's SPACE tiles (column-major
order) and drained without replacement: every placement removes its
coordinate, so two entities placed from the same pool never share a tile.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Iterable

from .entities import (
    ASTEROID_DIRECTIONS,
    Alien,
    Asteroid,
    Player,
)
from .errors import SpawnPoolExhausted
from .grid import TileType

if TYPE_CHECKING:
    from .grid import Grid


class SpawnPool:
    """Ordered collection of spawn-eligible coordinates."""

    def __init__(self, coordinates: Iterable[tuple[int, int]] = ()) -> None:
        self._coords: list[tuple[int, int]] = list(coordinates)

    @classmethod
    def from_grid(
        cls,
        grid: Grid,
        exclude: Iterable[tuple[int, int]] = (),
    ) -> SpawnPool:
        """Collect every SPACE coordinate of *grid* not listed in *exclude*."""
        blocked = set(exclude)
        return cls(c for c in grid.coordinates_of(TileType.SPACE) if c not in blocked)

    def __len__(self) -> int:
        return len(self._coords)

    def __contains__(self, coord: object) -> bool:
        return coord in self._coords

    def coordinates(self) -> list[tuple[int, int]]:
        return list(self._coords)

    def draw(self, rng: random.Random) -> tuple[int, int]:
        """Remove and return a uniformly chosen coordinate."""
        if not self._coords:
            raise SpawnPoolExhausted("No free coordinates left to spawn on")
        return self._coords.pop(rng.randrange(len(self._coords)))

    # -- Entity factories ---------------------------------------------------

    def spawn_player(self, rng: random.Random, hull: int) -> Player:
        x, y = self.draw(rng)
        return Player(hull_strength=hull, x=x, y=y)

    def place_player(self, rng: random.Random, player: Player) -> None:
        """Re-roll an existing player's position, keeping its hull."""
        player.set_position(*self.draw(rng))

    def spawn_aliens(self, rng: random.Random, count: int, hull: int) -> list[Alien]:
        aliens = []
        for _ in range(count):
            x, y = self.draw(rng)
            aliens.append(Alien(hull_strength=hull, x=x, y=y))
        return aliens

    def spawn_asteroids(self, rng: random.Random, count: int) -> list[Asteroid]:
        asteroids = []
        for _ in range(count):
            x, y = self.draw(rng)
            direction = ASTEROID_DIRECTIONS[rng.randrange(len(ASTEROID_DIRECTIONS))]
            asteroids.append(Asteroid(x=x, y=y, direction=direction))
        return asteroids
