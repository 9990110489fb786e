"""Grid — the toroidal tile map a level is played on.

Architecture
------------
The grid is a fixed ``width x height`` numpy ``int8`` array indexed
``[x, y]``.  Each cell holds a ``TileType`` value.  Entities never hold a
reference to a tile; they carry coordinates and ask the grid.

Generation draws exactly one uniform value per cell, column-major
(x outer, y inner), and classifies it against nested thresholds, most
specific first::

    r < pulsar_chance / 2   -> PULSAR_INACTIVE
    r < pulsar_chance       -> PULSAR_ACTIVE
    r < black_hole_chance   -> BLACK_HOLE
    otherwise               -> SPACE

Cells are independent, so there is no connectivity guarantee.  The engine
guards against unplayable maps by checking spawn pool capacity.

Pulsar toggling is probabilistic: one draw per candidate tile, so a
single activation pass flips roughly half of the inactive pulsars.
"""

from __future__ import annotations

import random
from enum import IntEnum
from typing import Iterator

import numpy as np


class TileType(IntEnum):
    SPACE = 0
    BLACK_HOLE = 1
    PULSAR_ACTIVE = 2
    PULSAR_INACTIVE = 3


class Grid:
    """Tile map of one level."""

    def __init__(self, tiles: np.ndarray) -> None:
        if tiles.ndim != 2:
            raise ValueError(f"Grid needs a 2D tile array, got shape {tiles.shape}")
        self._tiles = tiles.astype(np.int8, copy=True)

    @classmethod
    def generate(
        cls,
        rng: random.Random,
        width: int = 25,
        height: int = 18,
        black_hole_chance: float = 0.07,
        pulsar_chance: float = 0.03,
    ) -> Grid:
        """Build a fresh random grid, one draw per cell."""
        tiles = np.full((width, height), TileType.SPACE, dtype=np.int8)
        half_pulsar = pulsar_chance / 2
        for x in range(width):
            for y in range(height):
                r = rng.random()
                if r < half_pulsar:
                    tiles[x, y] = TileType.PULSAR_INACTIVE
                elif r < pulsar_chance:
                    tiles[x, y] = TileType.PULSAR_ACTIVE
                elif r < black_hole_chance:
                    tiles[x, y] = TileType.BLACK_HOLE
        return cls(tiles)

    @classmethod
    def filled(cls, width: int, height: int, tile: TileType = TileType.SPACE) -> Grid:
        """Uniform grid, mostly useful for scripted scenarios."""
        return cls(np.full((width, height), tile, dtype=np.int8))

    # -- Queries --------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._tiles.shape[0]

    @property
    def height(self) -> int:
        return self._tiles.shape[1]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> TileType:
        return TileType(int(self._tiles[x, y]))

    def is_black_hole(self, x: int, y: int) -> bool:
        return bool(self._tiles[x, y] == TileType.BLACK_HOLE)

    def count(self, tile: TileType) -> int:
        return int(np.count_nonzero(self._tiles == tile))

    def coordinates_of(self, tile: TileType) -> Iterator[tuple[int, int]]:
        """Yield coordinates holding *tile*, column-major."""
        for x, y in np.argwhere(self._tiles == tile):
            yield int(x), int(y)

    def neighborhood(self, x: int, y: int) -> Iterator[tuple[int, int]]:
        """Yield the 3x3 block centred on (x, y), clipped at the edges."""
        for nx in range(x - 1, x + 2):
            for ny in range(y - 1, y + 2):
                if self.in_bounds(nx, ny):
                    yield nx, ny

    # -- Mutation -------------------------------------------------------------

    def set_tile(self, x: int, y: int, tile: TileType) -> None:
        self._tiles[x, y] = tile

    def toggle_pulsars(
        self,
        rng: random.Random,
        source: TileType,
        target: TileType,
        chance: float = 0.5,
    ) -> int:
        """Flip each *source* tile to *target* with probability *chance*.

        Returns the number of tiles flipped.
        """
        flipped = 0
        for x, y in list(self.coordinates_of(source)):
            if rng.random() < chance:
                self._tiles[x, y] = target
                flipped += 1
        return flipped

    def activate_pulsars(self, rng: random.Random, chance: float = 0.5) -> int:
        return self.toggle_pulsars(
            rng, TileType.PULSAR_INACTIVE, TileType.PULSAR_ACTIVE, chance,
        )

    def deactivate_pulsars(self, rng: random.Random, chance: float = 0.5) -> int:
        return self.toggle_pulsars(
            rng, TileType.PULSAR_ACTIVE, TileType.PULSAR_INACTIVE, chance,
        )

    # -- Export ---------------------------------------------------------------

    def snapshot(self) -> np.ndarray:
        """Return a read-only copy of the tile array."""
        view = self._tiles.copy()
        view.flags.writeable = False
        return view
