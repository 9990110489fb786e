"""Entities — the player ship, alien ships and asteroids.

Entities are flat dataclasses carrying only intrinsic state (hull and
coordinates, plus a drift direction for asteroids).  Rules live in the
resolver and scheduler modules, not on the entities.

Aliens and asteroids are held in ``EntitySlots``: a fixed-length sequence
where a removed entity leaves an explicit empty slot.  Slots are never
backfilled within a level; ``live()`` skips empty slots so callers never
touch a missing entity.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterable, Iterator, TypeVar


class Direction(Enum):
    """Movement direction; ``NONE`` marks a stationary asteroid."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    NONE = (0, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Look up a direction by case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}") from None


# Draw tables: index -> direction for rng.randrange(len(table))
ASTEROID_DIRECTIONS: tuple[Direction, ...] = (
    Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT, Direction.NONE,
)
ALIEN_DIRECTIONS: tuple[Direction, ...] = (
    Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP,
)


@dataclass
class Player:
    """The player's ship.  One instance per game, kept across levels."""

    hull_strength: int
    x: int
    y: int

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    def set_position(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    @property
    def destroyed(self) -> bool:
        return self.hull_strength < 1

    def apply_damage(self, amount: int) -> None:
        self.hull_strength -= amount

    def to_dict(self) -> dict:
        return {"hull_strength": self.hull_strength, "x": self.x, "y": self.y}


@dataclass
class Alien:
    """A roaming alien ship."""

    hull_strength: int
    x: int
    y: int

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    def set_position(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def apply_damage(self, amount: int) -> bool:
        """Apply *amount* damage.  Returns True if the alien is destroyed."""
        self.hull_strength -= amount
        return self.hull_strength <= 0

    def to_dict(self) -> dict:
        return {"hull_strength": self.hull_strength, "x": self.x, "y": self.y}


@dataclass
class Asteroid:
    """A collectible asteroid drifting in a fixed direction."""

    x: int
    y: int
    direction: Direction = Direction.NONE

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    def set_position(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    @property
    def stationary(self) -> bool:
        return self.direction is Direction.NONE

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "direction": self.direction.name}


E = TypeVar("E", Alien, Asteroid)


class EntitySlots(Generic[E]):
    """Fixed-length sparse collection of entities with explicit empty slots."""

    def __init__(self, entities: Iterable[E] = ()) -> None:
        self._slots: list[E | None] = list(entities)

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, index: int) -> E | None:
        return self._slots[index]

    def is_empty(self, index: int) -> bool:
        return self._slots[index] is None

    def clear(self, index: int) -> None:
        """Empty slot *index*.  The slot stays in place and is never reused."""
        self._slots[index] = None

    def live(self) -> Iterator[tuple[int, E]]:
        """Yield ``(index, entity)`` for every occupied slot."""
        for index, entity in enumerate(self._slots):
            if entity is not None:
                yield index, entity

    def live_count(self) -> int:
        return sum(1 for slot in self._slots if slot is not None)

    def at(self, x: int, y: int) -> list[tuple[int, E]]:
        """Occupied slots whose entity stands on (x, y)."""
        return [(i, e) for i, e in self.live() if e.x == x and e.y == y]

    def occupied(self, x: int, y: int) -> bool:
        return any(e.x == x and e.y == y for _, e in self.live())

    def to_list(self) -> list[dict | None]:
        return [None if slot is None else slot.to_dict() for slot in self._slots]
