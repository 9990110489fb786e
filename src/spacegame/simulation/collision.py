"""CollisionSystem — same-tile contacts between the player and others.

One ``resolve()`` call is a single pass over both entity collections:

  - every live asteroid on the player's tile is collected (slot emptied,
    one point each)
  - every live alien on the player's tile takes the player's ram damage
    and is removed once its hull reaches zero

Empty slots are skipped.  Several entities can share the player's tile;
all of them are processed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entities import Alien, Asteroid, EntitySlots, Player


@dataclass
class CollisionReport:
    """What a single collision pass changed."""

    points: int = 0
    aliens_hit: list[int] = field(default_factory=list)
    aliens_destroyed: list[int] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (self.points or self.aliens_hit)


class CollisionSystem:
    """Resolves player contacts with asteroids and aliens."""

    def __init__(self, attack_damage: int = 20) -> None:
        self.attack_damage = attack_damage

    def resolve(
        self,
        player: Player,
        asteroids: EntitySlots[Asteroid],
        aliens: EntitySlots[Alien],
    ) -> CollisionReport:
        report = CollisionReport()

        for index, _asteroid in asteroids.at(player.x, player.y):
            asteroids.clear(index)
            report.points += 1

        for index, alien in aliens.at(player.x, player.y):
            report.aliens_hit.append(index)
            if alien.apply_damage(self.attack_damage):
                aliens.clear(index)
                report.aliens_destroyed.append(index)

        return report
