"""HazardScheduler — pulsar toggling on the turn clock and pulsar damage.

Pulsars cycle on ``turn_number`` alone (no wall clock):

  - ``turn % cycle == activate_phase``: each inactive pulsar turns on
    with ``toggle_chance``
  - ``turn % cycle == deactivate_phase``: each active pulsar turns off
    with ``toggle_chance``

Damage runs every turn.  Each active pulsar in the 3x3 block around the
player (clipped at the grid edge, not wrapped) costs ``damage`` hull.
Standing on an active pulsar sets hull to exactly zero.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .grid import TileType

if TYPE_CHECKING:
    from .entities import Player
    from .grid import Grid


@dataclass
class PulsarReport:
    """Result of one pulsar damage check."""

    active_in_range: int = 0
    damage: int = 0
    lethal: bool = False


class HazardScheduler:
    """Toggles pulsars on schedule and applies pulsar damage."""

    def __init__(
        self,
        rng: random.Random,
        cycle: int = 20,
        activate_phase: int = 0,
        deactivate_phase: int = 5,
        toggle_chance: float = 0.5,
        damage: int = 10,
    ) -> None:
        self._rng = rng
        self.cycle = cycle
        self.activate_phase = activate_phase
        self.deactivate_phase = deactivate_phase
        self.toggle_chance = toggle_chance
        self.damage = damage

    def is_activation_turn(self, turn_number: int) -> bool:
        return turn_number % self.cycle == self.activate_phase

    def is_deactivation_turn(self, turn_number: int) -> bool:
        return turn_number % self.cycle == self.deactivate_phase

    def schedule(self, grid: Grid, turn_number: int) -> int:
        """Run whichever toggle pass is due this turn.

        Returns the number of pulsars flipped (0 if nothing was due).
        """
        flipped = 0
        if self.is_activation_turn(turn_number):
            flipped += grid.activate_pulsars(self._rng, self.toggle_chance)
        if self.is_deactivation_turn(turn_number):
            flipped += grid.deactivate_pulsars(self._rng, self.toggle_chance)
        return flipped

    def apply_damage(self, grid: Grid, player: Player) -> PulsarReport:
        report = PulsarReport()
        for x, y in grid.neighborhood(player.x, player.y):
            if grid.tile_at(x, y) is TileType.PULSAR_ACTIVE:
                report.active_in_range += 1

        if report.active_in_range:
            report.damage = report.active_in_range * self.damage
            player.apply_damage(report.damage)
            if grid.tile_at(player.x, player.y) is TileType.PULSAR_ACTIVE:
                player.hull_strength = 0
                report.lethal = True
        return report
