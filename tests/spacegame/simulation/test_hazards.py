"""Unit tests for HazardScheduler: pulsar schedule and pulsar damage."""

from __future__ import annotations

import random

import pytest

from spacegame.simulation.entities import Player
from spacegame.simulation.grid import Grid, TileType
from spacegame.simulation.hazards import HazardScheduler


pytestmark = pytest.mark.unit


def _scheduler(toggle_chance: float = 1.0) -> HazardScheduler:
    return HazardScheduler(random.Random(0), toggle_chance=toggle_chance)


# --------------------------------------------------------------------------
# Schedule
# --------------------------------------------------------------------------

class TestPulsarSchedule:
    def _grid(self) -> Grid:
        grid = Grid.filled(10, 10)
        grid.set_tile(1, 1, TileType.PULSAR_INACTIVE)
        grid.set_tile(8, 8, TileType.PULSAR_ACTIVE)
        return grid

    def test_gates(self):
        s = _scheduler()
        assert s.is_activation_turn(20)
        assert s.is_activation_turn(40)
        assert not s.is_activation_turn(5)
        assert s.is_deactivation_turn(5)
        assert s.is_deactivation_turn(25)
        assert not s.is_deactivation_turn(20)

    def test_activation_turn(self):
        grid = self._grid()
        assert _scheduler().schedule(grid, 20) == 1
        assert grid.tile_at(1, 1) is TileType.PULSAR_ACTIVE
        assert grid.tile_at(8, 8) is TileType.PULSAR_ACTIVE

    def test_deactivation_turn(self):
        grid = self._grid()
        assert _scheduler().schedule(grid, 25) == 1
        assert grid.tile_at(8, 8) is TileType.PULSAR_INACTIVE
        assert grid.tile_at(1, 1) is TileType.PULSAR_INACTIVE

    def test_off_turn_does_nothing(self):
        grid = self._grid()
        assert _scheduler().schedule(grid, 7) == 0
        assert grid.tile_at(1, 1) is TileType.PULSAR_INACTIVE
        assert grid.tile_at(8, 8) is TileType.PULSAR_ACTIVE

    def test_toggle_is_probabilistic(self):
        grid = Grid.filled(20, 20, TileType.PULSAR_INACTIVE)
        flipped = _scheduler(toggle_chance=0.5).schedule(grid, 20)
        assert 0 < flipped < 400
        assert grid.count(TileType.PULSAR_ACTIVE) == flipped


# --------------------------------------------------------------------------
# Damage
# --------------------------------------------------------------------------

class TestPulsarDamage:
    def test_no_pulsars_no_damage(self):
        player = Player(100, 5, 5)
        report = _scheduler().apply_damage(Grid.filled(10, 10), player)
        assert player.hull_strength == 100
        assert report.active_in_range == 0

    def test_adjacent_pulsar(self):
        grid = Grid.filled(10, 10)
        grid.set_tile(6, 6, TileType.PULSAR_ACTIVE)
        player = Player(100, 5, 5)
        report = _scheduler().apply_damage(grid, player)
        assert player.hull_strength == 90
        assert report.damage == 10
        assert not report.lethal

    def test_damage_is_cumulative(self):
        grid = Grid.filled(10, 10)
        for x, y in [(4, 4), (5, 4), (6, 6)]:
            grid.set_tile(x, y, TileType.PULSAR_ACTIVE)
        player = Player(100, 5, 5)
        _scheduler().apply_damage(grid, player)
        assert player.hull_strength == 70

    def test_inactive_pulsars_harmless(self):
        grid = Grid.filled(10, 10)
        grid.set_tile(5, 5, TileType.PULSAR_INACTIVE)
        grid.set_tile(4, 5, TileType.PULSAR_INACTIVE)
        player = Player(100, 5, 5)
        _scheduler().apply_damage(grid, player)
        assert player.hull_strength == 100

    def test_out_of_range_pulsar(self):
        grid = Grid.filled(10, 10)
        grid.set_tile(7, 5, TileType.PULSAR_ACTIVE)
        player = Player(100, 5, 5)
        _scheduler().apply_damage(grid, player)
        assert player.hull_strength == 100

    def test_scan_does_not_wrap_at_edges(self):
        grid = Grid.filled(10, 10)
        grid.set_tile(9, 9, TileType.PULSAR_ACTIVE)
        player = Player(100, 0, 0)
        _scheduler().apply_damage(grid, player)
        assert player.hull_strength == 100

    @pytest.mark.parametrize("hull", [1, 50, 100, 10_000])
    def test_standing_on_active_pulsar_is_lethal(self, hull):
        grid = Grid.filled(10, 10)
        grid.set_tile(5, 5, TileType.PULSAR_ACTIVE)
        player = Player(hull, 5, 5)
        report = _scheduler().apply_damage(grid, player)
        assert player.hull_strength == 0
        assert report.lethal
