"""Unit tests for toroidal stepping and MovementResolver."""

from __future__ import annotations

import pytest

from spacegame.simulation.entities import Direction
from spacegame.simulation.grid import Grid, TileType
from spacegame.simulation.movement import MovementResolver, step, wrap


pytestmark = pytest.mark.unit


class TestWrap:
    def test_wrap_in_range(self):
        assert wrap(3, 25) == 3

    def test_wrap_negative(self):
        assert wrap(-1, 25) == 24

    def test_wrap_overflow(self):
        assert wrap(25, 25) == 0


class TestStep:
    @pytest.mark.parametrize("start,direction,expected", [
        ((0, 5), Direction.LEFT, (24, 5)),
        ((24, 5), Direction.RIGHT, (0, 5)),
        ((3, 0), Direction.UP, (3, 17)),
        ((3, 17), Direction.DOWN, (3, 0)),
        ((10, 10), Direction.RIGHT, (11, 10)),
        ((10, 10), Direction.UP, (10, 9)),
        ((10, 10), Direction.NONE, (10, 10)),
    ])
    def test_step(self, start, direction, expected):
        assert step(start[0], start[1], direction, 25, 18) == expected

    def test_edge_to_edge_does_not_skip_a_column(self):
        x = 0
        seen = []
        for _ in range(25):
            x, _y = step(x, 0, Direction.RIGHT, 25, 18)
            seen.append(x)
        assert sorted(seen) == list(range(25))
        assert x == 0

    def test_left_walk_visits_every_column(self):
        x = 0
        seen = set()
        for _ in range(25):
            x, _y = step(x, 0, Direction.LEFT, 25, 18)
            seen.add(x)
        assert seen == set(range(25))


class TestMovementResolver:
    def _resolver(self) -> MovementResolver:
        grid = Grid.filled(25, 18)
        grid.set_tile(6, 5, TileType.BLACK_HOLE)
        grid.set_tile(24, 0, TileType.PULSAR_ACTIVE)
        return MovementResolver(grid)

    def test_destination_wraps(self):
        assert self._resolver().destination(0, 0, Direction.LEFT) == (24, 0)

    def test_black_hole_impassable(self):
        resolver = self._resolver()
        assert resolver.is_passable(6, 5) is False
        assert resolver.try_move(5, 5, Direction.RIGHT) == (5, 5)

    def test_pulsars_are_passable(self):
        assert self._resolver().try_move(0, 0, Direction.LEFT) == (24, 0)

    def test_set_grid(self):
        resolver = self._resolver()
        resolver.set_grid(Grid.filled(25, 18))
        assert resolver.try_move(5, 5, Direction.RIGHT) == (6, 5)
