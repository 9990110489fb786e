"""Unit tests for CollisionSystem."""

from __future__ import annotations

import pytest

from spacegame.simulation.collision import CollisionSystem
from spacegame.simulation.entities import Alien, Asteroid, Direction, EntitySlots, Player


pytestmark = pytest.mark.unit


def _player(x: int = 5, y: int = 5) -> Player:
    return Player(hull_strength=100, x=x, y=y)


class TestAsteroidPickup:
    def test_collects_asteroid_on_player_tile(self):
        rocks = EntitySlots([Asteroid(5, 5), Asteroid(9, 9)])
        report = CollisionSystem().resolve(_player(), rocks, EntitySlots())
        assert report.points == 1
        assert rocks.is_empty(0)
        assert not rocks.is_empty(1)

    def test_collects_every_asteroid_on_tile(self):
        rocks = EntitySlots([Asteroid(5, 5), Asteroid(5, 5, Direction.UP)])
        report = CollisionSystem().resolve(_player(), rocks, EntitySlots())
        assert report.points == 2
        assert rocks.live_count() == 0

    def test_no_contact(self):
        rocks = EntitySlots([Asteroid(1, 1)])
        report = CollisionSystem().resolve(_player(), rocks, EntitySlots())
        assert report.points == 0
        assert report.empty

    def test_skips_empty_slots(self):
        rocks = EntitySlots([Asteroid(5, 5), Asteroid(5, 5)])
        rocks.clear(0)
        report = CollisionSystem().resolve(_player(), rocks, EntitySlots())
        assert report.points == 1


class TestAlienRamming:
    def test_damages_alien(self):
        aliens = EntitySlots([Alien(50, 5, 5)])
        report = CollisionSystem(attack_damage=20).resolve(_player(), EntitySlots(), aliens)
        assert aliens[0].hull_strength == 30
        assert report.aliens_hit == [0]
        assert report.aliens_destroyed == []

    def test_removes_alien_at_zero(self):
        aliens = EntitySlots([Alien(20, 5, 5)])
        report = CollisionSystem(attack_damage=20).resolve(_player(), EntitySlots(), aliens)
        assert aliens.is_empty(0)
        assert report.aliens_destroyed == [0]

    def test_removes_alien_below_zero(self):
        aliens = EntitySlots([Alien(5, 5, 5)])
        CollisionSystem(attack_damage=20).resolve(_player(), EntitySlots(), aliens)
        assert aliens.is_empty(0)

    def test_hits_every_alien_on_tile(self):
        aliens = EntitySlots([Alien(50, 5, 5), Alien(10, 5, 5), Alien(50, 0, 0)])
        report = CollisionSystem(attack_damage=20).resolve(_player(), EntitySlots(), aliens)
        assert report.aliens_hit == [0, 1]
        assert report.aliens_destroyed == [1]
        assert aliens[2].hull_strength == 50

    def test_player_hull_unchanged(self):
        player = _player()
        CollisionSystem().resolve(player, EntitySlots(), EntitySlots([Alien(50, 5, 5)]))
        assert player.hull_strength == 100

    def test_asteroids_and_aliens_same_pass(self):
        rocks = EntitySlots([Asteroid(5, 5)])
        aliens = EntitySlots([Alien(50, 5, 5)])
        report = CollisionSystem().resolve(_player(), rocks, aliens)
        assert report.points == 1
        assert report.aliens_hit == [0]
