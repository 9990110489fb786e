"""Turn-resolution engine for the space grid game.

Package layout:
  grid.py       — TileType, Grid (generation, pulsar toggles)
  spawn.py      — SpawnPool (free coordinates, entity factories)
  entities.py   — Player, Alien, Asteroid, Direction, EntitySlots
  movement.py   — toroidal stepping, MovementResolver
  collision.py  — CollisionSystem (asteroid pickup, alien ramming)
  hazards.py    — HazardScheduler (pulsar schedule and damage)
  game_mode.py  — GameMode state machine and level counters
  snapshot.py   — read-only Snapshot for displays
  engine.py     — TurnEngine (input entry points, turn orchestration)
"""

from .collision import CollisionReport, CollisionSystem
from .engine import SnapshotSink, TurnEngine
from .entities import Alien, Asteroid, Direction, EntitySlots, Player
from .errors import LevelGenerationError, SpaceGameError, SpawnPoolExhausted
from .game_mode import GameMode, GameState
from .grid import Grid, TileType
from .hazards import HazardScheduler, PulsarReport
from .movement import MovementResolver, step, wrap
from .snapshot import Snapshot
from .spawn import SpawnPool

__all__ = [
    "Alien",
    "Asteroid",
    "CollisionReport",
    "CollisionSystem",
    "Direction",
    "EntitySlots",
    "GameMode",
    "GameState",
    "Grid",
    "HazardScheduler",
    "LevelGenerationError",
    "MovementResolver",
    "Player",
    "PulsarReport",
    "Snapshot",
    "SnapshotSink",
    "SpaceGameError",
    "SpawnPool",
    "SpawnPoolExhausted",
    "TileType",
    "TurnEngine",
    "step",
    "wrap",
]
