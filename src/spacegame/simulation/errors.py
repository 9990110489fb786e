"""Exceptions raised by the simulation package."""

from __future__ import annotations


class SpaceGameError(Exception):
    """Base class for engine failures that are not game outcomes."""


class SpawnPoolExhausted(SpaceGameError):
    """Raised when an entity must be placed but no free coordinate is left."""


class LevelGenerationError(SpaceGameError):
    """Raised when no playable level could be generated within the retry budget."""
