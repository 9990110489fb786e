"""Movement — toroidal stepping and terrain checks.

All stepping uses true modulo arithmetic, so leaving the grid on one edge
lands exactly on the opposite edge: ``x=0`` moving left arrives at
``x=width-1`` and ``x=width-1`` moving right arrives at ``x=0``.  Wrapping
happens before the grid is indexed, never as an out-of-range recovery.

Black holes are impassable for ships.  ``MovementResolver`` only computes
destinations and answers terrain questions; collision and damage rules
live in ``collision`` and ``engine``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .entities import Direction

if TYPE_CHECKING:
    from .grid import Grid


def wrap(value: int, size: int) -> int:
    return value % size


def step(
    x: int,
    y: int,
    direction: Direction,
    width: int,
    height: int,
) -> tuple[int, int]:
    """Return the coordinate one step from (x, y) in *direction*, wrapped."""
    return wrap(x + direction.dx, width), wrap(y + direction.dy, height)


class MovementResolver:
    """Computes wrapped destinations on a grid and checks passability."""

    def __init__(self, grid: Grid) -> None:
        self._grid = grid

    def set_grid(self, grid: Grid) -> None:
        """Point the resolver at a newly generated level."""
        self._grid = grid

    def destination(self, x: int, y: int, direction: Direction) -> tuple[int, int]:
        return step(x, y, direction, self._grid.width, self._grid.height)

    def is_passable(self, x: int, y: int) -> bool:
        return not self._grid.is_black_hole(x, y)

    def try_move(self, x: int, y: int, direction: Direction) -> tuple[int, int]:
        """Destination if passable, otherwise the original coordinate."""
        nx, ny = self.destination(x, y, direction)
        if self.is_passable(nx, ny):
            return nx, ny
        return x, y
