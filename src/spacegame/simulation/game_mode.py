"""GameMode — level progression state machine and session scoring.

Architecture
------------
GameMode tracks the flow of one game through a small state machine:

  playing -> level_cleared -> playing -> ... -> game_over

``level_cleared`` is transient: the engine enters it when the level's
point target is reached, rebuilds the level, then calls ``resume()``.
``game_over`` is terminal; nothing leaves it.

Session state:
  - levels_cleared: drives alien count on the next level
  - points_this_level: asteroids collected since the level started
  - turn_number: starts at 1, +1 per orchestrated turn, never reset

Events published on the EventBus (when one is attached):
  - ``game_state_change``: any state transition
  - ``level_cleared``: point target reached
  - ``game_over``: terminal result
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from spacegame.comms.event_bus import EventBus


class GameState(str, Enum):
    PLAYING = "playing"
    LEVEL_CLEARED = "level_cleared"
    GAME_OVER = "game_over"


class GameMode:
    """Game state machine + level session counters."""

    def __init__(self, event_bus: EventBus | None = None, points_to_clear: int = 5) -> None:
        self._event_bus = event_bus
        self.points_to_clear = points_to_clear

        self.state: GameState = GameState.PLAYING
        self.levels_cleared: int = 0
        self.points_this_level: int = 0
        self.turn_number: int = 1

    # -- Queries ----------------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    @property
    def level_complete(self) -> bool:
        return self.points_this_level >= self.points_to_clear

    @property
    def points_remaining(self) -> int:
        return max(0, self.points_to_clear - self.points_this_level)

    def get_state(self) -> dict:
        """Return serializable game state."""
        return {
            "state": self.state.value,
            "levels_cleared": self.levels_cleared,
            "points_this_level": self.points_this_level,
            "points_to_clear": self.points_to_clear,
            "turn_number": self.turn_number,
        }

    # -- Transitions ------------------------------------------------------------

    def add_points(self, points: int) -> None:
        if points <= 0 or self.is_over:
            return
        self.points_this_level += points
        logger.debug(
            f"Collected {points} asteroid(s): "
            f"{self.points_this_level}/{self.points_to_clear}"
        )

    def clear_level(self) -> None:
        """Enter level_cleared: bump the level counter and reset points."""
        if self.is_over:
            return
        self.state = GameState.LEVEL_CLEARED
        self.levels_cleared += 1
        self.points_this_level = 0
        logger.info(f"Level cleared (total cleared: {self.levels_cleared})")
        self._publish("level_cleared", {
            "levels_cleared": self.levels_cleared,
            "turn_number": self.turn_number,
        })
        self._publish_state_change()

    def resume(self) -> None:
        """Back to playing once the next level is built."""
        if self.state is not GameState.LEVEL_CLEARED:
            return
        self.state = GameState.PLAYING
        self._publish_state_change()

    def end_game(self, hull_strength: int) -> None:
        if self.is_over:
            return
        self.state = GameState.GAME_OVER
        logger.info(
            f"Game over on turn {self.turn_number} "
            f"after clearing {self.levels_cleared} level(s)"
        )
        self._publish("game_over", {
            "levels_cleared": self.levels_cleared,
            "points_this_level": self.points_this_level,
            "turn_number": self.turn_number,
            "hull_strength": hull_strength,
        })
        self._publish_state_change()

    def advance_turn(self) -> None:
        self.turn_number += 1

    # -- Events -----------------------------------------------------------------

    def _publish(self, event_type: str, data: dict) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event_type, data)

    def _publish_state_change(self) -> None:
        self._publish("game_state_change", self.get_state())
