"""Configuration management using Pydantic settings."""

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameSettings(BaseSettings):
    """Game rules and tuning loaded from environment variables.

    Every field can be overridden with a ``SPACEGAME_`` prefixed variable,
    e.g. ``SPACEGAME_SEED=42`` or ``SPACEGAME_GRID_WIDTH=30``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPACEGAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Grid
    grid_width: int = Field(default=25, gt=0)
    grid_height: int = Field(default=18, gt=0)
    black_hole_chance: float = Field(default=0.07, ge=0.0, le=1.0)
    pulsar_chance: float = Field(default=0.03, ge=0.0, le=1.0)

    # Hull strengths
    player_hull: int = Field(default=100, gt=0)
    alien_hull: int = Field(default=50, gt=0)

    # Damage
    player_attack_damage: int = 20      # player ramming an alien
    alien_collision_damage: int = 15    # alien walking into the player
    pulsar_damage: int = 10             # per active pulsar in the 3x3 block

    # Level progression
    points_to_clear: int = Field(default=5, gt=0)
    max_aliens: int = Field(default=10, ge=0)
    max_level_attempts: int = Field(default=100, gt=0)

    # Turn schedule (turn_number % cycle == phase)
    pulsar_cycle: int = Field(default=20, gt=0)
    pulsar_activate_phase: int = 0
    pulsar_deactivate_phase: int = 5
    pulsar_toggle_chance: float = Field(default=0.5, ge=0.0, le=1.0)
    asteroid_cycle: int = Field(default=10, gt=0)
    asteroid_phase: int = 5

    # Runtime
    seed: Optional[int] = None
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _check_thresholds(self) -> "GameSettings":
        if self.pulsar_chance > self.black_hole_chance:
            raise ValueError(
                "pulsar_chance must not exceed black_hole_chance "
                "(pulsars are carved out of the hazard band)"
            )
        return self


settings = GameSettings()
