"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested values use a double underscore, e.g. ``WEDRUN_GAME__GRAVITY=0.8``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameSettings(BaseModel):
    """Simulation tunables.

    Distances are world pixels, velocities are pixels per reference frame
    and accelerations are pixels per reference frame squared. Larger ``y``
    is lower on screen.
    """

    # World
    world_width: int = Field(default=800, gt=0)
    world_height: int = Field(default=450, gt=0)
    ground_y: float = 380.0

    # Player body
    player_x: float = 50.0
    player_width: float = Field(default=60.0, gt=0)
    player_height: float = Field(default=60.0, gt=0)

    # Speed ramp
    initial_speed: float = Field(default=6.0, gt=0)
    max_speed: float = Field(default=15.0, gt=0)
    acceleration: float = Field(default=0.002, ge=0)

    # Jump physics
    gravity: float = Field(default=0.6, gt=0)
    jump_strength: float = Field(default=-12.0, lt=0)
    max_jumps: int = Field(default=1, ge=1)
    jump_cut_threshold: float = -3.0  # only cut while rising faster than this
    jump_cut_factor: float = Field(default=0.5, gt=0, lt=1)

    # Spawning (frames)
    spawn_rate_min: int = Field(default=60, gt=0)
    spawn_rate_max: int = Field(default=120, gt=0)
    initial_spawn_delay: int = Field(default=60, ge=0)
    cluster_probability: float = Field(default=0.3, ge=0.0, le=1.0)
    cluster_span: int = Field(default=12, ge=0)
    spawn_safety_margin: int = Field(default=10, ge=0)

    # Obstacles: GROUND_SMALL, GROUND_LARGE, FLYING_SMALL, FLYING_LARGE
    obstacle_weights: tuple[float, float, float, float] = (0.4, 0.3, 0.2, 0.1)
    ground_small_size: tuple[float, float] = (40.0, 50.0)
    ground_large_size: tuple[float, float] = (45.0, 80.0)
    flying_small_size: tuple[float, float] = (60.0, 36.0)
    flying_large_size: tuple[float, float] = (80.0, 48.0)
    flying_clearance: float = Field(default=70.0, ge=0)
    flying_band: float = Field(default=40.0, ge=0)
    spawn_margin: float = Field(default=20.0, ge=0)
    despawn_margin: float = Field(default=100.0, ge=0)

    # Collision
    hitbox_padding: float = Field(default=8.0, ge=0)

    # Scoring and timing
    score_rate: float = Field(default=10.0 / 60.0, ge=0)
    reference_frame_ms: float = Field(default=1000.0 / 60.0, gt=0)
    max_frame_ms: float = Field(default=100.0, gt=0)
    max_steps_per_tick: int = Field(default=6, ge=1)
    run_frame_interval_ms: float = Field(default=120.0, gt=0)
    game_over_delay_ms: float = Field(default=1000.0, ge=0)

    # Parallax layers: fraction of world speed and tile width
    far_parallax: float = 0.2
    mid_parallax: float = 0.5
    ground_parallax: float = 1.0
    far_tile_width: float = Field(default=800.0, gt=0)
    mid_tile_width: float = Field(default=800.0, gt=0)
    ground_tile_width: float = Field(default=744.0, gt=0)

    @model_validator(mode="after")
    def _check_ranges(self) -> "GameSettings":
        if self.max_speed < self.initial_speed:
            raise ValueError("max_speed must be >= initial_speed")
        if self.spawn_rate_max < self.spawn_rate_min:
            raise ValueError("spawn_rate_max must be >= spawn_rate_min")
        if sum(self.obstacle_weights) <= 0:
            raise ValueError("obstacle_weights must not all be zero")
        if any(w < 0 for w in self.obstacle_weights):
            raise ValueError("obstacle_weights must be non-negative")
        return self


class EventSettings(BaseModel):
    """The event (party, wedding) the kiosk is running for."""

    event_id: str = "wedding-2026"
    pin: str = "1234"
    title: str = "WEDDING RUN"
    sub_title: str = "JUMP FOR THE COUPLE"
    participants: list[str] = Field(
        default_factory=lambda: ["GUEST", "FAMILY", "FRIEND", "COLLEAGUE"]
    )


class ScoreServiceSettings(BaseModel):
    """Remote score API settings."""

    api_url: str = "http://localhost:8080"
    api_key: str = ""
    timeout: float = Field(default=10.0, gt=0)
    ranking_limit: int = Field(default=50, gt=0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="WEDRUN_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False

    # Paths
    data_path: Path = Field(default_factory=lambda: Path.cwd() / "data")
    assets_path: Path = Field(default_factory=lambda: Path.cwd() / "assets" / "images")

    # Simulator window
    window_scale: float = Field(default=1.5, gt=0)
    fps: int = Field(default=60, gt=0)
    fullscreen: bool = False

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    event: EventSettings = Field(default_factory=EventSettings)
    scores: ScoreServiceSettings = Field(default_factory=ScoreServiceSettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running with a desktop window."""
        return self.env == "simulator"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
