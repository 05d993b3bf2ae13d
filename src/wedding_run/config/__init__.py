"""Configuration for Wedding Run."""

from .settings import (
    EventSettings,
    GameSettings,
    ScoreServiceSettings,
    Settings,
    get_settings,
)

__all__ = [
    "EventSettings",
    "GameSettings",
    "ScoreServiceSettings",
    "Settings",
    "get_settings",
]
