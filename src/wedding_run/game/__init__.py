"""Runner simulation core."""

from .entities import (
    Box,
    MatchPhase,
    Obstacle,
    ObstacleType,
    PlayerAnimation,
    PlayerState,
    ScrollOffsets,
    SimulationState,
)
from .simulation import RunnerSimulation
from .snapshot import ObstacleView, PlayerView, RenderSnapshot, ScrollView

__all__ = [
    "Box",
    "MatchPhase",
    "Obstacle",
    "ObstacleType",
    "ObstacleView",
    "PlayerAnimation",
    "PlayerState",
    "PlayerView",
    "RenderSnapshot",
    "RunnerSimulation",
    "ScrollOffsets",
    "ScrollView",
    "SimulationState",
]
