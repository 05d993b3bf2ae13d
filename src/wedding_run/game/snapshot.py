"""Read-only view of a simulation frame for renderers."""

from dataclasses import dataclass
from typing import Tuple

from wedding_run.game.entities import (
    MatchPhase,
    ObstacleType,
    PlayerAnimation,
    SimulationState,
)


@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float  # top edge
    width: float
    height: float
    animation: PlayerAnimation
    run_frame: int


@dataclass(frozen=True)
class ObstacleView:
    type: ObstacleType
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ScrollView:
    far: float
    mid: float
    ground: float


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything needed to draw one frame."""

    player: PlayerView
    obstacles: Tuple[ObstacleView, ...]
    scroll: ScrollView
    score: int
    speed: float
    is_playing: bool
    phase: MatchPhase

    @classmethod
    def capture(cls, state: SimulationState) -> "RenderSnapshot":
        p = state.player
        return cls(
            player=PlayerView(
                x=p.x,
                y=p.y - p.height,
                width=p.width,
                height=p.height,
                animation=p.animation,
                run_frame=p.run_frame,
            ),
            obstacles=tuple(
                ObstacleView(o.type, o.x, o.y, o.width, o.height) for o in state.obstacles
            ),
            scroll=ScrollView(state.scroll.far, state.scroll.mid, state.scroll.ground),
            score=state.display_score,
            speed=state.speed,
            is_playing=state.is_playing,
            phase=state.phase,
        )
