"""World model for the runner simulation.

All mutable state of a match lives in a single ``SimulationState``
aggregate owned by ``RunnerSimulation``. Coordinates follow screen
convention: larger ``y`` is lower on screen.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List


class PlayerAnimation(Enum):
    """Animation tag for the player body."""

    RUN = auto()
    JUMP = auto()
    DIE = auto()


class ObstacleType(Enum):
    """The four obstacle kinds."""

    GROUND_SMALL = auto()
    GROUND_LARGE = auto()
    FLYING_SMALL = auto()
    FLYING_LARGE = auto()

    @property
    def is_flying(self) -> bool:
        return self in (ObstacleType.FLYING_SMALL, ObstacleType.FLYING_LARGE)


class MatchPhase(Enum):
    """Lifecycle of a single match."""

    RUNNING = auto()   # Live play
    DYING = auto()     # Collided, waiting out the game-over delay
    REPORTED = auto()  # Final score handed to the host


@dataclass(frozen=True)
class Box:
    """Axis-aligned box with ``y`` as the top edge."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, padding: float) -> "Box":
        """Shrink the box by ``padding`` on every side."""
        return Box(
            x=self.x + padding,
            y=self.y + padding,
            width=max(0.0, self.width - 2 * padding),
            height=max(0.0, self.height - 2 * padding),
        )

    def overlaps(self, other: "Box") -> bool:
        return (
            self.left < other.right
            and self.right > other.left
            and self.top < other.bottom
            and self.bottom > other.top
        )


@dataclass
class PlayerState:
    """The player body. ``y`` is the foot line, never below ``ground_y``."""

    x: float
    y: float
    width: float
    height: float
    dy: float = 0.0
    is_jumping: bool = False
    jump_count: int = 0
    animation: PlayerAnimation = PlayerAnimation.RUN
    run_frame: int = 0
    run_frame_elapsed_ms: float = 0.0

    @property
    def box(self) -> Box:
        return Box(self.x, self.y - self.height, self.width, self.height)


@dataclass
class Obstacle:
    """A scrolling hazard. Type and size are fixed at spawn."""

    type: ObstacleType
    x: float
    y: float
    width: float
    height: float
    marked_for_deletion: bool = False

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.width, self.height)

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass
class ScrollOffsets:
    """Parallax background offsets, each wrapped to its tile width."""

    far: float = 0.0
    mid: float = 0.0
    ground: float = 0.0


@dataclass
class SimulationState:
    """Everything that changes during a match."""

    player: PlayerState
    speed: float
    spawn_cooldown: int
    is_playing: bool = True
    phase: MatchPhase = MatchPhase.RUNNING
    score: float = 0.0
    frame: int = 0
    game_over_elapsed_ms: float = 0.0
    obstacles: List[Obstacle] = field(default_factory=list)
    scroll: ScrollOffsets = field(default_factory=ScrollOffsets)

    @property
    def display_score(self) -> int:
        return int(self.score)
