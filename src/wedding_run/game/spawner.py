"""Procedural obstacle spawning.

Every frame the spawn cooldown ticks down; when it runs out one obstacle
is created just off the right edge of the world and the next gap is
sampled. Gaps come from one of two regimes:

- cluster: a short follow-up gap just above the safety floor
- relaxed: a longer gap drawn from the configured spawn rate range,
  shortened as the world speeds up

Both are clamped to the safety floor, the number of frames one full
jump arc takes plus a margin, so consecutive obstacles can always be
cleared.
"""

import logging
import math
import random
from typing import Optional, Tuple

from wedding_run.config.settings import GameSettings
from wedding_run.game.entities import Obstacle, ObstacleType, SimulationState

logger = logging.getLogger(__name__)

OBSTACLE_ORDER: Tuple[ObstacleType, ...] = (
    ObstacleType.GROUND_SMALL,
    ObstacleType.GROUND_LARGE,
    ObstacleType.FLYING_SMALL,
    ObstacleType.FLYING_LARGE,
)


def jump_arc_frames(gravity: float, jump_strength: float) -> int:
    """Frames from take-off until the player is back on the ground."""
    return math.ceil(2 * abs(jump_strength) / gravity) + 1


class ObstacleSpawner:
    """Creates obstacles on a randomized, fairness-bounded cadence."""

    def __init__(self, settings: GameSettings, rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng or random.Random()
        self.safety_floor = (
            jump_arc_frames(settings.gravity, settings.jump_strength)
            + settings.spawn_safety_margin
        )
        self.last_gap = 0

    def update(self, state: SimulationState) -> Optional[Obstacle]:
        """Count down one frame; spawn and resample when due."""
        state.spawn_cooldown -= 1
        if state.spawn_cooldown > 0:
            return None

        obstacle = self.spawn(state)
        self.last_gap = self.next_gap(state.speed)
        state.spawn_cooldown = self.last_gap
        return obstacle

    def spawn(self, state: SimulationState) -> Obstacle:
        obstacle_type = self.pick_type()
        obstacle = self.build(obstacle_type)
        state.obstacles.append(obstacle)
        logger.debug(
            f"Spawned {obstacle_type.name} at frame {state.frame} "
            f"(y={obstacle.y:.0f}, speed={state.speed:.2f})"
        )
        return obstacle

    def pick_type(self) -> ObstacleType:
        weights = self.settings.obstacle_weights
        roll = self.rng.random() * sum(weights)
        upper = 0.0
        for obstacle_type, weight in zip(OBSTACLE_ORDER, weights):
            upper += weight
            if roll < upper:
                return obstacle_type
        # roll landed on the upper bound through float rounding
        return OBSTACLE_ORDER[max(i for i, w in enumerate(weights) if w > 0)]

    def build(self, obstacle_type: ObstacleType) -> Obstacle:
        s = self.settings
        width, height = self._size_for(obstacle_type)
        x = s.world_width + s.spawn_margin

        match obstacle_type:
            case ObstacleType.GROUND_SMALL | ObstacleType.GROUND_LARGE:
                bottom = s.ground_y
            case ObstacleType.FLYING_SMALL | ObstacleType.FLYING_LARGE:
                # Above a standing player's hitbox, inside the jump arc
                bottom = s.ground_y - s.flying_clearance - self.rng.uniform(0.0, s.flying_band)

        return Obstacle(type=obstacle_type, x=x, y=bottom - height, width=width, height=height)

    def next_gap(self, speed: float) -> int:
        """Sample frames until the next spawn."""
        s = self.settings
        if self.rng.random() < s.cluster_probability:
            gap = self.safety_floor + self.rng.randint(0, s.cluster_span)
        else:
            base = self.rng.uniform(s.spawn_rate_min, s.spawn_rate_max)
            gap = round(base * math.sqrt(s.initial_speed / max(speed, s.initial_speed)))
        return max(self.safety_floor, gap)

    def _size_for(self, obstacle_type: ObstacleType) -> Tuple[float, float]:
        s = self.settings
        match obstacle_type:
            case ObstacleType.GROUND_SMALL:
                return s.ground_small_size
            case ObstacleType.GROUND_LARGE:
                return s.ground_large_size
            case ObstacleType.FLYING_SMALL:
                return s.flying_small_size
            case ObstacleType.FLYING_LARGE:
                return s.flying_large_size
