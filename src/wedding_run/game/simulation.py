"""Runner simulation driver.

One ``RunnerSimulation`` is built per match and discarded afterwards.
The host feeds it frame timestamps and the two abstract input signals;
it answers each frame with a ``RenderSnapshot`` and calls
``on_game_over`` once when the match is over.

Per tick::

    FrameClock -> (while playing, fixed steps)
        PlayerPhysics -> WorldScroller -> ObstacleSpawner -> CollisionResolver
    -> LifecycleController -> RenderSnapshot
"""

import logging
import random
from typing import Optional

from wedding_run.config.settings import GameSettings
from wedding_run.game.clock import FrameClock
from wedding_run.game.collision import CollisionResolver
from wedding_run.game.entities import MatchPhase, SimulationState
from wedding_run.game.lifecycle import GameOverCallback, LifecycleController
from wedding_run.game.physics import PlayerPhysics
from wedding_run.game.scroller import WorldScroller
from wedding_run.game.snapshot import RenderSnapshot
from wedding_run.game.spawner import ObstacleSpawner

logger = logging.getLogger(__name__)

# Absorbs float error when timestamps are exact multiples of the frame length
_STEP_EPSILON = 1e-6


class RunnerSimulation:
    """The game core: physics, spawning, scrolling, collision and scoring."""

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        on_game_over: Optional[GameOverCallback] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or GameSettings()
        s = self.settings

        self.clock = FrameClock(default_ms=s.reference_frame_ms, max_ms=s.max_frame_ms)
        self.physics = PlayerPhysics(s)
        self.scroller = WorldScroller(s)
        self.spawner = ObstacleSpawner(s, rng)
        self.collision = CollisionResolver(s)
        self.lifecycle = LifecycleController(s.game_over_delay_ms, on_game_over)

        self.state = SimulationState(
            player=self.physics.create_player(),
            speed=s.initial_speed,
            spawn_cooldown=s.initial_spawn_delay,
        )
        self._accumulator = 0.0

        logger.info(
            f"Match started (speed {s.initial_speed}, gravity {s.gravity}, "
            f"jump {s.jump_strength}, safety floor {self.spawner.safety_floor} frames)"
        )

    @property
    def is_playing(self) -> bool:
        return self.state.is_playing

    @property
    def phase(self) -> MatchPhase:
        return self.state.phase

    # Input
    def press_start(self) -> None:
        self.physics.start_jump(self.state)

    def press_end(self) -> None:
        self.physics.end_jump(self.state)

    # Frame driver
    def tick(self, timestamp_ms: float) -> RenderSnapshot:
        """Advance the world to ``timestamp_ms`` and return the frame to draw."""
        dt_ms = self.clock.advance(timestamp_ms)
        frame_ms = self.settings.reference_frame_ms

        if self.state.is_playing:
            self._accumulator += dt_ms
            steps = 0
            while (
                self.state.is_playing
                and self._accumulator + _STEP_EPSILON >= frame_ms
                and steps < self.settings.max_steps_per_tick
            ):
                self.step(frame_ms)
                self._accumulator -= frame_ms
                steps += 1

            if steps >= self.settings.max_steps_per_tick:
                # Drop the backlog instead of spiralling
                self._accumulator = min(self._accumulator, frame_ms)
        else:
            self.lifecycle.update(self.state, dt_ms)

        return self.snapshot()

    def step(self, dt_ms: Optional[float] = None) -> None:
        """Run one fixed simulation step. No-op once the match has ended."""
        state = self.state
        if not state.is_playing:
            return
        if dt_ms is None:
            dt_ms = self.settings.reference_frame_ms

        state.frame += 1
        self.physics.step(state, dt_ms)
        self.scroller.step(state, dt_ms)
        self.scroller.prune(state)
        self.spawner.update(state)

        hit = self.collision.first_hit(state.player, state.obstacles)
        if hit is not None:
            self.lifecycle.on_collision(state, hit)

    def snapshot(self) -> RenderSnapshot:
        return RenderSnapshot.capture(self.state)
