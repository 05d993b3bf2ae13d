"""World scrolling, speed ramp and score accrual."""

from wedding_run.config.settings import GameSettings
from wedding_run.game.entities import SimulationState


class WorldScroller:
    """Moves the world left at a monotonically increasing speed."""

    def __init__(self, settings: GameSettings):
        self.settings = settings

    def step(self, state: SimulationState, dt_ms: float) -> None:
        s = self.settings
        state.speed = min(s.max_speed, state.speed + s.acceleration)

        scroll = state.scroll
        scroll.far = (scroll.far + state.speed * s.far_parallax) % s.far_tile_width
        scroll.mid = (scroll.mid + state.speed * s.mid_parallax) % s.mid_tile_width
        scroll.ground = (scroll.ground + state.speed * s.ground_parallax) % s.ground_tile_width

        for obstacle in state.obstacles:
            obstacle.x -= state.speed
            if obstacle.right < -s.despawn_margin:
                obstacle.marked_for_deletion = True

        state.score += s.score_rate * (state.speed / s.initial_speed) * (dt_ms / s.reference_frame_ms)

    def prune(self, state: SimulationState) -> int:
        """Drop obstacles flagged for deletion. Returns how many were removed."""
        before = len(state.obstacles)
        state.obstacles = [o for o in state.obstacles if not o.marked_for_deletion]
        return before - len(state.obstacles)
