"""Player vertical motion and animation state."""

import logging

from wedding_run.config.settings import GameSettings
from wedding_run.game.entities import PlayerAnimation, PlayerState, SimulationState

logger = logging.getLogger(__name__)


class PlayerPhysics:
    """Integrates the player's jump arc and drives the run cycle.

    Jumping is limited to ``max_jumps`` per grounded period; the counter
    only resets on landing. Releasing the input while rising cuts the
    upward velocity, so short presses give low hops.
    """

    def __init__(self, settings: GameSettings):
        self.settings = settings

    def create_player(self) -> PlayerState:
        s = self.settings
        return PlayerState(
            x=s.player_x,
            y=s.ground_y,
            width=s.player_width,
            height=s.player_height,
        )

    def start_jump(self, state: SimulationState) -> bool:
        """Launch the player. Returns True if a jump started."""
        player = state.player
        if not state.is_playing:
            return False
        if player.jump_count >= self.settings.max_jumps:
            return False

        player.dy = self.settings.jump_strength
        player.is_jumping = True
        player.jump_count += 1
        player.animation = PlayerAnimation.JUMP
        logger.debug(f"Jump {player.jump_count}/{self.settings.max_jumps}")
        return True

    def end_jump(self, state: SimulationState) -> bool:
        """Cut the ascent short. Returns True if velocity was damped."""
        player = state.player
        if not state.is_playing:
            return False
        if player.is_jumping and player.dy < self.settings.jump_cut_threshold:
            player.dy *= self.settings.jump_cut_factor
            return True
        return False

    def step(self, state: SimulationState, dt_ms: float) -> None:
        """Advance one reference frame."""
        s = self.settings
        player = state.player

        player.dy += s.gravity
        player.y += player.dy

        if player.y > s.ground_y:
            player.y = s.ground_y
            player.dy = 0.0
            if player.is_jumping:
                player.is_jumping = False
                player.jump_count = 0
                if player.animation is not PlayerAnimation.DIE:
                    player.animation = PlayerAnimation.RUN

        self._animate(player, dt_ms)

    def _animate(self, player: PlayerState, dt_ms: float) -> None:
        if player.animation is not PlayerAnimation.RUN:
            return
        player.run_frame_elapsed_ms += dt_ms
        if player.run_frame_elapsed_ms > self.settings.run_frame_interval_ms:
            player.run_frame_elapsed_ms = 0.0
            player.run_frame = 1 - player.run_frame
