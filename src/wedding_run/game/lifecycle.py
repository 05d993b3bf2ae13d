"""Match lifecycle: RUNNING -> DYING -> REPORTED."""

import logging
import math
from typing import Callable, Optional

from wedding_run.game.entities import MatchPhase, Obstacle, PlayerAnimation, SimulationState

logger = logging.getLogger(__name__)

GameOverCallback = Callable[[int], None]


class LifecycleController:
    """Sequences the end of a match.

    On the first collision the match stops (``is_playing`` goes False and
    the player shows the DIE animation). After ``delay_ms`` of frame
    time the final floored score is handed to ``on_game_over``, exactly
    once. The phase moves to REPORTED before the callback runs, so a
    callback that raises is never retried.
    """

    def __init__(self, delay_ms: float, on_game_over: Optional[GameOverCallback] = None):
        self.delay_ms = delay_ms
        self._on_game_over = on_game_over

    def on_collision(self, state: SimulationState, obstacle: Obstacle) -> bool:
        """Enter DYING. Returns False if the match already ended."""
        if state.phase is not MatchPhase.RUNNING:
            return False

        state.is_playing = False
        state.phase = MatchPhase.DYING
        state.game_over_elapsed_ms = 0.0
        state.player.animation = PlayerAnimation.DIE
        logger.info(
            f"Collision with {obstacle.type.name} at frame {state.frame}, "
            f"score {state.display_score}"
        )
        return True

    def update(self, state: SimulationState, dt_ms: float) -> bool:
        """Advance the game-over delay. Returns True on the frame the score is reported."""
        if state.phase is not MatchPhase.DYING:
            return False

        state.game_over_elapsed_ms += dt_ms
        if state.game_over_elapsed_ms < self.delay_ms:
            return False

        state.phase = MatchPhase.REPORTED
        final_score = max(0, math.floor(state.score))
        logger.info(f"Reporting game over with score {final_score}")

        if self._on_game_over is not None:
            try:
                self._on_game_over(final_score)
            except Exception as e:
                logger.exception(f"Game over handler failed: {e}")
        return True
