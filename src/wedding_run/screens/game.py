"""Game screen: hosts one runner simulation per match."""

import logging
from typing import Optional

from wedding_run.core.events import Event, EventType
from wedding_run.core.state import State
from wedding_run.game.simulation import RunnerSimulation
from wedding_run.game.snapshot import RenderSnapshot
from wedding_run.screens.base import BaseScreen

logger = logging.getLogger(__name__)


class GameScreen(BaseScreen):
    """Routes input to the simulation and leaves for RESULT when it reports."""

    name = "game"
    state = State.GAME

    def on_enter(self) -> None:
        self._final_score: Optional[int] = None
        self.simulation = RunnerSimulation(
            settings=self.settings.game,
            on_game_over=self._on_game_over,
        )
        self.snapshot: RenderSnapshot = self.simulation.snapshot()

    def on_exit(self) -> None:
        # The next match builds a fresh simulation
        self.simulation = None

    def _on_game_over(self, score: int) -> None:
        self._final_score = score

    def on_update(self, delta_ms: float, timestamp_ms: float) -> None:
        self.snapshot = self.simulation.tick(timestamp_ms)

        if self._final_score is not None:
            score = self._final_score
            self.emit_event(EventType.GAME_OVER, {"score": score})
            self.go_to(State.RESULT, last_score=score)

    def on_input(self, event: Event) -> bool:
        if event.type == EventType.PRESS_START:
            self.simulation.press_start()
            return True
        if event.type == EventType.PRESS_END:
            self.simulation.press_end()
            return True
        return False

    def render(self, buffer) -> None:
        self.context.scene.render(buffer, self.snapshot)
