"""Result screen: show the score and submit it under a participant name."""

import logging
from enum import Enum, auto
from typing import Optional

from wedding_run.core.events import Event, EventType
from wedding_run.core.state import State
from wedding_run.graphics.primitives import draw_centered_text, fill
from wedding_run.screens.base import (
    ACCENT_COLOR,
    BG_COLOR,
    ERROR_COLOR,
    MUTED_COLOR,
    TEXT_COLOR,
    BaseScreen,
)
from wedding_run.services.scores import SaveResult

logger = logging.getLogger(__name__)


class SubmitState(Enum):
    SELECTING = auto()
    SUBMITTING = auto()
    SUBMITTED = auto()
    FAILED = auto()


class ResultScreen(BaseScreen):
    """Arrows pick a name and press submits; until the ranking opens, press retries.

    The last entry of the name list is PLAY AGAIN, which starts a new
    match without saving. A saved score opens the ranking after
    ``RANKING_DELAY_MS``.
    """

    name = "result"
    state = State.RESULT

    RANKING_DELAY_MS = 1000.0

    def on_enter(self) -> None:
        self.score = self.context.state_machine.context.last_score
        self.submit_state = SubmitState.SELECTING
        self._name_index = 0
        self._error: Optional[str] = None
        self._submitted_at: Optional[float] = None

    @property
    def selected_name(self) -> Optional[str]:
        """Highlighted participant, or None on the PLAY AGAIN entry."""
        options = [*self.settings.event.participants, None]
        return options[self._name_index % len(options)]

    def on_update(self, delta_ms: float, timestamp_ms: float) -> None:
        if self._submitted_at is None:
            return
        if self._time_in_screen - self._submitted_at >= self.RANKING_DELAY_MS:
            self._submitted_at = None
            self.go_to(State.RANKING)

    def on_input(self, event: Event) -> bool:
        if self.submit_state is SubmitState.SUBMITTING:
            # Ignore repeated presses while the request is in flight
            return True

        if self.submit_state is SubmitState.SUBMITTED:
            if event.type == EventType.PRESS_START:
                return self.go_to(State.GAME)
            if event.type == EventType.ARCADE_RIGHT:
                return self.go_to(State.RANKING)
            return False

        if event.type == EventType.ARCADE_LEFT:
            self._name_index -= 1
            return True
        if event.type == EventType.ARCADE_RIGHT:
            self._name_index += 1
            return True
        if event.type == EventType.PRESS_START:
            if self.selected_name is None:
                logger.info(f"Score {self.score} not registered")
                return self.go_to(State.GAME)
            self.submit()
            return True
        return False

    def submit(self) -> bool:
        """Start the score upload. Returns False if nothing was sent."""
        name = self.selected_name
        if name is None or self.submit_state not in (SubmitState.SELECTING, SubmitState.FAILED):
            return False

        self.submit_state = SubmitState.SUBMITTING
        self._error = None
        self.run_task(self._submit(name))
        return True

    async def _submit(self, name: str) -> None:
        result: SaveResult = await self.context.score_service.save_score(
            self.settings.event.event_id, name, self.score
        )
        if result.success:
            self.submit_state = SubmitState.SUBMITTED
            self._submitted_at = self._time_in_screen
            self.context.state_machine.context.player_name = name
            self.emit_event(EventType.SCORE_SUBMITTED, {"name": name, "score": self.score})
        else:
            self.submit_state = SubmitState.FAILED
            self._error = result.error
            logger.warning(f"Score submission failed: {result.error}")

    def render(self, buffer) -> None:
        fill(buffer, BG_COLOR)
        h = buffer.shape[0]
        draw_centered_text(buffer, "GAME OVER", h // 8, TEXT_COLOR, scale=5)
        draw_centered_text(buffer, f"SCORE: {self.score:05d}", h // 4, ACCENT_COLOR, scale=6)

        match self.submit_state:
            case SubmitState.SELECTING | SubmitState.FAILED:
                name = self.selected_name
                draw_centered_text(buffer, f"< {name or 'PLAY AGAIN'} >", h // 2, TEXT_COLOR, scale=5)
                hint = "PRESS TO SUBMIT" if name else "PRESS TO PLAY WITHOUT SAVING"
                draw_centered_text(buffer, hint, h * 2 // 3, MUTED_COLOR, scale=3)
                if self.submit_state is SubmitState.FAILED:
                    draw_centered_text(buffer, f"ERROR: {self._error}", h * 5 // 6, ERROR_COLOR, scale=3)
            case SubmitState.SUBMITTING:
                draw_centered_text(buffer, "SENDING...", h // 2, MUTED_COLOR, scale=4)
            case SubmitState.SUBMITTED:
                draw_centered_text(buffer, "SAVED!", h // 2, ACCENT_COLOR, scale=5)
                draw_centered_text(buffer, "OPENING RANKING...", h * 2 // 3, MUTED_COLOR, scale=3)
