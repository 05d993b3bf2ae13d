"""Loading and PIN gate screens."""

import logging

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

logger = logging.getLogger(__name__)


class LoadingScreen(BaseScreen):
    """Short splash that skips the PIN gate if this kiosk is unlocked."""

    name = "loading"
    state = State.LOADING

    DELAY_MS = 500.0

    def on_enter(self) -> None:
        pass

    def on_update(self, delta_ms: float, timestamp_ms: float) -> None:
        if self._time_in_screen < self.DELAY_MS:
            return
        event = self.settings.event
        if self.context.pin_store.is_unlocked(event.event_id, event.pin):
            self.go_to(State.TITLE)
        else:
            self.go_to(State.PIN)

    def on_input(self, event: Event) -> bool:
        return False

    def render(self, buffer) -> None:
        fill(buffer, BG_COLOR)
        dots = "." * (1 + int(self._time_in_screen / 150) % 3)
        draw_centered_text(buffer, f"LOADING{dots}", buffer.shape[0] // 2, ACCENT_COLOR, scale=4)


class PinScreen(BaseScreen):
    """Keypad PIN entry. ``*`` deletes the last digit, ``#`` clears the entry."""

    name = "pin"
    state = State.PIN

    ERROR_FLASH_MS = 800.0

    def on_enter(self) -> None:
        self._entry = ""
        self._error_timer = 0.0

    @property
    def entry(self) -> str:
        return self._entry

    def on_update(self, delta_ms: float, timestamp_ms: float) -> None:
        self._error_timer = max(0.0, self._error_timer - delta_ms)

    def on_input(self, event: Event) -> bool:
        if event.type != EventType.KEYPAD_INPUT:
            return False

        key = event.data.get("key", "")
        if key == "*":
            self._entry = self._entry[:-1]
            return True
        if key == "#":
            self._entry = ""
            return True
        if not key.isdigit():
            return False

        self._entry += key
        if len(self._entry) >= len(self.settings.event.pin):
            self._check()
        return True

    def _check(self) -> None:
        event = self.settings.event
        if self._entry == event.pin:
            logger.info("PIN accepted")
            self.context.pin_store.remember(event.event_id, event.pin)
            self.go_to(State.TITLE)
        else:
            logger.info("PIN rejected")
            self._error_timer = self.ERROR_FLASH_MS
        self._entry = ""

    def render(self, buffer) -> None:
        fill(buffer, BG_COLOR)
        h = buffer.shape[0]
        draw_centered_text(buffer, "ENTER PIN", h // 4, TEXT_COLOR, scale=5)

        length = len(self.settings.event.pin)
        masked = " ".join("*" if i < len(self._entry) else "-" for i in range(length))
        draw_centered_text(buffer, masked, h // 2, ACCENT_COLOR, scale=6)

        if self._error_timer > 0:
            draw_centered_text(buffer, "WRONG PIN", h * 3 // 4, ERROR_COLOR, scale=4)
        else:
            draw_centered_text(buffer, "* DELETE  # CLEAR", h * 3 // 4, MUTED_COLOR, scale=3)
