"""Title screen."""

from wedding_run.core.events import Event, EventType
from wedding_run.core.state import State
from wedding_run.graphics.primitives import draw_centered_text, fill
from wedding_run.screens.base import ACCENT_COLOR, BG_COLOR, MUTED_COLOR, TEXT_COLOR, BaseScreen


class TitleScreen(BaseScreen):
    name = "title"
    state = State.TITLE

    def on_enter(self) -> None:
        pass

    def on_update(self, delta_ms: float, timestamp_ms: float) -> None:
        pass

    def on_input(self, event: Event) -> bool:
        if event.type == EventType.PRESS_START:
            return self.go_to(State.GAME)
        if event.type == EventType.ARCADE_RIGHT:
            return self.go_to(State.RANKING)
        return False

    def render(self, buffer) -> None:
        fill(buffer, BG_COLOR)
        h = buffer.shape[0]
        event = self.settings.event
        draw_centered_text(buffer, event.sub_title, h // 5, ACCENT_COLOR, scale=3)
        draw_centered_text(buffer, event.title, h // 3, TEXT_COLOR, scale=8)

        # Blink the prompt twice a second
        if int(self._time_in_screen / 500) % 2 == 0:
            draw_centered_text(buffer, "PRESS TO START", h * 2 // 3, ACCENT_COLOR, scale=4)
        draw_centered_text(buffer, "> RANKING", h * 5 // 6, MUTED_COLOR, scale=3)
