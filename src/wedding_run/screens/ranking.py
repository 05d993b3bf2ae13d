"""Ranking screen: the event leaderboard."""

import logging
from typing import List

from wedding_run.core.events import Event, EventType
from wedding_run.core.state import State
from wedding_run.graphics.primitives import draw_centered_text, draw_text, fill
from wedding_run.screens.base import ACCENT_COLOR, BG_COLOR, MUTED_COLOR, TEXT_COLOR, BaseScreen
from wedding_run.services.scores import ScoreEntry

logger = logging.getLogger(__name__)

ROWS_VISIBLE = 10


def entry_date_label(entry: ScoreEntry) -> str:
    """Local date the score was saved, or JUST NOW if the server has not stamped it."""
    if entry.timestamp is None:
        return "JUST NOW"
    return entry.timestamp.astimezone().strftime("%Y.%m.%d")


class RankingScreen(BaseScreen):
    name = "ranking"
    state = State.RANKING

    def on_enter(self) -> None:
        self.entries: List[ScoreEntry] = []
        self.loading = True
        self.run_task(self._load())

    async def _load(self) -> None:
        self.entries = await self.context.score_service.get_ranking(self.settings.event.event_id)
        self.loading = False
        logger.info(f"Ranking loaded: {len(self.entries)} entries")

    def on_update(self, delta_ms: float, timestamp_ms: float) -> None:
        pass

    def on_input(self, event: Event) -> bool:
        if event.type == EventType.PRESS_START:
            return self.go_to(State.TITLE)
        return False

    def render(self, buffer) -> None:
        fill(buffer, BG_COLOR)
        h, w = buffer.shape[:2]
        draw_centered_text(buffer, "RANKING", 24, TEXT_COLOR, scale=5)

        if self.loading:
            draw_centered_text(buffer, "LOADING...", h // 2, MUTED_COLOR, scale=4)
        elif not self.entries:
            draw_centered_text(buffer, "NO SCORES YET", h // 2, MUTED_COLOR, scale=4)
        else:
            y = 70
            for rank, entry in enumerate(self.entries[:ROWS_VISIBLE], start=1):
                color = ACCENT_COLOR if rank <= 3 else TEXT_COLOR
                draw_text(buffer, f"{rank:2d}. {entry.name[:14]}", w // 6, y, color, scale=3)
                draw_text(buffer, entry_date_label(entry), w * 19 // 40, y + 4, MUTED_COLOR, scale=2)
                draw_text(buffer, f"{entry.score:05d}", w * 2 // 3, y, color, scale=3)
                y += 30

        draw_centered_text(buffer, "PRESS TO GO BACK", h - 24, MUTED_COLOR, scale=2)
