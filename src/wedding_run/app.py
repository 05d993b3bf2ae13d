"""
Application assembly.

Wires the state machine, event bus, services and screens together and
exposes a per-frame ``frame(timestamp_ms)`` for whichever host drives it.
"""

import logging
from typing import Optional

from wedding_run.assets.loader import AssetBundle, load_assets
from wedding_run.config.settings import Settings, get_settings
from wedding_run.core.events import Event, EventBus, EventType, tick_event
from wedding_run.core.state import StateMachine
from wedding_run.graphics.primitives import Buffer, new_buffer
from wedding_run.graphics.scene import SceneRenderer
from wedding_run.screens import ALL_SCREENS, ScreenContext, ScreenManager
from wedding_run.services.pin_store import PinStore
from wedding_run.services.scores import ScoreService

logger = logging.getLogger(__name__)


class WeddingRunApp:
    """Everything except the window."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        state_machine: Optional[StateMachine] = None,
        event_bus: Optional[EventBus] = None,
        score_service: Optional[ScoreService] = None,
        pin_store: Optional[PinStore] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.state_machine = state_machine or StateMachine()
        self.event_bus = event_bus or EventBus()
        self.score_service = score_service or ScoreService(self.settings.scores)
        self.pin_store = pin_store or PinStore(self.settings.data_path)

        game = self.settings.game
        self.buffer: Buffer = new_buffer(int(game.world_width), int(game.world_height))
        self.manager: Optional[ScreenManager] = None
        self._frame_count = 0

    @property
    def is_ready(self) -> bool:
        return self.manager is not None

    async def prepare(self, assets: Optional[AssetBundle] = None) -> None:
        """Load assets and enter the first screen.

        Must complete before the first ``frame()`` call.
        """
        if assets is None:
            assets = await load_assets(self.settings.assets_path, self.settings.game)

        context = ScreenContext(
            state_machine=self.state_machine,
            event_bus=self.event_bus,
            settings=self.settings,
            scene=SceneRenderer(self.settings.game, assets),
            score_service=self.score_service,
            pin_store=self.pin_store,
        )
        self.manager = ScreenManager(context)
        for screen_cls in ALL_SCREENS:
            self.manager.register_screen(screen_cls)
        self.manager.start()
        logger.info("Application ready")

    async def frame(self, timestamp_ms: float) -> Buffer:
        """Advance one host frame and return the rendered buffer."""
        if self.manager is None:
            raise RuntimeError("prepare() must complete before the first frame")

        self.event_bus.emit(tick_event(timestamp_ms, self._frame_count))
        await self.event_bus.process_queue()

        self.manager.update(timestamp_ms)
        self.manager.render(self.buffer)
        self._frame_count += 1
        return self.buffer

    async def shutdown(self) -> None:
        self.event_bus.emit(Event(EventType.SHUTDOWN))
        if self.manager is not None:
            await self.manager.wait_for_tasks()
            self.manager.shutdown()
        await self.score_service.close()
        logger.info("Application stopped")
