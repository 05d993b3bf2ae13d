"""
Main simulator window using pygame.

Hosts the game on a desktop: keyboard, mouse and touch stand in for the
kiosk's button, arrows and keypad.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass

from ..app import WeddingRunApp
from ..config.settings import Settings
from ..core.events import Event, EventType, arcade_event, keypad_event
from .input import SimulatedButton

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 1200
    height: int = 675
    title: str = "Wedding Run"
    fullscreen: bool = False
    fps: int = 60

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        game = settings.game
        return cls(
            width=int(game.world_width * settings.window_scale),
            height=int(game.world_height * settings.window_scale),
            title=settings.event.title.title(),
            fullscreen=settings.fullscreen,
            fps=settings.fps,
        )


class SimulatorWindow:
    """
    Desktop host for the application.

    Keyboard Mapping:
        SPACE / RETURN / mouse / touch: Main button (jump)
        LEFT ARROW: Left arcade button
        RIGHT ARROW: Right arcade button
        0-9: Keypad numbers
        * / BACKSPACE: Keypad delete last digit
        # / DELETE: Keypad clear
        ESC / Q: Exit simulator
    """

    def __init__(self, app: WeddingRunApp, config: WindowConfig | None = None) -> None:
        self.app = app
        self.config = config or WindowConfig.from_settings(app.settings)
        self.event_bus = app.event_bus

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._frame_surface: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False

        # One virtual button shared by every press source
        self.center_button = SimulatedButton("center")
        self.center_button.on_press(
            lambda: self.event_bus.emit(Event(EventType.PRESS_START, source="center"))
        )
        self.center_button.on_release(
            lambda: self.event_bus.emit(Event(EventType.PRESS_END, source="center"))
        )

        self.event_bus.subscribe(EventType.SHUTDOWN, lambda event: self.stop())

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        height, width = self.app.buffer.shape[:2]
        self._frame_surface = pygame.Surface((width, height))
        self._clock = pygame.time.Clock()

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.KEYUP:
                self._handle_keyup(event)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.center_button._press("mouse")
            elif event.type == pygame.MOUSEBUTTONUP:
                self.center_button._release("mouse")

            elif event.type == pygame.FINGERDOWN:
                self.center_button._press(f"finger_{event.finger_id}")
            elif event.type == pygame.FINGERUP:
                self.center_button._release(f"finger_{event.finger_id}")

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False

        elif key in (pygame.K_SPACE, pygame.K_RETURN, pygame.K_UP):
            self.center_button._press(f"key_{key}")

        elif key == pygame.K_LEFT:
            self.event_bus.emit(arcade_event("left"))
        elif key == pygame.K_RIGHT:
            self.event_bus.emit(arcade_event("right"))

        elif key in range(pygame.K_0, pygame.K_9 + 1):
            self.event_bus.emit(keypad_event(chr(key)))
        elif key in range(pygame.K_KP1, pygame.K_KP9 + 1):
            self.event_bus.emit(keypad_event(str(key - pygame.K_KP1 + 1)))
        elif key == pygame.K_KP0:
            self.event_bus.emit(keypad_event("0"))
        elif key in (pygame.K_ASTERISK, pygame.K_KP_MULTIPLY, pygame.K_BACKSPACE):
            self.event_bus.emit(keypad_event("*"))
        elif key in (pygame.K_HASH, pygame.K_DELETE):
            self.event_bus.emit(keypad_event("#"))

    def _handle_keyup(self, event: pygame.event.Event) -> None:
        """Handle key release."""
        if event.key in (pygame.K_SPACE, pygame.K_RETURN, pygame.K_UP):
            self.center_button._release(f"key_{event.key}")

    def _render(self, buffer) -> None:
        """Blit the frame buffer scaled to the window."""
        if not self._screen or not self._frame_surface:
            return

        # surfarray is indexed (x, y)
        pygame.surfarray.blit_array(self._frame_surface, buffer.transpose(1, 0, 2))
        scaled = pygame.transform.scale(self._frame_surface, self._screen.get_size())
        self._screen.blit(scaled, (0, 0))
        pygame.display.flip()

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()

        # Assets must be ready before the first tick
        if not self.app.is_ready:
            await self.app.prepare()

        self._running = True
        logger.info("Simulator started")

        try:
            while self._running:
                self._handle_events()

                buffer = await self.app.frame(float(pygame.time.get_ticks()))
                self._render(buffer)

                if self._clock:
                    self._clock.tick(self.config.fps)

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            await self.app.shutdown()
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
