"""Base class for all screens in Wedding Run."""

from abc import ABC, abstractmethod
from typing import Optional, Any, Coroutine, Set
from dataclasses import dataclass
import asyncio
import logging

from wedding_run.config.settings import Settings
from wedding_run.core.events import EventBus, Event, EventType
from wedding_run.core.state import StateMachine, State
from wedding_run.graphics.scene import SceneRenderer
from wedding_run.services.pin_store import PinStore
from wedding_run.services.scores import ScoreService

logger = logging.getLogger(__name__)

BG_COLOR = (255, 247, 237)
TEXT_COLOR = (30, 41, 59)
ACCENT_COLOR = (234, 88, 12)
MUTED_COLOR = (148, 163, 184)
ERROR_COLOR = (220, 38, 38)


@dataclass
class ScreenContext:
    """Shared services passed to screens."""

    state_machine: StateMachine
    event_bus: EventBus
    settings: Settings
    scene: SceneRenderer
    score_service: ScoreService
    pin_store: PinStore


class BaseScreen(ABC):
    """Abstract base class for all screens.

    Lifecycle:
        1. enter() - screen becomes active, on_enter() resets its state
        2. update(timestamp_ms) - per-frame logic while active
        3. handle_input(event) - input while active
        4. exit() - screen is replaced, on_exit() cleans up
    """

    # Screen metadata (override in subclasses)
    name: str = "base"
    state: State = State.LOADING

    def __init__(self, context: ScreenContext):
        self.context = context
        self._active = False
        self._last_timestamp: Optional[float] = None
        self._time_in_screen: float = 0.0
        self._tasks: Set[asyncio.Task] = set()

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def settings(self) -> Settings:
        return self.context.settings

    # Lifecycle methods
    def enter(self) -> None:
        """Called when the screen becomes active."""
        self._active = True
        self._last_timestamp = None
        self._time_in_screen = 0.0
        logger.info(f"Entering screen: {self.name}")
        self.on_enter()

    def exit(self) -> None:
        """Called when the screen is replaced."""
        logger.info(f"Exiting screen: {self.name}")
        self.on_exit()
        self._active = False

    def update(self, timestamp_ms: float) -> None:
        """Update screen state each frame.

        Args:
            timestamp_ms: Host monotonic time of this frame in milliseconds
        """
        if not self._active:
            return

        if self._last_timestamp is None:
            delta_ms = 0.0
        else:
            delta_ms = max(0.0, timestamp_ms - self._last_timestamp)
        self._last_timestamp = timestamp_ms
        self._time_in_screen += delta_ms

        self.on_update(delta_ms, timestamp_ms)

    def handle_input(self, event: Event) -> bool:
        """Process input event. Returns True if handled."""
        if not self._active:
            return False
        return self.on_input(event)

    # Abstract methods
    @abstractmethod
    def on_enter(self) -> None:
        """Reset screen state."""

    @abstractmethod
    def on_update(self, delta_ms: float, timestamp_ms: float) -> None:
        """Per-frame update logic."""

    @abstractmethod
    def on_input(self, event: Event) -> bool:
        """Handle user input. Return True if handled."""

    @abstractmethod
    def render(self, buffer) -> None:
        """Draw the screen into the frame buffer."""

    # Optional overrides
    def on_exit(self) -> None:
        pass

    # Utility methods
    def go_to(self, state: State, **context_updates: Any) -> bool:
        """Request an application state transition."""
        return self.context.state_machine.transition(state, **context_updates)

    def emit_event(self, event_type: EventType, data: Optional[dict] = None) -> None:
        self.context.event_bus.emit(Event(
            type=event_type,
            data=data or {},
            source=f"screen_{self.name}",
        ))

    def run_task(self, coro: Coroutine) -> asyncio.Task:
        """Run background work (network calls) on the event loop."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_for_tasks(self) -> None:
        """Await any background work still in flight."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
