"""
Event bus for Wedding Run.

Provides pub/sub messaging between the host window, the screens and
services, with async support.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable
from enum import Enum, auto
import asyncio
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    PRESS_START = auto()
    PRESS_END = auto()
    ARCADE_LEFT = auto()
    ARCADE_RIGHT = auto()
    KEYPAD_INPUT = auto()

    # Flow events
    SCREEN_CHANGED = auto()
    GAME_OVER = auto()
    SCORE_SUBMITTED = auto()

    # System events
    TICK = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: Wall-clock creation time
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


SyncHandler = Callable[[Event], None]
AsyncHandler = Callable[[Event], Awaitable[None]]
Handler = SyncHandler | AsyncHandler


class EventBus:
    """
    Central event bus for component communication.

    Supports both synchronous and asynchronous handlers.
    Events can be emitted immediately or queued for batch processing.
    Per-frame events (``unrecorded``) are dispatched but kept out of the
    history.
    """

    def __init__(
        self,
        history_limit: int = 100,
        unrecorded: tuple[EventType | str, ...] = (EventType.TICK,),
    ) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._event_history: list[Event] = []
        self._history_limit = history_limit
        self._unrecorded = set(unrecorded)

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function (sync or async)

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """
        Emit an event immediately (synchronous handlers only).

        For async handlers, use emit_async or queue_event.
        """
        self._add_to_history(event)
        self._dispatch_sync(event)

    async def emit_async(self, event: Event) -> None:
        """Emit an event and await all handlers (sync and async)."""
        self._add_to_history(event)
        await self._dispatch_async(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for later processing."""
        self._queue.put_nowait(event)

    async def process_queue(self) -> None:
        """Process all queued events."""
        while not self._queue.empty():
            event = await self._queue.get()
            self._add_to_history(event)
            await self._dispatch_async(event)
            self._queue.task_done()

    def _dispatch_sync(self, event: Event) -> None:
        for handler in list(self._handlers.get(event.type, [])):
            if asyncio.iscoroutinefunction(handler):
                continue
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    async def _dispatch_async(self, event: Event) -> None:
        tasks = []
        for handler in list(self._handlers.get(event.type, [])):
            if asyncio.iscoroutinefunction(handler):
                tasks.append(asyncio.create_task(handler(event)))
            else:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(f"Error in sync handler for {event.type}: {e}")

        if tasks:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Error in async handler for {event.type}: {result}")

    def _add_to_history(self, event: Event) -> None:
        if event.type in self._unrecorded:
            return
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]


def press_start_event(source: str = "button") -> Event:
    return Event(EventType.PRESS_START, source=source)


def press_end_event(source: str = "button") -> Event:
    return Event(EventType.PRESS_END, source=source)


def keypad_event(key: str, source: str = "keypad") -> Event:
    """Create a keypad input event."""
    return Event(EventType.KEYPAD_INPUT, data={"key": key}, source=source)


def arcade_event(direction: str, source: str = "arcade") -> Event:
    """Create an arcade button event."""
    event_type = EventType.ARCADE_LEFT if direction == "left" else EventType.ARCADE_RIGHT
    return Event(event_type, source=source)


def tick_event(timestamp_ms: float, frame: int) -> Event:
    """Create a frame tick event."""
    return Event(EventType.TICK, data={"timestamp_ms": timestamp_ms, "frame": frame})
