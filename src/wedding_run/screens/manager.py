"""Screen manager for Wedding Run - swaps screens as the application state changes."""

from typing import Dict, List, Optional, Type, Callable
import logging

from wedding_run.core.events import EventBus, Event, EventType
from wedding_run.core.state import StateMachine, State, StateContext
from wedding_run.screens.base import BaseScreen, ScreenContext

logger = logging.getLogger(__name__)

# Events forwarded to the active screen
INPUT_EVENTS = (
    EventType.PRESS_START,
    EventType.PRESS_END,
    EventType.ARCADE_LEFT,
    EventType.ARCADE_RIGHT,
    EventType.KEYPAD_INPUT,
)


class ScreenManager:
    """Owns one screen instance per state and keeps the active one in sync.

    Input Flow:
    - The host emits input events on the bus
    - The manager forwards them to the active screen
    - Screens request transitions through the state machine
    - The manager reacts to the transition: exit old screen, enter new one
    """

    def __init__(self, context: ScreenContext):
        self.context = context
        self.state_machine: StateMachine = context.state_machine
        self.event_bus: EventBus = context.event_bus

        self._screens: Dict[State, BaseScreen] = {}
        self._current: Optional[BaseScreen] = None
        self._unsubscribers: List[Callable[[], None]] = []

        self._setup_event_handlers()
        self.state_machine.add_listener(self._on_state_change)

        logger.info("ScreenManager initialized")

    def _setup_event_handlers(self) -> None:
        """Register event handlers."""
        for event_type in INPUT_EVENTS:
            self._unsubscribers.append(self.event_bus.subscribe(event_type, self._on_input))

    # Screen registration
    def register_screen(self, screen_cls: Type[BaseScreen]) -> BaseScreen:
        """Register a screen class for the state it declares."""
        screen = screen_cls(self.context)
        self._screens[screen_cls.state] = screen
        logger.info(f"Registered screen: {screen_cls.name} ({screen_cls.state.name})")
        return screen

    def get_screen(self, state: State) -> Optional[BaseScreen]:
        return self._screens.get(state)

    @property
    def current(self) -> Optional[BaseScreen]:
        return self._current

    def start(self) -> None:
        """Enter the screen for the state machine's current state."""
        self._activate(self.state_machine.state)

    def shutdown(self) -> None:
        if self._current is not None:
            self._current.exit()
            self._current = None
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.state_machine.remove_listener(self._on_state_change)

    def _activate(self, state: State) -> None:
        screen = self._screens.get(state)
        if screen is None:
            logger.error(f"No screen registered for state {state.name}")
            self._current = None
            return
        self._current = screen
        screen.enter()

    def _on_state_change(self, old: State, new: State, context: StateContext) -> None:
        if self._current is not None:
            self._current.exit()
        self._activate(new)
        self.event_bus.emit(Event(
            type=EventType.SCREEN_CHANGED,
            data={"from": old.name, "to": new.name},
            source="screen_manager",
        ))

    def _on_input(self, event: Event) -> None:
        if self._current is not None:
            self._current.handle_input(event)

    # Frame loop
    def update(self, timestamp_ms: float) -> None:
        if self._current is not None:
            self._current.update(timestamp_ms)

    def render(self, buffer) -> None:
        if self._current is not None:
            self._current.render(buffer)

    async def wait_for_tasks(self) -> None:
        """Await background work of every screen."""
        for screen in self._screens.values():
            await screen.wait_for_tasks()
