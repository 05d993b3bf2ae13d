"""
State machine for the Wedding Run application flow.

States:
    LOADING: Checking the remembered PIN
    PIN: Waiting for the event PIN
    TITLE: Title screen
    GAME: A match is running
    RESULT: Final score and name submission
    RANKING: Event leaderboard
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Any
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Application states."""
    LOADING = auto()
    PIN = auto()
    TITLE = auto()
    GAME = auto()
    RESULT = auto()
    RANKING = auto()


@dataclass
class StateContext:
    """Context data passed between states."""
    last_score: int = 0
    player_name: str | None = None


Listener = Callable[[State, State, StateContext], None]


class StateMachine:
    """
    Manages application state and transitions.

    Only transitions listed in VALID_TRANSITIONS are allowed; anything
    else is refused and logged.
    """

    VALID_TRANSITIONS: list[tuple[State, State]] = [
        (State.LOADING, State.PIN),
        (State.LOADING, State.TITLE),

        (State.PIN, State.TITLE),

        (State.TITLE, State.GAME),
        (State.TITLE, State.RANKING),

        (State.GAME, State.RESULT),

        (State.RESULT, State.GAME),  # Retry
        (State.RESULT, State.RANKING),

        (State.RANKING, State.TITLE),
    ]

    def __init__(self, initial_state: State = State.LOADING) -> None:
        self._initial_state = initial_state
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        return self._state

    @property
    def context(self) -> StateContext:
        return self._context

    def can_transition(self, to_state: State) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: State, **context_updates: Any) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state
            **context_updates: Fields of StateContext to update

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in list(self._listeners):
            try:
                listener(old_state, to_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Return to the initial state without notifying listeners."""
        self._state = self._initial_state
        self._context = StateContext()
        logger.info(f"StateMachine reset to {self._initial_state.name}")
