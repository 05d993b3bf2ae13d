"""
Simulated input devices for the simulator.

These classes turn keyboard, mouse and touch edges into virtual button
state, so that several physical sources share one press.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class SimulatedButton:
    """
    Simulates an arcade button.

    Press state is controlled by the simulator window. Each physical
    source (a key, the mouse, a finger) is tracked separately: press
    callbacks fire when the first source goes down and release callbacks
    when the last one comes up.
    """

    def __init__(self, name: str = "center") -> None:
        self.name = name
        self._held: set[str] = set()
        self._press_callbacks: list[Callable[[], None]] = []
        self._release_callbacks: list[Callable[[], None]] = []

    def is_pressed(self) -> bool:
        return bool(self._held)

    def on_press(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._press_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._press_callbacks:
                self._press_callbacks.remove(callback)

        return unsubscribe

    def on_release(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._release_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._release_callbacks:
                self._release_callbacks.remove(callback)

        return unsubscribe

    def _press(self, source: str = "default") -> None:
        """Called by simulator when a source presses the button."""
        was_pressed = bool(self._held)
        self._held.add(source)
        if not was_pressed:
            self._fire(self._press_callbacks)

    def _release(self, source: str = "default") -> None:
        """Called by simulator when a source lets go of the button."""
        if source not in self._held:
            return
        self._held.discard(source)
        if not self._held:
            self._fire(self._release_callbacks)

    def _fire(self, callbacks: list[Callable[[], None]]) -> None:
        for callback in list(callbacks):
            try:
                callback()
            except Exception:
                logger.exception(f"Error in {self.name} button callback")
