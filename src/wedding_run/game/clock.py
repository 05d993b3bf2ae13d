"""Frame clock: turns host frame timestamps into a bounded delta time."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class FrameClock:
    """Computes a clamped per-frame delta from monotonic timestamps.

    A non-positive delta (duplicate or out-of-order timestamp) or one
    larger than ``max_ms`` (window was backgrounded) is replaced by the
    last accepted delta, so a single stalled frame can never inject a
    huge physics step.

    The clock holds no simulation state and runs every frame, whether or
    not a match is live.
    """

    def __init__(self, default_ms: float, max_ms: float):
        self.default_ms = default_ms
        self.max_ms = max_ms
        self._last_timestamp: Optional[float] = None
        self._last_delta = default_ms

    @property
    def last_delta(self) -> float:
        return self._last_delta

    def advance(self, timestamp_ms: float) -> float:
        """Return the delta in ms between this frame and the previous one."""
        previous = self._last_timestamp
        self._last_timestamp = timestamp_ms

        if previous is None:
            return self._last_delta

        delta = timestamp_ms - previous
        if delta <= 0 or delta > self.max_ms:
            logger.debug(f"Frame delta {delta:.1f}ms out of range, using {self._last_delta:.1f}ms")
            return self._last_delta

        self._last_delta = delta
        return delta

    def reset(self) -> None:
        self._last_timestamp = None
        self._last_delta = self.default_ms
